"""Config file discovery and loading.

Walk-up finder locates preferable.toml, similar to how git finds .git/.
Supports the PREFERABLE_CONFIG env var override.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from preferable.config.models import PreferencesConfig
from preferable.domain.errors import ConfigError

CONFIG_FILENAME = "preferable.toml"
CONFIG_ENV_VAR = "PREFERABLE_CONFIG"
PYPROJECT_FILENAME = "pyproject.toml"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for preferable.toml.

    Returns the path to the config file, or None if not found.
    Checks PREFERABLE_CONFIG env var first.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
        return None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def read_toml(path: Path) -> dict[str, Any]:
    """Parse *path* as TOML.

    Raises:
        ConfigError: If the file is not valid TOML.
    """
    raw = path.read_text(encoding="utf-8")
    try:
        return tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigError(msg) from exc


def load_toml_section(path: Path) -> dict[str, Any]:
    """Return the preferable settings held in *path*.

    A ``pyproject.toml`` keeps them under ``[tool.preferable]``; any other
    file is read whole.
    """
    data = read_toml(path)
    if path.name == PYPROJECT_FILENAME:
        return data.get("tool", {}).get("preferable", {})
    return data


def load_config(path: Path | None = None, cwd: Path | None = None) -> PreferencesConfig:
    """Load and validate config from a TOML file.

    If *path* is None, uses find_config(*cwd*) to discover the file.
    Returns default PreferencesConfig if no file is found.
    """
    if path is None:
        path = find_config(cwd)

    if path is None:
        return PreferencesConfig()

    return PreferencesConfig.model_validate(load_toml_section(path))
