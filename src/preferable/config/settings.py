"""Unified settings — init kwargs, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — explicit overrides from the embedding application
  2. Env vars     — ``PREFERABLE_*`` prefix, ``__`` for nested sections
  3. TOML file    — ``preferable.toml`` discovered via walk-up
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from preferable.config.discovery import find_config, load_toml_section
from preferable.config.models import LoggingConfig, PreferencesConfig, StoreConfig

logger = logging.getLogger(__name__)

# Settings-only fields a config file may not set.
_NOT_FROM_FILE = frozenset({"config_path"})


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Supply settings sections from a TOML file.

    Only tables naming a settings section are passed on. Anything else
    (another tool's table, a typo) is dropped with a warning, so a shared
    ``pyproject.toml`` never fails validation.
    """

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._sections = {
            name for name in settings_cls.model_fields if name not in _NOT_FROM_FILE
        }
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            self._data = self._known_sections(toml_path, load_toml_section(toml_path))

    def _known_sections(self, path: Path, data: dict[str, Any]) -> dict[str, Any]:
        unknown = sorted(set(data) - self._sections)
        if unknown:
            logger.warning("Ignoring unknown section(s) in %s: %s", path, ", ".join(unknown))
        return {name: value for name, value in data.items() if name in self._sections}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        return dict(self._data)


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class PreferableSettings(BaseSettings):
    """Settings for an application embedding preferable.

    Attributes:
        config_path: The TOML file the settings were read from, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "PREFERABLE_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    store: StoreConfig = Field(default_factory=StoreConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def load(
        cls,
        *,
        config_path: str | Path | None = None,
        start: Path | None = None,
        **overrides: Any,
    ) -> PreferableSettings:
        """Construct settings, discovering ``preferable.toml`` when no path is given."""
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(start)

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None

    def to_config(self) -> PreferencesConfig:
        """Drop settings-only fields and return the plain config struct."""
        return PreferencesConfig(store=self.store, logging=self.logging)
