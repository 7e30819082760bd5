"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, preferable.toml only contains
overrides. This explicit struct replaces process-wide settings such as the
preferences table name; pass it to whatever wires stores to host types.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class StoreConfig(BaseModel):
    """[store] section."""

    model_config = {"frozen": True}

    backend: Literal["memory", "sql"] = "memory"
    database_url: str = "sqlite:///:memory:"
    table_name: str = Field(default="preference_objects", min_length=1)
    echo: bool = False


class LoggingConfig(BaseModel):
    """[logging] section."""

    model_config = {"frozen": True}

    verbose: bool = False
    log_json: bool = False


class PreferencesConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    store: StoreConfig = Field(default_factory=StoreConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
