"""Shared pytest fixtures for preferable tests."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest

from preferable.config.models import StoreConfig
from preferable.infrastructure.database import PreferenceDatabase
from preferable.infrastructure.stores import MappingStore
from preferable.services.accessor import PreferenceAccessor
from preferable.services.registry import PreferenceRegistry


class Host:
    """Plain host type used as a registry key."""


@pytest.fixture
def host_type() -> type[Host]:
    return Host


@pytest.fixture
def registry() -> PreferenceRegistry:
    """Registry with a small set of declarations on :class:`Host`."""
    reg = PreferenceRegistry()
    reg.declare(Host, "color", "string", default="red")
    reg.declare(Host, "temperature", "integer", default="21")
    reg.declare(Host, "enabled", "boolean", default="yes")
    reg.declare(Host, "tags", "array", default="solo")
    return reg


@pytest.fixture
def memory_store() -> MappingStore:
    return MappingStore()


@pytest.fixture
def accessor(registry: PreferenceRegistry, memory_store: MappingStore) -> PreferenceAccessor:
    return PreferenceAccessor(Host, memory_store, registry)


@pytest.fixture
def database(tmp_path: Path) -> Generator[PreferenceDatabase]:
    """SQLite-backed preference database on a temp file."""
    config = StoreConfig(backend="sql", database_url=f"sqlite:///{tmp_path / 'prefs.db'}")
    db = PreferenceDatabase(config)
    try:
        yield db
    finally:
        db.close()

