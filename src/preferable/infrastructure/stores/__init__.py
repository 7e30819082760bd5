"""Preference store contract and the in-memory adapter."""

from preferable.infrastructure.stores.base import PreferenceStore
from preferable.infrastructure.stores.memory import MappingStore
from preferable.infrastructure.stores.provider import StoreProvider

__all__ = ["MappingStore", "PreferenceStore", "StoreProvider"]
