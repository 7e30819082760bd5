"""preferable — declared, typed preferences over any key-value store.

Hosts declare named preferences once per class; every instance then gets
typecast reads and writes backed by an injected store::

    registry = PreferenceRegistry()

    class Settings:
        color = PreferenceField(registry, "string", default="red")
        temperature = PreferenceField(registry, "integer", default=21)

        def __init__(self, store: PreferenceStore) -> None:
            attach_preferences(self, store, registry)

    s = Settings(MappingStore())
    s.temperature = "24"
    s.temperature  # => 24
"""

from preferable.domain.coercion import coerce
from preferable.domain.errors import (
    CoercionError,
    ConfigError,
    PreferenceError,
    StoreUnavailableError,
    UndeclaredPreferenceError,
)
from preferable.domain.specs import PreferenceSpec
from preferable.domain.types import PreferenceType
from preferable.infrastructure.stores import MappingStore, PreferenceStore, StoreProvider
from preferable.services.accessor import PreferenceAccessor
from preferable.services.defaults import merge_defaults
from preferable.services.fields import Preferable, PreferenceField, attach_preferences
from preferable.services.registry import PreferenceRegistry

__all__ = [
    "CoercionError",
    "ConfigError",
    "MappingStore",
    "Preferable",
    "PreferenceAccessor",
    "PreferenceError",
    "PreferenceField",
    "PreferenceRegistry",
    "PreferenceSpec",
    "PreferenceStore",
    "PreferenceType",
    "StoreProvider",
    "StoreUnavailableError",
    "UndeclaredPreferenceError",
    "attach_preferences",
    "coerce",
    "merge_defaults",
]
