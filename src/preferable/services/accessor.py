"""PreferenceAccessor — per-instance reads and writes of declared preferences.

The accessor is composed into a host object; it never owns the store.
Every operation validates the name against the registry first, so an
undeclared name fails with :class:`UndeclaredPreferenceError` before the
store is touched. Writes are coerced to the declared type; store errors
propagate unchanged.

Callers sharing one host instance across threads must serialize access
themselves. The accessor holds no lock.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from preferable.domain.coercion import coerce
from preferable.domain.types import PreferenceType

if TYPE_CHECKING:
    from preferable.domain.specs import PreferenceSpec
    from preferable.infrastructure.stores.base import PreferenceStore
    from preferable.services.registry import PreferenceRegistry

logger = logging.getLogger(__name__)


class PreferenceAccessor:
    """Dictionary-style access to one host instance's preferences.

    Usage::

        prefs = PreferenceAccessor(Settings, MappingStore(), registry)
        prefs.set("temperature", "24")
        prefs.get("temperature")  # => 24
    """

    def __init__(
        self,
        host_type: type,
        store: PreferenceStore,
        registry: PreferenceRegistry,
    ) -> None:
        self._host_type = host_type
        self._store = store
        self._registry = registry

    @property
    def host_type(self) -> type:
        return self._host_type

    @property
    def store(self) -> PreferenceStore:
        return self._store

    @property
    def registry(self) -> PreferenceRegistry:
        return self._registry

    # --- spec lookups ---

    def require(self, name: str) -> PreferenceSpec:
        """Return the spec for *name*.

        Raises:
            UndeclaredPreferenceError: If *name* is not declared for the host type.
        """
        return self._registry.require_spec(self._host_type, name)

    def has(self, name: str) -> bool:
        return self._registry.spec_for(self._host_type, name) is not None

    def type_of(self, name: str) -> PreferenceType:
        return self.require(name).type

    def default_of(self, name: str) -> Any:
        """Coerced default for *name* (a fresh copy on every call)."""
        return self.require(name).coerced_default()

    def declared_names(self) -> list[str]:
        return self._registry.names_for(self._host_type)

    # --- values ---

    def get(self, name: str) -> Any:
        """Return the stored value for *name*.

        A declared name with no stored entry (declared after this store was
        seeded) yields its coerced default; nothing is written.
        """
        spec = self.require(name)
        try:
            return self._store.fetch(name)
        except KeyError:
            logger.debug("No stored value for %s; using default", name, extra=self._fields(name))
            return spec.coerced_default()

    def set(self, name: str, value: Any) -> Any:
        """Coerce *value* to the declared type, store it, and return it.

        Raises:
            UndeclaredPreferenceError: If *name* is not declared.
            CoercionError: If *value* cannot be converted (hash, decimal).
        """
        spec = self.require(name)
        coerced = coerce(value, spec.type)
        self._store.set(name, coerced)
        logger.debug(
            "Set preference %s.%s", self._host_type.__name__, name, extra=self._fields(name)
        )
        return coerced

    def defaults_snapshot(self) -> dict[str, Any]:
        """Map every declared name to its coerced default."""
        return {
            spec.name: spec.coerced_default()
            for spec in self._registry.specs_for(self._host_type)
        }

    def current_values(self) -> dict[str, Any]:
        """Map every declared name to its current value."""
        return {name: self.get(name) for name in self.declared_names()}

    def clear_all(self) -> list[str]:
        """Delete every key present in the store, declared or not.

        Returns the deleted keys.
        """
        removed = list(self._store.keys())
        for key in removed:
            self._store.delete(key)
        logger.debug(
            "Cleared %d stored preference(s)",
            len(removed),
            extra={"host_type": self._host_type.__name__, "count": len(removed)},
        )
        return removed

    def _fields(self, name: str) -> dict[str, str]:
        return {"host_type": self._host_type.__name__, "preference": name}

    # --- capability interface ---

    get_preference = get
    set_preference = set
    preference_type = type_of
    preference_default = default_of
    has_preference = has

    def __repr__(self) -> str:
        return f"PreferenceAccessor({self._host_type.__name__}, {self._store!r})"
