"""Typed attribute access and host wiring.

:class:`PreferenceField` declares a preference at class-definition time and
exposes it as a plain attribute on instances, backed by the instance's
``preferences`` accessor. :func:`attach_preferences` builds that accessor
and seeds the store with defaults.

Usage::

    registry = PreferenceRegistry()

    class Settings:
        color = PreferenceField(registry, "string", default="red")

        def __init__(self, store: PreferenceStore) -> None:
            attach_preferences(self, store, registry)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from preferable.domain.types import PreferenceType
from preferable.services.accessor import PreferenceAccessor
from preferable.services.defaults import merge_defaults

if TYPE_CHECKING:
    from preferable.infrastructure.stores.base import PreferenceStore
    from preferable.services.registry import PreferenceRegistry

ACCESSOR_ATTRIBUTE = "preferences"


@runtime_checkable
class Preferable(Protocol):
    """Capability interface for hosts exposing preferences directly."""

    def get_preference(self, name: str) -> Any: ...

    def set_preference(self, name: str, value: Any) -> Any: ...

    def preference_type(self, name: str) -> PreferenceType: ...

    def preference_default(self, name: str) -> Any: ...

    def has_preference(self, name: str) -> bool: ...


def attach_preferences(
    host: object,
    store: PreferenceStore,
    registry: PreferenceRegistry,
) -> PreferenceAccessor:
    """Compose a :class:`PreferenceAccessor` into *host* and merge defaults.

    Call once from the host's constructor. The accessor is stored on
    ``host.preferences`` and returned.
    """
    accessor = PreferenceAccessor(type(host), store, registry)
    merge_defaults(accessor)
    setattr(host, ACCESSOR_ATTRIBUTE, accessor)
    return accessor


class PreferenceField:
    """Descriptor declaring one preference on the owning class.

    The spec is registered when the owner class is created (``__set_name__``).
    Instance reads go through :meth:`PreferenceAccessor.get`, writes through
    :meth:`PreferenceAccessor.set`, so coercion always applies.
    """

    def __init__(
        self,
        registry: PreferenceRegistry,
        type: PreferenceType | str = PreferenceType.RAW,
        *,
        default: Any = None,
        name: str | None = None,
    ) -> None:
        if name is not None:
            _check_name(name)
        self.registry = registry
        self.type = PreferenceType(type)
        self.default = default
        self.name = name

    def __set_name__(self, owner: type, attr_name: str) -> None:
        _check_name(attr_name)
        if self.name is None:
            self.name = attr_name
        self.registry.declare(owner, self.name, self.type, self.default)

    def __get__(self, instance: object | None, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return _accessor(instance).get(self.name)

    def __set__(self, instance: object, value: Any) -> None:
        _accessor(instance).set(self.name, value)

    def __repr__(self) -> str:
        return f"PreferenceField({self.name!r}, {self.type.value!r})"


def _check_name(name: str) -> None:
    # The host attribute holding the accessor cannot double as a preference.
    if name == ACCESSOR_ATTRIBUTE:
        msg = f"{name!r} is reserved for the preference accessor"
        raise ValueError(msg)


def _accessor(instance: object) -> PreferenceAccessor:
    accessor = getattr(instance, ACCESSOR_ATTRIBUTE, None)
    if not isinstance(accessor, PreferenceAccessor):
        msg = (
            f"{type(instance).__name__} has no preference accessor; "
            "call attach_preferences() in its constructor"
        )
        raise AttributeError(msg)
    return accessor
