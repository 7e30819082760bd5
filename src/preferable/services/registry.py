"""PreferenceRegistry — declared preference specs per host type.

Declarations happen while host classes are being defined (program
startup). After that the registry is only read, so it holds no lock and
may be shared by any number of readers.

Lookups walk the host type's MRO from the most generic base to the class
itself: subclasses inherit their bases' preferences, and a re-declaration
on a subclass overrides the inherited spec.
"""

from __future__ import annotations

import logging
from typing import Any

from preferable.domain.errors import UndeclaredPreferenceError
from preferable.domain.specs import PreferenceSpec
from preferable.domain.types import PreferenceType

logger = logging.getLogger(__name__)


class PreferenceRegistry:
    """Table of :class:`PreferenceSpec` keyed by host type, then by name.

    Usage::

        registry = PreferenceRegistry()
        registry.declare(Settings, "color", "string", default="red")
        registry.spec_for(Settings, "color").default  # => "red"
    """

    def __init__(self) -> None:
        self._specs: dict[type, dict[str, PreferenceSpec]] = {}

    def declare(
        self,
        host_type: type,
        name: str,
        type: PreferenceType | str = PreferenceType.RAW,
        default: Any = None,
    ) -> PreferenceSpec:
        """Register (or overwrite) the spec for *name* on *host_type*.

        Raises:
            pydantic.ValidationError: If *type* is not a known preference type.
        """
        spec = PreferenceSpec(name=name, type=type, default=default)
        table = self._specs.setdefault(host_type, {})
        fields = {
            "host_type": host_type.__name__,
            "preference": name,
            "preference_type": spec.type.value,
        }
        if name in table:
            logger.debug("Redeclared preference %s.%s", host_type.__name__, name, extra=fields)
        table[name] = spec
        logger.debug(
            "Declared preference %s.%s (%s)",
            host_type.__name__,
            name,
            spec.type.value,
            extra=fields,
        )
        return spec

    def specs_for(self, host_type: type) -> list[PreferenceSpec]:
        """Return every spec visible on *host_type*, in declaration order."""
        merged: dict[str, PreferenceSpec] = {}
        for klass in reversed(host_type.__mro__):
            merged.update(self._specs.get(klass, {}))
        return list(merged.values())

    def spec_for(self, host_type: type, name: str) -> PreferenceSpec | None:
        """Return the spec for *name* on *host_type*, or None if undeclared."""
        for klass in host_type.__mro__:
            spec = self._specs.get(klass, {}).get(name)
            if spec is not None:
                return spec
        return None

    def require_spec(self, host_type: type, name: str) -> PreferenceSpec:
        """Like :meth:`spec_for` but raise when *name* is undeclared."""
        spec = self.spec_for(host_type, name)
        if spec is None:
            raise UndeclaredPreferenceError(name, host_type)
        return spec

    def names_for(self, host_type: type) -> list[str]:
        return [spec.name for spec in self.specs_for(host_type)]

    def declared_types(self) -> list[type]:
        """Host types holding at least one direct declaration."""
        return [klass for klass, table in self._specs.items() if table]
