"""PreferenceSpec — the declared metadata for one preference.

A spec is independent of any host instance: it carries the name, the
declared type, and the raw default. Defaults are materialized lazily, on
every call to :meth:`PreferenceSpec.coerced_default`, and always pass
through :func:`~preferable.domain.coercion.coerce`.
"""

from __future__ import annotations

import copy
from typing import Any

from pydantic import BaseModel

from preferable.domain.coercion import coerce
from preferable.domain.types import PreferenceType


class PreferenceSpec(BaseModel):
    """One declared preference.

    Attributes:
        name: Identifier, unique per host type.
        type: Declared value type; drives coercion on write.
        default: Raw default value, or a zero-argument callable producing one.
    """

    model_config = {"frozen": True}

    name: str
    type: PreferenceType = PreferenceType.RAW
    default: Any = None

    def raw_default(self) -> Any:
        """Return a private copy of the raw default (calling it if callable)."""
        if callable(self.default):
            return self.default()
        return copy.deepcopy(self.default)

    def coerced_default(self) -> Any:
        """Materialize the default in its canonical typed form."""
        return coerce(self.raw_default(), self.type)
