"""Preference value types.

The closed set of types a preference may be declared with. Each type maps
to one coercion rule in :mod:`preferable.domain.coercion`.
"""

from __future__ import annotations

from enum import StrEnum


class PreferenceType(StrEnum):
    """Declared type of a preference value."""

    STRING = "string"
    TEXT = "text"
    PASSWORD = "password"
    DECIMAL = "decimal"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    ARRAY = "array"
    HASH = "hash"
    RAW = "raw"


# Types whose canonical value is a plain string.
STRING_TYPES = frozenset({PreferenceType.STRING, PreferenceType.TEXT, PreferenceType.PASSWORD})
