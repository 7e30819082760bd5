"""Typecasting rules applied on every write and on default materialization.

``coerce(value, type)`` is pure and deterministic. It is total for every
type except ``hash`` (malformed strings, odd-length sequences) and
``decimal`` (unparseable or non-finite numbers), which raise
:class:`CoercionError`.
Unparseable integers become ``0`` rather than an error.
"""

from __future__ import annotations

import json
import math
import re
from collections.abc import Mapping, Sequence
from decimal import Decimal, InvalidOperation
from typing import Any

from preferable.domain.errors import CoercionError
from preferable.domain.types import STRING_TYPES, PreferenceType

EVEN_COUNT_MESSAGE = "An even count is required when passing an array to be converted to a hash"

# Line anchors: any line spelling f / false / 0 makes the value false.
_FALSY_PATTERN = re.compile(r"^(f|false|0)$", re.IGNORECASE | re.MULTILINE)

_LEADING_INTEGER = re.compile(r"\s*([+-]?[0-9]+(?:_[0-9]+)*)", re.ASCII)


def coerce(value: Any, type: PreferenceType | str) -> Any:
    """Convert *value* to the canonical representation for *type*.

    Unrecognized type names (and ``raw``) pass *value* through unchanged.
    """
    try:
        kind = PreferenceType(type)
    except ValueError:
        return value

    if kind in STRING_TYPES:
        return to_string(value)
    if kind is PreferenceType.DECIMAL:
        return to_decimal(value)
    if kind is PreferenceType.INTEGER:
        return to_integer(value)
    if kind is PreferenceType.BOOLEAN:
        return to_boolean(value)
    if kind is PreferenceType.ARRAY:
        return to_array(value)
    if kind is PreferenceType.HASH:
        return to_hash(value)
    return value


def to_string(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, int) and not isinstance(value, bool):
        # Decimal formatting is exempt from the int digit limit.
        return str(Decimal(value))
    return str(value)


def is_blank(value: Any) -> bool:
    """True for ``None``, ``False``, whitespace-only strings and empty containers."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return len(value) == 0
    except TypeError:
        return False


def to_decimal(value: Any) -> Decimal:
    """Parse *value* as an arbitrary-precision decimal; blank input is ``0``.

    Raises:
        CoercionError: If *value* is not a finite number (NaN and Infinity
            included).
    """
    if is_blank(value):
        return Decimal(0)
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int) and not isinstance(value, bool):
        result = Decimal(value)
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as exc:
            msg = f"Cannot convert {value!r} to a decimal"
            raise CoercionError(msg, value=value, type=PreferenceType.DECIMAL) from exc
    if not result.is_finite():
        msg = f"Cannot convert {value!r} to a decimal: not a finite number"
        raise CoercionError(msg, value=value, type=PreferenceType.DECIMAL)
    return result


def to_integer(value: Any) -> int:
    """Best-effort integer: leading digits of strings, else ``0``. Never raises."""
    if value is None:
        return 0
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float | Decimal):
        if isinstance(value, float) and not math.isfinite(value):
            return 0
        if isinstance(value, Decimal) and not value.is_finite():
            return 0
        return int(value)
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    if isinstance(value, str):
        match = _LEADING_INTEGER.match(value)
        if match is None:
            return 0
        return int(Decimal(match.group(1).replace("_", "")))
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return 0


def to_boolean(value: Any) -> bool:
    """Inclusive falsy recognizer; every unrecognized value is ``True``."""
    if value is False or value is None:
        return False
    if isinstance(value, int | float | Decimal) and value == 0:
        return False
    if isinstance(value, str) and _FALSY_PATTERN.search(value):
        return False
    if hasattr(value, "__len__") and len(value) == 0:
        return False
    return True


def to_array(value: Any) -> list[Any]:
    if isinstance(value, list):
        return value
    if value is None:
        return []
    if isinstance(value, Sequence) and not isinstance(value, str | bytes):
        return list(value)
    return [value]


def to_hash(value: Any) -> Mapping[Any, Any]:
    """Convert *value* to a mapping.

    Raises:
        CoercionError: For strings that are not a JSON object and for
            sequences that cannot be paired up into keys and values.
    """
    if isinstance(value, Mapping):
        return value
    if isinstance(value, str):
        return _string_to_hash(value)
    if isinstance(value, Sequence) and not isinstance(value, bytes):
        return _sequence_to_hash(list(value))
    return {}


def _string_to_hash(value: str) -> dict[str, Any]:
    # Legacy ``{"a"=>1}`` notation; only works when keys are already quoted.
    try:
        parsed = json.loads(value.replace("=>", ":"))
    except json.JSONDecodeError as exc:
        msg = f"Cannot convert {value!r} to a hash: {exc.msg}"
        raise CoercionError(msg, value=value, type=PreferenceType.HASH) from exc
    if not isinstance(parsed, dict):
        msg = f"Cannot convert {value!r} to a hash: not a JSON object"
        raise CoercionError(msg, value=value, type=PreferenceType.HASH)
    return parsed


def _sequence_to_hash(items: Sequence[Any]) -> dict[Any, Any]:
    if items and all(isinstance(item, list | tuple) for item in items):
        if any(len(item) != 2 for item in items):
            raise CoercionError(EVEN_COUNT_MESSAGE, value=items, type=PreferenceType.HASH)
        pairs = [(item[0], item[1]) for item in items]
    else:
        if len(items) % 2:
            raise CoercionError(EVEN_COUNT_MESSAGE, value=items, type=PreferenceType.HASH)
        pairs = list(zip(items[::2], items[1::2], strict=True))
    try:
        return dict(pairs)
    except TypeError as exc:
        msg = f"Cannot convert {items!r} to a hash: {exc}"
        raise CoercionError(msg, value=items, type=PreferenceType.HASH) from exc
