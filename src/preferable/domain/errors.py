"""Exception hierarchy for preference declaration, access, and storage.

Only ``hash`` conversion and malformed ``decimal`` input raise
:class:`CoercionError`; every other type coerces best-effort and never
raises. Store failures surface as :class:`StoreUnavailableError` and are
never retried or swallowed by the accessor layer.
"""

from __future__ import annotations

from typing import Any


class PreferenceError(Exception):
    """Base class for all preferable errors."""


class UndeclaredPreferenceError(PreferenceError, LookupError):
    """Raised when a preference name has no spec for the host type."""

    def __init__(self, name: str, host_type: type | None = None) -> None:
        self.name = name
        self.host_type = host_type
        owner = f" on {host_type.__name__}" if host_type is not None else ""
        super().__init__(f"{name} preference not defined{owner}")


class CoercionError(PreferenceError, ValueError):
    """Raised when a value cannot be converted to its declared type."""

    def __init__(self, message: str, *, value: Any = None, type: str | None = None) -> None:
        self.value = value
        self.type = type
        super().__init__(message)


class StoreUnavailableError(PreferenceError):
    """Raised by a store adapter when its backing storage cannot be reached."""


class ConfigError(PreferenceError):
    """Raised when a configuration file cannot be read or parsed."""
