"""PreferenceStore — the key-value contract the accessor layer consumes.

INVARIANT: ``fetch`` raises :class:`KeyError` for an absent key, so a
stored ``None`` or empty value is always distinguishable from "missing".
Adapters translate their own I/O failures into
:class:`~preferable.domain.errors.StoreUnavailableError`.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class PreferenceStore(Protocol):
    """Minimal store owned by one host instance."""

    def fetch(self, key: str) -> Any:
        """Return the stored value for *key*; raise ``KeyError`` if absent."""
        ...

    def set(self, key: str, value: Any) -> None: ...

    def delete(self, key: str) -> None:
        """Remove *key*. Deleting an absent key is a no-op."""
        ...

    def keys(self) -> Iterable[str]:
        """Keys currently present, declared or not."""
        ...
