"""Dict-backed in-memory store."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any


class MappingStore:
    """In-memory :class:`~preferable.infrastructure.stores.base.PreferenceStore`.

    Wraps a plain ``dict`` (the equivalent of a serialized preferences
    column once loaded). Pass *initial* to simulate a store loaded from
    durable state.
    """

    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(initial or {})

    def fetch(self, key: str) -> Any:
        return self._data[key]

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)

    def to_dict(self) -> dict[str, Any]:
        """Shallow copy of the stored entries."""
        return dict(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._data))

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"MappingStore({self._data!r})"
