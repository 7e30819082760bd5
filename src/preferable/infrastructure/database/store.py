"""SqlPreferenceStore — preference values in a key/value table.

Each store is bound to one *scope* (the owning host instance). Values are
stored as JSON text. Anything plain JSON would not return unchanged is
written as a tagged envelope ``{"__preferable__": kind, "items": ...}``:
``Decimal``, tuples, and dicts whose keys are not all strings (or that
contain the tag key themselves). Values that cannot be stored losslessly
raise :class:`~preferable.domain.errors.CoercionError` before any write.
Every ``SQLAlchemyError`` is translated into
:class:`~preferable.domain.errors.StoreUnavailableError`.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError

from preferable.domain.errors import CoercionError, StoreUnavailableError

if TYPE_CHECKING:
    from sqlalchemy import Connection, Table
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

_TAG = "__preferable__"
_SCALARS = (str, int, float, bool, type(None))
# json renders ints through str(), which refuses more than 4300 digits.
_LONG_INT = 10**4000


def _envelope(kind: str, items: Any) -> dict[str, Any]:
    return {_TAG: kind, "items": items}


def _to_json(obj: Any) -> Any:
    if isinstance(obj, int) and not isinstance(obj, bool) and abs(obj) >= _LONG_INT:
        return _envelope("integer", str(Decimal(obj)))
    if isinstance(obj, _SCALARS):
        return obj
    if isinstance(obj, Decimal):
        return _envelope("decimal", str(obj))
    if isinstance(obj, list):
        return [_to_json(item) for item in obj]
    if isinstance(obj, tuple):
        return _envelope("tuple", [_to_json(item) for item in obj])
    if isinstance(obj, Mapping):
        if all(isinstance(key, str) for key in obj) and _TAG not in obj:
            return {key: _to_json(value) for key, value in obj.items()}
        return _envelope("map", [[_key_to_json(k), _to_json(v)] for k, v in obj.items()])
    msg = f"Cannot store a value of type {type(obj).__name__}"
    raise CoercionError(msg, value=obj)


def _key_to_json(key: Any) -> Any:
    if isinstance(key, (*_SCALARS, Decimal, tuple)):
        return _to_json(key)
    msg = f"Cannot store a hash key of type {type(key).__name__}"
    raise CoercionError(msg, value=key)


def _from_json(obj: dict[str, Any]) -> Any:
    kind = obj.get(_TAG)
    if kind is None or set(obj) != {_TAG, "items"}:
        return obj
    items = obj["items"]
    if kind == "decimal":
        return Decimal(items)
    if kind == "integer":
        return int(Decimal(items))
    if kind == "tuple":
        return tuple(items)
    if kind == "map":
        return {key: value for key, value in items}
    return obj


def encode_value(value: Any) -> str:
    """Serialize a coerced preference value to JSON text.

    Raises:
        CoercionError: If *value* (or a nested key) has no lossless encoding.
    """
    return json.dumps(_to_json(value), ensure_ascii=False)


def decode_value(raw: str | None) -> Any:
    if raw is None:
        return None
    return json.loads(raw, object_hook=_from_json)


class SqlPreferenceStore:
    """:class:`~preferable.infrastructure.stores.base.PreferenceStore` over SQL.

    Each call runs in its own transaction; the store keeps no cache.
    """

    def __init__(self, engine: Engine, table: Table, scope: str) -> None:
        self._engine = engine
        self._table = table
        self.scope = scope

    @contextmanager
    def _transaction(self, action: str) -> Iterator[Connection]:
        try:
            with self._engine.begin() as conn:
                yield conn
        except SQLAlchemyError as exc:
            logger.warning(
                "Preference store %s failed for scope %s",
                action,
                self.scope,
                extra={"scope": self.scope},
            )
            msg = f"Preference store unavailable during {action}: {exc}"
            raise StoreUnavailableError(msg) from exc

    def _where_key(self, key: str) -> Any:
        return (self._table.c.scope == self.scope) & (self._table.c.key == key)

    def fetch(self, key: str) -> Any:
        with self._transaction("fetch") as conn:
            row = conn.execute(select(self._table.c.value).where(self._where_key(key))).first()
        if row is None:
            raise KeyError(key)
        return decode_value(row[0])

    def set(self, key: str, value: Any) -> None:
        encoded = encode_value(value)
        with self._transaction("set") as conn:
            result = conn.execute(
                update(self._table).where(self._where_key(key)).values(value=encoded)
            )
            if result.rowcount == 0:
                conn.execute(
                    insert(self._table).values(scope=self.scope, key=key, value=encoded)
                )

    def delete(self, key: str) -> None:
        with self._transaction("delete") as conn:
            conn.execute(delete(self._table).where(self._where_key(key)))

    def keys(self) -> list[str]:
        with self._transaction("keys") as conn:
            rows = conn.execute(
                select(self._table.c.key)
                .where(self._table.c.scope == self.scope)
                .order_by(self._table.c.id)
            ).all()
        return [row[0] for row in rows]

    def to_dict(self) -> dict[str, Any]:
        """All stored entries for this scope, decoded."""
        with self._transaction("load") as conn:
            rows = conn.execute(
                select(self._table.c.key, self._table.c.value)
                .where(self._table.c.scope == self.scope)
                .order_by(self._table.c.id)
            ).all()
        return {key: decode_value(value) for key, value in rows}

    @staticmethod
    def list_scopes(engine: Engine, table: Table) -> list[str]:
        try:
            with engine.connect() as conn:
                rows = conn.execute(
                    select(table.c.scope).distinct().order_by(table.c.scope)
                ).all()
        except SQLAlchemyError as exc:
            msg = f"Preference store unavailable during scopes: {exc}"
            raise StoreUnavailableError(msg) from exc
        return [row[0] for row in rows]

    def __repr__(self) -> str:
        return f"SqlPreferenceStore({self._table.name!r}, scope={self.scope!r})"
