"""Database engine setup and the :class:`PreferenceDatabase` owner object.

SQLAlchemy Core (not ORM) is used: the store only ever reads and writes
single key/value rows, so there is no benefit from session management or
identity maps.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import MetaData, create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from preferable.domain.errors import StoreUnavailableError
from preferable.infrastructure.database.schema import build_preferences_table
from preferable.infrastructure.database.store import SqlPreferenceStore

if TYPE_CHECKING:
    from sqlalchemy import Table

    from preferable.config.models import StoreConfig

logger = logging.getLogger(__name__)


def create_db_engine(url: str, *, echo: bool = False) -> Engine:
    """Create an engine; SQLite connections get WAL mode and foreign keys.

    In-memory SQLite shares one connection so every store sees the same data.
    """
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return create_engine(url, echo=echo)

    kwargs: dict[str, Any] = {}
    if parsed.database in (None, "", ":memory:"):
        kwargs = {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
    engine = create_engine(url, echo=echo, **kwargs)

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


class PreferenceDatabase:
    """Owns the engine and preferences table; hands out per-scope stores.

    Schema creation is idempotent, safe to run against an existing database.
    """

    def __init__(self, config: StoreConfig, *, engine: Engine | None = None) -> None:
        self.config = config
        self.engine = engine or create_db_engine(config.database_url, echo=config.echo)
        self.metadata = MetaData()
        self.table: Table = build_preferences_table(self.metadata, config.table_name)
        try:
            self.metadata.create_all(self.engine)
        except SQLAlchemyError as exc:
            logger.warning("Could not initialize preferences table %s", config.table_name)
            msg = f"Cannot initialize preferences table {config.table_name!r}: {exc}"
            raise StoreUnavailableError(msg) from exc

    def store_for(self, scope: str) -> SqlPreferenceStore:
        """Return the store holding preferences owned by *scope*."""
        return SqlPreferenceStore(self.engine, self.table, scope)

    def scopes(self) -> list[str]:
        """Every scope with at least one stored preference."""
        return SqlPreferenceStore.list_scopes(self.engine, self.table)

    def close(self) -> None:
        self.engine.dispose()
