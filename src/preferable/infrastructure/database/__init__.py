"""SQL-backed preference storage via SQLAlchemy Core."""

from preferable.infrastructure.database.engine import PreferenceDatabase, create_db_engine
from preferable.infrastructure.database.schema import build_preferences_table
from preferable.infrastructure.database.store import (
    SqlPreferenceStore,
    decode_value,
    encode_value,
)

__all__ = [
    "PreferenceDatabase",
    "SqlPreferenceStore",
    "build_preferences_table",
    "create_db_engine",
    "decode_value",
    "encode_value",
]
