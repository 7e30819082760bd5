"""SQLAlchemy Core table definition for stored preference values.

One row per ``(scope, key)``: *scope* identifies the owning host instance,
*value* holds the JSON-encoded, already-coerced preference value. The table
name comes from :class:`~preferable.config.models.StoreConfig`.
"""

from __future__ import annotations

from sqlalchemy import Column, Index, Integer, MetaData, Table, Text, UniqueConstraint

DEFAULT_TABLE_NAME = "preference_objects"


def build_preferences_table(metadata: MetaData, table_name: str = DEFAULT_TABLE_NAME) -> Table:
    """Define the preferences table on *metadata* under *table_name*."""
    table = Table(
        table_name,
        metadata,
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("scope", Text, nullable=False),
        Column("key", Text, nullable=False),
        Column("value", Text),  # JSON
        UniqueConstraint("scope", "key", name=f"uq_{table_name}_scope_key"),
    )
    Index(f"ix_{table_name}_scope", table.c.scope)
    return table
