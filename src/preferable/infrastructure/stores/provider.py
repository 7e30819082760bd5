"""StoreProvider — pick a store backend from configuration."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from preferable.infrastructure.stores.memory import MappingStore

if TYPE_CHECKING:
    from preferable.config.models import StoreConfig
    from preferable.infrastructure.database.engine import PreferenceDatabase
    from preferable.infrastructure.stores.base import PreferenceStore

logger = logging.getLogger(__name__)


class StoreProvider:
    """Hands out one store per scope for the configured backend.

    ``memory`` stores live as long as the provider; ``sql`` stores share
    one :class:`PreferenceDatabase`, opened on first use.
    """

    def __init__(self, config: StoreConfig) -> None:
        self.config = config
        self._memory: dict[str, MappingStore] = {}
        self._database: PreferenceDatabase | None = None

    def store_for(self, scope: str) -> PreferenceStore:
        if self.config.backend == "sql":
            return self.database.store_for(scope)
        if scope not in self._memory:
            self._memory[scope] = MappingStore()
        return self._memory[scope]

    @property
    def database(self) -> PreferenceDatabase:
        if self._database is None:
            from preferable.infrastructure.database.engine import PreferenceDatabase

            logger.debug("Opening preference database %s", self.config.database_url)
            self._database = PreferenceDatabase(self.config)
        return self._database

    def close(self) -> None:
        if self._database is not None:
            self._database.close()
            self._database = None
