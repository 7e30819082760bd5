"""Defaults merge — seed a host's store with every declared default.

Run once while a host instance is being constructed, after its store is
attached and before any other access. Values already present in the store
(e.g. loaded from durable state) always win; only missing keys are
written, so re-running the merge is a no-op.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from preferable.services.accessor import PreferenceAccessor

logger = logging.getLogger(__name__)


def merge_defaults(accessor: PreferenceAccessor) -> list[str]:
    """Write each declared default the store does not already hold.

    Returns the names that were seeded.
    """
    store = accessor.store
    present = set(store.keys())
    seeded: list[str] = []
    for name, value in accessor.defaults_snapshot().items():
        if name in present:
            continue
        store.set(name, value)
        seeded.append(name)
    if seeded:
        logger.debug(
            "Seeded %d default(s) for %s: %s",
            len(seeded),
            accessor.host_type.__name__,
            ", ".join(seeded),
            extra={"host_type": accessor.host_type.__name__, "count": len(seeded)},
        )
    return seeded
