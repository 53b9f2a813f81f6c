"""In-memory catalog snapshot with atomic replacement."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable

from sticker_hook.core.types import CatalogEntry
from sticker_hook.core.utils import utc_now

logger = logging.getLogger(__name__)


class CatalogStore:
    """Holds the current list of valid stickers.

    The snapshot is an immutable tuple swapped by a single reference
    assignment, so readers always see either the previous or the new
    catalog in full and never need a lock.
    """

    def __init__(self, entries: Iterable[CatalogEntry] = ()) -> None:
        self._snapshot: tuple[CatalogEntry, ...] = tuple(entries)
        self._version = 0
        self._replaced_at: datetime | None = None

    def replace(self, entries: Iterable[CatalogEntry]) -> None:
        """Swap in a new snapshot."""
        snapshot = tuple(entries)
        self._snapshot = snapshot
        self._version += 1
        self._replaced_at = utc_now()
        logger.debug("Catalog snapshot v%d installed (%d entries)", self._version, len(snapshot))

    def find_by_id(self, sticker_id: str) -> CatalogEntry | None:
        for entry in self._snapshot:
            if entry.id == sticker_id:
                return entry
        return None

    def all(self) -> tuple[CatalogEntry, ...]:
        """Return the current snapshot."""
        return self._snapshot

    @property
    def size(self) -> int:
        return len(self._snapshot)

    @property
    def version(self) -> int:
        """Number of replacements since construction."""
        return self._version

    @property
    def replaced_at(self) -> datetime | None:
        return self._replaced_at
