"""StickerResolver: free-form text → catalog entry."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum

from sticker_hook.aliases.table import AliasTable
from sticker_hook.catalog.store import CatalogStore
from sticker_hook.core.types import CatalogEntry
from sticker_hook.resolution.distance import edit_distance

logger = logging.getLogger(__name__)

STICKER_ID_RE = re.compile(r"^[0-9a-f]{24}$")


class MatchKind(str, Enum):
    ID = "id"
    ALIAS = "alias"
    FUZZY = "fuzzy"


@dataclass(frozen=True)
class Resolution:
    """How a query was resolved."""

    query: str
    kind: MatchKind
    entry: CatalogEntry | None
    distance: int | None = None


class StickerResolver:
    """Resolves user text to a sticker in three passes.

    Pass 1: Raw ID (24 hex characters), looked up directly, no fallback
    Pass 2: Alias table reverse lookup
    Pass 3: Nearest catalog name by edit distance, first minimum wins
    """

    def __init__(self, catalog: CatalogStore, aliases: AliasTable) -> None:
        self.catalog = catalog
        self.aliases = aliases

    def resolve(self, text: str) -> CatalogEntry | None:
        return self.resolve_match(text).entry

    def resolve_match(self, text: str) -> Resolution:
        query = text.strip().lower()

        if STICKER_ID_RE.match(query):
            entry = self.catalog.find_by_id(query)
            logger.debug("Resolved %r by ID → %s", query, entry.id if entry else None)
            return Resolution(query=query, kind=MatchKind.ID, entry=entry)

        sticker_id = self.aliases.reverse_lookup(query)
        if sticker_id is not None:
            entry = self.catalog.find_by_id(sticker_id)
            logger.debug("Resolved %r by alias → %s (in catalog: %s)", query, sticker_id, entry is not None)
            return Resolution(query=query, kind=MatchKind.ALIAS, entry=entry)

        best: CatalogEntry | None = None
        best_distance: int | None = None
        for entry in self.catalog.all():
            distance = edit_distance(entry.lower_name, query)
            if best_distance is None or distance < best_distance:
                best, best_distance = entry, distance
        logger.debug(
            "Resolved %r by name → %s (distance=%s)",
            query,
            best.id if best else None,
            best_distance,
        )
        return Resolution(query=query, kind=MatchKind.FUZZY, entry=best, distance=best_distance)
