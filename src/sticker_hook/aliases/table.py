"""Alias table: sticker ID → aliases, with write-behind persistence."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from sticker_hook.core.exceptions import PersistenceError
from sticker_hook.core.protocols import AliasDocumentStore

logger = logging.getLogger(__name__)

MAX_ALIAS_LENGTH = 80


def sanitize_alias(text: str) -> str:
    """Strip, lowercase and cap an alias at 80 characters."""
    return text.strip().lower()[:MAX_ALIAS_LENGTH]


class AliasTable:
    """Mapping of sticker ID → aliases, newest alias first.

    Sticker IDs keep the order in which they were first added. Both
    ``remove`` and ``reverse_lookup`` take the first ID in that order whose
    aliases contain the query, so an alias that was (wrongly) attached to
    two stickers always resolves the same way.

    Mutations update memory immediately and then schedule a background
    write of the whole table to the document store. A failed write is
    logged and the in-memory change is kept.
    """

    def __init__(self, store: AliasDocumentStore | None = None) -> None:
        self._aliases: dict[str, list[str]] = {}
        self._store = store
        self._lock = asyncio.Lock()
        self._persist_lock = asyncio.Lock()
        self._pending: set[asyncio.Task[None]] = set()
        self._persist_failures = 0

    sanitize = staticmethod(sanitize_alias)

    @property
    def persistent(self) -> bool:
        """True if a document store is configured."""
        return self._store is not None

    @property
    def size(self) -> int:
        """Total number of aliases across all stickers."""
        return sum(len(v) for v in self._aliases.values())

    @property
    def persist_failures(self) -> int:
        return self._persist_failures

    async def load(self) -> int:
        """Replace the table with the stored document. Returns the alias count.

        A missing or unreadable document leaves the table empty.
        """
        if self._store is None:
            logger.warning("No alias store configured, aliases won't be persisted")
            return 0
        try:
            document = await self._store.load()
        except PersistenceError as exc:
            logger.warning("Could not load aliases: %s", exc)
            return 0
        if not document:
            logger.info("No saved aliases found")
            return 0

        loaded: dict[str, list[str]] = {}
        for sticker_id, values in document.items():
            if not isinstance(values, list):
                continue
            aliases = list(dict.fromkeys(v for v in values if isinstance(v, str)))
            if aliases:
                loaded[str(sticker_id)] = aliases
        async with self._lock:
            self._aliases = loaded
        logger.info("Loaded %d aliases for %d stickers", self.size, len(loaded))
        return self.size

    async def add(self, sticker_id: str, raw_alias: str) -> str:
        """Attach an alias to a sticker. Returns the alias as stored."""
        alias = sanitize_alias(raw_alias)
        async with self._lock:
            current = self._aliases.get(sticker_id, [])
            self._aliases[sticker_id] = [alias] + [a for a in current if a != alias]
        logger.info("Aliased %s to %r", sticker_id, alias)
        self._schedule_persist()
        return alias

    async def remove(self, raw_alias: str) -> bool:
        """Detach an alias from the first sticker that has it.

        Returns False, and leaves the table untouched, if no sticker has it.
        """
        alias = sanitize_alias(raw_alias)
        async with self._lock:
            owner = self._find_owner(alias)
            if owner is None:
                return False
            remaining = [a for a in self._aliases[owner] if a != alias]
            if remaining:
                self._aliases[owner] = remaining
            else:
                del self._aliases[owner]
        logger.info("Removed alias %r from %s", alias, owner)
        self._schedule_persist()
        return True

    def aliases_for(self, sticker_id: str) -> list[str]:
        return list(self._aliases.get(sticker_id, []))

    def reverse_lookup(self, alias: str) -> str | None:
        """Return the sticker ID that owns ``alias``, if any."""
        return self._find_owner(sanitize_alias(alias))

    def items(self) -> list[tuple[str, list[str]]]:
        return [(sticker_id, list(aliases)) for sticker_id, aliases in self._aliases.items()]

    def to_document(self) -> dict[str, list[str]]:
        return {sticker_id: list(aliases) for sticker_id, aliases in self._aliases.items()}

    async def flush(self) -> None:
        """Wait for all scheduled writes to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    def _find_owner(self, alias: str) -> str | None:
        for sticker_id, aliases in self._aliases.items():
            if alias in aliases:
                return sticker_id
        return None

    def _schedule_persist(self) -> None:
        if self._store is None:
            logger.warning("Aliases not getting persisted, no alias store configured")
            return
        task = asyncio.create_task(self._persist())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _persist(self) -> None:
        # Serialized; each write stores the table as it is when the write starts.
        async with self._persist_lock:
            document = self.to_document()
            try:
                await self._store.save(document)
            except PersistenceError as exc:
                self._persist_failures += 1
                logger.warning("Alias changes not persisted: %s", exc)
            except Exception:
                self._persist_failures += 1
                logger.exception("Unexpected error persisting aliases")

    def __contains__(self, sticker_id: Any) -> bool:
        return sticker_id in self._aliases

    def __len__(self) -> int:
        return len(self._aliases)
