"""Pytest fixtures for sticker-hook tests.

Provides fixtures for:
- Catalog entries and a populated catalog store
- Alias tables with and without an in-memory document store
- A fake clock pinned to a known date
- Raw catalog API payloads
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import pytest

from sticker_hook.aliases.store import InMemoryAliasStore
from sticker_hook.aliases.table import AliasTable
from sticker_hook.catalog.store import CatalogStore
from sticker_hook.core.clock import FakeClock
from sticker_hook.core.types import CatalogEntry, ImageSpec
from sticker_hook.resolution.resolver import StickerResolver


EXPLORER_ID = "4f1d2b3c4d5e6f7a8b9c0d1e"
SWARM_PIN_ID = "51a2b3c4d5e6f7a8b9c0d1e2"
MISSING_ID = "000000000000000000000000"

IMAGE_PREFIX = "https://igx.4sqi.net/img/sticker/"
SIZES = (60, 94, 150, 300)


def make_entry(
    sticker_id: str,
    name: str | None,
    restricted: bool = False,
    sizes: tuple[int, ...] = SIZES,
) -> CatalogEntry:
    """Build a catalog entry with a standard image spec."""
    slug = (name or sticker_id).lower().replace(" ", "_")
    return CatalogEntry(
        id=sticker_id,
        name=name,
        restricted=restricted,
        image=ImageSpec(prefix=IMAGE_PREFIX, suffix=f"/{slug}.png", sizes=frozenset(sizes)),
    )


def sticker_record(
    sticker_id: str,
    name: str | None = None,
    restricted: bool = False,
    sizes: list[int] | None = None,
) -> dict[str, Any]:
    """Build a raw sticker record as the catalog API returns it."""
    record: dict[str, Any] = {
        "id": sticker_id,
        "restricted": restricted,
        "image": {
            "prefix": IMAGE_PREFIX,
            "sizes": list(SIZES) if sizes is None else sizes,
            "name": f"/{sticker_id}.png",
        },
    }
    if name is not None:
        record["name"] = name
    return record


def catalog_payload(*records: dict[str, Any]) -> dict[str, Any]:
    return {"meta": {"code": 200}, "response": {"stickers": list(records)}}


# ============================================================================
# Catalog fixtures
# ============================================================================


@pytest.fixture
def explorer() -> CatalogEntry:
    return make_entry(EXPLORER_ID, "Explorer")


@pytest.fixture
def swarm_pin() -> CatalogEntry:
    return make_entry(SWARM_PIN_ID, "Swarm Pin")


@pytest.fixture
def catalog(explorer: CatalogEntry, swarm_pin: CatalogEntry) -> CatalogStore:
    """Catalog store holding Explorer and Swarm Pin."""
    return CatalogStore([explorer, swarm_pin])


# ============================================================================
# Alias fixtures
# ============================================================================


@pytest.fixture
def alias_store() -> InMemoryAliasStore:
    return InMemoryAliasStore()


@pytest.fixture
def aliases(alias_store: InMemoryAliasStore) -> AliasTable:
    """Alias table backed by an in-memory document store."""
    return AliasTable(store=alias_store)


@pytest.fixture
def resolver(catalog: CatalogStore, aliases: AliasTable) -> StickerResolver:
    return StickerResolver(catalog, aliases)


# ============================================================================
# Time
# ============================================================================


@pytest.fixture
def fake_clock() -> FakeClock:
    """Clock pinned to 2024-01-05 12:00 UTC."""
    return FakeClock(datetime(2024, 1, 5, 12, 0, 0, tzinfo=timezone.utc))
