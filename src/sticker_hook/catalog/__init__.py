"""Sticker catalog: snapshot store, remote source and refresh scheduling."""

from sticker_hook.catalog.refresh import (
    CatalogRefresher,
    RefreshResult,
    RefreshScheduler,
    RefreshState,
    build_trigger,
)
from sticker_hook.catalog.source import (
    FoursquareCatalogSource,
    ImageRecord,
    StickerRecord,
    parse_stickers,
)
from sticker_hook.catalog.store import CatalogStore

__all__ = [
    "CatalogRefresher",
    "CatalogStore",
    "FoursquareCatalogSource",
    "ImageRecord",
    "RefreshResult",
    "RefreshScheduler",
    "RefreshState",
    "StickerRecord",
    "build_trigger",
    "parse_stickers",
]
