"""Sticker Hook - Slack slash command that posts Swarm stickers.

Resolves free-form text to a sticker from a periodically refreshed catalog:
- Raw sticker IDs (24 hex characters)
- User-defined aliases, persisted as a single document
- Nearest sticker name by edit distance

Example:
    >>> from sticker_hook import AliasTable, CatalogEntry, CatalogStore, StickerResolver
    >>>
    >>> catalog = CatalogStore([CatalogEntry(id="4e1b2c3d4e5f6a7b8c9d0e1f", name="Explorer")])
    >>> resolver = StickerResolver(catalog, AliasTable())
    >>> resolver.resolve("explorr").name
    'Explorer'
"""

from sticker_hook.core.types import CatalogEntry, ImageSpec
from sticker_hook.core.exceptions import (
    CatalogFetchError,
    DeliveryError,
    PersistenceError,
    StickerHookError,
    UpstreamError,
)
from sticker_hook.catalog import (
    CatalogRefresher,
    CatalogStore,
    FoursquareCatalogSource,
    RefreshResult,
    RefreshScheduler,
)
from sticker_hook.aliases import AliasTable, InMemoryAliasStore, RedisAliasStore
from sticker_hook.resolution import MatchKind, Resolution, StickerResolver, edit_distance
from sticker_hook.delivery import SlackWebhookClient

__version__ = "0.1.0"

__all__ = [
    # Core types
    "CatalogEntry",
    "ImageSpec",
    # Exceptions
    "CatalogFetchError",
    "DeliveryError",
    "PersistenceError",
    "StickerHookError",
    "UpstreamError",
    # Catalog
    "CatalogRefresher",
    "CatalogStore",
    "FoursquareCatalogSource",
    "RefreshResult",
    "RefreshScheduler",
    # Aliases
    "AliasTable",
    "InMemoryAliasStore",
    "RedisAliasStore",
    # Resolution
    "MatchKind",
    "Resolution",
    "StickerResolver",
    "edit_distance",
    # Delivery
    "SlackWebhookClient",
]
