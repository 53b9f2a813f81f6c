"""Core types and protocols for Sticker Hook."""

from sticker_hook.core.types import CatalogEntry, ImageSpec
from sticker_hook.core.protocols import AliasDocumentStore, CatalogSource
from sticker_hook.core.exceptions import (
    CatalogFetchError,
    CatalogSchemaError,
    DeliveryError,
    PersistenceError,
    StickerHookError,
    UpstreamError,
)

__all__ = [
    # Types
    "CatalogEntry",
    "ImageSpec",
    # Protocols
    "AliasDocumentStore",
    "CatalogSource",
    # Exceptions
    "CatalogFetchError",
    "CatalogSchemaError",
    "DeliveryError",
    "PersistenceError",
    "StickerHookError",
    "UpstreamError",
]
