"""Sticker name resolution."""

from sticker_hook.resolution.distance import edit_distance
from sticker_hook.resolution.resolver import (
    STICKER_ID_RE,
    MatchKind,
    Resolution,
    StickerResolver,
)

__all__ = [
    "MatchKind",
    "Resolution",
    "STICKER_ID_RE",
    "StickerResolver",
    "edit_distance",
]
