"""Alias table and its document stores."""

from sticker_hook.aliases.store import (
    DEFAULT_DOCUMENT_ID,
    InMemoryAliasStore,
    RedisAliasStore,
)
from sticker_hook.aliases.table import MAX_ALIAS_LENGTH, AliasTable, sanitize_alias

__all__ = [
    "AliasTable",
    "DEFAULT_DOCUMENT_ID",
    "InMemoryAliasStore",
    "MAX_ALIAS_LENGTH",
    "RedisAliasStore",
    "sanitize_alias",
]
