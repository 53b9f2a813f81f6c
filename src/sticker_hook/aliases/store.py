"""Alias document stores: Redis for deployments, in-memory for tests."""

from __future__ import annotations

import copy
import json
import logging
from typing import Any

import redis.asyncio as redis
from redis.exceptions import RedisError

from sticker_hook.core.exceptions import PersistenceError

logger = logging.getLogger(__name__)

# Well-known identifier of the single alias document.
DEFAULT_DOCUMENT_ID = "56e0832ee4b0d99a76088c4d"

DEFAULT_KEY_PREFIX = "sticker_hook:aliases"


class RedisAliasStore:
    """Keeps the alias table as one JSON document under a fixed Redis key.

    Every save overwrites the document wholesale.
    """

    def __init__(
        self,
        client: redis.Redis,
        document_id: str = DEFAULT_DOCUMENT_ID,
        key_prefix: str = DEFAULT_KEY_PREFIX,
    ) -> None:
        self._client = client
        self._document_id = document_id
        self._key = f"{key_prefix}:{document_id}"

    @classmethod
    def from_url(cls, url: str, **kwargs: Any) -> RedisAliasStore:
        return cls(redis.from_url(url, decode_responses=True), **kwargs)

    @property
    def document_id(self) -> str:
        return self._document_id

    @property
    def key(self) -> str:
        return self._key

    async def load(self) -> dict[str, Any] | None:
        try:
            raw = await self._client.get(self._key)
        except RedisError as exc:
            raise PersistenceError(self._document_id, f"Could not read aliases: {exc}") from exc
        if raw is None:
            return None
        try:
            document = json.loads(raw)
        except ValueError as exc:
            raise PersistenceError(self._document_id, "Stored aliases are not valid JSON") from exc
        if not isinstance(document, dict):
            raise PersistenceError(self._document_id, "Stored aliases are not a JSON object")
        return document

    async def save(self, document: dict[str, list[str]]) -> None:
        payload = json.dumps(document, ensure_ascii=False)
        try:
            await self._client.set(self._key, payload)
        except RedisError as exc:
            raise PersistenceError(self._document_id, f"Could not write aliases: {exc}") from exc

    async def close(self) -> None:
        await self._client.aclose()


class InMemoryAliasStore:
    """Alias store that keeps the document in process memory."""

    def __init__(
        self,
        document: dict[str, Any] | None = None,
        document_id: str = DEFAULT_DOCUMENT_ID,
    ) -> None:
        self._document = copy.deepcopy(document) if document is not None else None
        self._document_id = document_id
        self.save_count = 0

    @property
    def document_id(self) -> str:
        return self._document_id

    @property
    def document(self) -> dict[str, Any] | None:
        return copy.deepcopy(self._document)

    async def load(self) -> dict[str, Any] | None:
        return copy.deepcopy(self._document)

    async def save(self, document: dict[str, list[str]]) -> None:
        self._document = copy.deepcopy(document)
        self.save_count += 1

    async def close(self) -> None:
        pass
