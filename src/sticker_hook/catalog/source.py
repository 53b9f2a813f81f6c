"""Remote sticker catalog client."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from sticker_hook.core.clock import Clock, SystemClock
from sticker_hook.core.exceptions import CatalogFetchError, CatalogSchemaError
from sticker_hook.core.utils import client_version

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_URL = "https://api.foursquare.com/v2/stickers/all"


# --- Record schema ---


class ImageRecord(BaseModel):
    prefix: str | None = None
    name: str | None = None
    sizes: list[int] | None = None


class StickerRecord(BaseModel):
    """One sticker as returned by the catalog API.

    Only ``id`` is required. A record without a name still parses and is
    dropped later by ``CatalogEntry.is_valid``.
    """

    id: str
    name: str | None = None
    restricted: bool | None = False
    image: ImageRecord | None = None


def parse_stickers(payload: Any) -> list[StickerRecord]:
    """Extract sticker records from a catalog response body.

    A body without ``response.stickers`` yields an empty list. Records that
    fail the schema are skipped.
    """
    if not isinstance(payload, dict):
        raise CatalogSchemaError(f"Expected a JSON object, got {type(payload).__name__}")

    response = payload.get("response")
    raw_stickers = response.get("stickers") if isinstance(response, dict) else None
    if not isinstance(raw_stickers, list):
        return []

    records: list[StickerRecord] = []
    dropped = 0
    for raw in raw_stickers:
        try:
            records.append(StickerRecord.model_validate(raw))
        except ValidationError:
            dropped += 1
    if dropped:
        logger.debug("Skipped %d malformed sticker record(s)", dropped)
    return records


class FoursquareCatalogSource:
    """Fetches the sticker list from the Foursquare API."""

    def __init__(
        self,
        token: str,
        url: str = DEFAULT_SOURCE_URL,
        client: httpx.AsyncClient | None = None,
        clock: Clock | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._token = token
        self._url = url
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._clock = clock or SystemClock()

    def _params(self) -> dict[str, str]:
        return {
            "oauth_token": self._token,
            "v": client_version(self._clock.now().date()),
            "m": "swarm",
        }

    async def fetch(self) -> list[StickerRecord]:
        try:
            response = await self._client.get(self._url, params=self._params())
        except httpx.HTTPError as exc:
            raise CatalogFetchError(str(exc) or type(exc).__name__) from exc

        if response.status_code != 200:
            raise CatalogFetchError(
                f"Got code {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise CatalogFetchError("Response body is not valid JSON", body=response.text) from exc

        return parse_stickers(payload)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
