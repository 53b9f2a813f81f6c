"""Outgoing chat delivery through a Slack incoming webhook."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from sticker_hook.core.exceptions import DeliveryError
from sticker_hook.core.types import CatalogEntry

logger = logging.getLogger(__name__)

STICKER_EMOJI = ":thief:"
STICKER_COLOR = "#ffa633"


@dataclass
class Attachment:
    fallback: str
    image_url: str
    color: str = STICKER_COLOR

    def to_dict(self) -> dict[str, str]:
        return {"fallback": self.fallback, "color": self.color, "image_url": self.image_url}


def build_payload(
    username: str,
    channel: str,
    icon_emoji: str,
    text: str | None = None,
    attachments: list[Attachment] | None = None,
) -> dict[str, Any]:
    """Assemble the webhook payload; ``text`` and ``attachments`` only when given."""
    payload: dict[str, Any] = {"username": username, "icon_emoji": icon_emoji, "channel": channel}
    if text:
        payload["text"] = text
    if attachments:
        payload["attachments"] = [a.to_dict() for a in attachments]
    return payload


class SlackWebhookClient:
    """Posts messages to a channel on behalf of the command's user."""

    def __init__(
        self,
        webhook_url: str,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._webhook_url = webhook_url
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def post(self, payload: dict[str, Any]) -> None:
        """Send a payload. Raises DeliveryError on transport failure or non-200."""
        try:
            response = await self._client.post(
                self._webhook_url,
                data={"payload": json.dumps(payload)},
            )
        except httpx.HTTPError as exc:
            error = DeliveryError(str(exc) or type(exc).__name__)
            logger.warning("%s", error)
            raise error from exc

        if response.status_code != 200:
            error = DeliveryError(
                f"Got code {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )
            logger.warning("%s", error)
            raise error

    async def send_sticker(
        self,
        entry: CatalogEntry,
        image_url: str,
        username: str,
        channel: str,
    ) -> None:
        payload = build_payload(
            username=username,
            channel=channel,
            icon_emoji=STICKER_EMOJI,
            attachments=[Attachment(fallback=entry.name or entry.id, image_url=image_url)],
        )
        await self.post(payload)
        logger.info("Sent sticker %s to %s for %s", entry.id, channel, username)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
