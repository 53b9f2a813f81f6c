"""Slash-command verb dispatch and reply texts."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from sticker_hook.aliases.table import AliasTable
from sticker_hook.catalog.store import CatalogStore
from sticker_hook.core.exceptions import DeliveryError
from sticker_hook.delivery.slack import SlackWebhookClient
from sticker_hook.resolution.resolver import StickerResolver

logger = logging.getLogger(__name__)

ALIAS_RE = re.compile(r"^alias ([a-z0-9]+) (.*)$", re.DOTALL)
UNALIAS_RE = re.compile(r"^unalias (.*)$", re.DOTALL)
SIZED_QUERY_RE = re.compile(r"^(\d+)\s+(.*)$", re.DOTALL)

ALIAS_USAGE = "Type /sticker alias <sticker ID> <new alias>"
UNALIAS_USAGE = "Type /sticker unalias <alias>"
SEND_USAGE = "Type /sticker [size] [name or oid] to send a sticker."
NOT_FOUND = "Couldn't find that sticker or image at that size"


@dataclass
class CommandRequest:
    """The parts of a slash command the dispatcher needs."""

    text: str
    user_name: str = ""
    channel_id: str = ""


class CommandDispatcher:
    """Maps slash-command text to an action and a plain-text reply.

    Verbs: ``list``, ``sizes``, ``aliases``, ``alias <id> <text>``,
    ``unalias <text>``, ``warmup``. Anything else is ``[size] name-or-id``
    and sends the resolved sticker to the channel.
    """

    def __init__(
        self,
        catalog: CatalogStore,
        aliases: AliasTable,
        resolver: StickerResolver,
        delivery: SlackWebhookClient,
        default_size: int = 94,
        available_sizes: list[int] | None = None,
    ) -> None:
        self.catalog = catalog
        self.aliases = aliases
        self.resolver = resolver
        self.delivery = delivery
        self.default_size = default_size
        self.available_sizes = available_sizes or [60, 94, 150, 300]

    async def handle(self, request: CommandRequest) -> str:
        text = request.text.strip()
        if text == "list":
            return self.list_stickers()
        if text == "sizes":
            return self.list_sizes()
        if text == "aliases":
            return self.list_aliases()
        if text.startswith("alias"):
            return await self.add_alias(text)
        if text.startswith("unalias"):
            return await self.remove_alias(text)
        if text == "warmup":
            return "OK, Ready"
        return await self.send_sticker(text, request)

    def list_stickers(self) -> str:
        lines = ["The following stickers are available:"]
        lines.extend(f"- {entry.name} [{entry.id}]" for entry in self.catalog.all())
        return "\n".join(lines) + "\n"

    def list_sizes(self) -> str:
        sizes = ", ".join(str(size) for size in self.available_sizes)
        return (
            f"Available sizes: {sizes}\n"
            "Type /sticker [size] [name or oid] to use a specified size."
        )

    def list_aliases(self) -> str:
        lines = ["The following aliases are available:"]
        for sticker_id, aliases in self.aliases.items():
            entry = self.catalog.find_by_id(sticker_id)
            if entry:
                lines.append(f"{entry.name}: {', '.join(aliases)}")
        lines.append(
            "(Type /sticker alias <sticker ID> <new alias> to create a new alias. "
            "Type /sticker unalias <alias> to remove an alias.)"
        )
        return "\n".join(lines) + "\n"

    async def add_alias(self, text: str) -> str:
        m = ALIAS_RE.match(text)
        if not m or not m.group(2).strip():
            return ALIAS_USAGE
        sticker_id, raw_alias = m.group(1), m.group(2)
        entry = self.catalog.find_by_id(sticker_id)
        if entry is None:
            return f"Sticker with ID {sticker_id} not found"
        added = await self.aliases.add(entry.id, raw_alias)
        return f'Aliased {entry.id} to "{added}"'

    async def remove_alias(self, text: str) -> str:
        m = UNALIAS_RE.match(text)
        if not m or not m.group(1).strip():
            return UNALIAS_USAGE
        removed = await self.aliases.remove(m.group(1))
        return "Removed that alias" if removed else "No such alias to remove"

    async def send_sticker(self, text: str, request: CommandRequest) -> str:
        if not text:
            return SEND_USAGE

        size = self.default_size
        query = text
        m = SIZED_QUERY_RE.match(text)
        if m:
            size = int(m.group(1))
            query = m.group(2)

        entry = self.resolver.resolve(query)
        image_url = entry.image_url(size) if entry else None
        if entry is None or image_url is None:
            logger.info("No sticker for %r at size %d", query, size)
            return NOT_FOUND

        try:
            await self.delivery.send_sticker(
                entry,
                image_url,
                username=request.user_name,
                channel=request.channel_id,
            )
        except DeliveryError as exc:
            return str(exc)
        return ""
