"""Server configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping

from sticker_hook.aliases.store import DEFAULT_DOCUMENT_ID
from sticker_hook.catalog.source import DEFAULT_SOURCE_URL


def _int_list(value: str) -> list[int]:
    return [int(part) for part in value.replace(" ", "").split(",") if part]


@dataclass
class ServerConfig:
    """Configuration for the Sticker Hook server."""

    # Network
    host: str = "0.0.0.0"
    port: int = 3000

    # Slack
    slack_token: str = ""  # shared secret sent with every slash command
    webhook_url: str = ""

    # Catalog
    foursquare_token: str = ""
    source_url: str = DEFAULT_SOURCE_URL
    refresh_schedule: str = "0 0 * * * *"  # seconds-first cron: top of every hour
    refresh_enabled: bool = True
    timezone: str = "UTC"

    # Images
    default_size: int = 94
    available_sizes: list[int] = field(default_factory=lambda: [60, 94, 150, 300])

    # Alias persistence; None keeps aliases in memory only
    redis_url: str | None = None
    aliases_document_id: str = DEFAULT_DOCUMENT_ID

    # Outbound HTTP
    http_timeout: float = 30.0

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ServerConfig:
        """Build a config from environment variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        config = cls()

        config.host = env.get("HOST", config.host)
        if env.get("PORT"):
            config.port = int(env["PORT"])

        config.slack_token = env.get("SLACK_TOKEN", config.slack_token)
        config.webhook_url = env.get("WEBHOOK_URL", config.webhook_url)

        config.foursquare_token = env.get("FOURSQUARE_TOKEN", config.foursquare_token)
        config.source_url = env.get("STICKER_SOURCE_URL", config.source_url)
        config.refresh_schedule = env.get("STICKER_REFRESH_INTERVAL", config.refresh_schedule)
        config.timezone = env.get("STICKER_TIMEZONE", config.timezone)

        if env.get("DEFAULT_SIZE"):
            config.default_size = int(env["DEFAULT_SIZE"])
        if env.get("STICKER_SIZES"):
            config.available_sizes = _int_list(env["STICKER_SIZES"])

        config.redis_url = env.get("REDIS_URL") or None
        config.aliases_document_id = env.get("ALIASES_DOCUMENT_ID", config.aliases_document_id)

        if env.get("HTTP_TIMEOUT"):
            config.http_timeout = float(env["HTTP_TIMEOUT"])
        return config
