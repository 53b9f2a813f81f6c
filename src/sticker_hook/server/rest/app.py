"""FastAPI application factory."""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from sticker_hook import __version__
from sticker_hook.aliases.store import RedisAliasStore
from sticker_hook.aliases.table import AliasTable
from sticker_hook.catalog.refresh import CatalogRefresher, RefreshScheduler
from sticker_hook.catalog.source import FoursquareCatalogSource
from sticker_hook.catalog.store import CatalogStore
from sticker_hook.core.protocols import AliasDocumentStore, CatalogSource
from sticker_hook.delivery.slack import SlackWebhookClient
from sticker_hook.resolution.resolver import StickerResolver
from sticker_hook.server.commands import CommandDispatcher
from sticker_hook.server.config import ServerConfig
from sticker_hook.server.errors import EXCEPTION_HANDLERS
from sticker_hook.server.rest.middleware import RequestLoggingMiddleware
from sticker_hook.server.rest.routers import health, sticker

logger = logging.getLogger(__name__)


def create_app(
    config: ServerConfig,
    *,
    catalog_source: CatalogSource | None = None,
    alias_store: AliasDocumentStore | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    ``catalog_source``, ``alias_store`` and ``http_client`` replace the
    components built from ``config``; tests use them to avoid the network.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # Startup
        app.state.config = config
        app.state.start_time = time.monotonic()

        client = http_client or httpx.AsyncClient(timeout=config.http_timeout)

        # Aliases
        store = alias_store
        if store is None and config.redis_url:
            store = RedisAliasStore.from_url(
                config.redis_url, document_id=config.aliases_document_id
            )
        aliases = AliasTable(store=store)
        await aliases.load()
        app.state.aliases = aliases

        # Catalog
        catalog = CatalogStore()
        source = catalog_source or FoursquareCatalogSource(
            token=config.foursquare_token,
            url=config.source_url,
            client=client,
        )
        refresher = CatalogRefresher(source, catalog)
        app.state.catalog = catalog
        app.state.refresher = refresher

        scheduler: RefreshScheduler | None = None
        if config.refresh_enabled:
            scheduler = RefreshScheduler(
                refresher, config.refresh_schedule, timezone=config.timezone
            )
            await scheduler.start()
        app.state.scheduler = scheduler

        delivery = SlackWebhookClient(config.webhook_url, client=client)
        app.state.dispatcher = CommandDispatcher(
            catalog=catalog,
            aliases=aliases,
            resolver=StickerResolver(catalog, aliases),
            delivery=delivery,
            default_size=config.default_size,
            available_sizes=config.available_sizes,
        )

        logger.info(
            "Sticker hook started (refresh=%s, aliases persisted=%s)",
            config.refresh_schedule if scheduler else "off",
            aliases.persistent,
        )
        yield

        # Shutdown
        if scheduler is not None:
            await scheduler.stop()
            logger.info("Sticker refresh scheduler stopped")

        await aliases.flush()
        if store is not None and alias_store is None:
            await store.close()

        if http_client is None:
            await client.aclose()
        logger.info("Sticker hook stopped")

    app = FastAPI(
        title="Sticker Hook",
        description="Slack slash command that posts Swarm stickers",
        version=__version__,
        lifespan=lifespan,
    )

    # Request logging
    app.add_middleware(RequestLoggingMiddleware)

    # Exception handlers
    for exc_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exc_class, handler)

    # Routers
    app.include_router(sticker.router, tags=["sticker"])
    app.include_router(health.router, prefix="/api/v1", tags=["health"])

    return app
