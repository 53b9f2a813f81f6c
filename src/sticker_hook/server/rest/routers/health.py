"""Health and status endpoints."""

from __future__ import annotations

import time

from fastapi import APIRouter, Depends, Request

from sticker_hook import __version__
from sticker_hook.aliases.table import AliasTable
from sticker_hook.catalog.refresh import CatalogRefresher
from sticker_hook.catalog.store import CatalogStore
from sticker_hook.server.dependencies import get_aliases, get_catalog, get_refresher
from sticker_hook.server.schemas import HealthResponse, RefreshStatus, StatusResponse

router = APIRouter()


@router.get("/health")
async def health(request: Request) -> HealthResponse:
    elapsed = time.monotonic() - request.app.state.start_time
    return HealthResponse(
        status="ok",
        version=__version__,
        uptime_seconds=round(elapsed, 1),
    )


@router.get("/status")
async def status(
    request: Request,
    catalog: CatalogStore = Depends(get_catalog),
    aliases: AliasTable = Depends(get_aliases),
    refresher: CatalogRefresher = Depends(get_refresher),
) -> StatusResponse:
    elapsed = time.monotonic() - request.app.state.start_time
    return StatusResponse(
        status="ok",
        version=__version__,
        uptime_seconds=round(elapsed, 1),
        catalog_size=catalog.size,
        catalog_version=catalog.version,
        alias_count=aliases.size,
        aliases_persistent=aliases.persistent,
        refresh=RefreshStatus(
            state=refresher.state.value,
            refresh_count=refresher.refresh_count,
            failure_count=refresher.failure_count,
            last_refresh=refresher.last_refresh,
            last_error=refresher.last_error,
        ),
    )
