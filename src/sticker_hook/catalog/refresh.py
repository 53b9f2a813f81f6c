"""Catalog refresh: single-flight reload plus the cron-driven scheduler."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from sticker_hook.catalog.store import CatalogStore
from sticker_hook.core.exceptions import CatalogSchemaError, UpstreamError
from sticker_hook.core.protocols import CatalogSource
from sticker_hook.core.types import CatalogEntry
from sticker_hook.core.utils import utc_now

logger = logging.getLogger(__name__)


class RefreshState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"


@dataclass
class RefreshResult:
    """Outcome of one refresh trigger."""

    status: str  # "ok", "failed" or "skipped"
    entries: int = 0
    error: str | None = None
    duration_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return self.status == "ok"


class CatalogRefresher:
    """Reloads the catalog store from a source: fetch → parse → filter → swap.

    At most one fetch is in flight. A trigger that arrives while a fetch is
    running is dropped, not queued. A failed fetch leaves the previous
    snapshot in place.
    """

    def __init__(self, source: CatalogSource, store: CatalogStore) -> None:
        self._source = source
        self._store = store
        self._lock = asyncio.Lock()
        self._refresh_count = 0
        self._failure_count = 0
        self._last_refresh: datetime | None = None
        self._last_error: str | None = None

    @property
    def state(self) -> RefreshState:
        return RefreshState.FETCHING if self._lock.locked() else RefreshState.IDLE

    @property
    def refresh_count(self) -> int:
        return self._refresh_count

    @property
    def failure_count(self) -> int:
        return self._failure_count

    @property
    def last_refresh(self) -> datetime | None:
        """Time of the last successful refresh."""
        return self._last_refresh

    @property
    def last_error(self) -> str | None:
        return self._last_error

    async def refresh(self) -> RefreshResult:
        if self._lock.locked():
            logger.info("Sticker refresh already in progress, skipping trigger")
            return RefreshResult(status="skipped")

        async with self._lock:
            logger.info("Loading stickers")
            started = time.monotonic()
            try:
                records = await self._source.fetch()
            except (UpstreamError, CatalogSchemaError) as exc:
                self._failure_count += 1
                self._last_error = str(exc)
                logger.warning("%s", exc)
                return RefreshResult(
                    status="failed",
                    error=str(exc),
                    duration_ms=(time.monotonic() - started) * 1000,
                )

            entries = [
                entry
                for entry in (CatalogEntry.from_record(record) for record in records)
                if entry.is_valid()
            ]
            self._store.replace(entries)

            self._refresh_count += 1
            self._last_refresh = utc_now()
            self._last_error = None
            elapsed = (time.monotonic() - started) * 1000
            logger.info(
                "Got %d stickers! (%d records, %.1fms)", len(entries), len(records), elapsed
            )
            return RefreshResult(status="ok", entries=len(entries), duration_ms=elapsed)


def build_trigger(expression: str, timezone: str = "UTC") -> CronTrigger:
    """Build a cron trigger from a 5-field crontab or a 6-field expression.

    The 6-field form carries a leading seconds field
    (``"0 */30 * * * *"``), as used by node-style cron schedules.
    """
    fields = expression.split()
    if len(fields) == 5:
        return CronTrigger.from_crontab(expression, timezone=timezone)
    if len(fields) == 6:
        second, minute, hour, day, month, day_of_week = fields
        return CronTrigger(
            second=second,
            minute=minute,
            hour=hour,
            day=day,
            month=month,
            day_of_week=day_of_week,
            timezone=timezone,
        )
    raise ValueError(
        f"Invalid refresh schedule {expression!r}: expected 5 or 6 cron fields, got {len(fields)}"
    )


class RefreshScheduler:
    """Runs one refresh at startup, then on a recurring cron schedule."""

    JOB_ID = "refresh_stickers"

    def __init__(
        self,
        refresher: CatalogRefresher,
        schedule: str,
        timezone: str = "UTC",
        scheduler: AsyncIOScheduler | None = None,
    ) -> None:
        self._refresher = refresher
        self._trigger = build_trigger(schedule, timezone=timezone)
        self._scheduler = scheduler or AsyncIOScheduler(
            timezone=timezone,
            job_defaults={
                "coalesce": True,
                "max_instances": 1,
                "misfire_grace_time": 60,
            },
        )
        self._initial: asyncio.Task[RefreshResult | None] | None = None
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    @property
    def initial_refresh(self) -> asyncio.Task[RefreshResult | None] | None:
        """The startup refresh task, for callers that want to await it."""
        return self._initial

    async def start(self) -> None:
        if self._running:
            return
        self._scheduler.add_job(
            self._run_job,
            trigger=self._trigger,
            id=self.JOB_ID,
            name=self.JOB_ID,
            replace_existing=True,
        )
        self._scheduler.start()
        self._running = True
        self._initial = asyncio.create_task(self._run_job())
        logger.info("Sticker refresh scheduled (%s)", self._trigger)

    async def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        self._scheduler.shutdown(wait=False)
        if self._initial and not self._initial.done():
            self._initial.cancel()
            try:
                await self._initial
            except asyncio.CancelledError:
                pass
        self._initial = None

    async def _run_job(self) -> RefreshResult | None:
        try:
            return await self._refresher.refresh()
        except Exception:
            logger.exception("Sticker refresh failed")
            return None
