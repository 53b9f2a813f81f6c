"""Pydantic response models for the REST API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    version: str
    uptime_seconds: float


class RefreshStatus(BaseModel):
    state: str
    refresh_count: int
    failure_count: int
    last_refresh: datetime | None = None
    last_error: str | None = None


class StatusResponse(BaseModel):
    status: str
    version: str
    uptime_seconds: float
    catalog_size: int
    catalog_version: int
    alias_count: int
    aliases_persistent: bool
    refresh: RefreshStatus
