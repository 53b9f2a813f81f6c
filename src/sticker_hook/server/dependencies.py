"""Dependency injection: component lookup from app state and token checks."""

from __future__ import annotations

import hmac

from fastapi import Request

from sticker_hook.aliases.table import AliasTable
from sticker_hook.catalog.refresh import CatalogRefresher
from sticker_hook.catalog.store import CatalogStore
from sticker_hook.server.commands import CommandDispatcher
from sticker_hook.server.config import ServerConfig
from sticker_hook.server.errors import InvalidTokenError, ServiceNotReadyError


def _state(request: Request, name: str):
    value = getattr(request.app.state, name, None)
    if value is None:
        raise ServiceNotReadyError(name)
    return value


def get_config(request: Request) -> ServerConfig:
    return _state(request, "config")


def get_catalog(request: Request) -> CatalogStore:
    return _state(request, "catalog")


def get_aliases(request: Request) -> AliasTable:
    return _state(request, "aliases")


def get_refresher(request: Request) -> CatalogRefresher:
    return _state(request, "refresher")


def get_dispatcher(request: Request) -> CommandDispatcher:
    return _state(request, "dispatcher")


def check_token(token: str, config: ServerConfig) -> None:
    """Reject the request unless ``token`` matches the configured secret.

    An unconfigured secret rejects everything.
    """
    expected = config.slack_token
    if not expected or not hmac.compare_digest(token.encode(), expected.encode()):
        raise InvalidTokenError()
