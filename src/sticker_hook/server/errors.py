"""Error types and exception-to-HTTP mapping for the server."""

from __future__ import annotations

from fastapi import Request
from fastapi.responses import PlainTextResponse


class InvalidTokenError(Exception):
    """A slash command arrived without the shared secret."""


class ServiceNotReadyError(Exception):
    """A request arrived before the app finished wiring its components."""

    def __init__(self, component: str) -> None:
        self.component = component
        super().__init__(f"{component} not initialized")


async def invalid_token_handler(request: Request, exc: InvalidTokenError) -> PlainTextResponse:
    return PlainTextResponse("Forbidden", status_code=403)


async def service_not_ready_handler(request: Request, exc: ServiceNotReadyError) -> PlainTextResponse:
    return PlainTextResponse(f"Service unavailable: {exc}", status_code=503)


EXCEPTION_HANDLERS = {
    InvalidTokenError: invalid_token_handler,
    ServiceNotReadyError: service_not_ready_handler,
}
