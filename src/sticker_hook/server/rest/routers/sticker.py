"""Slash-command webhook endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Form
from fastapi.responses import PlainTextResponse

from sticker_hook.server.commands import CommandDispatcher, CommandRequest
from sticker_hook.server.dependencies import check_token, get_config, get_dispatcher
from sticker_hook.server.config import ServerConfig

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
async def index() -> str:
    return "Nothing to see here."


@router.post("/sticker", response_class=PlainTextResponse)
async def sticker_command(
    token: str = Form(default=""),
    text: str = Form(default=""),
    user_name: str = Form(default=""),
    channel_id: str = Form(default=""),
    config: ServerConfig = Depends(get_config),
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
) -> str:
    """Handle ``/sticker`` from Slack. The reply is shown only to the caller."""
    check_token(token, config)
    logger.info("Got command %r from %s in %s", text, user_name, channel_id)
    return await dispatcher.handle(
        CommandRequest(text=text, user_name=user_name, channel_id=channel_id)
    )
