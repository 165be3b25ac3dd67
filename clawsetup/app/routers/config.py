# -*- coding: utf-8 -*-
"""API route that persists the wizard's configuration."""

from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from ...config import ServerConfig, write_config_and_env
from ...errors import ConfigWriteError, RestartError
from ...schemas import SaveRequest, SaveResponse, dump_wire
from ...tokens import generate_token
from ..restart import restart_service
from .deps import get_server_config

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/config", tags=["config"])

MSG_SAVED = "配置已保存"
MSG_SAVED_RESTART_FAILED = "配置已保存，但重启失败"


def _reply(status_code: int, body: SaveResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=dump_wire(body))


@router.post(
    "",
    response_model=SaveResponse,
    summary="Save configuration and restart",
    description="Write openclaw.json and .env, then recreate the compose "
    "service when a compose dir is configured.",
)
async def save_config(
    body: SaveRequest = Body(..., description="Configuration to persist"),
    server: ServerConfig = Depends(get_server_config),
) -> JSONResponse:
    model = body.model.strip()
    if not model:
        return _reply(400, SaveResponse(ok=False, message="model is required"))

    token = body.gateway_token.strip() or generate_token()

    try:
        write_config_and_env(
            server.config_dir,
            model,
            token,
            body.providers,
        )
    except ConfigWriteError as exc:
        logger.error("Writing configuration failed: %s", exc)
        return _reply(500, SaveResponse(ok=False, message=str(exc)))

    try:
        restarted = await asyncio.to_thread(restart_service, server.compose_dir)
    except RestartError as exc:
        logger.error("Restart after save failed: %s", exc)
        return _reply(
            200,
            SaveResponse(
                ok=False,
                restarted=False,
                message=MSG_SAVED_RESTART_FAILED,
                restart_error=str(exc),
            ),
        )

    return _reply(200, SaveResponse(ok=True, restarted=restarted, message=MSG_SAVED))
