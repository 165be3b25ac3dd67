# -*- coding: utf-8 -*-
"""FastAPI application for the setup server."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..config import ServerConfig
from ..schemas import ModelsResponse, SaveResponse, dump_wire
from .routers import router as api_router

logger = logging.getLogger(__name__)

MODELS_PATH = "/api/models"


def _error_reply(path: str, status_code: int, message: str) -> JSONResponse:
    """Error body in the shape of the route that was hit."""
    if path == MODELS_PATH:
        body = ModelsResponse(message=message)
    else:
        body = SaveResponse(ok=False, message=message)
    return JSONResponse(status_code=status_code, content=dump_wire(body))


async def _invalid_body(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    logger.debug("Rejected body for %s: %s", request.url.path, exc.errors())
    return _error_reply(request.url.path, 400, "invalid json")


async def _http_error(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    if exc.status_code == 405:
        return _error_reply(request.url.path, 405, "method not allowed")
    return await http_exception_handler(request, exc)


def _mount_spa(app: FastAPI, static_dir: Path) -> None:
    """Serve the built web UI, falling back to index.html for client routes."""
    root = static_dir.resolve()
    index = root / "index.html"
    api_paths = {route.path for route in api_router.routes}

    @app.get("/{path:path}", include_in_schema=False)
    async def spa(path: str) -> FileResponse:
        if "/" + path in api_paths:
            raise HTTPException(status_code=405)
        candidate = (root / path).resolve()
        if candidate.is_file() and candidate.is_relative_to(root):
            return FileResponse(candidate)
        return FileResponse(index)


def create_app(server_config: Optional[ServerConfig] = None) -> FastAPI:
    if server_config is None:
        server_config = ServerConfig.from_env()

    app = FastAPI(title="OpenClaw setup", docs_url=None, redoc_url=None)
    app.state.server_config = server_config
    app.add_exception_handler(RequestValidationError, _invalid_body)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.include_router(api_router)

    if server_config.static_dir:
        static_dir = Path(server_config.static_dir)
        if (static_dir / "index.html").is_file():
            _mount_spa(app, static_dir)
            logger.info("Serving web UI from %s", static_dir)
        else:
            logger.debug("No web UI at %s, serving API only", static_dir)

    return app
