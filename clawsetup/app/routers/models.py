# -*- coding: utf-8 -*-
"""API route that lists a provider's models for the wizard."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse

from ...schemas import ModelsRequest, ModelsResponse, dump_wire
from ..upstream import UpstreamError, fetch_models

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/models", tags=["models"])


@router.post(
    "",
    response_model=ModelsResponse,
    summary="List a provider's models",
    description="Query the provider's model listing API with the given key.",
)
async def list_models(
    body: ModelsRequest = Body(..., description="Provider and API key"),
) -> JSONResponse:
    provider = body.provider.strip()
    api_key = body.api_key.strip()
    if not provider or not api_key:
        return JSONResponse(
            status_code=400,
            content=dump_wire(
                ModelsResponse(message="provider and apiKey required"),
            ),
        )

    try:
        models, message = await fetch_models(provider, api_key)
    except UpstreamError as exc:
        logger.warning("Listing models for %s failed: %s", provider, exc)
        return JSONResponse(
            status_code=400,
            content=dump_wire(ModelsResponse(message=str(exc))),
        )

    return JSONResponse(
        status_code=200,
        content=dump_wire(ModelsResponse(models=models, message=message)),
    )
