# -*- coding: utf-8 -*-
"""Client for ``POST /api/models``."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Tuple

import httpx

from ..schemas import ModelsRequest, dump_wire

logger = logging.getLogger(__name__)

MSG_API_KEY_REQUIRED = "请先填写 API Key"
MSG_DISCOVERY_FAILED = "获取模型失败"
MSG_NO_MODELS = "未返回模型列表，可手动填写"
MSG_NETWORK_FAILED = "获取模型失败，请检查网络或代理"


@dataclass(frozen=True)
class ModelListResult:
    """Outcome of one discovery call.

    ``models`` is ``None`` when no usable response arrived; the caller keeps
    its current list in that case.
    """

    models: Optional[Tuple[str, ...]]
    message: Optional[str]


def _parse_models(data: Any) -> Tuple[str, ...]:
    raw = data.get("models") if isinstance(data, dict) else None
    if not isinstance(raw, list):
        return ()
    return tuple(item for item in raw if isinstance(item, str))


def _server_message(data: Any) -> Optional[str]:
    if isinstance(data, dict):
        message = data.get("message")
        if isinstance(message, str) and message:
            return message
    return None


class ModelDiscoveryClient:
    """Ask the setup server which models a provider/key pair can use."""

    def __init__(self, http: httpx.AsyncClient, path: str = "/api/models"):
        self._http = http
        self._path = path

    async def discover(self, provider_id: str, api_key: str) -> ModelListResult:
        body = dump_wire(ModelsRequest(provider=provider_id, api_key=api_key))
        try:
            resp = await self._http.post(self._path, json=body)
            data = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Model discovery for %s failed: %s", provider_id, exc)
            return ModelListResult(models=None, message=MSG_NETWORK_FAILED)

        if not resp.is_success:
            logger.info(
                "Model discovery for %s rejected (HTTP %s)",
                provider_id,
                resp.status_code,
            )
            return ModelListResult(
                models=(),
                message=_server_message(data) or MSG_DISCOVERY_FAILED,
            )

        models = _parse_models(data)
        if not models:
            return ModelListResult(
                models=(),
                message=_server_message(data) or MSG_NO_MODELS,
            )
        logger.debug("Discovered %d models for %s", len(models), provider_id)
        return ModelListResult(models=models, message=None)
