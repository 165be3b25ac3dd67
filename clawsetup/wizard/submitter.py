# -*- coding: utf-8 -*-
"""Client for ``POST /api/config``."""

from __future__ import annotations

import logging
from typing import Tuple

import httpx
from pydantic import ValidationError

from ..schemas import ProviderKey, SaveRequest, SaveResponse, dump_wire
from ..tokens import TokenGenerator
from .state import ConfigurationState

logger = logging.getLogger(__name__)

MSG_SAVE_FAILED = "保存失败，请检查服务日志"


class ConfigSubmitter:
    """Build the save payload from a wizard state and post it."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        tokens: TokenGenerator,
        path: str = "/api/config",
    ) -> None:
        self._http = http
        self._tokens = tokens
        self._path = path

    def build_payload(self, state: ConfigurationState) -> Tuple[SaveRequest, bool]:
        """Return ``(payload, token_generated)``.

        The token is the trimmed session token, or a fresh one when that is
        empty. At most one credential entry is sent, and only when both the
        env key and the API key are non-blank.
        """
        token = state.gateway_token.strip()
        generated = not token
        if generated:
            token = self._tokens.generate()

        env_key = state.provider_env_key.strip()
        api_key = state.api_key.strip()
        providers = []
        if env_key and api_key:
            providers.append(ProviderKey(key=env_key, value=api_key))

        payload = SaveRequest(
            model=state.model.strip(),
            gateway_token=token,
            providers=providers,
        )
        return payload, generated

    async def submit(self, payload: SaveRequest) -> SaveResponse:
        """Post *payload*; transport or parse failures become a failed response."""
        try:
            resp = await self._http.post(self._path, json=dump_wire(payload))
            result = SaveResponse.model_validate(resp.json())
        except (httpx.HTTPError, ValueError, ValidationError) as exc:
            logger.error("Saving configuration failed: %s", exc)
            return SaveResponse(
                ok=False,
                restarted=False,
                message=MSG_SAVE_FAILED,
                restart_error=str(exc),
            )

        logger.info(
            "Save finished: ok=%s restarted=%s",
            result.ok,
            result.restarted,
        )
        return result
