# -*- coding: utf-8 -*-
"""Fetch model lists directly from provider APIs."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

import httpx

from ..constant import MODELS_FETCH_TIMEOUT

logger = logging.getLogger(__name__)

MSG_MANUAL_ONLY = "该提供商暂不支持自动拉取模型，请手动填写"

ANTHROPIC_VERSION = "2023-06-01"
GEMINI_MODELS_URL = "https://generativelanguage.googleapis.com/v1beta/models"


class UpstreamError(Exception):
    """The provider rejected the request or returned garbage."""


@dataclass(frozen=True)
class ModelSource:
    """How to list models for one provider."""

    url: str
    headers: Callable[[str], Dict[str, str]]
    params: Callable[[str], Dict[str, str]] = lambda _key: {}
    list_field: str = "data"
    id_field: str = "id"
    strip_prefix: str = ""


def _bearer(api_key: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {api_key}"}


def _openai_compatible(url: str) -> ModelSource:
    return ModelSource(url=url, headers=_bearer)


MODEL_SOURCES: Dict[str, ModelSource] = {
    "openai": _openai_compatible("https://api.openai.com/v1/models"),
    "groq": _openai_compatible("https://api.groq.com/openai/v1/models"),
    "mistral": _openai_compatible("https://api.mistral.ai/v1/models"),
    "moonshot": _openai_compatible("https://api.moonshot.cn/v1/models"),
    "deepseek": _openai_compatible("https://api.deepseek.com/v1/models"),
    "qwen": _openai_compatible(
        "https://dashscope.aliyuncs.com/compatible-mode/v1/models",
    ),
    "anthropic": ModelSource(
        url="https://api.anthropic.com/v1/models",
        headers=lambda key: {
            "x-api-key": key,
            "anthropic-version": ANTHROPIC_VERSION,
        },
    ),
    "gemini": ModelSource(
        url=GEMINI_MODELS_URL,
        headers=lambda _key: {},
        params=lambda key: {"key": key},
        list_field="models",
        id_field="name",
        strip_prefix="models/",
    ),
}

# Known providers whose model list must be typed by hand.
MANUAL_ONLY = frozenset({"cohere", "minimax", "zai", "custom"})


def _extract_ids(payload: object, source: ModelSource) -> List[str]:
    if not isinstance(payload, dict):
        raise UpstreamError("unexpected response format")
    items = payload.get(source.list_field) or []
    if not isinstance(items, list):
        raise UpstreamError("unexpected response format")

    models: List[str] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        name = str(item.get(source.id_field) or "").strip()
        if source.strip_prefix and name.startswith(source.strip_prefix):
            name = name[len(source.strip_prefix):]
        if name:
            models.append(name)
    return models


async def fetch_models(
    provider: str,
    api_key: str,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> Tuple[List[str], Optional[str]]:
    """Return ``(models, message)`` for *provider*.

    Providers without a listing API yield an empty list and an explanatory
    message. Raises UpstreamError for unknown providers, provider-side
    errors and transport failures.
    """
    provider = provider.strip().lower()
    if provider in MANUAL_ONLY:
        return [], MSG_MANUAL_ONLY
    source = MODEL_SOURCES.get(provider)
    if source is None:
        raise UpstreamError("unknown provider")

    owns_client = client is None
    if client is None:
        client = httpx.AsyncClient(timeout=MODELS_FETCH_TIMEOUT)
    try:
        resp = await client.get(
            source.url,
            headers=source.headers(api_key),
            params=source.params(api_key),
        )
        if resp.status_code >= 400:
            raise UpstreamError(f"provider error: {resp.text.strip()}")
        try:
            payload = resp.json()
        except ValueError as exc:
            raise UpstreamError(str(exc)) from exc
    except httpx.HTTPError as exc:
        raise UpstreamError(str(exc)) from exc
    finally:
        if owns_client:
            await client.aclose()

    models = _extract_ids(payload, source)
    logger.debug("Provider %s listed %d models", provider, len(models))
    return models, None
