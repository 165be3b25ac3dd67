# -*- coding: utf-8 -*-
from __future__ import annotations

import httpx

from ..constant import DEFAULT_API_URL

DEFAULT_BASE_URL = DEFAULT_API_URL


def async_client(base_url: str) -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url=base_url.rstrip("/"), timeout=60.0)
