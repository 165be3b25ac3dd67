# -*- coding: utf-8 -*-
"""Writing openclaw.json and its companion .env."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Iterable, Optional

from ..constant import CONFIG_FILE, ENV_FILE, GATEWAY_PORT, GATEWAY_TOKEN_ENV
from ..errors import ConfigWriteError
from ..schemas import ProviderKey
from .config import (
    AgentDefaults,
    AgentsConfig,
    GatewayAuth,
    GatewayConfig,
    ModelEntry,
    ModelRef,
    ModelsConfig,
    ModelProvider,
    OpenClawConfig,
)

logger = logging.getLogger(__name__)

_FILE_MODE = 0o600

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _require(value: Optional[str], what: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ConfigWriteError(f"{what} is required")
    return value


def _build_config(model: str, gateway_token: str) -> OpenClawConfig:
    return OpenClawConfig(
        gateway=GatewayConfig(
            port=GATEWAY_PORT,
            auth=GatewayAuth(token=gateway_token),
        ),
        agents=AgentsConfig(
            defaults=AgentDefaults(model=ModelRef(primary=model)),
        ),
    )


def _provider_models(
    provider_id: str,
    base_url: str,
) -> Optional[ModelsConfig]:
    """Return the extra ``models`` block some providers need."""
    if provider_id == "deepseek":
        return ModelsConfig(
            providers={
                "deepseek": ModelProvider(
                    api_key="${DEEPSEEK_API_KEY}",
                    base_url="https://api.deepseek.com/v1",
                    api="openai-completions",
                    models=[
                        ModelEntry(
                            id="deepseek-chat",
                            name="DeepSeek Chat",
                            context_window=128000,
                            max_tokens=8192,
                        ),
                    ],
                ),
            },
        )
    if provider_id == "ollama" and base_url:
        return ModelsConfig(
            providers={
                "ollama": ModelProvider(
                    base_url=base_url,
                    api="openai-completions",
                ),
            },
        )
    return None


def _write_private(path: Path, content: str) -> None:
    """Write *content* to *path* readable by the owner only."""
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, _FILE_MODE)
    with os.fdopen(fd, "w", encoding="utf-8") as fh:
        fh.write(content)
    # an existing file keeps its old mode through O_CREAT
    os.chmod(path, _FILE_MODE)


def _write_json(path: Path, cfg: OpenClawConfig) -> None:
    payload = cfg.model_dump(mode="json", by_alias=True, exclude_none=True)
    try:
        _write_private(
            path,
            json.dumps(payload, indent=2, ensure_ascii=False),
        )
    except OSError as exc:
        raise ConfigWriteError(f"write config: {exc}") from exc


def _write_env(path: Path, lines: list[str]) -> None:
    try:
        _write_private(path, "\n".join(lines) + "\n")
    except OSError as exc:
        raise ConfigWriteError(f"write env: {exc}") from exc


def _ensure_dir(config_dir: Path) -> None:
    try:
        config_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ConfigWriteError(f"create config dir: {exc}") from exc


# ---------------------------------------------------------------------------
# Writers
# ---------------------------------------------------------------------------


def write_config_and_env(
    config_dir: Path | str | None,
    model: str,
    gateway_token: str,
    providers: Iterable[ProviderKey] = (),
) -> None:
    """Write openclaw.json and .env under *config_dir*.

    .env gets the gateway token plus one line per provider entry whose key
    and value are both non-blank.
    """
    config_dir = Path(_require(str(config_dir or ""), "config dir"))
    model = _require(model, "model")
    gateway_token = _require(gateway_token, "gateway token")

    _ensure_dir(config_dir)
    _write_json(config_dir / CONFIG_FILE, _build_config(model, gateway_token))

    env_lines = [f"{GATEWAY_TOKEN_ENV}={gateway_token}"]
    for provider in providers:
        key = provider.key.strip()
        value = provider.value.strip()
        if not key or not value:
            continue
        env_lines.append(f"{key}={value}")
    _write_env(config_dir / ENV_FILE, env_lines)

    logger.info(
        "Wrote %s (model=%s, %d credential(s))",
        config_dir / CONFIG_FILE,
        model,
        len(env_lines) - 1,
    )


def write_config_only(
    config_dir: Path | str | None,
    model: str,
    gateway_token: str,
    *,
    provider_id: str = "",
    provider_env_key: str = "",
    provider_api_key: str = "",
    base_url: str = "",
    write_env: bool = False,
) -> None:
    """Write openclaw.json for a single provider, optionally with .env.

    Used by headless ``init``; adds the provider-specific ``models`` block
    where one is needed.
    """
    config_dir = Path(_require(str(config_dir or ""), "config dir"))
    model = _require(model, "model")
    gateway_token = _require(gateway_token, "gateway token")

    _ensure_dir(config_dir)

    cfg = _build_config(model, gateway_token)
    cfg.models = _provider_models(
        provider_id.strip().lower(),
        base_url.strip(),
    )
    _write_json(config_dir / CONFIG_FILE, cfg)

    if write_env:
        lines = [f"{GATEWAY_TOKEN_ENV}={gateway_token}"]
        if provider_env_key.strip() and provider_api_key.strip():
            lines.append(f"{provider_env_key}={provider_api_key}")
        _write_env(config_dir / ENV_FILE, lines)

    logger.info("Wrote %s (provider=%s)", config_dir / CONFIG_FILE, provider_id)
