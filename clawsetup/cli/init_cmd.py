# -*- coding: utf-8 -*-
"""Headless initialisation from the compose directory's .env."""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import click
from dotenv import dotenv_values

from ..config import write_config_only
from ..constant import (
    COMPOSE_DIR,
    CONFIG_FILE,
    ENV_FILE,
    GATEWAY_TOKEN_ENV,
    LEGACY_GATEWAY_TOKEN_ENV,
)
from ..errors import ConfigWriteError, InitError
from ..providers import get_provider
from ..tokens import generate_token

logger = logging.getLogger(__name__)

# Self-hosted, keyless.
OLLAMA_PROVIDER_ID = "ollama"


def normalize_env_value(value: Optional[str]) -> str:
    """Strip whitespace and one layer of surrounding quotes."""
    trimmed = (value or "").strip()
    trimmed = trimmed.strip('"').strip("'")
    return trimmed.strip()


def resolve_provider_env_key(provider_id: str) -> str:
    """Return the credential variable for *provider_id* ("" for ollama)."""
    if provider_id == OLLAMA_PROVIDER_ID:
        return ""
    option = get_provider(provider_id)
    if option is None or not option.env_key:
        raise InitError(f"unsupported PROVIDER: {provider_id}")
    return option.env_key


def write_compose_token(path: Path, token: str) -> None:
    """Set the gateway token in the compose .env, keeping other lines.

    Existing token lines (current or legacy name) are rewritten in place;
    otherwise the token is appended.
    """
    if not token.strip():
        raise InitError("generated token is empty")
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise InitError(f"read .env: {exc}") from exc

    lines = content.split("\n")
    updated = False
    for i, line in enumerate(lines):
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("#") or "=" not in trimmed:
            continue
        key = trimmed.split("=", 1)[0].strip()
        if key in (GATEWAY_TOKEN_ENV, LEGACY_GATEWAY_TOKEN_ENV):
            lines[i] = f"{GATEWAY_TOKEN_ENV}={token}"
            updated = True
    if not updated:
        lines.append(f"{GATEWAY_TOKEN_ENV}={token}")

    os.chmod(path, 0o600)
    path.write_text("\n".join(lines), encoding="utf-8")


def run_init(compose_dir: Optional[str] = None) -> Path:
    """Generate openclaw.json from ``<compose>/.env``.

    Returns the path of the written config file.
    """
    if compose_dir and compose_dir.strip():
        root = Path(compose_dir.strip())
    else:
        root = Path(os.getcwd())
    env_path = root / ENV_FILE
    if not env_path.is_file():
        raise InitError(f"read .env: {env_path} not found")

    env = dotenv_values(env_path)
    provider = normalize_env_value(env.get("PROVIDER")).lower()
    api_key = normalize_env_value(env.get("API_KEY"))
    model = normalize_env_value(env.get("MODEL"))
    base_url = normalize_env_value(env.get("BASE_URL"))

    if not provider or not model:
        raise InitError(".env must include PROVIDER and MODEL")
    if provider != OLLAMA_PROVIDER_ID and not api_key:
        raise InitError(f".env must include API_KEY for provider {provider}")
    if provider == OLLAMA_PROVIDER_ID and not base_url:
        raise InitError(".env must include BASE_URL for provider ollama")

    env_key = resolve_provider_env_key(provider)
    token = generate_token()
    config_dir = root / "data" / "conf"
    try:
        write_config_only(
            config_dir,
            model,
            token,
            provider_id=provider,
            provider_env_key=env_key,
            provider_api_key=api_key,
            base_url=base_url,
            write_env=True,
        )
    except ConfigWriteError as exc:
        raise InitError(str(exc)) from exc

    write_compose_token(env_path, token)
    logger.info("Initialised %s for provider %s", config_dir, provider)
    return config_dir / CONFIG_FILE


@click.command("init")
@click.option(
    "--compose-dir",
    default=COMPOSE_DIR or None,
    help="Compose directory holding .env (default: OPENCLAW_COMPOSE_DIR "
    "or the current directory)",
)
def init_cmd(compose_dir: Optional[str]) -> None:
    """Generate openclaw.json from PROVIDER / API_KEY / MODEL in .env."""
    try:
        path = run_init(compose_dir)
    except InitError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"✓ {path.name} generated: {path}")
