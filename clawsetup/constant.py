# -*- coding: utf-8 -*-
import os


def _getenv_default(key: str, fallback: str) -> str:
    value = os.environ.get(key, "")
    return value if value else fallback


LISTEN_ADDR = _getenv_default("SETUP_LISTEN_ADDR", "0.0.0.0:8188")

# Legacy MOLTBOT_* names are still honoured for older compose files.
COMPOSE_DIR = _getenv_default(
    "OPENCLAW_COMPOSE_DIR",
    os.environ.get("MOLTBOT_COMPOSE_DIR", ""),
)
CONTAINER_NAME = _getenv_default(
    "OPENCLAW_CONTAINER_NAME",
    os.environ.get("MOLTBOT_CONTAINER_NAME", ""),
)

STATIC_DIR = os.environ.get("CLAWSETUP_STATIC_DIR", "web/dist")

# Env key for log level (used by CLI and the server).
LOG_LEVEL_ENV = "CLAWSETUP_LOG_LEVEL"

# Base URL the interactive wizard talks to.
DEFAULT_API_URL = os.environ.get("CLAWSETUP_API_URL", "http://127.0.0.1:8188")

# Generated files under <compose>/data/conf
CONFIG_FILE = "openclaw.json"
ENV_FILE = ".env"

GATEWAY_TOKEN_ENV = "OPENCLAW_GATEWAY_TOKEN"
LEGACY_GATEWAY_TOKEN_ENV = "CLAWDBOT_GATEWAY_TOKEN"

GATEWAY_PORT = 18789

# Random bytes per gateway token (hex-encoded to 48 chars).
TOKEN_BYTES = 24

MODELS_FETCH_TIMEOUT = 15.0
