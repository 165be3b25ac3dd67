# -*- coding: utf-8 -*-
from .config import OpenClawConfig, ServerConfig
from .writer import write_config_and_env, write_config_only

__all__ = [
    "OpenClawConfig",
    "ServerConfig",
    "write_config_and_env",
    "write_config_only",
]
