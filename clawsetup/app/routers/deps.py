# -*- coding: utf-8 -*-
from fastapi import Request

from ...config import ServerConfig


def get_server_config(request: Request) -> ServerConfig:
    return request.app.state.server_config
