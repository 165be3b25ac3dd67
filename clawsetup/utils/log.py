# -*- coding: utf-8 -*-
"""Root logger setup shared by the CLI and the server."""

from __future__ import annotations

import logging
import os

from ..constant import LOG_LEVEL_ENV

_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logger(level: str | int | None = None) -> None:
    """Attach one stream handler to the root logger.

    *level* falls back to ``CLAWSETUP_LOG_LEVEL`` and then INFO. Existing
    handlers are replaced so repeated calls (e.g. uvicorn reload) do not
    duplicate output.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
    root_logger.setLevel(level)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FORMAT))
    root_logger.addHandler(handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
