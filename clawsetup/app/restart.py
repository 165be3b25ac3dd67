# -*- coding: utf-8 -*-
"""Restart the docker-compose service after a config change."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import List

from ..errors import RestartError

logger = logging.getLogger(__name__)

# uid:gid the gateway container runs as
DATA_OWNER = "1000:1000"


def _run(cmd: List[str], cwd: str) -> None:
    logger.info("Running %s in %s", " ".join(cmd), cwd)
    try:
        subprocess.run(
            cmd,
            cwd=cwd,
            check=True,
            capture_output=True,
            text=True,
        )
    except subprocess.CalledProcessError as exc:
        detail = (exc.stderr or "").strip() or str(exc)
        raise RestartError(f"{' '.join(cmd)}: {detail}") from exc
    except OSError as exc:
        raise RestartError(f"{' '.join(cmd)}: {exc}") from exc


def chown_data_dir(compose_dir: str) -> None:
    """Hand ``<compose>/data`` to the container user."""
    data_dir = Path(compose_dir) / "data"
    _run(["chown", "-R", DATA_OWNER, str(data_dir)], cwd=compose_dir)


def restart_service(compose_dir: str) -> bool:
    """Recreate the compose stack in *compose_dir*.

    Returns False without doing anything when no compose dir is configured,
    True after a successful ``down`` + ``up -d``. Raises RestartError on
    the first failing step.
    """
    if not compose_dir.strip():
        return False

    chown_data_dir(compose_dir)
    _run(["docker", "compose", "down"], cwd=compose_dir)
    _run(["docker", "compose", "up", "-d"], cwd=compose_dir)
    logger.info("Compose service in %s restarted", compose_dir)
    return True
