# -*- coding: utf-8 -*-
"""Entry point: ``clawsetup`` command group."""
from __future__ import annotations

import logging
import os
from typing import Optional

import click

from .. import __version__
from ..constant import LISTEN_ADDR, LOG_LEVEL_ENV
from ..tokens import generate_token
from ..utils.log import setup_logger
from .init_cmd import init_cmd
from .wizard_cmd import providers_cmd, wizard_cmd

logger = logging.getLogger(__name__)


def _split_addr(addr: str) -> tuple[str, int]:
    host, sep, port = addr.rpartition(":")
    if not sep or not port.isdigit():
        raise click.BadParameter(f"expected HOST:PORT, got {addr!r}")
    return host or "0.0.0.0", int(port)


@click.group()
@click.version_option(__version__, prog_name="clawsetup")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(
        ["debug", "info", "warning", "error"],
        case_sensitive=False,
    ),
    help=f"Log level (default: ${LOG_LEVEL_ENV} or info)",
)
def cli(log_level: Optional[str]) -> None:
    """Configure the OpenClaw provider, model and gateway token."""
    if log_level:
        os.environ[LOG_LEVEL_ENV] = log_level
    setup_logger(log_level)


@cli.command("serve")
@click.option(
    "--listen",
    default=LISTEN_ADDR,
    show_default=True,
    help="HOST:PORT to bind (env SETUP_LISTEN_ADDR)",
)
@click.option(
    "--compose-dir",
    envvar="OPENCLAW_COMPOSE_DIR",
    default=None,
    help="Compose directory (env OPENCLAW_COMPOSE_DIR)",
)
@click.option(
    "--static-dir",
    default=None,
    help="Built web UI to serve at / (env CLAWSETUP_STATIC_DIR)",
)
def serve_cmd(
    listen: str,
    compose_dir: Optional[str],
    static_dir: Optional[str],
) -> None:
    """Run the setup HTTP server (/api/config, /api/models)."""
    import uvicorn

    from ..app import create_app
    from ..config import ServerConfig

    server_config = ServerConfig.from_env()
    if compose_dir:
        server_config.compose_dir = compose_dir
    if static_dir:
        server_config.static_dir = static_dir
    if not server_config.compose_dir.strip():
        raise click.ClickException("OPENCLAW_COMPOSE_DIR is required")

    host, port = _split_addr(listen)
    logger.info("OpenClaw setup listening on %s:%s", host, port)
    uvicorn.run(
        create_app(server_config),
        host=host,
        port=port,
        log_config=None,
    )


@cli.command("token")
def token_cmd() -> None:
    """Print a freshly generated gateway token."""
    click.echo(generate_token())


cli.add_command(init_cmd)
cli.add_command(wizard_cmd)
cli.add_command(providers_cmd)


if __name__ == "__main__":
    cli()
