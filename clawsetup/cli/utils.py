# -*- coding: utf-8 -*-
"""Interactive prompt helpers shared by CLI commands."""
from __future__ import annotations

from typing import Optional, Sequence

import click


def prompt_choice(
    prompt_text: str,
    options: Sequence[str],
    default: Optional[str] = None,
) -> str:
    """Show a numbered list and return the chosen option.

    Accepts either the number or the exact option text.
    """
    if not options:
        raise click.ClickException("nothing to choose from")

    click.echo(prompt_text)
    for idx, label in enumerate(options, start=1):
        marker = "*" if label == default else " "
        click.echo(f" {marker}{idx:>2}. {label}")

    default_idx = options.index(default) + 1 if default in options else None
    while True:
        raw = click.prompt(
            "Choice",
            default=str(default_idx) if default_idx else None,
            show_default=default_idx is not None,
        ).strip()
        if raw in options:
            return raw
        if raw.isdigit() and 1 <= int(raw) <= len(options):
            return options[int(raw) - 1]
        click.echo(click.style(f"Invalid choice: {raw}", fg="red"))
