# -*- coding: utf-8 -*-
"""Interactive setup wizard talking to the setup server (/api)."""
from __future__ import annotations

import asyncio
from typing import Optional

import click

from ..providers import list_providers, providers_by_group
from ..schemas import SaveResponse
from ..wizard import ConfigurationState, WizardSession
from .http import DEFAULT_BASE_URL, async_client
from .utils import prompt_choice

_GROUP_TITLES = {
    "mainstream": "主流提供商",
    "domestic": "国内提供商",
}

_MANUAL_ENTRY = "（手动填写）"

_TOKEN_KEEP = "保留当前 Token"
_TOKEN_REGENERATE = "重新生成"
_TOKEN_EDIT = "手动修改"


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------


def _select_provider_interactive(default_pid: str) -> str:
    labels: list[str] = []
    ids: list[str] = []
    for group, title in _GROUP_TITLES.items():
        for option in providers_by_group(group):
            labels.append(f"[{title}] {option.label} ({option.id})")
            ids.append(option.id)

    default_label: Optional[str] = None
    if default_pid in ids:
        default_label = labels[ids.index(default_pid)]
    chosen = prompt_choice("模型提供商：", options=labels, default=default_label)
    return ids[labels.index(chosen)]


def _prompt_credentials(session: WizardSession) -> None:
    state = session.state
    if state.is_custom:
        env_key = click.prompt(
            "环境变量名（例如 CUSTOM_API_KEY）",
            default=state.custom_env_key or "",
            show_default=bool(state.custom_env_key),
        ).strip()
        session.set_custom_env_key(env_key)

    hint = session.state.provider_env_key or "API Key"
    api_key = click.prompt(
        "API Key",
        default=state.api_key or "",
        hide_input=True,
        show_default=False,
        prompt_suffix=f" [{hint}]: ",
    )
    session.edit_api_key(api_key)


def _watch_models_message(session: WizardSession) -> None:
    """Echo each new discovery message as the session state changes."""
    shown = session.state.models_message

    def listener(state: ConfigurationState) -> None:
        nonlocal shown
        if state.models_message == shown:
            return
        shown = state.models_message
        if shown:
            click.echo(click.style(shown, fg="yellow"))

    session.subscribe(listener)


async def _discover_models(session: WizardSession) -> None:
    click.echo("获取中...")
    await session.fetch_models()
    state = session.state
    if state.models:
        click.echo(f"✓ 获取到 {len(state.models)} 个模型")


def _prompt_model(session: WizardSession) -> None:
    state = session.state
    if state.models:
        options = list(state.models) + [_MANUAL_ENTRY]
        default = state.model if state.model in state.models else None
        chosen = prompt_choice("默认模型：", options=options, default=default)
        if chosen != _MANUAL_ENTRY:
            session.edit_model(chosen)
            return

    model = click.prompt(
        "默认模型（如 openai/gpt-4o-mini）",
        default=session.state.model or "",
        show_default=bool(session.state.model),
    )
    session.edit_model(model)


def _prompt_token(session: WizardSession) -> None:
    while True:
        click.echo(f"网关 Token: {session.state.gateway_token}")
        chosen = prompt_choice(
            "网关 Token：",
            options=[_TOKEN_KEEP, _TOKEN_REGENERATE, _TOKEN_EDIT],
            default=_TOKEN_KEEP,
        )
        if chosen == _TOKEN_KEEP:
            return
        if chosen == _TOKEN_REGENERATE:
            session.regenerate_token()
            continue
        token = click.prompt(
            "网关 Token（留空则自动生成）",
            default="",
            show_default=False,
        )
        session.edit_token(token)
        return


def _echo_summary(state: ConfigurationState) -> None:
    click.echo(f"\n{'─' * 44}")
    click.echo(f"  {'provider':16s}: {state.provider_id}")
    click.echo(f"  {'env key':16s}: {state.provider_env_key or '(not set)'}")
    click.echo(
        f"  {'api key':16s}: {'(set)' if state.api_key.strip() else '(not set)'}",
    )
    click.echo(f"  {'model':16s}: {state.model.strip() or '(not set)'}")
    click.echo(f"  {'gateway token':16s}: {state.gateway_token.strip() or '(auto)'}")
    click.echo(f"{'─' * 44}")


def echo_status(status: SaveResponse) -> None:
    """Print a save result the way the web form shows it."""
    color = "green" if status.ok else "red"
    click.echo(click.style(status.message, fg=color, bold=True))
    if status.restart_error:
        click.echo(click.style(f"重启失败：{status.restart_error}", fg="red"))


# ---------------------------------------------------------------------------
# Flow
# ---------------------------------------------------------------------------


async def run_wizard(
    session: WizardSession,
    *,
    fetch_models: Optional[bool] = None,
    assume_yes: bool = False,
) -> Optional[SaveResponse]:
    """Walk the operator through every step and submit.

    *fetch_models* ``None`` asks interactively. Returns the save status, or
    None when the operator aborted or nothing was submitted.
    """
    click.echo("OpenClaw 快速配置 — 生成 openclaw.json 与 .env\n")
    _watch_models_message(session)

    session.select_provider(_select_provider_interactive(session.state.provider_id))
    _prompt_credentials(session)

    if fetch_models is None:
        fetch_models = click.confirm("获取模型列表？", default=False)
    if fetch_models:
        await _discover_models(session)

    _prompt_model(session)
    while not session.state.can_save:
        click.echo(click.style("默认模型不能为空", fg="red"))
        _prompt_model(session)

    _prompt_token(session)
    _echo_summary(session.state)

    if not assume_yes and not click.confirm("保存并重启？", default=True):
        click.echo("已取消")
        return None

    click.echo("保存中...")
    status = await session.save()
    if status is not None:
        echo_status(status)
        if session.state.gateway_token:
            click.echo(f"网关 Token: {session.state.gateway_token}")
    return status


async def _main(base_url: str, fetch_models: Optional[bool], assume_yes: bool):
    async with async_client(base_url) as http:
        session = WizardSession.from_http(http)
        return await run_wizard(
            session,
            fetch_models=fetch_models,
            assume_yes=assume_yes,
        )


@click.command("wizard")
@click.option(
    "--base-url",
    default=DEFAULT_BASE_URL,
    show_default=True,
    help="Setup server address",
)
@click.option(
    "--fetch-models/--no-fetch-models",
    default=None,
    help="Query the provider's model list (asks when omitted)",
)
@click.option("-y", "--yes", "assume_yes", is_flag=True, help="Skip confirmation")
def wizard_cmd(
    base_url: str,
    fetch_models: Optional[bool],
    assume_yes: bool,
) -> None:
    """Choose a provider, enter a key, pick a model and save."""
    status = asyncio.run(_main(base_url, fetch_models, assume_yes))
    if status is not None and not status.ok:
        raise SystemExit(1)


@click.command("providers")
def providers_cmd() -> None:
    """Show the built-in provider catalog."""
    click.echo("\n=== Providers ===")
    for option in list_providers():
        click.echo(f"\n{'─' * 44}")
        click.echo(f"  {option.label} ({option.id})")
        click.echo(f"{'─' * 44}")
        click.echo(f"  {'group':16s}: {_GROUP_TITLES[option.group]}")
        click.echo(f"  {'env_key':16s}: {option.env_key or '(user supplied)'}")
        click.echo(f"  {'default_model':16s}: {option.default_model or '(none)'}")
        auto = "yes" if option.supports_auto_models else "no"
        click.echo(f"  {'auto models':16s}: {auto}")
    click.echo()
