# -*- coding: utf-8 -*-
"""Wizard configuration state and its transition rules.

``ConfigurationState`` is an immutable snapshot. Every change goes through
:func:`transition`, which takes the current snapshot and an action and
returns the next one, so cross-field updates (provider switch resetting the
env key, model list and message) are never observed half-applied.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict

from ..errors import UnknownProviderError
from ..providers import CUSTOM_PROVIDER_ID, DEFAULT_PROVIDER_ID, get_provider
from ..schemas import SaveResponse
from ..tokens import TokenGenerator


class ConfigurationState(BaseModel):
    """The operator's in-progress choices for one wizard session."""

    model_config = ConfigDict(frozen=True)

    provider_id: str = DEFAULT_PROVIDER_ID
    provider_env_key: str = ""
    custom_env_key: str = ""
    api_key: str = ""
    model: str = ""
    models: Tuple[str, ...] = ()
    models_message: Optional[str] = None
    models_loading: bool = False
    gateway_token: str = ""
    status: Optional[SaveResponse] = None
    saving: bool = False

    @property
    def is_custom(self) -> bool:
        return self.provider_id == CUSTOM_PROVIDER_ID

    @property
    def can_save(self) -> bool:
        return bool(self.model.strip())


# ---------------------------------------------------------------------------
# Operator actions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SelectProvider:
    provider_id: str


@dataclass(frozen=True)
class SetCustomEnvKey:
    value: str


@dataclass(frozen=True)
class EditApiKey:
    value: str


@dataclass(frozen=True)
class EditModel:
    value: str


@dataclass(frozen=True)
class EditToken:
    value: str


@dataclass(frozen=True)
class RegenerateToken:
    pass


# ---------------------------------------------------------------------------
# Actions dispatched by the discovery client and the submitter
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ShowModelsMessage:
    message: Optional[str]


@dataclass(frozen=True)
class DiscoveryStarted:
    pass


@dataclass(frozen=True)
class DiscoveryFinished:
    """Apply a discovery result; ``models=None`` keeps the current list."""

    models: Optional[Tuple[str, ...]]
    message: Optional[str]


@dataclass(frozen=True)
class DiscoveryAborted:
    """Release the discovery guard without touching models or message."""


@dataclass(frozen=True)
class SaveStarted:
    gateway_token: Optional[str] = None


@dataclass(frozen=True)
class SaveFinished:
    status: SaveResponse


@dataclass(frozen=True)
class SaveAborted:
    """Release the save guard, leaving status unset."""


Action = Union[
    SelectProvider,
    SetCustomEnvKey,
    EditApiKey,
    EditModel,
    EditToken,
    RegenerateToken,
    ShowModelsMessage,
    DiscoveryStarted,
    DiscoveryFinished,
    DiscoveryAborted,
    SaveStarted,
    SaveFinished,
    SaveAborted,
]


def _select_provider(
    state: ConfigurationState,
    provider_id: str,
) -> ConfigurationState:
    option = get_provider(provider_id)
    if option is None:
        raise UnknownProviderError(provider_id)

    if option.id == CUSTOM_PROVIDER_ID:
        env_key = state.custom_env_key
    else:
        env_key = option.env_key or ""

    return state.model_copy(
        update={
            "provider_id": option.id,
            "provider_env_key": env_key,
            "model": option.default_model or state.model,
            "models": (),
            "models_message": None,
        },
    )


def transition(
    state: ConfigurationState,
    action: Action,
    *,
    tokens: TokenGenerator,
) -> ConfigurationState:
    """Return the state that results from applying *action* to *state*."""
    if isinstance(action, SelectProvider):
        return _select_provider(state, action.provider_id)

    if isinstance(action, SetCustomEnvKey):
        update = {"custom_env_key": action.value}
        if state.is_custom:
            update["provider_env_key"] = action.value
        return state.model_copy(update=update)

    if isinstance(action, EditApiKey):
        return state.model_copy(update={"api_key": action.value})
    if isinstance(action, EditModel):
        return state.model_copy(update={"model": action.value})
    if isinstance(action, EditToken):
        return state.model_copy(update={"gateway_token": action.value})
    if isinstance(action, RegenerateToken):
        return state.model_copy(update={"gateway_token": tokens.generate()})

    if isinstance(action, ShowModelsMessage):
        return state.model_copy(update={"models_message": action.message})
    if isinstance(action, DiscoveryStarted):
        return state.model_copy(
            update={"models_loading": True, "models_message": None},
        )
    if isinstance(action, DiscoveryFinished):
        update = {"models_loading": False, "models_message": action.message}
        if action.models is not None:
            update["models"] = tuple(action.models)
        return state.model_copy(update=update)
    if isinstance(action, DiscoveryAborted):
        return state.model_copy(update={"models_loading": False})

    if isinstance(action, SaveStarted):
        update = {"saving": True, "status": None}
        if action.gateway_token is not None:
            update["gateway_token"] = action.gateway_token
        return state.model_copy(update=update)
    if isinstance(action, SaveFinished):
        return state.model_copy(
            update={"saving": False, "status": action.status},
        )
    if isinstance(action, SaveAborted):
        return state.model_copy(update={"saving": False})

    raise TypeError(f"unsupported action: {action!r}")


def initial_state(tokens: TokenGenerator) -> ConfigurationState:
    """Session-start state: default provider selected, fresh token."""
    state = _select_provider(ConfigurationState(), DEFAULT_PROVIDER_ID)
    return state.model_copy(update={"gateway_token": tokens.generate()})
