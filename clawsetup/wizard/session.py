# -*- coding: utf-8 -*-
"""WizardSession owns the live state and runs the async round trips."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

import httpx

from ..schemas import SaveResponse
from ..tokens import TokenGenerator
from .discovery import MSG_API_KEY_REQUIRED, ModelDiscoveryClient, ModelListResult
from .state import (
    Action,
    ConfigurationState,
    DiscoveryAborted,
    DiscoveryFinished,
    DiscoveryStarted,
    EditApiKey,
    EditModel,
    EditToken,
    RegenerateToken,
    SaveAborted,
    SaveFinished,
    SaveStarted,
    SelectProvider,
    SetCustomEnvKey,
    ShowModelsMessage,
    initial_state,
    transition,
)
from .submitter import ConfigSubmitter

logger = logging.getLogger(__name__)

StateListener = Callable[[ConfigurationState], None]


class WizardSession:
    """One operator's wizard session.

    All mutation goes through :meth:`dispatch` on the event loop thread, so
    the only interleaving is at the ``await`` points inside
    :meth:`fetch_models` and :meth:`save`. Each of those has its own
    in-flight guard; a second call while one is outstanding is rejected and
    returns ``None``.
    """

    def __init__(
        self,
        discovery: ModelDiscoveryClient,
        submitter: ConfigSubmitter,
        tokens: Optional[TokenGenerator] = None,
        state: Optional[ConfigurationState] = None,
    ) -> None:
        self._discovery = discovery
        self._submitter = submitter
        self._tokens = tokens or TokenGenerator()
        if state is None:
            state = initial_state(self._tokens)
        elif not state.gateway_token:
            state = state.model_copy(
                update={"gateway_token": self._tokens.generate()},
            )
        self._state = state
        self._listeners: List[StateListener] = []

    @classmethod
    def from_http(
        cls,
        http: httpx.AsyncClient,
        tokens: Optional[TokenGenerator] = None,
    ) -> "WizardSession":
        tokens = tokens or TokenGenerator()
        return cls(
            ModelDiscoveryClient(http),
            ConfigSubmitter(http, tokens),
            tokens=tokens,
        )

    @property
    def state(self) -> ConfigurationState:
        return self._state

    def subscribe(self, listener: StateListener) -> None:
        self._listeners.append(listener)

    def dispatch(self, action: Action) -> ConfigurationState:
        self._state = transition(self._state, action, tokens=self._tokens)
        for listener in self._listeners:
            listener(self._state)
        return self._state

    # -- operator actions --------------------------------------------------

    def select_provider(self, provider_id: str) -> ConfigurationState:
        return self.dispatch(SelectProvider(provider_id))

    def set_custom_env_key(self, value: str) -> ConfigurationState:
        return self.dispatch(SetCustomEnvKey(value))

    def edit_api_key(self, value: str) -> ConfigurationState:
        return self.dispatch(EditApiKey(value))

    def edit_model(self, value: str) -> ConfigurationState:
        return self.dispatch(EditModel(value))

    def edit_token(self, value: str) -> ConfigurationState:
        return self.dispatch(EditToken(value))

    def regenerate_token(self) -> ConfigurationState:
        return self.dispatch(RegenerateToken())

    # -- async round trips -------------------------------------------------

    async def fetch_models(self) -> Optional[ModelListResult]:
        """Run model discovery for the current provider and key.

        Returns the result that was applied, or ``None`` when the call was
        not issued or its response was discarded as stale.
        """
        state = self._state
        if state.models_loading:
            logger.debug("Model discovery already in flight, ignoring")
            return None
        api_key = state.api_key.strip()
        if not api_key:
            self.dispatch(ShowModelsMessage(MSG_API_KEY_REQUIRED))
            return None

        issued_for = (state.provider_id, state.api_key)
        self.dispatch(DiscoveryStarted())
        try:
            result = await self._discovery.discover(state.provider_id, api_key)
        except BaseException:
            self.dispatch(DiscoveryAborted())
            raise

        current = self._state
        if (current.provider_id, current.api_key) != issued_for:
            logger.info(
                "Discarding model list for %s: selection changed to %s",
                issued_for[0],
                current.provider_id,
            )
            self.dispatch(DiscoveryAborted())
            return None

        self.dispatch(DiscoveryFinished(result.models, result.message))
        return result

    async def save(self) -> Optional[SaveResponse]:
        """Submit the current state to the config endpoint.

        Returns the stored status, or ``None`` when nothing was submitted.
        """
        state = self._state
        if state.saving:
            logger.debug("Save already in flight, ignoring")
            return None
        if not state.can_save:
            logger.debug("Save skipped: model is empty")
            return None

        payload, generated = self._submitter.build_payload(state)
        self.dispatch(
            SaveStarted(gateway_token=payload.gateway_token if generated else None),
        )
        try:
            status = await self._submitter.submit(payload)
        except BaseException:
            self.dispatch(SaveAborted())
            raise
        self.dispatch(SaveFinished(status))
        return status
