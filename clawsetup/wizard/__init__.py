# -*- coding: utf-8 -*-
"""Wizard core: state transitions plus the discovery and submission clients."""

from .discovery import ModelDiscoveryClient, ModelListResult
from .session import WizardSession
from .state import ConfigurationState, initial_state, transition
from .submitter import ConfigSubmitter

__all__ = [
    "ConfigSubmitter",
    "ConfigurationState",
    "ModelDiscoveryClient",
    "ModelListResult",
    "WizardSession",
    "initial_state",
    "transition",
]
