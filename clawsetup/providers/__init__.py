# -*- coding: utf-8 -*-
"""Provider catalog: option model and registry."""

from .models import ProviderGroup, ProviderOption
from .registry import (
    CUSTOM_PROVIDER_ID,
    DEFAULT_PROVIDER_ID,
    PROVIDERS,
    get_provider,
    list_providers,
    providers_by_group,
)

__all__ = [
    # models
    "ProviderGroup",
    "ProviderOption",
    # registry
    "CUSTOM_PROVIDER_ID",
    "DEFAULT_PROVIDER_ID",
    "PROVIDERS",
    "get_provider",
    "list_providers",
    "providers_by_group",
]
