# -*- coding: utf-8 -*-
"""Built-in provider catalog."""

from __future__ import annotations

from typing import List, Optional

from .models import ProviderGroup, ProviderOption

CUSTOM_PROVIDER_ID = "custom"
DEFAULT_PROVIDER_ID = "openai"

# ---------------------------------------------------------------------------
# Mainstream providers
# ---------------------------------------------------------------------------

PROVIDER_OPENAI = ProviderOption(
    id="openai",
    label="OpenAI",
    env_key="OPENAI_API_KEY",
    group="mainstream",
    supports_auto_models=True,
    default_model="openai/gpt-4o-mini",
)

PROVIDER_ANTHROPIC = ProviderOption(
    id="anthropic",
    label="Anthropic",
    env_key="ANTHROPIC_API_KEY",
    group="mainstream",
    supports_auto_models=True,
    default_model="anthropic/claude-3-7-sonnet",
)

PROVIDER_GEMINI = ProviderOption(
    id="gemini",
    label="Gemini",
    env_key="GEMINI_API_KEY",
    group="mainstream",
    supports_auto_models=True,
    default_model="gemini/gemini-1.5-pro",
)

PROVIDER_GROQ = ProviderOption(
    id="groq",
    label="Groq",
    env_key="GROQ_API_KEY",
    group="mainstream",
    supports_auto_models=True,
    default_model="groq/llama-3.1-70b-versatile",
)

PROVIDER_MISTRAL = ProviderOption(
    id="mistral",
    label="Mistral",
    env_key="MISTRAL_API_KEY",
    group="mainstream",
    supports_auto_models=True,
    default_model="mistral/large-latest",
)

PROVIDER_COHERE = ProviderOption(
    id="cohere",
    label="Cohere",
    env_key="COHERE_API_KEY",
    group="mainstream",
    supports_auto_models=False,
    default_model="cohere/command-r-plus",
)

# ---------------------------------------------------------------------------
# Domestic providers
# ---------------------------------------------------------------------------

PROVIDER_MINIMAX = ProviderOption(
    id="minimax",
    label="MiniMax",
    env_key="MINIMAX_API_KEY",
    group="domestic",
    supports_auto_models=False,
    default_model="minimax/MiniMax-M2.1",
)

PROVIDER_DEEPSEEK = ProviderOption(
    id="deepseek",
    label="DeepSeek",
    env_key="DEEPSEEK_API_KEY",
    group="domestic",
    supports_auto_models=True,
    default_model="deepseek/deepseek-chat",
)

PROVIDER_MOONSHOT = ProviderOption(
    id="moonshot",
    label="Moonshot / Kimi",
    env_key="MOONSHOT_API_KEY",
    group="domestic",
    supports_auto_models=True,
    default_model="moonshot/kimi-k2.5",
)

PROVIDER_ZAI = ProviderOption(
    id="zai",
    label="ZAI / GLM",
    env_key="ZAI_API_KEY",
    group="domestic",
    supports_auto_models=False,
    default_model="zai/glm-4.7",
)

PROVIDER_QWEN = ProviderOption(
    id="qwen",
    label="Qwen",
    env_key="QWEN_API_KEY",
    group="domestic",
    supports_auto_models=True,
    default_model="qwen/qwen2.5-coder-32b-instruct",
)

PROVIDER_CUSTOM = ProviderOption(
    id=CUSTOM_PROVIDER_ID,
    label="自定义提供商",
    group="domestic",
    supports_auto_models=False,
)

# Registry: provider_id -> ProviderOption (insertion order is display order)
PROVIDERS: dict[str, ProviderOption] = {
    p.id: p
    for p in (
        PROVIDER_OPENAI,
        PROVIDER_ANTHROPIC,
        PROVIDER_GEMINI,
        PROVIDER_GROQ,
        PROVIDER_MISTRAL,
        PROVIDER_COHERE,
        PROVIDER_MINIMAX,
        PROVIDER_DEEPSEEK,
        PROVIDER_MOONSHOT,
        PROVIDER_ZAI,
        PROVIDER_QWEN,
        PROVIDER_CUSTOM,
    )
}


def get_provider(provider_id: str) -> Optional[ProviderOption]:
    """Return a provider option by id, or None if not found."""
    return PROVIDERS.get(provider_id)


def list_providers() -> List[ProviderOption]:
    """Return all registered providers in display order."""
    return list(PROVIDERS.values())


def providers_by_group(group: ProviderGroup) -> List[ProviderOption]:
    """Return the providers shown under *group*."""
    return [p for p in PROVIDERS.values() if p.group == group]
