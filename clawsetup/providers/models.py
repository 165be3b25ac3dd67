# -*- coding: utf-8 -*-
"""Pydantic data models for the provider catalog."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

ProviderGroup = Literal["mainstream", "domestic"]


class ProviderOption(BaseModel):
    """Static definition of a selectable LLM provider."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Provider identifier")
    label: str = Field(..., description="Human-readable provider name")
    env_key: Optional[str] = Field(
        default=None,
        description="Credential variable this provider expects; "
        "None when the operator must supply one",
    )
    group: ProviderGroup = Field(
        default="mainstream",
        description="Display grouping only",
    )
    supports_auto_models: bool = Field(
        default=False,
        description="Whether the model list can be fetched upstream",
    )
    default_model: Optional[str] = Field(
        default=None,
        description="Model pre-filled when this provider is selected",
    )
