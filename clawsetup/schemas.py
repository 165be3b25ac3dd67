# -*- coding: utf-8 -*-
"""Wire schemas for /api/config and /api/models (camelCase on the wire)."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ProviderKey(BaseModel):
    """One credential variable to write into .env."""

    key: str = Field(..., description="Credential variable name")
    value: str = Field(..., description="Credential value")


class SaveRequest(BaseModel):
    """Request body of ``POST /api/config``."""

    model_config = ConfigDict(populate_by_name=True)

    model: str = Field(default="", description="Default model identifier")
    gateway_token: str = Field(default="", alias="gatewayToken")
    providers: List[ProviderKey] = Field(default_factory=list)


class SaveResponse(BaseModel):
    """Response body of ``POST /api/config``."""

    model_config = ConfigDict(populate_by_name=True)

    ok: bool = False
    restarted: bool = False
    message: str = ""
    restart_error: Optional[str] = Field(default=None, alias="restartError")


class ModelsRequest(BaseModel):
    """Request body of ``POST /api/models``."""

    model_config = ConfigDict(populate_by_name=True)

    provider: str = ""
    api_key: str = Field(default="", alias="apiKey")


class ModelsResponse(BaseModel):
    """Response body of ``POST /api/models``."""

    models: List[str] = Field(default_factory=list)
    message: Optional[str] = None


def dump_wire(model: BaseModel) -> dict:
    """Serialize *model* with its wire aliases, dropping unset optionals."""
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)
