# -*- coding: utf-8 -*-
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .. import constant


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ---------------------------------------------------------------------------
# openclaw.json
# ---------------------------------------------------------------------------


class GatewayAuth(BaseModel):
    mode: str = "token"
    token: str = ""


class GatewayControlUi(_CamelModel):
    allow_insecure_auth: bool = Field(default=True, alias="allowInsecureAuth")


class GatewayConfig(_CamelModel):
    mode: str = "local"
    bind: str = "lan"
    port: int = constant.GATEWAY_PORT
    auth: GatewayAuth = Field(default_factory=GatewayAuth)
    control_ui: GatewayControlUi = Field(
        default_factory=GatewayControlUi,
        alias="controlUi",
    )


class ModelRef(BaseModel):
    primary: str = ""


class AgentDefaults(BaseModel):
    model: ModelRef = Field(default_factory=ModelRef)


class AgentsConfig(BaseModel):
    defaults: AgentDefaults = Field(default_factory=AgentDefaults)


class ModelEntry(_CamelModel):
    id: str
    name: str
    reasoning: bool = False
    input: List[str] = Field(default_factory=lambda: ["text"])
    context_window: int = Field(default=0, alias="contextWindow")
    max_tokens: int = Field(default=0, alias="maxTokens")


class ModelProvider(_CamelModel):
    """One entry under ``models.providers``; unset fields are omitted."""

    api_key: Optional[str] = Field(default=None, alias="apiKey")
    base_url: Optional[str] = Field(default=None, alias="baseUrl")
    api: Optional[str] = None
    models: Optional[List[ModelEntry]] = None


class ModelsConfig(BaseModel):
    mode: str = "merge"
    providers: Dict[str, ModelProvider] = Field(default_factory=dict)


class OpenClawConfig(BaseModel):
    """Root of openclaw.json."""

    gateway: GatewayConfig = Field(default_factory=GatewayConfig)
    agents: AgentsConfig = Field(default_factory=AgentsConfig)
    models: Optional[ModelsConfig] = None


# ---------------------------------------------------------------------------
# Setup server
# ---------------------------------------------------------------------------


class ServerConfig(BaseModel):
    """Where the setup server writes config and what it restarts."""

    compose_dir: str = ""
    container_name: str = ""
    static_dir: str = ""

    @property
    def config_dir(self) -> Optional[Path]:
        """``<compose>/data/conf``, or None without a compose dir."""
        if not self.compose_dir.strip():
            return None
        return Path(self.compose_dir) / "data" / "conf"

    @classmethod
    def from_env(cls) -> "ServerConfig":
        return cls(
            compose_dir=constant.COMPOSE_DIR,
            container_name=constant.CONTAINER_NAME,
            static_dir=constant.STATIC_DIR,
        )
