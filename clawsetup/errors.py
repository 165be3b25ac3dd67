# -*- coding: utf-8 -*-
"""Exception types raised by the setup wizard and its server."""


class SetupError(Exception):
    """Base class for all setup errors."""


class UnknownProviderError(SetupError):
    def __init__(self, provider_id: str) -> None:
        super().__init__(f"unknown provider: {provider_id}")
        self.provider_id = provider_id


class ConfigWriteError(SetupError):
    """Writing openclaw.json or .env failed."""


class RestartError(SetupError):
    """Restarting the compose service failed."""


class InitError(SetupError):
    """Headless initialisation from the compose .env failed."""
