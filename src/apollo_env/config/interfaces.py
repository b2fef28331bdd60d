from __future__ import annotations

from typing import Protocol

from apollo_env.config.models import AppConfig, ConfigLoadRequest


class ConfigLoader(Protocol):
    """
    Loads effective runtime configuration.

    Precedence, lowest first: model defaults, the YAML file, then environment
    variables named `{env_prefix}SECTION__KEY`.
    """

    async def load(self, request: ConfigLoadRequest = ConfigLoadRequest()) -> AppConfig:
        ...
