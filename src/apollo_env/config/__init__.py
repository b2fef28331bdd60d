from apollo_env.config.interfaces import ConfigLoader
from apollo_env.config.loader import YamlConfigLoader
from apollo_env.config.models import AppConfig, ConfigLoadRequest, HttpSettings, LoggingSettings

__all__ = [
    "AppConfig",
    "ConfigLoadRequest",
    "ConfigLoader",
    "HttpSettings",
    "LoggingSettings",
    "YamlConfigLoader",
]
