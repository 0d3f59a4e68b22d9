"""Configuration management module."""

from tradefeed.core.config.settings import (
    ConfigManager,
    HttpConfig,
    LoggingConfig,
    RetrySettings,
    StorageConfig,
    TradeFeedConfig,
    get_default_config,
    load_config_from_env,
)

__all__ = [
    "ConfigManager",
    "TradeFeedConfig",
    "HttpConfig",
    "RetrySettings",
    "StorageConfig",
    "LoggingConfig",
    "get_default_config",
    "load_config_from_env",
]
