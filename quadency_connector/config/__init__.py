"""
Configuration management for the connector.

This module handles loading and validating configuration from YAML files.
All configuration values are validated using Pydantic models to ensure
type safety and catch configuration errors early.

The configuration system supports:
- Venue REST endpoints (production and staging)
- Connection limits (rate limit, timeout)
- API credentials
- Error tables mapping venue codes and messages to exception classes
- Logging settings

Environment variables can override settings:
    - QUADENCY_API_KEY / QUADENCY_SECRET: API credentials
    - LOG_LEVEL: Application log level

Example:
    >>> from quadency_connector.config import load_config, AppConfig
    >>> config = load_config()
    >>> quadency = config.get_exchange("quadency")
    >>> print(quadency.get_rest_url("private"))

Modules:
    loader: Configuration file loading utilities
    models: Pydantic models for configuration validation
"""

from quadency_connector.config.loader import ConfigLoadError, ConfigLoader, load_config
from quadency_connector.config.models import (
    # Enums
    LogFormat,
    LogLevel,
    # Exchange config
    ConnectionSettings,
    CredentialsConfig,
    ErrorTablesConfig,
    ExchangeConfig,
    RestEndpoints,
    UrlConfig,
    # Logging config
    LoggingConfig,
    # Root config
    AppConfig,
)

__all__: list[str] = [
    # Loader
    "load_config",
    "ConfigLoader",
    "ConfigLoadError",
    # Enums
    "LogFormat",
    "LogLevel",
    # Exchange config
    "RestEndpoints",
    "UrlConfig",
    "ConnectionSettings",
    "CredentialsConfig",
    "ErrorTablesConfig",
    "ExchangeConfig",
    # Logging config
    "LoggingConfig",
    # Root config
    "AppConfig",
]
