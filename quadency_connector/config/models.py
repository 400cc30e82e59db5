"""
Pydantic models for application configuration.

This module defines all configuration models that are validated when loading
YAML configuration files. Defaults describe the Quadency venue completely, so
an ExchangeConfig() with no arguments is ready to use.

Configuration files:
    - config/exchanges.yaml: Venue URLs, credentials, limits and error tables
    - config/features.yaml: Logging settings

Example:
    >>> from quadency_connector.config.models import ExchangeConfig
    >>> config = ExchangeConfig(sandbox=True)
    >>> config.get_rest_url("public")
    'https://staging.quadency.com/api/v1/public/quadx'
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, SecretStr, field_validator

from quadency_connector.exceptions import get_exception_class


# =============================================================================
# ENUMS
# =============================================================================


class LogFormat(str, Enum):
    """Logging format options."""

    JSON = "json"
    TEXT = "text"


class LogLevel(str, Enum):
    """Logging level options."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# =============================================================================
# EXCHANGE CONFIGURATION
# =============================================================================


class RestEndpoints(BaseModel):
    """REST API base URLs for public and private calls."""

    model_config = {"frozen": True, "extra": "forbid"}

    public: str = Field(
        default="https://quadency.com/api/v1/public/quadx",
        description="REST base URL for unauthenticated calls",
    )
    private: str = Field(
        default="https://quadency.com/api/v1/private/quadx",
        description="REST base URL for signed calls",
    )


class UrlConfig(BaseModel):
    """Production and staging endpoints."""

    model_config = {"frozen": True, "extra": "forbid"}

    api: RestEndpoints = Field(
        default_factory=RestEndpoints,
        description="Production endpoints",
    )
    test: RestEndpoints = Field(
        default_factory=lambda: RestEndpoints(
            public="https://staging.quadency.com/api/v1/public/quadx",
            private="https://staging.quadency.com/api/v1/private/quadx",
        ),
        description="Staging endpoints (sandbox mode)",
    )
    www: str = Field(
        default="https://quadency.com",
        description="Venue website",
    )


class ConnectionSettings(BaseModel):
    """Connection settings for a venue."""

    model_config = {"frozen": True, "extra": "forbid"}

    rate_limit_per_second: int = Field(
        default=1,
        description="Maximum REST requests per second",
        ge=1,
        le=100,
    )
    timeout_seconds: int = Field(
        default=10,
        description="REST request timeout",
        ge=1,
        le=120,
    )


class CredentialsConfig(BaseModel):
    """API credentials for signed calls."""

    model_config = {"frozen": True, "extra": "forbid"}

    api_key: Optional[SecretStr] = Field(
        default=None,
        description="API key sent as ACCESS-KEY",
    )
    secret: Optional[SecretStr] = Field(
        default=None,
        description="API secret used as the HMAC key",
    )

    @property
    def is_complete(self) -> bool:
        """True if both key and secret are set."""
        return bool(self.api_key and self.secret)


class ErrorTablesConfig(BaseModel):
    """
    Exception tables used by the error mapper.

    Values are exception class names from quadency_connector.exceptions.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    exact: Dict[str, str] = Field(
        default_factory=lambda: {
            "BAD_REQUEST": "BadRequest",
            "UNAUTHORIZED": "AuthenticationError",
            "FORBIDDEN": "AuthenticationError",
            "TOO_MANY_REQUESTS": "PermissionDenied",
            "Access denied": "AuthenticationError",
        },
        description="Exact match on error code or message",
    )
    broad: Dict[str, str] = Field(
        default_factory=lambda: {
            "Insufficient": "BadRequest",
            "Invalid signature": "AuthenticationError",
            "Too Many Requests": "PermissionDenied",
        },
        description="Substring match on error message",
    )
    http: Dict[str, str] = Field(
        default_factory=lambda: {
            "400": "BadRequest",
            "401": "AuthenticationError",
            "403": "AuthenticationError",
            "429": "PermissionDenied",
        },
        description="Default exception per HTTP status code",
    )

    @field_validator("exact", "broad", "http")
    @classmethod
    def validate_exception_names(cls, v: Dict[str, str]) -> Dict[str, str]:
        """Ensure every table value names a known exception class."""
        for name in v.values():
            get_exception_class(name)
        return v


class ExchangeConfig(BaseModel):
    """Configuration for a single venue."""

    model_config = {"frozen": True, "extra": "forbid"}

    id: str = Field(
        default="quadency",
        description="Venue identifier",
        min_length=1,
    )
    name: str = Field(
        default="Quadency",
        description="Human readable venue name",
    )
    enabled: bool = Field(
        default=True,
        description="Whether this venue is enabled",
    )
    sandbox: bool = Field(
        default=False,
        description="Use staging endpoints",
    )
    urls: UrlConfig = Field(
        default_factory=UrlConfig,
        description="REST endpoint configuration",
    )
    connection: ConnectionSettings = Field(
        default_factory=ConnectionSettings,
        description="Connection settings",
    )
    credentials: CredentialsConfig = Field(
        default_factory=CredentialsConfig,
        description="API credentials",
    )
    timeframes: Dict[str, str] = Field(
        default_factory=lambda: {
            "1m": "1",
            "5m": "5",
            "15m": "15",
            "30m": "30",
            "1h": "60",
            "4h": "240",
            "1d": "1440",
        },
        description="Supported candle timeframes (unified -> venue minutes)",
    )
    quote_currencies: List[str] = Field(
        default_factory=lambda: ["USDC", "USDT"],
        description="Quote currencies whose markets are loaded",
        min_length=1,
    )
    fee_currency_fallback: str = Field(
        default="QUAD",
        description="Fee currency assumed when no market is known",
    )
    errors: ErrorTablesConfig = Field(
        default_factory=ErrorTablesConfig,
        description="Exception tables",
    )
    error_messages: Dict[str, str] = Field(
        default_factory=lambda: {
            "400": "Incorrect parameters",
            "401": "Incorrect keys or ts value differs from the current time by more than 5 seconds",
            "404": "Not Found",
            "429": "Too Many Requests: API Rate Limits violated",
            "500": "Internal Server Error",
            "503": "System is currently overloaded.",
        },
        description="Documented meaning of HTTP status codes",
    )

    def get_rest_url(self, api: str = "public") -> str:
        """
        Get the REST base URL for an API section.

        Args:
            api: "public" or "private"

        Returns:
            str: Base URL, from staging endpoints when sandbox is enabled.

        Raises:
            ValueError: If api is not "public" or "private".
        """
        endpoints = self.urls.test if self.sandbox else self.urls.api
        if api == "public":
            return endpoints.public
        elif api == "private":
            return endpoints.private
        raise ValueError(f"Unknown API section: {api!r}")


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = {"frozen": True, "extra": "forbid"}

    format: LogFormat = Field(
        default=LogFormat.JSON,
        description="Log output format",
    )
    level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Default log level",
    )


# =============================================================================
# ROOT CONFIGURATION
# =============================================================================


class AppConfig(BaseModel):
    """
    Root application configuration.

    Example:
        >>> config = AppConfig(exchanges={"quadency": ExchangeConfig()})
        >>> config.get_enabled_exchanges()
        ['quadency']
    """

    model_config = {"frozen": True, "extra": "forbid"}

    exchanges: Dict[str, ExchangeConfig] = Field(
        ...,
        description="Venue configurations keyed by name",
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging configuration",
    )

    def get_exchange(self, name: str) -> Optional[ExchangeConfig]:
        """
        Get venue configuration by name.

        Args:
            name: Venue name (e.g., "quadency")

        Returns:
            Optional[ExchangeConfig]: Venue config or None if not found.
        """
        return self.exchanges.get(name)

    def get_enabled_exchanges(self) -> List[str]:
        """
        Get list of enabled venue names.

        Returns:
            List[str]: Names of enabled venues.
        """
        return [name for name, config in self.exchanges.items() if config.enabled]
