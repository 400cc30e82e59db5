"""
Configuration loader for YAML-based application configuration.

This module loads and validates configuration from YAML files. All
configuration is validated using Pydantic models to catch mistakes early.

Configuration files expected:
    - config/exchanges.yaml: Venue settings (required)
    - config/features.yaml: Logging settings (optional)

Environment variables override:
    - QUADENCY_API_KEY: API key for the quadency venue
    - QUADENCY_SECRET: API secret for the quadency venue
    - LOG_LEVEL: Application log level

Example:
    >>> from quadency_connector.config.loader import load_config
    >>> config = load_config("config")
    >>> print(config.get_enabled_exchanges())
    ['quadency']
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from quadency_connector.config.models import (
    AppConfig,
    ConnectionSettings,
    CredentialsConfig,
    ErrorTablesConfig,
    ExchangeConfig,
    LoggingConfig,
    LogLevel,
    RestEndpoints,
    UrlConfig,
)


class ConfigLoadError(Exception):
    """
    Raised when configuration loading fails.

    Attributes:
        message: Error message describing what went wrong.
        file_path: Path to the file that caused the error, if applicable.
        cause: Original exception that caused the error, if any.
    """

    def __init__(
        self,
        message: str,
        file_path: Optional[Path] = None,
        cause: Optional[Exception] = None,
    ):
        """
        Initialize ConfigLoadError.

        Args:
            message: Error message.
            file_path: Path to the problematic file.
            cause: Original exception.
        """
        self.message = message
        self.file_path = file_path
        self.cause = cause
        super().__init__(message)


class ConfigLoader:
    """
    Loads and validates application configuration from YAML files.

    Expects the following directory structure:
        config/
        ├── exchanges.yaml    - Venue URLs, limits, credentials, error tables
        └── features.yaml     - Logging settings (optional)

    Example:
        >>> loader = ConfigLoader("config")
        >>> config = loader.load()
        >>> print(config.exchanges.keys())
        dict_keys(['quadency'])
    """

    def __init__(self, config_dir: Path | str = "config"):
        """
        Initialize config loader.

        Args:
            config_dir: Path to configuration directory (default: 'config').

        Raises:
            ConfigLoadError: If config directory does not exist.
        """
        self.config_dir = Path(config_dir)
        if not self.config_dir.exists():
            raise ConfigLoadError(
                f"Configuration directory not found: {self.config_dir}",
                file_path=self.config_dir,
            )
        if not self.config_dir.is_dir():
            raise ConfigLoadError(
                f"Configuration path is not a directory: {self.config_dir}",
                file_path=self.config_dir,
            )

    def _load_yaml(self, filename: str, required: bool = True) -> Dict[str, Any]:
        """
        Load a YAML file from the config directory.

        Args:
            filename: Name of YAML file (e.g., 'exchanges.yaml').
            required: Raise if the file is missing; otherwise return {}.

        Returns:
            Dict containing parsed YAML content.

        Raises:
            ConfigLoadError: If file not found, empty, or invalid YAML.
        """
        file_path = self.config_dir / filename
        if not file_path.exists():
            if not required:
                return {}
            raise ConfigLoadError(
                f"Configuration file not found: {file_path}",
                file_path=file_path,
            )

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
                if data is None:
                    raise ConfigLoadError(
                        f"Configuration file is empty: {file_path}",
                        file_path=file_path,
                    )
                return data
        except yaml.YAMLError as e:
            raise ConfigLoadError(
                f"Invalid YAML syntax in {file_path}: {e}",
                file_path=file_path,
                cause=e,
            ) from e
        except OSError as e:
            raise ConfigLoadError(
                f"Error reading {file_path}: {e}",
                file_path=file_path,
                cause=e,
            ) from e

    def _load_credentials(self, exchange_name: str, data: Dict[str, Any]) -> CredentialsConfig:
        """
        Build credentials from YAML, overridden by environment.

        Environment variables:
            - <NAME>_API_KEY, <NAME>_SECRET (e.g., QUADENCY_API_KEY)
        """
        prefix = exchange_name.upper()
        api_key = os.getenv(f"{prefix}_API_KEY", data.get("api_key"))
        secret = os.getenv(f"{prefix}_SECRET", data.get("secret"))
        return CredentialsConfig(api_key=api_key, secret=secret)

    def _load_exchanges(self) -> Dict[str, ExchangeConfig]:
        """
        Load venue configurations from exchanges.yaml.

        Returns:
            Dict of ExchangeConfig keyed by venue name.

        Raises:
            ConfigLoadError: If validation fails or no venues configured.
        """
        data = self._load_yaml("exchanges.yaml")
        exchanges: Dict[str, ExchangeConfig] = {}

        try:
            raw_exchanges = data.get("exchanges") or {}
            for exchange_name, exchange_data in raw_exchanges.items():
                exchange_data = exchange_data or {}
                url_data = exchange_data.get("urls", {})
                conn_data = exchange_data.get("connection", {})
                error_data = exchange_data.get("errors", {})

                defaults = UrlConfig()
                urls = UrlConfig(
                    api=RestEndpoints(**url_data.get("api", defaults.api.model_dump())),
                    test=RestEndpoints(**url_data.get("test", defaults.test.model_dump())),
                    www=url_data.get("www", defaults.www),
                )

                connection = ConnectionSettings(
                    rate_limit_per_second=conn_data.get("rate_limit_per_second", 1),
                    timeout_seconds=conn_data.get("timeout_seconds", 10),
                )

                # Tables from YAML replace the defaults section by section
                errors = ErrorTablesConfig(
                    **{
                        section: {str(k): v for k, v in table.items()}
                        for section, table in error_data.items()
                    }
                )

                optional = {
                    key: exchange_data[key]
                    for key in (
                        "name",
                        "timeframes",
                        "quote_currencies",
                        "fee_currency_fallback",
                        "error_messages",
                    )
                    if key in exchange_data
                }
                if "error_messages" in optional:
                    optional["error_messages"] = {
                        str(k): v for k, v in optional["error_messages"].items()
                    }

                exchanges[exchange_name] = ExchangeConfig(
                    id=exchange_data.get("id", exchange_name),
                    enabled=exchange_data.get("enabled", True),
                    sandbox=exchange_data.get("sandbox", False),
                    urls=urls,
                    connection=connection,
                    credentials=self._load_credentials(
                        exchange_name, exchange_data.get("credentials", {})
                    ),
                    errors=errors,
                    **optional,
                )

        except (ValidationError, ValueError, TypeError, AttributeError) as e:
            raise ConfigLoadError(
                f"Invalid exchange configuration: {e}",
                file_path=self.config_dir / "exchanges.yaml",
                cause=e,
            ) from e

        if not exchanges:
            raise ConfigLoadError(
                "No exchanges configured in exchanges.yaml",
                file_path=self.config_dir / "exchanges.yaml",
            )

        return exchanges

    def _load_logging(self) -> LoggingConfig:
        """
        Load logging configuration from features.yaml.

        The LOG_LEVEL environment variable overrides the file.

        Returns:
            LoggingConfig object.
        """
        data = self._load_yaml("features.yaml", required=False)
        logging_data = dict(data.get("logging") or {})
        level = self._get_log_level()
        if level is not None:
            logging_data["level"] = level
        try:
            return LoggingConfig(**logging_data)
        except ValidationError as e:
            raise ConfigLoadError(
                f"Invalid logging configuration: {e}",
                file_path=self.config_dir / "features.yaml",
                cause=e,
            ) from e

    def _get_log_level(self) -> Optional[LogLevel]:
        """
        Get log level from environment.

        Environment variables:
            - LOG_LEVEL: Log level

        Returns:
            LogLevel enum value, or None if unset or invalid.
        """
        level_str = os.getenv("LOG_LEVEL")
        if not level_str:
            return None
        try:
            return LogLevel(level_str.upper())
        except ValueError:
            return None

    def load(self) -> AppConfig:
        """
        Load and validate all configuration files.

        Returns:
            AppConfig: Validated application configuration.

        Raises:
            ConfigLoadError: If any configuration is invalid or missing.

        Example:
            >>> loader = ConfigLoader("config")
            >>> config = loader.load()
            >>> print(config.get_enabled_exchanges())
        """
        try:
            exchanges = self._load_exchanges()
            logging_config = self._load_logging()

            return AppConfig(
                exchanges=exchanges,
                logging=logging_config,
            )

        except ConfigLoadError:
            raise
        except ValidationError as e:
            raise ConfigLoadError(
                f"Configuration validation failed: {e}",
                cause=e,
            ) from e


def load_config(config_dir: Path | str = "config") -> AppConfig:
    """
    Convenience function to load application configuration.

    Args:
        config_dir: Path to configuration directory (default: 'config').

    Returns:
        AppConfig: Validated application configuration.

    Raises:
        ConfigLoadError: If configuration loading fails.

    Example:
        >>> from quadency_connector.config import load_config
        >>> config = load_config()
        >>> quadency = config.get_exchange("quadency")
    """
    loader = ConfigLoader(config_dir)
    return loader.load()
