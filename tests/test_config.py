"""Tests for the YAML configuration loader."""

from pathlib import Path

import pytest

from quadency_connector.config import ConfigLoadError, ConfigLoader, load_config
from quadency_connector.config.models import ExchangeConfig, LogFormat, LogLevel
from quadency_connector.exceptions import PermissionDenied

REPO_CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"

MINIMAL_EXCHANGES = """
exchanges:
  quadency:
    credentials:
      api_key: yaml-key
      secret: yaml-secret
"""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("QUADENCY_API_KEY", "QUADENCY_SECRET", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def _write(config_dir: Path, exchanges: str, features: str = None) -> Path:
    (config_dir / "exchanges.yaml").write_text(exchanges, encoding="utf-8")
    if features is not None:
        (config_dir / "features.yaml").write_text(features, encoding="utf-8")
    return config_dir


class TestLoad:
    """Happy-path loading."""

    def test_repository_config_loads(self):
        config = load_config(REPO_CONFIG_DIR)

        quadency = config.get_exchange("quadency")
        assert config.get_enabled_exchanges() == ["quadency"]
        assert quadency.quote_currencies == ["USDC", "USDT"]
        assert quadency.errors.http["429"] == "PermissionDenied"
        assert quadency.get_rest_url("private") == "https://quadency.com/api/v1/private/quadx"

    def test_minimal_file_uses_defaults(self, tmp_path):
        config = ConfigLoader(_write(tmp_path, MINIMAL_EXCHANGES)).load()

        quadency = config.get_exchange("quadency")
        assert quadency == ExchangeConfig(credentials=quadency.credentials)
        assert quadency.credentials.api_key.get_secret_value() == "yaml-key"
        assert config.logging.format == LogFormat.JSON
        assert config.logging.level == LogLevel.INFO

    def test_sandbox_switches_to_staging(self, tmp_path):
        config = ConfigLoader(
            _write(tmp_path, "exchanges:\n  quadency:\n    sandbox: true\n")
        ).load()

        assert config.get_exchange("quadency").get_rest_url("public") == (
            "https://staging.quadency.com/api/v1/public/quadx"
        )

    def test_error_sections_replace_defaults(self, tmp_path):
        yaml_text = (
            "exchanges:\n"
            "  quadency:\n"
            "    errors:\n"
            "      exact:\n"
            "        4300: PermissionDenied\n"
        )
        config = ConfigLoader(_write(tmp_path, yaml_text)).load()

        errors = config.get_exchange("quadency").errors
        assert errors.exact == {"4300": PermissionDenied.__name__}
        assert "Insufficient" in errors.broad

    def test_logging_section(self, tmp_path):
        config = ConfigLoader(
            _write(tmp_path, MINIMAL_EXCHANGES, "logging:\n  format: text\n  level: DEBUG\n")
        ).load()

        assert config.logging.format == LogFormat.TEXT
        assert config.logging.level == LogLevel.DEBUG


class TestEnvironmentOverrides:
    """Environment variables take precedence over YAML."""

    def test_credentials_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("QUADENCY_API_KEY", "env-key")
        monkeypatch.setenv("QUADENCY_SECRET", "env-secret")

        config = ConfigLoader(_write(tmp_path, MINIMAL_EXCHANGES)).load()

        credentials = config.get_exchange("quadency").credentials
        assert credentials.api_key.get_secret_value() == "env-key"
        assert credentials.secret.get_secret_value() == "env-secret"
        assert credentials.is_complete

    def test_log_level_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "warning")

        config = ConfigLoader(_write(tmp_path, MINIMAL_EXCHANGES)).load()

        assert config.logging.level == LogLevel.WARNING

    def test_invalid_log_level_is_ignored(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "loud")

        config = ConfigLoader(_write(tmp_path, MINIMAL_EXCHANGES)).load()

        assert config.logging.level == LogLevel.INFO

    def test_secrets_are_masked(self, tmp_path):
        config = ConfigLoader(_write(tmp_path, MINIMAL_EXCHANGES)).load()

        assert "yaml-secret" not in repr(config.get_exchange("quadency"))


class TestLoadErrors:
    """Failures surface as ConfigLoadError."""

    def test_missing_directory(self, tmp_path):
        with pytest.raises(ConfigLoadError) as exc_info:
            ConfigLoader(tmp_path / "absent")

        assert exc_info.value.file_path == tmp_path / "absent"

    def test_missing_exchanges_file(self, tmp_path):
        with pytest.raises(ConfigLoadError):
            ConfigLoader(tmp_path).load()

    def test_empty_exchanges_file(self, tmp_path):
        with pytest.raises(ConfigLoadError):
            ConfigLoader(_write(tmp_path, "")).load()

    def test_invalid_yaml(self, tmp_path):
        with pytest.raises(ConfigLoadError) as exc_info:
            ConfigLoader(_write(tmp_path, "exchanges: [unclosed\n")).load()

        assert exc_info.value.cause is not None

    def test_no_exchanges(self, tmp_path):
        with pytest.raises(ConfigLoadError):
            ConfigLoader(_write(tmp_path, "exchanges: {}\n")).load()

    def test_unknown_exception_name(self, tmp_path):
        yaml_text = (
            "exchanges:\n"
            "  quadency:\n"
            "    errors:\n"
            "      broad:\n"
            "        Insufficient: NotAnError\n"
        )

        with pytest.raises(ConfigLoadError):
            ConfigLoader(_write(tmp_path, yaml_text)).load()

    def test_rate_limit_out_of_range(self, tmp_path):
        yaml_text = (
            "exchanges:\n"
            "  quadency:\n"
            "    connection:\n"
            "      rate_limit_per_second: 0\n"
        )

        with pytest.raises(ConfigLoadError):
            ConfigLoader(_write(tmp_path, yaml_text)).load()
