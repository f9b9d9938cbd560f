"""Tests for settings configuration."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from src.cow_orderbook.config.network import Network
from src.cow_orderbook.config.settings import Settings, load_settings


@pytest.fixture
def clean_env():
    """Run with a copy of the environment that is restored afterwards."""
    with patch.dict(os.environ):
        for key in list(os.environ):
            if key.upper() in {
                "NETWORK",
                "ORDERBOOK_API_URL",
                "MAX_RETRIES",
                "RETRY_BACKOFF_SECONDS",
                "RETRY_MAX_BACKOFF_SECONDS",
                "REQUEST_TIMEOUT_SECONDS",
                "LOG_LEVEL",
                "JSON_LOGS",
            }:
                del os.environ[key]
        yield


@pytest.mark.usefixtures("clean_env")
class TestSettings:
    """Test Settings loading and validation."""

    def test_defaults(self):
        """Should default to mainnet with standard retries."""
        settings = Settings(_env_file=None)

        assert settings.network == Network.MAINNET
        assert settings.orderbook_api_url is None
        assert settings.max_retries == 3
        assert settings.retry_backoff_seconds == 0.5
        assert settings.request_timeout_seconds == 30.0
        assert settings.log_level == "INFO"
        assert settings.json_logs is False
        assert settings.api_url == "https://api.cow.fi/mainnet"

    def test_loads_from_environment(self):
        """Should read values from environment variables."""
        os.environ["NETWORK"] = "Sepolia"
        os.environ["MAX_RETRIES"] = "5"
        os.environ["LOG_LEVEL"] = "debug"

        settings = Settings(_env_file=None)

        assert settings.network == Network.SEPOLIA
        assert settings.max_retries == 5
        assert settings.log_level == "DEBUG"
        assert settings.api_url == "https://api.cow.fi/sepolia"

    def test_explicit_api_url_overrides_network(self):
        """Should prefer the explicit API URL."""
        settings = Settings(
            _env_file=None, network="base", orderbook_api_url="http://localhost:8080"
        )

        assert settings.api_url == "http://localhost:8080"

    def test_empty_api_url_is_unset(self):
        """Should treat an empty API URL as unset."""
        os.environ["ORDERBOOK_API_URL"] = ""

        assert Settings(_env_file=None).orderbook_api_url is None

    def test_invalid_api_url(self):
        """Should reject URLs without an http(s) scheme."""
        with pytest.raises(ValidationError, match="http"):
            Settings(_env_file=None, orderbook_api_url="ftp://example.com")

    def test_unknown_network(self):
        """Should reject unknown network names."""
        with pytest.raises(ValidationError, match="Network not found"):
            Settings(_env_file=None, network="ropsten")

    def test_invalid_log_level(self):
        """Should reject unknown log levels."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="VERBOSE")

    @pytest.mark.parametrize(
        "field,value",
        [("max_retries", -1), ("max_retries", 11), ("request_timeout_seconds", 0)],
    )
    def test_out_of_range_values(self, field, value):
        """Should reject out-of-range transport settings."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **{field: value})

    def test_load_settings_reads_env_file(self, tmp_path):
        """Should load values from a dotenv file."""
        env_file = tmp_path / ".env"
        env_file.write_text("NETWORK=arbitrum\nREQUEST_TIMEOUT_SECONDS=12.5\n")

        settings = load_settings(str(env_file))

        assert settings.network == Network.ARBITRUM
        assert settings.request_timeout_seconds == 12.5

    def test_load_settings_missing_file(self, tmp_path):
        """Should fall back to defaults when the file is missing."""
        settings = load_settings(str(tmp_path / "missing.env"))

        assert settings.network == Network.MAINNET
