"""Settings configuration for the orderbook API client."""

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.cow_orderbook.config.constants import (
    MAX_RETRIES,
    REQUEST_TIMEOUT_SECONDS,
    RETRY_BACKOFF_SECONDS,
    RETRY_MAX_BACKOFF_SECONDS,
)
from src.cow_orderbook.config.network import Network
from src.cow_orderbook.core.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Network Configuration
    network: Network = Field(default=Network.MAINNET, description="Orderbook environment name")
    orderbook_api_url: str | None = Field(
        None, description="Explicit API base URL (overrides the network default)"
    )

    # Transport Configuration
    max_retries: int = Field(
        default=MAX_RETRIES, ge=0, le=10, description="Retries for transient failures"
    )
    retry_backoff_seconds: float = Field(
        default=RETRY_BACKOFF_SECONDS, ge=0, description="Base exponential backoff in seconds"
    )
    retry_max_backoff_seconds: float = Field(
        default=RETRY_MAX_BACKOFF_SECONDS, ge=0, description="Upper bound for a single backoff"
    )
    request_timeout_seconds: float = Field(
        default=REQUEST_TIMEOUT_SECONDS, gt=0, description="Per-request timeout in seconds"
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    json_logs: bool = Field(default=False, description="Render logs as JSON")

    @field_validator("network", mode="before")
    @classmethod
    def parse_network(cls, v) -> Network:
        """Parse network from its name."""
        if isinstance(v, str):
            try:
                return Network.from_name(v)
            except ConfigurationError as e:
                raise ValueError(str(e)) from e
        return v

    @field_validator("orderbook_api_url")
    @classmethod
    def validate_url(cls, v: str | None) -> str | None:
        """Validate URL format."""
        if v is None or v == "":
            return None
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v_upper

    @property
    def api_url(self) -> str:
        """Resolved orderbook API base URL."""
        return self.orderbook_api_url or self.network.api_url


def load_settings(env_file: str = ".env") -> Settings:
    """Load settings, reading ``env_file`` into the process environment first.

    Args:
        env_file: Path to a dotenv file (missing files are ignored)

    Returns:
        Settings: Validated settings
    """
    load_dotenv(env_file)
    return Settings()
