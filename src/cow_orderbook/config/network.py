"""Network selection for the orderbook API."""

from enum import Enum

from src.cow_orderbook.config.constants import (
    ARBITRUM_PROD_API_URL,
    ARBITRUM_RPC_URL,
    ARBITRUM_STAGING_API_URL,
    BASE_PROD_API_URL,
    BASE_RPC_URL,
    BASE_STAGING_API_URL,
    GNOSIS_PROD_API_URL,
    GNOSIS_RPC_URL,
    GNOSIS_STAGING_API_URL,
    LOCAL_API_URL,
    LOCAL_RPC_URL,
    MAINNET_PROD_API_URL,
    MAINNET_RPC_URL,
    MAINNET_STAGING_API_URL,
    SEPOLIA_PROD_API_URL,
    SEPOLIA_RPC_URL,
    SEPOLIA_STAGING_API_URL,
)
from src.cow_orderbook.core.exceptions import ConfigurationError


class Network(str, Enum):
    """Deployed orderbook environments, keyed by their CLI/env name."""

    MAINNET = "mainnet"
    MAINNET_STAGING = "mainnet-staging"
    SEPOLIA = "sepolia"
    SEPOLIA_STAGING = "sepolia-staging"
    BASE = "base"
    BASE_STAGING = "base-staging"
    ARBITRUM = "arbitrum"
    ARBITRUM_STAGING = "arbitrum-staging"
    GNOSIS = "gnosis"
    GNOSIS_STAGING = "gnosis-staging"
    LOCAL = "local"

    @classmethod
    def from_name(cls, name: str) -> "Network":
        """Look up a network by name (case-insensitive).

        Raises:
            ConfigurationError: If the name is unknown
        """
        try:
            return cls(name.strip().lower())
        except ValueError as e:
            raise ConfigurationError(f"Network not found: {name}") from e

    @property
    def api_url(self) -> str:
        """Orderbook API base URL for this network."""
        return _API_URLS[self]

    @property
    def rpc_url(self) -> str:
        """JSON-RPC base URL for this network's chain."""
        return _RPC_URLS[self]

    @property
    def is_staging(self) -> bool:
        return self.value.endswith("-staging")

    def __str__(self) -> str:
        return self.value


_API_URLS = {
    Network.MAINNET: MAINNET_PROD_API_URL,
    Network.MAINNET_STAGING: MAINNET_STAGING_API_URL,
    Network.SEPOLIA: SEPOLIA_PROD_API_URL,
    Network.SEPOLIA_STAGING: SEPOLIA_STAGING_API_URL,
    Network.BASE: BASE_PROD_API_URL,
    Network.BASE_STAGING: BASE_STAGING_API_URL,
    Network.ARBITRUM: ARBITRUM_PROD_API_URL,
    Network.ARBITRUM_STAGING: ARBITRUM_STAGING_API_URL,
    Network.GNOSIS: GNOSIS_PROD_API_URL,
    Network.GNOSIS_STAGING: GNOSIS_STAGING_API_URL,
    Network.LOCAL: LOCAL_API_URL,
}

_RPC_URLS = {
    Network.MAINNET: MAINNET_RPC_URL,
    Network.MAINNET_STAGING: MAINNET_RPC_URL,
    Network.SEPOLIA: SEPOLIA_RPC_URL,
    Network.SEPOLIA_STAGING: SEPOLIA_RPC_URL,
    Network.BASE: BASE_RPC_URL,
    Network.BASE_STAGING: BASE_RPC_URL,
    Network.ARBITRUM: ARBITRUM_RPC_URL,
    Network.ARBITRUM_STAGING: ARBITRUM_RPC_URL,
    Network.GNOSIS: GNOSIS_RPC_URL,
    Network.GNOSIS_STAGING: GNOSIS_RPC_URL,
    Network.LOCAL: LOCAL_RPC_URL,
}
