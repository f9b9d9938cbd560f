"""Constants for the orderbook API client."""

# Orderbook API base URLs
# Source: https://docs.cow.fi/cow-protocol/reference/apis/orderbook
MAINNET_PROD_API_URL = "https://api.cow.fi/mainnet"
MAINNET_STAGING_API_URL = "https://barn.api.cow.fi/mainnet"
SEPOLIA_PROD_API_URL = "https://api.cow.fi/sepolia"
SEPOLIA_STAGING_API_URL = "https://barn.api.cow.fi/sepolia"
BASE_PROD_API_URL = "https://api.cow.fi/base"
BASE_STAGING_API_URL = "https://barn.api.cow.fi/base"
ARBITRUM_PROD_API_URL = "https://api.cow.fi/arbitrum_one"
ARBITRUM_STAGING_API_URL = "https://barn.api.cow.fi/arbitrum_one"
GNOSIS_PROD_API_URL = "https://api.cow.fi/xdai"
GNOSIS_STAGING_API_URL = "https://barn.api.cow.fi/xdai"
LOCAL_API_URL = "http://localhost:8080"

# RPC URLs (project id appended by the caller)
MAINNET_RPC_URL = "https://mainnet.infura.io/v3/"
SEPOLIA_RPC_URL = "https://sepolia.infura.io/v3/"
BASE_RPC_URL = "https://base.infura.io/v3/"
ARBITRUM_RPC_URL = "https://arbitrum.infura.io/v3/"
GNOSIS_RPC_URL = "https://xdai.infura.io/v3/"
LOCAL_RPC_URL = "http://localhost:8545"

# API path prefix shared by all endpoints
API_V1_PREFIX = "/api/v1"

# Retry Configuration
MAX_RETRIES = 3
RETRY_BACKOFF_SECONDS = 0.5
RETRY_MAX_BACKOFF_SECONDS = 8.0

# 4xx statuses worth another attempt (request timeout, rate limiting); any 5xx is retried too
TRANSIENT_STATUS_CODES = frozenset({408, 429})

# Request Configuration
REQUEST_TIMEOUT_SECONDS = 30.0
JSON_CONTENT_TYPE = "application/json"
