"""Core enumerations for the orderbook API wire format."""

from enum import Enum


class OrderKind(str, Enum):
    """Which side of the order has a fixed amount."""

    SELL = "sell"
    BUY = "buy"


class OrderClass(str, Enum):
    """Order class assigned by the orderbook."""

    MARKET = "market"
    LIMIT = "limit"
    LIQUIDITY = "liquidity"


class OrderStatus(str, Enum):
    """Lifecycle status of a stored order."""

    PRESIGNATURE_PENDING = "presignaturePending"
    OPEN = "open"
    FULFILLED = "fulfilled"
    CANCELLED = "cancelled"
    EXPIRED = "expired"


class CompetitionOrderStatus(str, Enum):
    """Status of an order within the solver competition."""

    OPEN = "open"
    SCHEDULED = "scheduled"
    ACTIVE = "active"
    SOLVED = "solved"
    EXECUTING = "executing"
    TRADED = "traded"
    CANCELLED = "cancelled"


class SigningScheme(str, Enum):
    """How the order signature was produced."""

    EIP712 = "eip712"
    ETHSIGN = "ethsign"
    EIP1271 = "eip1271"
    PRESIGN = "presign"


class TokenBalance(str, Enum):
    """Where token balances are taken from or paid to."""

    ERC20 = "erc20"
    EXTERNAL = "external"
    INTERNAL = "internal"


class PriceQuality(str, Enum):
    """Quote quality requested from the price estimators."""

    FAST = "fast"
    OPTIMAL = "optimal"
    VERIFIED = "verified"


class HttpMethod(str, Enum):
    """HTTP methods used by the orderbook API."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
