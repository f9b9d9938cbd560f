"""Small response records."""

from pydantic import Field

from ..primitives.types import U256
from .base import ApiModel


class TokenPriceResponse(ApiModel):
    """Price of a token in the chain's native token (``/token/{addr}/native_price``)."""

    price: float = Field(..., ge=0)


class TotalSurplusResponse(ApiModel):
    """Total surplus a user received across all trades. Unstable upstream."""

    total_surplus: U256


class AppDataResponse(ApiModel):
    """Stored app data document (``/app_data/{hash}``)."""

    full_app_data: str
