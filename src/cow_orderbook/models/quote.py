"""Quote request and response models."""

from datetime import datetime
from typing import Any

from pydantic import Field, model_validator

from ..core.enums import OrderKind, PriceQuality, SigningScheme, TokenBalance
from ..primitives.app_data import AppDataHash
from ..primitives.types import U256, Address
from .base import ApiModel


class PartialOrder(ApiModel):
    """Quote request for ``POST /api/v1/quote``.

    Sell orders fix either ``sell_amount_before_fee`` or
    ``sell_amount_after_fee``; buy orders fix ``buy_amount_after_fee``.
    """

    sell_token: Address
    buy_token: Address
    receiver: Address | None = None
    from_: Address = Field(..., alias="from", description="Account that will sign the order")
    kind: OrderKind
    sell_amount_before_fee: U256 | None = None
    sell_amount_after_fee: U256 | None = None
    buy_amount_after_fee: U256 | None = None
    valid_to: int | None = Field(None, ge=0)
    valid_for: int | None = Field(None, ge=0)
    app_data: str | None = None
    app_data_hash: AppDataHash | None = None
    sell_token_balance: TokenBalance = TokenBalance.ERC20
    buy_token_balance: TokenBalance = TokenBalance.ERC20
    price_quality: PriceQuality = PriceQuality.VERIFIED
    signing_scheme: SigningScheme = SigningScheme.EIP712
    onchain_order: bool = False

    @model_validator(mode="after")
    def validate_amounts(self) -> "PartialOrder":
        """Validate exactly one amount matching the order kind is set."""
        sell_amounts = [
            a for a in (self.sell_amount_before_fee, self.sell_amount_after_fee) if a is not None
        ]

        if self.kind == OrderKind.SELL:
            if len(sell_amounts) != 1 or self.buy_amount_after_fee is not None:
                raise ValueError(
                    "Sell quotes need one of sell_amount_before_fee or sell_amount_after_fee"
                )
        elif self.buy_amount_after_fee is None or sell_amounts:
            raise ValueError("Buy quotes need buy_amount_after_fee and no sell amount")

        if self.valid_to is not None and self.valid_for is not None:
            raise ValueError("valid_to and valid_for are mutually exclusive")

        return self


class QuoteResponse(ApiModel):
    """Price and fee quote returned for a partial order."""

    # Order parameters proposed by the quoter (schema not stabilized upstream)
    quote: dict[str, Any]
    from_: Address = Field(..., alias="from")
    expiration: datetime
    id: int | None = Field(None, description="Quote id to reference when creating the order")
    verified: bool = False
