"""Trade model."""

from typing import Any

from pydantic import Field

from ..primitives.order_uid import OrderUid
from ..primitives.types import U256, Address, TxHash
from .base import ApiModel


class Trade(ApiModel):
    """Settlement of (part of) an order, as reported by ``GET /api/v1/trades``."""

    block_number: int = Field(..., ge=0, description="Block the trade was settled in")
    log_index: int = Field(..., ge=0, description="Log index of the Trade event")
    order_uid: OrderUid
    owner: Address | None = None
    sell_token: Address
    buy_token: Address
    sell_amount: U256 = Field(..., description="Sell amount including fees")
    sell_amount_before_fees: U256
    buy_amount: U256
    tx_hash: TxHash | None = Field(None, description="Settlement transaction (None while pending)")
    # Fee policy shapes are still evolving upstream
    executed_protocol_fees: list[dict[str, Any]] = Field(default_factory=list)

    @property
    def fee_amount(self) -> int:
        """Part of the sell amount paid as fees."""
        return self.sell_amount - self.sell_amount_before_fees

    def __str__(self) -> str:
        """String representation of trade."""
        return f"Trade({self.order_uid}, block={self.block_number}, log={self.log_index})"
