"""Order models."""

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from ..core.enums import OrderClass, OrderKind, OrderStatus, SigningScheme, TokenBalance
from ..primitives.app_data import AppDataHash
from ..primitives.order_uid import OrderUid
from ..primitives.types import U256, Address
from .base import ApiModel


class Interaction(ApiModel):
    """Contract call executed before or after settling an order."""

    target: Address = Field(..., description="Contract called")
    value: U256 = Field(..., description="Native token value sent with the call")
    call_data: str = Field(..., description="ABI-encoded call data")


class Interactions(ApiModel):
    """Pre- and post-settlement hooks of an order."""

    pre: list[Interaction] = Field(default_factory=list)
    post: list[Interaction] = Field(default_factory=list)


class QuoteMetadata(ApiModel):
    """Solver metadata attached to a stored quote."""

    version: str | None = None
    interactions: list[Interaction] = Field(default_factory=list)
    pre_interactions: list[Any] = Field(default_factory=list)
    jit_orders: list[Any] = Field(default_factory=list)


class OrderQuote(ApiModel):
    """Quote the order was created from."""

    gas_amount: str = Field(..., description="Estimated gas units")
    gas_price: str = Field(..., description="Gas price at quote time")
    sell_token_price: str = Field(..., description="Sell token price in native token")
    sell_amount: U256
    buy_amount: U256
    fee_amount: U256 | None = None
    solver: Address | None = None
    verified: bool = False
    metadata: QuoteMetadata | None = None


class Order(ApiModel):
    """Order as stored by the orderbook."""

    uid: OrderUid = Field(..., description="Unique order identifier")
    owner: Address = Field(..., description="Order owner")
    creation_date: datetime = Field(..., description="When the order was accepted")

    # Signed order data
    sell_token: Address
    buy_token: Address
    receiver: Address | None = Field(None, description="Proceeds receiver (owner if None)")
    sell_amount: U256
    buy_amount: U256
    valid_to: int = Field(..., ge=0, description="Expiry as a Unix timestamp")
    app_data: str = Field(..., description="App data hash or document")
    fee_amount: U256
    kind: OrderKind
    partially_fillable: bool
    sell_token_balance: TokenBalance = TokenBalance.ERC20
    buy_token_balance: TokenBalance = TokenBalance.ERC20
    signing_scheme: SigningScheme
    signature: str

    # Execution state
    status: OrderStatus
    order_class: OrderClass = Field(..., alias="class")
    executed_sell_amount: U256
    executed_sell_amount_before_fees: U256
    executed_buy_amount: U256
    executed_fee_amount: U256
    executed_fee: U256 | None = None
    executed_fee_token: Address | None = None
    invalidated: bool
    available_balance: U256 | None = None

    # Metadata
    full_app_data: str | None = None
    settlement_contract: Address | None = None
    is_liquidity_order: bool = False
    interactions: Interactions = Field(default_factory=Interactions)
    quote: OrderQuote | None = None

    @property
    def is_fully_executed(self) -> bool:
        """Check if the fixed side of the order is completely executed."""
        if self.kind == OrderKind.SELL:
            return self.executed_sell_amount_before_fees >= self.sell_amount
        return self.executed_buy_amount >= self.buy_amount

    @property
    def is_active(self) -> bool:
        """Check if the order can still be filled."""
        return self.status in (OrderStatus.OPEN, OrderStatus.PRESIGNATURE_PENDING)


class OrderCreation(ApiModel):
    """Signed order submitted to ``POST /api/v1/orders``.

    The signature is produced by the caller; this client does not sign.
    """

    sell_token: Address
    buy_token: Address
    receiver: Address | None = None
    sell_amount: U256
    buy_amount: U256
    valid_to: int = Field(..., ge=0, le=2**32 - 1)
    app_data: str = Field(..., description="App data document (JSON text) or its hash")
    app_data_hash: AppDataHash | None = None
    fee_amount: U256 = 0
    kind: OrderKind
    partially_fillable: bool = False
    sell_token_balance: TokenBalance = TokenBalance.ERC20
    buy_token_balance: TokenBalance = TokenBalance.ERC20
    signing_scheme: SigningScheme
    signature: str
    from_: Address | None = Field(None, alias="from", description="Expected owner")
    quote_id: int | None = None

    @field_validator("signature")
    @classmethod
    def validate_signature(cls, v: str) -> str:
        """Validate signature is 0x-prefixed hex."""
        if not v.startswith("0x"):
            raise ValueError("Signature must be a 0x-prefixed hex string")
        try:
            bytes.fromhex(v[2:])
        except ValueError as e:
            raise ValueError("Signature must be a valid hexadecimal string") from e
        return v


class OrderCancellations(ApiModel):
    """Signed cancellation of one or more orders (``DELETE /api/v1/orders``)."""

    order_uids: list[OrderUid] = Field(..., min_length=1)
    signature: str
    signing_scheme: SigningScheme
