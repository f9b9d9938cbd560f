"""Solver competition models."""

from typing import Any

from pydantic import Field

from ..core.enums import CompetitionOrderStatus
from ..primitives.types import U256, TxHash
from .base import ApiModel


class ExecutedAmounts(ApiModel):
    """Amounts a solver proposed to execute for an order."""

    sell: U256
    buy: U256


class SolutionInclusion(ApiModel):
    """A solver's proposed solution touching an order."""

    solver: str = Field(..., description="Name of the solver")
    executed_amounts: ExecutedAmounts | None = Field(
        None, description="Only present for solutions that include the order"
    )


class CompetitionOrderStatusResponse(ApiModel):
    """Status of an order in the current auction (``/orders/{uid}/status``)."""

    type: CompetitionOrderStatus
    value: list[SolutionInclusion] = Field(default_factory=list)


class SolverCompetitionResponse(ApiModel):
    """Outcome of one auction's solver competition."""

    auction_id: int
    transaction_hashes: list[TxHash] = Field(default_factory=list)
    auction_start_block: int
    competition_simulation_block: int
    liquidity_collected_block: int | None = None
    gap_price: U256 | None = None
    # Auction and solutions payloads are unstable upstream
    auction: dict[str, Any] | None = None
    solutions: list[dict[str, Any]] | None = None
