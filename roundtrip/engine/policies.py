"""Matching policies for the lot matcher.

Two variants of market-exit accounting exist in exchange exports:

- ``realized``: same-side exits take their share of the row's realized
  profit; opposite-side exits use the price complement.
- ``complement``: every market exit uses the price complement and reports
  ``100 - exit price`` as the effective exit price.

Settlements are always pro-rated from the row's realized profit.

Fees and cost basis are split per closed contract in one of two ways:

- ``ledger``: the lot keeps its full entry fee and cost, and each close
  takes ``closed / remaining`` of them; the exit fee is split the same way
  over the exit's remaining contracts.
- ``consumed``: each close also subtracts its share from the lot and the
  exit, so the shares sum to the ledger fee and cost.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field

ProfitMethod = Literal["realized", "complement"]
PROFIT_METHODS: tuple[str, ...] = ("realized", "complement")

FeeAllocation = Literal["ledger", "consumed"]
FEE_ALLOCATIONS: tuple[str, ...] = ("ledger", "consumed")


def opposite_direction(direction: str) -> str:
    """Return the other side of a binary contract."""
    return "No" if direction == "Yes" else "Yes"


class MatchingPolicy(BaseModel):
    """Configuration for how exits are attributed to open lots."""

    profit_method: ProfitMethod = Field(
        default="realized", description="Profit rule for market exits"
    )
    max_abs_roi: Optional[float] = Field(
        default=None, gt=0, description="Discard matched trades with |ROI| at or above this"
    )
    fee_allocation: FeeAllocation = Field(
        default="ledger", description="How fees and cost basis are split across closes"
    )

    model_config = {"frozen": True}

    def settlement_close(
        self,
        realized_profit: float,
        exit_contracts: int,
        contracts_closed: int,
        exit_price: float,
    ) -> tuple[float, float]:
        """Profit and exit price for contracts closed by a settlement."""
        per_contract = realized_profit / exit_contracts if exit_contracts else 0.0
        return per_contract * contracts_closed, exit_price

    def market_close(
        self,
        entry_price: float,
        entry_direction: str,
        exit_direction: str,
        exit_average_price: float,
        realized_profit: float,
        exit_contracts: int,
        contracts_closed: int,
    ) -> tuple[float, float]:
        """Profit and reported exit price for contracts closed by a market trade.
        
        Args:
            entry_price: Lot entry price in cents.
            entry_direction: Side of the lot.
            exit_direction: Side of the exit row.
            exit_average_price: Exit row average price in cents.
            realized_profit: Exit row realized profit in dollars.
            exit_contracts: Contracts on the exit row.
            contracts_closed: Contracts closed against this lot.
            
        Returns:
            Tuple of (profit in dollars, exit price in cents).
        """
        if self.profit_method == "realized" and entry_direction == exit_direction:
            per_contract = realized_profit / exit_contracts if exit_contracts else 0.0
            return per_contract * contracts_closed, exit_average_price

        # Selling the other side nets the complement of both prices
        profit = contracts_closed * (100 - entry_price - exit_average_price) / 100
        return profit, 100 - exit_average_price

    @property
    def consumes_fees(self) -> bool:
        """Whether closes subtract their fee and cost shares from the lot and exit."""
        return self.fee_allocation == "consumed"

    def keeps(self, roi: Optional[float]) -> bool:
        """Whether a matched trade with this ROI survives the outlier filter."""
        if self.max_abs_roi is None or roi is None:
            return True
        return abs(roi) < self.max_abs_roi
