"""Transaction data model."""

from datetime import datetime
from typing import Literal
from pydantic import BaseModel, Field


class Transaction(BaseModel):
    """Represents one normalized row of the exchange transaction log."""

    ticker: str = Field(..., min_length=1, description="Instrument ticker")
    kind: Literal["trade", "settlement"] = Field(..., description="Row type")
    direction: Literal["Yes", "No"] = Field(..., description="Contract side")
    contracts: int = Field(..., ge=0, description="Number of contracts")
    average_price: float = Field(..., ge=0, le=100, description="Average price in cents")
    realized_revenue: float = Field(default=0.0, description="Realized revenue in dollars")
    realized_cost: float = Field(default=0.0, description="Realized cost in dollars")
    realized_profit: float = Field(default=0.0, description="Realized profit in dollars")
    fees: float = Field(default=0.0, ge=0, description="Fees paid in dollars")
    created: str = Field(default="", description="Raw timestamp text")
    timestamp: datetime = Field(..., description="Timezone-aware execution instant")
    trade_cost: float = Field(default=0.0, ge=0, description="Derived cost basis in dollars")
    degraded_timestamp: bool = Field(
        default=False, description="True when the timestamp could not be parsed"
    )

    model_config = {"frozen": True}

    @property
    def is_entry(self) -> bool:
        """An opening trade: a market trade with no realized profit."""
        return self.kind == "trade" and self.realized_profit == 0

    @property
    def is_exit(self) -> bool:
        """A settlement, or a market trade that realized profit."""
        return self.kind == "settlement" or (
            self.kind == "trade" and self.realized_profit != 0
        )
