"""MatchedTrade data model."""

from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field


class MatchedTrade(BaseModel):
    """A closed round trip produced by the lot matcher."""

    ticker: str = Field(..., min_length=1, description="Instrument ticker")
    lot_id: int = Field(..., ge=0, description="Lot the contracts were taken from")
    entry_date: datetime = Field(..., description="Entry timestamp")
    exit_date: datetime = Field(..., description="Exit timestamp")
    entry_direction: Literal["Yes", "No"] = Field(..., description="Side of the entry lot")
    exit_direction: Literal["Yes", "No"] = Field(..., description="Side of the exit row")
    exit_type: Literal["trade", "settlement"] = Field(..., description="How the lot was closed")
    contracts: int = Field(..., gt=0, description="Contracts closed")
    entry_cost: float = Field(..., description="Entry cost share in dollars")
    realized_profit: float = Field(..., description="Gross profit in dollars")
    net_profit: float = Field(..., description="Profit after fees in dollars")
    holding_period_days: float = Field(..., description="Exit minus entry, in days")
    roi: Optional[float] = Field(default=None, description="Net profit over entry cost")
    entry_fee: float = Field(..., ge=0, description="Entry fee share")
    exit_fee: float = Field(..., ge=0, description="Exit fee share")
    total_fees: float = Field(..., ge=0, description="Entry plus exit fee shares")
    entry_price: float = Field(..., description="Entry price in cents")
    exit_price: float = Field(..., description="Exit price in cents")
    is_offsetting: bool = Field(default=False, description="Closed via the opposite side")

    model_config = {"frozen": True}
