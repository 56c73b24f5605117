"""OpenLot data model."""

from datetime import datetime
from typing import Literal
from pydantic import BaseModel, Field


class OpenLot(BaseModel):
    """An open chunk of a position awaiting FIFO attribution.

    Lots are mutated in place while matching: ``contracts`` tracks the
    open part of the lot. ``entry_fee`` and ``cost`` start as the totals for
    the original size and only shrink under the ``consumed`` fee allocation.
    """

    lot_id: int = Field(..., ge=0, description="Sequence number of the lot")
    ticker: str = Field(..., min_length=1, description="Instrument ticker")
    direction: Literal["Yes", "No"] = Field(..., description="Contract side")
    original_contracts: int = Field(..., ge=0, description="Contracts at entry")
    contracts: int = Field(..., ge=0, description="Contracts still open")
    average_price: float = Field(..., ge=0, le=100, description="Entry price in cents")
    entry_date: datetime = Field(..., description="Entry timestamp")
    entry_fee: float = Field(default=0.0, ge=0, description="Entry fee basis for pro-rating")
    cost: float = Field(default=0.0, ge=0, description="Cost basis for pro-rating")
    is_closed: bool = Field(default=False, description="All contracts matched")
