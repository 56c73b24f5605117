"""Diagnostic models returned alongside processing results."""

from datetime import datetime
from typing import Literal
from pydantic import BaseModel, Field

from roundtrip.models.lot import OpenLot


class RowError(BaseModel):
    """A row that was dropped during normalization."""

    row_number: int = Field(..., ge=0, description="Zero-based row index")
    message: str = Field(..., description="Why the row was dropped")

    model_config = {"frozen": True}


class DegradedTimestamp(BaseModel):
    """A row whose timestamp was replaced with the current time."""

    row_number: int = Field(..., ge=0, description="Zero-based row index")
    ticker: str = Field(default="", description="Instrument ticker")
    created: str = Field(default="", description="Unparseable timestamp text")

    model_config = {"frozen": True}


class UnmatchedExit(BaseModel):
    """An exit with no compatible open lot."""

    ticker: str = Field(..., description="Instrument ticker")
    direction: Literal["Yes", "No"] = Field(..., description="Exit side")
    exit_type: Literal["trade", "settlement"] = Field(..., description="Exit kind")
    contracts: int = Field(..., ge=0, description="Contracts on the exit row")
    timestamp: datetime = Field(..., description="Exit timestamp")

    model_config = {"frozen": True}


class OversizedExit(BaseModel):
    """An exit larger than the open contracts available to it."""

    ticker: str = Field(..., description="Instrument ticker")
    direction: Literal["Yes", "No"] = Field(..., description="Exit side")
    contracts: int = Field(..., ge=0, description="Contracts on the exit row")
    dropped_contracts: int = Field(..., gt=0, description="Contracts left unmatched")
    timestamp: datetime = Field(..., description="Exit timestamp")

    model_config = {"frozen": True}


class MatchReport(BaseModel):
    """Statistics collected during one matching pass."""

    entries: int = Field(default=0, ge=0, description="Entry transactions processed")
    exits: int = Field(default=0, ge=0, description="Exit transactions processed")
    unmatched_exits: int = Field(default=0, ge=0, description="Exits with no open lot")
    oversized_exits: int = Field(default=0, ge=0, description="Exits larger than open lots")
    dropped_contracts: int = Field(default=0, ge=0, description="Contracts dropped by oversized exits")
    filtered_trades: int = Field(default=0, ge=0, description="Trades removed by the ROI filter")
    unmatched: list[UnmatchedExit] = Field(default_factory=list)
    oversized: list[OversizedExit] = Field(default_factory=list)
    open_lots: list[OpenLot] = Field(default_factory=list)

    @property
    def open_lots_remaining(self) -> int:
        return len(self.open_lots)
