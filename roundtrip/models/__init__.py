"""Data models for roundtrip."""

from roundtrip.models.transaction import Transaction
from roundtrip.models.lot import OpenLot
from roundtrip.models.matched_trade import MatchedTrade
from roundtrip.models.report import (
    DegradedTimestamp,
    MatchReport,
    OversizedExit,
    RowError,
    UnmatchedExit,
)
from roundtrip.models.stats import RiskMetrics, StatsSummary
from roundtrip.models.processed import ProcessedData

__all__ = [
    "DegradedTimestamp",
    "MatchedTrade",
    "MatchReport",
    "OpenLot",
    "OversizedExit",
    "ProcessedData",
    "RiskMetrics",
    "RowError",
    "StatsSummary",
    "Transaction",
    "UnmatchedExit",
]
