"""Lot-matching engine."""

from roundtrip.engine.matcher import LotMatcher, MatchResult, match_trades_fifo, sort_transactions
from roundtrip.engine.policies import (
    FEE_ALLOCATIONS,
    PROFIT_METHODS,
    MatchingPolicy,
    opposite_direction,
)

__all__ = [
    "FEE_ALLOCATIONS",
    "PROFIT_METHODS",
    "LotMatcher",
    "MatchingPolicy",
    "MatchResult",
    "match_trades_fifo",
    "opposite_direction",
    "sort_transactions",
]
