"""Statistics, risk metrics and report views."""

from roundtrip.analytics.insights import (
    NotableTrades,
    PnlPoint,
    cumulative_pnl,
    notable_trades,
    recent_trades,
    settlement_breakdown,
)
from roundtrip.analytics.risk import (
    TRADING_DAYS_PER_YEAR,
    build_portfolio_series,
    calculate_risk_metrics,
)
from roundtrip.analytics.stats import WIN_RATE_BASES, calculate_basic_stats

__all__ = [
    "TRADING_DAYS_PER_YEAR",
    "WIN_RATE_BASES",
    "NotableTrades",
    "PnlPoint",
    "build_portfolio_series",
    "calculate_basic_stats",
    "calculate_risk_metrics",
    "cumulative_pnl",
    "notable_trades",
    "recent_trades",
    "settlement_breakdown",
]
