"""Report views over matched trades: P&L curve, notable and recent trades."""

from datetime import datetime, timedelta
from typing import Optional

from pydantic import BaseModel, Field

from roundtrip.models import MatchedTrade


class PnlPoint(BaseModel):
    """One point of the cumulative P&L curve."""

    timestamp: datetime
    pnl: float

    model_config = {"frozen": True}


class TickerResult(BaseModel):
    """Aggregated price-difference P&L for one ticker."""

    ticker: str
    profit: float

    model_config = {"frozen": True}


class NotableTrades(BaseModel):
    """Best and worst tickers, the highest-ROI trade and average P&L per dollar."""

    biggest_win: Optional[TickerResult] = None
    biggest_loss: Optional[TickerResult] = None
    highest_roi: Optional[MatchedTrade] = None
    avg_pnl_per_dollar_risked: float = Field(default=0.0)

    model_config = {"frozen": True}


def cumulative_pnl(matched_trades: list[MatchedTrade]) -> list[PnlPoint]:
    """Cumulative net profit at each exit, starting from zero a day before the first."""
    if not matched_trades:
        return []

    ordered = sorted(matched_trades, key=lambda t: t.exit_date)
    points = [PnlPoint(timestamp=ordered[0].exit_date - timedelta(days=1), pnl=0.0)]

    running = 0.0
    for trade in ordered:
        running += trade.net_profit
        points.append(PnlPoint(timestamp=trade.exit_date, pnl=running))
    return points


def profit_by_ticker(matched_trades: list[MatchedTrade]) -> dict[str, float]:
    """Price-difference P&L per ticker: (exit - entry) * contracts / 100."""
    totals: dict[str, float] = {}
    for trade in matched_trades:
        profit = (trade.exit_price - trade.entry_price) * trade.contracts / 100
        totals[trade.ticker] = totals.get(trade.ticker, 0.0) + profit
    return totals


def notable_trades(matched_trades: list[MatchedTrade]) -> NotableTrades:
    """Pick out the trades worth calling out in a summary."""
    if not matched_trades:
        return NotableTrades()

    totals = profit_by_ticker(matched_trades)
    # First ticker wins ties
    best = max(totals.items(), key=lambda item: item[1])
    worst = min(totals.items(), key=lambda item: item[1])

    with_roi = [t for t in matched_trades if t.roi is not None]
    highest = max(with_roi, key=lambda t: t.roi) if with_roi else None

    risked = [t.net_profit / t.entry_cost for t in matched_trades if t.entry_cost]
    avg_per_dollar = sum(risked) / len(risked) if risked else 0.0

    return NotableTrades(
        biggest_win=TickerResult(ticker=best[0], profit=best[1]),
        biggest_loss=TickerResult(ticker=worst[0], profit=worst[1]),
        highest_roi=highest,
        avg_pnl_per_dollar_risked=avg_per_dollar,
    )


def recent_trades(matched_trades: list[MatchedTrade], limit: int = 5) -> list[MatchedTrade]:
    """Most recent exits first."""
    return sorted(matched_trades, key=lambda t: t.exit_date, reverse=True)[:limit]


def settlement_breakdown(matched_trades: list[MatchedTrade]) -> dict[str, int]:
    """Count matched trades closed by settlement versus market exit."""
    breakdown = {"settlement": 0, "exit": 0}
    for trade in matched_trades:
        key = "settlement" if trade.exit_type == "settlement" else "exit"
        breakdown[key] += 1
    return breakdown
