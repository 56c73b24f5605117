"""Risk-adjusted return metrics from matched trades.

Builds a synthetic daily portfolio value series: every day starts at the
initial capital and from each trade's exit day onward the value carries
the cumulative realized profit. The Sharpe-like ratio uses the mean daily
return with no risk-free rate subtracted.
"""

import math

import pandas as pd

from roundtrip.models import MatchedTrade, RiskMetrics

TRADING_DAYS_PER_YEAR = 252


def _day(value) -> pd.Timestamp:
    stamp = pd.Timestamp(value)
    if stamp.tzinfo is None:
        stamp = stamp.tz_localize("UTC")
    return stamp.tz_convert("UTC").normalize().tz_localize(None)


def build_portfolio_series(
    matched_trades: list[MatchedTrade],
    initial_capital: float,
) -> pd.Series:
    """Daily portfolio values from the first entry day to the last exit day.
    
    Args:
        matched_trades: Output of the lot matcher.
        initial_capital: Starting account value.
        
    Returns:
        Series indexed by UTC calendar day. Empty when there are no trades.
    """
    if not matched_trades:
        return pd.Series(dtype=float)

    start = min(_day(t.entry_date) for t in matched_trades)
    end = max(_day(t.exit_date) for t in matched_trades)
    days = pd.date_range(start, end, freq="D")
    values = pd.Series(float(initial_capital), index=days)

    cumulative_profit = 0.0
    for trade in sorted(matched_trades, key=lambda t: t.exit_date):
        cumulative_profit += trade.realized_profit
        values.loc[_day(trade.exit_date):] = initial_capital + cumulative_profit

    return values


def calculate_daily_returns(values: pd.Series) -> list[float]:
    """Day-over-day simple returns, skipping days that follow a non-positive value."""
    returns = []
    previous = values.tolist()
    for yesterday, today in zip(previous, previous[1:]):
        if yesterday > 0:
            returns.append((today - yesterday) / yesterday)
    return returns


def calculate_risk_metrics(
    matched_trades: list[MatchedTrade],
    initial_capital: float,
) -> RiskMetrics:
    """Compute volatility and Sharpe-like metrics.
    
    Args:
        matched_trades: Output of the lot matcher.
        initial_capital: Starting account value, must be positive.
        
    Returns:
        RiskMetrics. All zeros when there are no trades, no capital,
        or no day with a nonzero return.
    """
    empty = RiskMetrics(initial_capital=initial_capital)
    if not matched_trades or initial_capital <= 0:
        return empty

    values = build_portfolio_series(matched_trades, initial_capital)
    daily_returns = calculate_daily_returns(values)

    trading_days = sum(1 for r in daily_returns if abs(r) > 0)
    if trading_days == 0:
        return empty

    avg_daily_return = sum(daily_returns) / len(daily_returns)
    variance = sum((r - avg_daily_return) ** 2 for r in daily_returns) / len(daily_returns)
    standard_deviation = math.sqrt(variance)

    final_value = float(values.iloc[-1])
    total_return = (final_value - initial_capital) / initial_capital

    sharpe = avg_daily_return / standard_deviation if standard_deviation != 0 else 0.0

    return RiskMetrics(
        total_return=total_return,
        standard_deviation=standard_deviation,
        annualized_sharpe=sharpe * math.sqrt(TRADING_DAYS_PER_YEAR),
        trading_days=trading_days,
        avg_daily_return=avg_daily_return,
        annualized_return=avg_daily_return * TRADING_DAYS_PER_YEAR,
        annualized_volatility=standard_deviation * math.sqrt(TRADING_DAYS_PER_YEAR),
        initial_capital=initial_capital,
    )
