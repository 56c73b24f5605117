"""Summary statistics over transactions and matched trades."""

from typing import Literal

from roundtrip.engine.policies import opposite_direction
from roundtrip.models import MatchedTrade, StatsSummary, Transaction

WinRateBasis = Literal["transactions", "matched"]
WIN_RATE_BASES: tuple[str, ...] = ("transactions", "matched")


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator > 0 else 0.0


def calculate_yes_no_breakdown(transactions: list[Transaction]) -> dict[str, int]:
    """Count transactions per direction."""
    breakdown = {"Yes": 0, "No": 0}
    for transaction in transactions:
        breakdown[transaction.direction] += 1
    return breakdown


def calculate_exit_direction_breakdown(transactions: list[Transaction]) -> dict[str, float]:
    """Closed contracts per direction.
    
    Settlements count their contracts in the listed direction. Market exits
    with revenue count toward the opposite direction, using revenue as a
    stand-in for the closed contract count.
    """
    breakdown = {"Yes": 0.0, "No": 0.0}
    for transaction in transactions:
        if transaction.kind == "settlement":
            breakdown[transaction.direction] += transaction.contracts
        elif transaction.realized_revenue > 0:
            breakdown[opposite_direction(transaction.direction)] += transaction.realized_revenue
    return breakdown


def calculate_average_prices(transactions: list[Transaction]) -> tuple[float, float]:
    """Weighted average entry and exit price in cents over exit rows.
    
    Settlements are weighted by contracts and settle at 100 or 0. Market
    exits are weighted by realized revenue.
    
    Returns:
        Tuple of (average entry price, average exit price).
    """
    weighted_entry = 0.0
    weighted_exit = 0.0
    total_weight = 0.0

    for transaction in transactions:
        if transaction.kind == "settlement":
            if transaction.contracts > 0:
                weight = transaction.contracts
                weighted_entry += transaction.average_price * weight
                weighted_exit += (100 if transaction.realized_revenue > 0 else 0) * weight
                total_weight += weight
        elif transaction.realized_revenue > 0:
            weight = transaction.realized_revenue
            exit_price = 100 - transaction.average_price
            entry_price = (
                transaction.realized_cost * 100 - weight * transaction.average_price
            ) / weight
            weighted_entry += entry_price * weight
            weighted_exit += exit_price * weight
            total_weight += weight

    return _ratio(weighted_entry, total_weight), _ratio(weighted_exit, total_weight)


def calculate_weighted_holding_period(matched_trades: list[MatchedTrade]) -> float:
    """Entry-cost weighted mean holding period in days."""
    total_cost = sum(t.entry_cost for t in matched_trades)
    if total_cost <= 0:
        return 0.0
    return sum(t.holding_period_days * t.entry_cost for t in matched_trades) / total_cost


def calculate_win_rates(
    transactions: list[Transaction],
    matched_trades: list[MatchedTrade],
    basis: WinRateBasis = "transactions",
) -> tuple[float, float]:
    """Overall and settlement-only win rates.
    
    Args:
        transactions: Normalized transactions.
        matched_trades: Output of the lot matcher.
        basis: "transactions" counts exit rows by realized profit;
            "matched" counts matched trades by net profit.
            
    Returns:
        Tuple of (win rate, settlement win rate) as fractions.
    """
    if basis == "matched":
        wins = sum(1 for t in matched_trades if t.net_profit > 0)
        settled = [t for t in matched_trades if t.exit_type == "settlement"]
        settled_wins = sum(1 for t in settled if t.net_profit > 0)
        return _ratio(wins, len(matched_trades)), _ratio(settled_wins, len(settled))

    exits = [t for t in transactions if t.realized_revenue > 0]
    wins = sum(1 for t in exits if t.realized_profit > 0)
    settled = [t for t in transactions if t.kind == "settlement"]
    settled_wins = sum(1 for t in settled if t.realized_profit > 0)
    return _ratio(wins, len(exits)), _ratio(settled_wins, len(settled))


def calculate_basic_stats(
    transactions: list[Transaction],
    matched_trades: list[MatchedTrade],
    win_rate_basis: WinRateBasis = "transactions",
) -> StatsSummary:
    """Reduce transactions and matched trades to a StatsSummary.
    
    Fees and profit are summed over the raw ledger, independent of how
    well the rows matched.
    """
    avg_entry, avg_exit = calculate_average_prices(transactions)
    win_rate, settled_win_rate = calculate_win_rates(
        transactions, matched_trades, win_rate_basis
    )

    return StatsSummary(
        unique_tickers=len({t.ticker for t in transactions}),
        total_trades=len(transactions),
        yes_no_breakdown=calculate_yes_no_breakdown(transactions),
        exit_direction_breakdown=calculate_exit_direction_breakdown(transactions),
        total_fees=sum(t.fees for t in transactions),
        total_profit=sum(t.realized_profit for t in transactions),
        avg_contract_purchase_price=avg_entry,
        avg_contract_final_price=avg_exit,
        weighted_holding_period=max(calculate_weighted_holding_period(matched_trades), 0.0),
        win_rate=win_rate,
        settled_win_rate=settled_win_rate,
    )
