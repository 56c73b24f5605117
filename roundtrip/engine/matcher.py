"""FIFO lot matcher.

Keeps one queue of open lots per ticker. Entries push a lot; exits walk
the ticker's lots oldest first and emit one MatchedTrade per lot touched.
An exit may close a lot of either side: closing a Yes lot with a No trade
is the mirrored close that binary contracts allow.
"""

import logging
from collections.abc import Iterable
from typing import Optional

from pydantic import BaseModel, Field

from roundtrip.engine.policies import MatchingPolicy, opposite_direction
from roundtrip.models import (
    MatchedTrade,
    MatchReport,
    OpenLot,
    OversizedExit,
    Transaction,
    UnmatchedExit,
)

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 3600


class MatchResult(BaseModel):
    """Output of one matching pass."""

    trades: list[MatchedTrade] = Field(default_factory=list)
    report: MatchReport = Field(default_factory=MatchReport)


def sort_transactions(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Sort transactions by timestamp, keeping input order for ties."""
    return sorted(transactions, key=lambda t: t.timestamp)


def settlement_exit_price(transaction: Transaction) -> float:
    """Per-contract settlement value in cents."""
    if transaction.contracts == 0:
        return 0.0
    return transaction.realized_revenue / transaction.contracts * 100


class LotMatcher:
    """Pairs exits with open lots first-in, first-out.
    
    A matcher instance holds the open-lot queues of a single pass; call
    ``match`` once per batch.
    """

    def __init__(self, policy: Optional[MatchingPolicy] = None):
        """Initialize the matcher.
        
        Args:
            policy: Matching policy. Defaults to MatchingPolicy().
        """
        self.policy = policy or MatchingPolicy()
        self._open_lots: dict[str, list[OpenLot]] = {}
        self._next_lot_id = 0
        self._trades: list[MatchedTrade] = []
        self._report = MatchReport()

    @property
    def open_lots(self) -> dict[str, list[OpenLot]]:
        """Open lots per ticker, oldest first."""
        return self._open_lots

    def match(self, transactions: Iterable[Transaction]) -> MatchResult:
        """Run the matcher over a batch of transactions.
        
        Args:
            transactions: Transactions in any order.
            
        Returns:
            MatchResult with matched trades and the pass report.
        """
        self._open_lots = {}
        self._next_lot_id = 0
        self._trades = []
        self._report = MatchReport()

        for transaction in sort_transactions(transactions):
            if transaction.is_entry:
                self._open(transaction)
            elif transaction.is_exit:
                self._close(transaction)

        # Closed lots are dropped once the pass is complete
        for ticker in list(self._open_lots):
            self._open_lots[ticker] = [lot for lot in self._open_lots[ticker] if not lot.is_closed]
            if not self._open_lots[ticker]:
                del self._open_lots[ticker]

        self._report.open_lots = [lot for lots in self._open_lots.values() for lot in lots]

        logger.info(
            "Matching statistics: entries=%d exits=%d unmatched=%d oversized=%d "
            "filtered=%d open_lots=%d",
            self._report.entries,
            self._report.exits,
            self._report.unmatched_exits,
            self._report.oversized_exits,
            self._report.filtered_trades,
            self._report.open_lots_remaining,
        )

        return MatchResult(trades=self._trades, report=self._report)

    def _open(self, transaction: Transaction) -> None:
        self._report.entries += 1
        if transaction.contracts == 0:
            logger.debug("Ignoring zero-contract entry for %s", transaction.ticker)
            return

        lot = OpenLot(
            lot_id=self._next_lot_id,
            ticker=transaction.ticker,
            direction=transaction.direction,
            original_contracts=transaction.contracts,
            contracts=transaction.contracts,
            average_price=transaction.average_price,
            entry_date=transaction.timestamp,
            entry_fee=transaction.fees,
            cost=transaction.trade_cost,
        )
        self._next_lot_id += 1
        self._open_lots.setdefault(transaction.ticker, []).append(lot)

    def _candidates(self, transaction: Transaction) -> list[OpenLot]:
        sides = {transaction.direction, opposite_direction(transaction.direction)}
        return [
            lot
            for lot in self._open_lots.get(transaction.ticker, [])
            if not lot.is_closed and lot.direction in sides
        ]

    def _close(self, transaction: Transaction) -> None:
        self._report.exits += 1

        candidates = self._candidates(transaction)
        if not candidates:
            logger.warning(
                "Exit without matching entry for %s (%s) on %s",
                transaction.ticker,
                transaction.direction,
                transaction.timestamp.isoformat(),
            )
            self._report.unmatched_exits += 1
            self._report.unmatched.append(UnmatchedExit(
                ticker=transaction.ticker,
                direction=transaction.direction,
                exit_type=transaction.kind,
                contracts=transaction.contracts,
                timestamp=transaction.timestamp,
            ))
            return

        is_settlement = transaction.kind == "settlement"
        exit_price = (
            settlement_exit_price(transaction) if is_settlement else transaction.average_price
        )
        exit_contracts = transaction.contracts
        contracts_to_close = exit_contracts
        exit_fee = transaction.fees

        for lot in candidates:
            if contracts_to_close <= 0:
                break

            lot_remaining = lot.contracts
            contracts_closed = min(contracts_to_close, lot_remaining)

            if is_settlement:
                profit, final_exit_price = self.policy.settlement_close(
                    transaction.realized_profit, exit_contracts, contracts_closed, exit_price
                )
            else:
                profit, final_exit_price = self.policy.market_close(
                    entry_price=lot.average_price,
                    entry_direction=lot.direction,
                    exit_direction=transaction.direction,
                    exit_average_price=transaction.average_price,
                    realized_profit=transaction.realized_profit,
                    exit_contracts=exit_contracts,
                    contracts_closed=contracts_closed,
                )

            lot_share = contracts_closed / lot_remaining
            entry_cost = lot.cost * lot_share
            entry_fee = lot.entry_fee * lot_share
            exit_fee_share = exit_fee * (contracts_closed / contracts_to_close)
            total_fees = entry_fee + exit_fee_share
            net_profit = profit - total_fees

            trade = MatchedTrade(
                ticker=lot.ticker,
                lot_id=lot.lot_id,
                entry_date=lot.entry_date,
                exit_date=transaction.timestamp,
                entry_direction=lot.direction,
                exit_direction=transaction.direction,
                exit_type=transaction.kind,
                contracts=contracts_closed,
                entry_cost=entry_cost,
                realized_profit=profit,
                net_profit=net_profit,
                holding_period_days=(
                    (transaction.timestamp - lot.entry_date).total_seconds() / SECONDS_PER_DAY
                ),
                roi=net_profit / entry_cost if entry_cost else None,
                entry_fee=entry_fee,
                exit_fee=exit_fee_share,
                total_fees=total_fees,
                entry_price=lot.average_price,
                exit_price=final_exit_price,
                is_offsetting=lot.direction != transaction.direction,
            )

            if self.policy.keeps(trade.roi):
                self._trades.append(trade)
            else:
                logger.debug("Filtered %s trade with ROI %.2f", trade.ticker, trade.roi)
                self._report.filtered_trades += 1

            lot.contracts -= contracts_closed
            contracts_to_close -= contracts_closed
            if self.policy.consumes_fees:
                lot.cost -= entry_cost
                lot.entry_fee -= entry_fee
                exit_fee -= exit_fee_share
            if lot.contracts <= 0:
                lot.contracts = 0
                lot.cost = 0.0
                lot.entry_fee = 0.0
                lot.is_closed = True

        if contracts_to_close > 0:
            logger.warning(
                "Exit for %s (%s) on %s exceeds open contracts, dropping %d",
                transaction.ticker,
                transaction.direction,
                transaction.timestamp.isoformat(),
                contracts_to_close,
            )
            self._report.oversized_exits += 1
            self._report.dropped_contracts += contracts_to_close
            self._report.oversized.append(OversizedExit(
                ticker=transaction.ticker,
                direction=transaction.direction,
                contracts=exit_contracts,
                dropped_contracts=contracts_to_close,
                timestamp=transaction.timestamp,
            ))


def match_trades_fifo(
    transactions: Iterable[Transaction],
    policy: Optional[MatchingPolicy] = None,
) -> MatchResult:
    """Match a batch of transactions with a fresh LotMatcher."""
    return LotMatcher(policy).match(transactions)
