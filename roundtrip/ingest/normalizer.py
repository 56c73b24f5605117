"""Row normalization: raw log rows to typed transactions."""

import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any, Optional

from pydantic import ValidationError

from roundtrip.errors import MalformedRow, SchemaError
from roundtrip.ingest.timestamps import parse_timestamp
from roundtrip.models import DegradedTimestamp, RowError, Transaction

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["Ticker", "Type", "Direction", "Contracts", "Average_Price", "Created"]
OPTIONAL_COLUMNS = ["Realized_Revenue", "Realized_Cost", "Realized_Profit", "Fees"]

ROW_TYPES = {"trade": "trade", "settlement": "settlement"}
DIRECTIONS = {"yes": "Yes", "no": "No"}


def validate_columns(columns: Iterable[str]) -> None:
    """Check that a file header carries every required column.
    
    Args:
        columns: Column names from the file header.
        
    Raises:
        SchemaError: Naming every missing column.
    """
    present = {str(c).strip() for c in columns}
    missing = [col for col in REQUIRED_COLUMNS if col not in present]
    if missing:
        raise SchemaError(
            f"Invalid CSV format: Missing required columns: {', '.join(missing)}",
            missing_columns=missing,
        )


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and value.strip() == ""


def clean_money(value: Any) -> float:
    """Parse a currency value such as ``"$1,234.50"``.
    
    Returns 0.0 for missing or unparseable values.
    """
    if _is_blank(value):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).strip().replace("$", "").replace(",", "")
    try:
        result = float(text)
    except ValueError:
        return 0.0
    return 0.0 if math.isnan(result) else result


def _to_number(value: Any, field: str) -> float:
    if _is_blank(value):
        return 0.0
    try:
        result = float(str(value).strip().replace(",", "")) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        raise MalformedRow(f"{field} is not numeric: {value!r}")
    if math.isnan(result) or math.isinf(result):
        raise MalformedRow(f"{field} is not a finite number: {value!r}")
    return result


def calculate_trade_cost(
    kind: str,
    contracts: int,
    average_price: float,
    realized_cost: float,
    realized_profit: float,
) -> float:
    """Derive the dollar cost of a row.
    
    Settlements and trades that realized profit use the absolute realized
    cost; opening trades cost contracts times the price in dollars.
    """
    if kind == "settlement" or (kind == "trade" and realized_profit != 0):
        return abs(realized_cost)
    if kind == "trade":
        return contracts * (average_price / 100)
    return 0.0


def normalize_row(row: Mapping[str, Any]) -> Optional[Transaction]:
    """Convert one raw row into a Transaction.
    
    Args:
        row: Mapping of column name to raw value.
        
    Returns:
        Transaction, or None for rows that are not transactions
        (credits, blank tickers).
        
    Raises:
        MalformedRow: If a field cannot be coerced.
    """
    ticker = row.get("Ticker")
    if _is_blank(ticker):
        return None
    ticker = str(ticker).strip()

    row_type = "" if _is_blank(row.get("Type")) else str(row.get("Type")).strip().lower()
    if row_type == "credit":
        return None
    kind = ROW_TYPES.get(row_type)
    if kind is None:
        raise MalformedRow(f"Unknown row type: {row.get('Type')!r}", dict(row))

    raw_direction = "" if _is_blank(row.get("Direction")) else str(row.get("Direction")).strip().lower()
    direction = DIRECTIONS.get(raw_direction)
    if direction is None:
        raise MalformedRow(f"Unknown direction: {row.get('Direction')!r}", dict(row))

    try:
        contract_count = _to_number(row.get("Contracts"), "Contracts")
        if not contract_count.is_integer():
            raise MalformedRow(f"Contracts is not a whole number: {row.get('Contracts')!r}")
        contracts = int(contract_count)
        average_price = _to_number(row.get("Average_Price"), "Average_Price")
    except MalformedRow as e:
        e.row = dict(row)
        raise

    realized_revenue = clean_money(row.get("Realized_Revenue"))
    realized_cost = clean_money(row.get("Realized_Cost"))
    realized_profit = clean_money(row.get("Realized_Profit"))
    fees = clean_money(row.get("Fees"))

    created = "" if _is_blank(row.get("Created")) else str(row.get("Created"))
    timestamp, degraded = parse_timestamp(created)

    try:
        return Transaction(
            ticker=ticker,
            kind=kind,
            direction=direction,
            contracts=contracts,
            average_price=average_price,
            realized_revenue=realized_revenue,
            realized_cost=realized_cost,
            realized_profit=realized_profit,
            fees=fees,
            created=created,
            timestamp=timestamp,
            trade_cost=calculate_trade_cost(
                kind, contracts, average_price, realized_cost, realized_profit
            ),
            degraded_timestamp=degraded,
        )
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err.get("loc"))
        raise MalformedRow(f"Invalid values for: {fields}", dict(row)) from e


def normalize_rows(
    rows: Iterable[Mapping[str, Any]],
) -> tuple[list[Transaction], list[RowError], list[DegradedTimestamp]]:
    """Normalize a batch of rows, dropping the ones that fail.
    
    Args:
        rows: Raw rows in file order.
        
    Returns:
        Tuple of (transactions, dropped row errors, degraded timestamps).
    """
    transactions: list[Transaction] = []
    errors: list[RowError] = []
    degraded: list[DegradedTimestamp] = []

    for index, row in enumerate(rows):
        try:
            transaction = normalize_row(row)
        except MalformedRow as e:
            logger.error("Error processing row %d: %s", index, e)
            errors.append(RowError(row_number=index, message=str(e)))
            continue

        if transaction is None:
            continue
        if transaction.degraded_timestamp:
            degraded.append(DegradedTimestamp(
                row_number=index,
                ticker=transaction.ticker,
                created=transaction.created,
            ))
        transactions.append(transaction)

    return transactions, errors, degraded
