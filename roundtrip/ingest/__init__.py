"""Row normalization for exchange transaction logs."""

from roundtrip.ingest.normalizer import (
    OPTIONAL_COLUMNS,
    REQUIRED_COLUMNS,
    calculate_trade_cost,
    clean_money,
    normalize_row,
    normalize_rows,
    validate_columns,
)
from roundtrip.ingest.timestamps import parse_timestamp, resolve_timezone

__all__ = [
    "OPTIONAL_COLUMNS",
    "REQUIRED_COLUMNS",
    "calculate_trade_cost",
    "clean_money",
    "normalize_row",
    "normalize_rows",
    "parse_timestamp",
    "resolve_timezone",
    "validate_columns",
]
