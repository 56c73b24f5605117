"""End-to-end processing: rows to matched trades and statistics.

Each file is normalized on its own. Batches are combined by re-matching
the union of their transactions, never by concatenating matched trades,
so positions that span files are attributed correctly.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any, Optional

from roundtrip.analytics.stats import WinRateBasis, calculate_basic_stats
from roundtrip.engine import MatchingPolicy, match_trades_fifo, sort_transactions
from roundtrip.errors import EmptyFileError, SchemaError
from roundtrip.ingest import normalize_rows, validate_columns
from roundtrip.io import read_transaction_csv
from roundtrip.models import ProcessedData, Transaction

logger = logging.getLogger(__name__)


def _analyze(
    transactions: list[Transaction],
    policy: Optional[MatchingPolicy],
    win_rate_basis: WinRateBasis,
    diagnostics: list[str],
    sources: list[str],
) -> ProcessedData:
    ordered = sort_transactions(transactions)
    result = match_trades_fifo(ordered, policy)

    return ProcessedData(
        transactions=ordered,
        matched_trades=result.trades,
        stats=calculate_basic_stats(ordered, result.trades, win_rate_basis),
        report=result.report,
        diagnostics=list(diagnostics),
        sources=sources,
    )


def collect_diagnostics(data: ProcessedData, errors: Sequence[str] = ()) -> list[str]:
    """Combine file errors, row problems and matching notes into one list."""
    messages = list(errors) + list(data.diagnostics)
    report = data.report
    if report.unmatched_exits:
        messages.append(
            f"{report.unmatched_exits} exit(s) had no matching entry and were skipped"
        )
    if report.oversized_exits:
        messages.append(
            f"{report.oversized_exits} exit(s) exceeded open contracts; "
            f"{report.dropped_contracts} contract(s) dropped"
        )
    return messages


def process_rows(
    rows: Sequence[Mapping[str, Any]],
    columns: Optional[Iterable[str]] = None,
    policy: Optional[MatchingPolicy] = None,
    win_rate_basis: WinRateBasis = "transactions",
    source: str = "",
) -> ProcessedData:
    """Process the rows of a single file.
    
    Args:
        rows: Raw rows in file order.
        columns: File header. Taken from the first row when omitted.
        policy: Matching policy for the lot matcher.
        win_rate_basis: How win rates are counted.
        source: Name of the file, for diagnostics.
        
    Returns:
        ProcessedData for the file.
        
    Raises:
        EmptyFileError: If there are no rows or no valid transactions.
        SchemaError: If required columns are missing.
    """
    if not rows:
        raise EmptyFileError("Invalid CSV format: No data found")

    validate_columns(columns if columns is not None else rows[0].keys())

    transactions, row_errors, degraded = normalize_rows(rows)
    if not transactions:
        raise EmptyFileError("No valid trades found in the CSV file")

    prefix = f"{source}: " if source else ""
    diagnostics = [f"{prefix}row {e.row_number}: {e.message}" for e in row_errors]
    diagnostics += [
        f"{prefix}row {d.row_number}: unparseable date {d.created!r}, using current time"
        for d in degraded
    ]

    return _analyze(
        transactions,
        policy,
        win_rate_basis,
        diagnostics,
        [source] if source else [],
    )


def combine_processed_data(
    batches: Sequence[ProcessedData],
    policy: Optional[MatchingPolicy] = None,
    win_rate_basis: WinRateBasis = "transactions",
) -> ProcessedData:
    """Merge independently processed batches and re-run matching over the union.
    
    Raises:
        EmptyFileError: If no batch carries a transaction.
    """
    transactions = [t for batch in batches for t in batch.transactions]
    if not transactions:
        raise EmptyFileError("No valid trades found in the CSV file")

    diagnostics = [message for batch in batches for message in batch.diagnostics]
    sources = [source for batch in batches for source in batch.sources]

    return _analyze(transactions, policy, win_rate_basis, diagnostics, sources)


def process_file(
    path: Path,
    policy: Optional[MatchingPolicy] = None,
    win_rate_basis: WinRateBasis = "transactions",
) -> ProcessedData:
    """Read and process one CSV export."""
    columns, rows = read_transaction_csv(path)
    return process_rows(rows, columns, policy, win_rate_basis, source=path.name)


def process_files(
    paths: Iterable[Path],
    policy: Optional[MatchingPolicy] = None,
    win_rate_basis: WinRateBasis = "transactions",
) -> tuple[Optional[ProcessedData], list[str]]:
    """Process several exports and combine them.
    
    Files that fail schema validation are rejected with a message; the
    remaining files are still processed. Repeated file names are skipped.
    
    Returns:
        Tuple of (combined data or None when nothing was usable, errors).
    """
    batches: list[ProcessedData] = []
    errors: list[str] = []
    seen: set[str] = set()

    for path in paths:
        path = Path(path)
        if path.name in seen:
            logger.info("Skipping already processed file %s", path.name)
            continue

        try:
            batches.append(process_file(path, policy, win_rate_basis))
        except SchemaError as e:
            logger.error("Error processing %s: %s", path.name, e)
            errors.append(f"Error processing {path.name}: {e}")
            continue
        except OSError as e:
            logger.error("Error reading %s: %s", path.name, e)
            errors.append(f"Error reading {path.name}: {e}")
            continue
        seen.add(path.name)

    if not batches:
        return None, errors

    if len(batches) == 1:
        return batches[0], errors
    return combine_processed_data(batches, policy, win_rate_basis), errors
