"""CSV reading for exchange transaction exports."""

from pathlib import Path

import pandas as pd

from roundtrip.errors import EmptyFileError, SchemaError


def read_transaction_csv(path: Path) -> tuple[list[str], list[dict[str, str]]]:
    """Read a transaction export into header and row dictionaries.
    
    All values are kept as strings; typing happens in the normalizer.
    
    Args:
        path: Path to the CSV file.
        
    Returns:
        Tuple of (column names, rows).
        
    Raises:
        EmptyFileError: If the file has no content.
        SchemaError: If the file cannot be parsed as CSV.
    """
    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False, skipinitialspace=True)
    except pd.errors.EmptyDataError:
        raise EmptyFileError("Invalid CSV format: No data found")
    except pd.errors.ParserError as e:
        raise SchemaError(f"Invalid CSV format: {e}")

    df.columns = [str(c).strip() for c in df.columns]
    return list(df.columns), df.to_dict(orient="records")
