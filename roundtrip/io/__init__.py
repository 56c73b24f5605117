"""File input for roundtrip."""

from roundtrip.io.csv_reader import read_transaction_csv

__all__ = ["read_transaction_csv"]
