"""Exception types raised by the roundtrip pipeline."""


class RoundtripError(Exception):
    """Base class for all roundtrip errors."""


class SchemaError(RoundtripError):
    """A file is missing required columns and is rejected as a whole."""

    def __init__(self, message: str, missing_columns: list[str] | None = None):
        super().__init__(message)
        self.missing_columns = missing_columns or []


class EmptyFileError(SchemaError):
    """A file contains no rows or no valid transactions."""


class MalformedRow(RoundtripError):
    """A single row could not be coerced into a transaction."""

    def __init__(self, message: str, row: dict | None = None):
        super().__init__(message)
        self.row = row or {}
