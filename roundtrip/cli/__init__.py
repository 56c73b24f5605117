"""CLI commands for roundtrip.

This package provides the command-line interface for roundtrip:
summaries, matched trade listings, risk metrics and JSON export.
"""

from roundtrip.cli.main import cli, main

__all__ = ["cli", "main"]
