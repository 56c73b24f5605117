"""Roundtrip - trade reconstruction and performance analytics for Kalshi transaction logs."""

__version__ = "0.1.0"
