"""Tests for row normalization and timestamp parsing.

**Feature: roundtrip**
"""

from datetime import datetime, timedelta, timezone

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from roundtrip.errors import MalformedRow, SchemaError
from roundtrip.ingest import (
    REQUIRED_COLUMNS,
    calculate_trade_cost,
    clean_money,
    normalize_row,
    normalize_rows,
    parse_timestamp,
    resolve_timezone,
    validate_columns,
)


def raw_row(**overrides) -> dict:
    """A raw exchange row as the CSV reader yields it."""
    row = {
        "Ticker": "KXHIGHNY-25JAN20-B40",
        "Type": "trade",
        "Direction": "Yes",
        "Contracts": "10",
        "Average_Price": "30",
        "Realized_Revenue": "",
        "Realized_Cost": "",
        "Realized_Profit": "$0.00",
        "Fees": "$0.20",
        "Created": "Jan 20, 2025 at 10:04 AM PST",
    }
    row.update(overrides)
    return row


class TestExchangeTimestamps:
    """
    **Feature: roundtrip, Property: Exchange timestamp parsing**
    
    The exchange's "<Mon> <d>, <yyyy> at <h>:<mm> <AM|PM> <TZ>" format is
    resolved through the abbreviation table into a UTC instant.
    """

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Jan 20, 2025 at 10:04 AM PST", datetime(2025, 1, 20, 18, 4, tzinfo=timezone.utc)),
            ("Jan 20, 2025 at 10:04 AM HST", datetime(2025, 1, 20, 20, 4, tzinfo=timezone.utc)),
            ("Jan 20, 2025 at 10:04 AM EST", datetime(2025, 1, 20, 15, 4, tzinfo=timezone.utc)),
            ("Jan 20, 2025 at 2:30 PM CST", datetime(2025, 1, 20, 20, 30, tzinfo=timezone.utc)),
            ("Jan 20, 2025 at 11:45 PM MST", datetime(2025, 1, 21, 6, 45, tzinfo=timezone.utc)),
            ("Jan 20, 2025 at 10:04AM HST", datetime(2025, 1, 20, 20, 4, tzinfo=timezone.utc)),
            ("Feb 5, 2025 at 10:04 pm pst", datetime(2025, 2, 6, 6, 4, tzinfo=timezone.utc)),
            ("Jul 4, 2025 at 9:00 AM EDT", datetime(2025, 7, 4, 13, 0, tzinfo=timezone.utc)),
            ("Mar 1, 2025 at 12:15 AM UTC", datetime(2025, 3, 1, 0, 15, tzinfo=timezone.utc)),
            ("Mar 1, 2025 at 12:15 PM UTC", datetime(2025, 3, 1, 12, 15, tzinfo=timezone.utc)),
        ],
    )
    def test_exchange_format(self, text: str, expected: datetime):
        parsed, degraded = parse_timestamp(text)

        assert parsed == expected
        assert degraded is False

    def test_unknown_abbreviation_defaults_to_pacific(self):
        parsed, degraded = parse_timestamp("Jan 20, 2025 at 10:04 AM XYZ")

        assert parsed == datetime(2025, 1, 20, 18, 4, tzinfo=timezone.utc)
        assert degraded is False

    @pytest.mark.parametrize(
        "text",
        ["January 20, 2025 at 10:04 AM PST", "jan 20, 2025 at 10:04 AM PST"],
    )
    def test_full_and_abbreviated_month_names(self, text: str):
        parsed, degraded = parse_timestamp(text)

        assert parsed == datetime(2025, 1, 20, 18, 4, tzinfo=timezone.utc)
        assert degraded is False

    def test_sept_abbreviation(self):
        parsed, _ = parse_timestamp("Sept 3, 2025 at 9:00 AM UTC")

        assert parsed == datetime(2025, 9, 3, 9, 0, tzinfo=timezone.utc)

    @pytest.mark.parametrize(
        "text",
        ["Junk 5, 2025 at 10:04 AM PST", "Mayhem 5, 2025 at 10:04 AM PST"],
    )
    def test_words_starting_with_a_month_are_rejected(self, text: str):
        _, degraded = parse_timestamp(text)

        assert degraded is True

    def test_resolve_timezone_is_case_insensitive(self):
        assert resolve_timezone("edt") == timezone(timedelta(hours=-4))
        assert resolve_timezone("??") == timezone(timedelta(hours=-8))


class TestFallbackTimestamps:
    """
    **Feature: roundtrip, Property: Degraded timestamps**
    
    Other formats go through generic parsing; unparseable text yields
    the current time flagged as degraded.
    """

    def test_iso_with_offset(self):
        parsed, degraded = parse_timestamp("2025-01-20T10:04:00-05:00")

        assert parsed == datetime(2025, 1, 20, 15, 4, tzinfo=timezone.utc)
        assert degraded is False

    def test_naive_iso_is_utc(self):
        parsed, _ = parse_timestamp("2025-01-20 10:04:00")

        assert parsed == datetime(2025, 1, 20, 10, 4, tzinfo=timezone.utc)

    @pytest.mark.parametrize("text", ["not a date", "", "   "])
    def test_unparseable_returns_now(self, text: str):
        before = datetime.now(timezone.utc)
        parsed, degraded = parse_timestamp(text)
        after = datetime.now(timezone.utc)

        assert degraded is True
        assert before <= parsed <= after


class TestMoneyParsing:
    """Currency cleanup."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("$1.50", 1.5),
            ("$1,234.50", 1234.5),
            ("-$2.00", -2.0),
            (" 3.25 ", 3.25),
            ("", 0.0),
            (None, 0.0),
            ("abc", 0.0),
            (float("nan"), 0.0),
            (4, 4.0),
        ],
    )
    def test_clean_money(self, value, expected: float):
        assert clean_money(value) == expected


class TestTradeCost:
    """
    **Feature: roundtrip, Property: Derived trade cost**
    
    Opening trades cost contracts times price; exits use the realized cost.
    """

    @given(
        contracts=st.integers(min_value=0, max_value=10000),
        price=st.integers(min_value=0, max_value=100),
    )
    @settings(max_examples=100)
    def test_opening_trade_cost(self, contracts: int, price: int):
        cost = calculate_trade_cost("trade", contracts, price, 0.0, 0.0)

        assert cost == pytest.approx(contracts * price / 100)
        assert cost >= 0

    def test_exit_uses_absolute_realized_cost(self):
        assert calculate_trade_cost("trade", 10, 55, -3.0, 1.5) == 3.0
        assert calculate_trade_cost("settlement", 10, 55, 4.0, 0.0) == 4.0


class TestNormalizeRow:
    """Typed transactions from raw rows."""

    def test_entry_row(self):
        tx = normalize_row(raw_row())

        assert tx.ticker == "KXHIGHNY-25JAN20-B40"
        assert tx.kind == "trade"
        assert tx.direction == "Yes"
        assert tx.contracts == 10
        assert tx.average_price == 30
        assert tx.fees == pytest.approx(0.2)
        assert tx.trade_cost == pytest.approx(3.0)
        assert tx.is_entry and not tx.is_exit
        assert tx.timestamp == datetime(2025, 1, 20, 18, 4, tzinfo=timezone.utc)

    def test_exit_row(self):
        tx = normalize_row(raw_row(
            Direction="No",
            Average_Price="55",
            Realized_Revenue="$4.50",
            Realized_Cost="$3.00",
            Realized_Profit="$1.50",
        ))

        assert tx.is_exit
        assert tx.trade_cost == pytest.approx(3.0)
        assert tx.realized_profit == pytest.approx(1.5)

    def test_settlement_row(self):
        tx = normalize_row(raw_row(Type="settlement", Realized_Profit="$0.00"))

        assert tx.kind == "settlement"
        assert tx.is_exit

    def test_case_insensitive_type_and_direction(self):
        tx = normalize_row(raw_row(Type="Trade", Direction="no"))

        assert tx.kind == "trade"
        assert tx.direction == "No"

    def test_credit_rows_are_discarded(self):
        assert normalize_row(raw_row(Type="credit")) is None

    def test_blank_ticker_is_discarded(self):
        assert normalize_row(raw_row(Ticker="  ")) is None

    def test_numeric_values_from_pandas(self):
        tx = normalize_row(raw_row(Contracts=10.0, Average_Price=30.0, Fees=0.2))

        assert tx.contracts == 10
        assert tx.fees == pytest.approx(0.2)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"Contracts": "ten"},
            {"Average_Price": "cheap"},
            {"Type": "deposit"},
            {"Direction": "Maybe"},
            {"Average_Price": "150"},
            {"Contracts": "-5"},
        ],
    )
    def test_malformed_rows_raise(self, overrides: dict):
        with pytest.raises(MalformedRow):
            normalize_row(raw_row(**overrides))

    def test_fractional_contracts_raise(self):
        with pytest.raises(MalformedRow, match="whole number"):
            normalize_row(raw_row(Contracts="2.5"))

    def test_integral_float_contracts_accepted(self):
        assert normalize_row(raw_row(Contracts="3.0")).contracts == 3

    def test_unparseable_date_is_flagged(self):
        tx = normalize_row(raw_row(Created="sometime"))

        assert tx.degraded_timestamp is True


class TestNormalizeRows:
    """Batch normalization drops bad rows and keeps going."""

    def test_bad_rows_are_dropped(self):
        rows = [
            raw_row(),
            raw_row(Contracts="lots"),
            raw_row(Type="credit"),
            raw_row(Created="whenever"),
        ]

        transactions, errors, degraded = normalize_rows(rows)

        assert len(transactions) == 2
        assert [e.row_number for e in errors] == [1]
        assert "Contracts" in errors[0].message
        assert [d.row_number for d in degraded] == [3]


class TestValidateColumns:
    """
    **Feature: roundtrip, Property: Schema rejection**
    
    A header missing required columns is rejected with every missing
    column named.
    """

    def test_all_required_present(self):
        validate_columns(REQUIRED_COLUMNS + ["Fees"])

    def test_missing_columns_named(self):
        with pytest.raises(SchemaError) as exc_info:
            validate_columns(["Ticker", "Type", "Contracts"])

        assert exc_info.value.missing_columns == ["Direction", "Average_Price", "Created"]
        assert "Direction, Average_Price, Created" in str(exc_info.value)
