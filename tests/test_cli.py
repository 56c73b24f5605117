"""Tests for the roundtrip command line.

**Feature: roundtrip**
"""

import csv
import json
import re
from pathlib import Path

import pytest
from click.testing import CliRunner

from roundtrip.cli.main import cli


COLUMNS = [
    "Ticker", "Type", "Direction", "Contracts", "Average_Price",
    "Realized_Revenue", "Realized_Cost", "Realized_Profit", "Fees", "Created",
]

ROWS = [
    ["ABC", "trade", "Yes", "10", "30", "", "", "$0.00", "$0.20", "Jan 20, 2025 at 10:04 AM PST"],
    ["XYZ", "trade", "No", "5", "40", "", "", "$0.00", "$0.00", "Jan 22, 2025 at 9:00 AM EST"],
    ["ABC", "trade", "No", "10", "55", "$4.50", "$3.00", "$1.50", "$0.20", "Feb 3, 2025 at 1:15 PM PST"],
    ["XYZ", "settlement", "No", "5", "40", "$5.00", "$2.00", "$3.00", "$0.00", "Feb 5, 2025 at 4:00 PM EST"],
]


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner(env={"COLUMNS": "200"})


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    """A config location that does not exist, so defaults apply."""
    return tmp_path / "config.toml"


@pytest.fixture
def history(tmp_path: Path) -> Path:
    path = tmp_path / "2025.csv"
    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(COLUMNS)
        writer.writerows(ROWS)
    return path


def invoke(runner: CliRunner, config_path: Path, *args: str):
    return runner.invoke(cli, ["--config", str(config_path), *args])


class TestCommands:
    """Each report command runs against a small history."""

    def test_help_lists_commands(self, runner, config_path):
        result = invoke(runner, config_path, "--help")

        assert result.exit_code == 0
        for name in ("summary", "trades", "pnl", "risk", "export"):
            assert name in result.output

    def test_summary(self, runner, config_path, history):
        result = invoke(runner, config_path, "summary", str(history))

        assert result.exit_code == 0, result.output
        assert "Total Profit" in result.output
        assert "+$4.50" in result.output
        assert "Matched trades: 2" in result.output

    def test_trades(self, runner, config_path, history):
        result = invoke(runner, config_path, "trades", str(history))

        assert result.exit_code == 0, result.output
        assert "Matched Trades: 2" in result.output
        assert "Net P&L: +$4.10" in result.output

    def test_trades_ticker_filter(self, runner, config_path, history):
        result = invoke(runner, config_path, "trades", str(history), "--ticker", "xyz")

        assert result.exit_code == 0, result.output
        assert "Matched Trades: 1" in result.output
        assert "Net P&L: +$3.00" in result.output

    def test_pnl(self, runner, config_path, history):
        result = invoke(runner, config_path, "pnl", str(history))

        assert result.exit_code == 0, result.output
        assert "Cumulative P&L" in result.output
        assert "2025-02-03" in result.output

    def test_risk(self, runner, config_path, history):
        result = invoke(runner, config_path, "risk", str(history), "-c", "1000")

        assert result.exit_code == 0, result.output
        assert "Annualized Sharpe" in result.output
        assert re.search(r"Trading Days:\s+2\b", result.output)

    def test_risk_rejects_non_positive_capital(self, runner, config_path, history):
        result = invoke(runner, config_path, "risk", str(history), "-c", "0")

        assert result.exit_code == 1
        assert "Capital must be greater than zero" in result.output

    def test_export(self, runner, config_path, history, tmp_path):
        output = tmp_path / "snapshot.json"

        result = invoke(runner, config_path, "export", str(history), "-o", str(output))

        assert result.exit_code == 0, result.output
        payload = json.loads(output.read_text())
        assert len(payload["transactions"]) == 4
        assert len(payload["matched_trades"]) == 2
        assert payload["stats"]["total_profit"] == pytest.approx(4.5)


class TestOptions:
    """Policy options and configuration."""

    def test_complement_policy(self, runner, config_path, tmp_path):
        path = tmp_path / "same_side.csv"
        with open(path, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(COLUMNS)
            writer.writerow(["ABC", "trade", "Yes", "10", "30", "", "", "$0.00", "$0.00", "Jan 20, 2025 at 10:04 AM PST"])
            writer.writerow(["ABC", "trade", "Yes", "10", "60", "$6.00", "$3.00", "$2.50", "$0.00", "Jan 21, 2025 at 10:04 AM PST"])

        realized = invoke(runner, config_path, "trades", str(path))
        complement = invoke(runner, config_path, "trades", str(path), "--policy", "complement")

        assert "Net P&L: +$2.50" in realized.output
        assert "Net P&L: +$1.00" in complement.output

    def test_config_policy(self, runner, tmp_path):
        path = tmp_path / "same_side.csv"
        with open(path, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(COLUMNS)
            writer.writerow(["ABC", "trade", "Yes", "10", "30", "", "", "$0.00", "$0.00", "Jan 20, 2025 at 10:04 AM PST"])
            writer.writerow(["ABC", "trade", "Yes", "10", "60", "$6.00", "$3.00", "$2.50", "$0.00", "Jan 21, 2025 at 10:04 AM PST"])
        config = tmp_path / "custom.toml"
        config.write_text('[matching]\nprofit_method = "complement"\n')

        result = invoke(runner, config, "trades", str(path))

        assert result.exit_code == 0, result.output
        assert "Net P&L: +$1.00" in result.output


class TestErrors:
    """Unusable input exits with an error panel."""

    def test_missing_columns(self, runner, config_path, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text("Ticker,Type\nABC,trade\n")

        result = invoke(runner, config_path, "summary", str(path))

        assert result.exit_code == 1
        assert "Missing required columns" in result.output

    def test_missing_file(self, runner, config_path, tmp_path):
        result = invoke(runner, config_path, "summary", str(tmp_path / "nope.csv"))

        assert result.exit_code == 2

    def test_bad_file_reported_with_good_file(self, runner, config_path, history, tmp_path):
        bad = tmp_path / "bad.csv"
        bad.write_text("Ticker,Type\nABC,trade\n")

        result = invoke(runner, config_path, "summary", str(bad), str(history))

        assert result.exit_code == 0, result.output
        assert "Error processing bad.csv" in result.output


class TestFeeAllocationOption:
    """The --fee-allocation flag changes how partial closes share fees."""

    def test_ledger_and_consumed(self, runner, config_path, tmp_path):
        path = tmp_path / "partial.csv"
        with open(path, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(COLUMNS)
            writer.writerow(["ABC", "trade", "Yes", "10", "30", "", "", "$0.00", "$1.00", "Jan 20, 2025 at 10:04 AM PST"])
            writer.writerow(["ABC", "trade", "Yes", "5", "50", "$2.50", "$1.50", "$1.00", "$0.00", "Jan 21, 2025 at 10:04 AM PST"])
            writer.writerow(["ABC", "trade", "Yes", "5", "50", "$2.50", "$1.50", "$1.00", "$0.00", "Jan 22, 2025 at 10:04 AM PST"])

        ledger = invoke(runner, config_path, "trades", str(path))
        consumed = invoke(runner, config_path, "trades", str(path), "--fee-allocation", "consumed")

        assert ledger.exit_code == 0, ledger.output
        assert "Net P&L: +$0.50" in ledger.output
        assert "Net P&L: +$1.00" in consumed.output
