"""Risk command for roundtrip CLI."""

from pathlib import Path
from typing import Optional

import click
from rich.panel import Panel

from roundtrip.cli.common import (
    console,
    files_argument,
    load_data,
    percent,
    print_diagnostics,
    print_error,
)


@click.command()
@files_argument
@click.option(
    "-c",
    "--capital",
    type=float,
    default=None,
    help="Starting account capital (default from config).",
)
@click.pass_context
def risk(
    ctx: click.Context,
    files: tuple[Path, ...],
    profit_method: Optional[str],
    max_roi: Optional[float],
    win_rate_basis: Optional[str],
    fee_allocation: Optional[str],
    capital: Optional[float],
) -> None:
    """Display risk-adjusted returns for the matched trades.
    
    Daily returns come from a synthetic portfolio value that starts at
    the given capital and moves by realized profit on each exit day.
    The Sharpe ratio does not subtract a risk-free rate.
    
    \b
    Examples:
      roundtrip risk transactions.csv
      roundtrip risk transactions.csv --capital 5000
    """
    from roundtrip.analytics import calculate_risk_metrics

    config = (ctx.obj or {}).get("config") or {}
    if capital is None:
        capital = float(config.get("risk", {}).get("initial_capital", 10000.0))

    if capital <= 0:
        print_error("Capital must be greater than zero")
        raise SystemExit(1)

    data, messages = load_data(
        ctx, files, profit_method, max_roi, win_rate_basis, fee_allocation
    )
    metrics = calculate_risk_metrics(data.matched_trades, capital)

    if metrics.annualized_sharpe >= 1:
        sharpe_color = "green"
    elif metrics.annualized_sharpe >= 0:
        sharpe_color = "yellow"
    else:
        sharpe_color = "red"

    text = (
        f"[bold]Risk Adjusted Returns[/bold] [dim](capital ${metrics.initial_capital:,.2f})[/dim]\n\n"
        f"Total Return:          {percent(metrics.total_return)}\n"
        f"Daily Volatility:      {percent(metrics.standard_deviation)}\n"
        f"Annualized Sharpe:     [{sharpe_color}]{metrics.annualized_sharpe:.2f}[/{sharpe_color}]\n"
        f"{'─' * 30}\n"
        f"Trading Days:          {metrics.trading_days}\n"
        f"Avg Daily Return:      {percent(metrics.avg_daily_return)}\n"
        f"Annualized Return:     {percent(metrics.annualized_return)}\n"
        f"Annualized Volatility: {percent(metrics.annualized_volatility)}"
    )
    console.print(Panel(text, title="[bold cyan]Risk[/bold cyan]", border_style="cyan"))
    print_diagnostics(messages)
