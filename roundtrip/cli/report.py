"""Report commands for roundtrip CLI.

Handles the overview summary, matched trade listing and cumulative P&L.
"""

from pathlib import Path
from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from roundtrip.cli.common import (
    console,
    files_argument,
    load_data,
    percent,
    print_diagnostics,
    signed_money,
)


@click.command()
@files_argument
@click.pass_context
def summary(
    ctx: click.Context,
    files: tuple[Path, ...],
    profit_method: Optional[str],
    max_roi: Optional[float],
    win_rate_basis: Optional[str],
    fee_allocation: Optional[str],
) -> None:
    """Display trading overview for one or more transaction files.
    
    \b
    Examples:
      roundtrip summary transactions.csv
      roundtrip summary 2024.csv 2025.csv --policy complement
    """
    from roundtrip.analytics import notable_trades, settlement_breakdown

    data, messages = load_data(
        ctx, files, profit_method, max_roi, win_rate_basis, fee_allocation
    )
    stats = data.stats
    report = data.report

    overview = (
        f"[bold]Overall Performance[/bold]\n\n"
        f"Total Profit:     {signed_money(stats.total_profit)}\n"
        f"Total Fees:       [red]${stats.total_fees:,.2f}[/red]\n"
        f"Win Rate:         {percent(stats.win_rate)}\n"
        f"Settled Win Rate: {percent(stats.settled_win_rate)}\n"
        f"{'─' * 30}\n"
        f"[bold]Trading Activity[/bold]\n\n"
        f"Transactions:     {stats.total_trades}\n"
        f"Unique Tickers:   {stats.unique_tickers}\n"
        f"Yes / No:         {stats.yes_no_breakdown['Yes']} / {stats.yes_no_breakdown['No']}\n"
        f"Avg Hold Time:    {stats.weighted_holding_period:.1f} days\n"
        f"Avg Entry Price:  {stats.avg_contract_purchase_price:.2f}¢\n"
        f"Avg Exit Price:   {stats.avg_contract_final_price:.2f}¢"
    )
    console.print(Panel(
        overview,
        title=f"[bold cyan]Summary[/bold cyan] [dim]({', '.join(data.sources)})[/dim]",
        border_style="cyan",
    ))

    notable = notable_trades(data.matched_trades)
    breakdown = settlement_breakdown(data.matched_trades)

    table = Table(title="Notable Trades", show_header=True, header_style="bold cyan")
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    if notable.biggest_win is not None:
        table.add_row(
            "Biggest Win",
            f"{signed_money(notable.biggest_win.profit)} ({notable.biggest_win.ticker})",
        )
    if notable.biggest_loss is not None:
        table.add_row(
            "Biggest Loss",
            f"{signed_money(notable.biggest_loss.profit)} ({notable.biggest_loss.ticker})",
        )
    if notable.highest_roi is not None:
        table.add_row(
            "Highest ROI",
            f"{percent(notable.highest_roi.roi)} ({notable.highest_roi.ticker})",
        )
    table.add_row("Avg P&L / $ Risked", percent(notable.avg_pnl_per_dollar_risked))
    table.add_row("Settled / Exited", f"{breakdown['settlement']} / {breakdown['exit']}")
    console.print(table)

    console.print(
        f"\n[dim]Matched trades: {len(data.matched_trades)} | "
        f"Entries: {report.entries} | Exits: {report.exits} | "
        f"Unmatched: {report.unmatched_exits} | "
        f"Open lots: {report.open_lots_remaining}[/dim]"
    )
    print_diagnostics(messages)


@click.command()
@files_argument
@click.option("--limit", type=int, default=None, help="Show only the most recent N trades.")
@click.option("--ticker", type=str, default=None, help="Filter by ticker.")
@click.pass_context
def trades(
    ctx: click.Context,
    files: tuple[Path, ...],
    profit_method: Optional[str],
    max_roi: Optional[float],
    win_rate_basis: Optional[str],
    fee_allocation: Optional[str],
    limit: Optional[int],
    ticker: Optional[str],
) -> None:
    """Display matched round-trip trades, most recent first.
    
    \b
    Examples:
      roundtrip trades transactions.csv
      roundtrip trades transactions.csv --limit 5
      roundtrip trades transactions.csv --ticker KXHIGHNY-25JAN20
    """
    from roundtrip.analytics import recent_trades

    data, messages = load_data(
        ctx, files, profit_method, max_roi, win_rate_basis, fee_allocation
    )

    matched = data.matched_trades
    if ticker:
        matched = [t for t in matched if t.ticker.upper() == ticker.upper()]

    if not matched:
        console.print(Panel(
            "[dim]No matched trades found[/dim]",
            title="[bold]Matched Trades[/bold]",
            border_style="dim",
        ))
        print_diagnostics(messages)
        return

    rows = recent_trades(matched, limit=limit if limit is not None else len(matched))

    table = Table(title="Matched Trades", show_header=True, header_style="bold cyan")
    table.add_column("Ticker", style="bold")
    table.add_column("Side", justify="center")
    table.add_column("Entry", style="dim")
    table.add_column("Exit", style="dim")
    table.add_column("Type", justify="center")
    table.add_column("Qty", justify="right")
    table.add_column("Entry ¢", justify="right")
    table.add_column("Exit ¢", justify="right")
    table.add_column("Net P&L", justify="right")
    table.add_column("ROI", justify="right")
    table.add_column("Hold", justify="right")

    for trade in rows:
        side = trade.entry_direction
        if trade.is_offsetting:
            side += "*"
        table.add_row(
            trade.ticker,
            f"[green]{side}[/green]" if trade.entry_direction == "Yes" else f"[red]{side}[/red]",
            trade.entry_date.strftime("%Y-%m-%d"),
            trade.exit_date.strftime("%Y-%m-%d"),
            trade.exit_type,
            str(trade.contracts),
            f"{trade.entry_price:.0f}",
            f"{trade.exit_price:.0f}",
            signed_money(trade.net_profit),
            percent(trade.roi),
            f"{trade.holding_period_days:.1f}d",
        )

    console.print(table)

    total = sum(t.net_profit for t in matched)
    console.print(f"\n[bold]Matched Trades:[/bold] {len(matched)}")
    console.print(f"[bold]Net P&L:[/bold] {signed_money(total)}")
    console.print("[dim]* closed by trading the opposite side[/dim]")
    print_diagnostics(messages)


@click.command()
@files_argument
@click.pass_context
def pnl(
    ctx: click.Context,
    files: tuple[Path, ...],
    profit_method: Optional[str],
    max_roi: Optional[float],
    win_rate_basis: Optional[str],
    fee_allocation: Optional[str],
) -> None:
    """Display cumulative net P&L after each exit.
    
    \b
    Examples:
      roundtrip pnl transactions.csv
    """
    from roundtrip.analytics import cumulative_pnl

    data, messages = load_data(
        ctx, files, profit_method, max_roi, win_rate_basis, fee_allocation
    )
    points = cumulative_pnl(data.matched_trades)

    if not points:
        console.print(Panel(
            "[dim]No matched trades found[/dim]",
            title="[bold]Cumulative P&L[/bold]",
            border_style="dim",
        ))
        print_diagnostics(messages)
        return

    table = Table(title="Cumulative P&L", show_header=True, header_style="bold cyan")
    table.add_column("Date/Time", style="dim")
    table.add_column("P&L", justify="right")

    for point in points:
        table.add_row(point.timestamp.strftime("%Y-%m-%d %H:%M"), signed_money(point.pnl))

    console.print(table)
    print_diagnostics(messages)
