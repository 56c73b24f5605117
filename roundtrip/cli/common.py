"""Helpers shared by the roundtrip CLI commands."""

from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel

from roundtrip.analytics.stats import WIN_RATE_BASES
from roundtrip.config import DEFAULT_CONFIG, policy_from_config
from roundtrip.engine import FEE_ALLOCATIONS, PROFIT_METHODS
from roundtrip.models import ProcessedData

console = Console()


def files_argument(func):
    """Attach the FILES argument and matching options to a command."""
    func = click.option(
        "--fee-allocation",
        type=click.Choice(FEE_ALLOCATIONS),
        default=None,
        help="Split fees per close from the full lot (ledger) or from what is left (consumed).",
    )(func)
    func = click.option(
        "--win-rate-basis",
        type=click.Choice(WIN_RATE_BASES),
        default=None,
        help="Count wins over exit rows or matched trades.",
    )(func)
    func = click.option(
        "--max-roi",
        type=float,
        default=None,
        help="Discard matched trades with |ROI| at or above this (0 disables).",
    )(func)
    func = click.option(
        "--policy",
        "profit_method",
        type=click.Choice(PROFIT_METHODS),
        default=None,
        help="Profit rule for market exits.",
    )(func)
    func = click.argument(
        "files",
        nargs=-1,
        required=True,
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
    )(func)
    return func


def print_error(message: str, title: str = "Error") -> None:
    """Print an error panel in the standard style."""
    console.print(Panel(
        f"[red]{message}[/red]",
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))


def print_diagnostics(messages: list[str]) -> None:
    """Print non-fatal problems collected while processing."""
    if not messages:
        return
    console.print(Panel(
        "\n".join(f"• {m}" for m in messages),
        title="[bold yellow]Warnings[/bold yellow]",
        border_style="yellow",
    ))


def load_data(
    ctx: click.Context,
    files: tuple[Path, ...],
    profit_method: Optional[str],
    max_roi: Optional[float],
    win_rate_basis: Optional[str],
    fee_allocation: Optional[str] = None,
) -> tuple[ProcessedData, list[str]]:
    """Process the given files, exiting with an error panel when nothing is usable.
    
    Returns:
        Tuple of (processed data, combined diagnostic messages).
    """
    from roundtrip.pipeline import collect_diagnostics, process_files

    config = (ctx.obj or {}).get("config") or DEFAULT_CONFIG

    try:
        policy = policy_from_config(config, profit_method, max_roi, fee_allocation)
    except ValueError as e:
        print_error(str(e))
        raise SystemExit(1)

    basis = win_rate_basis or config.get("stats", {}).get("win_rate_basis", "transactions")
    if basis not in WIN_RATE_BASES:
        print_error(f"Invalid win_rate_basis: {basis!r}")
        raise SystemExit(1)

    data, errors = process_files(files, policy, basis)

    if data is None:
        print_error("\n".join(errors) or "No valid trades found", title="No Data")
        raise SystemExit(1)

    return data, collect_diagnostics(data, errors)


def signed_money(value: float) -> str:
    """Format dollars with color and sign for rich output."""
    color = "green" if value >= 0 else "red"
    sign = "+" if value >= 0 else "-"
    return f"[{color}]{sign}${abs(value):,.2f}[/{color}]"


def percent(value: Optional[float]) -> str:
    """Format a fraction as a percentage."""
    if value is None:
        return "-"
    return f"{value * 100:.2f}%"
