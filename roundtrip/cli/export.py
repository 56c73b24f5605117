"""Export command for roundtrip CLI."""

from pathlib import Path
from typing import Optional

import click

from roundtrip.cli.common import console, files_argument, load_data, print_diagnostics


@click.command()
@files_argument
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write JSON to this file instead of stdout.",
)
@click.pass_context
def export(
    ctx: click.Context,
    files: tuple[Path, ...],
    profit_method: Optional[str],
    max_roi: Optional[float],
    win_rate_basis: Optional[str],
    fee_allocation: Optional[str],
    output: Optional[Path],
) -> None:
    """Export transactions, matched trades and statistics as JSON.
    
    \b
    Examples:
      roundtrip export transactions.csv -o snapshot.json
      roundtrip export 2024.csv 2025.csv > snapshot.json
    """
    data, messages = load_data(
        ctx, files, profit_method, max_roi, win_rate_basis, fee_allocation
    )
    payload = data.model_dump_json(indent=2)

    if output is None:
        click.echo(payload)
        return

    output.write_text(payload)
    console.print(f"[green]Wrote {len(data.matched_trades)} matched trades to {output}[/green]")
    print_diagnostics(messages)
