"""Main CLI entry point for roundtrip.

This module provides the main click group and lazy loading
for heavy imports to improve startup time.
"""

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

# Console for rich output
console = Console()


class LazyGroup(click.Group):
    """A click Group that lazily loads commands.
    
    Command modules import pandas, so they are only imported
    when actually invoked.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        """Initialize the lazy group.
        
        Args:
            lazy_subcommands: Mapping of command names to module paths.
        """
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """List all available commands."""
        base = super().list_commands(ctx)
        lazy = list(self._lazy_subcommands.keys())
        return sorted(set(base + lazy))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, lazily loading if needed."""
        if cmd_name in self.commands:
            return self.commands[cmd_name]

        if cmd_name in self._lazy_subcommands:
            return self._lazy_load(cmd_name)

        return None

    def _lazy_load(self, cmd_name: str) -> click.Command:
        """Lazily load a command from its module path."""
        import importlib

        module_path = self._lazy_subcommands[cmd_name]
        module = importlib.import_module(module_path)

        attr = getattr(module, cmd_name, None)
        if not isinstance(attr, click.Command):
            raise click.ClickException(f"Could not find command '{cmd_name}' in {module_path}")

        self.add_command(attr)
        return attr


LAZY_SUBCOMMANDS = {
    "summary": "roundtrip.cli.report",
    "trades": "roundtrip.cli.report",
    "pnl": "roundtrip.cli.report",
    "risk": "roundtrip.cli.risk",
    "export": "roundtrip.cli.export",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def configure_logging(level: str) -> None:
    """Route log records through the rich console."""
    level = level.upper()
    if level not in LOG_LEVELS:
        level = "WARNING"
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="roundtrip")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to config.toml (default: ~/.config/roundtrip/config.toml).",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Show matcher diagnostics.")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """Roundtrip - reconstruct round-trip trades from Kalshi transaction exports.
    
    Pass one or more transaction CSV files to any command. Files are
    merged and matched FIFO as one history.
    
    \b
    Quick Start:
      roundtrip summary 2024.csv 2025.csv  # Overview
      roundtrip trades 2025.csv --limit 20 # Matched trades
      roundtrip risk 2025.csv -c 5000      # Sharpe and volatility
    """
    from pathlib import Path
    from roundtrip.config import load_config

    ctx.ensure_object(dict)
    config = load_config(Path(config_path) if config_path else None)
    ctx.obj["config"] = config

    level = "INFO" if verbose else config.get("logging", {}).get("level", "WARNING")
    configure_logging(str(level))


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
