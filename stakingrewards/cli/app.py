"""Main Typer application — imports and registers all CLI commands.

Entry point: ``stakingrewards`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import logging

import typer

from stakingrewards.cli.commands.events_cmd import events_cmd, pools_cmd
from stakingrewards.cli.commands.simulate import simulate_cmd
from stakingrewards.config import config

app = typer.Typer(
    name="stakingrewards",
    help="stakingrewards: time-weighted reward distribution pools.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def _configure(
    log_level: str = typer.Option(
        config.log_level, "--log-level", help="Root logging level."
    ),
) -> None:
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Register subcommands
app.command(name="simulate", help="Simulate a funded pool with two stakers.")(simulate_cmd)
app.command(name="events", help="List the journaled events of a pool.")(events_cmd)
app.command(name="pools", help="List the pools recorded in a journal.")(pools_cmd)


@app.command(name="config", help="Show the effective settings.")
def config_cmd() -> None:
    """Print the settings resolved from the environment and .env file."""
    from rich.console import Console
    from rich.table import Table

    table = Table(title="stakingrewards settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    for key, value in config.model_dump().items():
        table.add_row(key, str(value))
    Console().print(table)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
