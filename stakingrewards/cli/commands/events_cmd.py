"""``stakingrewards events POOL_ID`` and ``stakingrewards pools``.

Read-only views over an event journal written by ``simulate --journal``
or by any host that attaches an ``EventJournal`` to its pools.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from stakingrewards.config import config
from stakingrewards.core.event_journal import EventJournal, JournalIntegrityError
from stakingrewards.monitor.renderer import PoolRenderer

console = Console()


def _open_journal(journal_db: str) -> EventJournal:
    db_path = Path(journal_db)
    if not db_path.exists():
        console.print(f"[bold red]Journal not found:[/bold red] {journal_db}")
        console.print("[dim]Record one with: stakingrewards simulate --journal PATH[/dim]")
        raise typer.Exit(code=1)
    return EventJournal(db_path)


def events_cmd(
    pool_id: str = typer.Argument(..., help="The pool whose events to list."),
    verify_chain: bool = typer.Option(
        False,
        "--verify-chain",
        "-V",
        help="Verify the hash chain integrity before listing.",
    ),
    journal_db: str = typer.Option(
        str(config.journal_path),
        "--journal",
        "-j",
        help="Path to the event journal SQLite database.",
    ),
) -> None:
    """List the journaled events of a pool."""
    journal = _open_journal(journal_db)
    renderer = PoolRenderer(console=console, decimals=config.token_decimals)

    entries = journal.get_pool_entries(pool_id)
    if not entries:
        console.print(f"[yellow]No events for pool {pool_id}.[/yellow]")
        raise typer.Exit(code=1)

    if verify_chain:
        try:
            renderer.print_chain_verification(pool_id, journal.verify_chain(pool_id))
        except JournalIntegrityError as exc:
            renderer.print_chain_verification(pool_id, False)
            console.print(f"[red]{exc}[/red]")
            raise typer.Exit(code=2)

    console.print(renderer.render_events(pool_id, entries, journal.load_events(pool_id)))


def pools_cmd(
    journal_db: str = typer.Option(
        str(config.journal_path),
        "--journal",
        "-j",
        help="Path to the event journal SQLite database.",
    ),
) -> None:
    """List the pools recorded in a journal."""
    journal = _open_journal(journal_db)
    pool_ids = journal.get_all_pool_ids()
    if not pool_ids:
        console.print("[dim]No pools recorded.[/dim]")
        return
    for pool_id in pool_ids:
        console.print(pool_id)
