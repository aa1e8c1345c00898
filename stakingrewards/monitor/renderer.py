"""Rich terminal renderer for pool snapshots and event journals.

Amounts are shown in whole tokens using the configured decimals.

Color scheme
------------
- green   : window active / chain valid
- yellow  : pool not started yet
- dim     : window finished
- bold red: chain BROKEN
"""

from __future__ import annotations

from decimal import Decimal

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from stakingrewards.models.events import EventKind, PoolEvent
from stakingrewards.models.journal import JournalEntry
from stakingrewards.monitor.projection import PoolSnapshot

_EVENT_STYLES: dict[EventKind, str] = {
    EventKind.REWARD_ADDED: "bold cyan",
    EventKind.TRANSFER: "green",
    EventKind.REWARD_PAID: "bold magenta",
}


def format_amount(amount: int, decimals: int = 18, places: int = 6) -> str:
    """Render base units as a whole-token decimal string."""
    value = Decimal(amount) / (Decimal(10) ** decimals)
    return f"{value:,.{places}f}"


class PoolRenderer:
    """Renders ``PoolSnapshot`` and journal listings as Rich output.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    decimals:
        Decimals of both the stake and reward units.
    """

    def __init__(self, console: Console | None = None, decimals: int = 18) -> None:
        self.console = console or Console()
        self.decimals = decimals

    def _fmt(self, amount: int) -> str:
        return format_amount(amount, self.decimals)

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    def window_status(self, snapshot: PoolSnapshot) -> str:
        if not snapshot.started:
            return "[yellow]not started[/yellow]"
        if snapshot.window_active:
            return "[green]active[/green]"
        return "[dim]finished[/dim]"

    def render_snapshot(self, snapshot: PoolSnapshot) -> Panel:
        table = self._build_accounts_table(snapshot)

        chain_status = (
            "[green]valid[/green]" if snapshot.chain_valid else "[bold red]BROKEN[/bold red]"
        )
        summary = "  |  ".join([
            f"[bold]Pool:[/bold] {snapshot.pool_id}",
            f"[bold]Time:[/bold] {snapshot.now}",
            f"[bold]Window:[/bold] {self.window_status(snapshot)} "
            f"({snapshot.last_update_time} -> {snapshot.period_finish})",
            f"[bold]Staked:[/bold] {self._fmt(snapshot.total_supply)}",
            f"[bold]Funded:[/bold] {self._fmt(snapshot.total_funded)}",
            f"[bold]Paid:[/bold] {self._fmt(snapshot.total_paid)}",
            f"[bold]Events:[/bold] {snapshot.event_count}",
            f"[bold]Chain:[/bold] {chain_status}",
        ])

        return Panel(
            Group(table, Text(""), Text.from_markup(summary)),
            title=f"[bold]{snapshot.name} ({snapshot.symbol})[/bold]",
            subtitle=f"Last updated: {snapshot.last_updated.strftime('%Y-%m-%d %H:%M:%S UTC')}",
            border_style="blue",
            padding=(1, 2),
        )

    def _build_accounts_table(self, snapshot: PoolSnapshot) -> Table:
        table = Table(show_header=True, header_style="bold cyan", expand=True)
        table.add_column("Account", min_width=12)
        table.add_column("Stake", justify="right")
        table.add_column("Share", justify="right", width=9)
        table.add_column("Earned", justify="right")

        if not snapshot.accounts:
            table.add_row("[dim]no stakers[/dim]", "", "", "")
        for status in snapshot.accounts:
            table.add_row(
                status.account,
                self._fmt(status.balance),
                f"{status.share_bps / 100:.2f}%",
                self._fmt(status.earned),
            )
        return table

    def print_snapshot(self, snapshot: PoolSnapshot) -> None:
        self.console.print(self.render_snapshot(snapshot))

    # ------------------------------------------------------------------
    # Journal
    # ------------------------------------------------------------------

    def render_events(
        self, pool_id: str, entries: list[JournalEntry], events: list[PoolEvent]
    ) -> Table:
        table = Table(title=f"Events for {pool_id}", header_style="bold cyan")
        table.add_column("#", style="dim", justify="right")
        table.add_column("Time", justify="right")
        table.add_column("Event")
        table.add_column("Details")
        table.add_column("Hash", style="dim")

        for i, (entry, event) in enumerate(zip(entries, events)):
            style = _EVENT_STYLES.get(event.event_kind, "")
            table.add_row(
                str(i),
                str(event.block_time),
                f"[{style}]{event.event_kind.value}[/{style}]",
                self._describe(event),
                entry.entry_hash[:12],
            )
        return table

    def _describe(self, event: PoolEvent) -> str:
        data = event.model_dump(exclude={"event_id", "pool_id", "block_time", "event_kind"})
        parts = []
        for key, value in data.items():
            if isinstance(value, int):
                value = self._fmt(value)
            parts.append(f"{key}={value or '-'}")
        return " ".join(parts)

    def print_chain_verification(self, pool_id: str, valid: bool) -> None:
        if valid:
            self.console.print(f"[green]Hash chain for pool {pool_id} is valid.[/green]")
        else:
            self.console.print(
                f"[bold red]Hash chain for pool {pool_id} is BROKEN![/bold red]"
            )
