"""``stakingrewards simulate`` — run a two-staker reward pool on a manual clock.

Funds a pool, stakes ``alice`` when the pool opens and ``bob`` halfway
through the window, then lets both claim after the window closes.  The
pool monitor is shown after each step.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from stakingrewards.config import config
from stakingrewards.core.clock import ManualClock
from stakingrewards.core.event_journal import EventJournal
from stakingrewards.core.reward_token import RewardToken
from stakingrewards.core.staking_rewards import StakingRewards
from stakingrewards.models.pool import PoolParams
from stakingrewards.monitor.projection import PoolProjection
from stakingrewards.monitor.renderer import PoolRenderer, format_amount

console = Console()

DISTRIBUTOR = "distributor"
MINTER = "minter"
STAKERS = ("alice", "bob")
GENESIS_TIME = 1_700_000_000


def simulate_cmd(
    reward: int = typer.Option(
        100, "--reward", "-r", min=0, help="Whole reward tokens to distribute."
    ),
    stake: int = typer.Option(
        2, "--stake", "-s", min=1, help="Whole stake tokens minted to each staker."
    ),
    duration: int = typer.Option(
        config.rewards_duration,
        "--duration",
        "-d",
        min=1,
        help="Distribution window length in seconds.",
    ),
    journal_db: Optional[str] = typer.Option(
        None,
        "--journal",
        "-j",
        help="Record pool events to this SQLite journal.",
    ),
) -> None:
    """Simulate a funded pool with two stakers entering at different times."""
    decimals = config.token_decimals
    clock = ManualClock(GENESIS_TIME)
    token = RewardToken(
        config.reward_token_name, config.reward_token_symbol, decimals=decimals
    )
    params = PoolParams(
        start_time=GENESIS_TIME + config.start_delay,
        rewards_duration=duration,
        reward_token=token.address,
        rewards_distribution=DISTRIBUTOR,
        minter=MINTER,
        name=config.pool_name,
        symbol=config.pool_symbol,
        admin=DISTRIBUTOR,
    )
    journal = EventJournal(Path(journal_db)) if journal_db else None
    pool = StakingRewards(params, reward_asset=token, clock=clock, journal=journal)
    projection = PoolProjection(pool, journal)
    renderer = PoolRenderer(console=console, decimals=decimals)

    reward_units = token.expand(reward)
    stake_units = token.expand(stake)

    console.print(
        Panel(
            f"[bold]Simulating pool {pool.pool_id}[/bold]\n\n"
            f"Reward: {reward} {token.symbol} over {duration}s\n"
            f"Stake per staker: {stake} {pool.symbol}",
            border_style="cyan",
            padding=(1, 2),
        )
    )

    token.mint(DISTRIBUTOR, reward_units)
    token.transfer(DISTRIBUTOR, pool.address, reward_units)
    pool.notify_reward_amount(reward_units, caller=DISTRIBUTOR)
    pool.mint(STAKERS[0], stake_units, caller=MINTER)
    console.print(f"\n[cyan]>>> Funded and staked {STAKERS[0]}[/cyan]")
    renderer.print_snapshot(projection.snapshot())

    clock.set(pool.last_update_time + duration // 2)
    pool.mint(STAKERS[1], stake_units, caller=MINTER)
    console.print(f"\n[cyan]>>> Halfway: staked {STAKERS[1]}[/cyan]")
    renderer.print_snapshot(projection.snapshot())

    clock.set(pool.period_finish + 1)
    payouts = {staker: pool.claim(caller=staker) for staker in STAKERS}
    console.print("\n[cyan]>>> Window closed: both stakers claimed[/cyan]")
    renderer.print_snapshot(projection.snapshot())

    table = Table(title="Payouts", header_style="bold cyan")
    table.add_column("Staker")
    table.add_column(f"Paid ({token.symbol})", justify="right")
    table.add_column("Share of funding", justify="right")
    for staker, paid in payouts.items():
        share = paid * 100 / reward_units if reward_units else 0.0
        table.add_row(staker, format_amount(paid, decimals), f"{share:.2f}%")
    console.print(table)

    if journal is not None:
        renderer.print_chain_verification(pool.pool_id, journal.verify_chain(pool.pool_id))
        console.print(f"[dim]Events recorded in {journal.db_path}[/dim]")
