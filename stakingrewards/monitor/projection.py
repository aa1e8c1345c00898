"""PoolProjection — pure read-only view over a reward pool.

Every ``snapshot()`` call re-reads the pool (and its journal, if given).
The projection never keeps state of its own and never mutates the pool.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from stakingrewards.core.event_journal import EventJournal, JournalIntegrityError
from stakingrewards.core.staking_rewards import StakingRewards


class AccountStatus(BaseModel):
    """Point-in-time status of one staker."""

    model_config = ConfigDict(frozen=True)

    account: str
    balance: int = 0
    earned: int = 0
    reward_per_share_paid: int = 0
    share_bps: int = 0  # stake share in basis points


class PoolSnapshot(BaseModel):
    """A frozen, point-in-time snapshot of a reward pool."""

    model_config = ConfigDict(frozen=True)

    pool_id: str
    name: str
    symbol: str
    now: int
    start_time: int
    period_finish: int
    last_update_time: int
    reward_rate: int
    reward_per_token: int
    total_supply: int
    total_funded: int = 0
    total_paid: int = 0
    accounts: list[AccountStatus] = []
    event_count: int = 0
    chain_valid: bool = True
    last_updated: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    @property
    def started(self) -> bool:
        return self.now >= self.start_time

    @property
    def window_active(self) -> bool:
        return self.last_update_time <= self.now < self.period_finish

    @property
    def total_earned(self) -> int:
        return sum(a.earned for a in self.accounts)

    @property
    def outstanding(self) -> int:
        """Funded reward not yet paid out."""
        return self.total_funded - self.total_paid


class PoolProjection:
    """Read-only projection over a ``StakingRewards`` pool.

    Parameters
    ----------
    pool:
        The pool to project.
    journal:
        Optional event journal; when given the snapshot reports the
        journal's event count and chain validity for the pool.
    """

    def __init__(self, pool: StakingRewards, journal: EventJournal | None = None) -> None:
        self._pool = pool
        self._journal = journal

    def snapshot(self) -> PoolSnapshot:
        pool = self._pool
        total = pool.total_supply
        accounts = [
            AccountStatus(
                account=account,
                balance=pool.balance_of(account),
                earned=pool.earned(account),
                reward_per_share_paid=pool.account_state(account).reward_per_share_paid,
                share_bps=pool.balance_of(account) * 10_000 // total if total else 0,
            )
            for account in pool.accounts()
        ]

        event_count = len(pool.events)
        chain_valid = True
        if self._journal is not None:
            event_count = len(self._journal.get_pool_entries(pool.pool_id))
            try:
                chain_valid = self._journal.verify_chain(pool.pool_id)
            except JournalIntegrityError:
                chain_valid = False

        return PoolSnapshot(
            pool_id=pool.pool_id,
            name=pool.name,
            symbol=pool.symbol,
            now=pool.now(),
            start_time=pool.start_time,
            period_finish=pool.period_finish,
            last_update_time=pool.last_update_time,
            reward_rate=pool.reward_rate,
            reward_per_token=pool.reward_per_token(),
            total_supply=total,
            total_funded=pool.total_funded,
            total_paid=pool.total_paid,
            accounts=accounts,
            event_count=event_count,
            chain_valid=chain_valid,
        )
