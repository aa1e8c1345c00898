"""Shared test fixtures for stakingrewards."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from stakingrewards.core.clock import ManualClock
from stakingrewards.core.event_journal import EventJournal
from stakingrewards.core.reward_token import RewardToken
from stakingrewards.core.staking_rewards import StakingRewards
from stakingrewards.models.pool import PoolParams

GENESIS = 1_000_000
START_DELAY = 86400  # pool opens one day after creation
DURATION = 60 * 60 * 24 * 60  # 60 days
REWARD = 100 * 10**18
STAKE = 2 * 10**18

ADMIN = "owner"
DISTRIBUTOR = "distributor"
MINTER = "minter"


@pytest.fixture
def clock() -> ManualClock:
    """Provide a manual clock parked one day before the pool opens."""
    return ManualClock(GENESIS)


@pytest.fixture
def reward_token() -> RewardToken:
    """Provide a reward token with ten full rewards held by the distributor."""
    token = RewardToken("Reward Token", "RTOK", address="rtok")
    token.mint(DISTRIBUTOR, 10 * REWARD)
    return token


@pytest.fixture
def params(reward_token: RewardToken) -> PoolParams:
    return PoolParams(
        pool_id="pool-test-001",
        start_time=GENESIS + START_DELAY,
        rewards_duration=DURATION,
        reward_token=reward_token.address,
        rewards_distribution=DISTRIBUTOR,
        minter=MINTER,
        name="Pool token",
        symbol="PPT",
        admin=ADMIN,
    )


@pytest.fixture
def pool(
    params: PoolParams, reward_token: RewardToken, clock: ManualClock
) -> StakingRewards:
    """Provide a fresh pool with default role grants and no journal."""
    return StakingRewards(params, reward_asset=reward_token, clock=clock)


@pytest.fixture
def journal(tmp_path: Path) -> EventJournal:
    """Provide a fresh EventJournal backed by a temp SQLite database."""
    return EventJournal(tmp_path / "events.db")


@pytest.fixture
def fund(
    pool: StakingRewards, reward_token: RewardToken
) -> Callable[..., tuple[int, int]]:
    """Factory fixture: transfer *amount* to the pool and notify it.

    Returns ``(window_start, window_end)`` as seen after the call.
    """

    def _fund(amount: int = REWARD) -> tuple[int, int]:
        reward_token.transfer(DISTRIBUTOR, pool.address, amount)
        pool.notify_reward_amount(amount, caller=DISTRIBUTOR)
        return pool.last_update_time, pool.period_finish

    return _fund
