"""Reward pool parameters and accrual state models.

``PoolParams`` is frozen at construction.  The three state models are owned
by a single ``StakingRewards`` instance and mutated only through its
operations; assignment is validated so a negative balance or rate can never
be stored.
"""

from __future__ import annotations

import uuid

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PoolParams(BaseModel):
    """Construction parameters of a reward pool.  Immutable."""

    model_config = ConfigDict(frozen=True)

    pool_id: str = Field(default_factory=lambda: f"pool-{uuid.uuid4().hex[:12]}")
    start_time: int = Field(ge=0)
    rewards_duration: int = Field(gt=0)
    reward_token: str  # address of the reward asset
    rewards_distribution: str  # initial REWARD_DISTRIBUTION_ROLE holder
    minter: str  # initial MINTER_ROLE holder
    name: str = "Pool token"
    symbol: str = "PPT"
    admin: str = ""  # initial DEFAULT_ADMIN_ROLE holder

    @model_validator(mode="after")
    def _check_accounts(self) -> PoolParams:
        if not self.rewards_distribution or not self.minter:
            raise ValueError("rewards_distribution and minter must be non-empty")
        return self


class DistributionWindow(BaseModel):
    """The span over which the current funding is released linearly."""

    model_config = ConfigDict(validate_assignment=True)

    start_time: int = Field(ge=0)
    duration: int = Field(gt=0)
    period_finish: int = Field(default=0, ge=0)
    last_update_time: int = Field(default=0, ge=0)
    reward_rate: int = Field(default=0, ge=0)  # base units per second


class GlobalAccrual(BaseModel):
    """Pool-wide accumulator.  ``reward_per_share_stored`` is scaled by SCALE."""

    model_config = ConfigDict(validate_assignment=True)

    reward_per_share_stored: int = Field(default=0, ge=0)
    total_staked: int = Field(default=0, ge=0)


class AccountState(BaseModel):
    """Per-account stake and settlement checkpoint."""

    model_config = ConfigDict(validate_assignment=True)

    balance: int = Field(default=0, ge=0)
    reward_per_share_paid: int = Field(default=0, ge=0)
    accrued_unclaimed: int = Field(default=0, ge=0)
