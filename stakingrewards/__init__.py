"""stakingrewards: time-weighted, role-gated reward distribution pools.

A pool releases funded rewards linearly over a distribution window and
splits them between stakers in proportion to stake and time staked:
  - Reward-per-share accumulator with per-account settlement checkpoints
  - Role-gated funding (REWARD_DISTRIBUTION_ROLE) and staking (MINTER_ROLE)
  - Checked 10**18 fixed-point arithmetic
  - Atomic operations with post-commit events
  - Optional hash-chained SQLite event journal
"""

__version__ = "0.1.0"
__description__ = "Time-weighted reward distribution pools with role-gated funding"

from stakingrewards.core.access_control import AccessControl, UnauthorizedError
from stakingrewards.core.clock import ManualClock, SystemClock
from stakingrewards.core.reward_token import RewardToken
from stakingrewards.core.staking_rewards import NotStartedError, StakingRewards
from stakingrewards.models.pool import PoolParams
from stakingrewards.models.roles import Role

__all__ = [
    "StakingRewards",
    "PoolParams",
    "Role",
    "AccessControl",
    "RewardToken",
    "ManualClock",
    "SystemClock",
    "UnauthorizedError",
    "NotStartedError",
    "__version__",
]
