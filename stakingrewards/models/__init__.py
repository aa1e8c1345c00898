"""stakingrewards data models — all Pydantic v2."""

from stakingrewards.models.events import (
    EVENT_TYPE_MAP,
    EventKind,
    PoolEvent,
    RewardAddedEvent,
    RewardPaidEvent,
    TransferEvent,
)
from stakingrewards.models.journal import JournalEntry
from stakingrewards.models.pool import (
    AccountState,
    DistributionWindow,
    GlobalAccrual,
    PoolParams,
)
from stakingrewards.models.roles import Role, RoleGrant

__all__ = [
    # pool
    "PoolParams",
    "DistributionWindow",
    "GlobalAccrual",
    "AccountState",
    # roles
    "Role",
    "RoleGrant",
    # events
    "EventKind",
    "PoolEvent",
    "RewardAddedEvent",
    "TransferEvent",
    "RewardPaidEvent",
    "EVENT_TYPE_MAP",
    # journal
    "JournalEntry",
]
