"""Events emitted by the reward ledger.

Each committed mutation emits one or more frozen event models.  They are
delivered to subscribers and, when a journal is attached, appended to the
hash-chained event journal.
"""

from __future__ import annotations

import uuid
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class EventKind(str, Enum):
    """The three event types a pool emits."""

    REWARD_ADDED = "reward_added"
    TRANSFER = "transfer"
    REWARD_PAID = "reward_paid"


class PoolEvent(BaseModel):
    """Fields shared by every pool event."""

    model_config = ConfigDict(frozen=True)

    event_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    pool_id: str
    block_time: int  # ledger time at which the emitting operation ran
    event_kind: EventKind


class RewardAddedEvent(PoolEvent):
    """A distribution window was funded."""

    event_kind: EventKind = EventKind.REWARD_ADDED
    reward: int


class TransferEvent(PoolEvent):
    """Stake tokens moved.  ``sender == ""`` marks a mint."""

    event_kind: EventKind = EventKind.TRANSFER
    sender: str = ""
    recipient: str
    value: int


class RewardPaidEvent(PoolEvent):
    """Accrued reward paid out to a participant."""

    event_kind: EventKind = EventKind.REWARD_PAID
    user: str
    reward: int


EVENT_TYPE_MAP: dict[EventKind, type[PoolEvent]] = {
    EventKind.REWARD_ADDED: RewardAddedEvent,
    EventKind.TRANSFER: TransferEvent,
    EventKind.REWARD_PAID: RewardPaidEvent,
}
