"""Event journal entry model (append-only, hash-chained per pool).

- Append-only (no UPDATE, no DELETE)
- Hash-chained (each entry links to the previous one of the same pool)
- One entry per committed pool event
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from stakingrewards.models.events import EventKind


class JournalEntry(BaseModel):
    """A single sealed entry in the event journal."""

    model_config = ConfigDict(frozen=True)

    entry_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    pool_id: str
    event_kind: EventKind
    block_time: int
    event_json: str  # canonical JSON of the event model
    timestamp_utc: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    schema_version: str = "2026-10"
    previous_entry_hash: str = ""
    entry_hash: str = ""  # computed on append, seals this entry
