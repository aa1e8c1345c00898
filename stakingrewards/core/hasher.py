"""Canonical encoding and digests for journal entries.

Events are stored as sorted, compact, ASCII-only JSON so the same event
always encodes to the same bytes.  An entry's digest covers every field of
the entry except ``entry_hash`` itself, including the previous entry's
hash, which is what links a pool's entries into a chain.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any

from stakingrewards.models.events import PoolEvent
from stakingrewards.models.journal import JournalEntry


def canonical_json(obj: Any) -> str:
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=True)


def encode_event(event: PoolEvent) -> str:
    """Canonical JSON payload of *event*, as stored in ``event_json``."""
    return canonical_json(event.model_dump(mode="json"))


def entry_digest(entry: JournalEntry) -> str:
    """SHA-256 over *entry* with its own ``entry_hash`` left out."""
    fields = entry.model_dump(mode="json", exclude={"entry_hash"})
    return hashlib.sha256(canonical_json(fields).encode("utf-8")).hexdigest()


def seal(entry: JournalEntry) -> JournalEntry:
    """Return a copy of *entry* with ``entry_hash`` filled in."""
    return entry.model_copy(update={"entry_hash": entry_digest(entry)})
