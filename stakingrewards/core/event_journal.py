"""Append-only, hash-chained event journal backed by SQLite.

Every event a pool commits can be recorded here.  The journal is an audit
trail, not the pool's state: it lets an operator list what a pool did and
detect after-the-fact edits.

Design:
- Append-only: only ``append()`` writes; no update, no delete.
- Appends are serialized per journal instance.
- Hash-chained per pool: each entry includes SHA-256 of the previous entry.
- WAL journal mode for concurrent readers.
- entry_hash UNIQUE constraint for tamper detection.
"""

from __future__ import annotations

import json
import logging
import sqlite3
import threading
from datetime import datetime
from pathlib import Path

from stakingrewards.core.hasher import encode_event, entry_digest, seal
from stakingrewards.models.events import EVENT_TYPE_MAP, EventKind, PoolEvent
from stakingrewards.models.journal import JournalEntry

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# DDL
# ---------------------------------------------------------------------------

_CREATE_JOURNAL = """
CREATE TABLE IF NOT EXISTS event_journal (
    id                    INTEGER PRIMARY KEY AUTOINCREMENT,
    entry_id              TEXT NOT NULL UNIQUE,
    pool_id               TEXT NOT NULL,
    event_kind            TEXT NOT NULL,
    block_time            INTEGER NOT NULL,
    event_json            TEXT NOT NULL,
    timestamp_utc         TEXT NOT NULL,
    schema_version        TEXT NOT NULL,
    previous_entry_hash   TEXT NOT NULL DEFAULT '',
    entry_hash            TEXT NOT NULL UNIQUE
);
"""

_CREATE_IDX_POOL = """
CREATE INDEX IF NOT EXISTS idx_pool_id ON event_journal(pool_id, id);
"""


class JournalIntegrityError(RuntimeError):
    """Raised when the hash chain is broken."""


class EventJournal:
    """Append-only, hash-chained pool event journal.

    Parameters
    ----------
    db_path:
        Path to the SQLite database file. Created if it does not exist.
    """

    def __init__(self, db_path: Path) -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._write_lock = threading.Lock()
        self._init_schema()

    @property
    def db_path(self) -> Path:
        return self._db_path

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), check_same_thread=False)
        conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _init_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(_CREATE_JOURNAL)
            conn.execute(_CREATE_IDX_POOL)
            conn.commit()

    # ------------------------------------------------------------------
    # Core: append-only write
    # ------------------------------------------------------------------

    def append(self, event: PoolEvent) -> JournalEntry:
        """Seal *event* into a journal entry linked to the pool's chain."""
        # Reading the chain head and inserting must not interleave.
        with self._write_lock:
            previous_hash = self._get_latest_hash(event.pool_id)
            sealed = seal(JournalEntry(
                pool_id=event.pool_id,
                event_kind=event.event_kind,
                block_time=event.block_time,
                event_json=encode_event(event),
                previous_entry_hash=previous_hash,
            ))
            self._insert(sealed)
        logger.debug(
            "Journaled %s for %s (%s)",
            sealed.event_kind.value,
            sealed.pool_id,
            sealed.entry_hash[:12],
        )
        return sealed

    def _insert(self, entry: JournalEntry) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO event_journal
                    (entry_id, pool_id, event_kind, block_time, event_json,
                     timestamp_utc, schema_version, previous_entry_hash,
                     entry_hash)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    entry.entry_id,
                    entry.pool_id,
                    entry.event_kind.value,
                    entry.block_time,
                    entry.event_json,
                    entry.timestamp_utc.isoformat()
                    if isinstance(entry.timestamp_utc, datetime)
                    else entry.timestamp_utc,
                    entry.schema_version,
                    entry.previous_entry_hash,
                    entry.entry_hash,
                ),
            )
            conn.commit()

    def _get_latest_hash(self, pool_id: str) -> str:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT entry_hash FROM event_journal WHERE pool_id = ? "
                "ORDER BY id DESC LIMIT 1",
                (pool_id,),
            ).fetchone()
        return row[0] if row else ""

    # ------------------------------------------------------------------
    # Query methods (read-only)
    # ------------------------------------------------------------------

    def get_latest(self, pool_id: str) -> JournalEntry | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM event_journal WHERE pool_id = ? ORDER BY id DESC LIMIT 1",
                (pool_id,),
            ).fetchone()
        return self._row_to_entry(row) if row else None

    def get_pool_entries(self, pool_id: str) -> list[JournalEntry]:
        """Return all entries for a pool, oldest first."""
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM event_journal WHERE pool_id = ? ORDER BY id ASC",
                (pool_id,),
            ).fetchall()
        return [self._row_to_entry(row) for row in rows]

    def get_all_pool_ids(self) -> list[str]:
        """Return every pool id present, most recently active first."""
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT pool_id, MAX(id) AS last_id FROM event_journal "
                "GROUP BY pool_id ORDER BY last_id DESC"
            ).fetchall()
        return [row[0] for row in rows]

    def load_events(self, pool_id: str) -> list[PoolEvent]:
        """Decode a pool's journal back into typed event models."""
        events: list[PoolEvent] = []
        for entry in self.get_pool_entries(pool_id):
            model_cls = EVENT_TYPE_MAP[entry.event_kind]
            events.append(model_cls.model_validate(json.loads(entry.event_json)))
        return events

    # ------------------------------------------------------------------
    # Chain verification
    # ------------------------------------------------------------------

    def verify_chain(self, pool_id: str) -> bool:
        """Verify the hash chain of a pool.

        Returns True if the chain is valid, raises JournalIntegrityError
        otherwise.
        """
        prev_hash = ""
        for entry in self.get_pool_entries(pool_id):
            if entry.previous_entry_hash != prev_hash:
                raise JournalIntegrityError(
                    f"Chain broken at entry {entry.entry_id}: "
                    f"expected previous_hash={prev_hash!r}, "
                    f"got {entry.previous_entry_hash!r}"
                )
            expected_hash = entry_digest(entry)
            if entry.entry_hash != expected_hash:
                raise JournalIntegrityError(
                    f"Tampered entry {entry.entry_id}: "
                    f"expected hash={expected_hash!r}, got {entry.entry_hash!r}"
                )
            prev_hash = entry.entry_hash
        return True

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _row_to_entry(row: tuple) -> JournalEntry:
        (
            _id,
            entry_id,
            pool_id,
            event_kind,
            block_time,
            event_json,
            timestamp_utc,
            schema_version,
            previous_entry_hash,
            entry_hash,
        ) = row
        return JournalEntry(
            entry_id=entry_id,
            pool_id=pool_id,
            event_kind=EventKind(event_kind),
            block_time=block_time,
            event_json=event_json,
            timestamp_utc=timestamp_utc,
            schema_version=schema_version,
            previous_entry_hash=previous_entry_hash,
            entry_hash=entry_hash,
        )
