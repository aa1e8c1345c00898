"""Time sources consumed by the reward ledger.

The ledger never advances time itself.  It reads ``now()`` from an injected
``Clock`` once per operation and requires the values it observes to be
non-decreasing.

Implementations
---------------
SystemClock
    Wall-clock seconds since the epoch.
ManualClock
    Explicitly driven clock for simulations and tests.  Refuses to move
    backwards.
"""

from __future__ import annotations

import time
from typing import Protocol, runtime_checkable


class ClockRegressionError(RuntimeError):
    """Raised when a time source is observed moving backwards."""


@runtime_checkable
class Clock(Protocol):
    """Protocol for time sources.  ``now()`` returns integer seconds."""

    def now(self) -> int:
        ...


class SystemClock:
    """Integer wall-clock seconds."""

    def now(self) -> int:
        return int(time.time())


class ManualClock:
    """A clock that only moves when told to.

    Parameters
    ----------
    start:
        Initial timestamp in seconds.
    """

    def __init__(self, start: int = 0) -> None:
        if start < 0:
            raise ValueError(f"Clock cannot start before zero: {start}")
        self._now = start

    def now(self) -> int:
        return self._now

    def set(self, timestamp: int) -> int:
        """Jump to *timestamp*.  Jumping backwards raises ``ClockRegressionError``."""
        if timestamp < self._now:
            raise ClockRegressionError(
                f"Cannot move clock back from {self._now} to {timestamp}"
            )
        self._now = timestamp
        return self._now

    def advance(self, seconds: int) -> int:
        """Move forward by *seconds* and return the new time."""
        if seconds < 0:
            raise ClockRegressionError(f"Cannot advance by {seconds} seconds")
        self._now += seconds
        return self._now
