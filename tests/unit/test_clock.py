"""Tests for time sources."""

from __future__ import annotations

import time

import pytest

from stakingrewards.core.clock import (
    Clock,
    ClockRegressionError,
    ManualClock,
    SystemClock,
)


class TestManualClock:
    def test_set_and_advance(self):
        clock = ManualClock(100)
        assert clock.now() == 100
        assert clock.advance(50) == 150
        assert clock.set(200) == 200
        assert clock.set(200) == 200

    def test_cannot_move_backwards(self):
        clock = ManualClock(100)
        with pytest.raises(ClockRegressionError):
            clock.set(99)
        with pytest.raises(ClockRegressionError):
            clock.advance(-1)
        assert clock.now() == 100

    def test_negative_start_rejected(self):
        with pytest.raises(ValueError):
            ManualClock(-1)


class TestSystemClock:
    def test_integer_seconds(self):
        clock = SystemClock()
        now = clock.now()
        assert isinstance(now, int)
        assert abs(now - time.time()) < 5

    def test_both_satisfy_protocol(self):
        assert isinstance(SystemClock(), Clock)
        assert isinstance(ManualClock(), Clock)
