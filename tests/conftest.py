"""Shared fixtures — a hand-driven clock so expiry never needs real waiting."""

from __future__ import annotations

from unittest.mock import create_autospec

import pytest

from otp_auth.services.event_logger import AuthEventLogger

START_TIME = 1_700_000_000.0


class ManualClock:
    """Clock that only moves when a test calls :meth:`advance`."""

    def __init__(self, start: float = START_TIME) -> None:
        self._now = start

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> None:
        self._now += seconds


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def events():
    """Mocked event logger — records calls, logs nothing."""
    return create_autospec(AuthEventLogger, instance=True)
