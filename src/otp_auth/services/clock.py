"""Clock collaborator — the single source of "now" for expiry and session math."""

from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    """Anything that can report the current time in epoch seconds."""

    def now(self) -> float: ...


class SystemClock:
    """Wall-clock implementation backed by :func:`time.time`."""

    def now(self) -> float:
        return time.time()
