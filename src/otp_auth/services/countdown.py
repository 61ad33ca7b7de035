"""Cancellable periodic task used to drive the OTP countdown."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


class PeriodicTask:
    """Runs *step* every *interval* seconds until it returns ``False``.

    The loop is an :class:`asyncio.Task`, so :meth:`start` must be called
    with an event loop running.  :meth:`cancel` may be called any number of
    times, including before :meth:`start` or after the loop finished.
    """

    def __init__(self, step: Callable[[], bool], interval: float, name: str = "periodic") -> None:
        self._step = step
        self._interval = interval
        self._name = name
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            raise RuntimeError(f"{self._name} task already running")
        self._task = asyncio.get_running_loop().create_task(self._run(), name=self._name)

    def cancel(self) -> None:
        if self._task is None:
            return
        if not self._task.done():
            self._task.cancel()
            logger.debug("%s task cancelled", self._name)
        self._task = None

    async def _run(self) -> None:
        while self._step():
            await asyncio.sleep(self._interval)
        logger.debug("%s task finished", self._name)

    async def wait(self) -> None:
        """Wait for the loop to finish on its own (used by tests and shutdown)."""
        if self._task is not None:
            await asyncio.wait({self._task})
