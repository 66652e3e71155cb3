"""Cancellable recurring timer for the event loop.

Full-mode capture samples the camera on a fixed interval. Instead of a
blocking wait, the interval runs as an asyncio task owned by whoever
started it, and is stopped through the timer object itself.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)


class RecurringTimer:
    """Calls an async callback every ``interval`` seconds until stopped.

    The first tick fires one interval after ``start()``. Ticks never
    overlap: the next interval starts after the callback returns.

    Example usage::

        timer = RecurringTimer(0.6, on_tick)
        timer.start()
        ...
        timer.cancel()
    """

    def __init__(
        self,
        interval: float,
        callback: Callable[[], Awaitable[None]],
        name: str = "recurring-timer",
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be > 0")
        self._interval = interval
        self._callback = callback
        self._name = name
        self._task: asyncio.Task[None] | None = None
        self._stopped = False
        self._ticks = 0

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def ticks(self) -> int:
        """Number of ticks delivered so far."""
        return self._ticks

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done() and not self._stopped

    def start(self) -> None:
        """Schedule the timer on the running event loop."""
        if self._task is not None:
            raise RuntimeError(f"{self._name} has already been started")
        self._task = asyncio.get_running_loop().create_task(self._run(), name=self._name)
        logger.debug("%s started (interval=%.3fs)", self._name, self._interval)

    def stop(self) -> None:
        """Deliver no further ticks; a tick already running completes."""
        self._stopped = True

    def cancel(self) -> None:
        """Stop the timer and cancel a tick in progress.

        Safe to call when the timer never started, has finished, or from
        inside its own callback (which then behaves like ``stop()``).
        """
        self._stopped = True
        if self._task is None or self._task.done():
            return
        if self._task is asyncio.current_task():
            return
        self._task.cancel()
        logger.debug("%s cancelled after %d ticks", self._name, self._ticks)

    async def wait(self) -> None:
        """Wait until the timer task has finished, however it ended."""
        if self._task is None:
            return
        await asyncio.wait({self._task})

    async def _run(self) -> None:
        while not self._stopped:
            await asyncio.sleep(self._interval)
            if self._stopped:
                break
            self._ticks += 1
            try:
                await self._callback()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("%s callback failed on tick %d, stopping", self._name, self._ticks)
                self._stopped = True
