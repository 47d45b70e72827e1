"""Cancellable once-per-second countdown."""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

import config

logger = logging.getLogger(__name__)


class CountdownTimer:
    """
    Calls ``on_tick`` every ``interval`` seconds until it returns False or the
    timer is cancelled.

    Must be started from inside a running event loop.
    """

    def __init__(
        self,
        on_tick: Callable[[], Awaitable[bool]],
        interval: float = config.TICK_INTERVAL_SEC
    ):
        self.on_tick = on_tick
        self.interval = interval
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start ticking. Calling this on a running timer does nothing."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    def cancel(self) -> None:
        """Stop the timer. Safe to call more than once."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                keep_going = await self.on_tick()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Countdown tick failed; stopping timer")
                return
            if not keep_going:
                return
