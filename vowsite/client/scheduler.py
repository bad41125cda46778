"""
Fixed-interval asyncio task with cancellation and an in-flight guard.
"""
import asyncio
import logging
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)


class PeriodicTask:
    """
    Calls `func` every `interval` seconds, starting immediately.
    A tick that comes due while the previous call is still running is skipped.
    Exceptions from `func` are logged and never stop the schedule.
    """

    def __init__(self, func: Callable[[], Awaitable[None]], interval: float, name: str = "periodic") -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.func = func
        self.interval = interval
        self.name = name
        self.skipped = 0
        self._loop_task: asyncio.Task | None = None
        self._in_flight: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    @property
    def busy(self) -> bool:
        return self._in_flight is not None and not self._in_flight.done()

    def start(self) -> None:
        if self.running:
            return
        self._loop_task = asyncio.create_task(self._loop(), name=f"{self.name}-loop")

    async def stop(self) -> None:
        """Cancel the schedule and any call still in flight."""
        for task in (self._loop_task, self._in_flight):
            if task is not None and not task.done():
                task.cancel()
        for task in (self._loop_task, self._in_flight):
            if task is not None:
                try:
                    await task
                except asyncio.CancelledError:
                    pass
        self._loop_task = None
        self._in_flight = None

    async def _loop(self) -> None:
        while True:
            self._fire()
            await asyncio.sleep(self.interval)

    def _fire(self) -> None:
        if self.busy:
            self.skipped += 1
            logger.debug("periodic_tick_skipped", extra={"operation": self.name, "skipped": self.skipped})
            return
        self._in_flight = asyncio.create_task(self._invoke(), name=f"{self.name}-tick")

    async def _invoke(self) -> None:
        try:
            await self.func()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.exception("periodic_tick_failed", extra={"operation": self.name, "error": str(e)})
