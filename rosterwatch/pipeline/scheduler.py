import asyncio
import time
from typing import Awaitable, Callable, Optional, Set

from loguru import logger


def seconds_until_next_boundary(interval_seconds: float, now: Optional[float] = None) -> float:
    """Delay until the next wall-clock multiple of the interval (cron-style */N)."""
    now = time.time() if now is None else now
    remainder = now % interval_seconds
    return interval_seconds - remainder if remainder else interval_seconds


class TickScheduler:
    """Runs ``tick`` once at startup and then on every interval boundary.

    Ticks are started as tasks so a slow tick never delays the clock; the
    tick itself decides whether to skip when its predecessor is still busy.
    """

    def __init__(
        self,
        tick: Callable[[], Awaitable[object]],
        interval_minutes: int,
        on_result: Optional[Callable[[object], None]] = None,
    ):
        self.tick = tick
        self.interval_seconds = interval_minutes * 60
        self.on_result = on_result
        self._tasks: Set[asyncio.Task] = set()

    def _start_tick(self) -> None:
        task = asyncio.create_task(self._run_tick())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run_tick(self) -> None:
        try:
            result = await self.tick()
        except Exception as e:
            logger.exception(f"Scheduled tick error: {e}")
            return
        if result is not None and self.on_result:
            self.on_result(result)

    async def run_forever(self) -> None:
        logger.info(
            f"Service started. Data will be updated every {self.interval_seconds // 60} minutes."
        )
        self._start_tick()
        while True:
            await asyncio.sleep(seconds_until_next_boundary(self.interval_seconds))
            self._start_tick()

    async def wait_idle(self) -> None:
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
