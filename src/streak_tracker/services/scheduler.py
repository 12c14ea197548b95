"""Best-effort timer that fires at every local midnight."""

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, time, timedelta

from streak_tracker.services.clock import Clock

_logger = logging.getLogger(__name__)


def seconds_until_next_midnight(now: datetime) -> float:
    """Return the real seconds between ``now`` and the next local midnight."""
    next_day = now.date() + timedelta(days=1)
    midnight = datetime.combine(next_day, time.min, tzinfo=now.tzinfo)
    # Same-tzinfo subtraction ignores DST offset changes; compare in UTC.
    return (midnight.astimezone(UTC) - now.astimezone(UTC)).total_seconds()


@dataclass
class MidnightScheduler:
    """Runs a callback shortly after each local midnight until cancelled.

    Timers do not survive process termination, so this is only a wake-up for
    long-lived sessions; callers still reconcile on every resume.
    """

    clock: Clock
    callback: Callable[[], object]
    grace_seconds: float = 1.0
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep
    _task: asyncio.Task[None] | None = field(default=None, init=False, repr=False)

    @property
    def running(self) -> bool:
        """Return True while the timer task is alive."""
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the timer on the running event loop if it is not running."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def cancel(self) -> None:
        """Stop the timer and wait for it to finish."""
        task = self._task
        self._task = None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def _run(self) -> None:
        while True:
            delay = seconds_until_next_midnight(self.clock.now()) + self.grace_seconds
            _logger.debug("Next midnight check in %.0f seconds", delay)
            await self.sleep(delay)
            try:
                self.callback()
            except Exception:
                _logger.exception("Midnight check failed")
