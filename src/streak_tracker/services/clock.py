"""Clock abstraction for reading the current local time."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from zoneinfo import ZoneInfo


class Clock(Protocol):
    """Source of the current instant."""

    def now(self) -> datetime:
        """Return the current timezone-aware local time."""


@dataclass
class SystemClock(Clock):
    """Clock backed by the device wall clock.

    When no timezone name is configured the device's local timezone is used.
    """

    timezone_name: str | None = None

    def now(self) -> datetime:
        """Return the current time in the configured timezone."""
        if self.timezone_name:
            return datetime.now(tz=ZoneInfo(self.timezone_name))
        return datetime.now().astimezone()


def today(clock: Clock) -> date:
    """Return the clock's current calendar date."""
    return clock.now().date()
