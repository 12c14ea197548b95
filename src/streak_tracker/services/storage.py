"""Key-value persistence interface for on-device state."""

import logging
from typing import Protocol

from streak_tracker.domain.progress import DailyProgress, Meal
from streak_tracker.domain.storage import decode_meals, decode_progress

_logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the underlying store cannot be read or written."""


class StorageKeys:
    """Keys of the values the tracker persists."""

    STREAK_STATE = "streakState"
    LAST_CHECK_DATE = "lastCheckDate"
    CURRENT_STREAK = "currentStreak"
    DAILY_PROGRESS = "dailyProgress"
    WATER_CONSUMED = "waterConsumed"
    RECENT_MEALS = "recentMeals"


class KeyValueStore(Protocol):
    """Durable key to JSON value store.

    Both methods complete before returning and raise ``StorageError`` on I/O
    failure. Keys are written independently; there are no transactions.
    """

    def get(self, key: str) -> object | None:
        """Return the stored JSON value for a key, or None if absent."""

    def set(self, key: str, value: object) -> None:
        """Persist a JSON-compatible value under a key."""


def read_progress(store: KeyValueStore) -> DailyProgress | None:
    """Return the stored live-day progress, or None when absent or unreadable."""
    raw = store.get(StorageKeys.DAILY_PROGRESS)
    progress = decode_progress(raw)
    if progress is None and raw is not None:
        _logger.warning("Ignoring malformed daily progress: %r", raw)
    return progress


def read_meals(store: KeyValueStore) -> list[Meal]:
    """Return the stored recent meals, or an empty list when unreadable."""
    raw = store.get(StorageKeys.RECENT_MEALS)
    meals = decode_meals(raw)
    if meals is None:
        if raw is not None:
            _logger.warning("Ignoring malformed recent meals: %r", raw)
        return []
    return meals
