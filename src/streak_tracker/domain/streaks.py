"""Domain models for streak tracking."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum


class StreakStatus(StrEnum):
    """Observable state of the streak state machine for the current day."""

    IDLE = "idle"
    GOALS_MET = "goals_met"
    ROLLOVER_PENDING = "rollover_pending"


@dataclass(frozen=True)
class StreakState:
    """Persisted streak counter and reconciliation markers."""

    streak_count: int = 0
    last_check_date: date | None = None
    credited_date: date | None = None

    def is_credited(self, day: date) -> bool:
        """Return True when the streak increment for ``day`` was applied."""
        return self.credited_date == day


@dataclass(frozen=True)
class TrackerSnapshot:
    """Read model of today's progress and the streak for the host UI."""

    date: date
    water_consumed_ml: int
    calories_consumed: int
    water_goal_ml: int
    calorie_goal: int
    streak_count: int
    status: StreakStatus
    stale: bool = False

    @property
    def goals_met(self) -> bool:
        return (
            self.water_consumed_ml >= self.water_goal_ml
            and self.calories_consumed >= self.calorie_goal
        )

    @property
    def water_remaining_ml(self) -> int:
        return max(self.water_goal_ml - self.water_consumed_ml, 0)

    @property
    def calories_remaining(self) -> int:
        return max(self.calorie_goal - self.calories_consumed, 0)

    @property
    def water_percentage(self) -> int:
        if self.water_goal_ml <= 0:
            return 100
        return round(self.water_consumed_ml * 100 / self.water_goal_ml)
