"""Domain models for daily water and calorie progress."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class DailyProgress:
    """Water and calorie totals for one calendar day."""

    date: date
    water_consumed_ml: int = 0
    calories_consumed: int = 0

    @classmethod
    def empty(cls, day: date) -> "DailyProgress":
        """Return zeroed progress for a day."""
        return cls(date=day)


@dataclass(frozen=True)
class Meal:
    """A logged meal as shown in the recent meals list."""

    name: str
    time: str
    calories: int


@dataclass(frozen=True)
class Goals:
    """Daily water and calorie targets."""

    water_goal_ml: int
    calorie_goal: int

    def is_met_by(self, progress: DailyProgress) -> bool:
        """Return True when both totals reach their targets."""
        return (
            progress.water_consumed_ml >= self.water_goal_ml
            and progress.calories_consumed >= self.calorie_goal
        )
