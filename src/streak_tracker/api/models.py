"""Pydantic models for the tracker HTTP surface."""

from datetime import date

from pydantic import BaseModel, Field

from streak_tracker.domain.progress import Meal
from streak_tracker.domain.streaks import StreakStatus, TrackerSnapshot


class AddWaterRequest(BaseModel):
    """Water logging payload."""

    amount_ml: int = Field(gt=0)


class AddMealRequest(BaseModel):
    """Meal logging payload."""

    name: str = Field(min_length=1)
    time: str = ""
    calories: int = Field(ge=0)


class MealResponse(BaseModel):
    """A meal logged today."""

    name: str
    time: str
    calories: int

    @classmethod
    def from_meal(cls, meal: Meal) -> "MealResponse":
        return cls(name=meal.name, time=meal.time, calories=meal.calories)


class MealsResponse(BaseModel):
    """Meals logged today."""

    meals: list[MealResponse]


class SnapshotResponse(BaseModel):
    """Today's progress and the streak."""

    date: date
    water_consumed_ml: int
    calories_consumed: int
    water_goal_ml: int
    calorie_goal: int
    water_remaining_ml: int
    calories_remaining: int
    water_percentage: int
    goals_met: bool
    streak_count: int
    status: StreakStatus
    stale: bool

    @classmethod
    def from_snapshot(cls, snapshot: TrackerSnapshot) -> "SnapshotResponse":
        return cls(
            date=snapshot.date,
            water_consumed_ml=snapshot.water_consumed_ml,
            calories_consumed=snapshot.calories_consumed,
            water_goal_ml=snapshot.water_goal_ml,
            calorie_goal=snapshot.calorie_goal,
            water_remaining_ml=snapshot.water_remaining_ml,
            calories_remaining=snapshot.calories_remaining,
            water_percentage=snapshot.water_percentage,
            goals_met=snapshot.goals_met,
            streak_count=snapshot.streak_count,
            status=snapshot.status,
            stale=snapshot.stale,
        )
