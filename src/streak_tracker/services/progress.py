"""Recorder for the live day's water and calorie totals."""

from collections.abc import Sequence
from dataclasses import dataclass, replace

from streak_tracker.domain.progress import DailyProgress, Meal
from streak_tracker.domain.storage import encode_meal, encode_progress
from streak_tracker.services.clock import Clock, today
from streak_tracker.services.storage import (
    KeyValueStore,
    StorageKeys,
    read_meals,
    read_progress,
)
from streak_tracker.services.streaks import StreakEngine


@dataclass
class ProgressRecorder:
    """Accumulates today's totals and hands them to the streak engine.

    Every mutation writes the updated progress before returning and then asks
    the engine to evaluate the day. Totals are not clamped to the goals.
    """

    store: KeyValueStore
    clock: Clock
    streak_engine: StreakEngine

    def current(self) -> DailyProgress:
        """Return today's progress, zeroed if the stored record is another day's."""
        day = today(self.clock)
        progress = read_progress(self.store)
        if progress is None or progress.date != day:
            return DailyProgress.empty(day)
        return progress

    def meals(self) -> list[Meal]:
        """Return the meals logged today.

        The stored list only belongs to today while the stored progress record
        does; a rollover that failed part way leaves the previous day's list.
        """
        progress = read_progress(self.store)
        if progress is None or progress.date != today(self.clock):
            return []
        return read_meals(self.store)

    def add_water(self, amount_ml: int) -> DailyProgress:
        """Add a water amount in millilitres to today's total."""
        if isinstance(amount_ml, bool) or not isinstance(amount_ml, int):
            raise ValueError("Water amount must be an integer number of ml")
        if amount_ml <= 0:
            raise ValueError("Water amount must be positive")
        current = self.current()
        updated = replace(
            current, water_consumed_ml=current.water_consumed_ml + amount_ml
        )
        self.store.set(StorageKeys.DAILY_PROGRESS, encode_progress(updated))
        self.store.set(StorageKeys.WATER_CONSUMED, updated.water_consumed_ml)
        self.streak_engine.evaluate(updated)
        return updated

    def recompute_calories_from_meals(self, meals: Sequence[Meal]) -> DailyProgress:
        """Set today's calories to the sum of the given meals."""
        total = 0
        for meal in meals:
            if meal.calories < 0:
                raise ValueError("Meal calories must be non-negative")
            total += meal.calories
        updated = replace(self.current(), calories_consumed=total)
        self.store.set(StorageKeys.DAILY_PROGRESS, encode_progress(updated))
        self.streak_engine.evaluate(updated)
        return updated

    def add_meal(self, meal: Meal) -> DailyProgress:
        """Append a meal to today's list and refresh the calorie total."""
        if meal.calories < 0:
            raise ValueError("Meal calories must be non-negative")
        meals = [*self.meals(), meal]
        self.store.set(StorageKeys.RECENT_MEALS, [encode_meal(item) for item in meals])
        return self.recompute_calories_from_meals(meals)
