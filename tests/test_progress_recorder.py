"""Tests for the daily progress recorder."""

import pytest

from streak_tracker.domain.progress import DailyProgress, Meal
from streak_tracker.services.progress import ProgressRecorder
from streak_tracker.services.streaks import StreakEngine
from tests.conftest import InMemoryKeyValueStore, ManualClock


@pytest.fixture(autouse=True)
def _reconciled(streak_engine: StreakEngine, clock: ManualClock) -> None:
    streak_engine.reconcile(clock.now())


def test_add_water_in_steps_matches_single_add(
    recorder: ProgressRecorder, store: InMemoryKeyValueStore
) -> None:
    recorder.add_water(1000)
    progress = recorder.add_water(1700)

    assert progress.water_consumed_ml == 2700
    assert store.values["dailyProgress"]["waterConsumedMl"] == 2700
    assert store.values["waterConsumed"] == 2700


@pytest.mark.parametrize(
    "amounts", [[250, 500, 1000], [1000, 500, 250], [1750], [1, 1749]]
)
def test_add_water_total_is_the_sum(
    recorder: ProgressRecorder, amounts: list[int]
) -> None:
    for amount in amounts:
        recorder.add_water(amount)

    assert recorder.current().water_consumed_ml == 1750


def test_add_water_is_not_clamped_to_goal(recorder: ProgressRecorder) -> None:
    recorder.add_water(2500)
    progress = recorder.add_water(1000)

    assert progress.water_consumed_ml == 3500


@pytest.mark.parametrize("amount", [0, -100, 2.5, "500", True])
def test_add_water_rejects_invalid_amounts(
    recorder: ProgressRecorder, store: InMemoryKeyValueStore, amount: object
) -> None:
    store.writes.clear()

    with pytest.raises(ValueError):
        recorder.add_water(amount)  # type: ignore[arg-type]

    assert store.writes == []


def test_recompute_calories_is_idempotent(recorder: ProgressRecorder) -> None:
    meals = [
        Meal(name="Oats", time="08:00", calories=350),
        Meal(name="Salad", time="13:00", calories=600),
    ]

    first = recorder.recompute_calories_from_meals(meals)
    second = recorder.recompute_calories_from_meals(meals)

    assert first.calories_consumed == 950
    assert second == first


def test_recompute_calories_keeps_water(recorder: ProgressRecorder) -> None:
    recorder.add_water(800)

    progress = recorder.recompute_calories_from_meals(
        [Meal(name="Toast", time="07:30", calories=200)]
    )

    assert progress.water_consumed_ml == 800
    assert progress.calories_consumed == 200


def test_add_meal_appends_and_recomputes(
    recorder: ProgressRecorder, store: InMemoryKeyValueStore
) -> None:
    recorder.add_meal(Meal(name="Oats", time="08:00", calories=350))
    progress = recorder.add_meal(Meal(name="Pasta", time="19:00", calories=900))

    assert progress.calories_consumed == 1250
    assert [meal.name for meal in recorder.meals()] == ["Oats", "Pasta"]
    assert store.values["recentMeals"][1] == {
        "name": "Pasta",
        "time": "19:00",
        "calories": 900,
    }


def test_add_meal_rejects_negative_calories(recorder: ProgressRecorder) -> None:
    with pytest.raises(ValueError):
        recorder.add_meal(Meal(name="Oops", time="", calories=-5))

    assert recorder.meals() == []


def test_every_mutation_writes_daily_progress(
    recorder: ProgressRecorder, store: InMemoryKeyValueStore
) -> None:
    store.writes.clear()
    recorder.add_water(100)
    assert store.writes[0] == "dailyProgress"

    store.writes.clear()
    recorder.recompute_calories_from_meals([])
    assert store.writes[0] == "dailyProgress"


def test_current_ignores_another_days_record(
    recorder: ProgressRecorder, store: InMemoryKeyValueStore, clock: ManualClock
) -> None:
    store.set(
        "dailyProgress",
        {"date": "2024-03-03", "waterConsumedMl": 2700, "caloriesConsumed": 2000},
    )

    assert recorder.current() == DailyProgress.empty(clock.now().date())


def test_meeting_both_goals_credits_the_streak(
    recorder: ProgressRecorder, streak_engine: StreakEngine
) -> None:
    recorder.add_water(2700)
    assert streak_engine.state().streak_count == 0

    recorder.add_meal(Meal(name="Breakfast", time="08:00", calories=900))
    recorder.add_meal(Meal(name="Dinner", time="19:00", calories=1100))
    recorder.add_water(300)

    assert streak_engine.state().streak_count == 1


def test_meals_ignore_a_list_left_from_another_day(
    recorder: ProgressRecorder, store: InMemoryKeyValueStore
) -> None:
    store.set("recentMeals", [{"name": "Lunch", "time": "12:00", "calories": 2000}])
    store.set(
        "dailyProgress",
        {"date": "2024-03-03", "waterConsumedMl": 0, "caloriesConsumed": 2000},
    )

    assert recorder.meals() == []
    progress = recorder.add_meal(Meal(name="Tea", time="", calories=5))
    assert progress.calories_consumed == 5
