"""Models for values persisted in the key-value store."""

from datetime import date, datetime, tzinfo

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

from streak_tracker.domain.progress import DailyProgress, Meal
from streak_tracker.domain.streaks import StreakState


def parse_stored_date(value: object, tz: tzinfo | None = None) -> date | None:
    """Parse an ISO date or ISO datetime string into a calendar date.

    Timestamps with an offset (older installs stored UTC ``toISOString`` values)
    are converted to ``tz``, or to the local timezone, before taking the date.
    """
    if isinstance(value, datetime):
        return _local_date(value, tz)
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    cleaned = value.strip()
    try:
        return date.fromisoformat(cleaned)
    except ValueError:
        pass
    try:
        parsed = datetime.fromisoformat(cleaned)
    except ValueError:
        return None
    return _local_date(parsed, tz)


def _local_date(value: datetime, tz: tzinfo | None) -> date:
    if value.tzinfo is None:
        return value.date()
    return value.astimezone(tz).date()


class StoredDailyProgress(BaseModel):
    """Stored shape of the live day's totals.

    Older installs wrote ``{water, calories, date}`` with a full timestamp;
    both shapes are accepted.
    """

    model_config = ConfigDict(populate_by_name=True)

    date: date
    water_consumed_ml: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices("waterConsumedMl", "water"),
    )
    calories_consumed: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices("caloriesConsumed", "calories"),
    )

    @field_validator("date", mode="before")
    @classmethod
    def _coerce_date(cls, value: object) -> object:
        return parse_stored_date(value) or value


class StoredMeal(BaseModel):
    """Stored shape of a recent meal entry."""

    name: str = ""
    time: str = ""
    calories: int = Field(default=0, ge=0)


class StoredStreakState(BaseModel):
    """Stored shape of the streak record."""

    model_config = ConfigDict(populate_by_name=True)

    streak_count: int = Field(default=0, ge=0, validation_alias="streakCount")
    last_check_date: date | None = Field(default=None, validation_alias="lastCheckDate")
    credited_date: date | None = Field(default=None, validation_alias="creditedDate")

    @field_validator("last_check_date", "credited_date", mode="before")
    @classmethod
    def _coerce_dates(cls, value: object) -> object:
        if value is None:
            return None
        return parse_stored_date(value) or value


def decode_progress(raw: object) -> DailyProgress | None:
    """Return stored progress, or None when missing or malformed."""
    if not isinstance(raw, dict):
        return None
    try:
        stored = StoredDailyProgress.model_validate(raw)
    except ValidationError:
        return None
    return DailyProgress(
        date=stored.date,
        water_consumed_ml=stored.water_consumed_ml,
        calories_consumed=stored.calories_consumed,
    )


def encode_progress(progress: DailyProgress) -> dict[str, object]:
    """Return the JSON payload for stored progress."""
    return {
        "date": progress.date.isoformat(),
        "waterConsumedMl": progress.water_consumed_ml,
        "caloriesConsumed": progress.calories_consumed,
    }


def decode_meals(raw: object) -> list[Meal] | None:
    """Return stored meals, skipping malformed entries.

    Returns None when the value is not a list at all.
    """
    if not isinstance(raw, list):
        return None
    meals: list[Meal] = []
    for entry in raw:
        if not isinstance(entry, dict):
            continue
        try:
            stored = StoredMeal.model_validate(entry)
        except ValidationError:
            continue
        meals.append(
            Meal(name=stored.name, time=stored.time, calories=stored.calories)
        )
    return meals


def encode_meal(meal: Meal) -> dict[str, object]:
    """Return the JSON payload for a stored meal."""
    return {"name": meal.name, "time": meal.time, "calories": meal.calories}


def decode_streak_state(raw: object) -> StreakState | None:
    """Return the stored streak record, or None when missing or malformed."""
    if not isinstance(raw, dict):
        return None
    try:
        stored = StoredStreakState.model_validate(raw)
    except ValidationError:
        return None
    return StreakState(
        streak_count=stored.streak_count,
        last_check_date=stored.last_check_date,
        credited_date=stored.credited_date,
    )


def encode_streak_state(state: StreakState) -> dict[str, object]:
    """Return the JSON payload for the streak record."""
    return {
        "streakCount": state.streak_count,
        "lastCheckDate": _iso_or_none(state.last_check_date),
        "creditedDate": _iso_or_none(state.credited_date),
    }


def decode_count(raw: object) -> int | None:
    """Parse a stored non-negative counter that may have been written as text."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw if raw >= 0 else None
    if isinstance(raw, float) and raw.is_integer():
        return int(raw) if raw >= 0 else None
    if isinstance(raw, str) and raw.strip().isdigit():
        return int(raw.strip())
    return None


def _iso_or_none(value: date | None) -> str | None:
    return value.isoformat() if value else None
