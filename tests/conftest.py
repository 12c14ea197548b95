"""Shared test fixtures."""

import json
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import pytest

from streak_tracker.config import Settings
from streak_tracker.containers import AppContainer, build_container
from streak_tracker.domain.progress import Goals
from streak_tracker.services.clock import Clock
from streak_tracker.services.progress import ProgressRecorder
from streak_tracker.services.storage import KeyValueStore, StorageError
from streak_tracker.services.streaks import StreakEngine
from streak_tracker.services.tracker import TrackerSession

WATER_GOAL_ML = 2700
CALORIE_GOAL = 2000


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """In-memory store that keeps JSON-serialized copies of values."""

    values: dict[str, object] = field(default_factory=dict)
    writes: list[str] = field(default_factory=list)

    def get(self, key: str) -> object | None:
        value = self.values.get(key)
        return None if value is None else json.loads(json.dumps(value))

    def set(self, key: str, value: object) -> None:
        self.values[key] = json.loads(json.dumps(value))
        self.writes.append(key)


@dataclass
class FlakyKeyValueStore(InMemoryKeyValueStore):
    """In-memory store whose reads or writes can be switched to fail."""

    fail_reads: bool = False
    fail_writes: bool = False
    failing_keys: set[str] = field(default_factory=set)

    def get(self, key: str) -> object | None:
        if self.fail_reads:
            raise StorageError("read failed")
        return super().get(key)

    def set(self, key: str, value: object) -> None:
        if self.fail_writes or key in self.failing_keys:
            raise StorageError("write failed")
        super().set(key, value)


@dataclass
class ManualClock(Clock):
    """Clock that only moves when told to."""

    current: datetime = field(
        default_factory=lambda: datetime(2024, 3, 4, 9, 0, tzinfo=UTC)
    )

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> None:
        self.current += timedelta(**kwargs)

    def next_day(self, hour: int = 9) -> None:
        self.current = (self.current + timedelta(days=1)).replace(hour=hour, minute=0)


@pytest.fixture
def goals() -> Goals:
    return Goals(water_goal_ml=WATER_GOAL_ML, calorie_goal=CALORIE_GOAL)


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def streak_engine(store: InMemoryKeyValueStore, goals: Goals) -> StreakEngine:
    return StreakEngine(store=store, goals=goals)


@pytest.fixture
def recorder(
    store: InMemoryKeyValueStore, clock: ManualClock, streak_engine: StreakEngine
) -> ProgressRecorder:
    return ProgressRecorder(store=store, clock=clock, streak_engine=streak_engine)


@pytest.fixture
def tracker(
    clock: ManualClock, streak_engine: StreakEngine, recorder: ProgressRecorder
) -> TrackerSession:
    return TrackerSession(
        clock=clock,
        streak_engine=streak_engine,
        progress_recorder=recorder,
        midnight_timer_enabled=False,
    )


@pytest.fixture
def settings(tmp_path) -> Settings:  # type: ignore[no-untyped-def]
    return Settings(
        _env_file=None,
        water_goal_ml=WATER_GOAL_ML,
        recommended_calories=CALORIE_GOAL,
        storage_backend="file",
        storage_path=str(tmp_path / "storage.json"),
        midnight_timer_enabled=False,
    )


@pytest.fixture
def container(
    settings: Settings, store: InMemoryKeyValueStore, clock: ManualClock
) -> AppContainer:
    return build_container(settings, store=store, clock=clock)
