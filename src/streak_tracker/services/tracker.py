"""Host-facing tracker session tying reconciliation to user actions."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace

from streak_tracker.domain.progress import Meal
from streak_tracker.domain.streaks import StreakStatus, TrackerSnapshot
from streak_tracker.services.clock import Clock, today
from streak_tracker.services.progress import ProgressRecorder
from streak_tracker.services.scheduler import MidnightScheduler
from streak_tracker.services.storage import StorageError
from streak_tracker.services.streaks import StreakEngine

_logger = logging.getLogger(__name__)


@dataclass
class TrackerSession:
    """One device session of the tracker.

    Every call reconciles the day boundary before touching progress, so user
    actions never land on a stale day. Storage failures are logged and the
    last known values are returned marked as stale.
    """

    clock: Clock
    streak_engine: StreakEngine
    progress_recorder: ProgressRecorder
    midnight_timer_enabled: bool = True
    _scheduler: MidnightScheduler | None = field(default=None, init=False, repr=False)
    _last_snapshot: TrackerSnapshot | None = field(
        default=None, init=False, repr=False
    )

    async def start(self) -> TrackerSnapshot:
        """Reconcile on cold start and arm the midnight timer."""
        snapshot = self.resume()
        if self.midnight_timer_enabled:
            if self._scheduler is None:
                self._scheduler = MidnightScheduler(self.clock, self.resume)
            self._scheduler.start()
        return snapshot

    async def close(self) -> None:
        """Cancel the midnight timer for this session."""
        if self._scheduler is not None:
            await self._scheduler.cancel()
            self._scheduler = None

    @property
    def timer_running(self) -> bool:
        """Return True while the midnight timer is armed."""
        return self._scheduler is not None and self._scheduler.running

    def resume(self) -> TrackerSnapshot:
        """Reconcile after the app returns to the foreground."""
        return self._run(None)

    def snapshot(self) -> TrackerSnapshot:
        """Return today's progress and the streak."""
        return self._run(None)

    def add_water(self, amount_ml: int) -> TrackerSnapshot:
        """Log a water amount in millilitres."""
        return self._run(lambda: self.progress_recorder.add_water(amount_ml))

    def add_meal(self, name: str, time: str, calories: int) -> TrackerSnapshot:
        """Log a meal and refresh today's calories."""
        meal = Meal(name=name, time=time, calories=calories)
        return self._run(lambda: self.progress_recorder.add_meal(meal))

    def meals(self) -> list[Meal]:
        """Return today's meals, or an empty list when storage fails."""
        try:
            self.streak_engine.reconcile(self.clock.now())
            return self.progress_recorder.meals()
        except StorageError:
            _logger.exception("Failed to load recent meals")
            return []

    def _run(self, action: Callable[[], object] | None) -> TrackerSnapshot:
        try:
            self.streak_engine.reconcile(self.clock.now())
            if action is not None:
                action()
            snapshot = self._build_snapshot()
        except StorageError:
            _logger.exception("Storage failure; keeping last known progress")
            return self._stale_snapshot()
        self._last_snapshot = snapshot
        return snapshot

    def _build_snapshot(self) -> TrackerSnapshot:
        state = self.streak_engine.state()
        progress = self.progress_recorder.current()
        goals = self.streak_engine.goals
        return TrackerSnapshot(
            date=progress.date,
            water_consumed_ml=progress.water_consumed_ml,
            calories_consumed=progress.calories_consumed,
            water_goal_ml=goals.water_goal_ml,
            calorie_goal=goals.calorie_goal,
            streak_count=state.streak_count,
            status=self.streak_engine.status(progress.date, state),
        )

    def _stale_snapshot(self) -> TrackerSnapshot:
        if self._last_snapshot is not None:
            return replace(self._last_snapshot, stale=True)
        goals = self.streak_engine.goals
        return TrackerSnapshot(
            date=today(self.clock),
            water_consumed_ml=0,
            calories_consumed=0,
            water_goal_ml=goals.water_goal_ml,
            calorie_goal=goals.calorie_goal,
            streak_count=0,
            status=StreakStatus.IDLE,
            stale=True,
        )
