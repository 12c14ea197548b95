"""Streak state machine for consecutive days with both goals met."""

import logging
from dataclasses import dataclass, replace
from datetime import date, datetime

from streak_tracker.domain.progress import DailyProgress, Goals
from streak_tracker.domain.storage import (
    decode_count,
    decode_streak_state,
    encode_progress,
    encode_streak_state,
    parse_stored_date,
)
from streak_tracker.domain.streaks import StreakState, StreakStatus
from streak_tracker.services.day_boundary import (
    calendar_date,
    days_between,
    has_rolled_over,
)
from streak_tracker.services.storage import KeyValueStore, StorageKeys, read_progress

_logger = logging.getLogger(__name__)


@dataclass
class StreakEngine:
    """Credits days on which both goals are met and resets after missed days.

    ``evaluate`` is the only place the streak grows and ``reconcile`` the only
    place it is reset. The count and the credited day are stored together in
    one value, so a crash between writes can lose a credit but never apply it
    twice.
    """

    store: KeyValueStore
    goals: Goals

    def state(self) -> StreakState:
        """Return the persisted streak state, defaulting on first run."""
        raw = self.store.get(StorageKeys.STREAK_STATE)
        state = decode_streak_state(raw)
        if state is not None:
            return state
        if raw is not None:
            _logger.warning("Ignoring malformed streak state: %r", raw)
        return self._read_legacy_state()

    def status(self, day: date, state: StreakState | None = None) -> StreakStatus:
        """Return the state machine status for a calendar day."""
        current = state or self.state()
        if has_rolled_over(current.last_check_date, day):
            return StreakStatus.ROLLOVER_PENDING
        if current.is_credited(day):
            return StreakStatus.GOALS_MET
        return StreakStatus.IDLE

    def reconcile(self, now: datetime) -> bool:
        """Process a day rollover if one happened since the last check.

        Returns True when a rollover was processed.
        """
        current_day = calendar_date(now)
        state = self.state()
        if state.last_check_date is None:
            _logger.info("Starting streak tracking on %s", current_day)
            self._write_state(replace(state, last_check_date=current_day))
            return False
        if not has_rolled_over(state.last_check_date, current_day):
            return False

        elapsed_days = days_between(state.last_check_date, current_day)
        if elapsed_days < 0:
            _logger.warning(
                "Clock moved backwards from %s to %s",
                state.last_check_date,
                current_day,
            )
        elapsed = read_progress(self.store)
        met = (
            elapsed is not None
            and elapsed.date == state.last_check_date
            and self.goals.is_met_by(elapsed)
        )
        streak_count = state.streak_count
        if not met or elapsed_days != 1:
            if streak_count:
                _logger.info(
                    "Streak of %s reset: goals missed since %s",
                    streak_count,
                    state.last_check_date,
                )
            streak_count = 0

        self._write_state(
            replace(state, streak_count=streak_count, last_check_date=current_day)
        )
        self._reset_daily_progress(current_day)
        _logger.info("Rolled over from %s to %s", state.last_check_date, current_day)
        return True

    def evaluate(self, progress: DailyProgress, goals: Goals | None = None) -> bool:
        """Credit the streak once if today's goals are met.

        Returns True when this call applied the increment.
        """
        targets = goals or self.goals
        state = self.state()
        if state.last_check_date != progress.date:
            _logger.warning(
                "Skipping streak evaluation for %s; last reconciled day is %s",
                progress.date,
                state.last_check_date,
            )
            return False
        if not targets.is_met_by(progress) or state.is_credited(progress.date):
            return False

        self._write_state(
            replace(
                state,
                streak_count=state.streak_count + 1,
                credited_date=progress.date,
            )
        )
        _logger.info(
            "Goals met on %s; streak is now %s",
            progress.date,
            state.streak_count + 1,
        )
        return True

    def _write_state(self, state: StreakState) -> None:
        self.store.set(StorageKeys.STREAK_STATE, encode_streak_state(state))
        self.store.set(StorageKeys.CURRENT_STREAK, state.streak_count)
        if state.last_check_date is not None:
            self.store.set(
                StorageKeys.LAST_CHECK_DATE, state.last_check_date.isoformat()
            )

    def _reset_daily_progress(self, day: date) -> None:
        # dailyProgress goes last: its date marks the meal list as current.
        self.store.set(StorageKeys.WATER_CONSUMED, 0)
        self.store.set(StorageKeys.RECENT_MEALS, [])
        self.store.set(
            StorageKeys.DAILY_PROGRESS, encode_progress(DailyProgress.empty(day))
        )

    def _read_legacy_state(self) -> StreakState:
        raw_count = self.store.get(StorageKeys.CURRENT_STREAK)
        count = decode_count(raw_count)
        if count is None and raw_count is not None:
            _logger.warning("Ignoring malformed streak count: %r", raw_count)
        raw_date = self.store.get(StorageKeys.LAST_CHECK_DATE)
        last_check_date = parse_stored_date(raw_date)
        if last_check_date is None and raw_date is not None:
            _logger.warning("Ignoring malformed last check date: %r", raw_date)
        return StreakState(streak_count=count or 0, last_check_date=last_check_date)
