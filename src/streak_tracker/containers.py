"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from streak_tracker.adapters.json_file_store import JsonFileStore
from streak_tracker.adapters.supabase_store import SupabaseKeyValueStore
from streak_tracker.config import Settings, parse_storage_backend
from streak_tracker.domain.progress import Goals
from streak_tracker.services.clock import Clock, SystemClock
from streak_tracker.services.progress import ProgressRecorder
from streak_tracker.services.storage import KeyValueStore
from streak_tracker.services.streaks import StreakEngine
from streak_tracker.services.tracker import TrackerSession


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: KeyValueStore
    clock: Clock
    streak_engine: StreakEngine
    progress_recorder: ProgressRecorder
    tracker: TrackerSession
    close_resources: Callable[[], Awaitable[None]]


def build_store(settings: Settings) -> KeyValueStore:
    """Create the configured persistent store."""
    backend = parse_storage_backend(settings.storage_backend)
    if backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError("Supabase storage requires a URL and service key")
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseKeyValueStore(
            client=client,
            device_id=settings.device_id,
            table_name=settings.supabase_table,
        )
    return JsonFileStore.create(settings.storage_path)


def build_container(
    settings: Settings | None = None,
    store: KeyValueStore | None = None,
    clock: Clock | None = None,
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    resolved_store = store or build_store(resolved_settings)
    resolved_clock = clock or SystemClock(resolved_settings.timezone)
    goals = Goals(
        water_goal_ml=resolved_settings.water_goal_ml,
        calorie_goal=resolved_settings.recommended_calories,
    )
    streak_engine = StreakEngine(store=resolved_store, goals=goals)
    progress_recorder = ProgressRecorder(
        store=resolved_store,
        clock=resolved_clock,
        streak_engine=streak_engine,
    )
    tracker = TrackerSession(
        clock=resolved_clock,
        streak_engine=streak_engine,
        progress_recorder=progress_recorder,
        midnight_timer_enabled=resolved_settings.midnight_timer_enabled,
    )

    async def close_resources() -> None:
        await tracker.close()

    return AppContainer(
        settings=resolved_settings,
        store=resolved_store,
        clock=resolved_clock,
        streak_engine=streak_engine,
        progress_recorder=progress_recorder,
        tracker=tracker,
        close_resources=close_resources,
    )
