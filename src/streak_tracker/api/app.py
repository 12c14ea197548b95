"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from streak_tracker.api.models import (
    AddMealRequest,
    AddWaterRequest,
    MealResponse,
    MealsResponse,
    SnapshotResponse,
)
from streak_tracker.app_logging import configure_logging
from streak_tracker.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        snapshot = await state_container.tracker.start()
        logger.info(
            "Tracker session started on %s with a streak of %s",
            snapshot.date,
            snapshot.streak_count,
        )
        yield
        await state_container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/session/resume")
    async def resume(request: Request) -> SnapshotResponse:
        """Reconcile the day boundary after the app returns to the foreground."""
        state_container: AppContainer = request.app.state.container
        return SnapshotResponse.from_snapshot(state_container.tracker.resume())

    @app.get("/progress")
    async def progress(request: Request) -> SnapshotResponse:
        """Return today's progress and the streak."""
        state_container: AppContainer = request.app.state.container
        return SnapshotResponse.from_snapshot(state_container.tracker.snapshot())

    @app.post("/water")
    async def add_water(payload: AddWaterRequest, request: Request) -> SnapshotResponse:
        """Log water intake."""
        state_container: AppContainer = request.app.state.container
        snapshot = state_container.tracker.add_water(payload.amount_ml)
        return SnapshotResponse.from_snapshot(snapshot)

    @app.get("/meals")
    async def list_meals(request: Request) -> MealsResponse:
        """Return today's meals."""
        state_container: AppContainer = request.app.state.container
        meals = state_container.tracker.meals()
        return MealsResponse(meals=[MealResponse.from_meal(meal) for meal in meals])

    @app.post("/meals")
    async def add_meal(payload: AddMealRequest, request: Request) -> SnapshotResponse:
        """Log a meal and refresh today's calorie total."""
        state_container: AppContainer = request.app.state.container
        snapshot = state_container.tracker.add_meal(
            name=payload.name, time=payload.time, calories=payload.calories
        )
        return SnapshotResponse.from_snapshot(snapshot)

    return app
