"""ASGI entrypoint for the streak tracker API."""

from streak_tracker.api.app import create_app
from streak_tracker.containers import build_container

app = create_app(build_container())
