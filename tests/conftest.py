"""Shared test fixtures."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

import tracker.main as main_module
from helpers import RecordingSoundPlayer
from tracker.config import AppConfig
from tracker.core.session import TelemetrySession
from tracker.core.stats import SessionStats


@pytest.fixture
def sound_player() -> RecordingSoundPlayer:
    return RecordingSoundPlayer()


@pytest.fixture
def stats() -> SessionStats:
    return SessionStats()


@pytest.fixture
def session(sound_player, stats) -> TelemetrySession:
    return TelemetrySession(sound_player=sound_player, stats=stats)


@pytest.fixture
def _init_tracker():
    """Initialize tracker singletons for the API tests."""
    config = AppConfig()
    config.logging.level = "warning"

    session, stats, telemetry_feed, location_feed, subscriptions = (
        main_module.build_components(config)
    )

    # Patch module-level singletons
    main_module._config = config
    main_module._stats = stats
    main_module._session = session
    main_module._telemetry_feed = telemetry_feed
    main_module._location_feed = location_feed

    yield

    # Cleanup
    for sub in subscriptions:
        sub.cancel()
    main_module._config = None
    main_module._stats = None
    main_module._session = None
    main_module._telemetry_feed = None
    main_module._location_feed = None


@pytest.fixture
async def client(_init_tracker):
    from tracker.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
