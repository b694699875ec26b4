"""Wild animal tracker — main entry point.

This is the only file that knows about concrete implementations.
It wires together the core session, the feeds, the sound player and the
API layer.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import IO

import structlog
from fastapi import FastAPI

from tracker.api.ingest import router as ingest_router
from tracker.api.monitoring import router as monitoring_router
from tracker.config import AppConfig, load_config
from tracker.core.models import GeoPoint, TelemetrySample
from tracker.core.session import TelemetrySession
from tracker.core.stats import SessionStats
from tracker.feed.hub import FeedHub, Subscription
from tracker.sound.log_player import LogSoundPlayer

log = structlog.get_logger()

# Module-level singletons (set during startup)
_session: TelemetrySession | None = None
_stats: SessionStats | None = None
_config: AppConfig | None = None
_telemetry_feed: FeedHub[TelemetrySample] | None = None
_location_feed: FeedHub[GeoPoint] | None = None


def get_session() -> TelemetrySession:
    assert _session is not None, "Tracker not initialized"
    return _session


def get_stats() -> SessionStats:
    assert _stats is not None, "Tracker not initialized"
    return _stats


def get_config() -> AppConfig:
    assert _config is not None, "Tracker not initialized"
    return _config


def get_telemetry_feed() -> FeedHub[TelemetrySample]:
    assert _telemetry_feed is not None, "Tracker not initialized"
    return _telemetry_feed


def get_location_feed() -> FeedHub[GeoPoint]:
    assert _location_feed is not None, "Tracker not initialized"
    return _location_feed


def _setup_logging(config: AppConfig) -> IO[str] | None:
    """Configure structlog based on the logging config.

    Returns the opened log file, if any; the caller closes it on shutdown.
    """
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if config.logging.format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    log_file = None
    logger_factory = structlog.PrintLoggerFactory()
    if config.logging.file:
        log_file = open(config.logging.file, "a")
        logger_factory = structlog.WriteLoggerFactory(file=log_file)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(config.logging.level.upper()),
        ),
        logger_factory=logger_factory,
    )
    return log_file


def build_components(config: AppConfig) -> tuple[
    TelemetrySession, SessionStats, FeedHub, FeedHub, list[Subscription]
]:
    """Create the session and its feeds, and subscribe the session to them."""
    stats = SessionStats()
    session = TelemetrySession(
        sound_player=LogSoundPlayer(),
        stats=stats,
        boundary_config=config.boundary_config(),
        max_history_points=config.history.max_points,
    )
    telemetry_feed: FeedHub[TelemetrySample] = FeedHub("telemetry")
    location_feed: FeedHub[GeoPoint] = FeedHub("location")
    subscriptions = session.attach(telemetry_feed, location_feed)
    return session, stats, telemetry_feed, location_feed, subscriptions


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    global _session, _stats, _config, _telemetry_feed, _location_feed

    _config = load_config()
    log_file = _setup_logging(_config)

    log.info("tracker_starting",
             env=_config.server.env,
             boundary_radius_km=_config.boundary.radius_km,
             warning_distance_km=_config.boundary.warning_distance_km)

    _session, _stats, _telemetry_feed, _location_feed, subscriptions = build_components(_config)

    log.info("tracker_started",
             host=_config.server.host,
             port=_config.server.port)

    yield

    # Shutdown
    for sub in subscriptions:
        sub.cancel()
    log.info("tracker_stopped")
    if log_file is not None:
        structlog.reset_defaults()
        log_file.close()


app = FastAPI(
    title="Wild Animal Tracker",
    description="Animal telemetry health and geofence tracking",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(ingest_router)
app.include_router(monitoring_router)
