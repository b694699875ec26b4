"""Health check and monitoring endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from tracker.core.health import HEALTH_THRESHOLDS

router = APIRouter(prefix="/api/v1")


@router.get("/health")
async def health() -> dict:
    """Basic health check."""
    from tracker.main import get_session, get_stats

    snapshot = get_stats().snapshot()
    session = get_session()
    return {
        "status": "ok",
        "version": "0.1.0",
        "uptime_seconds": snapshot["uptime_seconds"],
        "tracking_active": session.boundary_state is not None,
        "geolocation_available": session.geolocation_available,
    }


@router.get("/stats")
async def stats() -> dict:
    """Counters of processed samples, fixes and alert sounds."""
    from tracker.main import get_stats

    return get_stats().snapshot()


@router.get("/config")
async def get_client_config() -> dict:
    """Configuration endpoint for the dashboard.

    The renderer calls this on startup to draw the boundary rings and the
    threshold bands on the charts.
    """
    from tracker.main import get_config

    config = get_config()
    return {
        "boundary_radius_km": config.boundary.radius_km,
        "warning_distance_km": config.boundary.warning_distance_km,
        "motion_threshold_mps2": config.boundary.motion_threshold_mps2,
        "max_history_points": config.history.max_points,
        "thresholds": {
            kind.value: {
                "healthy": [t.healthy.min, t.healthy.max],
                "at_risk": [t.at_risk.min, t.at_risk.max],
            }
            for kind, t in HEALTH_THRESHOLDS.items()
        },
    }
