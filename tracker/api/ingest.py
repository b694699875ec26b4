"""Telemetry and location ingestion endpoints.

This is the thin FastAPI adapter. It parses HTTP requests, converts JSON to
internal models, and publishes them into the in-process feeds. All decisions
are made by the session.
"""

from __future__ import annotations

import json
import time

from fastapi import APIRouter, Request, Response

from tracker.core.models import GeoPoint, TelemetrySample

router = APIRouter(prefix="/api/v1")


def _json_response(result: dict, status_code: int = 200) -> Response:
    return Response(
        content=json.dumps(result),
        status_code=status_code,
        media_type="application/json",
    )


async def _read_json(request: Request) -> dict | None:
    try:
        body = json.loads(await request.body())
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    return body if isinstance(body, dict) else None


def _parse_json_fix(data: dict) -> GeoPoint:
    """Parse a location fix. Raises KeyError/TypeError/ValueError if malformed."""
    accuracy = data.get("accuracy_m")
    return GeoPoint(
        latitude_deg=float(data["latitude_deg"]),
        longitude_deg=float(data["longitude_deg"]),
        accuracy_m=float(accuracy) if accuracy is not None else None,
        timestamp_ms=int(data.get("timestamp_ms") or time.time() * 1000),
    )


@router.post("/telemetry")
async def receive_telemetry(request: Request) -> Response:
    """Receive one upstream telemetry payload (hr_bpm, spo2_pct, ...).

    Missing fields are accepted and read as 0.
    """
    from tracker.main import get_telemetry_feed

    body = await _read_json(request)
    if body is None:
        return _json_response({"accepted": False, "error": "invalid JSON"}, 400)

    sample = TelemetrySample.from_payload(body)
    delivered = get_telemetry_feed().publish(sample)
    return _json_response({"accepted": True, "error": "", "delivered": delivered})


@router.post("/location")
async def receive_location(request: Request) -> Response:
    """Receive a location fix, or a fix error as ``{"error": "..."}``."""
    from tracker.main import get_location_feed

    body = await _read_json(request)
    if body is None:
        return _json_response({"accepted": False, "error": "invalid JSON"}, 400)

    feed = get_location_feed()
    if body.get("error"):
        feed.publish_error(str(body["error"]))
        return _json_response({"accepted": True, "error": ""})

    try:
        point = _parse_json_fix(body)
    except (KeyError, TypeError, ValueError):
        return _json_response(
            {"accepted": False, "error": "latitude_deg and longitude_deg are required"}, 422,
        )

    delivered = feed.publish(point)
    return _json_response({"accepted": True, "error": "", "delivered": delivered})


@router.post("/location/unavailable")
async def location_unavailable() -> dict:
    """The device has no geolocation capability."""
    from tracker.main import get_session

    get_session().report_location_unavailable()
    return {"accepted": True}


@router.post("/base/reset")
async def reset_base() -> Response:
    """Operator command: move the base to the current location."""
    from tracker.main import get_session

    if not get_session().reset_base_to_current():
        return _json_response({"accepted": False, "error": "no current location"}, 409)
    return _json_response({"accepted": True, "error": ""})


@router.get("/state")
async def state() -> dict:
    """Derived state for the renderer."""
    from tracker.main import get_session

    return get_session().snapshot()
