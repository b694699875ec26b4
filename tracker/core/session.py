"""Telemetry session — sequences the pure computations on each event.

Holds the current snapshot, base and current locations, the history window
and the boundary tracker. It contains no business rules: classification,
alerting and zone logic live in health.py and boundary.py.

Every event-processing step runs under a single lock, so the telemetry and
location streams may be delivered from different threads.
"""

from __future__ import annotations

import threading
import time
from typing import TYPE_CHECKING

import structlog

from tracker.core.boundary import BoundaryTracker
from tracker.core.health import classify_vitals, derive_alerts
from tracker.core.history import MAX_HISTORY_POINTS, HistoryBuffer
from tracker.core.models import BoundaryZone, HistoryPoint, TelemetrySample

if TYPE_CHECKING:
    from tracker.core.models import (
        Alert,
        BoundaryConfig,
        BoundaryState,
        GeoPoint,
        HealthClassification,
        VitalKind,
    )
    from tracker.core.stats import SessionStats
    from tracker.feed.hub import FeedHub, Subscription
    from tracker.sound.base import SoundPlayer

log = structlog.get_logger()

GEOLOCATION_UNAVAILABLE = "Geolocation is not supported"


def _now_ms() -> int:
    return int(time.time() * 1000)


class TelemetrySession:
    """Single-subject session state, updated one event at a time."""

    def __init__(
        self,
        sound_player: SoundPlayer,
        stats: SessionStats,
        boundary_config: BoundaryConfig | None = None,
        max_history_points: int = MAX_HISTORY_POINTS,
    ) -> None:
        self._sound_player = sound_player
        self._stats = stats
        self._lock = threading.Lock()
        self._tracker = BoundaryTracker(boundary_config)
        self._history = HistoryBuffer(max_history_points)

        self._sample: TelemetrySample | None = None
        self._alerts: list[Alert] = []
        self._base: GeoPoint | None = None
        self._current: GeoPoint | None = None
        self._boundary: BoundaryState | None = None
        self._distance_km = 0.0
        self._location_error: str | None = None
        self._geolocation_available = True

    # -- event handlers ---------------------------------------------------

    def ingest_sample(self, sample: TelemetrySample | dict,
                      received_ms: int | None = None) -> None:
        """Process a new telemetry sample (a model or an upstream payload)."""
        if not isinstance(sample, TelemetrySample):
            sample = TelemetrySample.from_payload(sample)
        received_ms = _now_ms() if received_ms is None else received_ms

        with self._lock:
            self._sample = sample
            self._alerts = derive_alerts(sample)
            alert_count = len(self._alerts)
            self._history.append(HistoryPoint.from_sample(sample, received_ms))
            self._stats.record_sample(received_ms)
            if self._current is not None:
                self._update_boundary()

        log.debug("sample_ingested", alerts=alert_count,
                  motion=sample.motion_mps2, struggle=sample.struggle_flag)
        if sample.struggle_flag:
            log.warning("struggle_detected", last_update_ms=sample.last_update_ms)

    def ingest_fix(self, point: GeoPoint) -> None:
        """Process a successful location fix."""
        with self._lock:
            if not self._geolocation_available:
                self._stats.record_fix_ignored()
                log.warning("location_fix_ignored", reason="geolocation_unavailable")
                return
            self._current = point
            self._location_error = None
            self._stats.record_fix(_now_ms())
            self._initialize_base_if_unset()
            self._update_boundary()

    def report_location_error(self, message: str) -> None:
        """A single fix failed. The last good location is kept."""
        with self._lock:
            self._stats.record_fix_error()
            if not self._geolocation_available:
                return
            self._location_error = message
        log.warning("location_fix_error", error=message,
                    has_last_fix=self._current is not None)

    def report_location_unavailable(self) -> None:
        """No geolocation capability: boundary tracking will never start."""
        with self._lock:
            if not self._geolocation_available:
                return
            self._geolocation_available = False
            self._location_error = GEOLOCATION_UNAVAILABLE
        log.error("geolocation_unavailable")

    # -- base location lifecycle -------------------------------------------

    def initialize_base_if_unset(self) -> bool:
        """Set the base to the current fix if no base exists yet."""
        with self._lock:
            return self._initialize_base_if_unset()

    def reset_base_to_current(self) -> bool:
        """Operator command: make the current fix the new base.

        Clears the boundary state and zeroes the reported distance. Returns
        False when there is no current fix to reset to.
        """
        with self._lock:
            if self._current is None:
                log.warning("base_reset_skipped", reason="no_current_location")
                return False
            self._base = self._current
            self._boundary = None
            self._distance_km = 0.0
            self._tracker.reset()
            self._stats.record_base_reset()
            log.info("base_reset", lat=self._base.latitude_deg, lon=self._base.longitude_deg)
            return True

    def _initialize_base_if_unset(self) -> bool:
        """Caller holds lock."""
        if self._base is not None or self._current is None:
            return False
        self._base = self._current
        log.info("base_initialized", lat=self._base.latitude_deg, lon=self._base.longitude_deg)
        return True

    # -- boundary ------------------------------------------------------------

    def _update_boundary(self) -> None:
        """Re-run the boundary tracker. Caller holds lock."""
        previous = self._boundary
        state = self._tracker.update(self._current, self._base, self._sample)
        self._boundary = state
        if state is None:
            return
        self._distance_km = state.distance_km

        previous_zone = previous.zone if previous is not None else BoundaryZone.SAFE
        if state.zone is not previous_zone:
            log.info("boundary_zone_changed", previous=previous_zone.value,
                     zone=state.zone.value, distance_km=round(state.distance_km, 3))

        if state.sound is not None:
            try:
                self._sound_player.play(state.sound)
                self._stats.record_sound()
            except Exception:
                log.error("sound_playback_failed", severity=state.sound.value, exc_info=True)
                self._stats.record_sound(failed=True)

    # -- feeds ---------------------------------------------------------------

    def attach(self, telemetry_feed: FeedHub, location_feed: FeedHub) -> list[Subscription]:
        """Subscribe to the telemetry and location feeds."""
        return [
            telemetry_feed.subscribe(self.ingest_sample),
            location_feed.subscribe(self.ingest_fix, on_error=self.report_location_error),
        ]

    # -- derived state -------------------------------------------------------

    @property
    def current_sample(self) -> TelemetrySample | None:
        return self._sample

    @property
    def alerts(self) -> list[Alert]:
        return list(self._alerts)

    @property
    def history(self) -> tuple[HistoryPoint, ...]:
        return self._history.points()

    @property
    def boundary_state(self) -> BoundaryState | None:
        return self._boundary

    @property
    def distance_km(self) -> float:
        return self._distance_km

    @property
    def base_location(self) -> GeoPoint | None:
        return self._base

    @property
    def current_location(self) -> GeoPoint | None:
        return self._current

    @property
    def location_error(self) -> str | None:
        return self._location_error

    @property
    def geolocation_available(self) -> bool:
        return self._geolocation_available

    @property
    def previous_motion(self) -> float:
        return self._tracker.previous_motion

    def classifications(self) -> dict[VitalKind, HealthClassification]:
        if self._sample is None:
            return {}
        return classify_vitals(self._sample)

    def clear_history(self) -> None:
        with self._lock:
            self._history.clear()

    def snapshot(self) -> dict:
        """Return a JSON-serializable view of the derived state."""
        with self._lock:
            sample = self._sample
            return {
                "sample": sample.to_dict() if sample is not None else None,
                "struggle": bool(sample and sample.struggle_flag),
                "last_update_ms": sample.last_update_ms if sample is not None else 0,
                "classifications": {
                    kind.value: c.to_dict() for kind, c in self.classifications().items()
                },
                "alerts": [a.to_dict() for a in self._alerts],
                "history": [p.to_dict() for p in self._history.points()],
                "boundary": self._boundary.to_dict() if self._boundary is not None else None,
                "distance_km": self._distance_km,
                "base_location": self._base.to_dict() if self._base is not None else None,
                "current_location": self._current.to_dict() if self._current is not None else None,
                "location_error": self._location_error,
                "geolocation_available": self._geolocation_available,
            }
