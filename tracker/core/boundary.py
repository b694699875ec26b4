"""Boundary tracker — classifies distance-from-base into zones.

Combines the current fix, the base location and the latest motion sample
into a BoundaryState. The tracker keeps the previous motion value (for the
"accelerating" signal) and the zone of the current visit, so a sound is
requested at most once per visit to a sound-triggering zone.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tracker.core.geo import distance_km
from tracker.core.models import AlertSeverity, BoundaryConfig, BoundaryState, BoundaryZone

if TYPE_CHECKING:
    from tracker.core.models import GeoPoint, TelemetrySample


class BoundaryTracker:
    """Derives boundary zone, motion and sound requests from each update."""

    def __init__(self, config: BoundaryConfig | None = None, previous_motion: float = 0.0) -> None:
        self.config = config or BoundaryConfig()
        self.previous_motion = previous_motion
        self._last_zone: BoundaryZone | None = None
        self._sounded = False

    def update(
        self,
        current: GeoPoint | None,
        base: GeoPoint | None,
        sample: TelemetrySample | None,
    ) -> BoundaryState | None:
        """Compute the boundary state, or None while tracking is not active.

        Every call compares motion against the previous call's value and then
        stores it, including calls triggered by a location fix alone.
        """
        if current is None or base is None or sample is None:
            return None

        cfg = self.config
        distance = distance_km(base, current)
        motion = sample.motion_mps2
        is_moving = motion > cfg.motion_threshold_mps2
        is_accelerating = motion > self.previous_motion
        self.previous_motion = motion

        message: str | None = None
        wanted: AlertSeverity | None = None
        if distance >= cfg.boundary_radius_km:
            zone = BoundaryZone.CRITICAL
            message = f"Boundary crossed! Animal is {distance:.2f} km from base"
            wanted = AlertSeverity.CRITICAL
        elif distance >= cfg.warning_distance_km and is_moving:
            zone = BoundaryZone.WARNING
            remaining = cfg.boundary_radius_km - distance
            message = f"Approaching boundary: {remaining:.2f} km remaining"
            if is_accelerating:
                wanted = AlertSeverity.WARNING
        elif distance >= cfg.warning_distance_km:
            zone = BoundaryZone.CAUTION
            message = f"Animal is {distance:.2f} km from base (stationary)"
        else:
            zone = BoundaryZone.SAFE

        if zone is not self._last_zone:
            self._last_zone = zone
            self._sounded = False
        sound: AlertSeverity | None = None
        if wanted is not None and not self._sounded:
            sound = wanted
            self._sounded = True

        return BoundaryState(
            zone=zone,
            distance_km=distance,
            is_moving=is_moving,
            is_accelerating=is_accelerating,
            message=message,
            sound=sound,
        )

    def reset(self) -> None:
        """Re-arm the zone sound. Motion memory is kept."""
        self._last_zone = None
        self._sounded = False
