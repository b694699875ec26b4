"""Great-circle distance between two fixes."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tracker.core.models import GeoPoint

# Earth radius in kilometres (for Haversine).
EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in kilometres between two points.

    Coordinates are not range-checked; out-of-range degrees still give a
    defined (if meaningless) result.
    """
    rlat1, rlat2 = math.radians(lat1), math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)
    a = math.sin(dlat / 2) ** 2 + math.cos(rlat1) * math.cos(rlat2) * math.sin(dlon / 2) ** 2
    # Keep a in [0, 1]: rounding near antipodes, and out-of-range latitudes,
    # can push it outside.
    a = min(max(a, 0.0), 1.0)
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def distance_km(a: GeoPoint, b: GeoPoint) -> float:
    return haversine_km(a.latitude_deg, a.longitude_deg, b.latitude_deg, b.longitude_deg)
