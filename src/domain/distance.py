"""
Distance calculation using the Haversine formula.

Assumption
----------
Coverage is judged on great-circle (Haversine) distance rather than road
distance.  Facilities publish a straight-line service radius, so the
same metric is used to test whether a point falls inside it.

Out-of-range latitude / longitude is not validated here; the API schemas
reject it before it reaches the domain.

Complexity: O(1) per call.
"""

from __future__ import annotations

import math

from .entities import GeoPoint

EARTH_RADIUS_M = 6_371_000.0


def haversine_m(
    lat1: float, lng1: float, lat2: float, lng2: float
) -> float:
    """Return the great-circle distance in **meters** between two points."""
    lat1_r, lat2_r = math.radians(lat1), math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlng = math.radians(lng2 - lng1)

    h = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1_r) * math.cos(lat2_r) * math.sin(dlng / 2) ** 2
    )
    # Rounding can push h just outside [0, 1] for near-antipodal points
    h = min(1.0, max(0.0, h))
    return 2 * EARTH_RADIUS_M * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def distance_m(a: GeoPoint, b: GeoPoint) -> float:
    return haversine_m(a.lat, a.lng, b.lat, b.lng)


def format_distance(meters: float) -> str:
    """``850m`` below one kilometre, ``5.3km`` from there on."""
    if meters < 1000:
        return f"{round(meters)}m"
    return f"{meters / 1000:.1f}km"
