"""Great-circle distance and geofence containment.

Inputs are signed decimal degrees. No range validation is performed: values
outside [-90, 90] / [-180, 180] still yield a (meaningless) finite distance.
"""

from __future__ import annotations

import math

from ..core.constants import EARTH_RADIUS_M


def distance_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine distance in meters between two lat/lon points."""

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2.0) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2.0) ** 2
    # float error can push a a hair above 1 for antipodal points
    a = min(1.0, max(0.0, a))
    c = 2.0 * math.atan2(math.sqrt(a), math.sqrt(1.0 - a))
    return EARTH_RADIUS_M * c


def is_within_geofence(distance: float, radius: float) -> bool:
    """Inclusive boundary: a point exactly on the radius is inside."""

    return distance <= radius
