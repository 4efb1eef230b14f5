"""
Geography helpers
=================

Great-circle distance and map-region helpers used by the near-me filter and
by anything that shows "x km away" next to an event.

Distances use the haversine formula on a spherical Earth. At the ~10 km scale
the near-me filter works at, the error against an ellipsoidal model is well
under 0.5%.
"""

from __future__ import annotations
from typing import NamedTuple, Optional
import math

EARTH_RADIUS_M = 6_371_008.8

# Haywards Heath, Mid Sussex
DEFAULT_CENTER = (51.0044, -0.1021)
DEFAULT_SPAN = 0.15
USER_SPAN = 0.1


class Coordinate(NamedTuple):
    latitude: float
    longitude: float


class MapRegion(NamedTuple):
    center: Coordinate
    latitude_delta: float
    longitude_delta: float


def is_valid_coordinate(latitude: float, longitude: float) -> bool:
    """True for finite WGS84 degrees inside [-90, 90] x [-180, 180]."""
    try:
        lat = float(latitude); lon = float(longitude)
    except (TypeError, ValueError):
        return False
    if not (math.isfinite(lat) and math.isfinite(lon)):
        return False
    return -90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0


def haversine_m(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance between two coordinates, in meters."""
    lat1, lon1 = math.radians(a[0]), math.radians(a[1])
    lat2, lon2 = math.radians(b[0]), math.radians(b[1])
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    # clamp: rounding can push h a hair above 1 for antipodal points
    return 2 * EARTH_RADIUS_M * math.asin(math.sqrt(min(1.0, h)))


def distance_km(user: Optional[Coordinate], target: Coordinate) -> Optional[float]:
    if user is None:
        return None
    if not (is_valid_coordinate(*user) and is_valid_coordinate(*target)):
        return None
    return haversine_m(user, target) / 1000.0


def distance_text(user: Optional[Coordinate], target: Coordinate) -> Optional[str]:
    """'3.4 km away', or None when there is no usable user location."""
    km = distance_km(user, target)
    if km is None:
        return None
    return f"{km:.1f} km away"


def region_for(user: Optional[Coordinate]) -> MapRegion:
    """Map region centered on the user, or the default Mid Sussex view."""
    if user is None or not is_valid_coordinate(*user):
        return MapRegion(Coordinate(*DEFAULT_CENTER), DEFAULT_SPAN, DEFAULT_SPAN)
    return MapRegion(Coordinate(float(user[0]), float(user[1])), USER_SPAN, USER_SPAN)
