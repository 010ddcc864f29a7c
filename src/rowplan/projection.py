"""Projection between display and geographic coordinates.

The map layer owns the display coordinate system; rowplan only needs a pair
of functions converting points in both directions. ``WEB_MERCATOR`` covers
the common case of a spherical Web Mercator map (EPSG:3857) over WGS84
longitude/latitude, ``IDENTITY`` is used when display coordinates are
already geographic.
"""

import math
from collections.abc import Callable
from dataclasses import dataclass

from rowplan.domain import GeoPoint

# Spherical Web Mercator radius (meters)
MERCATOR_RADIUS = 6378137.0
# Latitude limit of the square Web Mercator world
MAX_MERCATOR_LAT = 85.0511287798066


@dataclass(frozen=True)
class Projection:
    """Pair of point conversions supplied by the map collaborator.

    Attributes:
        to_geographic: Display point -> geographic point
        to_display: Geographic point -> display point
    """

    to_geographic: Callable[[GeoPoint], GeoPoint]
    to_display: Callable[[GeoPoint], GeoPoint]


def lonlat_to_mercator(point: GeoPoint) -> GeoPoint:
    """Project WGS84 lon/lat degrees to Web Mercator meters."""
    lat = max(min(point.y, MAX_MERCATOR_LAT), -MAX_MERCATOR_LAT)
    x = MERCATOR_RADIUS * math.radians(point.x)
    y = MERCATOR_RADIUS * math.log(math.tan(math.pi / 4 + math.radians(lat) / 2))
    return GeoPoint(x, y)


def mercator_to_lonlat(point: GeoPoint) -> GeoPoint:
    """Unproject Web Mercator meters to WGS84 lon/lat degrees."""
    lon = math.degrees(point.x / MERCATOR_RADIUS)
    lat = math.degrees(2 * math.atan(math.exp(point.y / MERCATOR_RADIUS)) - math.pi / 2)
    return GeoPoint(lon, lat)


def _identity(point: GeoPoint) -> GeoPoint:
    return point


WEB_MERCATOR = Projection(to_geographic=mercator_to_lonlat, to_display=lonlat_to_mercator)
IDENTITY = Projection(to_geographic=_identity, to_display=_identity)
