"""Geodesic measurements along lines.

This module provides spherical-earth utilities for:
- Great-circle distance (haversine) between two coordinates
- Initial bearing and destination point
- Line length and the point at a given distance along a line
- Slicing a line between two distances

All distances are in meters, coordinates are ``GeoPoint(lon, lat)`` in
degrees. Functions are pure and stateless.
"""

import math

from rowplan.domain import GeoPoint, Line

# Mean earth radius in meters
EARTH_RADIUS_M = 6371008.8


def distance(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance between two points using the haversine formula.

    Args:
        a: First point (lon, lat in degrees)
        b: Second point (lon, lat in degrees)

    Returns:
        Distance in meters

    Examples:
        >>> round(distance(GeoPoint(0.0, 0.0), GeoPoint(0.0, 1.0)))
        111195
    """
    phi1 = math.radians(a.y)
    phi2 = math.radians(b.y)
    dphi = math.radians(b.y - a.y)
    dlambda = math.radians(b.x - a.x)
    h = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    return 2 * EARTH_RADIUS_M * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def bearing(a: GeoPoint, b: GeoPoint) -> float:
    """Initial bearing from ``a`` to ``b`` in degrees clockwise from north."""
    phi1 = math.radians(a.y)
    phi2 = math.radians(b.y)
    dlambda = math.radians(b.x - a.x)
    y = math.sin(dlambda) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(dlambda)
    return math.degrees(math.atan2(y, x))


def destination(origin: GeoPoint, meters: float, bearing_deg: float) -> GeoPoint:
    """Point reached by travelling ``meters`` from ``origin`` on ``bearing_deg``.

    Args:
        origin: Start point
        meters: Distance to travel
        bearing_deg: Bearing in degrees clockwise from north

    Returns:
        Destination point
    """
    delta = meters / EARTH_RADIUS_M
    theta = math.radians(bearing_deg)
    phi1 = math.radians(origin.y)
    lambda1 = math.radians(origin.x)

    phi2 = math.asin(
        math.sin(phi1) * math.cos(delta) + math.cos(phi1) * math.sin(delta) * math.cos(theta)
    )
    lambda2 = lambda1 + math.atan2(
        math.sin(theta) * math.sin(delta) * math.cos(phi1),
        math.cos(delta) - math.sin(phi1) * math.sin(phi2),
    )
    return GeoPoint(math.degrees(lambda2), math.degrees(phi2))


def interpolate(a: GeoPoint, b: GeoPoint, meters: float) -> GeoPoint:
    """Point ``meters`` along the segment from ``a`` to ``b``.

    Offsets at or beyond the segment ends snap to the exact end vertex so
    that vertices are reproduced without rounding noise.
    """
    if meters <= 0:
        return a
    if meters >= distance(a, b):
        return b
    return destination(a, meters, bearing(a, b))


def line_length(line: Line) -> float:
    """Total geodesic length of a line in meters."""
    pts = line.points
    return sum(distance(pts[i], pts[i + 1]) for i in range(len(pts) - 1))


def along(line: Line, meters: float) -> GeoPoint | None:
    """Point at a given distance along a line.

    Distances past the end return the last vertex.

    Args:
        line: Line to walk
        meters: Distance from the first vertex

    Returns:
        The point, or None for an empty line
    """
    pts = line.points
    if not pts:
        return None
    if meters <= 0 or len(pts) == 1:
        return pts[0]

    travelled = 0.0
    for i in range(len(pts) - 1):
        seg = distance(pts[i], pts[i + 1])
        if travelled + seg >= meters:
            return interpolate(pts[i], pts[i + 1], meters - travelled)
        travelled += seg
    return pts[-1]


def slice_along(line: Line, start: float, stop: float) -> Line:
    """Sub-line between two distances measured from the first vertex.

    A stop distance beyond the end of the line ends the slice at the last
    vertex. An empty line is returned when ``stop <= start`` or when the
    start lies beyond the end of the line.

    Args:
        line: Line to slice
        start: Distance where the slice begins (meters)
        stop: Distance where the slice ends (meters)

    Returns:
        The sliced line
    """
    pts = line.points
    if len(pts) < 2 or stop <= start:
        return Line(points=())

    start = max(start, 0.0)
    result: list[GeoPoint] = []

    def push(p: GeoPoint) -> None:
        if not result or result[-1] != p:
            result.append(p)

    travelled = 0.0
    for i in range(len(pts) - 1):
        a, b = pts[i], pts[i + 1]
        seg = distance(a, b)
        seg_end = travelled + seg

        if not result and start <= seg_end:
            push(interpolate(a, b, start - travelled))
        if result:
            if stop <= seg_end:
                push(interpolate(a, b, stop - travelled))
                return Line(points=tuple(result))
            push(b)
        travelled = seg_end

    return Line(points=tuple(result))
