"""Planar geometric operations in geographic coordinate space.

This module provides core mathematical utilities for:
- Signed area calculation (shoelace formula)
- Point-in-polygon testing (ray casting algorithm, boundary inclusive)
- Line segment intersection
- Extent and centroid of shapes

Coordinates are treated as plane coordinates (lon as x, lat as y). All
functions are pure and stateless.
"""

from collections.abc import Iterable, Sequence

from rowplan.domain import BoundingBox, GeoPoint, Line, MultiPolygon, Polygon, Ring

EPSILON = 1e-12


def signed_area(ring: Sequence[GeoPoint]) -> float:
    """Calculate signed area of a ring using the shoelace formula.

    The sign of the area indicates winding direction:
    - Positive area: counter-clockwise winding
    - Negative area: clockwise winding

    A closing point equal to the first point contributes nothing.

    Args:
        ring: Points forming the ring boundary

    Returns:
        Signed area in square degrees. Returns 0.0 for degenerate rings.

    Examples:
        >>> square = [GeoPoint(0, 0), GeoPoint(1, 0), GeoPoint(1, 1), GeoPoint(0, 1)]
        >>> signed_area(square)
        1.0
    """
    n = len(ring)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += ring[i].x * ring[j].y
        area -= ring[j].x * ring[i].y

    return area / 2.0


def polygon_area(shape: Polygon | MultiPolygon) -> float:
    """Unsigned area of a polygon or multipolygon (holes subtracted)."""
    polygons = shape.polygons if isinstance(shape, MultiPolygon) else (shape,)
    total = 0.0
    for polygon in polygons:
        if not polygon.rings:
            continue
        total += abs(signed_area(polygon.exterior))
        total -= sum(abs(signed_area(hole)) for hole in polygon.holes)
    return max(total, 0.0)


def point_on_segment(point: GeoPoint, a: GeoPoint, b: GeoPoint) -> bool:
    """Check if a point lies on the closed segment ``a``-``b``."""
    cross = (b.x - a.x) * (point.y - a.y) - (b.y - a.y) * (point.x - a.x)
    scale = max(abs(b.x - a.x), abs(b.y - a.y), 1.0)
    if abs(cross) > EPSILON * scale:
        return False
    return (
        min(a.x, b.x) - EPSILON <= point.x <= max(a.x, b.x) + EPSILON
        and min(a.y, b.y) - EPSILON <= point.y <= max(a.y, b.y) + EPSILON
    )


def point_on_ring(point: GeoPoint, ring: Sequence[GeoPoint]) -> bool:
    """Check if a point lies on any edge of a ring."""
    n = len(ring)
    return any(point_on_segment(point, ring[i], ring[(i + 1) % n]) for i in range(n))


def point_in_ring(point: GeoPoint, ring: Sequence[GeoPoint]) -> bool:
    """Determine if a point is strictly inside a ring using ray casting.

    Casts a horizontal ray from the point to the right and counts intersections
    with ring edges. Odd number of intersections = inside, even = outside.

    Args:
        point: The point to test
        ring: Points forming the ring boundary

    Returns:
        True if point is inside the ring, False otherwise
    """
    n = len(ring)
    if n < 3:
        return False

    inside = False
    x, y = point.x, point.y
    j = n - 1

    for i in range(n):
        xi, yi = ring[i].x, ring[i].y
        xj, yj = ring[j].x, ring[j].y

        # Check if ray from point intersects edge (j, i)
        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside

        j = i

    return inside


def point_in_polygon(point: GeoPoint, shape: Polygon | MultiPolygon) -> bool:
    """Boundary-inclusive point-in-polygon test.

    A point on the exterior boundary counts as inside. A point strictly
    inside a hole counts as outside; a point on a hole's boundary is inside.

    Args:
        point: The point to test
        shape: Polygon or multipolygon (first ring exterior, rest holes)

    Returns:
        True if the point is inside or on the boundary
    """
    polygons = shape.polygons if isinstance(shape, MultiPolygon) else (shape,)
    for polygon in polygons:
        exterior = polygon.exterior
        if len(exterior) < 3:
            continue
        if point_on_ring(point, exterior):
            return True
        if not point_in_ring(point, exterior):
            continue
        in_hole = False
        for hole in polygon.holes:
            if point_on_ring(point, hole):
                return True
            if point_in_ring(point, hole):
                in_hole = True
                break
        if not in_hole:
            return True
    return False


def segment_intersection(
    p1: GeoPoint, p2: GeoPoint, p3: GeoPoint, p4: GeoPoint
) -> float | None:
    """Find where segment ``p1``-``p2`` crosses segment ``p3``-``p4``.

    Uses parametric line equations. Parallel or coincident segments report
    no crossing.

    Args:
        p1: First endpoint of segment 1
        p2: Second endpoint of segment 1
        p3: First endpoint of segment 2
        p4: Second endpoint of segment 2

    Returns:
        Parameter ``t`` in [0, 1] along segment 1, or None if they do not cross
    """
    x1, y1 = p1.x, p1.y
    x2, y2 = p2.x, p2.y
    x3, y3 = p3.x, p3.y
    x4, y4 = p4.x, p4.y

    denom = (x1 - x2) * (y3 - y4) - (y1 - y2) * (x3 - x4)

    # Lines are parallel or coincident
    if abs(denom) < EPSILON:
        return None

    t = ((x1 - x3) * (y3 - y4) - (y1 - y3) * (x3 - x4)) / denom
    u = -((x1 - x2) * (y1 - y3) - (y1 - y2) * (x1 - x3)) / denom

    if -EPSILON <= t <= 1 + EPSILON and -EPSILON <= u <= 1 + EPSILON:
        return min(max(t, 0.0), 1.0)

    return None


def lerp(a: GeoPoint, b: GeoPoint, t: float) -> GeoPoint:
    """Linear interpolation between two points."""
    if t <= 0:
        return a
    if t >= 1:
        return b
    return GeoPoint(a.x + t * (b.x - a.x), a.y + t * (b.y - a.y))


def shape_points(shape: Line | Polygon | MultiPolygon) -> Iterable[GeoPoint]:
    """Iterate over every vertex of a shape."""
    if isinstance(shape, Line):
        yield from shape.points
    elif isinstance(shape, Polygon):
        for ring in shape.rings:
            yield from ring
    else:
        for polygon in shape.polygons:
            for ring in polygon.rings:
                yield from ring


def bounding_box(shape: Line | Polygon | MultiPolygon) -> BoundingBox | None:
    """Axis-aligned extent of a shape, None if it has no vertices."""
    return BoundingBox.of_points(shape_points(shape))


def centroid(ring: Sequence[GeoPoint]) -> GeoPoint:
    """Vertex mean of a ring, ignoring a repeated closing point.

    Args:
        ring: Open or closed ring

    Returns:
        Mean of the distinct vertices

    Raises:
        ValueError: If the ring is empty
    """
    points: Ring = tuple(ring)
    if not points:
        raise ValueError("Cannot compute centroid of an empty ring")
    if len(points) > 1 and points[0] == points[-1]:
        points = points[:-1]
    n = len(points)
    return GeoPoint(sum(p.x for p in points) / n, sum(p.y for p in points) / n)
