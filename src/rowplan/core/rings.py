"""Ring validation and polygon coordinate extraction.

Selected polygons arrive in display coordinates with rings that may or may
not repeat their first point. Before any row generation they are converted
to geographic coordinates and every ring is closed and validated; rings that
cannot form an area are dropped.
"""

import logging
from collections.abc import Callable, Sequence

from rowplan.domain import GeoPoint, MultiPolygon, Polygon, Ring

logger = logging.getLogger(__name__)

MIN_RING_POINTS = 3
MIN_CLOSED_RING_POINTS = 4


def close_and_validate(ring: Sequence[GeoPoint]) -> Ring | None:
    """Close a ring if needed and check it can bound an area.

    Args:
        ring: Ring vertices, closed or open

    Returns:
        The closed ring (unchanged if already closed), or None if invalid
    """
    if len(ring) < MIN_RING_POINTS:
        return None
    closed = tuple(ring)
    if closed[0] != closed[-1]:
        closed = (*closed, closed[0])
    if len(closed) < MIN_CLOSED_RING_POINTS:
        return None
    return closed


def _valid_rings(
    rings: Sequence[Ring], to_geographic: Callable[[GeoPoint], GeoPoint]
) -> tuple[Ring, ...]:
    valid: list[Ring] = []
    for idx, ring in enumerate(rings):
        closed = close_and_validate([to_geographic(p) for p in ring])
        if closed is None:
            logger.debug("Dropping invalid ring %d (%d points)", idx, len(ring))
            continue
        valid.append(closed)
    return tuple(valid)


def extract_geographic_rings(
    shape: Polygon | MultiPolygon,
    to_geographic: Callable[[GeoPoint], GeoPoint],
) -> Polygon | MultiPolygon | None:
    """Convert a display-coordinate polygon into validated geographic rings.

    Invalid rings are dropped. For a multipolygon, polygons left without any
    ring are dropped as well.

    Args:
        shape: Polygon or multipolygon in display coordinates
        to_geographic: Display -> geographic point conversion

    Returns:
        Same shape type in geographic coordinates, or None when no usable
        contour remains
    """
    if isinstance(shape, Polygon):
        rings = _valid_rings(shape.rings, to_geographic)
        return Polygon(rings=rings) if rings else None

    polygons: list[Polygon] = []
    for polygon in shape.polygons:
        rings = _valid_rings(polygon.rings, to_geographic)
        if rings:
            polygons.append(Polygon(rings=rings))
    return MultiPolygon(polygons=tuple(polygons)) if polygons else None
