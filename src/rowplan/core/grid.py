"""Bounding box and parallel row grid construction.

A row grid is a family of north-south lines spanning a box, spaced by a
real-world distance. The meter spacing is converted to a longitude step at
the box's reference latitude (its southern edge), an equirectangular
approximation that only holds locally, which is all row spacing needs.
"""

import logging
import math
from dataclasses import dataclass

from rowplan.core.geometry import bounding_box, centroid
from rowplan.domain import BoundingBox, GeoPoint, Line, MultiPolygon, Polygon, Ring

logger = logging.getLogger(__name__)

# Kilometers per degree of longitude at the equator
KM_PER_DEGREE = 111.32


@dataclass(frozen=True)
class GridBuild:
    """Result of building a grid from a polygon.

    Attributes:
        bbox: Scaled box corners (SW, SE, NE, NW)
        pivot: Centroid of the scaled box
        lines: Unrotated row lines
    """

    bbox: Ring
    pivot: GeoPoint
    lines: tuple[Line, ...]


def lon_step(latitude: float, step_meters: float) -> float:
    """Convert a meter spacing to degrees of longitude at a latitude.

    Args:
        latitude: Reference latitude in degrees
        step_meters: Spacing in meters

    Returns:
        Longitude step in degrees (non-positive or infinite near the poles)
    """
    step_km = step_meters / 1000.0
    return step_km / (KM_PER_DEGREE * math.cos(math.radians(latitude)))


def grid_lines(box: Ring, step_meters: float) -> tuple[Line, ...]:
    """Build the vertical row lines spanning a box.

    Lines start at the box's minimum longitude and repeat every
    ``lon_step`` while the longitude stays within the box; each one runs
    the full latitude range of the box.

    Args:
        box: Box corners (only the extent is used)
        step_meters: Row spacing in meters

    Returns:
        Row lines ordered west to east; empty for degenerate input
    """
    extent = BoundingBox.of_points(box)
    if extent is None or step_meters <= 0:
        return ()

    step = lon_step(extent.min_y, step_meters)
    if not math.isfinite(step) or step <= 0:
        logger.debug("Longitude step is not usable at latitude %.6f", extent.min_y)
        return ()

    lines: list[Line] = []
    i = 0
    lon = extent.min_x
    while lon <= extent.max_x:
        lines.append(Line(points=(GeoPoint(lon, extent.min_y), GeoPoint(lon, extent.max_y))))
        i += 1
        lon = extent.min_x + i * step
    return tuple(lines)


def scaled_box(shape: Polygon | MultiPolygon, scale: float) -> Ring | None:
    """Corners of the polygon's extent scaled around its centre.

    Args:
        shape: Polygon in geographic coordinates
        scale: Uniform scale factor (not validated here)

    Returns:
        Four box corners, or None for a shape without vertices
    """
    extent = bounding_box(shape)
    if extent is None:
        return None
    return extent.scaled(scale).corners()


def build_grid(shape: Polygon | MultiPolygon, step_meters: float, scale: float) -> GridBuild | None:
    """Compute the scaled bounding box, its pivot and the row lines.

    Args:
        shape: Polygon in geographic coordinates
        step_meters: Row spacing in meters
        scale: Box scale around its centroid

    Returns:
        GridBuild, or None when the shape has no vertices
    """
    box = scaled_box(shape, scale)
    if box is None:
        return None
    return GridBuild(bbox=box, pivot=centroid(box), lines=grid_lines(box, step_meters))
