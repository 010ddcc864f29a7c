"""Rotation and translation of the row preview.

Angles are in degrees, clockwise positive, matching the on-screen sense of
a drag around the pivot. Rotation happens in the plane of geographic
coordinates. The preview geometry is always recomputed from a
``RowGridState`` snapshot via ``preview_grid``; nothing here caches.
"""

import math
from collections.abc import Iterable, Sequence

from rowplan.core.grid import grid_lines
from rowplan.domain import GeoPoint, Line, Ring, RowGrid, RowGridState


def rotate_point(point: GeoPoint, angle: float, pivot: GeoPoint) -> GeoPoint:
    """Rotate a point clockwise about a pivot.

    Args:
        point: Point to rotate
        angle: Rotation in degrees, clockwise positive
        pivot: Centre of rotation

    Returns:
        Rotated point
    """
    theta = math.radians(angle)
    cos_t = math.cos(theta)
    sin_t = math.sin(theta)
    dx = point.x - pivot.x
    dy = point.y - pivot.y
    return GeoPoint(
        pivot.x + dx * cos_t + dy * sin_t,
        pivot.y - dx * sin_t + dy * cos_t,
    )


def rotate_ring(ring: Sequence[GeoPoint], angle: float, pivot: GeoPoint) -> Ring:
    """Rotate every vertex of a ring (or any point sequence)."""
    return tuple(rotate_point(p, angle, pivot) for p in ring)


def rotate_lines(lines: Iterable[Line], angle: float, pivot: GeoPoint) -> tuple[Line, ...]:
    """Rotate a family of lines about a common pivot."""
    return tuple(Line(points=rotate_ring(line.points, angle, pivot)) for line in lines)


def translate_ring(ring: Sequence[GeoPoint], dx: float, dy: float) -> Ring:
    """Shift every vertex of a ring by ``(dx, dy)``."""
    return tuple(GeoPoint(p.x + dx, p.y + dy) for p in ring)


def close_ring(ring: Sequence[GeoPoint]) -> Ring:
    """Append the first point if the ring is open."""
    if ring and ring[0] != ring[-1]:
        return (*ring, ring[0])
    return tuple(ring)


def render_grid(
    source_bbox: Ring,
    pivot: GeoPoint,
    angle: float,
    step_meters: float,
    handle_corner: int = 1,
) -> RowGrid:
    """Rotate a box and its row lines about the pivot.

    Args:
        source_bbox: Unrotated box corners
        pivot: Centre of rotation
        angle: Rotation in degrees, clockwise positive
        step_meters: Row spacing in meters
        handle_corner: Index of the box corner carrying the rotation handle

    Returns:
        RowGrid with the closed rotated box, the handle and the row lines
    """
    corners = rotate_ring(source_bbox, angle, pivot)
    return RowGrid(
        bbox=close_ring(corners),
        pivot=pivot,
        lines=rotate_lines(grid_lines(source_bbox, step_meters), angle, pivot),
        handle=corners[handle_corner % len(corners)],
        angle=angle,
    )


def preview_grid(state: RowGridState, handle_corner: int = 1) -> RowGrid | None:
    """Derive the displayed preview from the current state.

    Args:
        state: Row grid state snapshot
        handle_corner: Index of the box corner carrying the rotation handle

    Returns:
        The preview geometry, or None if the state is empty
    """
    if state.source_bbox is None or state.pivot is None:
        return None
    return render_grid(state.source_bbox, state.pivot, state.angle, state.step_meters, handle_corner)
