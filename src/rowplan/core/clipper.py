"""Clipping of row lines to a polygon.

Each row is split wherever it crosses a polygon boundary. A piece is kept
when its midpoint (by arc length) is inside the polygon, boundary included.
The kept piece whose midpoint sits furthest toward the side where the scan
begins is flagged as the first row.
"""

import logging
from collections.abc import Iterable, Sequence

from rowplan.core.geodesy import along, line_length
from rowplan.core.geometry import lerp, point_in_polygon, polygon_area, segment_intersection
from rowplan.domain import GeoPoint, Line, MultiPolygon, Polygon, ScanDirection, Segment

logger = logging.getLogger(__name__)

# Parameter distance under which two crossings are the same point
T_EPSILON = 1e-9


def _boundary_edges(shape: Polygon | MultiPolygon) -> list[tuple[GeoPoint, GeoPoint]]:
    polygons = shape.polygons if isinstance(shape, MultiPolygon) else (shape,)
    edges: list[tuple[GeoPoint, GeoPoint]] = []
    for polygon in polygons:
        for ring in polygon.rings:
            n = len(ring)
            for i in range(n - 1):
                if ring[i] != ring[i + 1]:
                    edges.append((ring[i], ring[i + 1]))
            if n > 2 and ring[0] != ring[-1]:
                edges.append((ring[-1], ring[0]))
    return edges


def split_line(line: Line, shape: Polygon | MultiPolygon) -> list[Line]:
    """Split a line at every crossing with the polygon boundary.

    Args:
        line: Row line to split
        shape: Polygon whose rings (exterior and holes) cut the line

    Returns:
        Pieces in line order. Empty if the line never touches the boundary.
    """
    edges = _boundary_edges(shape)
    pts = line.points
    pieces: list[Line] = []
    current: list[GeoPoint] = [pts[0]] if pts else []
    crossed = False

    for i in range(len(pts) - 1):
        a, b = pts[i], pts[i + 1]
        ts = sorted(
            t
            for t in (segment_intersection(a, b, e1, e2) for e1, e2 in edges)
            if t is not None
        )
        last_t = -1.0
        for t in ts:
            if t - last_t < T_EPSILON:
                continue
            last_t = t
            crossed = True
            cut = lerp(a, b, t)
            if current[-1] != cut:
                current.append(cut)
            if len(current) > 1:
                pieces.append(Line(points=tuple(current)))
            current = [cut]
        if current[-1] != b:
            current.append(b)

    if not crossed:
        return []
    if len(current) > 1:
        pieces.append(Line(points=tuple(current)))
    return pieces


def midpoint(line: Line) -> GeoPoint | None:
    """Point halfway along a line by arc length."""
    return along(line, line_length(line) / 2.0)


def _keep(piece: Line, shape: Polygon | MultiPolygon) -> bool:
    if line_length(piece) <= 0:
        return False
    center = midpoint(piece)
    return center is not None and point_in_polygon(center, shape)


def clip_lines(lines: Iterable[Line], shape: Polygon | MultiPolygon) -> list[Line]:
    """Keep the parts of each line lying inside the polygon.

    A line that never crosses the boundary is kept whole when its own
    midpoint is inside the polygon.

    Args:
        lines: Row lines in geographic coordinates
        shape: Clipping polygon in geographic coordinates

    Returns:
        Retained pieces in row order; empty for a zero-area polygon
    """
    if polygon_area(shape) <= 0:
        logger.debug("Clipping polygon has no area, nothing to keep")
        return []

    kept: list[Line] = []
    for line in lines:
        if line.is_degenerate():
            continue
        pieces = split_line(line, shape)
        if not pieces:
            if _keep(line, shape):
                kept.append(line)
            continue
        kept.extend(piece for piece in pieces if _keep(piece, shape))
    return kept


def first_index(lines: Sequence[Line], direction: ScanDirection) -> int | None:
    """Index of the line whose midpoint is most extreme for a scan direction.

    Left-to-right picks the westernmost midpoint, right-to-left the
    easternmost, top-to-bottom the northernmost and bottom-to-top the
    southernmost. Ties go to the earliest line.

    Args:
        lines: Candidate lines
        direction: Scan direction

    Returns:
        Index into ``lines``, or None if there are none
    """
    best: int | None = None
    best_key = 0.0
    for idx, line in enumerate(lines):
        center = midpoint(line)
        if center is None:
            continue
        if direction == ScanDirection.LEFT_TO_RIGHT:
            key = center.x
        elif direction == ScanDirection.RIGHT_TO_LEFT:
            key = -center.x
        elif direction == ScanDirection.TOP_TO_BOTTOM:
            key = -center.y
        else:
            key = center.y
        if best is None or key < best_key:
            best = idx
            best_key = key
    return best


def mark_first(lines: Sequence[Line], direction: ScanDirection) -> list[Segment]:
    """Wrap lines as segments, flagging the first one for the direction."""
    first = first_index(lines, direction)
    return [Segment(line=line, is_first=idx == first) for idx, line in enumerate(lines)]


def clip_rows(
    lines: Iterable[Line],
    shape: Polygon | MultiPolygon,
    direction: ScanDirection = ScanDirection.LEFT_TO_RIGHT,
) -> list[Segment]:
    """Clip row lines to a polygon and flag the first segment.

    Args:
        lines: Row lines in geographic coordinates
        shape: Clipping polygon in geographic coordinates
        direction: Scan direction used to pick the first segment

    Returns:
        Clipped segments; empty for empty input or a zero-area polygon
    """
    kept = clip_lines(lines, shape)
    logger.debug("Clipped rows to %d segments", len(kept))
    return mark_first(kept, direction)
