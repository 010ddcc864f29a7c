"""Core geometric types for selected and generated shapes.

This module defines the fundamental geometric types used throughout rowplan:
- GeoPoint: A 2D coordinate pair
- Line: An open polyline
- Polygon / MultiPolygon: Ring sets describing areas
- PointShape: A single selected point
- BoundingBox: Axis-aligned extent, scalable around its centre

Shapes form a closed tagged union (``Shape``) so downstream stages can
dispatch on the concrete type instead of probing payloads.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """A point in 2D space.

    Immutable and hashable for use in sets/dicts. Coordinates are usually
    geographic (x = longitude, y = latitude) but the same type carries
    display coordinates before projection.

    Attributes:
        x: X coordinate (longitude)
        y: Y coordinate (latitude)
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def to_list(self) -> list[float]:
        """Convert to a GeoJSON style ``[x, y]`` position."""
        return [self.x, self.y]

    @classmethod
    def from_sequence(cls, data: Sequence[float]) -> "GeoPoint":
        """Build a point from an ``[x, y]`` (or longer) position.

        Args:
            data: Position with at least two numbers

        Returns:
            GeoPoint instance
        """
        return cls(x=float(data[0]), y=float(data[1]))


Ring: TypeAlias = tuple[GeoPoint, ...]


def _to_points(coords: Iterable[GeoPoint | Sequence[float]]) -> tuple[GeoPoint, ...]:
    return tuple(c if isinstance(c, GeoPoint) else GeoPoint.from_sequence(c) for c in coords)


@dataclass(frozen=True)
class PointShape:
    """A single selected point."""

    point: GeoPoint

    kind = "Point"


@dataclass(frozen=True)
class Line:
    """An open polyline.

    A usable line has at least two points; shorter lines are carried
    through and treated as degenerate by the algorithms.

    Attributes:
        points: Ordered vertices of the line
    """

    points: tuple[GeoPoint, ...]

    kind = "LineString"

    @classmethod
    def from_coords(cls, coords: Iterable[GeoPoint | Sequence[float]]) -> "Line":
        """Create a line from points or ``[x, y]`` positions."""
        return cls(points=_to_points(coords))

    def is_degenerate(self) -> bool:
        """Check if the line has fewer than two vertices."""
        return len(self.points) < 2

    def reversed(self) -> "Line":
        """Return the same line walked from the other end."""
        return Line(points=tuple(reversed(self.points)))

    def to_coords(self) -> list[list[float]]:
        return [p.to_list() for p in self.points]


@dataclass(frozen=True)
class Polygon:
    """A polygon made of rings.

    The first ring is the exterior; any further rings are holes.

    Attributes:
        rings: Rings of the polygon, each a sequence of points
    """

    rings: tuple[Ring, ...]

    kind = "Polygon"

    @classmethod
    def from_coords(cls, rings: Iterable[Iterable[GeoPoint | Sequence[float]]]) -> "Polygon":
        """Create a polygon from nested ``[[x, y], ...]`` rings."""
        return cls(rings=tuple(_to_points(ring) for ring in rings))

    @property
    def exterior(self) -> Ring:
        """Exterior ring (empty if the polygon has no rings)."""
        return self.rings[0] if self.rings else ()

    @property
    def holes(self) -> tuple[Ring, ...]:
        return self.rings[1:]

    def to_coords(self) -> list[list[list[float]]]:
        return [[p.to_list() for p in ring] for ring in self.rings]


@dataclass(frozen=True)
class MultiPolygon:
    """An ordered collection of polygons.

    Attributes:
        polygons: Constituent polygons
    """

    polygons: tuple[Polygon, ...]

    kind = "MultiPolygon"

    @classmethod
    def from_coords(
        cls, polygons: Iterable[Iterable[Iterable[GeoPoint | Sequence[float]]]]
    ) -> "MultiPolygon":
        """Create a multipolygon from triple nested coordinates."""
        return cls(polygons=tuple(Polygon.from_coords(rings) for rings in polygons))

    def to_coords(self) -> list[list[list[list[float]]]]:
        return [polygon.to_coords() for polygon in self.polygons]


Shape: TypeAlias = PointShape | Line | Polygon | MultiPolygon


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Axis-aligned bounding box.

    Attributes:
        min_x: Minimum x (west)
        min_y: Minimum y (south)
        max_x: Maximum x (east)
        max_y: Maximum y (north)
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def of_points(cls, points: Iterable[GeoPoint]) -> "BoundingBox | None":
        """Compute the extent of a set of points.

        Args:
            points: Points to enclose

        Returns:
            BoundingBox, or None if no points were given
        """
        xs: list[float] = []
        ys: list[float] = []
        for p in points:
            xs.append(p.x)
            ys.append(p.y)
        if not xs:
            return None
        return cls(min(xs), min(ys), max(xs), max(ys))

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> GeoPoint:
        return GeoPoint((self.min_x + self.max_x) / 2.0, (self.min_y + self.max_y) / 2.0)

    def is_empty(self) -> bool:
        """Check if the box has no area."""
        return self.width <= 0 or self.height <= 0

    def corners(self) -> tuple[GeoPoint, GeoPoint, GeoPoint, GeoPoint]:
        """Corners in order SW, SE, NE, NW (counter-clockwise).

        Returns:
            Four corner points
        """
        return (
            GeoPoint(self.min_x, self.min_y),
            GeoPoint(self.max_x, self.min_y),
            GeoPoint(self.max_x, self.max_y),
            GeoPoint(self.min_x, self.max_y),
        )

    def scaled(self, factor: float) -> "BoundingBox":
        """Scale the box uniformly around its centre.

        No lower bound is applied here; callers validate the factor.

        Args:
            factor: Scale factor (1 keeps the box unchanged)

        Returns:
            New scaled bounding box
        """
        c = self.center
        half_w = self.width / 2.0 * factor
        half_h = self.height / 2.0 * factor
        return BoundingBox(c.x - half_w, c.y - half_h, c.x + half_w, c.y + half_h)
