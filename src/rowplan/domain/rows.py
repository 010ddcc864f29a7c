"""Row preview state and clipped row segments.

This module defines the row domain models: the state of the live row
preview, the geometry derived from it, and the final segments produced
when the rows are clipped to a polygon.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from rowplan.domain.geometry import GeoPoint, Line, Ring


class ScanDirection(str, Enum):
    """Direction in which rows are traversed.

    Used to pick the segment that is rendered as the first row.
    """

    LEFT_TO_RIGHT = "left-to-right"
    RIGHT_TO_LEFT = "right-to-left"
    TOP_TO_BOTTOM = "top-to-bottom"
    BOTTOM_TO_TOP = "bottom-to-top"


@dataclass(frozen=True)
class RowGridState:
    """Single source of truth for the live row preview.

    The displayed box and row lines are never stored; they are derived from
    this snapshot on every read (see ``rowplan.core.transform.preview_grid``).

    Attributes:
        source_bbox: Unrotated box corners (SW, SE, NE, NW), None when empty
        pivot: Rotation centre, the centroid of the box at last commit
        angle: Rotation in degrees, clockwise positive
        step_meters: Row spacing in meters
        scale: Scale applied to the polygon extent when the box was built
    """

    source_bbox: Ring | None = None
    pivot: GeoPoint | None = None
    angle: float = 0.0
    step_meters: float = 10.0
    scale: float = 1.0

    @classmethod
    def empty(cls) -> "RowGridState":
        """Return the cleared state."""
        return cls()

    def is_empty(self) -> bool:
        """Check if no preview is active."""
        return self.source_bbox is None or self.pivot is None

    def with_angle(self, angle: float) -> "RowGridState":
        return replace(self, angle=angle)

    def moved_to(self, source_bbox: Ring, pivot: GeoPoint) -> "RowGridState":
        """Commit a translated box and pivot."""
        return replace(self, source_bbox=source_bbox, pivot=pivot)


@dataclass(frozen=True)
class RowGrid:
    """Geometry of the live preview, ready for rendering.

    Attributes:
        bbox: Rotated box corners, closed ring (5 points)
        pivot: Rotation centre
        lines: Rotated row lines
        handle: Position of the rotation handle
        angle: Angle the geometry was rotated by
    """

    bbox: Ring
    pivot: GeoPoint
    lines: tuple[Line, ...]
    handle: GeoPoint
    angle: float = 0.0


@dataclass(frozen=True)
class Segment:
    """A row piece kept after clipping to the polygon.

    Attributes:
        line: Geometry of the segment
        is_first: True for the segment where traversal should start
    """

    line: Line
    is_first: bool = False

    @property
    def points(self) -> tuple[GeoPoint, ...]:
        return self.line.points

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with coordinates and the first flag
        """
        return {
            "coordinates": self.line.to_coords(),
            "first": self.is_first,
        }
