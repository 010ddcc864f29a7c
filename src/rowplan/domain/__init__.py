"""Domain models for rowplan.

This module contains the value types exchanged between the selection layer,
the generation engine and the rendering collaborator. All models are:

- Immutable (frozen dataclasses), so derived geometry never drifts from state
- Expressed in geographic (longitude/latitude) coordinates unless noted
- Independent of any map toolkit

Key classes:
- GeoPoint: A 2D coordinate pair
- Line, Polygon, MultiPolygon, PointShape: Tagged union of selectable shapes
- BoundingBox: Axis-aligned extent of a shape
- RowGridState: Single source of truth for the live row preview
- RowGrid: Rotated box, handle and row lines derived from a RowGridState
- Segment: A clipped row with its "first" flag
"""

from rowplan.domain.geometry import (
    BoundingBox,
    GeoPoint,
    Line,
    MultiPolygon,
    PointShape,
    Polygon,
    Ring,
    Shape,
)
from rowplan.domain.rows import RowGrid, RowGridState, ScanDirection, Segment

__all__: list[str] = [
    # Enums
    "ScanDirection",
    # Core types
    "GeoPoint",
    "Ring",
    "Line",
    "Polygon",
    "MultiPolygon",
    "PointShape",
    "Shape",
    "BoundingBox",
    # Row preview
    "RowGridState",
    "RowGrid",
    "Segment",
]
