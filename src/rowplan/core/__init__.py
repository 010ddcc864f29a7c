"""Core generation algorithms for rowplan.

This module contains the core algorithms for:

- Geodesy (haversine distance, points along lines, line slicing)
- Ring validation and polygon coordinate extraction
- Point sampling along lines
- Bounding box and row grid construction
- Rotation/translation of the preview and interactive gestures
- Clipping rows to polygons

Geometric stages are:
- Stateless (pure functions over frozen values)
- Synchronous (gestures coalesce events with a debounce, no threads)

Key functions:
- close_and_validate: Close a ring and check it can bound an area
- extract_geographic_rings: Display polygon -> validated geographic rings
- sample_along_line: Points along a line by distance or count
- build_grid: Scaled bounding box, pivot and row lines of a polygon
- rotate_ring / rotate_lines: Clockwise rotation about a pivot
- clip_rows: Clip rows to a polygon and flag the first segment

Key classes:
- GestureController: Rotation, translation and wheel scaling of the preview
- PointsGenerator: Public point generation operation
- RowsGenerator: Public row preview/save/reset operations
"""

from rowplan.core.clipper import clip_rows, split_line
from rowplan.core.generators import GenerationResult, PointsGenerator, RowsGenerator
from rowplan.core.geodesy import along, distance, line_length, slice_along
from rowplan.core.gestures import Debouncer, GestureController, GestureMode, ImmediateScheduler
from rowplan.core.grid import build_grid, grid_lines, lon_step
from rowplan.core.rings import close_and_validate, extract_geographic_rings
from rowplan.core.sampler import SampleOptions, sample_along_line
from rowplan.core.transform import preview_grid, rotate_lines, rotate_point, rotate_ring

__all__ = [
    # Gesture classes
    "Debouncer",
    # Generator classes
    "GenerationResult",
    "GestureController",
    "GestureMode",
    "ImmediateScheduler",
    "PointsGenerator",
    "RowsGenerator",
    "SampleOptions",
    # Geometry functions
    "along",
    "build_grid",
    "clip_rows",
    "close_and_validate",
    "distance",
    "extract_geographic_rings",
    "grid_lines",
    "line_length",
    "lon_step",
    "preview_grid",
    "rotate_lines",
    "rotate_point",
    "rotate_ring",
    "sample_along_line",
    "slice_along",
    "split_line",
]
