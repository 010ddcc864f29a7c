"""GeoJSON I/O layer for rowplan.

This module reads selected features from GeoJSON files and renders
generated geometry back to GeoJSON for the command-line interface.

Key responsibilities:
- Load a GeoJSON Feature, FeatureCollection or bare geometry
- Convert GeoJSON geometry objects to domain shapes and back
- Build FeatureCollections of generated points and row segments

Key classes:
- GeoJSONReader: Load a file and extract the selected shape
- GeoJSONWriter: Render generated geometry
"""

from rowplan.io.reader import GeoJSONReader
from rowplan.io.writer import GeoJSONWriter

__all__ = [
    "GeoJSONReader",
    "GeoJSONWriter",
]
