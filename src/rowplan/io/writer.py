"""GeoJSON writer for generated geometry.

This module provides the GeoJSONWriter class which renders generated
points and row segments as GeoJSON FeatureCollections.
"""

import json
from collections.abc import Iterable
from typing import Any

from rowplan.domain import GeoPoint, Segment


class GeoJSONWriter:
    """Builds FeatureCollections from generated geometry.

    Example:
        collection = GeoJSONWriter.points(points)
        print(GeoJSONWriter.dumps(collection))
    """

    @staticmethod
    def points(points: Iterable[GeoPoint]) -> dict[str, Any]:
        """FeatureCollection with one Point feature per point, in order."""
        return {
            "type": "FeatureCollection",
            "features": [
                {
                    "type": "Feature",
                    "geometry": {"type": "Point", "coordinates": p.to_list()},
                    "properties": {"index": idx},
                }
                for idx, p in enumerate(points)
            ],
        }

    @staticmethod
    def segments(segments: Iterable[Segment]) -> dict[str, Any]:
        """FeatureCollection with one LineString feature per row segment."""
        return {
            "type": "FeatureCollection",
            "features": [
                {
                    "type": "Feature",
                    "geometry": {"type": "LineString", "coordinates": seg.line.to_coords()},
                    "properties": {"index": idx, "first": seg.is_first},
                }
                for idx, seg in enumerate(segments)
            ],
        }

    @staticmethod
    def dumps(collection: dict[str, Any], indent: int | None = None) -> str:
        return json.dumps(collection, indent=indent)
