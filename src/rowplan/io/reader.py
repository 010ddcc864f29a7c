"""GeoJSON reader for selected features.

This module provides the GeoJSONReader class for loading a GeoJSON file
and extracting the selected geometry as a domain shape.
"""

import json
from pathlib import Path
from typing import Any

from rowplan.domain import Shape
from rowplan.io.converter import geojson_to_shape


class GeoJSONReader:
    """Loads GeoJSON files and extracts the selected shape.

    Accepts a FeatureCollection, a single Feature or a bare geometry. In a
    collection, the feature at ``index`` is selected.

    Example:
        reader = GeoJSONReader(Path("field.geojson"))
        reader.load()
        shape = reader.shape()
    """

    def __init__(self, path: Path) -> None:
        """Initialize the reader.

        Args:
            path: Path to the GeoJSON file
        """
        self._path = path
        self._data: dict[str, Any] | None = None

    def load(self) -> None:
        """Load and parse the file.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file is not a JSON object
        """
        if not self._path.exists():
            raise FileNotFoundError(f"GeoJSON file not found: {self._path}")

        with self._path.open(encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("GeoJSON root must be an object")
        self._data = data

    def _geometries(self) -> list[dict[str, Any]]:
        if self._data is None:
            raise RuntimeError("GeoJSON not loaded. Call load() first.")

        kind = self._data.get("type")
        if kind == "FeatureCollection":
            features = self._data.get("features") or []
            return [f["geometry"] for f in features if f.get("geometry")]
        if kind == "Feature":
            geometry = self._data.get("geometry")
            return [geometry] if geometry else []
        return [self._data]

    @property
    def feature_count(self) -> int:
        """Number of features carrying a geometry."""
        return len(self._geometries())

    def shape(self, index: int = 0) -> Shape:
        """Return the selected geometry as a domain shape.

        Args:
            index: Feature index within a FeatureCollection

        Returns:
            Domain shape

        Raises:
            RuntimeError: If the file has not been loaded yet
            ValueError: If there is no geometry at ``index`` or it is unsupported
        """
        geometries = self._geometries()
        if not 0 <= index < len(geometries):
            raise ValueError(f"No feature at index {index} ({len(geometries)} available)")
        return geojson_to_shape(geometries[index])
