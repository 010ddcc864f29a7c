"""Unit tests for GeoJSON reading and writing."""

import json
from pathlib import Path

import pytest

from rowplan.domain import GeoPoint, Line, MultiPolygon, PointShape, Polygon, Segment
from rowplan.io import GeoJSONReader, GeoJSONWriter
from rowplan.io.converter import geojson_to_shape, shape_to_geojson


def _write(path: Path, data: object) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestConverter:
    """Tests for geometry conversion."""

    def test_line(self) -> None:
        """Test LineString conversion."""
        shape = geojson_to_shape({"type": "LineString", "coordinates": [[0, 0], [1, 2, 30]]})
        assert shape == Line(points=(GeoPoint(0, 0), GeoPoint(1, 2)))

    def test_polygon_and_multipolygon(self) -> None:
        """Test area geometry conversion."""
        ring = [[0, 0], [1, 0], [1, 1], [0, 0]]
        assert isinstance(geojson_to_shape({"type": "Polygon", "coordinates": [ring]}), Polygon)
        mp = geojson_to_shape({"type": "MultiPolygon", "coordinates": [[ring], [ring]]})
        assert isinstance(mp, MultiPolygon)
        assert len(mp.polygons) == 2

    def test_point(self) -> None:
        """Test Point conversion."""
        assert geojson_to_shape({"type": "Point", "coordinates": [5, 6]}) == PointShape(GeoPoint(5, 6))

    def test_unsupported(self) -> None:
        """Test rejected geometry types."""
        with pytest.raises(ValueError, match="Unsupported"):
            geojson_to_shape({"type": "MultiLineString", "coordinates": []})
        with pytest.raises(ValueError, match="no coordinates"):
            geojson_to_shape({"type": "Polygon"})

    @pytest.mark.parametrize(
        "geometry",
        [
            {"type": "LineString", "coordinates": [[1]]},
            {"type": "LineString", "coordinates": 5},
            {"type": "Polygon", "coordinates": [[[0, None], [1, 1], [0, 1]]]},
            {"type": "Point", "coordinates": []},
            "LineString",
        ],
    )
    def test_malformed(self, geometry: object) -> None:
        """Test that malformed geometry is reported as ValueError."""
        with pytest.raises(ValueError):
            geojson_to_shape(geometry)  # type: ignore[arg-type]

    def test_back_to_geojson(self) -> None:
        """Test exporting shapes."""
        line = Line.from_coords([(0, 0), (1, 1)])
        assert shape_to_geojson(line) == {"type": "LineString", "coordinates": [[0.0, 0.0], [1.0, 1.0]]}
        assert shape_to_geojson(PointShape(GeoPoint(1, 2)))["coordinates"] == [1.0, 2.0]


class TestGeoJSONReader:
    """Tests for GeoJSONReader."""

    def test_feature_collection(self, tmp_path: Path) -> None:
        """Test selecting features from a collection."""
        path = _write(
            tmp_path / "fc.geojson",
            {
                "type": "FeatureCollection",
                "features": [
                    {"type": "Feature", "geometry": {"type": "Point", "coordinates": [0, 0]}},
                    {"type": "Feature", "geometry": None},
                    {"type": "Feature", "geometry": {"type": "LineString", "coordinates": [[0, 0], [1, 1]]}},
                ],
            },
        )
        reader = GeoJSONReader(path)
        reader.load()
        assert reader.feature_count == 2
        assert isinstance(reader.shape(1), Line)

    def test_single_feature_and_bare_geometry(self, tmp_path: Path) -> None:
        """Test files holding one feature or a bare geometry."""
        geometry = {"type": "LineString", "coordinates": [[0, 0], [1, 1]]}
        for name, data in (
            ("feature.geojson", {"type": "Feature", "geometry": geometry, "properties": {}}),
            ("bare.geojson", geometry),
        ):
            reader = GeoJSONReader(_write(tmp_path / name, data))
            reader.load()
            assert isinstance(reader.shape(), Line)

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test loading a file that does not exist."""
        with pytest.raises(FileNotFoundError):
            GeoJSONReader(tmp_path / "nope.geojson").load()

    def test_not_an_object(self, tmp_path: Path) -> None:
        """Test rejecting a JSON array root."""
        with pytest.raises(ValueError):
            GeoJSONReader(_write(tmp_path / "list.geojson", [1, 2])).load()

    def test_not_loaded(self, tmp_path: Path) -> None:
        """Test that shape() requires load()."""
        with pytest.raises(RuntimeError):
            GeoJSONReader(tmp_path / "x.geojson").shape()

    def test_index_out_of_range(self, tmp_path: Path) -> None:
        """Test asking for a missing feature."""
        reader = GeoJSONReader(_write(tmp_path / "empty.geojson", {"type": "FeatureCollection", "features": []}))
        reader.load()
        with pytest.raises(ValueError, match="No feature"):
            reader.shape()


class TestGeoJSONWriter:
    """Tests for GeoJSONWriter."""

    def test_points(self) -> None:
        """Test point collection output."""
        collection = GeoJSONWriter.points([GeoPoint(0, 0), GeoPoint(1, 0)])
        assert collection["type"] == "FeatureCollection"
        assert [f["properties"]["index"] for f in collection["features"]] == [0, 1]
        assert collection["features"][1]["geometry"]["coordinates"] == [1.0, 0.0]

    def test_segments(self) -> None:
        """Test segment collection output."""
        segments = [
            Segment(line=Line.from_coords([(0, 0), (0, 1)]), is_first=True),
            Segment(line=Line.from_coords([(1, 0), (1, 1)])),
        ]
        collection = json.loads(GeoJSONWriter.dumps(GeoJSONWriter.segments(segments)))
        assert [f["properties"]["first"] for f in collection["features"]] == [True, False]
        assert collection["features"][0]["geometry"]["type"] == "LineString"
