"""Unit tests for bounding box and row grid construction."""

import pytest

from rowplan.core.grid import build_grid, grid_lines, lon_step, scaled_box
from rowplan.domain import BoundingBox, GeoPoint, Polygon

# Spacing giving a longitude step of 0.01 degrees at the equator
STEP_001_DEG = 1113.2


class TestLonStep:
    """Tests for lon_step."""

    def test_equator(self) -> None:
        """Test the step at the equator."""
        assert lon_step(0.0, STEP_001_DEG) == pytest.approx(0.01)

    def test_widens_with_latitude(self) -> None:
        """Test that the step doubles at 60 degrees."""
        assert lon_step(60.0, STEP_001_DEG) == pytest.approx(0.02)


class TestGridLines:
    """Tests for grid_lines."""

    def test_lines_span_box(self) -> None:
        """Test count, spacing and extent of the lines."""
        box = BoundingBox(0.0, 0.0, 0.045, 0.02).corners()
        lines = grid_lines(box, STEP_001_DEG)
        assert len(lines) == 5
        for i, line in enumerate(lines):
            start, end = line.points
            assert start.x == pytest.approx(0.01 * i)
            assert start.x == end.x
            assert start.y == 0.0
            assert end.y == 0.02

    def test_first_line_on_west_edge(self) -> None:
        """Test that the first line sits on the minimum longitude."""
        box = BoundingBox(3.0, 1.0, 3.05, 1.05).corners()
        lines = grid_lines(box, 500.0)
        assert lines[0].points[0] == GeoPoint(3.0, 1.0)

    def test_non_positive_step(self) -> None:
        """Test that a zero or negative step gives no lines."""
        box = BoundingBox(0.0, 0.0, 1.0, 1.0).corners()
        assert grid_lines(box, 0.0) == ()
        assert grid_lines(box, -10.0) == ()

    def test_empty_box(self) -> None:
        """Test that no corners give no lines."""
        assert grid_lines((), 10.0) == ()

    def test_reference_latitude_is_south_edge(self) -> None:
        """Test that the step is computed at the box minimum latitude."""
        box = BoundingBox(0.0, 60.0, 0.05, 61.0).corners()
        lines = grid_lines(box, STEP_001_DEG)
        assert lines[1].points[0].x == pytest.approx(0.02)


class TestBuildGrid:
    """Tests for build_grid."""

    def test_unscaled(self, unit_square: Polygon) -> None:
        """Test that scale 1 keeps the polygon extent."""
        grid = build_grid(unit_square, 10_000.0, 1.0)
        assert grid is not None
        assert grid.bbox == BoundingBox(0, 0, 1, 1).corners()
        assert grid.pivot == GeoPoint(0.5, 0.5)
        assert len(grid.lines) > 0

    def test_scaled_around_center(self, unit_square: Polygon) -> None:
        """Test that scaling grows the box around its centre."""
        grid = build_grid(unit_square, 10_000.0, 2.0)
        assert grid is not None
        assert grid.bbox == BoundingBox(-0.5, -0.5, 1.5, 1.5).corners()
        assert grid.pivot == GeoPoint(0.5, 0.5)

    def test_empty_polygon(self) -> None:
        """Test that a polygon without vertices has no grid."""
        assert build_grid(Polygon(rings=()), 10.0, 1.0) is None
        assert scaled_box(Polygon(rings=()), 1.0) is None
