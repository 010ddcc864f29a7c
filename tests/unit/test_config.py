"""Unit tests for configuration models and form sanitization."""

import math

import pytest
from pydantic import ValidationError

from rowplan.config import (
    GestureConfig,
    PointsForm,
    RowPlanSettings,
    RowsForm,
    StartFrom,
    get_default_settings,
    sanitize_number,
)
from rowplan.domain import ScanDirection


class TestSanitizeNumber:
    """Tests for sanitize_number."""

    @pytest.mark.parametrize("raw", [None, "", "abc", 0, "0", math.nan, True, [1]])
    def test_unset_values(self, raw: object) -> None:
        """Test values that count as unset."""
        assert sanitize_number(raw) is None

    @pytest.mark.parametrize(("raw", "expected"), [(25, 25.0), ("12.5", 12.5), (-3, -3.0)])
    def test_numbers(self, raw: object, expected: float) -> None:
        """Test values that parse to numbers."""
        assert sanitize_number(raw) == expected


class TestPointsForm:
    """Tests for PointsForm."""

    def test_defaults(self) -> None:
        """Test default form values."""
        form = PointsForm()
        assert form.distance is None
        assert form.count is None
        assert form.generate_end_point is False
        assert form.start_generate == StartFrom.START

    def test_raw_values_sanitized(self) -> None:
        """Test that typed text and zeros are normalized."""
        form = PointsForm(distance="25", count="4", padding_start=0, padding_end="x")
        assert form.distance == 25.0
        assert form.count == 4
        assert form.padding_start is None
        assert form.padding_end is None

    def test_invalid_start(self) -> None:
        """Test that an unknown start end is rejected."""
        with pytest.raises(ValidationError):
            PointsForm(start_generate="middle")


class TestRowsForm:
    """Tests for RowsForm."""

    def test_defaults(self) -> None:
        """Test default row form values."""
        form = RowsForm()
        assert form.step == 10.0
        assert form.angle == 0.0
        assert form.scale == 1.0
        assert form.direction == ScanDirection.LEFT_TO_RIGHT

    def test_scale_clamped(self) -> None:
        """Test that scales below 1 are raised to 1."""
        assert RowsForm(scale=0.5).scale == 1.0
        assert RowsForm(scale=math.nan).scale == 1.0
        assert RowsForm(scale=2.5).scale == 2.5

    def test_step_must_be_positive(self) -> None:
        """Test that a non-positive step is rejected."""
        with pytest.raises(ValidationError):
            RowsForm(step=0)

    def test_direction_from_string(self) -> None:
        """Test parsing a scan direction."""
        assert RowsForm(direction="bottom-to-top").direction == ScanDirection.BOTTOM_TO_TOP


class TestSettings:
    """Tests for the settings container."""

    def test_default_settings(self) -> None:
        """Test that defaults build a full settings tree."""
        settings = get_default_settings()
        assert isinstance(settings, RowPlanSettings)
        assert settings.gesture.debounce_ms == 10.0
        assert settings.gesture.handle_corner == 1
        assert settings.logging.log_file is None

    def test_gesture_bounds(self) -> None:
        """Test gesture config validation."""
        with pytest.raises(ValidationError):
            GestureConfig(min_scale=0.5)
        with pytest.raises(ValidationError):
            GestureConfig(handle_corner=4)
