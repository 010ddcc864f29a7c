"""Configuration settings for Rowplan."""

import math
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from rowplan.domain import ScanDirection

DEFAULT_STEP_METERS = 10.0
MIN_SCALE = 1.0


class StartFrom(str, Enum):
    """End of the line where point sampling begins."""

    START = "start"
    END = "end"


def sanitize_number(value: Any) -> float | None:
    """Normalize a raw form value to a positive-or-negative number or None.

    Zero, NaN, empty and non-numeric values are all treated as "unset".

    Args:
        value: Raw value as typed by the operator

    Returns:
        The value as float, or None when unset
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or number == 0:
        return None
    return number


class PointsForm(BaseModel):
    """Options for sampling points along a line."""

    distance: float | None = Field(
        default=None,
        description="Distance between points in meters",
    )
    count: int | None = Field(
        default=None,
        description="Maximum number of points to generate",
    )
    padding_start: float | None = Field(
        default=None,
        description="Meters trimmed from the start of the line",
    )
    padding_end: float | None = Field(
        default=None,
        description="Meters trimmed from the end of the line",
    )
    generate_end_point: bool = Field(
        default=False,
        description="Always include the last point of the trimmed line",
    )
    start_generate: StartFrom = Field(
        default=StartFrom.START,
        description="Line end where sampling begins",
    )

    @field_validator("distance", "padding_start", "padding_end", mode="before")
    @classmethod
    def _sanitize_float(cls, value: Any) -> float | None:
        return sanitize_number(value)

    @field_validator("count", mode="before")
    @classmethod
    def _sanitize_count(cls, value: Any) -> int | None:
        number = sanitize_number(value)
        if number is None:
            return None
        return int(number)


class RowsForm(BaseModel):
    """Options for row generation."""

    step: float = Field(
        default=DEFAULT_STEP_METERS,
        gt=0.0,
        description="Spacing between rows in meters",
    )
    angle: float = Field(
        default=0.0,
        description="Row rotation in degrees, clockwise",
    )
    scale: float = Field(
        default=MIN_SCALE,
        description="Bounding box scale around its centroid (minimum 1)",
    )
    direction: ScanDirection = Field(
        default=ScanDirection.LEFT_TO_RIGHT,
        description="Scan direction used to mark the first segment",
    )

    @field_validator("scale")
    @classmethod
    def _clamp_scale(cls, value: float) -> float:
        if math.isnan(value):
            return MIN_SCALE
        return max(value, MIN_SCALE)


class GestureConfig(BaseModel):
    """Configuration for interactive gestures."""

    debounce_ms: float = Field(
        default=10.0,
        ge=0.0,
        le=1000.0,
        description="Minimum window between rotation recomputations",
    )
    wheel_scale_factor: float = Field(
        default=0.001,
        gt=0.0,
        description="Scale increment per unit of wheel delta",
    )
    min_scale: float = Field(
        default=MIN_SCALE,
        ge=MIN_SCALE,
        description="Lower clamp applied to wheel scaling",
    )
    scale_decimals: int = Field(
        default=2,
        ge=0,
        le=6,
        description="Decimal places kept after a wheel scale step",
    )
    handle_tolerance: float = Field(
        default=12.0,
        gt=0.0,
        description="Hit radius of the rotation handle in display units",
    )
    handle_corner: int = Field(
        default=1,
        ge=0,
        le=3,
        description="Index of the box corner used as the rotation handle",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class RowPlanSettings(BaseModel):
    """Main application settings."""

    points: PointsForm = Field(default_factory=PointsForm)
    rows: RowsForm = Field(default_factory=RowsForm)
    gesture: GestureConfig = Field(default_factory=GestureConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> RowPlanSettings:
    """Get default application settings."""
    return RowPlanSettings()
