"""Configuration management for rowplan.

This module provides configuration management using Pydantic models.
Form values arrive from the interactive shell (or the CLI) and are
sanitized and validated here.

Key classes:
- PointsForm: Options for sampling points along a line
- RowsForm: Options for row generation
- GestureConfig: Interactive gesture tuning
- LoggingConfig: Logging settings
- RowPlanSettings: Main application settings
"""

from rowplan.config.settings import (
    GestureConfig,
    LoggingConfig,
    PointsForm,
    RowPlanSettings,
    RowsForm,
    StartFrom,
    get_default_settings,
    sanitize_number,
)

__all__ = [
    "GestureConfig",
    "LoggingConfig",
    "PointsForm",
    "RowPlanSettings",
    "RowsForm",
    "StartFrom",
    "get_default_settings",
    "sanitize_number",
]
