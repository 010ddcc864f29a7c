"""Utility functions for rowplan.

This module provides utility functions including:

- Logging setup and configuration
- Generation statistics tracking
"""

from rowplan.utils.logging import (
    GenerationStats,
    OperationLogger,
    configure_logging,
)

__all__ = [
    "GenerationStats",
    "OperationLogger",
    "configure_logging",
]
