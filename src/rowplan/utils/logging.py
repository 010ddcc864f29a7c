"""Logging utilities for Rowplan."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog


@dataclass
class GenerationStats:
    """Statistics collected by the generators."""

    points_generated: int = 0
    previews_built: int = 0
    rows_previewed: int = 0
    segments_saved: int = 0
    resets: int = 0
    warning_count: int = 0
    warnings: list[tuple[str, str]] = field(default_factory=list)
    last_duration_ms: float | None = None


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("rowplan")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class OperationLogger:
    """Logger for tracking generator operations and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = GenerationStats()

    def log_points_generated(self, count: int, duration_ms: float) -> None:
        """Log a completed point sampling run."""
        self._logger.info(
            "Points generated",
            points=count,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.points_generated += count
        self._stats.last_duration_ms = duration_ms

    def log_preview(self, rows: int, angle: float, scale: float) -> None:
        """Log a freshly built row preview."""
        self._logger.debug(
            "Row preview built",
            rows=rows,
            angle=round(angle, 2),
            scale=scale,
        )
        self._stats.previews_built += 1
        self._stats.rows_previewed = rows

    def log_rows_saved(self, segments: int, duration_ms: float) -> None:
        """Log clipped rows handed back to the caller."""
        self._logger.info(
            "Rows saved",
            segments=segments,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.segments_saved += segments
        self._stats.last_duration_ms = duration_ms

    def log_warning(self, operation: str, message: str) -> None:
        """Log a user-facing failure of an operation."""
        self._logger.warning(
            "Operation aborted",
            operation=operation,
            reason=message,
        )
        self._stats.warning_count += 1
        self._stats.warnings.append((operation, message))

    def log_reset(self) -> None:
        self._logger.debug("Row form and preview reset")
        self._stats.resets += 1

    @property
    def stats(self) -> GenerationStats:
        """Get current statistics."""
        return self._stats
