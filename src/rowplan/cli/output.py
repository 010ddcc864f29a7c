"""Rich console output helpers for the CLI.

Status output goes to stderr so that stdout carries only GeoJSON.
"""

from rich.console import Console
from rich.text import Text

console = Console(stderr=True)

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Rowplan[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_input_info(path: str, kind: str, feature_count: int) -> None:
    """Print information about the loaded input.

    Args:
        path: Path to the GeoJSON file
        kind: Geometry type of the selected feature
        feature_count: Number of features in the file
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(path)
    line.append(f" ({kind})")
    console.print(line)
    console.print(f"  {feature_count:,} features {SYM_DOT} first used")


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    return f"{seconds:.1f}s"


def print_points_summary(count: int, total_time_s: float) -> None:
    """Print summary of a point generation run."""
    console.print(
        f"\n[bold green]{SYM_OK} Complete[/bold green] in {_format_time(total_time_s)}"
    )
    console.print(f"  {count} points")


def print_rows_summary(rows: int, segments: int, angle: float, total_time_s: float) -> None:
    """Print summary of a row generation run.

    Args:
        rows: Rows in the preview grid
        segments: Segments kept after clipping
        angle: Row angle in degrees
        total_time_s: Total time in seconds
    """
    console.print(
        f"\n[bold green]{SYM_OK} Complete[/bold green] in {_format_time(total_time_s)}"
    )
    console.print(f"  {rows} rows {SYM_DOT} {segments} segments {SYM_DOT} {angle:g}°")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
