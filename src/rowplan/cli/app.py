"""CLI application entry point for rowplan.

This module provides the main CLI interface using Typer. Input files hold
geographic (EPSG:4326) coordinates, so the identity projection is used.
"""

import time
from pathlib import Path
from typing import Annotated

import typer

from rowplan import __version__
from rowplan.cli.output import (
    console,
    print_error,
    print_header,
    print_input_info,
    print_points_summary,
    print_rows_summary,
    print_step,
)
from rowplan.config import (
    LoggingConfig,
    PointsForm,
    RowPlanSettings,
    RowsForm,
    StartFrom,
)
from rowplan.core import PointsGenerator, RowsGenerator
from rowplan.domain import ScanDirection, Shape
from rowplan.exceptions import GeoJSONLoadError, RowPlanError
from rowplan.io import GeoJSONReader, GeoJSONWriter
from rowplan.projection import IDENTITY
from rowplan.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="rowplan",
    help="Generate points along lines and clipped rows inside polygons.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Rowplan[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Derive points and rows from GeoJSON features."""


def _load_shape(path: Path, quiet: bool) -> Shape:
    """Load the first feature of a GeoJSON file.

    Raises:
        GeoJSONLoadError: If the file cannot be read or holds no usable geometry
    """
    if not path.exists():
        raise GeoJSONLoadError(str(path), "file does not exist")
    if not path.is_file():
        raise GeoJSONLoadError(str(path), "path is not a file")

    try:
        reader = GeoJSONReader(path)
        reader.load()
        shape = reader.shape()
    except (OSError, ValueError) as e:
        raise GeoJSONLoadError(str(path), str(e)) from e

    if not quiet:
        print_input_info(str(path), shape.kind, reader.feature_count)
    return shape


def _settings(
    log_file: Path | None, log_level: str, rows_form: RowsForm | None = None
) -> RowPlanSettings:
    settings = RowPlanSettings(logging=LoggingConfig(log_file=log_file, log_level=log_level))
    if rows_form is not None:
        settings.rows = rows_form
    return settings


@app.command()
def points(
    input_file: Annotated[
        Path,
        typer.Argument(help="GeoJSON file holding a LineString", show_default=False),
    ],
    distance: Annotated[
        float | None,
        typer.Option("--distance", "-d", help="Distance between points in meters"),
    ] = None,
    count: Annotated[
        int | None,
        typer.Option("--count", "-n", help="Number of points"),
    ] = None,
    padding_start: Annotated[
        float | None,
        typer.Option("--padding-start", help="Meters trimmed from the line start"),
    ] = None,
    padding_end: Annotated[
        float | None,
        typer.Option("--padding-end", help="Meters trimmed from the line end"),
    ] = None,
    end_point: Annotated[
        bool,
        typer.Option("--end-point", help="Always include the end of the trimmed line"),
    ] = False,
    start_from: Annotated[
        str,
        typer.Option("--from", help="Line end where sampling starts (start|end)"),
    ] = "start",
    log_file: Annotated[
        Path | None,
        typer.Option("--log-file", help="Write detailed logs to file"),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="Logging level (DEBUG|INFO|WARNING|ERROR)"),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Only print the GeoJSON result"),
    ] = False,
) -> None:
    """Generate points along a line, printed as a GeoJSON FeatureCollection.

    Example:
        rowplan points track.geojson --distance 25 --end-point
    """
    try:
        start = StartFrom(start_from.lower())
    except ValueError:
        print_error(f"Invalid start: {start_from}", details="Valid values: start, end")
        raise typer.Exit(code=1)

    settings = _settings(log_file, log_level)
    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )

    if not quiet:
        print_header(__version__)

    start_time = time.time()
    try:
        if not quiet:
            print_step("Loading line")
        shape = _load_shape(input_file, quiet)

        form = PointsForm(
            distance=distance,
            count=count,
            padding_start=padding_start,
            padding_end=padding_end,
            generate_end_point=end_point,
            start_generate=start,
        )
        result = PointsGenerator(projection=IDENTITY, logger=logger).generate_points_on_line(
            shape, form
        )
        if not result.ok:
            print_error(result.message or "Point generation failed")
            raise typer.Exit(code=1)
    except GeoJSONLoadError as e:
        print_error(f"Could not load input: {e.reason}")
        raise typer.Exit(code=1)
    except RowPlanError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    typer.echo(GeoJSONWriter.dumps(GeoJSONWriter.points(result.value)))
    if not quiet:
        print_points_summary(len(result.value), time.time() - start_time)


@app.command()
def rows(
    input_file: Annotated[
        Path,
        typer.Argument(help="GeoJSON file holding a Polygon or MultiPolygon", show_default=False),
    ],
    step: Annotated[
        float,
        typer.Option("--step", "-s", help="Row spacing in meters", min=0.01),
    ] = 10.0,
    angle: Annotated[
        float,
        typer.Option("--angle", "-a", help="Row angle in degrees, clockwise"),
    ] = 0.0,
    scale: Annotated[
        float,
        typer.Option("--scale", help="Bounding box scale (minimum 1)"),
    ] = 1.0,
    direction: Annotated[
        str,
        typer.Option(
            "--direction",
            help="Scan direction (left-to-right|right-to-left|top-to-bottom|bottom-to-top)",
        ),
    ] = ScanDirection.LEFT_TO_RIGHT.value,
    log_file: Annotated[
        Path | None,
        typer.Option("--log-file", help="Write detailed logs to file"),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="Logging level (DEBUG|INFO|WARNING|ERROR)"),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Only print the GeoJSON result"),
    ] = False,
) -> None:
    """Generate rows clipped to a polygon, printed as a GeoJSON FeatureCollection.

    Example:
        rowplan rows field.geojson --step 5 --angle 30 --direction top-to-bottom
    """
    try:
        scan = ScanDirection(direction.lower())
    except ValueError:
        print_error(
            f"Invalid direction: {direction}",
            details="Valid values: " + ", ".join(d.value for d in ScanDirection),
        )
        raise typer.Exit(code=1)

    settings = _settings(
        log_file, log_level, RowsForm(step=step, angle=angle, scale=scale, direction=scan)
    )
    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )

    if not quiet:
        print_header(__version__)

    start_time = time.time()
    try:
        if not quiet:
            print_step("Loading polygon")
        shape = _load_shape(input_file, quiet)

        generator = RowsGenerator(shape, projection=IDENTITY, settings=settings, logger=logger)
        preview = generator.generate_rows()
        if not preview.ok:
            print_error(preview.message or "Row generation failed")
            raise typer.Exit(code=1)
        row_count = len(preview.value.lines) if preview.value else 0

        saved = generator.save_rows()
        if not saved.ok:
            print_error(saved.message or "Row clipping failed")
            raise typer.Exit(code=1)
    except GeoJSONLoadError as e:
        print_error(f"Could not load input: {e.reason}")
        raise typer.Exit(code=1)
    except RowPlanError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    typer.echo(GeoJSONWriter.dumps(GeoJSONWriter.segments(saved.value)))
    if not quiet:
        print_rows_summary(row_count, len(saved.value), settings.rows.angle, time.time() - start_time)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
