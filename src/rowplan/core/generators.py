"""Public operations exposed to the map collaborator.

This module wires the geometric stages into the operations the interactive
shell calls:

- PointsGenerator.generate_points_on_line: points along a selected line
- RowsGenerator.preview_rows / generate_rows: live row preview
- RowsGenerator.save_rows: clipped row segments
- RowsGenerator.reset_rows_form_and_preview: back to defaults

Every operation returns a ``GenerationResult``. Failures are reported as
``ok=False`` with a message for the operator; no ``RowPlanError`` escapes.
"""

import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import structlog
from pydantic import ValidationError

from rowplan.config import PointsForm, RowPlanSettings, RowsForm
from rowplan.core.clipper import clip_rows
from rowplan.core.gestures import GestureController, Scheduler
from rowplan.core.grid import build_grid
from rowplan.core.rings import extract_geographic_rings
from rowplan.core.sampler import SampleOptions, sample_along_line
from rowplan.domain import (
    GeoPoint,
    Line,
    MultiPolygon,
    Polygon,
    RowGrid,
    RowGridState,
    Segment,
    Shape,
)
from rowplan.exceptions import (
    InvalidParametersError,
    NoValidContourError,
    RowPlanError,
    UnsupportedGeometryError,
)
from rowplan.projection import WEB_MERCATOR, Projection
from rowplan.utils import OperationLogger

T = TypeVar("T")

NO_CONTOUR_MESSAGE = "No valid contours"


@dataclass(frozen=True)
class GenerationResult(Generic[T]):
    """Outcome of a public operation.

    Attributes:
        ok: False when the operation aborted
        value: Produced geometry (empty/None when aborted)
        message: User-facing explanation when aborted
    """

    ok: bool
    value: T
    message: str | None = None


def _form_errors(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        field = ".".join(str(loc) for loc in item["loc"])
        parts.append(f"{field}: {item['msg']}")
    return "; ".join(parts)


class PointsGenerator:
    """Samples points along a selected line.

    Example:
        generator = PointsGenerator(projection=WEB_MERCATOR)
        result = generator.generate_points_on_line(line, {"distance": 25})
        if not result.ok:
            show_warning(result.message)
    """

    def __init__(
        self,
        projection: Projection = WEB_MERCATOR,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self.projection = projection
        self.logger = logger or structlog.get_logger("rowplan")
        self.operation_logger = OperationLogger(self.logger)

    def _to_form(self, form: PointsForm | Mapping[str, Any] | None) -> PointsForm:
        if form is None:
            return PointsForm()
        if isinstance(form, PointsForm):
            return form
        try:
            return PointsForm.model_validate(dict(form))
        except ValidationError as e:
            raise InvalidParametersError(_form_errors(e)) from e

    def generate_points(self, line: Line, form: PointsForm) -> list[GeoPoint]:
        """Sample a line already in geographic coordinates.

        Raises:
            InvalidParametersError: If neither distance nor count is set
        """
        return sample_along_line(line, SampleOptions.from_form(form))

    def generate_points_on_line(
        self,
        geometry: Shape | None,
        form: PointsForm | Mapping[str, Any] | None = None,
    ) -> GenerationResult[list[GeoPoint]]:
        """Generate points along a line selected in display coordinates.

        Args:
            geometry: Selected shape; only lines are sampled
            form: Sampling options (model or raw form values)

        Returns:
            Result holding geographic points
        """
        start_time = time.time()
        try:
            if not isinstance(geometry, Line):
                kind = getattr(geometry, "kind", "nothing")
                raise UnsupportedGeometryError(kind, "LineString")
            points_form = self._to_form(form)
            line = Line(points=tuple(self.projection.to_geographic(p) for p in geometry.points))
            points = self.generate_points(line, points_form)
        except RowPlanError as e:
            self.operation_logger.log_warning("generate_points", str(e))
            return GenerationResult(ok=False, value=[], message=str(e))

        duration_ms = (time.time() - start_time) * 1000
        self.operation_logger.log_points_generated(len(points), duration_ms)
        return GenerationResult(ok=True, value=points)


class RowsGenerator:
    """Builds, edits and clips the row preview for a selected polygon.

    Manages the complete workflow:
    1. Convert the selected polygon to validated geographic rings
    2. Build the scaled bounding box, pivot and row grid
    3. Hand the state to the gesture controller for live editing
    4. Clip the previewed rows to the polygon on save

    Example:
        rows = RowsGenerator(polygon, projection=WEB_MERCATOR)
        rows.generate_rows()
        rows.controller.pointer_down(pointer)
        ...
        segments = rows.save_rows().value
    """

    def __init__(
        self,
        geometry: Shape | None = None,
        projection: Projection = WEB_MERCATOR,
        settings: RowPlanSettings | None = None,
        scheduler: Scheduler | None = None,
        on_preview: Callable[[RowGrid | None], None] | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the rows generator.

        Args:
            geometry: Selected shape in display coordinates
            projection: Display/geographic conversion pair
            settings: Application settings (defaults used if None)
            scheduler: Timer source for the rotation debounce
            on_preview: Called with the preview geometry after every change
            logger: Structured logger (module logger if None)
        """
        self.geometry = geometry
        self.projection = projection
        self.settings = settings or RowPlanSettings()
        self.default_form = self.settings.rows.model_copy()
        self.form = self.default_form.model_copy()
        self.logger = logger or structlog.get_logger("rowplan")
        self.operation_logger = OperationLogger(self.logger)
        self.last_segments: list[Segment] = []
        self.controller = GestureController(
            projection=projection,
            config=self.settings.gesture,
            scheduler=scheduler,
            on_preview=on_preview,
            on_angle_committed=self._commit_angle,
            on_scale=self._rescale,
        )

    # --- State access ---

    @property
    def state(self) -> RowGridState:
        return self.controller.state

    @property
    def preview(self) -> RowGrid | None:
        return self.controller.preview()

    def select(self, geometry: Shape | None) -> None:
        """Change the selected shape, dropping any preview."""
        self.geometry = geometry
        self.controller.clear()

    def update_form(self, **values: Any) -> GenerationResult[RowsForm]:
        """Apply form edits; invalid values leave the form untouched."""
        try:
            form = RowsForm.model_validate({**self.form.model_dump(), **values})
        except ValidationError as e:
            message = _form_errors(e)
            self.operation_logger.log_warning("update_form", message)
            return GenerationResult(ok=False, value=self.form, message=message)
        self.form = form
        return GenerationResult(ok=True, value=form)

    # --- Pipeline ---

    def _geographic_polygon(self) -> Polygon | MultiPolygon:
        geometry = self.geometry
        if not isinstance(geometry, (Polygon, MultiPolygon)):
            kind = getattr(geometry, "kind", "nothing")
            raise UnsupportedGeometryError(kind, "Polygon or MultiPolygon")
        shape = extract_geographic_rings(geometry, self.projection.to_geographic)
        if shape is None:
            raise NoValidContourError(NO_CONTOUR_MESSAGE)
        return shape

    def _build_state(self, shape: Polygon | MultiPolygon, angle: float, scale: float) -> RowGridState:
        grid = build_grid(shape, self.form.step, scale)
        if grid is None:
            raise NoValidContourError(NO_CONTOUR_MESSAGE)
        return RowGridState(
            source_bbox=grid.bbox,
            pivot=grid.pivot,
            angle=angle,
            step_meters=self.form.step,
            scale=scale,
        )

    def preview_rows(self, angle_override: float | None = None) -> GenerationResult[RowGrid | None]:
        """Build the row preview from the form values.

        Args:
            angle_override: Angle to preview instead of the form angle

        Returns:
            Result holding the preview geometry
        """
        try:
            shape = self._geographic_polygon()
            angle = angle_override if angle_override is not None else self.form.angle
            state = self._build_state(shape, angle, self.form.scale)
        except RowPlanError as e:
            self.operation_logger.log_warning("preview_rows", str(e))
            return GenerationResult(ok=False, value=None, message=str(e))

        self.controller.load(state)
        grid = self.controller.preview()
        self.operation_logger.log_preview(
            rows=len(grid.lines) if grid else 0, angle=state.angle, scale=state.scale
        )
        return GenerationResult(ok=True, value=grid)

    def generate_rows(self) -> GenerationResult[RowGrid | None]:
        """Discard the current preview and build a new one."""
        self.controller.clear()
        return self.preview_rows()

    def save_rows(self) -> GenerationResult[list[Segment]]:
        """Clip the previewed rows to the polygon and clear the preview.

        Returns:
            Result holding the clipped segments, the first one flagged
        """
        start_time = time.time()
        try:
            shape = self._geographic_polygon()
        except RowPlanError as e:
            self.operation_logger.log_warning("save_rows", str(e))
            return GenerationResult(ok=False, value=[], message=str(e))

        grid = self.controller.preview()
        lines = grid.lines if grid is not None else ()
        segments = clip_rows(lines, shape, self.form.direction)

        self.controller.clear()
        self.last_segments = segments

        duration_ms = (time.time() - start_time) * 1000
        self.operation_logger.log_rows_saved(len(segments), duration_ms)
        return GenerationResult(ok=True, value=segments)

    def reset_rows_form_and_preview(self) -> None:
        """Restore default form values and drop all preview state."""
        self.form = self.default_form.model_copy()
        self.controller.clear()
        self.last_segments = []
        self.operation_logger.log_reset()

    # --- Gesture callbacks ---

    def _commit_angle(self, angle: float) -> None:
        self.form = self.form.model_copy(update={"angle": angle})

    def _rescale(self, scale: float) -> RowGridState | None:
        try:
            shape = self._geographic_polygon()
            self.form = self.form.model_copy(update={"scale": scale})
            return self._build_state(shape, self.controller.state.angle, scale)
        except RowPlanError as e:
            self.operation_logger.log_warning("scale_rows", str(e))
            return None
