"""Interactive gestures on the row preview.

Three gestures edit the same ``RowGridState``:

- Rotation: dragging the handle rotates the grid around the pivot
- Translation: dragging the box body moves the box and the pivot
- Scaling: the wheel over the box grows or shrinks the box

Only one gesture is active at a time; ``GestureMode`` guards every entry
point. Rotation recomputation is debounced through a ``Debouncer`` whose
pending callbacks are invalidated by an epoch counter, so a timer firing
after a reset never touches the cleared state.

Pointer positions are display coordinates. Angles are measured in the
display frame, where y grows northwards.
"""

import logging
import math
from collections.abc import Callable
from dataclasses import replace
from enum import Enum, auto
from typing import Protocol

from rowplan.config import GestureConfig
from rowplan.core.geometry import centroid, point_in_polygon
from rowplan.core.transform import render_grid, translate_ring
from rowplan.domain import BoundingBox, GeoPoint, Polygon, Ring, RowGrid, RowGridState
from rowplan.exceptions import NoActiveGestureError
from rowplan.projection import IDENTITY, Projection

logger = logging.getLogger(__name__)


class GestureMode(Enum):
    """Gesture currently driving the preview."""

    NONE = auto()
    ROTATING = auto()
    TRANSLATING = auto()
    SCALING = auto()


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything able to run a callback later.

    ``asyncio`` event loops satisfy this protocol.
    """

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class _NoopHandle:
    def cancel(self) -> None:
        pass


class ImmediateScheduler:
    """Scheduler running callbacks synchronously, for headless use."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        callback()
        return _NoopHandle()


class Debouncer:
    """Coalesce bursts of work into at most one run per delay window.

    While a run is pending, further submissions are dropped; the pending
    callback reads whatever state is current when it fires. ``invalidate``
    bumps an epoch so callbacks scheduled before it become no-ops.
    """

    def __init__(self, scheduler: Scheduler, delay_s: float) -> None:
        self._scheduler = scheduler
        self._delay_s = delay_s
        self._epoch = 0
        self._pending: Callable[[], None] | None = None
        self._handle: TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    @property
    def epoch(self) -> int:
        return self._epoch

    def submit(self, callback: Callable[[], None]) -> bool:
        """Schedule ``callback`` unless a run is already pending.

        Returns:
            True if the callback was scheduled
        """
        if self._pending is not None:
            return False
        epoch = self._epoch
        self._pending = callback
        handle = self._scheduler.call_later(self._delay_s, lambda: self._fire(epoch))
        if self._pending is not None:
            self._handle = handle
        return True

    def _fire(self, epoch: int) -> None:
        if epoch != self._epoch:
            logger.debug("Dropping stale debounced callback (epoch %d != %d)", epoch, self._epoch)
            return
        callback = self._pending
        self._pending = None
        self._handle = None
        if callback is not None:
            callback()

    def flush(self) -> None:
        """Run the pending callback now, if any."""
        if self._pending is None:
            return
        if self._handle is not None:
            self._handle.cancel()
        self._fire(self._epoch)

    def invalidate(self) -> None:
        """Cancel the pending run and orphan any callback already queued."""
        self._epoch += 1
        if self._handle is not None:
            self._handle.cancel()
        self._pending = None
        self._handle = None


def round_half_up(value: float, decimals: int = 0) -> float:
    factor = 10**decimals
    return math.floor(value * factor + 0.5) / factor


class GestureController:
    """Drives rotation, translation and wheel scaling of the row preview.

    Example:
        controller = GestureController(projection=WEB_MERCATOR)
        controller.load(state)
        controller.pointer_down(handle_px)   # starts a rotation
        controller.pointer_drag(pointer_px)
        controller.pointer_up(pointer_px)
    """

    def __init__(
        self,
        projection: Projection = IDENTITY,
        config: GestureConfig | None = None,
        scheduler: Scheduler | None = None,
        on_preview: Callable[[RowGrid | None], None] | None = None,
        on_angle_committed: Callable[[float], None] | None = None,
        on_scale: Callable[[float], RowGridState | None] | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            projection: Display/geographic conversion pair
            config: Gesture tuning (defaults used if None)
            scheduler: Timer source for the rotation debounce (synchronous if None)
            on_preview: Called with the new preview after every change
            on_angle_committed: Called with the rounded angle at rotation end
            on_scale: Rebuilds the state for a new scale (wheel gesture)
        """
        self.projection = projection
        self.config = config or GestureConfig()
        self.on_preview = on_preview
        self.on_angle_committed = on_angle_committed
        self.on_scale = on_scale
        self._debouncer = Debouncer(scheduler or ImmediateScheduler(), self.config.debounce_ms / 1000.0)

        self._state = RowGridState.empty()
        self._mode = GestureMode.NONE
        self._zoom_suppressed = False
        self._last_pointer: GeoPoint | None = None

        # Rotation bookkeeping
        self._drag_start_angle: float | None = None
        self._drag_start_preview_angle = 0.0

        # Translation bookkeeping
        self._drag_start_bbox: Ring | None = None
        self._drag_start_pivot: GeoPoint | None = None
        self._drag_start_pointer: GeoPoint | None = None
        self._moved: tuple[Ring, GeoPoint] | None = None

    # --- State ---

    @property
    def state(self) -> RowGridState:
        return self._state

    @property
    def mode(self) -> GestureMode:
        return self._mode

    @property
    def zoom_suppressed(self) -> bool:
        """True while default wheel zoom must be blocked."""
        return self._zoom_suppressed

    @property
    def debouncer(self) -> Debouncer:
        return self._debouncer

    def load(self, state: RowGridState) -> None:
        """Replace the state, abandoning any gesture in progress."""
        self._debouncer.invalidate()
        self._clear_drag()
        self._mode = GestureMode.NONE
        self._state = state
        self._emit()

    def clear(self) -> None:
        """Drop the preview and all gesture bookkeeping."""
        self._zoom_suppressed = False
        self.load(RowGridState.empty())

    def preview(self) -> RowGrid | None:
        """Current preview geometry derived from the state."""
        if self._mode == GestureMode.TRANSLATING and self._moved is not None:
            bbox, pivot = self._moved
            return render_grid(
                bbox, pivot, self._state.angle, self._state.step_meters, self.config.handle_corner
            )
        if self._state.source_bbox is None or self._state.pivot is None:
            return None
        return render_grid(
            self._state.source_bbox,
            self._state.pivot,
            self._state.angle,
            self._state.step_meters,
            self.config.handle_corner,
        )

    def _emit(self) -> None:
        if self.on_preview is not None:
            self.on_preview(self.preview())

    def _clear_drag(self) -> None:
        self._drag_start_angle = None
        self._drag_start_preview_angle = 0.0
        self._drag_start_bbox = None
        self._drag_start_pivot = None
        self._drag_start_pointer = None
        self._moved = None
        self._last_pointer = None

    def _require_preview(self, operation: str) -> tuple[Ring, GeoPoint]:
        if self._state.source_bbox is None or self._state.pivot is None:
            raise NoActiveGestureError(operation)
        return self._state.source_bbox, self._state.pivot

    # --- Hit testing ---

    def over_handle(self, pointer: GeoPoint) -> bool:
        """Check if a display point is on the rotation handle."""
        grid = self.preview()
        if grid is None:
            return False
        handle = self.projection.to_display(grid.handle)
        return math.hypot(pointer.x - handle.x, pointer.y - handle.y) <= self.config.handle_tolerance

    def over_box(self, pointer: GeoPoint) -> bool:
        """Check if a display point is inside the rotated box."""
        grid = self.preview()
        if grid is None:
            return False
        return point_in_polygon(self.projection.to_geographic(pointer), Polygon(rings=(grid.bbox,)))

    def hit_test(self, pointer: GeoPoint) -> GestureMode:
        """Gesture a pointer-down at this display point would start."""
        if self.over_handle(pointer):
            return GestureMode.ROTATING
        if self.over_box(pointer):
            return GestureMode.TRANSLATING
        return GestureMode.NONE

    # --- Pointer routing ---

    def pointer_down(self, pointer: GeoPoint) -> GestureMode:
        """Start the gesture matching what is under the pointer.

        Returns:
            The started gesture, NONE when nothing was hit or a gesture is active
        """
        if self._mode != GestureMode.NONE and self._mode != GestureMode.SCALING:
            return GestureMode.NONE
        target = self.hit_test(pointer)
        if target == GestureMode.ROTATING:
            self.begin_rotation(pointer)
        elif target == GestureMode.TRANSLATING:
            self.begin_translation(pointer)
        return target

    def pointer_drag(self, pointer: GeoPoint) -> None:
        if self._mode == GestureMode.ROTATING:
            self.rotate_to(pointer)
        elif self._mode == GestureMode.TRANSLATING:
            self.translate_to(pointer)

    def pointer_up(self, pointer: GeoPoint | None = None) -> None:
        if self._mode == GestureMode.ROTATING:
            self.end_rotation(pointer)
        elif self._mode == GestureMode.TRANSLATING:
            self.end_translation(pointer)

    def pointer_move(self, pointer: GeoPoint) -> bool:
        """Track hover; leaving the box ends a wheel gesture.

        Returns:
            Whether default wheel zoom must stay blocked
        """
        if self._mode == GestureMode.SCALING and not self.over_box(pointer):
            self._mode = GestureMode.NONE
            self._zoom_suppressed = False
            logger.debug("Pointer left box, wheel zoom restored")
        return self._zoom_suppressed

    # --- Rotation ---

    def _pointer_angle(self, pointer: GeoPoint, pivot: GeoPoint) -> float:
        p = self.projection.to_display(pivot)
        return math.atan2(pointer.y - p.y, pointer.x - p.x)

    def begin_rotation(self, pointer: GeoPoint) -> None:
        """Record the drag start angle around the pivot.

        Raises:
            NoActiveGestureError: If there is no preview to rotate
        """
        _, pivot = self._require_preview("rotate")
        self._mode = GestureMode.ROTATING
        self._zoom_suppressed = False
        self._drag_start_angle = self._pointer_angle(pointer, pivot)
        self._drag_start_preview_angle = self._state.angle
        self._last_pointer = pointer

    def rotate_to(self, pointer: GeoPoint) -> None:
        """Queue a rotation recompute for the latest pointer position."""
        if self._mode != GestureMode.ROTATING:
            return
        self._last_pointer = pointer
        self._debouncer.submit(self._recompute_rotation)

    def _recompute_rotation(self) -> None:
        if (
            self._mode != GestureMode.ROTATING
            or self._drag_start_angle is None
            or self._last_pointer is None
            or self._state.pivot is None
        ):
            return
        current = self._pointer_angle(self._last_pointer, self._state.pivot)
        delta = math.degrees(self._drag_start_angle - current)
        if delta < 0:
            delta += 360.0
        self._state = self._state.with_angle(self._drag_start_preview_angle + delta)
        self._emit()

    def end_rotation(self, pointer: GeoPoint | None = None) -> float | None:
        """Finish the rotation and publish the rounded angle.

        Returns:
            The rounded angle, or None if no rotation was active
        """
        if self._mode != GestureMode.ROTATING:
            return None
        if pointer is not None:
            self._last_pointer = pointer
            self._debouncer.submit(self._recompute_rotation)
        self._debouncer.flush()

        angle = round_half_up(self._state.angle)
        self._clear_drag()
        self._mode = GestureMode.NONE
        logger.debug("Rotation committed at %.0f degrees", angle)
        if self.on_angle_committed is not None:
            self.on_angle_committed(angle)
        return angle

    # --- Translation ---

    def begin_translation(self, pointer: GeoPoint) -> None:
        """Snapshot the box and pivot at drag start.

        Raises:
            NoActiveGestureError: If there is no preview to move
        """
        bbox, pivot = self._require_preview("move")
        self._mode = GestureMode.TRANSLATING
        self._zoom_suppressed = False
        self._drag_start_bbox = bbox
        self._drag_start_pivot = pivot
        self._drag_start_pointer = pointer
        self._moved = (bbox, pivot)

    def _moved_geometry(self, pointer: GeoPoint) -> tuple[Ring, GeoPoint]:
        if (
            self._drag_start_bbox is None
            or self._drag_start_pivot is None
            or self._drag_start_pointer is None
        ):
            raise NoActiveGestureError("move")
        to_display = self.projection.to_display
        to_geographic = self.projection.to_geographic
        ox = pointer.x - self._drag_start_pointer.x
        oy = pointer.y - self._drag_start_pointer.y

        # Centroid of the box as displayed after the drag offset
        start = render_grid(
            self._drag_start_bbox,
            self._drag_start_pivot,
            self._state.angle,
            self._state.step_meters,
        )
        displayed = [
            to_geographic(GeoPoint(q.x + ox, q.y + oy))
            for q in (to_display(p) for p in start.bbox[:-1])
        ]
        center = centroid(displayed)
        dx = center.x - self._drag_start_pivot.x
        dy = center.y - self._drag_start_pivot.y

        moved_bbox = translate_ring(self._drag_start_bbox, dx, dy)
        moved_pivot = GeoPoint(self._drag_start_pivot.x + dx, self._drag_start_pivot.y + dy)
        return moved_bbox, moved_pivot

    def translate_to(self, pointer: GeoPoint) -> None:
        """Move the preview with the pointer without committing it."""
        if self._mode != GestureMode.TRANSLATING:
            return
        self._moved = self._moved_geometry(pointer)
        self._emit()

    def end_translation(self, pointer: GeoPoint | None = None) -> None:
        """Commit the moved box and pivot into the state."""
        if self._mode != GestureMode.TRANSLATING:
            return
        if pointer is not None:
            self._moved = self._moved_geometry(pointer)
        if self._moved is not None:
            bbox, pivot = self._moved
            self._state = self._state.moved_to(bbox, pivot)
        self._clear_drag()
        self._mode = GestureMode.NONE
        self._emit()

    # --- Scaling ---

    def next_scale(self, delta_y: float) -> float:
        """Scale after a wheel step, clamped and rounded."""
        scale = self._state.scale + (-delta_y * self.config.wheel_scale_factor)
        scale = max(scale, self.config.min_scale)
        return round_half_up(scale, self.config.scale_decimals)

    def _rescaled(self, scale: float) -> RowGridState | None:
        if self._state.source_bbox is None or self._state.scale <= 0:
            return None
        extent = BoundingBox.of_points(self._state.source_bbox)
        if extent is None:
            return None
        box = extent.scaled(scale / self._state.scale).corners()
        return replace(self._state, source_bbox=box, pivot=centroid(box), scale=scale)

    def wheel(self, pointer: GeoPoint, delta_y: float) -> bool:
        """Scale the box when the wheel turns over it.

        Args:
            pointer: Pointer position in display coordinates
            delta_y: Wheel delta (negative grows the box)

        Returns:
            True if the event was consumed and default zoom must be blocked
        """
        if self._mode in (GestureMode.ROTATING, GestureMode.TRANSLATING):
            return False
        if not self.over_box(pointer):
            if self._mode == GestureMode.SCALING:
                self._mode = GestureMode.NONE
            self._zoom_suppressed = False
            return False

        self._mode = GestureMode.SCALING
        self._zoom_suppressed = True
        scale = self.next_scale(delta_y)
        if self.on_scale is not None:
            rebuilt = self.on_scale(scale)
        else:
            rebuilt = self._rescaled(scale)
        if rebuilt is not None:
            self._state = rebuilt
            self._emit()
        return True
