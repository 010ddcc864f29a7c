"""Unit tests for the interactive gesture controller."""

import pytest

from rowplan.config import GestureConfig
from rowplan.core.gestures import (
    Debouncer,
    GestureController,
    GestureMode,
    ImmediateScheduler,
    round_half_up,
)
from rowplan.domain import GeoPoint, RowGrid, RowGridState
from rowplan.exceptions import NoActiveGestureError

HANDLE = GeoPoint(10.0, 0.0)
INSIDE = GeoPoint(3.0, 3.0)
OUTSIDE = GeoPoint(50.0, 50.0)


@pytest.fixture
def config() -> GestureConfig:
    """Create a gesture config with a handle radius suited to the test box."""
    return GestureConfig(handle_tolerance=0.5)


@pytest.fixture
def committed() -> list[float]:
    """Collect committed angles."""
    return []


@pytest.fixture
def previews() -> list[RowGrid | None]:
    """Collect emitted previews."""
    return []


@pytest.fixture
def controller(
    config: GestureConfig,
    scheduler,
    box_state: RowGridState,
    committed: list[float],
    previews: list[RowGrid | None],
) -> GestureController:
    """Create a controller loaded with the 10x10 box, driven by a manual scheduler."""
    ctrl = GestureController(
        config=config,
        scheduler=scheduler,
        on_preview=previews.append,
        on_angle_committed=committed.append,
    )
    ctrl.load(box_state)
    return ctrl


class TestDebouncer:
    """Tests for Debouncer."""

    def test_coalesces_submissions(self, scheduler) -> None:
        """Test that submissions while pending are dropped."""
        calls: list[int] = []
        debouncer = Debouncer(scheduler, 0.01)
        assert debouncer.submit(lambda: calls.append(1)) is True
        assert debouncer.submit(lambda: calls.append(2)) is False
        assert debouncer.pending
        assert scheduler.run_all() == 1
        assert calls == [1]
        assert not debouncer.pending

    def test_flush_runs_now(self, scheduler) -> None:
        """Test that flush runs the pending callback and cancels its timer."""
        calls: list[int] = []
        debouncer = Debouncer(scheduler, 0.01)
        debouncer.submit(lambda: calls.append(1))
        debouncer.flush()
        assert calls == [1]
        assert scheduler.run_all() == 0

    def test_invalidated_callback_is_noop(self, scheduler) -> None:
        """Test that a timer firing after invalidate does nothing."""
        calls: list[int] = []
        debouncer = Debouncer(scheduler, 0.01)
        debouncer.submit(lambda: calls.append(1))
        debouncer.invalidate()
        scheduler.run_all(ignore_cancel=True)
        assert calls == []
        assert debouncer.epoch == 1

    def test_immediate_scheduler(self) -> None:
        """Test synchronous scheduling leaves nothing pending."""
        calls: list[int] = []
        debouncer = Debouncer(ImmediateScheduler(), 0.01)
        assert debouncer.submit(lambda: calls.append(1))
        assert debouncer.submit(lambda: calls.append(2))
        assert calls == [1, 2]
        assert not debouncer.pending


class TestRoundHalfUp:
    """Tests for round_half_up."""

    def test_halves_round_up(self) -> None:
        """Test that halves go toward positive infinity."""
        assert round_half_up(0.5) == 1.0
        assert round_half_up(2.5) == 3.0
        assert round_half_up(-0.5) == 0.0

    def test_decimals(self) -> None:
        """Test rounding to two decimals."""
        assert round_half_up(1.234, 2) == pytest.approx(1.23)
        assert round_half_up(1.236, 2) == pytest.approx(1.24)


class TestHitTesting:
    """Tests for pointer hit testing."""

    def test_handle_has_priority(self, controller: GestureController) -> None:
        """Test that the handle wins over the box it sits on."""
        assert controller.hit_test(HANDLE) == GestureMode.ROTATING

    def test_box_body(self, controller: GestureController) -> None:
        """Test that the box interior starts a translation."""
        assert controller.hit_test(INSIDE) == GestureMode.TRANSLATING

    def test_outside(self, controller: GestureController) -> None:
        """Test that nothing is hit outside the box."""
        assert controller.hit_test(OUTSIDE) == GestureMode.NONE

    def test_empty_state(self, config: GestureConfig) -> None:
        """Test that nothing is hit without a preview."""
        ctrl = GestureController(config=config)
        assert ctrl.pointer_down(INSIDE) == GestureMode.NONE
        assert ctrl.mode == GestureMode.NONE


class TestRotation:
    """Tests for the rotation gesture."""

    def test_drags_coalesced(self, controller: GestureController, scheduler) -> None:
        """Test that a burst of drags schedules one recompute using the last pointer."""
        assert controller.pointer_down(HANDLE) == GestureMode.ROTATING
        controller.pointer_drag(GeoPoint(0.0, 1.0))
        controller.pointer_drag(GeoPoint(5.0, -3.0))
        controller.pointer_drag(GeoPoint(0.0, 0.0))
        assert scheduler.scheduled == 1
        assert controller.state.angle == 0.0

        scheduler.run_all()
        assert controller.state.angle == pytest.approx(90.0)

    def test_clockwise_drag_is_positive(self, config: GestureConfig, box_state: RowGridState) -> None:
        """Test that dragging the SE handle to the SW corner rotates by +90."""
        ctrl = GestureController(config=config)
        ctrl.load(box_state)
        ctrl.pointer_down(HANDLE)
        ctrl.pointer_drag(GeoPoint(0.0, 0.0))
        grid = ctrl.preview()
        assert grid is not None
        assert grid.angle == pytest.approx(90.0)
        assert grid.handle.x == pytest.approx(0.0, abs=1e-9)
        assert grid.handle.y == pytest.approx(0.0, abs=1e-9)

    def test_counter_clockwise_wraps(self, config: GestureConfig, box_state: RowGridState) -> None:
        """Test that a negative delta wraps into [0, 360)."""
        ctrl = GestureController(config=config)
        ctrl.load(box_state)
        ctrl.pointer_down(HANDLE)
        ctrl.pointer_drag(GeoPoint(10.0, 10.0))
        assert ctrl.state.angle == pytest.approx(270.0)

    def test_end_commits_rounded_angle(
        self, controller: GestureController, scheduler, committed: list[float]
    ) -> None:
        """Test that ending flushes the pending recompute and rounds."""
        controller.pointer_down(HANDLE)
        controller.pointer_drag(GeoPoint(0.0, 0.0))
        angle = controller.end_rotation(GeoPoint(0.0, 1.0))
        assert angle == 96.0
        assert committed == [96.0]
        assert controller.mode == GestureMode.NONE
        assert scheduler.run_all() == 0

    def test_end_without_rotation(self, controller: GestureController, committed: list[float]) -> None:
        """Test that ending an inactive rotation does nothing."""
        assert controller.end_rotation() is None
        assert committed == []

    def test_stale_recompute_after_clear(self, controller: GestureController, scheduler) -> None:
        """Test that a queued recompute cannot touch a cleared state."""
        controller.pointer_down(HANDLE)
        controller.pointer_drag(GeoPoint(0.0, 0.0))
        controller.clear()
        scheduler.run_all(ignore_cancel=True)
        assert controller.state.is_empty()
        assert controller.state.angle == 0.0
        assert controller.preview() is None

    def test_begin_without_preview(self, config: GestureConfig) -> None:
        """Test that rotating nothing raises."""
        with pytest.raises(NoActiveGestureError, match="rotate"):
            GestureController(config=config).begin_rotation(HANDLE)

    def test_exclusive_with_other_gestures(self, controller: GestureController) -> None:
        """Test that a rotation blocks new gestures and the wheel."""
        controller.pointer_down(HANDLE)
        assert controller.pointer_down(INSIDE) == GestureMode.NONE
        assert controller.wheel(INSIDE, -100.0) is False
        assert controller.mode == GestureMode.ROTATING


class TestTranslation:
    """Tests for the translation gesture."""

    def test_drag_moves_preview_only(self, controller: GestureController) -> None:
        """Test that dragging moves the preview without committing."""
        assert controller.pointer_down(INSIDE) == GestureMode.TRANSLATING
        controller.pointer_drag(GeoPoint(5.0, 4.0))

        grid = controller.preview()
        assert grid is not None
        assert grid.pivot.x == pytest.approx(7.0)
        assert grid.pivot.y == pytest.approx(6.0)
        assert controller.state.pivot == GeoPoint(5.0, 5.0)

    def test_release_commits(self, controller: GestureController) -> None:
        """Test that releasing commits the moved box and pivot."""
        controller.pointer_down(INSIDE)
        controller.pointer_drag(GeoPoint(4.0, 4.0))
        controller.pointer_up(GeoPoint(5.0, 4.0))

        state = controller.state
        assert controller.mode == GestureMode.NONE
        assert state.pivot is not None and state.source_bbox is not None
        assert state.pivot.x == pytest.approx(7.0)
        assert state.pivot.y == pytest.approx(6.0)
        assert state.source_bbox[0].x == pytest.approx(2.0)
        assert state.source_bbox[0].y == pytest.approx(1.0)

    def test_rotated_box_moves_with_pointer(self, config: GestureConfig, box_state: RowGridState) -> None:
        """Test translation of a rotated box keeps the angle."""
        ctrl = GestureController(config=config)
        ctrl.load(box_state.with_angle(30.0))
        ctrl.begin_translation(GeoPoint(5.0, 5.0))
        ctrl.end_translation(GeoPoint(6.0, 5.0))
        assert ctrl.state.angle == 30.0
        assert ctrl.state.pivot is not None
        assert ctrl.state.pivot.x == pytest.approx(6.0)
        assert ctrl.state.pivot.y == pytest.approx(5.0)

    def test_begin_without_preview(self, config: GestureConfig) -> None:
        """Test that moving nothing raises."""
        with pytest.raises(NoActiveGestureError, match="move"):
            GestureController(config=config).begin_translation(INSIDE)


class TestWheelScaling:
    """Tests for wheel scaling."""

    def test_scale_up(self, controller: GestureController) -> None:
        """Test that a negative delta grows the box around its centre."""
        assert controller.wheel(GeoPoint(5.0, 5.0), -100.0) is True
        state = controller.state
        assert state.scale == pytest.approx(1.1)
        assert state.source_bbox is not None
        assert state.source_bbox[0].x == pytest.approx(-0.5)
        assert state.source_bbox[2].y == pytest.approx(10.5)
        assert controller.mode == GestureMode.SCALING
        assert controller.zoom_suppressed

    def test_scale_clamped(self, controller: GestureController) -> None:
        """Test that the scale never drops below 1."""
        controller.wheel(GeoPoint(5.0, 5.0), -100.0)
        controller.wheel(GeoPoint(5.0, 5.0), 1000.0)
        assert controller.state.scale == 1.0

    def test_scale_rounded(self, controller: GestureController) -> None:
        """Test that the scale keeps two decimals."""
        assert controller.next_scale(-1.0) == 1.0
        assert controller.next_scale(-256.0) == pytest.approx(1.26)

    def test_wheel_outside_box(self, controller: GestureController) -> None:
        """Test that the wheel outside the box is not consumed."""
        assert controller.wheel(OUTSIDE, -100.0) is False
        assert not controller.zoom_suppressed
        assert controller.state.scale == 1.0

    def test_leaving_box_restores_zoom(self, controller: GestureController) -> None:
        """Test that moving off the box ends the wheel gesture."""
        controller.wheel(GeoPoint(5.0, 5.0), -100.0)
        assert controller.pointer_move(INSIDE) is True
        assert controller.pointer_move(OUTSIDE) is False
        assert controller.mode == GestureMode.NONE

    def test_rebuild_callback(self, config: GestureConfig, box_state: RowGridState) -> None:
        """Test that on_scale replaces the local rescale."""
        requested: list[float] = []

        def rebuild(scale: float) -> RowGridState:
            requested.append(scale)
            return box_state.moved_to(box_state.source_bbox, GeoPoint(1.0, 1.0))

        ctrl = GestureController(config=config, on_scale=rebuild)
        ctrl.load(box_state)
        ctrl.wheel(GeoPoint(5.0, 5.0), -500.0)
        assert requested == [1.5]
        assert ctrl.state.pivot == GeoPoint(1.0, 1.0)


class TestPreviewEmission:
    """Tests for preview callbacks."""

    def test_load_and_clear_emit(
        self, controller: GestureController, previews: list[RowGrid | None]
    ) -> None:
        """Test that loading and clearing notify the collaborator."""
        assert previews and previews[-1] is not None
        controller.clear()
        assert previews[-1] is None
