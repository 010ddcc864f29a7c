"""Shared fixtures for rowplan tests."""

import math
from collections.abc import Callable

import pytest

from rowplan.core.geodesy import EARTH_RADIUS_M
from rowplan.domain import BoundingBox, GeoPoint, Line, Polygon, RowGridState


def meters_to_lon(meters: float) -> float:
    """Degrees of longitude spanning ``meters`` along the equator."""
    return math.degrees(meters / EARTH_RADIUS_M)


class ManualHandle:
    """Timer handle recorded by ManualScheduler."""

    def __init__(self, delay: float, callback: Callable[[], None]) -> None:
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler that only runs callbacks when told to."""

    def __init__(self) -> None:
        self.handles: list[ManualHandle] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle(delay, callback)
        self.handles.append(handle)
        return handle

    @property
    def scheduled(self) -> int:
        return len(self.handles)

    def run_all(self, ignore_cancel: bool = False) -> int:
        """Run queued callbacks in order.

        Args:
            ignore_cancel: Also run cancelled handles, like a timer that
                already fired before cancel() was called

        Returns:
            Number of callbacks run
        """
        queued, self.handles = self.handles, []
        ran = 0
        for handle in queued:
            if handle.cancelled and not ignore_cancel:
                continue
            handle.callback()
            ran += 1
        return ran


@pytest.fixture
def scheduler() -> ManualScheduler:
    """Create a manual scheduler."""
    return ManualScheduler()


@pytest.fixture
def hundred_meter_line() -> Line:
    """Create a 100 m line along the equator."""
    return Line(points=(GeoPoint(0.0, 0.0), GeoPoint(meters_to_lon(100.0), 0.0)))


@pytest.fixture
def unit_square() -> Polygon:
    """Create a closed 1x1 degree square polygon."""
    return Polygon.from_coords([[(0, 0), (1, 0), (1, 1), (0, 1), (0, 0)]])


@pytest.fixture
def small_field() -> Polygon:
    """Create an open ~1.1 km square field near the equator."""
    return Polygon.from_coords([[(0, 0), (0.01, 0), (0.01, 0.01), (0, 0.01)]])


@pytest.fixture
def box_state() -> RowGridState:
    """Create a preview state over a 10x10 box centred on (5, 5)."""
    return RowGridState(
        source_bbox=BoundingBox(0.0, 0.0, 10.0, 10.0).corners(),
        pivot=GeoPoint(5.0, 5.0),
        angle=0.0,
        step_meters=200_000.0,
        scale=1.0,
    )


@pytest.fixture
def lon_for_meters() -> Callable[[float], float]:
    """Provide the meters to equatorial longitude conversion."""
    return meters_to_lon
