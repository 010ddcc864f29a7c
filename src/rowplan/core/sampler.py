"""Point sampling along a line.

Points are placed along a line either every ``distance`` meters or so that
``count`` points cover the line, after trimming padding from both ends.
"""

import logging
import math
from dataclasses import dataclass

from rowplan.config import PointsForm, StartFrom
from rowplan.core.geodesy import along, line_length, slice_along
from rowplan.domain import GeoPoint, Line
from rowplan.exceptions import InvalidParametersError

logger = logging.getLogger(__name__)

# Slack on the walk so a point landing exactly on the end survives rounding
LENGTH_TOLERANCE_M = 1e-6


@dataclass(frozen=True)
class SampleOptions:
    """Sanitized sampling options.

    Attributes:
        distance_meters: Spacing between points (None = derive from count)
        count: Maximum number of points (None = unbounded)
        padding_start_meters: Meters trimmed from the start
        padding_end_meters: Meters trimmed from the end
        include_endpoint: Append the last point of the trimmed line
        start_from: Line end where sampling begins
    """

    distance_meters: float | None = None
    count: int | None = None
    padding_start_meters: float | None = None
    padding_end_meters: float | None = None
    include_endpoint: bool = False
    start_from: StartFrom = StartFrom.START

    @classmethod
    def from_form(cls, form: PointsForm) -> "SampleOptions":
        return cls(
            distance_meters=form.distance,
            count=form.count,
            padding_start_meters=form.padding_start,
            padding_end_meters=form.padding_end,
            include_endpoint=form.generate_end_point,
            start_from=form.start_generate,
        )

    def validate(self) -> None:
        """Check that a spacing was given.

        Raises:
            InvalidParametersError: If neither a positive distance nor count is set
        """
        has_distance = self.distance_meters is not None and self.distance_meters > 0
        has_count = self.count is not None and self.count > 0
        if not (has_distance or has_count):
            raise InvalidParametersError(
                "Enter either a number of points or a distance between them"
            )


def slice_with_padding(line: Line, padding_start: float | None, padding_end: float | None) -> Line:
    """Trim padding (meters) from both ends of a line."""
    length = line_length(line)
    return slice_along(line, padding_start or 0.0, length - (padding_end or 0.0))


def sample_along_line(line: Line, options: SampleOptions) -> list[GeoPoint]:
    """Generate points along a line.

    The line is trimmed by the padding, reversed when sampling starts from
    the end, then walked from distance 0 in steps of ``distance_meters`` (or
    ``length / count``) until the walk passes the end or ``count`` points
    exist. With ``include_endpoint`` the last point of the trimmed line is
    appended unless it is already the last generated point.

    Args:
        line: Line in geographic coordinates
        options: Sampling options

    Returns:
        Sampled points; empty for degenerate input

    Raises:
        InvalidParametersError: If neither distance nor count is set
    """
    options.validate()

    sliced = slice_with_padding(line, options.padding_start_meters, options.padding_end_meters)
    if options.start_from == StartFrom.END:
        sliced = sliced.reversed()

    if sliced.is_degenerate():
        logger.debug("Sliced line is empty, nothing to sample")
        return []

    total = line_length(sliced)
    if total <= 0:
        logger.debug("Sliced line has zero length, nothing to sample")
        return []

    count = options.count if options.count is not None and options.count > 0 else None
    if options.distance_meters is not None and options.distance_meters > 0:
        step = options.distance_meters
    else:
        step = total / (count or 1)
    limit = count if count is not None else math.inf

    end_point = sliced.points[-1]
    points: list[GeoPoint] = []
    i = 0
    current = 0.0
    while current <= total + LENGTH_TOLERANCE_M and len(points) < limit:
        points.append(along(sliced, current) or end_point)
        i += 1
        current = i * step

    if options.include_endpoint and (not points or points[-1] != end_point):
        points.append(end_point)

    return points
