"""Exception hierarchy for Rowplan."""


class RowPlanError(Exception):
    """Base exception for all Rowplan errors."""

    pass


class ParameterError(RowPlanError):
    """Errors related to user supplied parameters."""

    pass


class InvalidParametersError(ParameterError):
    """Parameters do not describe a runnable operation."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class GeometryError(RowPlanError):
    """Errors related to the selected geometry."""

    pass


class NoValidContourError(GeometryError):
    """Polygon has no ring usable as a contour."""

    def __init__(self, reason: str = "No valid contours") -> None:
        self.reason = reason
        super().__init__(reason)


class UnsupportedGeometryError(GeometryError):
    """Geometry type is not supported by the requested operation."""

    def __init__(self, kind: str, expected: str) -> None:
        self.kind = kind
        self.expected = expected
        super().__init__(f"Expected {expected} geometry, got {kind}")


class GestureError(RowPlanError):
    """Errors related to interactive gestures."""

    pass


class NoActiveGestureError(GestureError):
    """Gesture call made without a live row preview."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Cannot {operation}: no row preview is active")


class InputError(RowPlanError):
    """Errors related to reading input geometry files."""

    pass


class GeoJSONLoadError(InputError):
    """Error loading a GeoJSON file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load GeoJSON '{path}': {reason}")
