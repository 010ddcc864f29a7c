"""Conversion between GeoJSON geometry objects and domain shapes."""

from typing import Any

from rowplan.domain import GeoPoint, Line, MultiPolygon, PointShape, Polygon, Shape


def geojson_to_shape(geometry: dict[str, Any]) -> Shape:
    """Convert a GeoJSON geometry object to a domain shape.

    Args:
        geometry: GeoJSON geometry (Point, LineString, Polygon, MultiPolygon)

    Returns:
        Matching domain shape

    Raises:
        ValueError: If the geometry type is unsupported or malformed
    """
    if not isinstance(geometry, dict):
        raise ValueError("Geometry must be an object")
    kind = geometry.get("type")
    coords = geometry.get("coordinates")
    if coords is None:
        raise ValueError(f"Geometry of type {kind!r} has no coordinates")

    try:
        if kind == "Point":
            return PointShape(point=GeoPoint.from_sequence(coords))
        if kind == "LineString":
            return Line.from_coords(coords)
        if kind == "Polygon":
            return Polygon.from_coords(coords)
        if kind == "MultiPolygon":
            return MultiPolygon.from_coords(coords)
    except (IndexError, TypeError) as e:
        raise ValueError(f"Malformed {kind} coordinates: {e}") from e
    raise ValueError(f"Unsupported geometry type: {kind!r}")


def shape_to_geojson(shape: Shape) -> dict[str, Any]:
    """Convert a domain shape to a GeoJSON geometry object."""
    if isinstance(shape, PointShape):
        return {"type": "Point", "coordinates": shape.point.to_list()}
    return {"type": shape.kind, "coordinates": shape.to_coords()}
