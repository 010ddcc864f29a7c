"""Rowplan - Derive secondary geometry from selected map features.

Rowplan takes a line or polygon selected on a map and generates:

- Points spaced along a line (fixed distance or fixed count, with padding)
- Parallel rows clipped to a polygon, with an interactive rotate/move/scale
  preview driven by pointer gestures

Example:
    $ rowplan rows field.geojson --step 5 --angle 30

This prints a GeoJSON FeatureCollection with one LineString per row segment.
"""

__version__ = "0.1.0"
__author__ = "Rowplan contributors"

__all__ = ["__author__", "__version__"]
