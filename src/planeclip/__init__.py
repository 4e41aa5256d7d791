"""Planeclip - Sweep-line intersections and polygon clipping in the plane.

Planeclip reports the intersections of line strings and polygon rings with
the Bentley–Ottmann sweep, detects them with the Shamos–Hoey sweep, and
clips polygons with holes using the Greiner–Hormann or Weiler–Atherton
method. All comparisons go through a configurable precision model.

Example:
    $ planeclip clip first.geojson second.geojson

This will create first-clips.geojson with the internal and external clips
of the two polygons.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
