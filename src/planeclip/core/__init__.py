"""Core algorithms for planeclip.

This module contains the core algorithms for:

- Geometry operations (signed area, orientation, point location, segment intersection)
- Sweep-line infrastructure (event queues, sweep status)
- Intersection reporting (Bentley–Ottmann) and detection (Shamos–Hoey)
- Polygon clipping (Greiner–Hormann, Weiler–Atherton)

All algorithms are designed to be:
- Single-use (each instance computes once and caches its result)
- Pure (no shared mutable state between instances)

Key functions:
- intersection: Report every intersection among rings
- intersects: Check whether any intersection exists
- is_simple: Check whether a ring is free of self-intersections
- clip: Compute the common parts of two polygons
- create_clipper: Build the configured clipping engine

Key classes:
- BentleyOttmannAlgorithm: Reports intersections with their edge pairs
- ShamosHoeyAlgorithm: Detects the existence of an intersection
- GreinerHormannAlgorithm: Clips polygons with recursive hole resolution
- WeilerAthertonAlgorithm: Clips polygons in a single graph pass
"""

from planeclip.core.bentley_ottmann import (
    BentleyOttmannAlgorithm,
    IntersectionResult,
    SweepStats,
    intersection,
)
from planeclip.core.clipping import create_clipper
from planeclip.core.events import Edge, EdgeSet, Event, EventQueue, EventType, PresortedEventQueue
from planeclip.core.geometry import (
    locate,
    locate_in_polygon,
    orientation,
    segment_intersection,
    signed_area,
)
from planeclip.core.greiner_hormann import ClipResult, GreinerHormannAlgorithm, clip
from planeclip.core.shamos_hoey import ShamosHoeyAlgorithm, intersects, is_simple
from planeclip.core.sweepline import SweepLine, SweepSegment
from planeclip.core.weiler_atherton import WeilerAthertonAlgorithm

__all__ = [
    # Geometry
    "locate",
    "locate_in_polygon",
    "orientation",
    "segment_intersection",
    "signed_area",
    # Sweep line
    "Edge",
    "EdgeSet",
    "Event",
    "EventQueue",
    "EventType",
    "PresortedEventQueue",
    "SweepLine",
    "SweepSegment",
    # Intersections
    "BentleyOttmannAlgorithm",
    "IntersectionResult",
    "ShamosHoeyAlgorithm",
    "SweepStats",
    "intersection",
    "intersects",
    "is_simple",
    # Clipping
    "ClipResult",
    "GreinerHormannAlgorithm",
    "WeilerAthertonAlgorithm",
    "clip",
    "create_clipper",
]
