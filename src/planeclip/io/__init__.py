"""Geometry I/O layer for planeclip.

This module handles reading and writing geometry files. It provides a
thin layer between JSON documents and the domain models.

Key responsibilities:
- Load GeoJSON and plain polygon JSON
- Convert coordinates to domain models
- Write clips and intersections as GeoJSON FeatureCollections

Key classes:
- GeometryReader: Load rings and polygons
- GeometryWriter: Save results
"""

from planeclip.io.reader import GeometryReader
from planeclip.io.writer import GeometryWriter

__all__ = [
    "GeometryReader",
    "GeometryWriter",
]
