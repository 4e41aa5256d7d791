"""Geometry reader for loading GeoJSON and polygon JSON files.

This module provides the GeometryReader class for loading geometry files
and extracting rings and polygons into domain models.
"""

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from planeclip.domain import Coordinate, Polygon, as_ring
from planeclip.exceptions import GeometryLoadError, InvalidArgumentError

POLYGON_TYPES = ("Polygon", "MultiPolygon")
LINE_TYPES = ("LineString", "MultiLineString")


def _iter_geometries(data: Any) -> Iterator[tuple[str, Any]]:
    """Yield (type, coordinates) for every geometry in a GeoJSON object."""
    if not isinstance(data, dict):
        raise ValueError("expected a JSON object")

    kind = data.get("type")
    if kind is None and "shell" in data:
        yield "Polygon", [data["shell"], *data.get("holes", [])]
    elif kind == "FeatureCollection":
        for feature in data.get("features", []):
            yield from _iter_geometries(feature)
    elif kind == "Feature":
        if data.get("geometry") is not None:
            yield from _iter_geometries(data["geometry"])
    elif kind == "GeometryCollection":
        for geometry in data.get("geometries", []):
            yield from _iter_geometries(geometry)
    elif kind in POLYGON_TYPES or kind in LINE_TYPES:
        yield kind, data["coordinates"]
    elif kind in ("Point", "MultiPoint"):
        return
    else:
        raise ValueError(f"unsupported geometry type {kind!r}")


class GeometryReader:
    """Loads geometry files and extracts rings and polygons.

    Accepted formats:
    - GeoJSON Polygon, MultiPolygon, LineString and MultiLineString
      geometries, optionally wrapped in a Feature or FeatureCollection
    - Plain JSON objects of the form {"shell": [...], "holes": [...]}

    Example:
        with GeometryReader(Path("shapes.geojson")) as reader:
            for polygon in reader.polygons():
                print(polygon.area)
    """

    def __init__(self, path: Path) -> None:
        """Initialize the geometry reader.

        Args:
            path: Path to the JSON or GeoJSON file
        """
        self._path = path
        self._geometries: list[tuple[str, Any]] | None = None

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> None:
        """Load and parse the file.

        Raises:
            GeometryLoadError: If the file is missing, is not valid JSON, or
                holds an unsupported geometry
        """
        if not self._path.exists():
            raise GeometryLoadError(str(self._path), "file not found")

        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
            self._geometries = list(_iter_geometries(data))
        except (OSError, ValueError, KeyError, TypeError) as e:
            raise GeometryLoadError(str(self._path), str(e)) from e

    def _loaded(self) -> list[tuple[str, Any]]:
        if self._geometries is None:
            raise RuntimeError("Geometry not loaded. Call load() first.")
        return self._geometries

    @property
    def geometry_count(self) -> int:
        """Return the number of geometries found in the file."""
        return len(self._loaded())

    def polygons(self) -> list[Polygon]:
        """Return every polygon in the file.

        MultiPolygons contribute one Polygon per member. Line geometries
        are ignored.

        Raises:
            GeometryLoadError: If a polygon's coordinates are malformed
            RuntimeError: If the file has not been loaded yet
        """
        polygons: list[Polygon] = []
        try:
            for kind, coordinates in self._loaded():
                if kind == "Polygon":
                    polygons.append(Polygon.from_rings(coordinates[0], coordinates[1:]))
                elif kind == "MultiPolygon":
                    polygons.extend(Polygon.from_rings(p[0], p[1:]) for p in coordinates)
        except (IndexError, TypeError, InvalidArgumentError) as e:
            raise GeometryLoadError(str(self._path), f"malformed polygon: {e}") from e
        return polygons

    def rings(self) -> list[list[Coordinate]]:
        """Return every ring and line string in the file, in file order.

        Polygons contribute their shell followed by their holes.

        Raises:
            GeometryLoadError: If coordinates are malformed
            RuntimeError: If the file has not been loaded yet
        """
        rings: list[list[Coordinate]] = []
        try:
            for kind, coordinates in self._loaded():
                if kind == "LineString":
                    rings.append(as_ring(coordinates))
                elif kind in ("Polygon", "MultiLineString"):
                    rings.extend(as_ring(ring) for ring in coordinates)
                elif kind == "MultiPolygon":
                    rings.extend(as_ring(ring) for polygon in coordinates for ring in polygon)
        except (TypeError, InvalidArgumentError) as e:
            raise GeometryLoadError(str(self._path), f"malformed coordinates: {e}") from e
        return rings

    def close(self) -> None:
        """Release the parsed geometries."""
        self._geometries = None

    def __enter__(self) -> "GeometryReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
