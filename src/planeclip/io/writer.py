"""Geometry writer for saving results as GeoJSON.

This module provides the GeometryWriter class for writing clipping and
intersection results as GeoJSON FeatureCollections.
"""

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from planeclip.core.greiner_hormann import ClipResult
from planeclip.domain import Clip, Coordinate
from planeclip.exceptions import GeometrySaveError


def _position(coordinate: Coordinate, digits: int | None) -> list[float]:
    if digits is None:
        return [coordinate.x, coordinate.y]
    return [round(coordinate.x, digits), round(coordinate.y, digits)]


def clip_to_feature(clip: Clip, kind: str, index: int, digits: int | None = None) -> dict[str, Any]:
    """Convert a clip to a GeoJSON Polygon feature.

    Args:
        clip: Clip to convert
        kind: Result kind ("internal", "external_a" or "external_b")
        index: Position of the clip within its kind
        digits: Decimal places to round coordinates to (None = as computed)

    Returns:
        GeoJSON Feature dictionary
    """
    return {
        "type": "Feature",
        "properties": {"kind": kind, "index": index, "area": clip.area},
        "geometry": {
            "type": "Polygon",
            "coordinates": [[_position(c, digits) for c in ring] for ring in clip.rings],
        },
    }


class GeometryWriter:
    """Writes results as GeoJSON FeatureCollections.

    Example:
        writer = GeometryWriter(Path("clips.geojson"))
        writer.write_clips(algorithm.compute())
    """

    def __init__(
        self,
        output_path: Path,
        indent: int | None = 2,
        precision_digits: int | None = None,
    ) -> None:
        """Initialize the geometry writer.

        Args:
            output_path: Path where the GeoJSON will be saved
            indent: JSON indentation (None = compact)
            precision_digits: Decimal places to round coordinates to
        """
        self._output_path = output_path
        self._indent = indent
        self._digits = precision_digits

    @property
    def output_path(self) -> Path:
        return self._output_path

    def write_clips(self, result: ClipResult) -> int:
        """Write the clips of a clipping operation.

        Each feature carries its result kind in ``properties.kind``.

        Returns:
            Number of features written

        Raises:
            GeometrySaveError: If the file cannot be written
        """
        features: list[dict[str, Any]] = []
        for kind, clips in (
            ("internal", result.internal),
            ("external_a", result.external_a),
            ("external_b", result.external_b),
        ):
            features.extend(clip_to_feature(clip, kind, i, self._digits) for i, clip in enumerate(clips))
        self._save(features)
        return len(features)

    def write_intersections(
        self,
        points: Sequence[Coordinate],
        edges: Sequence[tuple[int, int]],
    ) -> int:
        """Write intersection points with the edge pair of each.

        Returns:
            Number of features written

        Raises:
            GeometrySaveError: If the file cannot be written
        """
        features = [
            {
                "type": "Feature",
                "properties": {"edges": list(pair)},
                "geometry": {"type": "Point", "coordinates": _position(point, self._digits)},
            }
            for point, pair in zip(points, edges)
        ]
        self._save(features)
        return len(features)

    def _save(self, features: list[dict[str, Any]]) -> None:
        collection = {"type": "FeatureCollection", "features": features}
        try:
            self._output_path.write_text(json.dumps(collection, indent=self._indent), encoding="utf-8")
        except OSError as e:
            raise GeometrySaveError(str(self._output_path), str(e)) from e

    @staticmethod
    def get_output_path(input_path: Path, suffix: str) -> Path:
        """Generate an output path next to the input.

        Converts: shapes.geojson -> shapes-clips.geojson
                  lines.json -> lines-intersections.geojson

        Args:
            input_path: Original input file path
            suffix: Name suffix describing the result

        Returns:
            Path with the suffix before a .geojson extension
        """
        return input_path.parent / f"{input_path.stem}-{suffix}.geojson"
