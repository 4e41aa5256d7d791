"""Coordinate and envelope value types.

This module defines the fundamental value types used throughout planeclip:
- Coordinate: An immutable planar position with an optional z value
- Envelope: An axis-aligned bounding rectangle
"""

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from numbers import Real
from typing import Any

from planeclip.exceptions import InvalidArgumentError


@dataclass(frozen=True, slots=True, order=True)
class Coordinate:
    """A position in the plane.

    Immutable and hashable for use in sets/dicts. Ordering is lexicographic
    on (x, y, z), which is the order a left-to-right sweep visits positions.

    Attributes:
        x: X coordinate
        y: Y coordinate
        z: Z coordinate, carried along but ignored by planar algorithms
    """

    x: float
    y: float
    z: float = 0.0

    @classmethod
    def undefined(cls) -> "Coordinate":
        """Return the undefined coordinate sentinel."""
        return cls(math.nan, math.nan, math.nan)

    @property
    def is_valid(self) -> bool:
        """Whether both planar components are defined numbers."""
        return not (math.isnan(self.x) or math.isnan(self.y))

    def distance(self, other: "Coordinate") -> float:
        """Return the planar Euclidean distance to another coordinate."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with x, y, and z fields
        """
        return {"x": self.x, "y": self.y, "z": self.z}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Coordinate":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x, y, and optional z fields

        Returns:
            Coordinate instance
        """
        return cls(x=float(data["x"]), y=float(data["y"]), z=float(data.get("z", 0.0)))


def as_coordinate(value: Any) -> Coordinate:
    """Coerce a coordinate-like value into a Coordinate.

    Args:
        value: A Coordinate, or an (x, y) / (x, y, z) sequence of numbers

    Returns:
        Coordinate instance

    Raises:
        InvalidArgumentError: If the value cannot be read as a coordinate
    """
    if isinstance(value, Coordinate):
        return value
    if is_coordinate_like(value):
        return Coordinate(*(float(component) for component in value))
    raise InvalidArgumentError(f"Cannot interpret {value!r} as a coordinate")


def is_coordinate_like(value: Any) -> bool:
    """Check whether a value looks like a single coordinate."""
    if isinstance(value, Coordinate):
        return True
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        return False
    return 2 <= len(value) <= 3 and all(
        isinstance(component, Real) and not isinstance(component, bool)
        for component in value
    )


def as_ring(values: Iterable[Any]) -> list[Coordinate]:
    """Coerce a sequence of coordinate-like values into a list of Coordinates."""
    return [as_coordinate(value) for value in values]


@dataclass(frozen=True, slots=True)
class Envelope:
    """Axis-aligned bounding rectangle.

    Attributes:
        min_x: Smallest x value
        min_y: Smallest y value
        max_x: Largest x value
        max_y: Largest y value
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def from_coordinates(cls, coordinates: Iterable[Coordinate]) -> "Envelope":
        """Build the envelope of a set of coordinates.

        Raises:
            InvalidArgumentError: If no coordinates are given
        """
        points = list(coordinates)
        if not points:
            raise InvalidArgumentError("Cannot compute the envelope of no coordinates")
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        return cls(min(xs), min(ys), max(xs), max(ys))

    @classmethod
    def from_rings(cls, rings: Iterable[Iterable[Coordinate]]) -> "Envelope":
        """Build the envelope enclosing several rings."""
        return cls.from_coordinates(c for ring in rings for c in ring)

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def intersects(self, other: "Envelope", tolerance: float = 0.0) -> bool:
        """Check whether two envelopes overlap or touch.

        Args:
            other: Envelope to test against
            tolerance: Distance by which the envelopes may be apart and
                still count as touching

        Returns:
            True unless the envelopes are separated by more than tolerance
        """
        return not (
            other.min_x > self.max_x + tolerance
            or other.max_x < self.min_x - tolerance
            or other.min_y > self.max_y + tolerance
            or other.max_y < self.min_y - tolerance
        )

    def contains(self, coordinate: Coordinate) -> bool:
        """Check whether a coordinate lies inside or on the envelope."""
        return (
            self.min_x <= coordinate.x <= self.max_x
            and self.min_y <= coordinate.y <= self.max_y
        )

    def expand_to_include(self, other: "Envelope") -> "Envelope":
        """Return the smallest envelope covering both envelopes."""
        return Envelope(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y),
        )
