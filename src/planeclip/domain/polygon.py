"""Polygon and clip types.

This module defines the polygon-level types used by the clipping engines:
- Polygon: A shell ring plus zero or more hole rings
- Clip: A polygon produced by a clipping operation
- Orientation: Three-point turn direction
- RelativeLocation: Position of a point relative to a ring or polygon
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

from planeclip.domain.coordinate import Coordinate, Envelope, as_ring

Ring = tuple[Coordinate, ...]


class Orientation(Enum):
    """Turn direction of three points, or winding direction of a ring.

    Shells wind counter-clockwise and holes wind clockwise.
    """

    CLOCKWISE = auto()
    COUNTER_CLOCKWISE = auto()
    COLLINEAR = auto()


class RelativeLocation(Enum):
    """Location of a point relative to a ring or polygon."""

    INTERIOR = auto()
    BOUNDARY = auto()
    EXTERIOR = auto()


def _ring_area(ring: Sequence[Coordinate]) -> float:
    n = len(ring)
    if n < 3:
        return 0.0
    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += ring[i].x * ring[j].y
        area -= ring[j].x * ring[i].y
    return area / 2.0


@dataclass(frozen=True)
class Polygon:
    """A polygon made of one shell and zero or more holes.

    Rings are stored closed (first coordinate equal to the last). Shells
    are expected to wind counter-clockwise and holes clockwise; the
    clipping engines validate this.

    Attributes:
        shell: Outer boundary
        holes: Inner boundaries cut out of the shell
    """

    shell: Ring
    holes: tuple[Ring, ...] = field(default_factory=tuple)

    @classmethod
    def from_rings(
        cls,
        shell: Iterable[Any],
        holes: Iterable[Iterable[Any]] = (),
    ) -> "Polygon":
        """Build a polygon from plain coordinate sequences.

        Args:
            shell: Sequence of Coordinates or (x, y) tuples
            holes: Sequence of hole rings in the same form

        Returns:
            Polygon instance
        """
        return cls(
            shell=tuple(as_ring(shell)),
            holes=tuple(tuple(as_ring(hole)) for hole in holes),
        )

    @property
    def rings(self) -> list[Ring]:
        """Shell followed by the holes."""
        return [self.shell, *self.holes]

    @property
    def area(self) -> float:
        """Unsigned area of the shell minus the areas of the holes."""
        return abs(_ring_area(self.shell)) - sum(abs(_ring_area(h)) for h in self.holes)

    @property
    def envelope(self) -> Envelope:
        return Envelope.from_coordinates(self.shell)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with shell and holes as lists of [x, y] pairs
        """
        return {
            "shell": [list(c.to_tuple()) for c in self.shell],
            "holes": [[list(c.to_tuple()) for c in hole] for hole in self.holes],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Polygon":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with a shell and optional holes

        Returns:
            Polygon instance
        """
        return cls.from_rings(data["shell"], data.get("holes", ()))


@dataclass(frozen=True)
class Clip(Polygon):
    """A polygon produced by a clipping operation.

    The shell is closed and counter-clockwise; every hole is closed and
    clockwise.
    """
