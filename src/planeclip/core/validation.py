"""Eager input validation for the clipping engines.

Clipping inputs are checked before any sweep runs; a failure aborts the
operation and no partial output is produced.
"""

from collections.abc import Sequence
from typing import Any

from planeclip.core.geometry import distinct_count, is_closed, is_counter_clockwise, signed_area
from planeclip.core.shamos_hoey import is_simple
from planeclip.domain import Coordinate, Polygon, PrecisionModel, as_ring, is_coordinate_like
from planeclip.exceptions import (
    InvalidRingError,
    MissingGeometryError,
    RingClosureError,
    RingOrientationError,
    SelfIntersectionError,
)

SHELL = "shell"


def hole_role(index: int) -> str:
    return f"hole {index}"


def as_polygon(value: Any, name: str) -> Polygon:
    """Coerce a Polygon or a bare shell into a Polygon.

    Args:
        value: A Polygon, or a sequence of coordinate-like values
        name: Name of the argument for error messages

    Returns:
        Polygon instance

    Raises:
        MissingGeometryError: If the value is None or empty
    """
    if value is None:
        raise MissingGeometryError(name)
    if isinstance(value, Polygon):
        return value
    items = list(value)
    if not items:
        raise MissingGeometryError(name)
    if not is_coordinate_like(items[0]):
        raise InvalidRingError(name, SHELL, "expected a Polygon or a sequence of coordinates")
    return Polygon(shell=tuple(as_ring(items)))


def validate_ring(ring: Sequence[Coordinate] | None, name: str, role: str) -> None:
    """Validate one ring of a polygon.

    Args:
        ring: Ring to check
        name: Name of the polygon, used in error messages
        role: "shell" or "hole N"

    Raises:
        MissingGeometryError: If the ring is missing
        InvalidRingError: If a coordinate is undefined or the ring has fewer
            than 3 distinct coordinates
        RingClosureError: If the ring is not closed
        RingOrientationError: If a shell is not counter-clockwise or a
            hole is not clockwise
    """
    if ring is None:
        raise MissingGeometryError(f"{name} {role}")
    if not all(c.is_valid for c in ring):
        raise InvalidRingError(name, role, "undefined coordinate")
    if distinct_count(ring) < 3:
        raise InvalidRingError(name, role, "fewer than 3 distinct coordinates")
    if not is_closed(ring):
        raise RingClosureError(name, role)

    if role == SHELL:
        if not is_counter_clockwise(ring):
            raise RingOrientationError(name, role, "counter-clockwise")
    elif signed_area(ring) >= 0.0:
        raise RingOrientationError(name, role, "clockwise")


def validate_polygon(polygon: Polygon, name: str) -> None:
    """Validate the shell and every hole of a polygon."""
    validate_ring(polygon.shell, name, SHELL)
    for index, hole in enumerate(polygon.holes):
        validate_ring(hole, name, hole_role(index))


def ensure_simple(polygon: Polygon, name: str, precision: PrecisionModel | None = None) -> None:
    """Reject polygons whose shell or holes intersect or touch themselves.

    Raises:
        SelfIntersectionError: Naming the polygon and the offending ring
    """
    if not is_simple(polygon.shell, precision):
        raise SelfIntersectionError(name, SHELL)
    for index, hole in enumerate(polygon.holes):
        if not is_simple(hole, precision):
            raise SelfIntersectionError(name, hole_role(index))
