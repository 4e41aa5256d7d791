"""Domain models for planeclip.

This module contains the value types shared by the sweep-line engines and
the clipping engines. All models are designed to be:

- Immutable (using frozen dataclasses)
- Compared by value
- Independent of any algorithm's internal state

Key classes:
- Coordinate: A planar position with a validity sentinel
- Envelope: Axis-aligned bounding rectangle
- PrecisionModel: Tolerance and rounding rules
- Polygon: Shell plus holes
- Clip: A polygon returned by a clipping operation
"""

from planeclip.domain.coordinate import (
    Coordinate,
    Envelope,
    as_coordinate,
    as_ring,
    is_coordinate_like,
)
from planeclip.domain.polygon import Clip, Orientation, Polygon, RelativeLocation, Ring
from planeclip.domain.precision import PrecisionModel, PrecisionModelType

__all__: list[str] = [
    # Enums
    "Orientation",
    "PrecisionModelType",
    "RelativeLocation",
    # Core types
    "Clip",
    "Coordinate",
    "Envelope",
    "Polygon",
    "PrecisionModel",
    "Ring",
    # Helpers
    "as_coordinate",
    "as_ring",
    "is_coordinate_like",
]
