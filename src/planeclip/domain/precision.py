"""Precision model for coordinate comparison and rounding.

Every geometric comparison in planeclip is routed through a PrecisionModel
instead of a hard-coded epsilon, so callers can trade accuracy for
robustness by choosing a coarser model.
"""

import math
import struct
from enum import Enum

from planeclip.domain.coordinate import Coordinate
from planeclip.exceptions import InvalidArgumentError

FLOATING_RELATIVE_TOLERANCE = 1e-10
FLOATING_SINGLE_RELATIVE_TOLERANCE = 1e-6


class PrecisionModelType(str, Enum):
    """Kind of precision model."""

    FLOATING = "floating"
    FLOATING_SINGLE = "floating_single"
    FIXED = "fixed"


class PrecisionModel:
    """Rounding and tolerance rules for coordinates.

    Three kinds of model are supported:
    - FLOATING: full double precision, relative tolerance of 1e-10
    - FLOATING_SINGLE: values rounded to single precision, relative
      tolerance of 1e-6
    - FIXED: values rounded to a grid of size ``scale``, tolerance of half
      a grid cell

    Example:
        >>> model = PrecisionModel.fixed(0.5)
        >>> model.make_precise(1.3)
        1.5
    """

    __slots__ = ("_model_type", "_scale")

    def __init__(
        self,
        model_type: PrecisionModelType = PrecisionModelType.FLOATING,
        scale: float | None = None,
    ) -> None:
        """Initialize the precision model.

        Args:
            model_type: Kind of model
            scale: Grid size for FIXED models (defaults to 1.0)

        Raises:
            InvalidArgumentError: If a FIXED model is given a non-positive scale
        """
        self._model_type = PrecisionModelType(model_type)
        if self._model_type is PrecisionModelType.FIXED:
            if scale is None:
                scale = 1.0
            if not scale > 0:
                raise InvalidArgumentError(f"The scale must be greater than 0, got {scale}")
            self._scale = float(scale)
        else:
            self._scale = 0.0

    @classmethod
    def floating(cls) -> "PrecisionModel":
        return cls(PrecisionModelType.FLOATING)

    @classmethod
    def floating_single(cls) -> "PrecisionModel":
        return cls(PrecisionModelType.FLOATING_SINGLE)

    @classmethod
    def fixed(cls, scale: float = 1.0) -> "PrecisionModel":
        return cls(PrecisionModelType.FIXED, scale)

    @classmethod
    def default(cls) -> "PrecisionModel":
        """Return the shared default (floating) precision model."""
        return _DEFAULT

    @property
    def model_type(self) -> PrecisionModelType:
        return self._model_type

    @property
    def scale(self) -> float:
        """Grid size of a FIXED model, 0.0 otherwise."""
        return self._scale

    @property
    def is_floating(self) -> bool:
        return self._model_type is not PrecisionModelType.FIXED

    @property
    def maximum_significant_digits(self) -> int:
        """Maximum number of significant digits the model can represent."""
        if self._model_type is PrecisionModelType.FLOATING_SINGLE:
            return 6
        if self._model_type is PrecisionModelType.FIXED:
            return 1 + max(0, math.ceil(math.log10(self._scale)))
        return 16

    def make_precise(self, value: float) -> float:
        """Round a value to match the precision model.

        Args:
            value: Value to round

        Returns:
            The precise value (NaN is returned unchanged)
        """
        if math.isnan(value):
            return value
        if self._model_type is PrecisionModelType.FLOATING_SINGLE:
            return struct.unpack("f", struct.pack("f", value))[0]
        if self._model_type is PrecisionModelType.FIXED:
            return round(value / self._scale) * self._scale
        return value

    def snap(self, coordinate: Coordinate) -> Coordinate:
        """Round every component of a coordinate to the model."""
        if self._model_type is PrecisionModelType.FLOATING:
            return coordinate
        return Coordinate(
            self.make_precise(coordinate.x),
            self.make_precise(coordinate.y),
            self.make_precise(coordinate.z),
        )

    def tolerance(self, *coordinates: Coordinate) -> float:
        """Return the comparison tolerance for a set of coordinates.

        Floating models scale their tolerance with the magnitude of the
        coordinates involved; fixed models use half a grid cell.

        Args:
            *coordinates: Coordinates taking part in the comparison

        Returns:
            Non-negative distance below which values are considered equal
        """
        if self._model_type is PrecisionModelType.FIXED:
            return self._scale / 2.0

        magnitude = 1.0
        for c in coordinates:
            magnitude = max(magnitude, abs(c.x), abs(c.y))
        if self._model_type is PrecisionModelType.FLOATING_SINGLE:
            return FLOATING_SINGLE_RELATIVE_TOLERANCE * magnitude
        return FLOATING_RELATIVE_TOLERANCE * magnitude

    def equals(self, first: Coordinate, second: Coordinate) -> bool:
        """Check whether two coordinates are equal within tolerance."""
        if first == second:
            return True
        return first.distance(second) <= self.tolerance(first, second)

    @staticmethod
    def least_precise(*models: "PrecisionModel") -> "PrecisionModel":
        """Return the coarsest of the given models."""
        if not models:
            return _DEFAULT
        return max(models, key=_coarseness)

    @staticmethod
    def most_precise(*models: "PrecisionModel") -> "PrecisionModel":
        """Return the finest of the given models."""
        if not models:
            return _DEFAULT
        return min(models, key=_coarseness)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PrecisionModel):
            return NotImplemented
        return self._model_type is other._model_type and self._scale == other._scale

    def __hash__(self) -> int:
        return hash((self._model_type, self._scale))

    def __repr__(self) -> str:
        if self._model_type is PrecisionModelType.FIXED:
            return f"PrecisionModel(fixed, scale={self._scale})"
        return f"PrecisionModel({self._model_type.value})"


def _coarseness(model: PrecisionModel) -> tuple[int, float]:
    if model.model_type is PrecisionModelType.FIXED:
        return (2, model.scale)
    if model.model_type is PrecisionModelType.FLOATING_SINGLE:
        return (1, 0.0)
    return (0, 0.0)


_DEFAULT = PrecisionModel()
