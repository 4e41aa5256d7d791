"""Exception hierarchy for planeclip."""


class PlaneclipError(Exception):
    """Base exception for all planeclip errors."""

    pass


class InvalidArgumentError(PlaneclipError, ValueError):
    """A required argument is missing or malformed."""

    pass


class MissingGeometryError(InvalidArgumentError):
    """A required polygon or ring was not supplied."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"The {name} geometry is missing")


class InvalidRingError(InvalidArgumentError):
    """A ring does not describe a usable boundary."""

    def __init__(self, name: str, role: str, reason: str) -> None:
        self.name = name
        self.role = role
        self.reason = reason
        super().__init__(f"Invalid {role} of the {name} polygon: {reason}")


class RingClosureError(InvalidRingError):
    """A ring's first and last coordinates differ."""

    def __init__(self, name: str, role: str) -> None:
        super().__init__(name, role, "the first and last coordinates are not equal")


class RingOrientationError(InvalidRingError):
    """A shell is not counter-clockwise or a hole is not clockwise."""

    def __init__(self, name: str, role: str, expected: str) -> None:
        self.expected = expected
        super().__init__(name, role, f"the ring must be oriented {expected}")


class UnsupportedGeometryError(PlaneclipError):
    """The input is valid but cannot be processed by the chosen algorithm."""

    pass


class SelfIntersectionError(UnsupportedGeometryError):
    """A shell or hole intersects or touches itself."""

    def __init__(self, name: str, role: str) -> None:
        self.name = name
        self.role = role
        super().__init__(
            f"The {role} of the {name} polygon is not simple; "
            "self-intersecting boundaries are not supported"
        )


class UnsupportedOperationError(PlaneclipError, TypeError):
    """The operation is not available on this object."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class GeometryError(PlaneclipError):
    """Errors in geometric calculations."""

    pass


class TraversalError(GeometryError):
    """A boundary walk could not be completed."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class GeometryFileError(PlaneclipError):
    """Errors related to reading or writing geometry files."""

    pass


class GeometryLoadError(GeometryFileError):
    """Error loading a geometry file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load geometry '{path}': {reason}")


class GeometrySaveError(GeometryFileError):
    """Error saving a geometry file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save geometry '{path}': {reason}")
