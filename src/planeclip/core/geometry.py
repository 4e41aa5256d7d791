"""Geometric primitives for the sweep-line and clipping engines.

This module provides core mathematical utilities for:
- Signed area calculation (shoelace formula)
- Three-point orientation
- Point-to-segment distance and nearest points
- Line segment intersection with collinear overlap handling
- Point location (winding number) against rings and polygons

All functions are pure and stateless. Every tolerance comes from the
PrecisionModel passed in, defaulting to the shared floating model.
"""

import math
from collections.abc import Iterator, Sequence

from planeclip.domain import Coordinate, Orientation, PrecisionModel, RelativeLocation


def _model(precision: PrecisionModel | None) -> PrecisionModel:
    return precision if precision is not None else PrecisionModel.default()


def distance(first: Coordinate, second: Coordinate) -> float:
    """Return the planar distance between two coordinates."""
    return math.hypot(first.x - second.x, first.y - second.y)


def midpoint(first: Coordinate, second: Coordinate) -> Coordinate:
    """Return the point halfway between two coordinates."""
    return Coordinate((first.x + second.x) / 2.0, (first.y + second.y) / 2.0)


def signed_area(ring: Sequence[Coordinate]) -> float:
    """Calculate signed area of a ring using the shoelace formula.

    The sign of the area indicates winding direction:
    - Positive area: counter-clockwise winding
    - Negative area: clockwise winding

    A repeated closing coordinate contributes nothing, so open and closed
    rings give the same result.

    Args:
        ring: Coordinates forming the boundary

    Returns:
        Signed area in square units. Returns 0.0 for degenerate rings.

    Examples:
        >>> square = [Coordinate(0, 0), Coordinate(1, 0), Coordinate(1, 1), Coordinate(0, 1)]
        >>> signed_area(square)
        1.0
        >>> signed_area(square[::-1])
        -1.0
    """
    n = len(ring)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += ring[i].x * ring[j].y
        area -= ring[j].x * ring[i].y

    return area / 2.0


def is_counter_clockwise(ring: Sequence[Coordinate]) -> bool:
    """Check whether a ring winds counter-clockwise."""
    return signed_area(ring) > 0.0


def is_closed(ring: Sequence[Coordinate]) -> bool:
    """Check whether a ring's first and last coordinates are equal."""
    return len(ring) > 1 and ring[0] == ring[-1]


def distinct_count(ring: Sequence[Coordinate]) -> int:
    """Count the distinct coordinates of a ring."""
    return len({(c.x, c.y) for c in ring})


def perimeter(ring: Sequence[Coordinate]) -> float:
    """Return the total length of a ring's edges."""
    return sum(distance(a, b) for a, b in ring_edges(ring))


def ring_edges(ring: Sequence[Coordinate]) -> Iterator[tuple[Coordinate, Coordinate]]:
    """Yield the edges of a ring, closing it if the input is open."""
    n = len(ring)
    if n < 2:
        return
    for i in range(n - 1):
        yield ring[i], ring[i + 1]
    if ring[0] != ring[-1]:
        yield ring[-1], ring[0]


def orientation(
    origin: Coordinate,
    first: Coordinate,
    second: Coordinate,
    precision: PrecisionModel | None = None,
) -> Orientation:
    """Determine the turn direction from origin via first to second.

    Args:
        origin: Common start point
        first: End of the first vector
        second: End of the second vector
        precision: Precision model supplying the collinearity tolerance

    Returns:
        COUNTER_CLOCKWISE for a left turn, CLOCKWISE for a right turn,
        COLLINEAR when second lies within tolerance of the line.
    """
    det = (first.x - origin.x) * (second.y - origin.y) - (first.y - origin.y) * (
        second.x - origin.x
    )
    length = max(distance(origin, first), distance(origin, second))
    if abs(det) <= _model(precision).tolerance(origin, first, second) * length:
        return Orientation.COLLINEAR
    return Orientation.COUNTER_CLOCKWISE if det > 0 else Orientation.CLOCKWISE


def nearest_point_on_segment(
    point: Coordinate, seg_start: Coordinate, seg_end: Coordinate
) -> tuple[Coordinate, float]:
    """Find the closest point on a line segment to a given point.

    Projects the point onto the infinite line, then clamps to the segment endpoints.

    Args:
        point: The point to project
        seg_start: Start point of line segment
        seg_end: End point of line segment

    Returns:
        Tuple of (nearest_point, distance)
    """
    dx = seg_end.x - seg_start.x
    dy = seg_end.y - seg_start.y

    segment_length_sq = dx * dx + dy * dy
    if segment_length_sq == 0.0:
        return seg_start, distance(point, seg_start)

    t = ((point.x - seg_start.x) * dx + (point.y - seg_start.y) * dy) / segment_length_sq
    if t <= 0.0:
        return seg_start, distance(point, seg_start)
    if t >= 1.0:
        return seg_end, distance(point, seg_end)

    nearest = Coordinate(seg_start.x + t * dx, seg_start.y + t * dy)
    return nearest, distance(point, nearest)


def distance_to_segment(point: Coordinate, seg_start: Coordinate, seg_end: Coordinate) -> float:
    """Return the distance from a point to the closest point of a segment."""
    return nearest_point_on_segment(point, seg_start, seg_end)[1]


def segment_intersection(
    a0: Coordinate,
    a1: Coordinate,
    b0: Coordinate,
    b1: Coordinate,
    precision: PrecisionModel | None = None,
) -> list[Coordinate]:
    """Find the intersection of two line segments.

    Endpoints lying on the other segment (within tolerance) are returned
    exactly as given, which keeps shared vertices bit-identical. Two or more
    such endpoints mean the segments overlap collinearly; the two ends of
    the overlap are returned. Otherwise a proper crossing is computed from
    the parametric line equations and snapped to the precision model.

    The segments are normalized before computing, so swapping the segments
    or reversing either of them gives the same result.

    Args:
        a0: First endpoint of segment A
        a1: Second endpoint of segment A
        b0: First endpoint of segment B
        b1: Second endpoint of segment B
        precision: Precision model for tolerance and snapping

    Returns:
        Zero, one or two coordinates, in lexicographic order

    Examples:
        >>> segment_intersection(Coordinate(0, 0), Coordinate(2, 2), Coordinate(0, 2), Coordinate(2, 0))
        [Coordinate(x=1.0, y=1.0, z=0.0)]
    """
    model = _model(precision)
    first = (a0, a1) if a0 <= a1 else (a1, a0)
    second = (b0, b1) if b0 <= b1 else (b1, b0)
    if second < first:
        first, second = second, first
    (p0, p1), (q0, q1) = first, second

    tol = model.tolerance(p0, p1, q0, q1)
    if (
        max(p0.x, p1.x) + tol < min(q0.x, q1.x)
        or max(q0.x, q1.x) + tol < min(p0.x, p1.x)
        or max(p0.y, p1.y) + tol < min(q0.y, q1.y)
        or max(q0.y, q1.y) + tol < min(p0.y, p1.y)
    ):
        return []

    touching: list[Coordinate] = []
    for point, start, end in ((p0, q0, q1), (p1, q0, q1), (q0, p0, p1), (q1, p0, p1)):
        if distance_to_segment(point, start, end) <= tol and not any(
            distance(point, seen) <= tol for seen in touching
        ):
            touching.append(point)

    if len(touching) >= 2:
        touching.sort()
        return [touching[0], touching[-1]]
    if touching:
        return touching

    dpx, dpy = p1.x - p0.x, p1.y - p0.y
    dqx, dqy = q1.x - q0.x, q1.y - q0.y
    denom = dpx * dqy - dpy * dqx
    if denom == 0.0:
        return []

    t = ((q0.x - p0.x) * dqy - (q0.y - p0.y) * dqx) / denom
    u = ((q0.x - p0.x) * dpy - (q0.y - p0.y) * dpx) / denom
    if not (0.0 <= t <= 1.0 and 0.0 <= u <= 1.0):
        return []

    return [model.snap(Coordinate(p0.x + t * dpx, p0.y + t * dpy))]


def locate(
    point: Coordinate,
    ring: Sequence[Coordinate],
    precision: PrecisionModel | None = None,
) -> RelativeLocation:
    """Locate a point relative to a ring using the winding number.

    Points within tolerance of an edge are on the BOUNDARY. Otherwise a
    nonzero winding number means INTERIOR.

    Args:
        point: The point to test
        ring: Open or closed ring

    Returns:
        RelativeLocation of the point
    """
    model = _model(precision)
    winding = 0
    for start, end in ring_edges(ring):
        if distance_to_segment(point, start, end) <= model.tolerance(point, start, end):
            return RelativeLocation.BOUNDARY

        cross = (end.x - start.x) * (point.y - start.y) - (point.x - start.x) * (end.y - start.y)
        if start.y <= point.y:
            if end.y > point.y and cross > 0:
                winding += 1
        elif end.y <= point.y and cross < 0:
            winding -= 1

    return RelativeLocation.INTERIOR if winding != 0 else RelativeLocation.EXTERIOR


def locate_in_polygon(
    point: Coordinate,
    shell: Sequence[Coordinate],
    holes: Sequence[Sequence[Coordinate]] = (),
    precision: PrecisionModel | None = None,
) -> RelativeLocation:
    """Locate a point relative to a polygon with holes.

    Args:
        point: The point to test
        shell: Outer boundary
        holes: Inner boundaries

    Returns:
        INTERIOR if inside the shell and outside every hole, BOUNDARY if on
        any ring, EXTERIOR otherwise
    """
    location = locate(point, shell, precision)
    if location is not RelativeLocation.INTERIOR:
        return location
    for hole in holes:
        hole_location = locate(point, hole, precision)
        if hole_location is RelativeLocation.BOUNDARY:
            return RelativeLocation.BOUNDARY
        if hole_location is RelativeLocation.INTERIOR:
            return RelativeLocation.EXTERIOR
    return RelativeLocation.INTERIOR


def ring_location(
    ring: Sequence[Coordinate],
    shell: Sequence[Coordinate],
    holes: Sequence[Sequence[Coordinate]] = (),
    precision: PrecisionModel | None = None,
) -> RelativeLocation:
    """Locate a ring that does not cross a polygon's boundary.

    The first vertex off the polygon boundary decides; if every vertex is on
    the boundary, edge midpoints are tried. A ring running entirely along
    the boundary is reported as BOUNDARY.
    """
    for c in ring:
        location = locate_in_polygon(c, shell, holes, precision)
        if location is not RelativeLocation.BOUNDARY:
            return location
    for start, end in ring_edges(ring):
        location = locate_in_polygon(midpoint(start, end), shell, holes, precision)
        if location is not RelativeLocation.BOUNDARY:
            return location
    return RelativeLocation.BOUNDARY


def is_ring_within(
    inner: Sequence[Coordinate],
    outer: Sequence[Coordinate],
    precision: PrecisionModel | None = None,
) -> bool:
    """Check whether a non-crossing ring lies inside another ring."""
    return ring_location(inner, outer, (), precision) is RelativeLocation.INTERIOR


def is_non_exterior(
    ring: Sequence[Coordinate],
    other: Sequence[Coordinate],
    precision: PrecisionModel | None = None,
) -> bool:
    """Check whether every vertex of a ring is inside or on another ring."""
    return all(locate(c, other, precision) is not RelativeLocation.EXTERIOR for c in ring)


def close_ring(ring: Sequence[Coordinate]) -> list[Coordinate]:
    """Return the ring as a list whose last coordinate repeats the first."""
    coordinates = list(ring)
    if coordinates and coordinates[0] != coordinates[-1]:
        coordinates.append(coordinates[0])
    return coordinates


def reverse_ring(ring: Sequence[Coordinate]) -> list[Coordinate]:
    """Return the ring with its winding direction reversed."""
    return list(reversed(ring))
