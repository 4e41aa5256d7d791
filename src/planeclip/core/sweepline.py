"""Sweep status structure.

The sweep line holds the segments currently crossing a vertical line, in
bottom-to-top order at the current sweep position, in a
``sortedcontainers.SortedList``. Segments compare by their place at the
current position, so insertion, lookup and removal stay logarithmic.
Neighbour queries are answered from list positions on demand, so nothing
dangles when segments are removed or reordered.
"""

import math
from collections.abc import Iterator

from sortedcontainers import SortedList

from planeclip.core.events import Edge, EdgeSet, Event
from planeclip.core.geometry import segment_intersection
from planeclip.domain import Coordinate, PrecisionModel

BELOW = -1
THROUGH = 0
ABOVE = 1


class SweepSegment:
    """A live entry of the sweep line, wrapping one source edge."""

    __slots__ = ("edge", "line")

    def __init__(self, edge: Edge, line: "SweepLine | None" = None) -> None:
        self.edge = edge
        self.line = line

    @property
    def index(self) -> int:
        return self.edge.index

    @property
    def left(self) -> Coordinate:
        return self.edge.left

    @property
    def right(self) -> Coordinate:
        return self.edge.right

    @property
    def slope(self) -> float:
        return self.edge.slope

    def y_at(self, x: float, y: float) -> float:
        return self.edge.y_at(x, y)

    def __lt__(self, other: "SweepSegment") -> bool:
        line = self.line if self.line is not None else other.line
        if line is None:
            return self.index < other.index
        return line.order_key(self) < line.order_key(other)

    def __repr__(self) -> str:
        return f"SweepSegment({self.index}: {self.left.to_tuple()} -> {self.right.to_tuple()})"


class SweepLine:
    """Ordered sequence of the segments crossing the sweep line.

    Segments are ordered by their y value at the current sweep position.
    Segments passing within tolerance of the position are tied and ordered
    by slope (vertical last), then by edge index, which is their order just
    after the position.

    Between events the order of live segments never changes. At an event
    the segments through its position may still hold their order from
    before it; they are found by scanning that run, and the caller takes
    them off and puts them back.

    Example:
        status = SweepLine(edges)
        status.advance(event.position)
        segment = status.add(event)
        status.above(segment)
    """

    def __init__(self, edges: EdgeSet, precision: PrecisionModel | None = None) -> None:
        """Initialize an empty sweep line.

        Args:
            edges: Indexed source edges the events refer to
            precision: Precision model for tie detection
        """
        self._edges = edges
        self._precision = precision or edges.precision
        self._segments: SortedList = SortedList()
        self._by_edge: dict[int, SweepSegment] = {}
        self._position = Coordinate(-math.inf, -math.inf)
        self._tolerance = 0.0

    @property
    def position(self) -> Coordinate:
        """Current sweep position."""
        return self._position

    def advance(self, position: Coordinate) -> None:
        """Move the sweep line to a new event position."""
        self._position = position
        self._tolerance = self._precision.tolerance(position)

    def _band(self, segment: SweepSegment) -> int:
        y = segment.y_at(self._position.x, self._position.y)
        if y < self._position.y - self._tolerance:
            return BELOW
        if y > self._position.y + self._tolerance:
            return ABOVE
        return THROUGH

    def order_key(self, segment: SweepSegment) -> tuple[int, float, float, int]:
        """Sort key of a segment at the current sweep position."""
        band = self._band(segment)
        y = 0.0 if band == THROUGH else segment.y_at(self._position.x, self._position.y)
        return (band, y, segment.slope, segment.index)

    def add(self, event: Event) -> SweepSegment:
        """Insert the segment of a LEFT event.

        Args:
            event: Endpoint event whose edge enters the sweep line

        Returns:
            The inserted segment
        """
        segment = SweepSegment(self._edges[event.edge], self)
        self.insert(segment)
        return segment

    def insert(self, segment: SweepSegment) -> None:
        """Insert a segment at its position for the current sweep position."""
        segment.line = self
        self._segments.add(segment)
        self._by_edge[segment.index] = segment

    def search(self, event: Event) -> SweepSegment | None:
        """Find the live segment of an endpoint event."""
        return self._by_edge.get(event.edge)

    def segment(self, edge_index: int) -> SweepSegment | None:
        """Find the live segment of an edge index."""
        return self._by_edge.get(edge_index)

    def _index(self, segment: SweepSegment) -> int:
        if self._band(segment) == THROUGH:
            low, high = self._through_range()
            candidates = range(low, high)
        else:
            # segments within tolerance of each other may hold either order
            start = self._segments.bisect_left(segment)
            y = segment.y_at(self._position.x, self._position.y)
            candidates = self._near(start, y)
        for i in candidates:
            if self._segments[i] is segment:
                return i
        raise ValueError(f"{segment!r} is not on the sweep line")

    def _near(self, start: int, y: float) -> Iterator[int]:
        x, sweep_y = self._position.x, self._position.y
        for i in range(start, len(self._segments)):
            yield i
            if self._segments[i].y_at(x, sweep_y) > y + self._tolerance:
                break
        for i in range(start - 1, -1, -1):
            yield i
            if self._segments[i].y_at(x, sweep_y) < y - self._tolerance:
                break

    def remove(self, segment: SweepSegment) -> None:
        """Remove a segment from the sweep line."""
        del self._segments[self._index(segment)]
        del self._by_edge[segment.index]

    def above(self, segment: SweepSegment) -> SweepSegment | None:
        """Return the segment directly above, if any."""
        index = self._index(segment) + 1
        return self._segments[index] if index < len(self._segments) else None

    def below(self, segment: SweepSegment) -> SweepSegment | None:
        """Return the segment directly below, if any."""
        index = self._index(segment) - 1
        return self._segments[index] if index >= 0 else None

    def _bisect_band(self, band: int, right: bool) -> int:
        low, high = 0, len(self._segments)
        while low < high:
            mid = (low + high) // 2
            value = self._band(self._segments[mid])
            if value < band or (right and value == band):
                low = mid + 1
            else:
                high = mid
        return low

    def _through_range(self) -> tuple[int, int]:
        return self._bisect_band(THROUGH, False), self._bisect_band(THROUGH, True)

    def through(self, position: Coordinate | None = None) -> list[SweepSegment]:
        """Return the segments passing through a position.

        Args:
            position: Position to test; defaults to the current sweep position

        Returns:
            The contiguous run of segments within tolerance of the position,
            bottom to top
        """
        if position is not None:
            self.advance(position)
        low, high = self._through_range()
        return self._segments[low:high]

    def neighbors_at(
        self, position: Coordinate | None = None
    ) -> tuple[SweepSegment | None, SweepSegment | None]:
        """Return the segments directly below and above a position."""
        if position is not None:
            self.advance(position)
        low, high = self._through_range()
        below = self._segments[low - 1] if low > 0 else None
        above = self._segments[high] if high < len(self._segments) else None
        return below, above

    def is_adjacent(self, first: int, second: int) -> bool:
        """Check whether two edges are consecutive in their source ring."""
        return self._edges.is_adjacent(first, second)

    def crossing_points(self, first: SweepSegment, second: SweepSegment) -> list[Coordinate]:
        """Return the points where two segments meet, ignoring shared vertices.

        Consecutive edges of a ring always meet at their shared declared
        vertex; that contact is not a crossing and is dropped. Any other
        contact, such as a ring doubling back on itself, is kept.
        """
        a, b = first.edge, second.edge
        points = segment_intersection(a.start, a.end, b.start, b.end, self._precision)
        if points and self.is_adjacent(a.index, b.index):
            shared = self._edges.shared_vertices(a.index, b.index)
            points = [
                p for p in points if not any(self._precision.equals(p, s) for s in shared)
            ]
        return points

    def __contains__(self, segment: object) -> bool:
        return isinstance(segment, SweepSegment) and self._by_edge.get(segment.index) is segment

    def __iter__(self) -> Iterator[SweepSegment]:
        return iter(list(self._segments))

    def __len__(self) -> int:
        return len(self._segments)
