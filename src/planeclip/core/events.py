"""Sweep events and the event queues that order them.

The sweep visits positions left to right (x ascending, then y ascending).
Events at one position are ordered LEFT, RIGHT, INTERSECTION so that
coincident endpoint and intersection events are processed deterministically.

Key classes:
- Edge: One indexed source edge with its sweep geometry
- EdgeSet: The indexed edges of a set of source rings
- Event: A sweep event (segment endpoint or discovered intersection)
- EventQueue: Heap-based queue supporting insertion and de-duplication
- PresortedEventQueue: Queue sorted once, for existence-only sweeps
"""

import heapq
import math
from collections import Counter
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from enum import IntEnum

from planeclip.domain import Coordinate, PrecisionModel
from planeclip.exceptions import UnsupportedOperationError


@dataclass(frozen=True, slots=True)
class Edge:
    """An edge of a source ring, as seen by the sweep line.

    Attributes:
        index: Index of the edge's start coordinate in the concatenated
            coordinate list of all source rings
        ring: Index of the source ring
        rank: Position of the edge among its ring's non-degenerate edges
        start: Start coordinate in ring order
        end: End coordinate in ring order
    """

    index: int
    ring: int
    rank: int
    start: Coordinate
    end: Coordinate

    @property
    def left(self) -> Coordinate:
        """The lexicographically smaller endpoint."""
        return self.start if self.start <= self.end else self.end

    @property
    def right(self) -> Coordinate:
        """The lexicographically larger endpoint."""
        return self.end if self.start <= self.end else self.start

    @property
    def is_vertical(self) -> bool:
        return self.start.x == self.end.x

    @property
    def slope(self) -> float:
        """Slope dy/dx, +inf for vertical edges."""
        left, right = self.left, self.right
        if right.x == left.x:
            return math.inf
        return (right.y - left.y) / (right.x - left.x)

    def y_at(self, x: float, y: float) -> float:
        """Return the edge's y value where it meets the sweep position.

        Vertical edges report the sweep y clamped to their extent; other
        edges are interpolated and clamped to their endpoints.

        Args:
            x: Sweep x
            y: Sweep y, used only for vertical edges

        Returns:
            The y value of the edge on the sweep line
        """
        left, right = self.left, self.right
        low, high = min(left.y, right.y), max(left.y, right.y)
        if right.x == left.x:
            return min(max(y, low), high)
        if x <= left.x:
            return left.y
        if x >= right.x:
            return right.y
        value = left.y + (x - left.x) * (right.y - left.y) / (right.x - left.x)
        return min(max(value, low), high)


class EdgeSet:
    """The indexed edges of one or more source rings.

    Edge indices follow the position of each edge's start coordinate in the
    concatenation of all non-null rings, so the ring an edge came from can
    be recovered from the index alone. Null rings and rings with fewer than
    two coordinates contribute no edges; zero-length edges are skipped but
    still consume their index.

    Example:
        edges = EdgeSet([[(0, 0), (2, 2)], [(0, 2), (2, 0)]])
        edges[0].ring   # 0
        edges[2].ring   # 1
    """

    def __init__(
        self,
        rings: Sequence[Sequence[Coordinate] | None],
        precision: PrecisionModel | None = None,
    ) -> None:
        """Index the edges of the given rings.

        Args:
            rings: Source rings; None entries are treated as absent
            precision: Precision model used to detect zero-length edges
        """
        self._precision = precision or PrecisionModel.default()
        self._edges: dict[int, Edge] = {}
        self._ring_edge_counts: list[int] = []
        self._ring_closed: list[bool] = []

        offset = 0
        for ring_id, ring in enumerate(rings):
            if ring is None:
                self._ring_edge_counts.append(0)
                self._ring_closed.append(False)
                continue

            rank = 0
            for j in range(len(ring) - 1):
                start, end = ring[j], ring[j + 1]
                if self._precision.equals(start, end):
                    continue
                self._edges[offset + j] = Edge(offset + j, ring_id, rank, start, end)
                rank += 1

            self._ring_edge_counts.append(rank)
            self._ring_closed.append(len(ring) > 3 and ring[0] == ring[-1])
            offset += len(ring)

    @property
    def precision(self) -> PrecisionModel:
        return self._precision

    def __getitem__(self, index: int) -> Edge:
        return self._edges[index]

    def __contains__(self, index: object) -> bool:
        return index in self._edges

    def __iter__(self) -> Iterator[Edge]:
        return iter(self._edges.values())

    def __len__(self) -> int:
        return len(self._edges)

    def is_adjacent(self, first: int, second: int) -> bool:
        """Check whether two edges are consecutive in the same source ring.

        Consecutive edges share a declared vertex; for closed rings the last
        edge is also consecutive to the first.

        Args:
            first: Index of the first edge
            second: Index of the second edge

        Returns:
            True if the edges are neighbours along their ring
        """
        a = self._edges.get(first)
        b = self._edges.get(second)
        if a is None or b is None or a.ring != b.ring or a.index == b.index:
            return False

        diff = abs(a.rank - b.rank)
        if diff == 1:
            return True
        count = self._ring_edge_counts[a.ring]
        return self._ring_closed[a.ring] and count > 2 and diff == count - 1

    def shared_vertices(self, first: int, second: int) -> list[Coordinate]:
        """Return the declared vertices common to two edges."""
        a, b = self._edges[first], self._edges[second]
        return [
            c
            for c in (a.start, a.end)
            if self._precision.equals(c, b.start) or self._precision.equals(c, b.end)
        ]


class EventType(IntEnum):
    """Sweep event kind; the value is the tie-break rank at one position."""

    LEFT = 0
    RIGHT = 1
    INTERSECTION = 2


@dataclass(slots=True)
class Event:
    """A sweep event.

    Endpoint events carry the edge they belong to. Intersection events
    carry the edges below and above the crossing, and whether the event
    closes a collinear overlap.

    Attributes:
        position: Where the event happens
        type: Event kind
        edge: Edge index for LEFT/RIGHT events, -1 otherwise
        below: Lower edge index for INTERSECTION events
        above: Upper edge index for INTERSECTION events
        is_closing: Whether this is the far end of a collinear overlap
    """

    position: Coordinate
    type: EventType
    edge: int = -1
    below: int = -1
    above: int = -1
    is_closing: bool = field(default=False)

    @property
    def sort_key(self) -> tuple[float, float, int, int, int, int]:
        return (
            self.position.x,
            self.position.y,
            int(self.type),
            self.edge,
            self.below,
            self.above,
        )

    def same_position(self, other: "Event") -> bool:
        """Events at the same coordinate are equal for de-duplication."""
        return self.position.to_tuple() == other.position.to_tuple()


def endpoint_events(edges: Iterable[Edge]) -> list[Event]:
    """Create the LEFT and RIGHT events of the given edges."""
    events: list[Event] = []
    for edge in edges:
        events.append(Event(edge.left, EventType.LEFT, edge=edge.index))
        events.append(Event(edge.right, EventType.RIGHT, edge=edge.index))
    return events


class EventQueue:
    """Priority queue of sweep events.

    Events are popped in (x, y, type rank) order. ``contains`` answers
    whether an event at the same snapped position is still queued, which
    keeps the same crossing from being scheduled twice.
    """

    def __init__(self, precision: PrecisionModel | None = None) -> None:
        self._precision = precision or PrecisionModel.default()
        self._heap: list[tuple[tuple[float, float, int, int, int, int], int, Event]] = []
        self._positions: Counter[tuple[float, float]] = Counter()
        self._sequence = 0

    @classmethod
    def from_edges(
        cls, edges: Iterable[Edge], precision: PrecisionModel | None = None
    ) -> "EventQueue":
        """Create a queue holding the endpoint events of the given edges."""
        queue = cls(precision)
        for event in endpoint_events(edges):
            queue.insert(event)
        return queue

    def _key(self, position: Coordinate) -> tuple[float, float]:
        snapped = self._precision.snap(position)
        return (snapped.x, snapped.y)

    def insert(self, event: Event) -> None:
        """Add an event to the queue."""
        heapq.heappush(self._heap, (event.sort_key, self._sequence, event))
        self._sequence += 1
        self._positions[self._key(event.position)] += 1

    def peek(self) -> Event | None:
        """Return the next event without removing it."""
        return self._heap[0][2] if self._heap else None

    def pop(self) -> Event | None:
        """Remove and return the next event, or None when empty."""
        if not self._heap:
            return None
        event = heapq.heappop(self._heap)[2]
        key = self._key(event.position)
        self._positions[key] -= 1
        if self._positions[key] <= 0:
            del self._positions[key]
        return event

    def pop_group(self) -> list[Event]:
        """Pop the next event and every queued event at the same position.

        Positions within tolerance of the first popped event belong to the
        same group.
        """
        first = self.pop()
        if first is None:
            return []
        group = [first]
        origin = first.position
        while self._heap:
            candidate = self._heap[0][2].position
            if not self._precision.equals(origin, candidate):
                break
            event = self.pop()
            if event is not None:
                group.append(event)
        return group

    def contains(self, event: Event) -> bool:
        """Check whether an event at the same position is still queued."""
        return self._positions.get(self._key(event.position), 0) > 0

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)


class PresortedEventQueue:
    """Event queue sorted once at construction.

    Used by sweeps that never discover new events; inserting is not
    supported.
    """

    def __init__(
        self, events: Iterable[Event], precision: PrecisionModel | None = None
    ) -> None:
        self._precision = precision or PrecisionModel.default()
        self._events = sorted(events, key=lambda e: e.sort_key)
        self._cursor = 0

    @classmethod
    def from_edges(
        cls, edges: Iterable[Edge], precision: PrecisionModel | None = None
    ) -> "PresortedEventQueue":
        """Create a queue holding the endpoint events of the given edges."""
        return cls(endpoint_events(edges), precision)

    def insert(self, event: Event) -> None:
        raise UnsupportedOperationError("A presorted event queue does not accept new events")

    def peek(self) -> Event | None:
        if self._cursor < len(self._events):
            return self._events[self._cursor]
        return None

    def pop(self) -> Event | None:
        event = self.peek()
        if event is not None:
            self._cursor += 1
        return event

    def pop_group(self) -> list[Event]:
        """Pop the next event and every event within tolerance of it."""
        first = self.pop()
        if first is None:
            return []
        group = [first]
        while (candidate := self.peek()) is not None and self._precision.equals(
            first.position, candidate.position
        ):
            group.append(candidate)
            self._cursor += 1
        return group

    def contains(self, event: Event) -> bool:
        """Check whether an event at the same position is still pending."""
        return any(
            e.same_position(event) for e in self._events[self._cursor :]
        )

    def __len__(self) -> int:
        return len(self._events) - self._cursor

    def __bool__(self) -> bool:
        return self._cursor < len(self._events)
