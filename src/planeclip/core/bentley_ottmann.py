"""Bentley–Ottmann sweep for reporting segment intersections.

The sweep visits event positions left to right. At every position it
processes all events there as one group:

1. Segments ending at the position or passing through it are taken off
   the sweep line.
2. Segments starting there are inserted, and passing segments are put
   back in their new order.
3. Every non-adjacent pair meeting at the position is reported.
4. Only the new outermost segments are tested against their neighbours;
   crossings strictly after the position are scheduled once.
5. The far end of a collinear overlap opening at the position is queued
   as a closing event, which reports the pair when the sweep reaches it.

Reports are tagged with the (min, max) pair of source edge indices.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

import structlog

from planeclip.core.events import EdgeSet, Event, EventQueue, EventType
from planeclip.core.sweepline import SweepLine, SweepSegment
from planeclip.domain import Coordinate, PrecisionModel, as_ring, is_coordinate_like
from planeclip.exceptions import InvalidArgumentError

logger = structlog.get_logger(__name__)


def as_rings(source: Any) -> list[list[Coordinate] | None]:
    """Normalize a sweep source into a list of rings.

    Args:
        source: One ring (a sequence of coordinate-like values) or a
            sequence of rings; None entries stay None

    Returns:
        List of rings of Coordinates

    Raises:
        InvalidArgumentError: If the source itself is None or a coordinate
            is undefined
    """
    if source is None:
        raise InvalidArgumentError("The source is missing")

    items = list(source)
    if not items:
        return []
    if is_coordinate_like(items[0]):
        rings = [as_ring(items)]
    else:
        rings = [None if ring is None else as_ring(ring) for ring in items]

    for index, ring in enumerate(rings):
        if ring is not None and not all(c.is_valid for c in ring):
            raise InvalidArgumentError(f"Ring {index} has an undefined coordinate")
    return rings


@dataclass
class SweepStats:
    """Counters collected during one sweep."""

    endpoint_events: int = 0
    intersection_events: int = 0
    event_groups: int = 0
    neighbor_tests: int = 0
    scheduled_intersections: int = 0
    closing_events: int = 0


@dataclass(frozen=True)
class IntersectionResult:
    """Outcome of a Bentley–Ottmann sweep.

    Attributes:
        intersections: Intersection coordinates in sweep order
        edge_indices: (min, max) source edge pair of each intersection
        stats: Sweep counters
    """

    intersections: tuple[Coordinate, ...]
    edge_indices: tuple[tuple[int, int], ...]
    stats: SweepStats


class _Sweep:
    """State of one Bentley–Ottmann run."""

    def __init__(self, rings: Sequence[Sequence[Coordinate] | None], precision: PrecisionModel):
        self.precision = precision
        self.edges = EdgeSet(rings, precision)
        self.queue = EventQueue.from_edges(self.edges, precision)
        self.status = SweepLine(self.edges, precision)
        self.stats = SweepStats()
        self.points: list[Coordinate] = []
        self.pairs: list[tuple[int, int]] = []
        self._reported: dict[tuple[int, int], list[Coordinate]] = {}
        self._closing: set[tuple[int, int]] = set()

    def run(self) -> IntersectionResult:
        while self.queue:
            self._process(self.queue.pop_group())
        return IntersectionResult(tuple(self.points), tuple(self.pairs), self.stats)

    def _process(self, group: list[Event]) -> None:
        position = group[0].position
        self.stats.event_groups += 1
        for event in group:
            if event.type is EventType.INTERSECTION:
                self.stats.intersection_events += 1
            else:
                self.stats.endpoint_events += 1
        self.status.advance(position)

        for event in group:
            if event.type is EventType.INTERSECTION and event.is_closing:
                self.stats.closing_events += 1
                below = self.status.segment(event.below)
                above = self.status.segment(event.above)
                if below is not None and above is not None:
                    self._report_pair(below, above, position)

        ending: list[SweepSegment] = []
        for event in group:
            if event.type is EventType.RIGHT:
                segment = self.status.search(event)
                if segment is not None and segment not in ending:
                    ending.append(segment)

        passing: list[SweepSegment] = []
        for segment in self.status.through():
            if segment in ending:
                continue
            if self.precision.equals(segment.right, position):
                ending.append(segment)
            else:
                passing.append(segment)

        for segment in ending + passing:
            self.status.remove(segment)
        starting = [
            self.status.add(e)
            for e in group
            if e.type is EventType.LEFT and self.status.segment(e.edge) is None
        ]
        for segment in passing:
            self.status.insert(segment)

        self._report_all(ending + passing + starting, position)
        self._schedule_closing(passing + starting, position)

        block = self.status.through() if starting or passing else []
        if not block:
            below, above = self.status.neighbors_at()
            if below is not None and above is not None:
                self._schedule(below, above, position)
            return

        lowest, highest = block[0], block[-1]
        below = self.status.below(lowest)
        if below is not None:
            self._schedule(below, lowest, position)
        above = self.status.above(highest)
        if above is not None:
            self._schedule(highest, above, position)

    def _report_all(self, segments: Iterable[SweepSegment], position: Coordinate) -> None:
        ordered = sorted(segments, key=lambda s: s.index)
        for i, first in enumerate(ordered):
            for second in ordered[i + 1 :]:
                self._report_pair(first, second, position)

    def _report_pair(self, first: SweepSegment, second: SweepSegment, position: Coordinate) -> None:
        for point in self.status.crossing_points(first, second):
            if not self.precision.equals(point, position):
                continue
            pair = (min(first.index, second.index), max(first.index, second.index))
            seen = self._reported.setdefault(pair, [])
            if any(self.precision.equals(point, other) for other in seen):
                continue
            seen.append(point)
            self.points.append(point)
            self.pairs.append(pair)

    def _schedule(self, below: SweepSegment, above: SweepSegment, position: Coordinate) -> None:
        self.stats.neighbor_tests += 1
        # the far end of an overlap is queued once the overlap opens
        for point in self.status.crossing_points(below, above)[:1]:
            if self.precision.equals(point, position) or point.to_tuple() <= position.to_tuple():
                continue
            event = Event(point, EventType.INTERSECTION, below=below.index, above=above.index)
            if not self.queue.contains(event):
                self.queue.insert(event)
                self.stats.scheduled_intersections += 1

    def _schedule_closing(self, segments: Sequence[SweepSegment], position: Coordinate) -> None:
        """Queue the far end of every collinear overlap opening at the position.

        The far end always falls on an endpoint event, so closing events
        bypass the position de-duplication and are queued once per pair.
        """
        ordered = sorted(segments, key=lambda s: s.index)
        for i, first in enumerate(ordered):
            for second in ordered[i + 1 :]:
                points = self.status.crossing_points(first, second)
                if len(points) != 2 or not self.precision.equals(points[0], position):
                    continue
                pair = (first.index, second.index)
                if pair in self._closing:
                    continue
                self._closing.add(pair)
                self.queue.insert(
                    Event(points[1], EventType.INTERSECTION, below=pair[0], above=pair[1], is_closing=True)
                )
                self.stats.scheduled_intersections += 1


class BentleyOttmannAlgorithm:
    """Reports every pairwise intersection among one or more rings.

    The source is one ring or a list of rings (polylines or polygon
    boundaries). Each reported intersection is tagged with the (min, max)
    pair of source edge indices it came from; edge indices are positions of
    each edge's start coordinate in the concatenation of all rings.

    Consecutive edges of a ring are not reported at their shared vertex.

    Results are computed on first access and cached.

    Example:
        algorithm = BentleyOttmannAlgorithm([(0, 0), (2, 2), (2, 0), (0, 2)])
        algorithm.intersections   # [Coordinate(1.0, 1.0)]
        algorithm.edge_indices    # [(0, 2)]
    """

    def __init__(self, source: Any, precision_model: PrecisionModel | None = None) -> None:
        """Initialize the algorithm.

        Args:
            source: One ring or a list of rings of Coordinates or tuples
            precision_model: Precision model (defaults to floating)

        Raises:
            InvalidArgumentError: If the source is None
        """
        self._rings = as_rings(source)
        self._precision = precision_model or PrecisionModel.default()
        self._result: IntersectionResult | None = None

    @property
    def source(self) -> list[list[Coordinate] | None]:
        return self._rings

    @property
    def precision_model(self) -> PrecisionModel:
        return self._precision

    def compute(self) -> IntersectionResult:
        """Run the sweep once and return the cached result."""
        if self._result is None:
            self._result = _Sweep(self._rings, self._precision).run()
            logger.debug(
                "Sweep complete",
                rings=len(self._rings),
                intersections=len(self._result.intersections),
                intersection_events=self._result.stats.intersection_events,
                groups=self._result.stats.event_groups,
            )
        return self._result

    @property
    def intersections(self) -> list[Coordinate]:
        """Intersection coordinates, in sweep order."""
        return list(self.compute().intersections)

    @property
    def edge_indices(self) -> list[tuple[int, int]]:
        """Source edge pairs, aligned with ``intersections``."""
        return list(self.compute().edge_indices)


def intersection(source: Any, precision_model: PrecisionModel | None = None) -> list[Coordinate]:
    """Compute the intersections of one or more rings.

    Args:
        source: One ring or a list of rings
        precision_model: Precision model (defaults to floating)

    Returns:
        Intersection coordinates in sweep order
    """
    return BentleyOttmannAlgorithm(source, precision_model).intersections
