"""Shamos–Hoey sweep for detecting whether any intersection exists.

This is the existence-only specialization of the Bentley–Ottmann sweep.
Because it stops at the first confirmed intersection, the segment order on
the sweep line never changes before it returns, so no intersection events
are needed and the event queue is sorted once up front.
"""

from typing import Any

import structlog

from planeclip.core.bentley_ottmann import as_rings
from planeclip.core.events import EdgeSet, EventType, PresortedEventQueue
from planeclip.core.sweepline import SweepLine, SweepSegment
from planeclip.domain import Coordinate, PrecisionModel

logger = structlog.get_logger(__name__)


class ShamosHoeyAlgorithm:
    """Determines whether one or more rings intersect.

    Consecutive edges of a ring meeting at their shared vertex do not count;
    any other contact (crossing, touching, overlapping) does.

    Example:
        ShamosHoeyAlgorithm([(0, 0), (1, 1), (1, 0), (0, 1)]).result   # True
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
        self._result: bool | None = None

    @property
    def source(self) -> list[list[Coordinate] | None]:
        return self._rings

    @property
    def precision_model(self) -> PrecisionModel:
        return self._precision

    @property
    def result(self) -> bool:
        """Whether at least one intersection exists."""
        return self.compute()

    def compute(self) -> bool:
        """Run the sweep once and return the cached answer."""
        if self._result is None:
            self._result = self._sweep()
            logger.debug("Intersection test complete", rings=len(self._rings), result=self._result)
        return self._result

    def _sweep(self) -> bool:
        edges = EdgeSet(self._rings, self._precision)
        queue = PresortedEventQueue.from_edges(edges, self._precision)
        status = SweepLine(edges, self._precision)

        while queue:
            group = queue.pop_group()
            position = group[0].position
            status.advance(position)

            ending: list[SweepSegment] = []
            for event in group:
                if event.type is EventType.RIGHT:
                    segment = status.search(event)
                    if segment is not None:
                        ending.append(segment)
            passing = [s for s in status.through() if s not in ending]

            for segment in ending + passing:
                status.remove(segment)
            starting = [status.add(e) for e in group if e.type is EventType.LEFT]
            for segment in passing:
                status.insert(segment)

            involved = ending + passing + starting
            for i, first in enumerate(involved):
                for second in involved[i + 1 :]:
                    if status.crossing_points(first, second):
                        return True

            block = status.through() if starting or passing else []
            if not block:
                below, above = status.neighbors_at()
                if below is not None and above is not None and status.crossing_points(below, above):
                    return True
                continue

            below = status.below(block[0])
            if below is not None and status.crossing_points(below, block[0]):
                return True
            above = status.above(block[-1])
            if above is not None and status.crossing_points(block[-1], above):
                return True

        return False


def intersects(source: Any, precision_model: PrecisionModel | None = None) -> bool:
    """Check whether one or more rings intersect.

    Args:
        source: One ring or a list of rings
        precision_model: Precision model (defaults to floating)

    Returns:
        True if any two non-consecutive edges meet
    """
    return ShamosHoeyAlgorithm(source, precision_model).result


def is_simple(ring: Any, precision_model: PrecisionModel | None = None) -> bool:
    """Check whether a single ring is free of self-intersections and self-touches."""
    return not ShamosHoeyAlgorithm([ring], precision_model).result
