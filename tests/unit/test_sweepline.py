"""Unit tests for the sweep status structure."""

from planeclip.core.events import EdgeSet, Event, EventType
from planeclip.core.sweepline import SweepLine
from planeclip.domain import Coordinate, as_ring

C = Coordinate


def _left(edges: EdgeSet, index: int) -> Event:
    return Event(edges[index].left, EventType.LEFT, edge=index)


class TestSweepLine:
    """Tests for SweepLine ordering and neighbour queries."""

    def _three_lines(self):
        edges = EdgeSet(
            [
                as_ring([(0, 0), (10, 0)]),
                as_ring([(0, 5), (10, 5)]),
                as_ring([(0, -5), (10, -5)]),
            ]
        )
        status = SweepLine(edges)
        for index in (4, 0, 2):
            status.advance(edges[index].left)
            status.add(_left(edges, index))
        return edges, status

    def test_bottom_to_top_order(self):
        """Test segments are kept ordered by y."""
        _, status = self._three_lines()
        assert [s.index for s in status] == [4, 0, 2]
        assert len(status) == 3

    def test_above_and_below(self):
        """Test neighbour lookups."""
        _, status = self._three_lines()
        middle = status.segment(0)
        assert status.above(middle).index == 2
        assert status.below(middle).index == 4
        assert status.above(status.segment(2)) is None
        assert status.below(status.segment(4)) is None

    def test_search_and_remove(self):
        """Test finding and removing the segment of an endpoint event."""
        edges, status = self._three_lines()
        status.advance(C(10, 0))
        segment = status.search(Event(C(10, 0), EventType.RIGHT, edge=0))
        assert segment is not None and segment in status
        status.remove(segment)
        assert segment not in status
        assert status.segment(0) is None
        assert [s.index for s in status] == [4, 2]

    def test_through_and_neighbors(self):
        """Test the run of segments passing through a position."""
        _, status = self._three_lines()
        assert [s.index for s in status.through(C(5, 0))] == [0]
        below, above = status.neighbors_at(C(5, 1))
        assert below.index == 0
        assert above.index == 2

    def test_ties_ordered_by_slope(self):
        """Test segments starting at one point are ordered by slope."""
        edges = EdgeSet(
            [
                as_ring([(0, 0), (4, 4)]),
                as_ring([(0, 0), (4, -4)]),
                as_ring([(0, 0), (4, 0)]),
            ]
        )
        status = SweepLine(edges)
        status.advance(C(0, 0))
        for index in (0, 2, 4):
            status.add(_left(edges, index))
        assert [s.index for s in status] == [2, 4, 0]
        assert [s.index for s in status.through()] == [2, 4, 0]

    def test_crossing_points_ignore_shared_vertex(self):
        """Test consecutive edges do not meet at their shared vertex."""
        edges = EdgeSet([as_ring([(0, 0), (2, 2), (4, 0)])])
        status = SweepLine(edges)
        status.advance(C(0, 0))
        first = status.add(_left(edges, 0))
        status.advance(C(2, 2))
        second = status.add(_left(edges, 1))
        assert status.crossing_points(first, second) == []

    def test_crossing_points_keep_fold_back(self):
        """Test consecutive edges that fold back still report their overlap."""
        edges = EdgeSet([as_ring([(0, 0), (4, 0), (2, 0)])])
        status = SweepLine(edges)
        status.advance(C(0, 0))
        first = status.add(_left(edges, 0))
        status.advance(C(2, 0))
        second = status.add(_left(edges, 1))
        assert status.crossing_points(first, second) == [C(2, 0)]

    def test_crossing_segments_swap_after_reinsertion(self):
        """Test segments crossing at the position are found and put back swapped."""
        edges = EdgeSet([as_ring([(0, 0), (4, 4)]), as_ring([(0, 4), (4, 0)])])
        status = SweepLine(edges)
        status.advance(C(0, 0))
        rising = status.add(_left(edges, 0))
        status.advance(C(0, 4))
        falling = status.add(_left(edges, 2))
        assert [s.index for s in status] == [0, 2]

        status.advance(C(2, 2))
        run = status.through()
        assert run == [rising, falling]
        for segment in run:
            status.remove(segment)
        for segment in run:
            status.insert(segment)
        assert [s.index for s in status] == [2, 0]
        assert status.above(falling) is rising

    def test_remove_segment_off_the_position(self):
        """Test removing a segment that does not pass the sweep position."""
        _, status = self._three_lines()
        status.advance(C(5, 5))
        status.remove(status.segment(4))
        assert [s.index for s in status] == [0, 2]
        assert status.below(status.segment(0)) is None
