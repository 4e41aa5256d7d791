"""Unit tests for sweep events and event queues."""

import math

import pytest

from planeclip.core.events import (
    EdgeSet,
    Event,
    EventQueue,
    EventType,
    PresortedEventQueue,
    endpoint_events,
)
from planeclip.domain import Coordinate, PrecisionModel, as_ring
from planeclip.exceptions import UnsupportedOperationError

C = Coordinate


class TestEdgeSet:
    """Tests for EdgeSet indexing."""

    def test_indices_follow_concatenation(self):
        """Test edge indices are offsets into the concatenated rings."""
        edges = EdgeSet([as_ring([(0, 0), (2, 2)]), as_ring([(0, 2), (2, 0), (3, 3)])])
        assert sorted(e.index for e in edges) == [0, 2, 3]
        assert edges[0].ring == 0
        assert edges[2].ring == 1
        assert edges[3].start == C(2, 0)

    def test_none_rings_are_skipped(self):
        """Test null rings contribute no edges and no offset."""
        edges = EdgeSet([None, as_ring([(0, 0), (1, 0)])])
        assert len(edges) == 1
        assert edges[0].ring == 1

    def test_zero_length_edges_keep_their_index(self):
        """Test a repeated coordinate is skipped but consumes an index."""
        edges = EdgeSet([as_ring([(0, 0), (0, 0), (1, 0), (1, 1)])])
        assert 0 not in edges
        assert sorted(e.index for e in edges) == [1, 2]

    def test_adjacency_in_open_ring(self):
        """Test consecutive edges of a line string are adjacent."""
        edges = EdgeSet([as_ring([(0, 0), (1, 0), (2, 1), (3, 0)])])
        assert edges.is_adjacent(0, 1)
        assert edges.is_adjacent(2, 1)
        assert not edges.is_adjacent(0, 2)

    def test_adjacency_wraps_in_closed_ring(self):
        """Test the last edge of a closed ring is adjacent to the first."""
        edges = EdgeSet([as_ring([(0, 0), (1, 0), (1, 1), (0, 1), (0, 0)])])
        assert edges.is_adjacent(0, 3)
        assert not edges.is_adjacent(0, 2)

    def test_no_adjacency_across_rings(self):
        """Test edges of different rings are never adjacent."""
        edges = EdgeSet([as_ring([(0, 0), (1, 0)]), as_ring([(1, 0), (2, 0)])])
        assert not edges.is_adjacent(0, 2)

    def test_shared_vertices(self):
        """Test the declared vertex shared by two edges."""
        edges = EdgeSet([as_ring([(0, 0), (1, 0), (1, 1)])])
        assert edges.shared_vertices(0, 1) == [C(1, 0)]


class TestEdge:
    """Tests for Edge sweep geometry."""

    def test_left_and_right(self):
        """Test endpoints are ordered lexicographically."""
        edge = EdgeSet([as_ring([(5, 1), (2, 3)])])[0]
        assert edge.left == C(2, 3)
        assert edge.right == C(5, 1)

    def test_slope_and_vertical(self):
        """Test slope values."""
        edges = EdgeSet([as_ring([(0, 0), (2, 1), (2, 5)])])
        assert edges[0].slope == pytest.approx(0.5)
        assert edges[1].is_vertical
        assert edges[1].slope == math.inf

    def test_y_at(self):
        """Test y values on the sweep line, clamped to the edge."""
        edges = EdgeSet([as_ring([(0, 0), (4, 2), (4, 6)])])
        assert edges[0].y_at(2, 0) == pytest.approx(1.0)
        assert edges[0].y_at(10, 0) == pytest.approx(2.0)
        assert edges[1].y_at(4, 3) == 3
        assert edges[1].y_at(4, 9) == 6


class TestEventOrdering:
    """Tests for event sort order."""

    def test_endpoint_events(self):
        """Test each edge yields a LEFT and a RIGHT event."""
        edges = EdgeSet([as_ring([(3, 0), (1, 1)])])
        left, right = endpoint_events(edges)
        assert left.type is EventType.LEFT and left.position == C(1, 1)
        assert right.type is EventType.RIGHT and right.position == C(3, 0)

    def test_type_breaks_position_ties(self):
        """Test LEFT before RIGHT before INTERSECTION at one position."""
        queue = EventQueue()
        queue.insert(Event(C(1, 1), EventType.INTERSECTION, below=0, above=2))
        queue.insert(Event(C(1, 1), EventType.RIGHT, edge=0))
        queue.insert(Event(C(1, 1), EventType.LEFT, edge=2))
        assert [queue.pop().type for _ in range(3)] == [
            EventType.LEFT,
            EventType.RIGHT,
            EventType.INTERSECTION,
        ]

    def test_x_then_y(self):
        """Test positions are visited by x, then y."""
        queue = EventQueue()
        for position in (C(2, 0), C(1, 5), C(1, -1)):
            queue.insert(Event(position, EventType.LEFT, edge=0))
        assert [queue.pop().position for _ in range(3)] == [C(1, -1), C(1, 5), C(2, 0)]


class TestEventQueue:
    """Tests for EventQueue."""

    def test_empty(self):
        """Test an empty queue."""
        queue = EventQueue()
        assert not queue
        assert queue.pop() is None
        assert queue.peek() is None
        assert queue.pop_group() == []

    def test_contains_tracks_positions(self):
        """Test contains reflects queued positions."""
        queue = EventQueue()
        event = Event(C(1, 2), EventType.INTERSECTION, below=0, above=1)
        assert not queue.contains(event)
        queue.insert(event)
        assert queue.contains(Event(C(1, 2), EventType.INTERSECTION, below=3, above=4))
        queue.pop()
        assert not queue.contains(event)

    def test_contains_uses_snapped_positions(self):
        """Test a fixed model matches positions on the same grid cell."""
        queue = EventQueue(PrecisionModel.fixed(1.0))
        queue.insert(Event(C(1.2, 2.1), EventType.INTERSECTION))
        assert queue.contains(Event(C(0.9, 1.8), EventType.INTERSECTION))

    def test_pop_group(self):
        """Test every event at the first position is popped together."""
        edges = EdgeSet([as_ring([(0, 0), (1, 1)]), as_ring([(0, 0), (1, -1)])])
        queue = EventQueue.from_edges(edges)
        assert len(queue) == 4
        group = queue.pop_group()
        assert [e.type for e in group] == [EventType.LEFT, EventType.LEFT]
        assert len(queue) == 2


class TestPresortedEventQueue:
    """Tests for PresortedEventQueue."""

    def test_insert_is_unsupported(self):
        """Test inserting raises UnsupportedOperationError."""
        queue = PresortedEventQueue([])
        with pytest.raises(UnsupportedOperationError):
            queue.insert(Event(C(0, 0), EventType.LEFT))

    def test_unsupported_operation_is_type_error(self):
        """Test the error is also a TypeError."""
        with pytest.raises(TypeError):
            PresortedEventQueue([]).insert(Event(C(0, 0), EventType.LEFT))

    def test_sorted_order_and_groups(self):
        """Test events come out sorted and grouped by position."""
        edges = EdgeSet([as_ring([(2, 0), (0, 0)]), as_ring([(0, 0), (1, 3)])])
        queue = PresortedEventQueue.from_edges(edges)
        group = queue.pop_group()
        assert {e.edge for e in group} == {0, 2}
        assert queue.pop().position == C(1, 3)
        assert queue.peek().position == C(2, 0)
        assert queue.contains(Event(C(2, 0), EventType.RIGHT))
        assert len(queue) == 1
