"""Unit tests for the vertex ring arena."""

import pytest

from planeclip.core.vertex_ring import VertexArena
from planeclip.domain import Coordinate, PrecisionModel, as_ring
from planeclip.exceptions import GeometryError

C = Coordinate
SQUARE = as_ring([(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)])


class TestVertexArena:
    """Tests for VertexArena."""

    def test_closing_coordinate_not_stored(self):
        """Test the repeated closing coordinate is dropped."""
        arena = VertexArena()
        ring = arena.add_ring(SQUARE)
        assert len(arena) == 4
        assert arena.ring_count == 1
        assert arena.ring_coordinates(ring) == SQUARE
        assert arena.ring_coordinates(ring, closed=False) == SQUARE[:-1]

    def test_rings_are_cyclic(self):
        """Test stepping wraps around in both directions."""
        arena = VertexArena()
        ring = arena.add_ring(SQUARE)
        nodes = list(arena.nodes(ring))
        assert arena.step(nodes[-1]) == nodes[0]
        assert arena.step(nodes[0], forward=False) == nodes[-1]

    def test_second_ring_has_own_nodes(self):
        """Test node ownership across rings."""
        arena = VertexArena()
        arena.add_ring(SQUARE)
        second = arena.add_ring(as_ring([(20, 0), (30, 0), (25, 5), (20, 0)]))
        nodes = list(arena.nodes(second))
        assert len(nodes) == 3
        assert all(arena.ring_of(node) == second for node in nodes)
        assert arena.coordinate(nodes[0]) == C(20, 0)

    def test_empty_ring_rejected(self):
        """Test adding no coordinates fails."""
        with pytest.raises(GeometryError):
            VertexArena().add_ring([])

    def test_insertions_are_ordered_along_edge(self):
        """Test insertions on one edge are kept in order from its start."""
        arena = VertexArena()
        ring = arena.add_ring(SQUARE)
        arena.insert_on_edge(ring, 0, C(7, 0))
        arena.insert_on_edge(ring, 0, C(3, 0))
        arena.insert_on_edge(ring, 0, C(5, 0))
        assert arena.ring_coordinates(ring, closed=False)[:5] == [
            C(0, 0),
            C(3, 0),
            C(5, 0),
            C(7, 0),
            C(10, 0),
        ]

    def test_original_edge_index_survives_splits(self):
        """Test later edges are addressed by their original index."""
        arena = VertexArena()
        ring = arena.add_ring(SQUARE)
        arena.insert_on_edge(ring, 0, C(5, 0))
        node = arena.insert_on_edge(ring, 2, C(5, 10))
        assert arena.coordinate(arena.step(node, forward=False)) == C(10, 10)
        assert arena.coordinate(arena.step(node)) == C(0, 10)

    def test_existing_node_is_reused(self):
        """Test inserting at a vertex or an earlier insertion returns that node."""
        arena = VertexArena()
        ring = arena.add_ring(SQUARE)
        first = arena.insert_on_edge(ring, 1, C(10, 4))
        assert arena.insert_on_edge(ring, 1, C(10, 4)) == first
        corner = arena.insert_on_edge(ring, 1, C(10, 10))
        assert arena.coordinate(corner) == C(10, 10)
        assert len(arena) == 5

    def test_reuse_within_fixed_tolerance(self):
        """Test a fixed model merges nearby insertions."""
        arena = VertexArena(PrecisionModel.fixed(1.0))
        ring = arena.add_ring(SQUARE)
        first = arena.insert_on_edge(ring, 0, C(4, 0))
        assert arena.insert_on_edge(ring, 0, C(4.3, 0)) == first

    def test_edge_out_of_range(self):
        """Test an unknown edge index raises GeometryError."""
        arena = VertexArena()
        ring = arena.add_ring(SQUARE)
        with pytest.raises(GeometryError, match="Edge 4"):
            arena.insert_on_edge(ring, 4, C(0, 5))
