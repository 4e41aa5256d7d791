"""Arena of circular doubly linked vertex rings.

Each ring is a cycle of nodes stored in flat lists (coordinate, next,
prev, ring). Nodes are addressed by integer index, so inserting a vertex
is an O(1) splice and no node reference can dangle.
"""

from collections.abc import Iterator, Sequence

from planeclip.core.geometry import distance
from planeclip.domain import Coordinate, PrecisionModel
from planeclip.exceptions import GeometryError


class VertexArena:
    """Storage for the vertex rings of one polygon.

    Rings are added closed (first coordinate repeated at the end); the
    repeated coordinate is not stored. The node of every original vertex is
    remembered, so positions reported against an original edge index can be
    inserted even after earlier insertions split that edge.

    Example:
        arena = VertexArena(precision)
        ring = arena.add_ring(shell)
        node = arena.insert_on_edge(ring, 0, Coordinate(0.5, 0.0))
        arena.ring_coordinates(ring)
    """

    def __init__(self, precision: PrecisionModel | None = None) -> None:
        self._precision = precision or PrecisionModel.default()
        self._coordinates: list[Coordinate] = []
        self._next: list[int] = []
        self._prev: list[int] = []
        self._ring: list[int] = []
        self._heads: list[int] = []
        self._origins: list[list[int]] = []

    def add_ring(self, ring: Sequence[Coordinate]) -> int:
        """Add a closed ring and return its ring id."""
        coordinates = list(ring)
        if len(coordinates) > 1 and coordinates[0] == coordinates[-1]:
            coordinates.pop()
        if not coordinates:
            raise GeometryError("Cannot add an empty ring")

        ring_id = len(self._heads)
        first = len(self._coordinates)
        count = len(coordinates)
        for offset, coordinate in enumerate(coordinates):
            self._coordinates.append(coordinate)
            self._next.append(first + (offset + 1) % count)
            self._prev.append(first + (offset - 1) % count)
            self._ring.append(ring_id)

        self._heads.append(first)
        self._origins.append(list(range(first, first + count)))
        return ring_id

    @property
    def ring_count(self) -> int:
        return len(self._heads)

    def __len__(self) -> int:
        return len(self._coordinates)

    def coordinate(self, node: int) -> Coordinate:
        return self._coordinates[node]

    def ring_of(self, node: int) -> int:
        return self._ring[node]

    def step(self, node: int, forward: bool = True) -> int:
        """Return the next (or previous) node along the ring."""
        return self._next[node] if forward else self._prev[node]

    def nodes(self, ring: int) -> Iterator[int]:
        """Yield the nodes of a ring in order, starting at its head."""
        head = self._heads[ring]
        node = head
        while True:
            yield node
            node = self._next[node]
            if node == head:
                return

    def ring_coordinates(self, ring: int, closed: bool = True) -> list[Coordinate]:
        """Return the current coordinates of a ring."""
        coordinates = [self._coordinates[node] for node in self.nodes(ring)]
        if closed:
            coordinates.append(coordinates[0])
        return coordinates

    def insert_on_edge(self, ring: int, edge: int, coordinate: Coordinate) -> int:
        """Insert a coordinate on an original edge of a ring.

        Several insertions on one edge are kept ordered by distance from the
        edge's start. A node already within tolerance of the coordinate is
        reused instead of inserting a duplicate.

        Args:
            ring: Ring id
            edge: Index of the original edge (index of its start vertex)
            coordinate: Position on the edge

        Returns:
            Node index holding the coordinate

        Raises:
            GeometryError: If the edge index is out of range
        """
        origins = self._origins[ring]
        if not 0 <= edge < len(origins):
            raise GeometryError(f"Edge {edge} is not an edge of ring {ring}")
        start = origins[edge]
        end = origins[(edge + 1) % len(origins)]

        origin = self._coordinates[start]
        target = distance(origin, coordinate)
        node = start
        while True:
            if self._precision.equals(self._coordinates[node], coordinate):
                return node
            following = self._next[node]
            if following == end or distance(origin, self._coordinates[following]) > target:
                if self._precision.equals(self._coordinates[following], coordinate):
                    return following
                break
            node = following

        inserted = len(self._coordinates)
        following = self._next[node]
        self._coordinates.append(coordinate)
        self._next.append(following)
        self._prev.append(node)
        self._ring.append(ring)
        self._next[node] = inserted
        self._prev[following] = inserted
        return inserted
