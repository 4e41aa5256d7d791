"""Intersection graph of two polygon boundaries.

The overlay graph is the shared machinery of the clipping engines:

1. Every shell and hole of both polygons is copied into a vertex arena.
2. Crossings between rings of the two polygons are found with the
   Bentley–Ottmann sweep and inserted into both arenas.
3. Each crossing is classified as Entry or Exit by locating the midpoints
   of polygon A's edges around it against polygon B. Tangential contacts
   are dropped.
4. Crossings are linked into one "next intersection" chain per ring.
5. Bounded walks over the augmented rings produce the result rings.

Walk rules (A and B rings are oriented with their polygon's interior on
the left):
- INTERNAL: start at Entry on A; Entry follows A forward, Exit follows B forward
- EXTERNAL_A: start at Exit on A; Exit follows A forward, Entry follows B backward
- EXTERNAL_B: start at Entry on B; Entry follows B forward, Exit follows A backward
- UNION: start at Exit on A; Exit follows A forward, Entry follows B forward
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum, auto

import structlog

from planeclip.core.bentley_ottmann import BentleyOttmannAlgorithm
from planeclip.core.geometry import (
    close_ring,
    distinct_count,
    is_counter_clockwise,
    is_non_exterior,
    is_ring_within,
    locate_in_polygon,
    midpoint,
    perimeter,
    reverse_ring,
    ring_location,
    signed_area,
)
from planeclip.core.vertex_ring import VertexArena
from planeclip.domain import Clip, Coordinate, Envelope, PrecisionModel, RelativeLocation
from planeclip.exceptions import TraversalError

logger = structlog.get_logger(__name__)


class Mode(Enum):
    """Classification of a crossing along polygon A's boundary."""

    ENTRY = auto()
    EXIT = auto()
    BOUNDARY = auto()


class ClipRelation(Enum):
    """How two rings relate once tangential contacts are discarded."""

    CROSSING = auto()
    A_INSIDE_B = auto()
    B_INSIDE_A = auto()
    EQUAL = auto()
    DISJOINT = auto()


@dataclass(eq=False)
class Intersection:
    """A crossing between a ring of polygon A and a ring of polygon B.

    Attributes:
        position: Where the rings cross
        node_a: Node of the crossing in polygon A's arena
        node_b: Node of the crossing in polygon B's arena
        mode: Entry/Exit classification along A
        next_a: Next crossing along the same ring of A
        next_b: Next crossing along the same ring of B
    """

    position: Coordinate
    node_a: int
    node_b: int
    mode: Mode = Mode.BOUNDARY
    next_a: "Intersection | None" = field(default=None, repr=False)
    next_b: "Intersection | None" = field(default=None, repr=False)


@dataclass(frozen=True)
class Walk:
    """Traversal rule for one kind of result.

    Attributes:
        name: Rule name used in logs
        start_on_a: Whether walks start on polygon A
        start_mode: Mode of the crossings walks start from
        follow_a_mode: Mode at which the walk continues on A
        forward_a: Direction along A rings
        forward_b: Direction along B rings
    """

    name: str
    start_on_a: bool
    start_mode: Mode
    follow_a_mode: Mode
    forward_a: bool
    forward_b: bool


INTERNAL = Walk("internal", True, Mode.ENTRY, Mode.ENTRY, True, True)
EXTERNAL_A = Walk("external_a", True, Mode.EXIT, Mode.EXIT, True, False)
EXTERNAL_B = Walk("external_b", False, Mode.ENTRY, Mode.EXIT, False, True)
UNION = Walk("union", True, Mode.EXIT, Mode.EXIT, True, True)


def _transition(before: RelativeLocation, after: RelativeLocation) -> Mode:
    if before is after:
        return Mode.BOUNDARY
    if after is RelativeLocation.INTERIOR or before is RelativeLocation.EXTERIOR:
        return Mode.ENTRY
    return Mode.EXIT


class OverlayGraph:
    """Crossings between the boundaries of two polygons, ready to walk.

    Index 0 of each ring list is the shell and the remaining rings are
    holes. Rings must be closed and oriented with the polygon interior on
    the left (shell counter-clockwise, holes clockwise).

    Example:
        graph = OverlayGraph([shell_a], [shell_b], precision)
        graph.find_intersections()
        graph.classify()
        if graph.has_entries:
            graph.link()
            rings = graph.trace(INTERNAL)
    """

    def __init__(
        self,
        rings_a: Sequence[Sequence[Coordinate]],
        rings_b: Sequence[Sequence[Coordinate]],
        precision: PrecisionModel | None = None,
    ) -> None:
        self._precision = precision or PrecisionModel.default()
        self._rings_a = [close_ring(ring) for ring in rings_a]
        self._rings_b = [close_ring(ring) for ring in rings_b]
        self._envelopes_a = [Envelope.from_coordinates(ring) for ring in self._rings_a]
        self._envelopes_b = [Envelope.from_coordinates(ring) for ring in self._rings_b]

        self.arena_a = VertexArena(self._precision)
        self.arena_b = VertexArena(self._precision)
        for ring in self._rings_a:
            self.arena_a.add_ring(ring)
        for ring in self._rings_b:
            self.arena_b.add_ring(ring)

        self._records: list[Intersection] = []
        self._on_a: dict[int, Intersection] = {}
        self._on_b: dict[int, Intersection] = {}
        self.removed_count = 0

    @property
    def intersections(self) -> list[Intersection]:
        """Active crossings, in discovery order."""
        return list(self._records)

    @property
    def has_entries(self) -> bool:
        return any(r.mode is Mode.ENTRY for r in self._records)

    def _tolerance(self, first: Envelope, second: Envelope) -> float:
        return self._precision.tolerance(
            Coordinate(first.max_x, first.max_y),
            Coordinate(first.min_x, first.min_y),
            Coordinate(second.max_x, second.max_y),
            Coordinate(second.min_x, second.min_y),
        )

    def envelopes_intersect(self) -> bool:
        """Check whether the shells' envelopes overlap or touch."""
        first, second = self._envelopes_a[0], self._envelopes_b[0]
        return first.intersects(second, self._tolerance(first, second))

    def find_intersections(self) -> int:
        """Find and insert the crossings of every pair of rings.

        Ring pairs with disjoint envelopes are skipped without sweeping.

        Returns:
            Number of crossings recorded
        """
        for i, ring_a in enumerate(self._rings_a):
            envelope_a = self._envelopes_a[i]
            split = len(ring_a)
            for j, ring_b in enumerate(self._rings_b):
                envelope_b = self._envelopes_b[j]
                if not envelope_a.intersects(envelope_b, self._tolerance(envelope_a, envelope_b)):
                    continue
                result = BentleyOttmannAlgorithm([ring_a, ring_b], self._precision).compute()
                for position, (first, second) in zip(result.intersections, result.edge_indices):
                    if first >= split or second < split:
                        continue
                    self._record(i, first, j, second - split, position)
        return len(self._records)

    def _record(self, ring_a: int, edge_a: int, ring_b: int, edge_b: int, position: Coordinate) -> None:
        node_a = self.arena_a.insert_on_edge(ring_a, edge_a, position)
        position = self.arena_a.coordinate(node_a)
        node_b = self.arena_b.insert_on_edge(ring_b, edge_b, position)
        if node_a in self._on_a or node_b in self._on_b:
            return
        record = Intersection(position, node_a, node_b)
        self._records.append(record)
        self._on_a[node_a] = record
        self._on_b[node_b] = record

    def _locate_in_b(self, point: Coordinate) -> RelativeLocation:
        return locate_in_polygon(point, self._rings_b[0], self._rings_b[1:], self._precision)

    def classify(self) -> None:
        """Classify every crossing and drop the tangential ones.

        The midpoints of the A edges entering and leaving each crossing are
        located against polygon B. A change of location marks an Entry or
        an Exit; no change means the rings only touch there.
        """
        arena = self.arena_a
        for record in self._records:
            node = record.node_a
            current = arena.coordinate(node)
            before = self._locate_in_b(midpoint(arena.coordinate(arena.step(node, False)), current))
            after = self._locate_in_b(midpoint(current, arena.coordinate(arena.step(node))))
            record.mode = _transition(before, after)

        active = [r for r in self._records if r.mode is not Mode.BOUNDARY]
        self.removed_count = len(self._records) - len(active)
        self._records = active
        self._on_a = {r.node_a: r for r in active}
        self._on_b = {r.node_b: r for r in active}
        if self.removed_count:
            logger.debug("Removed tangential intersections", count=self.removed_count)

    def link(self) -> None:
        """Chain the crossings of every ring in ring order."""
        for arena, lookup, attribute in (
            (self.arena_a, self._on_a, "next_a"),
            (self.arena_b, self._on_b, "next_b"),
        ):
            for ring in range(arena.ring_count):
                chain = [lookup[node] for node in arena.nodes(ring) if node in lookup]
                for k, record in enumerate(chain):
                    setattr(record, attribute, chain[(k + 1) % len(chain)])

    def trace(self, walk: Walk) -> list[list[Coordinate]]:
        """Walk the graph and collect the closed rings of one result kind.

        Every crossing with the walk's start mode whose successor along the
        start ring has a different mode seeds a walk; crossings are consumed
        as walks pass them, so no region is traced twice.

        Args:
            walk: Traversal rule

        Returns:
            Closed result rings, including split-off inner loops
        """
        candidates = [r for r in self._records if r.mode is walk.start_mode]
        starts = [
            r
            for r in candidates
            if (successor := r.next_a if walk.start_on_a else r.next_b) is not None
            and successor.mode is not walk.start_mode
        ]
        pending = dict.fromkeys(starts or candidates)

        rings: list[list[Coordinate]] = []
        while pending:
            start = next(iter(pending))
            del pending[start]
            try:
                self._walk(start, walk, pending, rings)
            except TraversalError as error:
                logger.warning(
                    "Dropping unterminated boundary walk",
                    walk=walk.name,
                    start=start.position.to_tuple(),
                    reason=str(error),
                )
        return rings

    def _walk(
        self,
        start: Intersection,
        walk: Walk,
        pending: dict[Intersection, None],
        output: list[list[Coordinate]],
    ) -> None:
        on_a = walk.start_on_a
        node = start.node_a if on_a else start.node_b
        ring = [start.position]
        limit = 2 * (len(self.arena_a) + len(self.arena_b)) + 4

        for _ in range(limit):
            arena = self.arena_a if on_a else self.arena_b
            node = arena.step(node, walk.forward_a if on_a else walk.forward_b)
            current = arena.coordinate(node)
            ring.append(current)
            self._split_loop(ring, output)

            record = (self._on_a if on_a else self._on_b).get(node)
            if record is not None:
                if record is start:
                    break
                pending.pop(record, None)
                on_a = record.mode is walk.follow_a_mode
                node = record.node_a if on_a else record.node_b

            if self._precision.equals(current, ring[0]):
                break
        else:
            raise TraversalError(f"walk did not close within {limit} steps")

        if len(ring) > 3:
            output.append(ring)

    def _split_loop(self, ring: list[Coordinate], output: list[list[Coordinate]]) -> None:
        current = ring[-1]
        for m in range(len(ring) - 2, 0, -1):
            if self._precision.equals(ring[m], current):
                loop = ring[m:]
                if len(loop) > 3:
                    output.append(loop)
                ring[m:] = [current]
                return

    def _coincides_reversed(self, ring: Sequence[Coordinate], others: Sequence[Sequence[Coordinate]]) -> bool:
        """Check whether a ring runs along a ring of the other polygon wound the other way."""
        for other in others:
            if ring_location(ring, other, (), self._precision) is RelativeLocation.BOUNDARY:
                return is_counter_clockwise(ring) != is_counter_clockwise(other)
        return False

    def untouched_rings(self, walk: Walk) -> list[list[Coordinate]]:
        """Return the rings without crossings that belong to a result.

        A ring no walk can reach is kept or dropped by where it lies
        relative to the other polygon. Rings of the other polygon that
        bound an external result are reversed.

        A ring lying on a ring of the other polygon is decided by winding.
        Equally wound, the interiors agree on both sides and A's copy bounds
        the internal and union results. Oppositely wound, the ring separates
        the two interiors and each copy bounds its own external result.

        Args:
            walk: Result kind

        Returns:
            Closed rings to add to the walk's output
        """
        touched_a = {self.arena_a.ring_of(r.node_a) for r in self._records}
        touched_b = {self.arena_b.ring_of(r.node_b) for r in self._records}
        shell_a, holes_a = self._rings_a[0], self._rings_a[1:]
        shell_b, holes_b = self._rings_b[0], self._rings_b[1:]

        keep_a = {
            INTERNAL.name: (RelativeLocation.INTERIOR,),
            EXTERNAL_A.name: (RelativeLocation.EXTERIOR,),
            EXTERNAL_B.name: (RelativeLocation.INTERIOR,),
            UNION.name: (RelativeLocation.EXTERIOR,),
        }[walk.name]
        keep_b = {
            INTERNAL.name: (RelativeLocation.INTERIOR,),
            EXTERNAL_A.name: (RelativeLocation.INTERIOR,),
            EXTERNAL_B.name: (RelativeLocation.EXTERIOR,),
            UNION.name: (RelativeLocation.EXTERIOR,),
        }[walk.name]

        rings: list[list[Coordinate]] = []
        for index, ring in enumerate(self._rings_a):
            if index in touched_a:
                continue
            location = ring_location(ring, shell_b, holes_b, self._precision)
            if location is RelativeLocation.BOUNDARY:
                if self._coincides_reversed(ring, self._rings_b):
                    keep = walk is EXTERNAL_A
                else:
                    keep = walk is INTERNAL or walk is UNION
                if keep:
                    rings.append(list(ring))
            elif location in keep_a:
                rings.append(reverse_ring(ring) if walk is EXTERNAL_B else list(ring))
        for index, ring in enumerate(self._rings_b):
            if index in touched_b:
                continue
            location = ring_location(ring, shell_a, holes_a, self._precision)
            if location is RelativeLocation.BOUNDARY:
                if walk is EXTERNAL_B and self._coincides_reversed(ring, self._rings_a):
                    rings.append(list(ring))
            elif location in keep_b:
                rings.append(reverse_ring(ring) if walk is EXTERNAL_A else list(ring))
        return rings


def assemble(rings: Sequence[Sequence[Coordinate]], precision: PrecisionModel | None = None) -> list[Clip]:
    """Turn result rings into clips.

    Counter-clockwise rings become shells. Each clockwise ring becomes a
    hole of the smallest shell that contains it. Rings with no area are
    dropped.

    Args:
        rings: Closed or open result rings
        precision: Precision model for area and containment tests

    Returns:
        Clips with closed CCW shells and closed CW holes
    """
    model = precision or PrecisionModel.default()
    shells: list[list[Coordinate]] = []
    holes: list[list[Coordinate]] = []
    for ring in rings:
        closed = close_ring(ring)
        if distinct_count(closed) < 3:
            continue
        area = signed_area(closed)
        if abs(area) <= model.tolerance(*closed) * perimeter(closed):
            continue
        (shells if area > 0 else holes).append(closed)

    owned: list[list[list[Coordinate]]] = [[] for _ in shells]
    for hole in holes:
        owners = [k for k, shell in enumerate(shells) if is_ring_within(hole, shell, model)]
        if not owners:
            logger.warning(
                "Discarding hole without an enclosing shell",
                start=hole[0].to_tuple(),
                size=len(hole),
            )
            continue
        owner = min(owners, key=lambda k: abs(signed_area(shells[k])))
        owned[owner].append(hole)

    return [
        Clip(shell=tuple(shell), holes=tuple(tuple(hole) for hole in shell_holes))
        for shell, shell_holes in zip(shells, owned)
    ]


def containment_relation(
    first: Sequence[Coordinate],
    second: Sequence[Coordinate],
    precision: PrecisionModel | None = None,
) -> ClipRelation:
    """Relate two rings whose boundaries do not cross.

    Args:
        first: Ring A
        second: Ring B

    Returns:
        EQUAL, A_INSIDE_B, B_INSIDE_A or DISJOINT
    """
    first_in_second = is_non_exterior(first, second, precision)
    second_in_first = is_non_exterior(second, first, precision)
    if first_in_second and second_in_first:
        return ClipRelation.EQUAL
    if first_in_second:
        return ClipRelation.A_INSIDE_B
    if second_in_first:
        return ClipRelation.B_INSIDE_A
    return ClipRelation.DISJOINT


def shell_relation(
    first: Sequence[Coordinate],
    second: Sequence[Coordinate],
    precision: PrecisionModel | None = None,
) -> ClipRelation:
    """Relate two simple counter-clockwise rings.

    Returns:
        CROSSING if the boundaries cross (or run along each other),
        otherwise the containment relation
    """
    graph = OverlayGraph([first], [second], precision)
    if not graph.envelopes_intersect():
        return ClipRelation.DISJOINT
    graph.find_intersections()
    graph.classify()
    if graph.has_entries:
        return ClipRelation.CROSSING
    return containment_relation(close_ring(first), close_ring(second), precision)


@dataclass(frozen=True)
class ShellClip:
    """Result of clipping two hole-free rings.

    Attributes:
        relation: How the rings relate
        internal: A ∩ B
        external_a: A − B
        external_b: B − A
        union: A ∪ B (only when requested)
    """

    relation: ClipRelation
    internal: tuple[Clip, ...]
    external_a: tuple[Clip, ...] = ()
    external_b: tuple[Clip, ...] = ()
    union: tuple[Clip, ...] = ()


def _clip(shell: Sequence[Coordinate], holes: Sequence[Sequence[Coordinate]] = ()) -> Clip:
    return Clip(shell=tuple(shell), holes=tuple(tuple(h) for h in holes))


def _complete_clips(
    relation: ClipRelation, first: list[Coordinate], second: list[Coordinate]
) -> tuple[list[Clip], list[Clip], list[Clip], list[Clip]]:
    if relation is ClipRelation.EQUAL:
        return [_clip(first)], [], [], [_clip(first)]
    if relation is ClipRelation.A_INSIDE_B:
        return [_clip(first)], [], [_clip(second, [reverse_ring(first)])], [_clip(second)]
    if relation is ClipRelation.B_INSIDE_A:
        return [_clip(second)], [_clip(first, [reverse_ring(second)])], [], [_clip(first)]
    return [], [_clip(first)], [_clip(second)], [_clip(first), _clip(second)]


def clip_shells(
    first: Sequence[Coordinate],
    second: Sequence[Coordinate],
    precision: PrecisionModel | None = None,
    external: bool = True,
    union: bool = False,
) -> ShellClip:
    """Clip two simple counter-clockwise rings against each other.

    When the boundaries cross, the results are walked from the overlay
    graph. When no Entry point exists (disjoint, nested, equal, or only
    touching), containment tests decide the case and the input rings are
    returned directly.

    Args:
        first: Ring A
        second: Ring B
        precision: Precision model
        external: Whether to compute A − B and B − A
        union: Whether to compute A ∪ B

    Returns:
        ShellClip with the requested results
    """
    model = precision or PrecisionModel.default()
    a, b = close_ring(first), close_ring(second)
    graph = OverlayGraph([a], [b], model)

    if graph.envelopes_intersect():
        graph.find_intersections()
        graph.classify()

    if not graph.has_entries:
        relation = (
            containment_relation(a, b, model)
            if graph.envelopes_intersect()
            else ClipRelation.DISJOINT
        )
        internal, external_a, external_b, merged = _complete_clips(relation, a, b)
        return ShellClip(
            relation,
            tuple(internal),
            tuple(external_a) if external else (),
            tuple(external_b) if external else (),
            tuple(merged) if union else (),
        )

    graph.link()
    result = ShellClip(
        ClipRelation.CROSSING,
        tuple(assemble(graph.trace(INTERNAL), model)),
        tuple(assemble(graph.trace(EXTERNAL_A), model)) if external else (),
        tuple(assemble(graph.trace(EXTERNAL_B), model)) if external else (),
        tuple(assemble(graph.trace(UNION), model)) if union else (),
    )
    logger.debug(
        "Shells clipped",
        crossings=len(graph.intersections),
        internal=len(result.internal),
        external_a=len(result.external_a),
        external_b=len(result.external_b),
    )
    return result
