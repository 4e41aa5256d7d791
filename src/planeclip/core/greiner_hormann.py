"""Greiner–Hormann clipping of polygons with holes.

The shells of both polygons are clipped against each other first. Holes
are then resolved recursively: every hole is subtracted from the pieces
produced so far, and a hole of one polygon that overlaps the other
polygon's shell contributes the part of that shell it uncovers to the
external clips.

For polygons A = SA − HA and B = SB − HB (shells minus holes):

    A ∩ B = (SA ∩ SB) − HA − HB
    A − B = ((SA − SB) − HA) ∪ ((SA ∩ HB) − HA)
    B − A = ((SB − SA) − HB) ∪ ((SB ∩ HA) − HB)

Inputs are validated eagerly: both polygons must have closed, simple,
counter-clockwise shells and clockwise holes.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import structlog

from planeclip.core.geometry import close_ring, reverse_ring, signed_area
from planeclip.core.overlay import ClipRelation, clip_shells, shell_relation
from planeclip.core.validation import as_polygon, ensure_simple, validate_polygon
from planeclip.domain import Clip, Coordinate, Polygon, PrecisionModel

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ClipResult:
    """The clips of one clipping operation.

    Attributes:
        internal: Regions inside both polygons
        external_a: Regions of the first polygon outside the second
        external_b: Regions of the second polygon outside the first
    """

    internal: tuple[Clip, ...]
    external_a: tuple[Clip, ...] = ()
    external_b: tuple[Clip, ...] = ()

    @property
    def total_count(self) -> int:
        return len(self.internal) + len(self.external_a) + len(self.external_b)


@dataclass
class _Piece:
    """Intermediate region: a CCW shell with CCW hole outlines."""

    shell: list[Coordinate]
    holes: list[list[Coordinate]] = field(default_factory=list)

    @classmethod
    def from_clip(cls, clip: Clip) -> "_Piece":
        return cls(list(clip.shell), [reverse_ring(hole) for hole in clip.holes])

    def to_clip(self) -> Clip:
        return Clip(
            shell=tuple(close_ring(self.shell)),
            holes=tuple(tuple(reverse_ring(close_ring(hole))) for hole in self.holes),
        )


def _pieces(clips: Sequence[Clip]) -> list[_Piece]:
    return [_Piece.from_clip(clip) for clip in clips]


def _subtract_all(
    pieces: list[_Piece], cutters: Sequence[Sequence[Coordinate]], precision: PrecisionModel
) -> list[_Piece]:
    for cutter in cutters:
        pieces = [result for piece in pieces for result in _subtract(piece, cutter, precision)]
    return pieces


def _subtract(piece: _Piece, cutter: Sequence[Coordinate], precision: PrecisionModel) -> list[_Piece]:
    """Remove the region enclosed by a CCW cutter ring from a piece."""
    clipped = clip_shells(piece.shell, cutter, precision)
    relation = clipped.relation
    if relation is ClipRelation.DISJOINT:
        return [piece]
    if relation in (ClipRelation.A_INSIDE_B, ClipRelation.EQUAL):
        return []
    if relation is ClipRelation.B_INSIDE_A:
        return _punch(piece, cutter, precision)

    pieces = _pieces(clipped.external_a)
    for hole in piece.holes:
        if shell_relation(hole, cutter, precision) in (ClipRelation.A_INSIDE_B, ClipRelation.EQUAL):
            continue
        pieces = _subtract_all(pieces, [hole], precision)
    return pieces


def _punch(piece: _Piece, cutter: Sequence[Coordinate], precision: PrecisionModel) -> list[_Piece]:
    """Cut a new hole into a piece whose shell fully contains the cutter.

    Existing holes that overlap the new one are merged into it. Gaps left
    between merged outlines become separate pieces.
    """
    merged = close_ring(cutter)
    holes = list(piece.holes)
    islands: list[_Piece] = []

    index = 0
    while index < len(holes):
        hole = holes[index]
        relation = shell_relation(merged, hole, precision)
        if relation is ClipRelation.DISJOINT:
            index += 1
            continue

        del holes[index]
        if relation is ClipRelation.A_INSIDE_B:
            merged = hole
        elif relation is ClipRelation.CROSSING:
            union = clip_shells(merged, hole, precision, external=False, union=True).union
            outline = max(union, key=lambda clip: abs(signed_area(clip.shell)))
            merged = list(outline.shell)
            islands.extend(_Piece(reverse_ring(pocket)) for pocket in outline.holes)
        islands = _subtract_all(islands, [hole], precision)
        index = 0

    return [_Piece(piece.shell, [*holes, merged]), *islands]


class GreinerHormannAlgorithm:
    """Clips two polygons with holes using the Greiner–Hormann method.

    Produces the internal clips (A ∩ B) and, unless disabled, the external
    clips of each polygon (A − B and B − A). Results are computed on first
    access and cached; every clip has a closed CCW shell and closed CW
    holes.

    Example:
        algorithm = GreinerHormannAlgorithm(square_a, square_b)
        algorithm.internal_clips     # [Clip(...)]
        algorithm.external_clips_a   # [Clip(...)]
    """

    def __init__(
        self,
        first: Any,
        second: Any,
        compute_external_clips: bool = True,
        precision_model: PrecisionModel | None = None,
    ) -> None:
        """Initialize and validate the inputs.

        Args:
            first: Polygon A, or its shell as a coordinate sequence
            second: Polygon B, or its shell as a coordinate sequence
            compute_external_clips: Whether to compute A − B and B − A
            precision_model: Precision model (defaults to floating)

        Raises:
            MissingGeometryError: If a polygon is missing
            InvalidRingError: If a ring is degenerate, open or wrongly oriented
            SelfIntersectionError: If a ring intersects or touches itself
        """
        self._precision = precision_model or PrecisionModel.default()
        self._first = as_polygon(first, "first")
        self._second = as_polygon(second, "second")
        for polygon, name in ((self._first, "first"), (self._second, "second")):
            validate_polygon(polygon, name)
            ensure_simple(polygon, name, self._precision)

        self._compute_external = compute_external_clips
        self._internal: tuple[Clip, ...] | None = None
        self._external_a: tuple[Clip, ...] | None = None
        self._external_b: tuple[Clip, ...] | None = None

    @property
    def first_polygon(self) -> Polygon:
        return self._first

    @property
    def second_polygon(self) -> Polygon:
        return self._second

    @property
    def precision_model(self) -> PrecisionModel:
        return self._precision

    @property
    def compute_external_clips(self) -> bool:
        return self._compute_external

    @compute_external_clips.setter
    def compute_external_clips(self, value: bool) -> None:
        """Enable or disable external clips.

        Disabling clears cached external clips; enabling forces the next
        access to recompute everything.
        """
        self._compute_external = value
        if value:
            if self._external_a is None:
                self._internal = None
        else:
            self._external_a = None
            self._external_b = None

    def compute(self) -> ClipResult:
        """Run the clipping once and return the cached result."""
        if self._internal is None:
            internal, external_a, external_b = self._compute_clips()
            self._internal = tuple(internal)
            if self._compute_external:
                self._external_a = tuple(external_a)
                self._external_b = tuple(external_b)
            logger.debug(
                "Clipping complete",
                algorithm=type(self).__name__,
                internal=len(self._internal),
                external_a=len(self._external_a or ()),
                external_b=len(self._external_b or ()),
            )
        return ClipResult(self._internal, self._external_a or (), self._external_b or ())

    @property
    def internal_clips(self) -> list[Clip]:
        """Regions inside both polygons."""
        return list(self.compute().internal)

    @property
    def external_clips_a(self) -> list[Clip]:
        """Regions of the first polygon outside the second."""
        return list(self.compute().external_a)

    @property
    def external_clips_b(self) -> list[Clip]:
        """Regions of the second polygon outside the first."""
        return list(self.compute().external_b)

    def _compute_clips(self) -> tuple[list[Clip], list[Clip], list[Clip]]:
        precision = self._precision
        shell_a, shell_b = list(self._first.shell), list(self._second.shell)
        cutters_a = [reverse_ring(hole) for hole in self._first.holes]
        cutters_b = [reverse_ring(hole) for hole in self._second.holes]

        base = clip_shells(shell_a, shell_b, precision, external=self._compute_external)
        logger.debug(
            "Shells related",
            relation=base.relation.name,
            holes_a=len(cutters_a),
            holes_b=len(cutters_b),
        )

        internal = _subtract_all(_pieces(base.internal), cutters_a + cutters_b, precision)
        if not self._compute_external:
            return [p.to_clip() for p in internal], [], []

        external_a = _subtract_all(_pieces(base.external_a), cutters_a, precision)
        for cutter in cutters_b:
            uncovered = clip_shells(shell_a, cutter, precision, external=False).internal
            external_a += _subtract_all(_pieces(uncovered), cutters_a, precision)

        external_b = _subtract_all(_pieces(base.external_b), cutters_b, precision)
        for cutter in cutters_a:
            uncovered = clip_shells(shell_b, cutter, precision, external=False).internal
            external_b += _subtract_all(_pieces(uncovered), cutters_b, precision)

        return (
            [p.to_clip() for p in internal],
            [p.to_clip() for p in external_a],
            [p.to_clip() for p in external_b],
        )


def clip(first: Any, second: Any, precision_model: PrecisionModel | None = None) -> list[Clip]:
    """Compute the common parts of two polygons.

    Args:
        first: Polygon A, or its shell as a coordinate sequence
        second: Polygon B, or its shell as a coordinate sequence
        precision_model: Precision model (defaults to floating)

    Returns:
        Internal clips of the two polygons
    """
    return GreinerHormannAlgorithm(first, second, False, precision_model).internal_clips
