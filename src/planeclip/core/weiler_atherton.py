"""Weiler–Atherton clipping of polygons with holes.

Unlike the Greiner–Hormann engine, every shell and hole of both polygons
goes into one overlay graph and is walked in a single pass. Holes are used
with their clockwise orientation, so each ring keeps its polygon's
interior on the left and the same walk rules apply to shells and holes.
Rings without crossings are placed by a containment test.
"""

import structlog

from planeclip.core.greiner_hormann import GreinerHormannAlgorithm
from planeclip.core.overlay import EXTERNAL_A, EXTERNAL_B, INTERNAL, OverlayGraph, Walk, assemble
from planeclip.domain import Clip

logger = structlog.get_logger(__name__)


class WeilerAthertonAlgorithm(GreinerHormannAlgorithm):
    """Clips two polygons with holes using the Weiler–Atherton method.

    Accepts the same inputs, raises the same validation errors and exposes
    the same results as GreinerHormannAlgorithm.
    """

    def _compute_clips(self) -> tuple[list[Clip], list[Clip], list[Clip]]:
        graph = OverlayGraph(self.first_polygon.rings, self.second_polygon.rings, self.precision_model)
        graph.find_intersections()
        graph.classify()
        graph.link()
        logger.debug(
            "Overlay graph built",
            crossings=len(graph.intersections),
            tangential=graph.removed_count,
        )

        internal = self._collect(graph, INTERNAL)
        if not self.compute_external_clips:
            return internal, [], []
        return internal, self._collect(graph, EXTERNAL_A), self._collect(graph, EXTERNAL_B)

    def _collect(self, graph: OverlayGraph, walk: Walk) -> list[Clip]:
        rings = graph.trace(walk) + graph.untouched_rings(walk)
        return assemble(rings, self.precision_model)
