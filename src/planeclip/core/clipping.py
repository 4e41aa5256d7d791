"""Clipping engine selection."""

from typing import Any

from planeclip.config import ClippingAlgorithm, ClippingConfig
from planeclip.core.greiner_hormann import GreinerHormannAlgorithm
from planeclip.core.weiler_atherton import WeilerAthertonAlgorithm
from planeclip.domain import PrecisionModel

ENGINES: dict[ClippingAlgorithm, type[GreinerHormannAlgorithm]] = {
    ClippingAlgorithm.GREINER_HORMANN: GreinerHormannAlgorithm,
    ClippingAlgorithm.WEILER_ATHERTON: WeilerAthertonAlgorithm,
}


def create_clipper(
    first: Any,
    second: Any,
    config: ClippingConfig | None = None,
    precision_model: PrecisionModel | None = None,
) -> GreinerHormannAlgorithm:
    """Create the clipping engine selected by the configuration.

    Args:
        first: Polygon A, or its shell as a coordinate sequence
        second: Polygon B, or its shell as a coordinate sequence
        config: Clipping configuration (defaults to Greiner–Hormann with
            external clips)
        precision_model: Precision model (defaults to floating)

    Returns:
        An unevaluated clipping engine

    Raises:
        InvalidArgumentError: If either polygon fails validation
        SelfIntersectionError: If a ring intersects itself
    """
    config = config or ClippingConfig()
    engine = ENGINES[ClippingAlgorithm(config.algorithm)]
    return engine(
        first,
        second,
        compute_external_clips=config.compute_external_clips,
        precision_model=precision_model,
    )
