"""Configuration settings for planeclip."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from planeclip.domain import PrecisionModel, PrecisionModelType


class ClippingAlgorithm(str, Enum):
    """Polygon clipping engine."""

    GREINER_HORMANN = "greiner-hormann"
    WEILER_ATHERTON = "weiler-atherton"


class PrecisionConfig(BaseModel):
    """Configuration for the coordinate precision model.

    A fixed model snaps every computed coordinate to a grid with the given
    spacing; floating models keep full double (or single) precision.
    """

    model_type: PrecisionModelType = Field(
        default=PrecisionModelType.FLOATING,
        description="Precision model type",
    )
    scale: float = Field(
        default=1.0,
        gt=0.0,
        description="Grid spacing for the fixed model",
    )

    def create_model(self) -> PrecisionModel:
        """Build the precision model described by this configuration."""
        return PrecisionModel(self.model_type, self.scale)


class ClippingConfig(BaseModel):
    """Configuration for polygon clipping."""

    algorithm: ClippingAlgorithm = Field(
        default=ClippingAlgorithm.GREINER_HORMANN,
        description="Clipping engine",
    )
    compute_external_clips: bool = Field(
        default=True,
        description="Also compute the parts of each polygon outside the other",
    )


class OutputConfig(BaseModel):
    """Configuration for written GeoJSON."""

    indent: int | None = Field(
        default=2,
        ge=0,
        le=8,
        description="JSON indentation (None = compact)",
    )
    precision_digits: int | None = Field(
        default=None,
        ge=0,
        le=17,
        description="Round written coordinates to this many decimals (None = as computed)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class PlaneclipSettings(BaseModel):
    """Main application settings."""

    precision: PrecisionConfig = Field(default_factory=PrecisionConfig)
    clipping: ClippingConfig = Field(default_factory=ClippingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> PlaneclipSettings:
    """Get default application settings."""
    return PlaneclipSettings()
