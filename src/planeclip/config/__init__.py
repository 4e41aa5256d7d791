"""Configuration management for planeclip.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- PrecisionConfig: Precision model settings
- ClippingConfig: Clipping engine settings
- OutputConfig: GeoJSON output settings
- LoggingConfig: Logging settings
- PlaneclipSettings: Main application settings
"""

from planeclip.config.settings import (
    ClippingAlgorithm,
    ClippingConfig,
    LoggingConfig,
    OutputConfig,
    PlaneclipSettings,
    PrecisionConfig,
    get_default_settings,
)

__all__ = [
    "ClippingAlgorithm",
    "ClippingConfig",
    "LoggingConfig",
    "OutputConfig",
    "PlaneclipSettings",
    "PrecisionConfig",
    "get_default_settings",
]
