"""Utility functions for planeclip.

This module provides utility functions including:

- Logging setup and configuration
- Operation statistics for CLI runs
"""

from planeclip.utils.logging import (
    OperationLogger,
    OperationStats,
    configure_logging,
)

__all__ = [
    "OperationLogger",
    "OperationStats",
    "configure_logging",
]
