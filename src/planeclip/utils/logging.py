"""Logging utilities for planeclip."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog


@dataclass
class OperationStats:
    """Statistics from one CLI run."""

    rings_read: int = 0
    intersections_found: int = 0
    clips_produced: int = 0
    error_count: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate run duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in list(root_logger.handlers):
        if getattr(handler, "_planeclip", False):
            root_logger.removeHandler(handler)
            handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        file_handler._planeclip = True  # type: ignore[attr-defined]
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    console_handler._planeclip = True  # type: ignore[attr-defined]
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("planeclip")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level if log_file else console_level,
    )

    return logger


class OperationLogger:
    """Logger for tracking CLI operations and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = OperationStats()

    def log_rings_loaded(self, source: str, ring_count: int) -> None:
        """Log rings read from an input file."""
        self._logger.info("Rings loaded", source=source, rings=ring_count)
        self._stats.rings_read += ring_count

    def log_intersections(self, source: str, count: int, duration_ms: float) -> None:
        """Log a completed intersection sweep."""
        self._logger.info(
            "Intersections computed",
            source=source,
            intersections=count,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.intersections_found += count

    def log_simplicity(self, source: str, ring_index: int, simple: bool) -> None:
        """Log the simplicity check of one ring."""
        self._logger.debug("Ring checked", source=source, ring=ring_index, simple=simple)

    def log_clips(
        self,
        algorithm: str,
        internal: int,
        external_a: int,
        external_b: int,
        duration_ms: float,
    ) -> None:
        """Log a completed clipping operation."""
        self._logger.info(
            "Polygons clipped",
            algorithm=algorithm,
            internal=internal,
            external_a=external_a,
            external_b=external_b,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.clips_produced += internal + external_a + external_b

    def log_error(
        self,
        source: str,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log a failed operation."""
        self._logger.error(
            "Operation failed",
            source=source,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((source, str(error)))

    @property
    def stats(self) -> OperationStats:
        """Get current operation statistics."""
        return self._stats
