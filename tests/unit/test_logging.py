"""Unit tests for logging utilities."""

import logging
from unittest.mock import MagicMock

from planeclip.utils import OperationLogger, OperationStats, configure_logging


class TestOperationStats:
    """Tests for OperationStats."""

    def test_duration(self):
        """Test duration from start and end times."""
        stats = OperationStats(start_time=10.0, end_time=12.5)
        assert stats.duration_seconds == 2.5

    def test_duration_unfinished(self):
        """Test an unfinished run has no duration."""
        assert OperationStats(start_time=10.0).duration_seconds == 0.0


class TestOperationLogger:
    """Tests for OperationLogger."""

    def test_counts_accumulate(self):
        """Test statistics are updated by each log call."""
        logger = MagicMock()
        operation = OperationLogger(logger)
        operation.log_rings_loaded("a.geojson", 3)
        operation.log_rings_loaded("b.geojson", 2)
        operation.log_intersections("a.geojson", 4, 1.234)
        operation.log_clips("greiner-hormann", 1, 2, 1, 5.0)

        assert operation.stats.rings_read == 5
        assert operation.stats.intersections_found == 4
        assert operation.stats.clips_produced == 4
        logger.info.assert_any_call("Rings loaded", source="a.geojson", rings=3)

    def test_log_error(self):
        """Test errors are counted and kept."""
        logger = MagicMock()
        operation = OperationLogger(logger)
        operation.log_error("a.geojson", ValueError("bad ring"))
        assert operation.stats.error_count == 1
        assert operation.stats.errors == [("a.geojson", "bad ring")]
        _, kwargs = logger.error.call_args
        assert kwargs["error_type"] == "ValueError"


class TestConfigureLogging:
    """Tests for configure_logging."""

    def _handlers(self):
        return [h for h in logging.getLogger().handlers if getattr(h, "_planeclip", False)]

    def test_file_output(self, tmp_path):
        """Test a log file receives JSON records."""
        log_file = tmp_path / "run.log"
        logger = configure_logging(log_file=log_file, quiet=True)
        logger.debug("Sample record", value=1)
        for handler in self._handlers():
            handler.flush()
        content = log_file.read_text(encoding="utf-8")
        assert "Logging initialized" in content
        assert '"value": 1' in content

    def test_reconfiguring_replaces_handlers(self, tmp_path):
        """Test repeated configuration does not stack handlers."""
        configure_logging(log_file=tmp_path / "one.log", quiet=True)
        configure_logging(quiet=True)
        handlers = self._handlers()
        assert len(handlers) == 1
        assert handlers[0].level == logging.ERROR
