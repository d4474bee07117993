"""Unit tests for CLI logging setup."""

import logging

import pytest

from md2delta.logging_utils import configure_logging, resolve_log_level


@pytest.mark.unit
class TestResolveLogLevel:
    """Tests for level name resolution."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("debug", logging.DEBUG),
            ("WARNING", logging.WARNING),
            (logging.ERROR, logging.ERROR),
            ("loud", logging.INFO),
        ],
    )
    def test_levels(self, value, expected):
        """Names are case-insensitive and unknown names fall back to INFO."""
        assert resolve_log_level(value) == expected


@pytest.mark.unit
class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_replaces_handlers(self):
        """Calling twice leaves a single console handler."""
        configure_logging("INFO")
        root = configure_logging("DEBUG")

        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1

    def test_log_file(self, tmp_path):
        """Records are copied to the log file."""
        log_path = tmp_path / "run.log"
        root = configure_logging("INFO", log_file=str(log_path))
        logging.getLogger("md2delta.test").info("hello file")

        for handler in root.handlers:
            handler.flush()
            if isinstance(handler, logging.FileHandler):
                handler.close()

        assert "INFO: hello file" in log_path.read_text(encoding="utf-8")

    def test_trace_format(self):
        """Trace mode includes the logger name."""
        root = configure_logging("INFO", trace_mode=True)
        assert "%(name)s" in root.handlers[0].formatter._fmt
