#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for logging setup helpers."""

import logging
from pathlib import Path

import pytest

from mdcallouts.logging_utils import PLAIN_FORMAT, TRACE_FORMAT, configure_logging, resolve_log_level


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Put the root logger back the way the test runner had it."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.unit
class TestResolveLogLevel:
    """Test level resolution."""

    @pytest.mark.parametrize(
        "log_level,kwargs,expected",
        [
            ("DEBUG", {}, logging.DEBUG),
            ("error", {}, logging.ERROR),
            (None, {}, logging.WARNING),
            (logging.INFO, {}, logging.INFO),
            ("ERROR", {"trace": True}, logging.DEBUG),
            ("WARNING", {"verbose": True}, logging.DEBUG),
            ("ERROR", {"verbose": True}, logging.ERROR),
            ("LOUD", {}, logging.INFO),
        ],
    )
    def test_levels(self, log_level, kwargs, expected):
        """Trace wins, verbose upgrades the default, unknown names fall back to INFO."""
        assert resolve_log_level(log_level, **kwargs) == expected


@pytest.mark.unit
class TestConfigureLogging:
    """Test handler installation."""

    def test_plain(self):
        """One stderr handler with the plain format."""
        root = configure_logging("INFO")

        assert root is logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert root.handlers[0].formatter._fmt == PLAIN_FORMAT

    def test_trace_format(self):
        """Trace mode adds timestamps and logger names."""
        root = configure_logging(logging.DEBUG, trace_mode=True)
        assert root.handlers[0].formatter._fmt == TRACE_FORMAT

    def test_log_file(self, tmp_path: Path):
        """Records also go to the log file."""
        log_file = tmp_path / "run.log"
        root = configure_logging("INFO", log_file=str(log_file))
        logging.getLogger("mdcallouts.test").info("hello file")

        assert len(root.handlers) == 2
        assert "hello file" in log_file.read_text(encoding="utf-8")

    def test_unwritable_log_file(self, tmp_path: Path):
        """An unusable log file is reported, not raised."""
        root = configure_logging("INFO", log_file=str(tmp_path / "missing" / "run.log"))
        assert len(root.handlers) == 1

    def test_repeated_calls_do_not_stack_handlers(self):
        """Handlers are replaced on each call."""
        configure_logging("INFO")
        root = configure_logging("DEBUG")
        assert len(root.handlers) == 1
