"""Tests for structured logging configuration."""

import json
import logging

import pytest
import structlog

from cli.logging_config import _redact_sensitive, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for h in root.handlers:
        if h not in handlers:
            h.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


class TestLoggingConfig:
    """Test structlog setup modes."""

    def test_console_mode(self, capsys):
        """Console mode writes readable lines to stderr."""
        setup_logging(json_mode=False, level="DEBUG")
        structlog.get_logger().info("habit_added", habit="abc")
        captured = capsys.readouterr()
        assert "habit_added" in captured.err

    def test_json_mode(self, capsys):
        """JSON mode produces parseable JSON."""
        setup_logging(json_mode=True, level="DEBUG")
        structlog.get_logger().info("state_saved", habits=3)
        line = capsys.readouterr().err.strip().splitlines()[-1]
        record = json.loads(line)
        assert record["event"] == "state_saved"
        assert record["habits"] == 3
        assert record["level"] == "info"

    def test_level_filtering(self):
        """Log level filters lower messages."""
        setup_logging(json_mode=False, level="WARNING")
        root = logging.getLogger()
        assert root.level == logging.WARNING

    def test_default_level_is_info(self):
        setup_logging()
        assert logging.getLogger().level == logging.INFO

    def test_log_file_receives_debug(self, tmp_path):
        log_file = tmp_path / "logs" / "cosmos.log"
        setup_logging(level="WARNING", log_file=log_file)
        structlog.get_logger().debug("reminder_skipped", reason="no_habits")
        for h in logging.getLogger().handlers:
            h.flush()

        record = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert record["event"] == "reminder_skipped"
        assert logging.getLogger().level == logging.DEBUG


class TestRedaction:
    def test_redacts_sensitive_keys(self):
        out = _redact_sensitive(None, None, {"event": "backup", "passphrase": "hunter2"})
        assert out["passphrase"] == "REDACTED"
        assert out["event"] == "backup"

    def test_redacts_inline_values(self):
        out = _redact_sensitive(None, None, {"event": "failed with passphrase=hunter2"})
        assert "hunter2" not in out["event"]
        assert "REDACTED" in out["event"]

    def test_leaves_other_values(self):
        out = _redact_sensitive(None, None, {"event": "habit_added", "habit": "abc"})
        assert out == {"event": "habit_added", "habit": "abc"}
