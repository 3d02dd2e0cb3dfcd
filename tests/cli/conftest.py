"""Fixtures for CLI tests."""

import logging

import pytest
import structlog


@pytest.fixture(autouse=True)
def restore_logging():
    """The cli group reconfigures logging on every invocation; undo it."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()
