"""Tests for logging configuration."""

import logging

import pytest
from pythonjsonlogger import jsonlogger

from config.logging import setup_logging


def _default_handler(logger):
    return next(h for h in logger.handlers if h.get_name() == "default")


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    setup_logging()


class TestSetupLogging:
    """Test formatter selection."""

    def test_json_by_default(self):
        setup_logging()

        handler = _default_handler(logging.getLogger())
        assert isinstance(handler.formatter, jsonlogger.JsonFormatter)

    def test_standard_formatter(self):
        setup_logging(stream="ext://sys.stderr", level="warning", formatter="standard")

        root = logging.getLogger()
        handler = _default_handler(root)
        assert not isinstance(handler.formatter, jsonlogger.JsonFormatter)
        assert handler.formatter._fmt == "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
        assert root.level == logging.WARNING
