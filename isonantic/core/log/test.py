"""Tests for core logging module."""

import logging
from io import StringIO

import pytest

from .lib import get_logger, setup_logging


class TestLogging:
    """Test core logging API."""

    @pytest.mark.unit
    def test_get_logger(self) -> None:
        """Verify logger instance creation."""
        logger = get_logger("test")
        assert logger.name == "test"
        assert isinstance(logger, logging.Logger)

    @pytest.mark.unit
    def test_get_logger_default_name(self) -> None:
        """Verify default logger name."""
        logger = get_logger()
        assert logger.name == "isonantic"

    @pytest.mark.unit
    def test_module_loggers_are_children(self) -> None:
        """Module loggers propagate to the package logger."""
        logger = get_logger("isonantic.schema.primitives")
        assert logger.parent is not None
        assert logger.parent.name.startswith("isonantic")

    @pytest.mark.unit
    def test_setup_logging(self) -> None:
        """Verify logging setup."""
        stream = StringIO()
        setup_logging(level=logging.DEBUG, stream=stream)
        logger = get_logger("test_setup")
        logger.debug("test message")

        # basicConfig is a no-op when logging is already configured,
        # so only the API contract is checked here.
        assert logger.level == logging.NOTSET

    @pytest.mark.unit
    def test_setup_logging_reads_environment(self, monkeypatch) -> None:
        """Level falls back to ISONANTIC_LOG_LEVEL when not given."""
        monkeypatch.setenv("ISONANTIC_LOG_LEVEL", "DEBUG")
        setup_logging(stream=StringIO())
        assert get_logger().name == "isonantic"
