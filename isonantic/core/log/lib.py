"""Core logging implementation for isonantic."""

import logging
import sys
from typing import Optional

__all__ = ["get_logger", "setup_logging"]

DEFAULT_LOGGER_NAME = "isonantic"


def setup_logging(level: Optional[int] = None, stream=sys.stderr) -> None:
    """Configure basic logging.

    Args:
        level: Logging level. Defaults to ISONANTIC_LOG_LEVEL.
        stream: Output stream.
    """
    if level is None:
        from isonantic.config import get_log_level

        level = get_log_level()

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=stream,
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Name of the logger.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name or DEFAULT_LOGGER_NAME)
