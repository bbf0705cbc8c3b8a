"""Centralized logging configuration for the `balanzia` package.

Library modules only call `logging.getLogger(__name__)` and never attach
handlers themselves. Entrypoints call `config_configure_logging` once at startup.
"""

from __future__ import annotations

import logging
import sys
from typing import IO

_PACKAGE_LOGGER_NAME = "balanzia"
_DEFAULT_LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_configured = False


def config_configure_logging(level: str = "INFO", stream: IO[str] | None = None) -> None:
    """Attach one stream handler to the package logger exactly once.

    Args:
        level: Logging level name.
        stream: Optional output stream; defaults to stderr.

    Returns:
        None: Logger configuration is applied as a side effect.

    Raises:
        ValueError: Raised when level name is unknown.
    """

    global _configured
    if _configured:
        return

    numeric_level = logging.getLevelName(level.strip().upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"unsupported log level={level}")

    package_logger = logging.getLogger(_PACKAGE_LOGGER_NAME)
    for handler in list(package_logger.handlers):
        if isinstance(handler, logging.NullHandler):
            package_logger.removeHandler(handler)

    stream_handler = logging.StreamHandler(stream or sys.stderr)
    stream_handler.setFormatter(logging.Formatter(_DEFAULT_LOG_FORMAT))
    package_logger.addHandler(stream_handler)
    package_logger.setLevel(numeric_level)
    package_logger.propagate = False

    _configured = True


logging.getLogger(_PACKAGE_LOGGER_NAME).addHandler(logging.NullHandler())
