"""Logging set-up for command-line runs.

Modules log through ``logging.getLogger(__name__)``; only the
``stripstress`` namespace logger gets handlers, so library use stays
silent unless the application calls :func:`setup_logging`.
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(level: int = logging.INFO, log_file: str | None = None) -> logging.Logger:
    """Attach console and optional file handlers to the package logger.

    Calling it again replaces the handlers of the previous call.

    Args:
        level: Threshold for the logger and its handlers.
        log_file: If given, also write the log to this file
            (overwritten).

    Returns:
        The ``stripstress`` logger.
    """
    logger = logging.getLogger("stripstress")
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging to %s", log_file or "stderr")
    return logger
