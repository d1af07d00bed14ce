"""Logging setup for the ``plyfailure`` command line and scripts.

Library modules only create their own ``logging.getLogger(__name__)``; handlers
are attached here, to the package logger, by the application.
"""
import logging
import sys
from typing import Optional, TextIO

PACKAGE_LOGGER = "plyfailure"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Attach console and optional file handlers to the package logger.

    Handlers from a previous call are removed and closed first.

    Args:
        level: Logging level for the logger and its handlers.
        log_file: Optional path of a log file, overwritten on each call.
        stream: Console stream, ``sys.stdout`` by default.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler(stream or sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    target = f" and {log_file}" if log_file else ""
    logger.info(f"plyfailure logging at {logging.getLevelName(level)} to console{target}")
    return logger
