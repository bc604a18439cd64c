"""
Logging configuration for the kob package.

Library modules only create loggers through :func:`get_logger`; handlers are
attached by whoever runs the code (scripts, the league application, tests).
"""

from __future__ import annotations

import logging
import sys
import time
from contextlib import contextmanager
from pathlib import Path

ROOT_LOGGER_NAME = "kob"


def setup_logging(
    level: str | int = logging.INFO,
    log_file: str | Path | None = None,
    format_style: str = "detailed",
) -> logging.Logger:
    """Set up console (and optional file) logging for the kob package.

    Args:
        level: Logging level name or number. Defaults to logging.INFO.
        log_file: Optional file to also write logs to.
        format_style: "simple", "detailed" or "json".

    Returns:
        The configured package logger.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    if format_style == "simple":
        format_string = "%(levelname)s: %(message)s"
    elif format_style == "json":
        format_string = (
            '{"timestamp": "%(asctime)s", "level": "%(levelname)s", '
            '"module": "%(name)s", "message": "%(message)s"}'
        )
    else:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"

    formatter = logging.Formatter(format_string)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a child of the package logger for ``name`` (usually ``__name__``)."""
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


@contextmanager
def log_timing(logger: logging.Logger, operation: str, level: int = logging.DEBUG):
    """Log how long the wrapped block took."""
    start_time = time.perf_counter()
    logger.log(level, "Starting %s", operation)
    try:
        yield
    except Exception as exception:
        logger.error(
            "Failed %s after %.3fs: %s", operation, time.perf_counter() - start_time, exception
        )
        raise
    logger.log(level, "Completed %s in %.3fs", operation, time.perf_counter() - start_time)


__all__ = ["ROOT_LOGGER_NAME", "get_logger", "log_timing", "setup_logging"]
