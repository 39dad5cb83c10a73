"""Logging for mdblog: an 'mdblog' logger tree with a console and an optional file sink.

Console output is kept to warnings by default so command output (listings,
raw documents, rendered pages) stays clean on stdout. A log file, when given,
always records the full debug trail of the run regardless of console level.
"""

from __future__ import annotations

import logging
from pathlib import Path

ROOT_LOGGER = "mdblog"
CONSOLE_FORMAT = "[mdblog] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Logger for one mdblog module, e.g. get_logger("store") -> 'mdblog.store'."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER)


def console_level(verbose: bool = False, quiet: bool = False) -> int:
    """--verbose wins over --quiet; neither means WARNING."""
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    return logging.WARNING


def _handler(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """(Re)attach the console handler and, when log_file is set, a DEBUG file handler."""
    level = console_level(verbose, quiet)
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(logging.DEBUG if log_file is not None else level)
    logger.propagate = False

    # Repeated CLI invocations in one process must not stack handlers.
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    logger.addHandler(_handler(logging.StreamHandler(), level, CONSOLE_FORMAT))
    if log_file is not None:
        logger.addHandler(_handler(logging.FileHandler(log_file, encoding="utf-8"), logging.DEBUG, FILE_FORMAT))

    logger.debug("Logging configured: console=%s file=%s", logging.getLevelName(level), log_file)
    return logger


__all__ = ["configure_logging", "console_level", "get_logger"]
