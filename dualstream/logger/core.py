"""
Core logging utilities

Diagnostics for the package itself. They go to stderr and stay quiet below
WARNING by default: stdout is usually one of the teed destinations, and a
diagnostic line there would end up in the log file being produced.
"""

import logging
import os
import sys
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger("dualstream")
logger.setLevel(logging.WARNING)

console_handler = logging.StreamHandler(sys.stderr)
console_handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
logger.addHandler(console_handler)


def get_logger(name: str = "dualstream") -> logging.Logger:
    """Return the package logger or one of its children."""
    return logging.getLogger(name)


def configure_logger(
    level: int = logging.WARNING,
    log_format: str = DEFAULT_FORMAT,
    log_file: Optional[str] = None,
    verbose: bool = False,
    debug: bool = False,
) -> None:
    """
    Configure the package logger.

    Args:
        level: Log level (default: WARNING)
        log_format: Format applied to every handler
        log_file: Also write diagnostics to this file; a file already
            receiving diagnostics is not added twice
        verbose: Lower the level to INFO
        debug: Lower the level to DEBUG
    """
    if debug:
        level = logging.DEBUG
    elif verbose and level > logging.INFO:
        level = logging.INFO

    logger.setLevel(level)

    formatter = logging.Formatter(log_format)
    for handler in logger.handlers:
        handler.setFormatter(formatter)

    if log_file and not _has_file_handler(log_file):
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)


def _has_file_handler(log_file: str) -> bool:
    target = os.path.abspath(log_file)
    return any(
        isinstance(h, logging.FileHandler) and h.baseFilename == target
        for h in logger.handlers
    )


def debug(message: str, *args, **kwargs) -> None:
    logger.debug(message, *args, **kwargs)


def info(message: str, *args, **kwargs) -> None:
    logger.info(message, *args, **kwargs)


def error(message: str, *args, **kwargs) -> None:
    logger.error(message, *args, **kwargs)
