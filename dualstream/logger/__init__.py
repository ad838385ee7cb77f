"""
DualStream logging module

Diagnostic logging helpers used across the package.
"""

from dualstream.logger.core import (
    configure_logger,
    get_logger,
    debug,
    info,
    error,
)

from dualstream.logger.config import setup_file_logging, setup_application_logging

__all__ = [
    "configure_logger",
    "get_logger",
    "debug",
    "info",
    "error",
    "setup_file_logging",
    "setup_application_logging",
]
