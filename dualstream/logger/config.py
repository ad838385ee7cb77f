"""
Logging setup for the command line application.
"""

import logging
import os
from typing import Optional

from dualstream.logger.core import configure_logger, get_logger


def setup_file_logging(log_file: str, level: int = logging.INFO) -> None:
    """
    Send diagnostics to ``log_file`` as well as stderr.

    The file must not be one of the teed destinations. Missing parent
    directories are created.
    """
    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    configure_logger(level=level, log_file=log_file)


def setup_application_logging(
    log_file: Optional[str] = None,
    verbose: bool = False,
    debug: bool = False,
) -> None:
    """
    Configure diagnostics for the ``dualstream`` command.

    Args:
        log_file: Diagnostics file path (default: None)
        verbose: Enable INFO diagnostics
        debug: Enable DEBUG diagnostics
    """
    configure_logger(log_file=log_file, verbose=verbose, debug=debug)

    logger = get_logger()
    logger.debug(
        f"Diagnostics at {logging.getLevelName(logger.level)}"
        + (f", also written to {log_file}" if log_file else "")
    )
