"""
DualStream - tee text output into two streams

Duplicates everything written to a stream into two destinations, such as the
console and a log file, with optional line timestamps and forced messages.
"""

from dualstream.__version__ import __version__

__title__ = "dualstream"
__description__ = "Tee text output to two streams with optional line timestamps"
__author__ = "DualStream Team"
__license__ = "Apache-2.0"

from dualstream.exceptions import (
    ConfigurationError,
    DualStreamError,
    ForceMessageTimeout,
    SinkError,
    SinkFlushError,
    SinkWriteError,
)
from dualstream.stream import TIMESTAMP_WIDTH, TeeBuffer, TeeStream, tee_stdout

from dualstream.logger import (
    configure_logger,
    get_logger,
    debug,
    info,
    error,
    setup_file_logging,
    setup_application_logging,
)

__all__ = [
    "__version__",
    "TIMESTAMP_WIDTH",
    "TeeBuffer",
    "TeeStream",
    "tee_stdout",
    # Exceptions
    "DualStreamError",
    "SinkError",
    "SinkWriteError",
    "SinkFlushError",
    "ForceMessageTimeout",
    "ConfigurationError",
    # Logging
    "configure_logger",
    "get_logger",
    "debug",
    "info",
    "error",
    "setup_file_logging",
    "setup_application_logging",
]
