"""
Exception types raised by DualStream.

TeeBuffer itself reports destination failures through its return values;
the classes below are raised by the higher level facade, the redirect helper
and the command line interface.
"""

from typing import Optional


class DualStreamError(Exception):
    """Base class for all DualStream errors."""


class SinkError(DualStreamError, OSError):
    """A destination sink failed."""

    def __init__(self, message: str, destination: Optional[int] = None):
        super().__init__(message)
        self.destination = destination


class SinkWriteError(SinkError):
    """Writing a character to one of the destinations failed."""


class SinkFlushError(SinkError):
    """Flushing one of the destinations failed."""


class ForceMessageTimeout(DualStreamError, TimeoutError):
    """A forced message was not emitted before the wait timed out."""


class ConfigurationError(DualStreamError, ValueError):
    """A configuration file could not be used."""
