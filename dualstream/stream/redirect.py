"""
Redirect Module - tee the process's standard output into a log file.
"""

import contextlib
import io
import os
import sys
from typing import Iterator, TextIO

from dualstream.logger import debug
from dualstream.stream.tee_stream import TeeStream


class ConsoleSwitchStream(io.TextIOBase):
    """
    Writes through another TeeStream with a different console destination.

    The log file keeps a single line state and lock, so lines from both
    console streams are decorated once and never interleave within a write.
    """

    def __init__(self, tee: TeeStream, console: TextIO):
        super().__init__()
        self.tee = tee
        self.console = console

    @property
    def encoding(self) -> str:
        return getattr(self.console, "encoding", None) or "utf-8"

    def writable(self) -> bool:
        return True

    def isatty(self) -> bool:
        return getattr(self.console, "isatty", lambda: False)()

    def write(self, s: str) -> int:
        with self._switched():
            return self.tee.write(s)

    def flush(self) -> None:
        with self._switched():
            self.tee.flush()

    @contextlib.contextmanager
    def _switched(self) -> Iterator[None]:
        buf = self.tee.tee_buffer
        with buf.lock:
            previous = buf.sink1
            buf.sink1 = self.console
            try:
                yield
            finally:
                buf.sink1 = previous


@contextlib.contextmanager
def tee_stdout(
    log_file: str,
    mode: str = "w",
    encoding: str = "utf-8",
    timestamp_console: bool = False,
    timestamp_file: bool = False,
    stderr: bool = False,
) -> Iterator[TeeStream]:
    """
    Send everything printed inside the block to the console and a log file.

    The log file is opened here and closed on exit; the original console
    streams are restored even if the block raises.

    Args:
        log_file: Path of the log file (parent directories are created)
        mode: File open mode, "w" to truncate or "a" to append
        encoding: Log file encoding
        timestamp_console: Timestamp lines shown on the console
        timestamp_file: Timestamp lines written to the log file
        stderr: Also tee sys.stderr into the same log file

    Yields:
        The TeeStream installed as sys.stdout
    """
    if mode not in ("w", "a"):
        raise ValueError(f"Log file mode must be 'w' or 'a', got {mode!r}")

    log_dir = os.path.dirname(log_file)
    if log_dir and not os.path.exists(log_dir):
        os.makedirs(log_dir)

    original_stdout = sys.stdout
    original_stderr = sys.stderr

    with open(log_file, mode, encoding=encoding) as f:
        out = TeeStream(original_stdout, f, timestamp_console, timestamp_file)
        err = None
        if stderr:
            err = ConsoleSwitchStream(out, original_stderr)

        sys.stdout = out
        if err is not None:
            sys.stderr = err
        debug(f"Teeing stdout to {log_file} (mode {mode!r})")

        try:
            yield out
        finally:
            sys.stdout = original_stdout
            sys.stderr = original_stderr
            if err is not None:
                err.close()
            out.close()
            debug(f"Stopped teeing stdout to {log_file}")
