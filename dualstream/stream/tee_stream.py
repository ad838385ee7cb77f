"""
Tee Stream Module - text stream facade over a TeeBuffer.

TeeStream can be used wherever a writable text stream is expected
(``print(..., file=stream)``, ``sys.stdout = stream``) and sends everything
written to it to both of its destinations.
"""

import io
from typing import Optional, TextIO

from dualstream.exceptions import ForceMessageTimeout, SinkFlushError, SinkWriteError
from dualstream.logger import debug
from dualstream.stream.tee_buffer import TeeBuffer


class TeeStream(io.TextIOBase):
    """
    Text stream that tees output to two destination streams.

    Timestamps can be enabled per destination; they are written at the start
    of every line. Closing a TeeStream leaves both destinations open.
    """

    def __init__(
        self,
        stream1: TextIO,
        stream2: TextIO,
        timestamp1: bool = False,
        timestamp2: bool = False,
        buffer: Optional[TeeBuffer] = None,
    ):
        """
        Initialize the stream.

        Args:
            stream1: First destination stream
            stream2: Second destination stream
            timestamp1: Timestamp lines written to the first destination
            timestamp2: Timestamp lines written to the second destination
            buffer: Pre-built TeeBuffer over stream1 and stream2 to use
                instead of creating one

        Raises:
            ValueError: If buffer does not write to stream1 and stream2
        """
        super().__init__()
        self._closing = False
        if buffer is not None and (
            buffer.sink1 is not stream1 or buffer.sink2 is not stream2
        ):
            raise ValueError("buffer must write to stream1 and stream2")
        self.tee_buffer = buffer or TeeBuffer(stream1, stream2)

        if timestamp1:
            self.enable_timestamp(1)
        else:
            self.disable_timestamp(1)

        if timestamp2:
            self.enable_timestamp(2)
        else:
            self.disable_timestamp(2)

    @property
    def encoding(self) -> str:
        return getattr(self.tee_buffer.sink1, "encoding", None) or "utf-8"

    def writable(self) -> bool:
        return True

    def isatty(self) -> bool:
        return any(
            getattr(sink, "isatty", lambda: False)()
            for sink in (self.tee_buffer.sink1, self.tee_buffer.sink2)
        )

    def enable_timestamp(self, index: int) -> None:
        """Timestamp the next and following lines on destination ``index``."""
        self._set_timestamp(index, True)

    def disable_timestamp(self, index: int) -> None:
        """Stop timestamping lines on destination ``index``."""
        self._set_timestamp(index, False)

    def timestamp_enabled(self, index: int) -> bool:
        self._check_index(index)
        if index == 1:
            return self.tee_buffer.timestamp_enabled_sink1
        return self.tee_buffer.timestamp_enabled_sink2

    def get_last_timestamp(self) -> str:
        """Return the most recent timestamp, or an empty string."""
        return self.tee_buffer.last_timestamp

    def write(self, s: str) -> int:
        """
        Write a string to both destinations.

        Args:
            s: Text to write

        Returns:
            Number of characters written

        Raises:
            SinkWriteError: If either destination failed to accept the text
        """
        if self.closed:
            raise ValueError("I/O operation on closed TeeStream")
        if not isinstance(s, str):
            raise TypeError(f"write() argument must be str, not {type(s).__name__}")

        buf = self.tee_buffer
        with buf.lock:
            for char in s:
                if not buf.put(char):
                    self._raise_sink_error(SinkWriteError, "write")
        return len(s)

    def flush(self) -> None:
        """
        Flush both destinations.

        Raises:
            SinkFlushError: If either destination failed to flush
        """
        if self.closed or getattr(self, "_closing", False):
            return
        if not self.tee_buffer.sync():
            self._raise_sink_error(SinkFlushError, "flush")

    def close(self) -> None:
        """Mark the stream closed. Both destinations stay open."""
        if self.closed:
            return
        self._closing = True
        self.tee_buffer.sync()
        super().close()

    def force_message(self, message: str, timeout: Optional[float] = None) -> None:
        """
        Write a message on its own line to both destinations and wait for it.

        The message is terminated with a newline and emitted at the next line
        boundary. If another thread is in the middle of a write, its next
        character emits the message; otherwise this call triggers it by
        writing a newline. The call returns once the message has reached
        both destinations.

        Args:
            message: Message text, without the line terminator
            timeout: Seconds to wait for the message to be emitted
                (default: None, wait indefinitely)

        Raises:
            ForceMessageTimeout: If the message was not emitted within timeout;
                the request is withdrawn
            SinkWriteError: If either destination failed to accept the message
        """
        if self.closed:
            raise ValueError("I/O operation on closed TeeStream")

        buf = self.tee_buffer
        done = buf.request_force(message + "\n")

        ok = True
        if buf.lock.acquire(timeout=-1 if timeout is None else timeout):
            try:
                if buf.force_pending:
                    ok = buf.put("\n")
            finally:
                buf.lock.release()

        if not done.is_set() and buf.withdraw_force(done):
            raise ForceMessageTimeout(
                f"Forced message not emitted within {timeout} seconds"
            )
        done.wait()
        if not ok:
            self._raise_sink_error(SinkWriteError, "write forced message to")
        debug(f"Forced message emitted: {message!r}")

    def _set_timestamp(self, index: int, enabled: bool) -> None:
        self._check_index(index)
        with self.tee_buffer.lock:
            if index == 1:
                self.tee_buffer.timestamp_enabled_sink1 = enabled
            else:
                self.tee_buffer.timestamp_enabled_sink2 = enabled

    @staticmethod
    def _check_index(index: int) -> None:
        if index not in (1, 2):
            raise ValueError(f"Destination index must be 1 or 2, got {index!r}")

    def _raise_sink_error(self, error_class, action: str):
        buf = self.tee_buffer
        destination = buf.last_error_destination
        raise error_class(
            f"Failed to {action} destination {destination}: {buf.last_error}",
            destination,
        ) from buf.last_error
