"""
Tee Buffer Module - character fan-out engine.

Every character handed to a TeeBuffer is written straight through to two
destination sinks. There is no internal buffering: the buffer decorates the
start of each line with an optional timestamp and an optional forced message,
then emits the character to both destinations one after the other.
"""

import datetime
import threading
import time
from typing import Callable, Optional, TextIO

from dualstream.logger import debug

# Display columns a timestamp occupies at the start of a decorated line
TIMESTAMP_WIDTH = 32

# Errors a destination may raise when it can no longer be written or flushed
SINK_ERRORS = (OSError, ValueError)


class TeeBuffer:
    """
    Writable character sink that forwards every character to two sinks.

    The destinations are borrowed: the buffer never opens, closes or replaces
    them. All mutable state is guarded by ``lock``, a re-entrant lock which
    callers may also hold to make a run of ``put`` calls atomic.
    """

    def __init__(
        self,
        sink1: TextIO,
        sink2: TextIO,
        now: Optional[Callable[[], datetime.datetime]] = None,
        monotonic: Optional[Callable[[], float]] = None,
    ):
        """
        Initialize the buffer.

        Args:
            sink1: First destination (e.g. the console)
            sink2: Second destination (e.g. a log file)
            now: Wall clock used for the date and time fields
                (default: datetime.datetime.now)
            monotonic: Clock used for elapsed seconds (default: time.perf_counter)
        """
        self.sink1 = sink1
        self.sink2 = sink2
        self.lock = threading.RLock()

        self.timestamp_enabled_sink1 = False
        self.timestamp_enabled_sink2 = False
        self.last_timestamp = ""
        self.last_error: Optional[BaseException] = None
        self.last_error_destination: Optional[int] = None

        self._now = now or datetime.datetime.now
        self._monotonic = monotonic or time.perf_counter
        self._clock_started = False
        self._clock_origin = 0.0

        self._line_start = True

        # The forced-message slot has its own lock so it can be armed while
        # another thread holds ``lock`` in the middle of a write
        self._slot_lock = threading.Lock()
        self._force_pending = False
        self._forced_message = ""
        self._force_done = threading.Event()
        self._force_done.set()

    @property
    def at_line_start(self) -> bool:
        """True when the next character begins a new line."""
        return self._line_start

    @property
    def force_pending(self) -> bool:
        """True while a forced message waits to be emitted."""
        return self._force_pending

    def timestamp(self) -> str:
        """
        Compute the current timestamp string.

        The clock origin is captured on the first call, so elapsed time is
        measured from the first decorated line.

        Returns:
            A string like ``[2026-3-7|9:5:2|1.250000] ``
        """
        if not self._clock_started:
            self._clock_origin = self._monotonic()
            self._clock_started = True

        elapsed = self._monotonic() - self._clock_origin
        local = self._now()
        stamp = (
            f"[{local.year}-{local.month}-{local.day}"
            f"|{local.hour}:{local.minute}:{local.second}"
            f"|{elapsed:f}] "
        )
        self.last_timestamp = stamp
        return stamp

    def request_force(self, message: str) -> threading.Event:
        """
        Arm the forced-message slot.

        Does not wait for ``lock``: the next ``put``, from any thread, emits
        the message. A pending message that has not been emitted yet is
        overwritten, and both requests share one completion event.

        Args:
            message: Text to emit at the next line boundary, terminator included

        Returns:
            Event set once the message has been written to both destinations
        """
        with self._slot_lock:
            if not self._force_pending:
                self._force_done = threading.Event()
            self._forced_message = message
            self._force_pending = True
            return self._force_done

    def withdraw_force(self, done: threading.Event) -> bool:
        """
        Cancel the request that returned ``done`` if it is still pending.

        Returns:
            True if the message was withdrawn, False if it was already emitted
        """
        with self._slot_lock:
            if not self._force_pending or self._force_done is not done:
                return False
            self._forced_message = ""
            self._force_pending = False
            return True

    def _take_forced(self):
        with self._slot_lock:
            if not self._force_pending:
                return None, None
            message = self._forced_message
            self._forced_message = ""
            self._force_pending = False
            return message, self._force_done

    def put(self, char: Optional[str]) -> bool:
        """
        Fan a single character out to both destinations.

        Args:
            char: One character, or None for the end-of-stream marker

        Returns:
            False if writing to either destination failed, True otherwise
        """
        if char is None:
            return True

        with self.lock:
            ok = True
            forced, done = self._take_forced()

            if forced is not None:
                self._line_start = True
                ok &= self._emit_both("\n")

            if self._line_start:
                if self.timestamp_enabled_sink1 or self.timestamp_enabled_sink2:
                    stamp = self.timestamp().ljust(TIMESTAMP_WIDTH)
                    if self.timestamp_enabled_sink1:
                        ok &= self._emit(self.sink1, stamp, 1)
                    if self.timestamp_enabled_sink2:
                        ok &= self._emit(self.sink2, stamp, 2)

                if forced is not None:
                    ok &= self._emit_both(forced)
                    done.set()
                    char = "\n"

            self._line_start = char == "\n"

            ok &= self._emit_both(char)
            return ok

    def sync(self) -> bool:
        """
        Flush both destinations.

        Returns:
            True only if both destinations flushed successfully
        """
        with self.lock:
            ok1 = self._flush(self.sink1, 1)
            ok2 = self._flush(self.sink2, 2)
            return ok1 and ok2

    def _emit_both(self, text: str) -> bool:
        ok1 = self._emit(self.sink1, text, 1)
        ok2 = self._emit(self.sink2, text, 2)
        return ok1 and ok2

    def _emit(self, sink: TextIO, text: str, index: int) -> bool:
        try:
            sink.write(text)
        except SINK_ERRORS as e:
            self.last_error = e
            self.last_error_destination = index
            debug(f"Write to destination {index} failed: {type(e).__name__}: {e}")
            return False
        return True

    def _flush(self, sink: TextIO, index: int) -> bool:
        try:
            sink.flush()
        except SINK_ERRORS as e:
            self.last_error = e
            self.last_error_destination = index
            debug(f"Flush of destination {index} failed: {type(e).__name__}: {e}")
            return False
        return True
