import datetime
import io
import re
import sys
import threading
import unittest
from pathlib import Path

# Add the project root to the Python path
current_dir = Path(__file__).parent
project_root = current_dir.parent
sys.path.append(str(project_root))

from dualstream.stream.tee_buffer import TIMESTAMP_WIDTH, TeeBuffer

TIMESTAMP_PATTERN = re.compile(
    r"^\[\d{4}-\d{1,2}-\d{1,2}\|\d{1,2}:\d{1,2}:\d{1,2}\|(\d+\.\d{6})\] $"
)


class FakeClock:
    """Monotonic clock returning preset readings, then repeating the last."""

    def __init__(self, *readings):
        self.readings = list(readings)

    def __call__(self):
        if len(self.readings) > 1:
            return self.readings.pop(0)
        return self.readings[0]


class BrokenSink:
    """Sink whose every operation fails."""

    def write(self, text):
        raise OSError("disk full")

    def flush(self):
        raise OSError("flush failed")


def put_all(buf, text):
    return all([buf.put(char) for char in text])


class TestTeeBuffer(unittest.TestCase):
    def setUp(self):
        self.sink1 = io.StringIO()
        self.sink2 = io.StringIO()
        self.wall = datetime.datetime(2026, 3, 7, 9, 5, 2)
        self.buf = TeeBuffer(
            self.sink1,
            self.sink2,
            now=lambda: self.wall,
            monotonic=FakeClock(10.0, 10.0, 11.25),
        )

    def test_end_of_stream_marker_is_noop(self):
        self.assertTrue(self.buf.put(None))
        self.assertEqual("", self.sink1.getvalue())
        self.assertEqual("", self.sink2.getvalue())
        self.assertTrue(self.buf.at_line_start)

    def test_plain_text_reaches_both_sinks(self):
        self.assertTrue(put_all(self.buf, "hello\nworld"))
        self.assertEqual("hello\nworld", self.sink1.getvalue())
        self.assertEqual("hello\nworld", self.sink2.getvalue())
        self.assertFalse(self.buf.at_line_start)

    def test_line_start_tracks_newlines(self):
        self.assertTrue(self.buf.at_line_start)
        self.buf.put("a")
        self.assertFalse(self.buf.at_line_start)
        self.buf.put("\n")
        self.assertTrue(self.buf.at_line_start)

    def test_timestamp_format(self):
        self.assertEqual("", self.buf.last_timestamp)
        first = self.buf.timestamp()
        second = self.buf.timestamp()
        self.assertEqual("[2026-3-7|9:5:2|0.000000] ", first)
        self.assertEqual("[2026-3-7|9:5:2|1.250000] ", second)
        self.assertEqual(second, self.buf.last_timestamp)

    def test_timestamp_elapsed_is_non_decreasing(self):
        buf = TeeBuffer(io.StringIO(), io.StringIO())
        elapsed = []
        for _ in range(5):
            match = TIMESTAMP_PATTERN.match(buf.timestamp())
            self.assertIsNotNone(match)
            elapsed.append(float(match.group(1)))
        self.assertEqual(sorted(elapsed), elapsed)

    def test_timestamp_only_on_enabled_sink(self):
        self.buf.timestamp_enabled_sink1 = True
        put_all(self.buf, "hi\n")

        stamp = "[2026-3-7|9:5:2|0.000000] ".ljust(TIMESTAMP_WIDTH)
        self.assertEqual(stamp + "hi\n", self.sink1.getvalue())
        self.assertEqual("hi\n", self.sink2.getvalue())
        self.assertEqual(TIMESTAMP_WIDTH + 3, len(self.sink1.getvalue()))

    def test_every_line_is_decorated(self):
        self.buf.timestamp_enabled_sink2 = True
        put_all(self.buf, "a\nb\n")

        lines = self.sink2.getvalue().splitlines()
        self.assertEqual(2, len(lines))
        self.assertTrue(lines[0].startswith("[2026-3-7|9:5:2|0.000000]"))
        self.assertTrue(lines[1].startswith("[2026-3-7|9:5:2|1.250000]"))
        self.assertEqual("a\nb\n", self.sink1.getvalue())

    def test_long_timestamp_is_not_truncated(self):
        wall = datetime.datetime(2026, 12, 31, 23, 59, 59)
        buf = TeeBuffer(
            self.sink1,
            self.sink2,
            now=lambda: wall,
            monotonic=FakeClock(0.0, 12345.5),
        )
        buf.timestamp_enabled_sink1 = True
        put_all(buf, "x")

        self.assertEqual("[2026-12-31|23:59:59|12345.500000] x", self.sink1.getvalue())

    def test_enabling_mid_line_waits_for_next_line(self):
        put_all(self.buf, "ab")
        self.buf.timestamp_enabled_sink1 = True
        put_all(self.buf, "c\nd")

        stamp = "[2026-3-7|9:5:2|0.000000] ".ljust(TIMESTAMP_WIDTH)
        self.assertEqual("abc\n" + stamp + "d", self.sink1.getvalue())

    def test_forced_message(self):
        done = self.buf.request_force("alert\n")
        self.assertTrue(self.buf.force_pending)
        self.assertFalse(done.is_set())

        self.assertTrue(self.buf.put("\n"))

        self.assertTrue(done.is_set())
        self.assertFalse(self.buf.force_pending)
        self.assertEqual("\nalert\n\n", self.sink1.getvalue())
        self.assertEqual("\nalert\n\n", self.sink2.getvalue())
        self.assertTrue(self.buf.at_line_start)

    def test_forced_message_replaces_triggering_character(self):
        put_all(self.buf, "ab")
        self.buf.request_force("alert\n")
        self.buf.put("c")

        self.assertEqual("ab\nalert\n\n", self.sink1.getvalue())

    def test_forced_message_with_timestamps(self):
        self.buf.timestamp_enabled_sink1 = True
        self.buf.timestamp_enabled_sink2 = True
        self.buf.request_force("alert\n")
        self.buf.put("\n")

        stamp = "[2026-3-7|9:5:2|0.000000] ".ljust(TIMESTAMP_WIDTH)
        self.assertEqual("\n" + stamp + "alert\n\n", self.sink1.getvalue())
        self.assertEqual(self.sink1.getvalue(), self.sink2.getvalue())

    def test_second_force_request_overwrites_first(self):
        self.buf.request_force("first\n")
        self.buf.request_force("second\n")
        self.buf.put("\n")

        self.assertEqual("\nsecond\n\n", self.sink1.getvalue())

    def test_withdraw_pending_force(self):
        done = self.buf.request_force("never\n")
        self.assertTrue(self.buf.withdraw_force(done))
        self.assertFalse(self.buf.force_pending)

        put_all(self.buf, "x\n")
        self.assertEqual("x\n", self.sink1.getvalue())
        self.assertFalse(done.is_set())

    def test_withdraw_after_emit_fails(self):
        done = self.buf.request_force("alert\n")
        self.buf.put("\n")
        self.assertFalse(self.buf.withdraw_force(done))

    def test_request_force_does_not_wait_for_writer(self):
        holding = threading.Event()
        release = threading.Event()

        def holder():
            with self.buf.lock:
                holding.set()
                release.wait(5)

        thread = threading.Thread(target=holder)
        thread.start()
        holding.wait(5)
        try:
            done = self.buf.request_force("armed\n")
            self.assertTrue(self.buf.force_pending)
            self.assertFalse(done.is_set())
        finally:
            release.set()
            thread.join(5)

    def test_write_failure_still_reaches_other_sink(self):
        buf = TeeBuffer(BrokenSink(), self.sink2)

        self.assertFalse(buf.put("x"))
        self.assertEqual("x", self.sink2.getvalue())
        self.assertIsInstance(buf.last_error, OSError)
        self.assertEqual(1, buf.last_error_destination)

    def test_write_failure_on_closed_sink(self):
        closed = io.StringIO()
        closed.close()
        buf = TeeBuffer(self.sink1, closed)

        self.assertFalse(buf.put("x"))
        self.assertEqual("x", self.sink1.getvalue())
        self.assertIsInstance(buf.last_error, ValueError)
        self.assertEqual(2, buf.last_error_destination)

    def test_sync(self):
        self.assertTrue(self.buf.sync())
        buf = TeeBuffer(self.sink1, BrokenSink())
        self.assertFalse(buf.sync())
        self.assertEqual(2, buf.last_error_destination)


if __name__ == "__main__":
    unittest.main()
