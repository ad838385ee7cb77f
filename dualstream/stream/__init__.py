"""
Stream package - the tee buffer, the stream facade and redirect helpers.
"""

from dualstream.stream.tee_buffer import TIMESTAMP_WIDTH, TeeBuffer
from dualstream.stream.tee_stream import TeeStream
from dualstream.stream.redirect import tee_stdout

__all__ = ["TIMESTAMP_WIDTH", "TeeBuffer", "TeeStream", "tee_stdout"]
