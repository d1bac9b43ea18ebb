"""
Bounded-streaming execution of long-running commands.
"""

from .stream_process import STDERR, STDOUT, StreamEvent, StreamingProcess

__all__ = [
    "STDERR",
    "STDOUT",
    "StreamEvent",
    "StreamingProcess",
]
