"""
Log-watch data models.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class WatchState(Enum):
    """States of a log watch. Everything but RUNNING is terminal."""
    RUNNING = "running"
    MATCHED = "matched"
    TIMED_OUT = "timed_out"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self is not WatchState.RUNNING


class ExitPolicy(Enum):
    """What to do when the watched process exits before the target appears."""
    # Keep waiting until the deadline, then report a timeout.
    WAIT = "wait"
    # Report the exit as soon as both output streams are closed.
    FAIL = "fail"


@dataclass(frozen=True)
class LogWatchResult:
    """Successful outcome of a log watch."""

    target: str
    matched_line: str
    elapsed_seconds: float
    stdout: str
    stderr: str
    pid: Optional[int] = None
    state: WatchState = WatchState.MATCHED
