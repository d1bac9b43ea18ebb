"""
Log watching: waiting for a container to announce readiness.
"""

from .log_watch import LogWatcher, wait_for_output

__all__ = [
    "LogWatcher",
    "wait_for_output",
]
