"""
System interaction: synchronous command execution and process teardown.
"""

from .commands import check_executable_installed, run_command
from .processes import get_descendants, is_process_alive, terminate_descendants, terminate_processes

__all__ = [
    "check_executable_installed",
    "get_descendants",
    "is_process_alive",
    "run_command",
    "terminate_descendants",
    "terminate_processes",
]
