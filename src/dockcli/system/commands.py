"""
Synchronous command execution.

`run_command` spawns one process with both output streams captured, blocks
until it exits, drains both streams and classifies the exit code. It is used
for every docker subcommand except log watching.
"""

import logging
import shutil
import subprocess
import time

from ..models.command import CommandSpec, ExecutionResult
from ..validation import CommandFailedError, SpawnFailedError

logger = logging.getLogger(__name__)


def run_command(spec: CommandSpec, check: bool = True) -> ExecutionResult:
    """Execute a command and capture its output.

    Both streams are redirected to pipes and read concurrently until the
    process exits, so neither can fill up and stall the child, and standard
    error is always complete when a failure is reported. Standard input is
    closed so the child never reads from the caller's terminal.

    Args:
        spec: The command to run.
        check: Raise CommandFailedError on a non-zero exit code (default).
            With check=False the result is returned whatever the exit code.

    Returns:
        ExecutionResult of the exited process.

    Raises:
        SpawnFailedError: The executable was not found or is not runnable.
        CommandFailedError: The process exited with a non-zero code and check is set.
    """
    logger.debug(f"Executing command: {spec}")
    start_time = time.monotonic()
    try:
        process = subprocess.run(
            spec.argv,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except FileNotFoundError as e:
        logger.error(f"Command not found: {spec.executable}: {e}")
        raise SpawnFailedError(spec, "executable not found") from e
    except PermissionError as e:
        logger.error(f"Command not runnable: {spec.executable}: {e}")
        raise SpawnFailedError(spec, "permission denied") from e
    except OSError as e:
        logger.error(f"Could not start '{spec}': {type(e).__name__}: {e}")
        raise SpawnFailedError(spec, str(e)) from e

    result = ExecutionResult(
        spec=spec,
        exit_code=process.returncode,
        stdout=process.stdout,
        stderr=process.stderr,
        duration_seconds=time.monotonic() - start_time,
    )
    logger.debug(f"Command exited with code {result.exit_code} after {result.duration_seconds:.3f}s")

    if check and not result.succeeded:
        logger.error(f"Command '{spec}' failed with exit code {result.exit_code}: {result.stderr.strip()}")
        raise CommandFailedError(spec, result.exit_code, result.stdout, result.stderr)

    return result


def check_executable_installed(executable: str) -> bool:
    """Check whether an executable can be found on the system PATH."""
    return shutil.which(executable) is not None
