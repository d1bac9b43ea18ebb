"""
Exception taxonomy and error management.

This module defines every failure kind surfaced by dockcli, together with the
small set of logging helpers used where errors are handled at a boundary
(configuration loading, subprocess teardown, the command-line interface).

Failure kinds:
- SpawnFailedError: the executable could not be started at all
- CommandFailedError: a synchronous invocation exited with a non-zero code
- HeaderMismatchError / RowTooShortError: tabular output did not fit its header
- LogWatchTimeoutError / LogWatchExitedError: no match before the deadline
- UpstreamFatalError: error-stream output while watching with break_on_error
- LogWatchCancelledError: the caller cancelled a running watch

None of these are retried by the library; retry policy belongs to the caller.
"""

import logging
import sys
from enum import Enum
from typing import Any, Optional, Sequence, TYPE_CHECKING, Union

if TYPE_CHECKING:
    from ..models.command import CommandSpec

_module_logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Severity levels for error handling."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ValidationError(Exception):
    """
    Exception raised when caller input or configuration fails validation.
    """

    def __init__(self, message: str, field_name: Optional[str] = None,
                 value: Any = None, severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message)
        self.field_name = field_name
        self.value = value
        self.severity = severity


class DockerCliError(Exception):
    """Base class for every failure raised while driving the docker CLI."""


# --- Process invocation ---

class SpawnFailedError(DockerCliError):
    """The executable was not found or could not be run."""

    def __init__(self, spec: "CommandSpec", reason: str):
        super().__init__(f"Failed to start '{spec.executable}': {reason}")
        self.spec = spec
        self.reason = reason


class CommandFailedError(DockerCliError):
    """
    A synchronous invocation exited with a non-zero code.

    The captured standard error is always attached, drained in full before the
    error was raised.
    """

    def __init__(self, spec: "CommandSpec", exit_code: int, stdout: str, stderr: str):
        super().__init__(f"command failed: {stderr.strip() or f'exit code {exit_code}'}")
        self.spec = spec
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr


# --- Tabular output ---

class TableParseError(DockerCliError):
    """Base class for tabular output that does not fit the expected layout."""


class HeaderMismatchError(TableParseError):
    """An expected column label is missing from the header line."""

    def __init__(self, header: str, missing_column: str, expected_columns: Sequence[str]):
        super().__init__(
            f"Returned headers did not match expected headers "
            f"(missing '{missing_column}'): {header!r}"
        )
        self.header = header
        self.missing_column = missing_column
        self.expected_columns = tuple(expected_columns)


class RowTooShortError(TableParseError):
    """A data line ends before the start offset of one of its columns."""

    def __init__(self, row: str, column: str, offset: int):
        super().__init__(
            f"Row of length {len(row)} ends before column '{column}' at offset {offset}: {row!r}"
        )
        self.row = row
        self.column = column
        self.offset = offset


# --- Log watching ---

class LogWatchError(DockerCliError):
    """Base class for log-watch failures."""

    def __init__(self, message: str, target: str, stdout: str = "", stderr: str = ""):
        super().__init__(message)
        self.target = target
        self.stdout = stdout
        self.stderr = stderr


class LogWatchTimeoutError(LogWatchError):
    """The deadline passed without the target text appearing."""

    def __init__(self, target: str, timeout: float, stdout: str = "", stderr: str = ""):
        super().__init__(
            f"Timed out after {timeout} seconds waiting for {target!r}",
            target, stdout, stderr,
        )
        self.timeout = timeout


class LogWatchExitedError(LogWatchTimeoutError):
    """
    The watched process exited without printing the target text.

    Raised only with the "fail" exit policy; with the default "wait" policy the
    same situation ends in a LogWatchTimeoutError at the deadline.
    """

    def __init__(self, target: str, timeout: float, exit_code: Optional[int],
                 stdout: str = "", stderr: str = ""):
        LogWatchError.__init__(
            self,
            f"Process exited with code {exit_code} before {target!r} appeared",
            target, stdout, stderr,
        )
        self.timeout = timeout
        self.exit_code = exit_code


class UpstreamFatalError(LogWatchError):
    """Output arrived on the error stream while error output was treated as fatal."""

    def __init__(self, target: str, stdout: str, stderr: str):
        super().__init__(f"Error output while waiting for {target!r}: {stderr.strip()}",
                         target, stdout, stderr)


class LogWatchCancelledError(LogWatchError):
    """The caller cancelled the watch before a terminal condition was reached."""

    def __init__(self, target: str, stdout: str = "", stderr: str = ""):
        super().__init__(f"Watch for {target!r} was cancelled", target, stdout, stderr)


_LOG_LEVELS = {
    ErrorSeverity.DEBUG: logging.DEBUG,
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}


def handle_error(
    error: Exception,
    context: str,
    severity: Union[ErrorSeverity, str] = ErrorSeverity.ERROR,
    reraise: bool = True,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Log an error at a boundary and optionally re-raise it.

    Tracebacks are attached at DEBUG and CRITICAL severity only; the other
    levels log the message alone.

    Args:
        error: The exception being handled
        context: Where the error happened, e.g. "config lookup"
        severity: ErrorSeverity member or its name
        reraise: Re-raise `error` after logging
        logger: Logger to write to (defaults to this module's logger)
    """
    if isinstance(severity, str):
        severity = ErrorSeverity(severity.lower())

    level = _LOG_LEVELS[severity]
    with_traceback = severity in (ErrorSeverity.DEBUG, ErrorSeverity.CRITICAL)
    (logger or _module_logger).log(level, f"Error in {context}: {error}", exc_info=with_traceback)

    if reraise:
        raise error


def handle_config_error(error: Exception, context: str, **kwargs) -> None:
    """Handle configuration-related errors."""
    handle_error(error, f"config {context}", **kwargs)


def handle_subprocess_error(error: Exception, command: str, **kwargs) -> None:
    """Handle subprocess-related errors."""
    handle_error(error, f"subprocess command '{command}'", **kwargs)


def handle_cli_error(error: Exception, context: str, **kwargs) -> None:
    """Log a CLI-level failure and exit the interpreter."""
    exit_code = kwargs.pop('exit_code', 1)
    include_traceback = kwargs.pop('include_traceback', False)

    severity = kwargs.pop('severity', ErrorSeverity.CRITICAL if include_traceback else ErrorSeverity.ERROR)
    handle_error(error, f"CLI {context}", severity=severity, reraise=False, **kwargs)

    sys.exit(exit_code)
