"""
Validation and error handling for the dockcli package.

This module provides the exception taxonomy, the error logging helpers and the
input validators used across the application.
"""

from .exceptions import (
    CommandFailedError,
    DockerCliError,
    ErrorSeverity,
    HeaderMismatchError,
    LogWatchCancelledError,
    LogWatchError,
    LogWatchExitedError,
    LogWatchTimeoutError,
    RowTooShortError,
    SpawnFailedError,
    TableParseError,
    UpstreamFatalError,
    ValidationError,
    handle_cli_error,
    handle_config_error,
    handle_error,
    handle_subprocess_error,
)

from .validators import (
    log_level_number,
    validate_bool,
    validate_enum_choice,
    validate_executable,
    validate_log_level,
    validate_positive_float,
)

__all__ = [
    # Exceptions
    "CommandFailedError",
    "DockerCliError",
    "ErrorSeverity",
    "HeaderMismatchError",
    "LogWatchCancelledError",
    "LogWatchError",
    "LogWatchExitedError",
    "LogWatchTimeoutError",
    "RowTooShortError",
    "SpawnFailedError",
    "TableParseError",
    "UpstreamFatalError",
    "ValidationError",
    # Handlers
    "handle_cli_error",
    "handle_config_error",
    "handle_error",
    "handle_subprocess_error",
    # Validators
    "log_level_number",
    "validate_bool",
    "validate_enum_choice",
    "validate_executable",
    "validate_log_level",
    "validate_positive_float",
]
