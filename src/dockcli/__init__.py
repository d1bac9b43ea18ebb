"""
dockcli: a programmatic façade over the docker command-line tool.

This package builds docker command invocations, runs them as child processes,
and turns their textual output into structured results.

The package is organized into specialized modules:
- commands: argument lists for each subcommand
- system: synchronous execution and process-tree teardown
- executor: bounded-streaming execution of long-running commands
- monitoring: waiting for a marker line in a process's output
- parsing: header-driven table parsing and build output parsing
- models: data structures and type definitions
- config: TOML configuration management
- validation: exception taxonomy, error handling and input validation
- cli: command-line interface

Usage:
    From command line:
        dockcli ps -a
        dockcli wait-for-log my-db "ready to accept connections" --timeout 60

    Programmatically:
        from dockcli import DockerClient
        client = DockerClient()
        containers = client.ps(all=True)
        client.wait_for_log("my-db", "ready to accept connections", timeout=60)
"""

from .client import DockerClient
from .config import clear_config_cache, get_config, set_config_path
from .commands import NameFilter, RunArguments
from .models import (
    CommandSpec,
    ContainerInfo,
    ExecutionResult,
    ExitPolicy,
    FieldLayout,
    LogWatchResult,
    TableRecord,
    WatchState,
)
from .monitoring import LogWatcher
from .parsing import build_layout, extract_built_image_id, parse_row, parse_table
from .system import run_command
from .validation import (
    CommandFailedError,
    DockerCliError,
    HeaderMismatchError,
    LogWatchCancelledError,
    LogWatchExitedError,
    LogWatchTimeoutError,
    RowTooShortError,
    SpawnFailedError,
    UpstreamFatalError,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    # Main interfaces
    "DockerClient",
    "LogWatcher",
    "run_command",
    "get_config",
    "set_config_path",
    "clear_config_cache",
    # Arguments
    "NameFilter",
    "RunArguments",
    # Models
    "CommandSpec",
    "ContainerInfo",
    "ExecutionResult",
    "ExitPolicy",
    "FieldLayout",
    "LogWatchResult",
    "TableRecord",
    "WatchState",
    # Parsing
    "build_layout",
    "extract_built_image_id",
    "parse_row",
    "parse_table",
    # Errors
    "CommandFailedError",
    "DockerCliError",
    "HeaderMismatchError",
    "LogWatchCancelledError",
    "LogWatchExitedError",
    "LogWatchTimeoutError",
    "RowTooShortError",
    "SpawnFailedError",
    "UpstreamFatalError",
    "ValidationError",
]
