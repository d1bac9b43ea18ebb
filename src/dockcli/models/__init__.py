"""
Data models for the dockcli package.

Invocation models:
- CommandSpec and ExecutionResult describe one process invocation

Table models:
- ColumnSpan, FieldLayout and TableRecord carry header-driven parsing
- ContainerInfo is the typed record of the `ps` table

Log-watch models:
- WatchState, ExitPolicy and LogWatchResult

Configuration models:
- AppConfig and its sections
"""

from .command import CommandSpec, ExecutionResult
from .config import AppConfig, DockerConfig, LoggingConfig, LogWatchConfig, DEFAULT_EXECUTABLE
from .containers import (
    PS_COLUMNS,
    SUB_VALUE_SEPARATOR,
    ColumnSpan,
    ContainerInfo,
    FieldLayout,
    TableRecord,
)
from .watch import ExitPolicy, LogWatchResult, WatchState

__all__ = [
    "CommandSpec",
    "ExecutionResult",
    "AppConfig",
    "DockerConfig",
    "LoggingConfig",
    "LogWatchConfig",
    "DEFAULT_EXECUTABLE",
    "PS_COLUMNS",
    "SUB_VALUE_SEPARATOR",
    "ColumnSpan",
    "ContainerInfo",
    "FieldLayout",
    "TableRecord",
    "ExitPolicy",
    "LogWatchResult",
    "WatchState",
]
