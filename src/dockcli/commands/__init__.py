"""
Argument builders for the docker subcommands.
"""

from .arguments import (
    RunArguments,
    build_args,
    logs_args,
    ps_args,
    pull_args,
    remove_args,
    start_args,
    stop_args,
)
from .filters import AncestorFilter, Filter, LabelFilter, NameFilter, StatusFilter

__all__ = [
    "RunArguments",
    "build_args",
    "logs_args",
    "ps_args",
    "pull_args",
    "remove_args",
    "start_args",
    "stop_args",
    "AncestorFilter",
    "Filter",
    "LabelFilter",
    "NameFilter",
    "StatusFilter",
]
