"""
Process invocation data models.

This module contains the description of a single command invocation and the
result recorded once that process has exited.
"""

import shlex
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from ..validation.exceptions import ValidationError
from ..validation.validators import validate_executable


@dataclass(frozen=True)
class CommandSpec:
    """
    One command invocation: an executable and its ordered arguments.

    Arguments are kept verbatim, including empty strings, and are handed to the
    operating system as a list so no shell quoting ever applies.
    """

    executable: str
    args: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        validate_executable(self.executable)
        args = tuple(self.args)
        for index, arg in enumerate(args):
            if not isinstance(arg, str):
                raise ValidationError(
                    f"argument {index} must be a string, got {type(arg).__name__}",
                    field_name="args",
                    value=arg,
                )
        if args and args[0] == self.executable:
            raise ValidationError(
                f"argument list must not repeat the executable '{self.executable}'",
                field_name="args",
                value=args[0],
            )
        object.__setattr__(self, "args", args)

    @classmethod
    def of(cls, executable: str, *args: str) -> "CommandSpec":
        return cls(executable, tuple(args))

    @property
    def argv(self) -> List[str]:
        """Full argument vector, executable first."""
        return [self.executable, *self.args]

    def with_args(self, args: Sequence[str]) -> "CommandSpec":
        return CommandSpec(self.executable, tuple(args))

    def __str__(self) -> str:
        return shlex.join(self.argv)


@dataclass(frozen=True)
class ExecutionResult:
    """
    Outcome of a process that ran to completion.

    Only exited processes produce an ExecutionResult; a timed-out or cancelled
    process is reported through an exception instead.
    """

    spec: CommandSpec
    exit_code: int
    stdout: str
    stderr: str
    duration_seconds: float

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0

    def stdout_lines(self) -> List[str]:
        return self.stdout.splitlines()
