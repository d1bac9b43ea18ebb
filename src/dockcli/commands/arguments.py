"""
Argument lists for each supported subcommand.

Every builder returns a list of strings for CommandSpec.args; values are never
quoted because no shell is involved.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from .filters import Filter


def build_args(path: str = ".", tag: Optional[str] = None, dockerfile: Optional[str] = None) -> List[str]:
    args = ["build"]
    if tag:
        args.extend(["-t", tag])
    if dockerfile:
        args.extend(["-f", dockerfile])
    args.append(path)
    return args


def pull_args(image: str, tag: str = "latest") -> List[str]:
    return ["pull", f"{image}:{tag}"]


def start_args(name: str) -> List[str]:
    return ["start", name]


def stop_args(name: str) -> List[str]:
    return ["stop", name]


def remove_args(name: str, force: bool = False) -> List[str]:
    return ["rm", "-f", name] if force else ["rm", name]


def ps_args(all: bool = False, filters: Optional[Iterable[Filter]] = None) -> List[str]:
    """
    Arguments for `ps`.

    No `--format` option is passed: the default table, header row included,
    is what the table parser expects.
    """
    args = ["ps"]
    if all:
        args.append("-a")
    for filter_ in filters or ():
        args.extend(["--filter", filter_.value])
    return args


def logs_args(name: str, follow: bool = True) -> List[str]:
    args = ["logs"]
    if follow:
        args.append("--follow")
    args.append(name)
    return args


@dataclass
class RunArguments:
    """
    Options for `run`.

    Containers always start detached so the call returns the container id.
    """

    image: str
    name: Optional[str] = None
    hostname: Optional[str] = None
    interactive: bool = False
    environment: Dict[str, str] = field(default_factory=dict)
    volumes: List[str] = field(default_factory=list)
    ports: List[str] = field(default_factory=list)
    command: List[str] = field(default_factory=list)

    def to_args(self) -> List[str]:
        args = ["run", "-di" if self.interactive else "-d"]

        if self.name is not None:
            args.extend(["--name", self.name])

        if self.hostname is not None:
            args.extend(["--hostname", self.hostname])

        for key, value in self.environment.items():
            args.extend(["-e", f"{key}={value}"])

        for volume in self.volumes:
            args.extend(["-v", volume])

        for port in self.ports:
            args.extend(["-p", port])

        args.append(self.image)
        args.extend(self.command)
        return args
