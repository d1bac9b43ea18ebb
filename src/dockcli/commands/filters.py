"""
Filters for the `ps` subcommand.

Each filter renders to the value of one `--filter` option.
"""

from dataclasses import dataclass


class Filter:
    """Base class; subclasses define `key` and carry the filter value."""

    key: str = ""

    @property
    def value(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class NameFilter(Filter):
    """Containers whose name contains `name` (the tool matches substrings)."""

    name: str
    key = "name"

    @property
    def value(self) -> str:
        return f"{self.key}={self.name}"


@dataclass(frozen=True)
class StatusFilter(Filter):
    """Containers in one state: created, running, paused, exited, ..."""

    status: str
    key = "status"

    @property
    def value(self) -> str:
        return f"{self.key}={self.status}"


@dataclass(frozen=True)
class LabelFilter(Filter):
    label: str
    key = "label"

    @property
    def value(self) -> str:
        return f"{self.key}={self.label}"


@dataclass(frozen=True)
class AncestorFilter(Filter):
    """Containers created from an image or one of its descendants."""

    image: str
    key = "ancestor"

    @property
    def value(self) -> str:
        return f"{self.key}={self.image}"
