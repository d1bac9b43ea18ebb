"""
Parsing of `ps` output into ContainerInfo records.
"""

from typing import Iterable, List

from ..models.containers import PS_COLUMNS, ContainerInfo
from .table import parse_table


def parse_ps_output(output: str) -> List[ContainerInfo]:
    """Turn the full stdout of `ps` into ContainerInfo records."""
    return parse_ps_lines(output.splitlines())


def parse_ps_lines(lines: Iterable[str]) -> List[ContainerInfo]:
    return [ContainerInfo.from_record(record) for record in parse_table(lines, PS_COLUMNS)]
