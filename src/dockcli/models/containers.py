"""
Tabular output data models.

FieldLayout is inferred once from a header line; TableRecord is the result of
applying it to one data line. ContainerInfo is the typed view of a record from
the `ps` table.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, Tuple

# Canonical column order of the `ps` table header.
PS_COLUMNS: Tuple[str, ...] = (
    "CONTAINER ID",
    "IMAGE",
    "COMMAND",
    "CREATED",
    "STATUS",
    "PORTS",
    "NAMES",
)

# Separator of multi-valued entries in the last column.
SUB_VALUE_SEPARATOR = ","


@dataclass(frozen=True)
class ColumnSpan:
    """Location of one column label in the header line."""

    name: str
    start: int
    # Label plus its trailing padding, as matched in the header row.
    width: int

    @property
    def end(self) -> int:
        return self.start + self.width


@dataclass(frozen=True)
class FieldLayout:
    """
    Ordered column spans derived from one header line.

    Start offsets are strictly increasing. The layout is reused for every data
    row of the invocation that produced the header.
    """

    header: str
    columns: Tuple[ColumnSpan, ...]

    def __iter__(self) -> Iterator[ColumnSpan]:
        return iter(self.columns)

    def __len__(self) -> int:
        return len(self.columns)

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(column.name for column in self.columns)

    @property
    def last(self) -> ColumnSpan:
        return self.columns[-1]

    def offsets(self) -> Tuple[Tuple[str, int], ...]:
        return tuple((column.name, column.start) for column in self.columns)


@dataclass(frozen=True)
class TableRecord:
    """
    One parsed data row.

    `values` holds the trimmed text of every column, the last one included;
    `sub_values` is the last column split on the separator.
    """

    values: Dict[str, str]
    sub_values: Tuple[str, ...]

    def __getitem__(self, column: str) -> str:
        return self.values[column]


@dataclass(frozen=True)
class ContainerInfo:
    """A container as listed by `ps`."""

    container_id: str
    image: str
    command: str
    created: str
    status: str
    ports: str
    names: Tuple[str, ...]

    @property
    def name(self) -> str:
        """Primary name, the first entry of the NAMES column."""
        return self.names[0] if self.names else ""

    @classmethod
    def from_record(cls, record: TableRecord) -> "ContainerInfo":
        return cls(
            container_id=record["CONTAINER ID"],
            image=record["IMAGE"],
            command=record["COMMAND"],
            created=record["CREATED"],
            status=record["STATUS"],
            ports=record["PORTS"],
            names=record.sub_values,
        )
