"""
Header-driven parsing of column-aligned text tables.

Parsing happens in two independent stages:

1. `build_layout` locates each expected column label in the header line and
   records where the column starts and how wide its label (plus padding) is.
2. `parse_row` slices a data line with that layout.

Every column but the last is cut at its header width. The last column always
runs to the end of the line because free-text fields (names, ports) are often
wider than their label. The last column is also split on commas into
sub-values.
"""

import logging
import re
from typing import Iterable, List, Sequence, Tuple

from ..models.containers import SUB_VALUE_SEPARATOR, ColumnSpan, FieldLayout, TableRecord
from ..validation.exceptions import HeaderMismatchError, RowTooShortError

logger = logging.getLogger(__name__)


def build_layout(header: str, expected_columns: Sequence[str]) -> FieldLayout:
    """
    Infer column boundaries from a header line.

    Labels are searched left to right, each one after the end of the previous
    label, so start offsets are strictly increasing.

    Args:
        header: The header line as printed by the tool
        expected_columns: Column labels in their canonical order

    Returns:
        FieldLayout with one ColumnSpan per expected column

    Raises:
        HeaderMismatchError: If any expected label cannot be found
        ValueError: If expected_columns is empty
    """
    if not expected_columns:
        raise ValueError("at least one expected column is required")

    header = header.rstrip("\r\n")
    columns: List[ColumnSpan] = []
    search_from = 0

    for name in expected_columns:
        match = re.compile(f"{re.escape(name)} *").search(header, search_from)
        if match is None:
            logger.error(f"Column '{name}' not found in header: {header!r}")
            raise HeaderMismatchError(header, name, expected_columns)

        columns.append(ColumnSpan(name=name, start=match.start(), width=len(match.group(0))))
        search_from = match.start() + len(name)

    layout = FieldLayout(header=header, columns=tuple(columns))
    logger.debug(f"Inferred layout {layout.offsets()}")
    return layout


def split_sub_values(text: str, separator: str = SUB_VALUE_SEPARATOR) -> Tuple[str, ...]:
    """
    Split a multi-valued field, keeping order and dropping empty or repeated entries.

    >>> split_sub_values("web,web/alias")
    ('web', 'web/alias')
    """
    values: List[str] = []
    for part in text.split(separator):
        part = part.strip()
        if part and part not in values:
            values.append(part)
    return tuple(values)


def parse_row(line: str, layout: FieldLayout) -> TableRecord:
    """
    Slice one data line according to a layout.

    Raises:
        RowTooShortError: If the line ends before a column's start offset
    """
    line = line.rstrip("\r\n")
    values = {}
    last_index = len(layout) - 1

    for index, column in enumerate(layout):
        if len(line) < column.start:
            raise RowTooShortError(line, column.name, column.start)

        if index < last_index:
            text = line[column.start:column.end]
        else:
            text = line[column.start:]
        values[column.name] = text.strip()

    return TableRecord(values=values, sub_values=split_sub_values(values[layout.last.name]))


def parse_table(lines: Iterable[str], expected_columns: Sequence[str]) -> List[TableRecord]:
    """
    Parse a complete table: the first line is the header, the rest are rows.

    Blank lines are skipped. A header with no rows yields an empty list.

    Raises:
        HeaderMismatchError: If the header is missing or lacks a label
        RowTooShortError: If a data row is malformed
    """
    iterator = iter(lines)
    header = next(iterator, "")
    layout = build_layout(header, expected_columns)

    records = [parse_row(line, layout) for line in iterator if line.strip()]
    logger.debug(f"Parsed {len(records)} rows")
    return records
