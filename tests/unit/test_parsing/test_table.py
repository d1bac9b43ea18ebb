"""
Unit tests for header-driven table parsing.

Covers layout inference from header lines, row slicing with the open-ended
last column, sub-value splitting, and the failure modes for mismatched
headers and short rows.
"""

import pytest

from dockcli.models import PS_COLUMNS
from dockcli.parsing import build_layout, parse_row, parse_table, split_sub_values
from dockcli.validation import HeaderMismatchError, RowTooShortError


def make_header(padding):
    """Join the ps labels with the given number of spaces after each one."""
    return "".join(f"{name}{' ' * pad}" for name, pad in zip(PS_COLUMNS, padding)).rstrip()


def make_row(values, header):
    """Lay values out under the columns of `header`."""
    layout = build_layout(header, PS_COLUMNS)
    line = ""
    for column, value in zip(layout, values):
        line = line.ljust(column.start) + value
    return line


@pytest.mark.unit
class TestBuildLayout:

    def test_offsets_follow_header(self):
        header = "CONTAINER ID   IMAGE    COMMAND   CREATED   STATUS   PORTS   NAMES"
        layout = build_layout(header, PS_COLUMNS)

        assert layout.names == PS_COLUMNS
        assert layout.offsets() == (
            ("CONTAINER ID", 0),
            ("IMAGE", 15),
            ("COMMAND", 24),
            ("CREATED", 34),
            ("STATUS", 44),
            ("PORTS", 53),
            ("NAMES", 61),
        )

    def test_width_includes_padding(self):
        layout = build_layout("CONTAINER ID   IMAGE  NAMES", ["CONTAINER ID", "IMAGE", "NAMES"])

        assert [column.width for column in layout] == [15, 7, 5]

    @pytest.mark.parametrize("padding", [
        [1] * 7,
        [3] * 7,
        [3, 10, 18, 10, 22, 20, 0],
        [7, 1, 2, 9, 1, 4, 0],
    ])
    def test_any_padding_yields_usable_layout(self, padding):
        header = make_header(padding)
        values = ["abc123", "img", "\"sh\"", "now", "Up", "80/tcp", "one,two"]
        row = make_row(values, header)

        record = parse_row(row, build_layout(header, PS_COLUMNS))

        assert [record[name] for name in PS_COLUMNS] == values

    def test_offsets_strictly_increasing(self):
        layout = build_layout(make_header([2] * 7), PS_COLUMNS)
        starts = [column.start for column in layout]

        assert starts == sorted(set(starts))

    @pytest.mark.parametrize("missing", PS_COLUMNS)
    def test_missing_label_fails(self, missing):
        header = "   ".join(name for name in PS_COLUMNS if name != missing)

        with pytest.raises(HeaderMismatchError) as exc_info:
            build_layout(header, PS_COLUMNS)

        assert exc_info.value.header == header
        assert exc_info.value.missing_column == missing

    def test_out_of_order_labels_fail(self):
        header = "CONTAINER ID   COMMAND   IMAGE   CREATED   STATUS   PORTS   NAMES"

        with pytest.raises(HeaderMismatchError) as exc_info:
            build_layout(header, PS_COLUMNS)

        assert exc_info.value.missing_column == "COMMAND"

    def test_empty_header_fails(self):
        with pytest.raises(HeaderMismatchError):
            build_layout("", PS_COLUMNS)

    def test_trailing_newline_ignored(self):
        layout = build_layout("ID   NAMES\n", ["ID", "NAMES"])

        assert layout.header == "ID   NAMES"

    def test_no_expected_columns_rejected(self):
        with pytest.raises(ValueError):
            build_layout("ID", [])


@pytest.mark.unit
class TestParseRow:

    HEADER = "ID     IMAGE  NAMES"

    def test_values_are_trimmed(self):
        layout = build_layout(self.HEADER, ["ID", "IMAGE", "NAMES"])
        record = parse_row("abc    alp    web  ", layout)

        assert record.values == {"ID": "abc", "IMAGE": "alp", "NAMES": "web"}

    def test_last_column_overflow_is_not_truncated(self):
        layout = build_layout(self.HEADER, ["ID", "IMAGE", "NAMES"])
        long_names = "a-very-long-container-name,another-even-longer-alias"
        record = parse_row(f"abc    alp    {long_names}", layout)

        assert record["NAMES"] == long_names
        assert record.sub_values == ("a-very-long-container-name", "another-even-longer-alias")

    def test_inner_column_cut_at_header_width(self):
        layout = build_layout(self.HEADER, ["ID", "IMAGE", "NAMES"])
        record = parse_row("abcdefghij    web", layout)

        # "abcdefg" fills ID's 7 characters, the rest lands in IMAGE
        assert record["ID"] == "abcdefg"
        assert record["IMAGE"] == "hij"

    def test_empty_middle_column(self):
        layout = build_layout(self.HEADER, ["ID", "IMAGE", "NAMES"])
        record = parse_row("abc           web", layout)

        assert record["IMAGE"] == ""

    def test_row_shorter_than_offset_fails(self):
        layout = build_layout(self.HEADER, ["ID", "IMAGE", "NAMES"])

        with pytest.raises(RowTooShortError) as exc_info:
            parse_row("abc    alp", layout)

        assert exc_info.value.column == "NAMES"
        assert exc_info.value.offset == 14

    def test_row_ending_exactly_at_last_offset(self):
        layout = build_layout(self.HEADER, ["ID", "IMAGE", "NAMES"])
        record = parse_row("abc    alp    ", layout)

        assert record["NAMES"] == ""
        assert record.sub_values == ()


@pytest.mark.unit
class TestSubValues:

    def test_comma_list(self):
        assert set(split_sub_values("a,b,c")) == {"a", "b", "c"}

    def test_single_value(self):
        assert split_sub_values("db") == ("db",)

    def test_order_kept_and_blanks_dropped(self):
        assert split_sub_values("b, a,,b,") == ("b", "a")


@pytest.mark.unit
class TestParseTable:

    def test_header_only_yields_no_records(self):
        assert parse_table(["ID   NAMES"], ["ID", "NAMES"]) == []

    def test_blank_lines_skipped(self):
        records = parse_table(["ID   NAMES", "1    a", "", "2    b,c", "   "], ["ID", "NAMES"])

        assert [record["ID"] for record in records] == ["1", "2"]
        assert records[1].sub_values == ("b", "c")

    def test_missing_header_fails(self):
        with pytest.raises(HeaderMismatchError):
            parse_table([], ["ID", "NAMES"])
