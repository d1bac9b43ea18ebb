"""
Parsers for the textual output of the docker CLI.
"""

from .build_output import extract_built_image_id
from .ps import parse_ps_lines, parse_ps_output
from .table import build_layout, parse_row, parse_table, split_sub_values

__all__ = [
    "build_layout",
    "extract_built_image_id",
    "parse_ps_lines",
    "parse_ps_output",
    "parse_row",
    "parse_table",
    "split_sub_values",
]
