"""Utility helpers for the KSS dashboard."""

from kss.utils.text import pad_cells, wrap_lines
from kss.utils.time_format import (
    format_clock,
    format_duration,
    format_offset,
    parse_timestamp,
)

__all__ = [
    "format_clock",
    "format_duration",
    "format_offset",
    "pad_cells",
    "parse_timestamp",
    "wrap_lines",
]
