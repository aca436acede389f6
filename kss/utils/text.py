"""Cell-aware helpers for composing fixed-size text frames."""

from __future__ import annotations

from rich.cells import cell_len
from rich.text import Text


def wrap_lines(text: Text, width: int) -> list[Text]:
    """Split text on newlines and hard-wrap each line at ``width`` cells."""
    width = max(1, width)
    wrapped: list[Text] = []
    for line in text.split("\n", allow_blank=True):
        line.rstrip()
        if cell_len(line.plain) <= width:
            wrapped.append(line)
            continue
        offsets: list[int] = []
        used = 0
        for position, char in enumerate(line.plain):
            char_width = cell_len(char)
            if used + char_width > width:
                offsets.append(position)
                used = 0
            used += char_width
        wrapped.extend(line.divide(offsets))
    return wrapped


def pad_cells(text: Text | str, width: int) -> Text:
    """Return a copy of ``text`` cropped or padded to exactly ``width`` cells."""
    line = Text(text) if isinstance(text, str) else text.copy()
    line.truncate(width, overflow="crop", pad=True)
    return line
