"""Pure rendering of the dashboard state into a single ``rich.text.Text`` frame."""

from __future__ import annotations

from rich.text import Text

from kss.constants.enums import Pane, Tab
from kss.constants.limits import MIN_HEIGHT, MIN_WIDTH, PANE_GAP
from kss.constants.values import (
    APP_TITLE,
    COLOR_BLURRED_BORDER,
    COLOR_FOCUSED_BORDER,
    COLOR_MUTED,
    COLOR_SELECTED,
    DOCTOR_LOADING_TEXT,
    INITIALIZING_TEXT,
    NO_ITEM_SELECTED_TEXT,
    TERMINAL_TOO_SMALL_TEXT,
)
from kss.models.core.resource_item import item_description
from kss.screens.dashboard.config import (
    BOX_BOTTOM_LEFT,
    BOX_BOTTOM_RIGHT,
    BOX_HORIZONTAL,
    BOX_TOP_LEFT,
    BOX_TOP_RIGHT,
    BOX_VERTICAL,
    SELECTION_BAR,
    TAB_LABELS,
)
from kss.screens.dashboard.presenter import format_overview
from kss.screens.dashboard.state import DashboardState, list_page_size
from kss.utils.text import pad_cells, wrap_lines

TITLE_STYLE = "bold color(230) on color(62)"
ACTIVE_TAB_STYLE = "bold reverse"
ERROR_STYLE = "bold red"


def _list_lines(state: DashboardState) -> list[Text]:
    width = state.list_width
    title = Text(f" {APP_TITLE} - {state.kind.display_name} ", style=TITLE_STYLE)
    lines = [pad_cells(title, width)]
    error = Text(f"Error: {state.error}", style=ERROR_STYLE) if state.error else None

    if not state.items:
        lines.append(pad_cells("", width))
        if error is None:
            lines.append(pad_cells(Text("  No items.", style=COLOR_MUTED), width))
        else:
            lines.extend(pad_cells(line, width) for line in wrap_lines(error, width))
    else:
        # Keep the items where paging expects them; the error takes the spacer row.
        if error is None:
            lines.append(pad_cells("", width))
        else:
            error.truncate(width, overflow="ellipsis")
            lines.append(pad_cells(error, width))
        per_page = list_page_size(state.height)
        start = (state.index // per_page) * per_page
        for position, item in enumerate(state.items[start : start + per_page], start):
            if position == state.index:
                name = Text(SELECTION_BAR, style=COLOR_SELECTED)
                name.append(item.name, style=f"bold {COLOR_SELECTED}")
                detail = Text(SELECTION_BAR, style=COLOR_SELECTED)
                detail.append(item_description(item), style=COLOR_SELECTED)
            else:
                name = Text(f"  {item.name}")
                detail = Text(f"  {item_description(item)}", style=COLOR_MUTED)
            lines.append(pad_cells(name, width))
            lines.append(pad_cells(detail, width))

    blank = pad_cells("", width)
    lines.extend(blank for _ in range(state.height - len(lines)))
    return lines[: state.height]


def _tab_bar(state: DashboardState) -> Text:
    bar = Text()
    for tab, label in TAB_LABELS.items():
        if tab is not Tab.OVERVIEW:
            bar.append(" ")
        bar.append(f" {label} ", style=ACTIVE_TAB_STYLE if tab is state.tab else COLOR_MUTED)
    return bar


def _body(state: DashboardState) -> tuple[Text, int]:
    """Return the active body and its scroll offset."""
    item = state.selected
    if item is None:
        return Text(NO_ITEM_SELECTED_TEXT), 0
    if state.tab is Tab.OVERVIEW:
        return format_overview(item), 0
    if state.tab is Tab.DOCTOR and state.doctor_loading:
        return Text(DOCTOR_LOADING_TEXT, style=COLOR_MUTED), 0
    viewport = state.viewport(state.tab)
    if viewport is None:
        return Text(), 0
    return viewport.content, viewport.offset


def _details_lines(state: DashboardState) -> list[Text]:
    inner = state.viewport_width
    border = COLOR_FOCUSED_BORDER if state.pane is Pane.DETAILS else COLOR_BLURRED_BORDER

    def boxed(line: Text) -> Text:
        row = Text(BOX_VERTICAL, style=border)
        row.append_text(pad_cells(line, inner))
        row.append(BOX_VERTICAL, style=border)
        return row

    body, offset = _body(state)
    visible = wrap_lines(body, inner)[offset : offset + state.viewport_height]
    visible.extend(Text() for _ in range(state.viewport_height - len(visible)))

    lines = [Text(BOX_TOP_LEFT + BOX_HORIZONTAL * inner + BOX_TOP_RIGHT, style=border)]
    lines.append(boxed(_tab_bar(state)))
    lines.append(boxed(Text(BOX_HORIZONTAL * inner, style=COLOR_MUTED)))
    lines.extend(boxed(line) for line in visible)
    lines.append(
        Text(BOX_BOTTOM_LEFT + BOX_HORIZONTAL * inner + BOX_BOTTOM_RIGHT, style=border)
    )
    return lines


def render(state: DashboardState) -> Text:
    """Render the whole dashboard frame for the current state."""
    if not state.ready:
        return Text(INITIALIZING_TEXT)
    if state.too_small:
        return Text(
            f"{TERMINAL_TOO_SMALL_TEXT}\n"
            f"Current: {state.width}x{state.height}\n"
            f"Required: {MIN_WIDTH}x{MIN_HEIGHT}"
        )

    left = _list_lines(state)
    right = _details_lines(state)
    gap = " " * PANE_GAP
    frame = Text(no_wrap=True, overflow="crop")
    for row, (list_line, details_line) in enumerate(zip(left, right)):
        if row:
            frame.append("\n")
        frame.append_text(list_line)
        frame.append(gap)
        frame.append_text(details_line)
    return frame


__all__ = ["render"]
