"""Dashboard state machine.

``reduce(state, event)`` is a pure function returning the next state and a
list of effect descriptions. The screen owns I/O: it runs each effect as a
worker and feeds the completion back in as another event.

Every fetch is tagged with a request id. A completion is applied only when
its id is the latest one issued for its slot, so a slow response for a
previously selected resource can never overwrite newer content.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace

from rich.text import Text

from kss.constants.enums import Pane, RequestSlot, ResourceKind, Tab
from kss.constants.limits import (
    DETAILS_CHROME_HEIGHT,
    MIN_DETAILS_WIDTH,
    MIN_HEIGHT,
    MIN_LIST_WIDTH,
    MIN_VIEWPORT_HEIGHT,
    MIN_WIDTH,
    PANE_GAP,
)
from kss.keyboard.dashboard import (
    COMMIT_KEY,
    CYCLE_TAB_KEY,
    DIRECT_TAB_KEYS,
    DOWN_KEYS,
    END_KEYS,
    FOCUS_DETAILS_KEY,
    FOCUS_LIST_KEY,
    HOME_KEYS,
    NAVIGATION_KEYS,
    PAGE_DOWN_KEYS,
    PAGE_UP_KEYS,
    QUIT_KEYS,
    REFRESH_KEY,
    UP_KEYS,
)
from kss.models.core.resource_item import ResourceItem
from kss.models.doctor.finding import AnalysisResult
from kss.screens.dashboard.presenter import format_doctor
from kss.utils.text import wrap_lines

logger = logging.getLogger(__name__)

# Rows above the first list item: title and a blank line
LIST_HEADER_HEIGHT = 2
LIST_ITEM_HEIGHT = 2

_TAB_SLOTS: dict[Tab, RequestSlot] = {
    Tab.LOGS: RequestSlot.LOGS,
    Tab.EVENTS: RequestSlot.EVENTS,
    Tab.DOCTOR: RequestSlot.DOCTOR,
}


# =============================================================================
# State records
# =============================================================================


@dataclass(frozen=True)
class ViewportState:
    """Scrollable body of one detail tab."""

    content: Text = field(default_factory=Text)
    offset: int = 0


@dataclass(frozen=True)
class RequestTag:
    """Latest request issued for a slot."""

    request_id: int
    resource: str
    done: bool = False


# =============================================================================
# Events
# =============================================================================


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


@dataclass(frozen=True)
class KeyPressed:
    key: str


@dataclass(frozen=True)
class ResourcesFetched:
    request_id: int
    items: tuple[ResourceItem, ...] = ()
    error: str | None = None


@dataclass(frozen=True)
class LogsFetched:
    request_id: int
    content: Text | None = None
    error: str | None = None


@dataclass(frozen=True)
class EventsFetched:
    request_id: int
    content: Text | None = None
    error: str | None = None


@dataclass(frozen=True)
class DoctorFetched:
    request_id: int
    analysis: AnalysisResult | None = None
    error: str | None = None


@dataclass(frozen=True)
class RefreshTick:
    pass


Event = (
    Resize
    | KeyPressed
    | ResourcesFetched
    | LogsFetched
    | EventsFetched
    | DoctorFetched
    | RefreshTick
)


# =============================================================================
# Effects
# =============================================================================


@dataclass(frozen=True)
class FetchResources:
    request_id: int
    kind: ResourceKind


@dataclass(frozen=True)
class FetchLogs:
    request_id: int
    item: ResourceItem


@dataclass(frozen=True)
class FetchEvents:
    request_id: int
    item: ResourceItem


@dataclass(frozen=True)
class RunDoctor:
    request_id: int
    item: ResourceItem


@dataclass(frozen=True)
class Exit:
    outcome: str | None


Effect = FetchResources | FetchLogs | FetchEvents | RunDoctor | Exit

_TAB_EFFECTS: dict[Tab, type[FetchLogs] | type[FetchEvents] | type[RunDoctor]] = {
    Tab.LOGS: FetchLogs,
    Tab.EVENTS: FetchEvents,
    Tab.DOCTOR: RunDoctor,
}


# =============================================================================
# Dashboard state
# =============================================================================


def _empty_viewports() -> dict[Tab, ViewportState]:
    return {tab: ViewportState() for tab in _TAB_SLOTS}


@dataclass(frozen=True)
class DashboardState:
    """Everything the dashboard renders, plus request bookkeeping."""

    kind: ResourceKind = ResourceKind.POD
    items: tuple[ResourceItem, ...] = ()
    index: int = 0
    pane: Pane = Pane.LIST
    tab: Tab = Tab.OVERVIEW
    viewports: Mapping[Tab, ViewportState] = field(default_factory=_empty_viewports)
    doctor_loading: bool = False
    analysis: AnalysisResult | None = None
    error: str | None = None

    width: int = 0
    height: int = 0
    ready: bool = False
    list_width: int = MIN_LIST_WIDTH
    details_width: int = MIN_DETAILS_WIDTH
    viewport_width: int = MIN_DETAILS_WIDTH - 2
    viewport_height: int = MIN_VIEWPORT_HEIGHT

    next_request_id: int = 1
    requests: Mapping[RequestSlot, RequestTag] = field(default_factory=dict)

    outcome: str | None = None
    finished: bool = False

    @property
    def selected(self) -> ResourceItem | None:
        if not self.items:
            return None
        return self.items[self.index]

    @property
    def too_small(self) -> bool:
        return self.width < MIN_WIDTH or self.height < MIN_HEIGHT

    def viewport(self, tab: Tab) -> ViewportState | None:
        return self.viewports.get(tab)


def list_page_size(height: int) -> int:
    """Number of list items that fit under the list title."""
    return max(1, (height - LIST_HEADER_HEIGHT) // LIST_ITEM_HEIGHT)


def initial_state(kind: ResourceKind = ResourceKind.POD) -> DashboardState:
    return DashboardState(kind=kind)


def initial_effects(state: DashboardState) -> tuple[DashboardState, list[Effect]]:
    """Issue the first resource list fetch."""
    return _refresh_resources(state)


# =============================================================================
# Request bookkeeping
# =============================================================================


def _issue(
    state: DashboardState, slot: RequestSlot, resource: str
) -> tuple[DashboardState, int]:
    request_id = state.next_request_id
    requests = dict(state.requests)
    requests[slot] = RequestTag(request_id, resource)
    return replace(state, next_request_id=request_id + 1, requests=requests), request_id


def _is_fresh(state: DashboardState, slot: RequestSlot, request_id: int) -> bool:
    tag = state.requests.get(slot)
    if tag is None or tag.request_id != request_id:
        logger.debug(
            "Discarding stale %s completion %d (latest %s)",
            slot.value,
            request_id,
            tag.request_id if tag else None,
        )
        return False
    return True


def _complete(state: DashboardState, slot: RequestSlot) -> DashboardState:
    requests = dict(state.requests)
    requests[slot] = replace(requests[slot], done=True)
    return replace(state, requests=requests)


def _refresh_resources(state: DashboardState) -> tuple[DashboardState, list[Effect]]:
    state, request_id = _issue(state, RequestSlot.RESOURCES, state.kind.value)
    return state, [FetchResources(request_id, state.kind)]


def _load_tab(state: DashboardState) -> tuple[DashboardState, list[Effect]]:
    """Schedule the active tab's fetch for the selected item."""
    item = state.selected
    slot = _TAB_SLOTS.get(state.tab)
    if item is None or slot is None:
        return state, []

    pending = state.requests.get(slot)
    if pending is not None and not pending.done and pending.resource == item.name:
        return state, []

    state, request_id = _issue(state, slot, item.name)
    if state.tab is Tab.DOCTOR:
        state = replace(state, doctor_loading=True)
    return state, [_TAB_EFFECTS[state.tab](request_id, item)]


# =============================================================================
# Viewports and layout
# =============================================================================


def _max_offset(state: DashboardState, viewport: ViewportState) -> int:
    lines = len(wrap_lines(viewport.content, state.viewport_width))
    return max(0, lines - state.viewport_height)


def _set_viewport(
    state: DashboardState, tab: Tab, viewport: ViewportState
) -> DashboardState:
    viewports = dict(state.viewports)
    viewports[tab] = viewport
    return replace(state, viewports=viewports)


def _resize(state: DashboardState, width: int, height: int) -> DashboardState:
    list_width = max(MIN_LIST_WIDTH, width // 3)
    details_width = max(MIN_DETAILS_WIDTH, width - list_width - PANE_GAP)
    state = replace(
        state,
        width=width,
        height=height,
        ready=True,
        list_width=list_width,
        details_width=details_width,
        viewport_width=details_width - 2,
        viewport_height=max(MIN_VIEWPORT_HEIGHT, height - DETAILS_CHROME_HEIGHT),
    )
    viewports = {
        tab: replace(viewport, offset=min(viewport.offset, _max_offset(state, viewport)))
        for tab, viewport in state.viewports.items()
    }
    return replace(state, viewports=viewports)


def _scroll(state: DashboardState, key: str) -> DashboardState:
    viewport = state.viewport(state.tab)
    if viewport is None:
        return state

    limit = _max_offset(state, viewport)
    offset = viewport.offset
    if key in UP_KEYS:
        offset -= 1
    elif key in DOWN_KEYS:
        offset += 1
    elif key in PAGE_UP_KEYS:
        offset -= state.viewport_height
    elif key in PAGE_DOWN_KEYS:
        offset += state.viewport_height
    elif key in HOME_KEYS:
        offset = 0
    elif key in END_KEYS:
        offset = limit
    offset = max(0, min(offset, limit))
    return _set_viewport(state, state.tab, replace(viewport, offset=offset))


def _move_selection(
    state: DashboardState, key: str
) -> tuple[DashboardState, list[Effect]]:
    if not state.items:
        return state, []

    last = len(state.items) - 1
    page = list_page_size(state.height)
    index = state.index
    if key in UP_KEYS:
        index -= 1
    elif key in DOWN_KEYS:
        index += 1
    elif key in PAGE_UP_KEYS:
        index -= page
    elif key in PAGE_DOWN_KEYS:
        index += page
    elif key in HOME_KEYS:
        index = 0
    elif key in END_KEYS:
        index = last
    index = max(0, min(index, last))

    if index == state.index:
        return state, []
    return _load_tab(replace(state, index=index))


# =============================================================================
# Event handlers
# =============================================================================


def _on_key(state: DashboardState, key: str) -> tuple[DashboardState, list[Effect]]:
    if key in QUIT_KEYS:
        return replace(state, finished=True, outcome=None), [Exit(None)]

    if key == CYCLE_TAB_KEY:
        return _load_tab(replace(state, tab=Tab((state.tab + 1) % len(Tab))))
    if key in DIRECT_TAB_KEYS:
        return _load_tab(replace(state, tab=Tab(DIRECT_TAB_KEYS[key])))

    if key == FOCUS_LIST_KEY:
        return replace(state, pane=Pane.LIST), []
    if key == FOCUS_DETAILS_KEY:
        return replace(state, pane=Pane.DETAILS), []

    if key == COMMIT_KEY:
        item = state.selected
        if state.pane is Pane.LIST and item is not None:
            return replace(state, finished=True, outcome=item.name), [Exit(item.name)]
        return state, []

    if key == REFRESH_KEY:
        return _refresh_resources(state)

    if key in NAVIGATION_KEYS:
        if state.pane is Pane.LIST:
            return _move_selection(state, key)
        return _scroll(state, key), []

    return state, []


def _on_resources(
    state: DashboardState, event: ResourcesFetched
) -> tuple[DashboardState, list[Effect]]:
    if not _is_fresh(state, RequestSlot.RESOURCES, event.request_id):
        return state, []
    state = _complete(state, RequestSlot.RESOURCES)
    if event.error is not None:
        return replace(state, error=event.error), []

    previous = state.selected
    items = tuple(event.items)
    index = 0
    if items:
        names = [item.name for item in items]
        if previous is not None and previous.name in names:
            index = names.index(previous.name)
        else:
            index = min(state.index, len(items) - 1)
    state = replace(state, items=items, index=index, error=None)

    current = state.selected
    changed = (previous.name if previous else None) != (current.name if current else None)
    if changed and state.tab is not Tab.OVERVIEW:
        return _load_tab(state)
    return state, []


def _on_text(
    state: DashboardState,
    tab: Tab,
    request_id: int,
    content: Text | None,
    error: str | None,
    error_prefix: str,
) -> DashboardState:
    slot = _TAB_SLOTS[tab]
    if not _is_fresh(state, slot, request_id):
        return state
    state = _complete(state, slot)
    body = Text(f"{error_prefix}: {error}") if error is not None else content or Text()
    return _set_viewport(state, tab, ViewportState(body))


def _on_doctor(state: DashboardState, event: DoctorFetched) -> DashboardState:
    if not _is_fresh(state, RequestSlot.DOCTOR, event.request_id):
        return state
    state = _complete(state, RequestSlot.DOCTOR)
    if event.error is not None or event.analysis is None:
        body = Text(f"Error performing doctor analysis: {event.error}")
        analysis = None
    else:
        body = format_doctor(event.analysis)
        analysis = event.analysis
    state = replace(state, analysis=analysis, doctor_loading=False)
    return _set_viewport(state, Tab.DOCTOR, ViewportState(body))


def reduce(state: DashboardState, event: Event) -> tuple[DashboardState, list[Effect]]:
    """Apply one event and return the new state plus the effects to run."""
    if state.finished:
        return state, []

    match event:
        case Resize(width=width, height=height):
            return _resize(state, width, height), []
        case KeyPressed(key=key):
            return _on_key(state, key)
        case RefreshTick():
            return _refresh_resources(state)
        case ResourcesFetched():
            return _on_resources(state, event)
        case LogsFetched(request_id=request_id, content=content, error=error):
            return (
                _on_text(state, Tab.LOGS, request_id, content, error, "Error fetching logs"),
                [],
            )
        case EventsFetched(request_id=request_id, content=content, error=error):
            return (
                _on_text(
                    state, Tab.EVENTS, request_id, content, error, "Error fetching events"
                ),
                [],
            )
        case DoctorFetched():
            return _on_doctor(state, event), []
    return state, []


__all__ = [
    "DashboardState",
    "DoctorFetched",
    "Effect",
    "Event",
    "EventsFetched",
    "Exit",
    "FetchEvents",
    "FetchLogs",
    "FetchResources",
    "KeyPressed",
    "LogsFetched",
    "RefreshTick",
    "RequestTag",
    "Resize",
    "ResourcesFetched",
    "RunDoctor",
    "ViewportState",
    "initial_effects",
    "initial_state",
    "list_page_size",
    "reduce",
]
