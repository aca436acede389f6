"""Dashboard screen: feeds keys, resizes and fetch completions into the reducer."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from contextlib import suppress
from functools import partial
from typing import Any

from textual.app import ComposeResult
from textual.css.query import NoMatches, WrongType
from textual.events import Resize as ResizeEvent
from textual.screen import Screen
from textual.timer import Timer
from textual.widgets import Static

from kss.constants.defaults import REFRESH_INTERVAL_DEFAULT
from kss.constants.enums import RequestSlot, ResourceKind
from kss.controllers.base import CollaboratorError
from kss.keyboard import DASHBOARD_BINDINGS
from kss.screens.dashboard.config import DASHBOARD_VIEW_ID
from kss.screens.dashboard.presenter import DashboardMessage, DashboardPresenter
from kss.screens.dashboard.renderer import render
from kss.screens.dashboard.state import (
    DashboardState,
    DoctorFetched,
    Effect,
    Event,
    EventsFetched,
    Exit,
    FetchEvents,
    FetchLogs,
    FetchResources,
    KeyPressed,
    LogsFetched,
    RefreshTick,
    Resize,
    ResourcesFetched,
    RunDoctor,
    initial_effects,
    initial_state,
    reduce,
)
from kss.screens.mixins.worker_mixin import WorkerMixin

logger = logging.getLogger(__name__)


class DashboardScreen(WorkerMixin, Screen[None]):
    """Two-pane resource list and tabbed detail view."""

    BINDINGS = DASHBOARD_BINDINGS

    DEFAULT_CSS = """
    DashboardScreen {
        layout: vertical;
    }

    #dashboard-view {
        width: 1fr;
        height: 1fr;
    }
    """

    def __init__(
        self,
        presenter: DashboardPresenter,
        kind: ResourceKind = ResourceKind.POD,
        *,
        auto_refresh: bool = False,
        refresh_interval: int = REFRESH_INTERVAL_DEFAULT,
    ) -> None:
        super().__init__()
        self._presenter = presenter
        self._state = initial_state(kind)
        self._auto_refresh = auto_refresh
        self._refresh_interval = refresh_interval
        self._refresh_timer: Timer | None = None

    @property
    def state(self) -> DashboardState:
        return self._state

    def compose(self) -> ComposeResult:
        yield Static(id=DASHBOARD_VIEW_ID)

    def on_mount(self) -> None:
        self._state, effects = initial_effects(self._state)
        self.dispatch_event(Resize(self.app.size.width, self.app.size.height))
        self._run_effects(effects)
        if self._auto_refresh:
            self._refresh_timer = self.set_interval(
                self._refresh_interval, partial(self.dispatch_event, RefreshTick())
            )

    def on_unmount(self) -> None:
        if self._refresh_timer is not None:
            self._refresh_timer.stop()
            self._refresh_timer = None

    def on_resize(self, event: ResizeEvent) -> None:
        self.dispatch_event(Resize(event.size.width, event.size.height))

    def on_dashboard_message(self, message: DashboardMessage) -> None:
        self.dispatch_event(message.event)

    def action_dispatch_key(self, key: str) -> None:
        self.dispatch_event(KeyPressed(key))

    # =========================================================================
    # Event loop
    # =========================================================================

    def dispatch_event(self, event: Event) -> None:
        """Reduce one event, repaint, then start the returned effects."""
        self._state, effects = reduce(self._state, event)
        self._repaint()
        self._run_effects(effects)

    def _repaint(self) -> None:
        with suppress(NoMatches, WrongType):
            self.query_one(f"#{DASHBOARD_VIEW_ID}", Static).update(render(self._state))

    def _run_effects(self, effects: list[Effect]) -> None:
        for effect in effects:
            match effect:
                case Exit(outcome=outcome):
                    self.app.exit(outcome)
                case FetchResources(request_id=request_id, kind=kind):
                    self._start_fetch(
                        RequestSlot.RESOURCES,
                        request_id,
                        partial(self._presenter.load_resources, kind),
                        partial(ResourcesFetched, request_id),
                    )
                case FetchLogs(request_id=request_id, item=item):
                    self._start_fetch(
                        RequestSlot.LOGS,
                        request_id,
                        partial(self._presenter.load_logs, item),
                        partial(LogsFetched, request_id),
                    )
                case FetchEvents(request_id=request_id, item=item):
                    self._start_fetch(
                        RequestSlot.EVENTS,
                        request_id,
                        partial(self._presenter.load_events, item),
                        partial(EventsFetched, request_id),
                    )
                case RunDoctor(request_id=request_id, item=item):
                    self._start_fetch(
                        RequestSlot.DOCTOR,
                        request_id,
                        partial(self._presenter.load_doctor, item),
                        partial(DoctorFetched, request_id),
                    )

    def _start_fetch(
        self,
        slot: RequestSlot,
        request_id: int,
        load: Callable[[], Awaitable[Any]],
        completed: Callable[..., Event],
    ) -> None:
        self.start_worker(
            partial(self._fetch_worker, load, completed),
            name=f"{slot.value}-{request_id}",
            group=slot.value,
        )

    async def _fetch_worker(
        self,
        load: Callable[[], Awaitable[Any]],
        completed: Callable[..., Event],
    ) -> None:
        """Run one fetch and post exactly one completion message."""
        try:
            result = await load()
        except CollaboratorError as exc:
            logger.debug("Dashboard fetch failed: %s", exc)
            event = completed(error=str(exc))
        except Exception as exc:
            logger.exception("Unexpected error during dashboard fetch")
            event = completed(error=str(exc) or type(exc).__name__)
        else:
            event = completed(result)
        self.post_message(DashboardMessage(event))


__all__ = ["DashboardScreen"]
