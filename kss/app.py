"""Main application class for the KSS dashboard."""

from __future__ import annotations

from textual.app import App
from textual.binding import Binding

from kss.constants import APP_TITLE
from kss.constants.enums import ResourceKind
from kss.controllers.base import BaseController
from kss.keyboard.app import APP_BINDINGS
from kss.models.state.app_settings import AppSettings
from kss.screens.dashboard import DashboardPresenter, DashboardScreen


class KssApp(App[str | None]):
    """Interactive dashboard; exits with the chosen resource name or ``None``."""

    TITLE = APP_TITLE
    BINDINGS: list[Binding] = APP_BINDINGS

    settings: AppSettings

    def __init__(
        self,
        controller: BaseController,
        settings: AppSettings | None = None,
        kind: ResourceKind = ResourceKind.POD,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.controller = controller
        self.settings = settings or AppSettings()
        self.kind = kind

    def on_mount(self) -> None:
        """Called when app is mounted."""
        presenter = DashboardPresenter(
            self.controller,
            max_log_lines=self.settings.max_log_lines,
            pipeline_log_lines=self.settings.pipeline_log_lines,
            doctor_log_lines=self.settings.max_log_lines,
        )
        self.push_screen(
            DashboardScreen(
                presenter,
                self.kind,
                auto_refresh=self.settings.auto_refresh,
                refresh_interval=self.settings.refresh_interval,
            )
        )

    def action_interrupt(self) -> None:
        """Route ctrl+c through the dashboard so it records a ``None`` outcome."""
        if isinstance(self.screen, DashboardScreen):
            self.screen.action_dispatch_key("ctrl+c")
        else:
            self.exit(None)


__all__ = [
    "KssApp",
]
