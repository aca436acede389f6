"""Dashboard screen package."""

from kss.screens.dashboard.dashboard_screen import DashboardScreen
from kss.screens.dashboard.presenter import DashboardMessage, DashboardPresenter

__all__ = ["DashboardMessage", "DashboardPresenter", "DashboardScreen"]
