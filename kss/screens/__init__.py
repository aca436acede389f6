"""Screens for the KSS dashboard."""

from kss.screens.dashboard import DashboardScreen

__all__ = ["DashboardScreen"]
