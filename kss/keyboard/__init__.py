"""Keyboard bindings module.

This module provides all keyboard bindings for the KSS dashboard.
Bindings are organized into two categories:

- app: App-level bindings (APP_BINDINGS)
- dashboard: Dashboard screen bindings and the key groups the reducer matches
"""

from kss.keyboard.app import APP_BINDINGS
from kss.keyboard.dashboard import DASHBOARD_BINDINGS

__all__ = [
    "APP_BINDINGS",
    "DASHBOARD_BINDINGS",
]
