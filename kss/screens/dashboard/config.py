"""Dashboard screen configuration - tab labels, widget IDs and box glyphs."""

from __future__ import annotations

from kss.constants.enums import Tab

# =============================================================================
# Tab labels
# =============================================================================

TAB_LABELS: dict[Tab, str] = {
    Tab.OVERVIEW: "1:Overview",
    Tab.LOGS: "2:Logs",
    Tab.EVENTS: "3:Events",
    Tab.DOCTOR: "4:Doctor",
}

# =============================================================================
# Widget IDs
# =============================================================================

DASHBOARD_VIEW_ID = "dashboard-view"

# =============================================================================
# Rounded box glyphs
# =============================================================================

BOX_TOP_LEFT = "╭"
BOX_TOP_RIGHT = "╮"
BOX_BOTTOM_LEFT = "╰"
BOX_BOTTOM_RIGHT = "╯"
BOX_VERTICAL = "│"
BOX_HORIZONTAL = "─"
SELECTION_BAR = "│ "
