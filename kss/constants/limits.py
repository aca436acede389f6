"""Limit and threshold constants for the dashboard.

Layout minimums, log tails, and validation ranges.
"""

from typing import Final

# ============================================================================
# Layout limits
# ============================================================================

MIN_LIST_WIDTH: Final = 30
MIN_DETAILS_WIDTH: Final = 40
# Columns between the list pane and the details box
PANE_GAP: Final = 2
MIN_WIDTH: Final = MIN_LIST_WIDTH + PANE_GAP + MIN_DETAILS_WIDTH
MIN_HEIGHT: Final = 10
MIN_VIEWPORT_HEIGHT: Final = 5

# Rows taken by the box borders, tab bar and rule
DETAILS_CHROME_HEIGHT: Final = 4

# ============================================================================
# Log and diagnosis limits
# ============================================================================

DOCTOR_LOG_LINES: Final = 100
POD_LOG_LINES: Final = 100
PIPELINE_LOG_LINES: Final = 50
AI_LOG_LINES: Final = 100
RESTART_WARNING_THRESHOLD: Final = 3
REMEDIATION_WRAP_WIDTH: Final = 80

# ============================================================================
# Validation limits
# ============================================================================

REFRESH_INTERVAL_MIN: Final = 5

__all__ = [
    "AI_LOG_LINES",
    "DETAILS_CHROME_HEIGHT",
    "DOCTOR_LOG_LINES",
    "MIN_DETAILS_WIDTH",
    "MIN_HEIGHT",
    "MIN_LIST_WIDTH",
    "MIN_VIEWPORT_HEIGHT",
    "MIN_WIDTH",
    "PANE_GAP",
    "PIPELINE_LOG_LINES",
    "POD_LOG_LINES",
    "REFRESH_INTERVAL_MIN",
    "REMEDIATION_WRAP_WIDTH",
    "RESTART_WARNING_THRESHOLD",
]
