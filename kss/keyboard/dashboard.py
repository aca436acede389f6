"""Dashboard screen keyboard bindings and key groups.

Every binding routes through ``dispatch_key`` so that the reducer sees one
canonical key name per gesture. The key groups below are what the reducer
matches against; they include the vim-style aliases so raw key names work
as well.
"""

from textual.binding import Binding

# ============================================================================
# Key groups understood by the dashboard reducer
# ============================================================================

CYCLE_TAB_KEY = "tab"
DIRECT_TAB_KEYS: dict[str, int] = {"1": 0, "2": 1, "3": 2, "4": 3}
COMMIT_KEY = "enter"
QUIT_KEYS: frozenset[str] = frozenset({"q", "ctrl+c"})
REFRESH_KEY = "r"
FOCUS_LIST_KEY = "left"
FOCUS_DETAILS_KEY = "right"

UP_KEYS: frozenset[str] = frozenset({"up", "k"})
DOWN_KEYS: frozenset[str] = frozenset({"down", "j"})
PAGE_UP_KEYS: frozenset[str] = frozenset({"pageup"})
PAGE_DOWN_KEYS: frozenset[str] = frozenset({"pagedown"})
HOME_KEYS: frozenset[str] = frozenset({"home", "g"})
END_KEYS: frozenset[str] = frozenset({"end", "G"})

NAVIGATION_KEYS: frozenset[str] = (
    UP_KEYS | DOWN_KEYS | PAGE_UP_KEYS | PAGE_DOWN_KEYS | HOME_KEYS | END_KEYS
)

# ============================================================================
# Textual Binding objects for the dashboard screen
# ============================================================================

DASHBOARD_BINDINGS: list[Binding] = [
    Binding("tab", "dispatch_key('tab')", "Next tab", priority=True),
    Binding("1", "dispatch_key('1')", "Overview", show=False),
    Binding("2", "dispatch_key('2')", "Logs", show=False),
    Binding("3", "dispatch_key('3')", "Events", show=False),
    Binding("4", "dispatch_key('4')", "Doctor", show=False),
    Binding("left", "dispatch_key('left')", "List", priority=True),
    Binding("right", "dispatch_key('right')", "Details", priority=True),
    Binding("up,k", "dispatch_key('up')", "Up", show=False, priority=True),
    Binding("down,j", "dispatch_key('down')", "Down", show=False, priority=True),
    Binding("pageup", "dispatch_key('pageup')", "Page up", show=False, priority=True),
    Binding(
        "pagedown", "dispatch_key('pagedown')", "Page down", show=False, priority=True
    ),
    Binding("home,g", "dispatch_key('home')", "Top", show=False, priority=True),
    Binding("end,G", "dispatch_key('end')", "Bottom", show=False, priority=True),
    Binding("enter", "dispatch_key('enter')", "Select", priority=True),
    Binding("r", "dispatch_key('r')", "Refresh"),
    Binding("q", "dispatch_key('q')", "Quit", priority=True),
]

__all__ = [
    "COMMIT_KEY",
    "CYCLE_TAB_KEY",
    "DASHBOARD_BINDINGS",
    "DIRECT_TAB_KEYS",
    "DOWN_KEYS",
    "END_KEYS",
    "FOCUS_DETAILS_KEY",
    "FOCUS_LIST_KEY",
    "HOME_KEYS",
    "NAVIGATION_KEYS",
    "PAGE_DOWN_KEYS",
    "PAGE_UP_KEYS",
    "QUIT_KEYS",
    "REFRESH_KEY",
    "UP_KEYS",
]
