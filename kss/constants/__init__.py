"""Constants module for the KSS dashboard.

Centralized constants organized by domain:
- enums.py: All Enum class definitions
- values.py: Scalar constants (strings, colors, label keys)
- timeouts.py: Timeout values (seconds)
- limits.py: Limit values (layout minimums, log tails)
- defaults.py: Default values for settings

Note: Keyboard bindings are defined in kss.keyboard module.
"""

from kss.constants.defaults import (
    GEMINI_MODEL_DEFAULT,
    PERSONA_DEFAULT,
    REFRESH_INTERVAL_DEFAULT,
)
from kss.constants.enums import (
    EventType,
    Pane,
    RequestSlot,
    ResourceKind,
    Severity,
    Tab,
)
from kss.constants.limits import (
    MIN_DETAILS_WIDTH,
    MIN_HEIGHT,
    MIN_LIST_WIDTH,
    MIN_WIDTH,
)
from kss.constants.timeouts import (
    CLUSTER_REQUEST_TIMEOUT,
    KUBECTL_COMMAND_TIMEOUT,
)
from kss.constants.values import (
    APP_TITLE,
    FAILED_CONTAINER_REASONS,
)

__all__ = [
    "APP_TITLE",
    "CLUSTER_REQUEST_TIMEOUT",
    "FAILED_CONTAINER_REASONS",
    "GEMINI_MODEL_DEFAULT",
    "KUBECTL_COMMAND_TIMEOUT",
    "MIN_DETAILS_WIDTH",
    "MIN_HEIGHT",
    "MIN_LIST_WIDTH",
    "MIN_WIDTH",
    "PERSONA_DEFAULT",
    "REFRESH_INTERVAL_DEFAULT",
    "EventType",
    "Pane",
    "RequestSlot",
    "ResourceKind",
    "Severity",
    "Tab",
]
