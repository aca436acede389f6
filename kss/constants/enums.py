"""All enum definitions for the dashboard.

This module consolidates all enumerations used throughout the application.
"""

from enum import Enum, IntEnum

# =============================================================================
# Dashboard Enums
# =============================================================================

class Tab(IntEnum):
    """Detail pane tabs, in tab-bar order."""

    OVERVIEW = 0
    LOGS = 1
    EVENTS = 2
    DOCTOR = 3


class Pane(IntEnum):
    """Top-level dashboard regions that can hold focus."""

    LIST = 0
    DETAILS = 1


class RequestSlot(Enum):
    """Freshness keys for background fetches."""

    RESOURCES = "resources"
    LOGS = "logs"
    EVENTS = "events"
    DOCTOR = "doctor"


# =============================================================================
# Resource Enums
# =============================================================================

class ResourceKind(Enum):
    """Kinds of resources the dashboard can list."""

    POD = "pod"
    PIPELINE_RUN = "pipelinerun"

    @property
    def display_name(self) -> str:
        return "Pod" if self is ResourceKind.POD else "PipelineRun"


class EventType(Enum):
    """Kubernetes event types."""

    NORMAL = "Normal"
    WARNING = "Warning"


# =============================================================================
# Diagnosis Enums
# =============================================================================

class Severity(Enum):
    """Severity levels for doctor findings."""

    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


__all__ = [
    "EventType",
    "Pane",
    "RequestSlot",
    "ResourceKind",
    "Severity",
    "Tab",
]
