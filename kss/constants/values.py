"""Scalar constants for the dashboard.

All application-level constants with proper type hints using Final.
"""

from typing import Final

# ============================================================================
# Application
# ============================================================================

APP_TITLE: Final = "KSS Dashboard"

# ============================================================================
# Colors (rich color names)
# ============================================================================

COLOR_FOCUSED_BORDER: Final = "color(86)"
COLOR_BLURRED_BORDER: Final = "color(240)"
COLOR_SELECTED: Final = "color(170)"
COLOR_MUTED: Final = "color(245)"

# ============================================================================
# Dashboard messages
# ============================================================================

INITIALIZING_TEXT: Final = "Initializing Dashboard..."
TERMINAL_TOO_SMALL_TEXT: Final = "Terminal too small. Please resize."
NO_ITEM_SELECTED_TEXT: Final = "No item selected."
DOCTOR_LOADING_TEXT: Final = "Analyzing containers..."
NO_ISSUES_TEXT: Final = "No issues detected. All containers appear healthy."
NO_EVENTS_TEXT: Final = "No events found for this pod."
NO_TASK_RUNS_TEXT: Final = "No TaskRuns found for this PipelineRun."
NOT_AVAILABLE: Final = "N/A"
STATUS_UNKNOWN: Final = "Unknown"

# ============================================================================
# Kubernetes waiting reasons
# ============================================================================

REASON_IMAGE_PULL_BACKOFF: Final = "ImagePullBackOff"
REASON_ERR_IMAGE_PULL: Final = "ErrImagePull"
REASON_CRASH_LOOP_BACKOFF: Final = "CrashLoopBackOff"
REASON_CREATE_CONTAINER_CONFIG_ERROR: Final = "CreateContainerConfigError"
REASON_INVALID_IMAGE_NAME: Final = "InvalidImageName"

FAILED_CONTAINER_REASONS: Final = (
    REASON_IMAGE_PULL_BACKOFF,
    REASON_CRASH_LOOP_BACKOFF,
    REASON_ERR_IMAGE_PULL,
    REASON_CREATE_CONTAINER_CONFIG_ERROR,
    REASON_INVALID_IMAGE_NAME,
)

# ============================================================================
# Tekton labels
# ============================================================================

LABEL_PIPELINE_RUN: Final = "tekton.dev/pipelineRun"
LABEL_PIPELINE_TASK: Final = "tekton.dev/pipelineTask"
LABEL_TASK: Final = "tekton.dev/task"
TASK_RUN_POD_LABELS: Final = ("tekton.dev/taskRun", "tekton.dev/taskrun")

__all__ = [
    "APP_TITLE",
    "COLOR_BLURRED_BORDER",
    "COLOR_FOCUSED_BORDER",
    "COLOR_MUTED",
    "COLOR_SELECTED",
    "DOCTOR_LOADING_TEXT",
    "FAILED_CONTAINER_REASONS",
    "INITIALIZING_TEXT",
    "LABEL_PIPELINE_RUN",
    "LABEL_PIPELINE_TASK",
    "LABEL_TASK",
    "NOT_AVAILABLE",
    "NO_EVENTS_TEXT",
    "NO_ISSUES_TEXT",
    "NO_ITEM_SELECTED_TEXT",
    "NO_TASK_RUNS_TEXT",
    "REASON_CRASH_LOOP_BACKOFF",
    "REASON_CREATE_CONTAINER_CONFIG_ERROR",
    "REASON_ERR_IMAGE_PULL",
    "REASON_IMAGE_PULL_BACKOFF",
    "REASON_INVALID_IMAGE_NAME",
    "STATUS_UNKNOWN",
    "TASK_RUN_POD_LABELS",
    "TERMINAL_TOO_SMALL_TEXT",
]
