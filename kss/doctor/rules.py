"""Pure heuristic rules over container status and log text.

Each rule is independent: every matching rule contributes its issue, in
table order. Nothing here performs I/O.
"""

from __future__ import annotations

from kss.constants.values import (
    REASON_CRASH_LOOP_BACKOFF,
    REASON_CREATE_CONTAINER_CONFIG_ERROR,
    REASON_ERR_IMAGE_PULL,
    REASON_IMAGE_PULL_BACKOFF,
)
from kss.models.core.pod import ContainerStatus, TerminatedState

OOM_KILLED_ISSUE = (
    "Likely OOMKilled (Out of Memory). Your container exceeded its memory limits."
)
APP_CRASHED_ISSUE = (
    "Application crashed (Exit Code {code}). This is usually an internal application error."
)
COMMAND_NOT_FOUND_ISSUE = (
    "Command not found. Check your container's entrypoint or command."
)
IMAGE_PULL_ISSUE = (
    "Failed to pull image. Check if the image name/tag is correct and if the "
    "registry requires authentication."
)
CRASH_LOOP_ISSUE = (
    "Container is crashing repeatedly. Check application logs for errors during startup."
)
CONFIG_ERROR_ISSUE = "Configuration error. Likely a missing ConfigMap or Secret."

NETWORK_ISSUE = (
    "Network error detected (Connection Refused). Check if dependent services are reachable."
)
TIMEOUT_ISSUE = "Timeout detected. A service or resource might be slow or unreachable."
PERMISSION_ISSUE = (
    "Permission denied. Check the Pod's SecurityContext or file system permissions."
)
MISSING_FILE_ISSUE = (
    "Missing file or configuration. Check your volume mounts and ConfigMaps."
)

_WAITING_ISSUES: dict[str, str] = {
    REASON_IMAGE_PULL_BACKOFF: IMAGE_PULL_ISSUE,
    REASON_ERR_IMAGE_PULL: IMAGE_PULL_ISSUE,
    REASON_CRASH_LOOP_BACKOFF: CRASH_LOOP_ISSUE,
    REASON_CREATE_CONTAINER_CONFIG_ERROR: CONFIG_ERROR_ISSUE,
}


def _terminated_issue(terminated: TerminatedState) -> str | None:
    code = terminated.exit_code
    if code == 137:
        return OOM_KILLED_ISSUE
    if code in (1, 2):
        return APP_CRASHED_ISSUE.format(code=code)
    if code == 127:
        return COMMAND_NOT_FOUND_ISSUE
    return None


def analyze_container_state(status: ContainerStatus) -> list[str]:
    """Return the issues implied by a container's current and last state.

    The last state's termination is considered only when the container has
    no current termination record.
    """
    issues: list[str] = []

    terminated = status.state.terminated
    if terminated is None and status.last_state is not None:
        terminated = status.last_state.terminated
    if terminated is not None:
        issue = _terminated_issue(terminated)
        if issue:
            issues.append(issue)

    waiting = status.state.waiting
    if waiting is not None and waiting.reason in _WAITING_ISSUES:
        issues.append(_WAITING_ISSUES[waiting.reason])

    return issues


def analyze_logs(logs: str) -> list[str]:
    """Return issues detected by case-insensitive substring rules over logs."""
    if not logs:
        return []

    lowered = logs.lower()
    issues: list[str] = []
    if "connection refused" in lowered or "dial tcp" in lowered:
        issues.append(NETWORK_ISSUE)
    if "timeout" in lowered or "deadline exceeded" in lowered:
        issues.append(TIMEOUT_ISSUE)
    if "permission denied" in lowered or "forbidden" in lowered:
        issues.append(PERMISSION_ISSUE)
    if "not found" in lowered and ("config" in lowered or "file" in lowered):
        issues.append(MISSING_FILE_ISSUE)
    return issues
