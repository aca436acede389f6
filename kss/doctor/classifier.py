"""Severity and remediation lookup for doctor issues.

Severity is derived from the issue text alone, so a finding's severity can
never disagree with its message.
"""

from __future__ import annotations

from kss.constants.enums import Severity
from kss.models.doctor.finding import Finding

DEFAULT_REMEDIATION = "Review container status and logs for additional context."

# (needle, severity, remediation); first match wins
_RULES: tuple[tuple[str, Severity, str], ...] = (
    (
        "oomkilled",
        Severity.CRITICAL,
        "Increase memory limits in pod spec. Check resource usage patterns in monitoring.",
    ),
    (
        "failed to pull image",
        Severity.CRITICAL,
        "Verify image name/tag. Check imagePullSecrets if registry requires authentication.",
    ),
    (
        "crashing repeatedly",
        Severity.CRITICAL,
        "Review application logs for startup errors. Check readiness/liveness probe configuration.",
    ),
    (
        "configuration error",
        Severity.CRITICAL,
        "Verify referenced ConfigMaps and Secrets exist. Check volume mount configurations.",
    ),
    (
        "exit code",
        Severity.WARNING,
        "Application exited with error. Review logs and check application health.",
    ),
    (
        "command not found",
        Severity.WARNING,
        "Verify container entrypoint/command in pod spec. Check binary exists in container image.",
    ),
    (
        "network error",
        Severity.WARNING,
        "Ensure dependent services are running and accessible. Check service DNS and network policies.",
    ),
    (
        "timeout",
        Severity.WARNING,
        "Increase timeout values if appropriate. Check service responsiveness and network latency.",
    ),
    (
        "permission denied",
        Severity.WARNING,
        "Review Pod SecurityContext, serviceAccount permissions, and file ownership.",
    ),
    (
        "missing file",
        Severity.WARNING,
        "Verify volume mounts and ConfigMap/Secret contents. Check file paths in application config.",
    ),
    (
        "has restarted",
        Severity.WARNING,
        "Check logs for intermittent crashes. Consider increasing memory/CPU limits or "
        "reviewing application stability.",
    ),
    (
        "unable to fetch pod",
        Severity.WARNING,
        "Check TaskRun status for pod scheduling issues.",
    ),
)


def _lookup(message: str) -> tuple[Severity, str]:
    lowered = message.lower()
    for needle, severity, remediation in _RULES:
        if needle in lowered:
            return severity, remediation
    return Severity.INFO, DEFAULT_REMEDIATION


def severity_for(message: str) -> Severity:
    return _lookup(message)[0]


def remediation_for(message: str) -> str:
    return _lookup(message)[1]


def classify_finding(message: str, container: str, is_init: bool = False) -> Finding:
    """Build a finding whose severity and remediation follow from ``message``."""
    severity, remediation = _lookup(message)
    return Finding(
        severity=severity,
        message=message,
        remediation=remediation,
        container=container,
        is_init=is_init,
    )
