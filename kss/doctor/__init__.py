"""Rule-based diagnosis of container failures."""

from kss.doctor.classifier import classify_finding, remediation_for, severity_for
from kss.doctor.diagnosis import (
    LogSource,
    PodResolver,
    diagnose_pipeline_run,
    diagnose_pod,
)
from kss.doctor.rules import analyze_container_state, analyze_logs

__all__ = [
    "LogSource",
    "PodResolver",
    "analyze_container_state",
    "analyze_logs",
    "classify_finding",
    "diagnose_pipeline_run",
    "diagnose_pod",
    "remediation_for",
    "severity_for",
]
