"""Doctor orchestration: run the rules over every container of a resource.

Log retrieval is delegated to an injected ``LogSource`` so the orchestration
can be exercised without a cluster.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace
from datetime import datetime, timezone
from typing import Protocol

from kss.constants.enums import ResourceKind
from kss.constants.limits import DOCTOR_LOG_LINES, RESTART_WARNING_THRESHOLD
from kss.constants.values import REASON_CRASH_LOOP_BACKOFF
from kss.controllers.base import CollaboratorError
from kss.doctor.classifier import classify_finding
from kss.doctor.rules import analyze_container_state, analyze_logs
from kss.models.core.pipeline_run import PipelineRun, TaskRun, task_run_display_name
from kss.models.core.pod import ContainerStatus, Pod
from kss.models.doctor.finding import AnalysisResult, Finding

logger = logging.getLogger(__name__)


class LogSource(Protocol):
    async def fetch_logs(
        self, pod_name: str, container: str, max_lines: int, previous: bool
    ) -> str: ...


class PodResolver(Protocol):
    async def fetch_task_run_pod(self, task_run: TaskRun) -> Pod: ...


def should_analyze_logs(status: ContainerStatus) -> bool:
    """Logs are worth reading for terminated, restarted, or crash-looping containers."""
    waiting = status.state.waiting
    return (
        status.state.terminated is not None
        or status.restart_count > 0
        or (waiting is not None and waiting.reason == REASON_CRASH_LOOP_BACKOFF)
    )


async def _read_logs(
    log_source: LogSource, pod_name: str, status: ContainerStatus, max_lines: int
) -> str:
    """Prefer the previous instance's log after a restart, else the current one."""
    use_previous = status.restart_count > 0
    logs = ""
    try:
        logs = await log_source.fetch_logs(pod_name, status.name, max_lines, use_previous)
    except CollaboratorError as exc:
        logger.debug("Log fetch failed for %s/%s: %s", pod_name, status.name, exc)
        if not use_previous:
            return ""
    if logs or not use_previous:
        return logs
    try:
        return await log_source.fetch_logs(pod_name, status.name, max_lines, False)
    except CollaboratorError as exc:
        logger.debug("Current log fetch failed for %s/%s: %s", pod_name, status.name, exc)
        return ""


async def diagnose_container(
    pod_name: str,
    status: ContainerStatus,
    log_source: LogSource,
    *,
    is_init: bool = False,
    max_lines: int = DOCTOR_LOG_LINES,
) -> list[Finding]:
    """Return findings for one container; empty when nothing looks wrong."""
    issues = analyze_container_state(status)
    if should_analyze_logs(status):
        issues.extend(analyze_logs(await _read_logs(log_source, pod_name, status, max_lines)))

    if (
        not issues
        and status.state.running is not None
        and status.restart_count > RESTART_WARNING_THRESHOLD
    ):
        issues.append(f"Container has restarted {status.restart_count} times")

    return [classify_finding(issue, status.name, is_init) for issue in issues]


async def _pod_findings(
    pod: Pod, log_source: LogSource, max_lines: int
) -> list[Finding]:
    findings: list[Finding] = []
    for status in pod.status.init_container_statuses:
        findings.extend(
            await diagnose_container(
                pod.name, status, log_source, is_init=True, max_lines=max_lines
            )
        )
    for status in pod.status.container_statuses:
        findings.extend(
            await diagnose_container(pod.name, status, log_source, max_lines=max_lines)
        )
    return findings


async def diagnose_pod(
    pod: Pod,
    log_source: LogSource,
    max_lines: int = DOCTOR_LOG_LINES,
) -> AnalysisResult:
    """Diagnose init containers first, then regular containers."""
    return AnalysisResult(
        resource_name=pod.name,
        resource_kind=ResourceKind.POD,
        findings=tuple(await _pod_findings(pod, log_source, max_lines)),
        analyzed_at=datetime.now(timezone.utc),
    )


async def diagnose_pipeline_run(
    pipeline_run: PipelineRun,
    task_runs: Sequence[TaskRun],
    resolver: PodResolver,
    log_source: LogSource,
    max_lines: int = DOCTOR_LOG_LINES,
) -> AnalysisResult:
    """Diagnose the pod behind every TaskRun of a PipelineRun.

    Container names are prefixed with the TaskRun display name. A TaskRun
    whose pod cannot be fetched contributes a single warning.
    """
    findings: list[Finding] = []
    for task_run in task_runs:
        display_name = task_run_display_name(task_run)
        try:
            pod = await resolver.fetch_task_run_pod(task_run)
        except CollaboratorError as exc:
            logger.debug("Cannot resolve pod for TaskRun %s: %s", task_run.name, exc)
            findings.append(
                classify_finding(f"TaskRun {display_name}: Unable to fetch pod", display_name)
            )
            continue
        for finding in await _pod_findings(pod, log_source, max_lines):
            findings.append(replace(finding, container=f"{display_name}/{finding.container}"))

    return AnalysisResult(
        resource_name=pipeline_run.name,
        resource_kind=ResourceKind.PIPELINE_RUN,
        findings=tuple(findings),
        analyzed_at=datetime.now(timezone.utc),
    )
