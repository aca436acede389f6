"""Gather cluster context and build AI diagnosis prompts."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence

from kss.ai.personas import persona_instructions
from kss.constants.limits import AI_LOG_LINES
from kss.constants.values import FAILED_CONTAINER_REASONS
from kss.controllers.base import BaseController, CollaboratorError
from kss.models.core.pipeline_run import (
    PipelineRun,
    TaskRun,
    status_label,
    task_run_display_name,
)
from kss.models.core.pod import ContainerStatus, Pod

logger = logging.getLogger(__name__)

_ANSWER_RULES = """Instructions:
1. Stay in your persona throughout.
2. {focus}
3. When logs from a crashed instance are present, weigh them first.
4. Explain the failure in one or two sentences.
5. Give one concrete kubectl command or YAML change that fixes it.
6. Format the answer as Markdown with bold text and code blocks.
7. Keep it short."""


def needs_logs(status: ContainerStatus) -> bool:
    """Failing or restarted containers contribute logs to the prompt."""
    waiting = status.state.waiting
    terminated = status.state.terminated
    failing = (waiting is not None and waiting.reason in FAILED_CONTAINER_REASONS) or (
        terminated is not None and terminated.exit_code != 0
    )
    return failing or status.restart_count > 0


async def _safe_logs(
    controller: BaseController, pod_name: str, container: str, previous: bool
) -> str:
    try:
        return await controller.fetch_logs(pod_name, container, AI_LOG_LINES, previous)
    except CollaboratorError as exc:
        logger.debug(
            "Skipping %s logs for %s/%s: %s",
            "previous" if previous else "current",
            pod_name,
            container,
            exc,
        )
        return ""


async def collect_pod_logs(controller: BaseController, pod: Pod) -> str:
    """Previous and current logs of every failing or restarted container."""
    sections: list[str] = []
    statuses = [*pod.status.init_container_statuses, *pod.status.container_statuses]
    for status in statuses:
        if not needs_logs(status):
            continue
        if status.restart_count > 0:
            previous = await _safe_logs(controller, pod.name, status.name, True)
            if previous:
                sections.append(
                    f"--- Previous Logs for container {status.name} (Crashed Instance) ---\n"
                    f"{previous}"
                )
        current = await _safe_logs(controller, pod.name, status.name, False)
        if current:
            sections.append(f"--- Current Logs for container {status.name} ---\n{current}")
    return "\n\n".join(sections)


async def _safe_events(controller: BaseController, name: str, kind: str) -> str:
    try:
        return (await controller.fetch_events_raw(name, kind)).strip()
    except CollaboratorError as exc:
        logger.debug("Skipping events for %s %s: %s", kind, name, exc)
        return ""


# =============================================================================
# Pod prompt
# =============================================================================


async def build_pod_prompt(controller: BaseController, pod: Pod, persona: str) -> str:
    events = await _safe_events(controller, pod.name, "Pod")
    logs = await collect_pod_logs(controller, pod)
    return "\n\n".join(
        [
            persona_instructions(persona),
            "You are diagnosing why a Kubernetes pod is failing.",
            "Context:\n"
            f"- Pod Name: {pod.name}\n"
            f"- Namespace: {pod.metadata.namespace}\n"
            f"- Phase: {pod.status.phase}",
            f"Pod Status (JSON):\n{pod.model_dump_json(by_alias=True, indent=2)}",
            f"Events:\n{events or 'No events found.'}",
            f"Logs:\n{logs or 'No failing container logs found.'}",
            _ANSWER_RULES.format(
                focus="Use the logs and events to find the root cause."
            ),
        ]
    )


# =============================================================================
# PipelineRun prompt
# =============================================================================


def task_run_summary(task_runs: Sequence[TaskRun]) -> str:
    if not task_runs:
        return "No TaskRuns found."
    lines = []
    for task_run in task_runs:
        label, _, reason, message = status_label(task_run.status.conditions)
        line = f"- {task_run_display_name(task_run)} ({task_run.name}): {label}"
        if reason:
            line += f" ({reason})"
        if message:
            line += f" - {message}"
        lines.append(line)
    return "\n".join(lines)


async def _task_run_events(controller: BaseController, task_runs: Sequence[TaskRun]) -> str:
    sections = []
    for task_run in task_runs:
        events = await _safe_events(controller, task_run.name, "TaskRun")
        if events:
            sections.append(f"--- Events for TaskRun {task_run.name} ---\n{events}")
    return "\n\n".join(sections) or "No TaskRun events found."


async def _task_run_logs(controller: BaseController, task_runs: Sequence[TaskRun]) -> str:
    """Logs for every TaskRun that did not succeed."""
    sections = []
    for task_run in task_runs:
        label, _, reason, _ = status_label(task_run.status.conditions)
        if label == "Succeeded":
            continue
        header = f"--- TaskRun {task_run_display_name(task_run)} ({task_run.name})"
        if reason:
            header += f" - {reason}"
        header += " ---"
        try:
            pod = await controller.fetch_task_run_pod(task_run)
        except CollaboratorError as exc:
            sections.append(f"{header}\nCould not fetch pod: {exc}")
            continue
        logs = (await collect_pod_logs(controller, pod)).strip()
        sections.append(f"{header}\n{logs or 'No failing container logs found.'}")
    return "\n\n".join(sections) or "No failed TaskRuns found, skipping logs."


async def build_pipeline_run_prompt(
    controller: BaseController,
    pipeline_run: PipelineRun,
    task_runs: Sequence[TaskRun],
    persona: str,
) -> str:
    label, _, reason, message = status_label(pipeline_run.status.conditions)
    task_runs_json = json.dumps(
        [task_run.model_dump(by_alias=True, mode="json") for task_run in task_runs],
        indent=2,
    )
    run_events = await _safe_events(controller, pipeline_run.name, "PipelineRun")
    return "\n\n".join(
        [
            persona_instructions(persona),
            "You are diagnosing why a Tekton PipelineRun failed.",
            "Context:\n"
            f"- PipelineRun Name: {pipeline_run.name}\n"
            f"- Namespace: {pipeline_run.metadata.namespace}\n"
            f"- Pipeline: {pipeline_run.pipeline_name}\n"
            f"- Status: {label}\n"
            f"- Reason: {reason}\n"
            f"- Message: {message}",
            f"PipelineRun JSON:\n{pipeline_run.model_dump_json(by_alias=True, indent=2)}",
            f"TaskRuns JSON:\n{task_runs_json}",
            f"TaskRun Summary:\n{task_run_summary(task_runs)}",
            f"PipelineRun Events:\n{run_events or 'No events found.'}",
            f"TaskRun Events:\n{await _task_run_events(controller, task_runs)}",
            f"TaskRun Logs:\n{await _task_run_logs(controller, task_runs)}",
            _ANSWER_RULES.format(
                focus="Trace the root cause across the TaskRuns and the PipelineRun conditions."
            ),
        ]
    )


__all__ = [
    "build_pipeline_run_prompt",
    "build_pod_prompt",
    "collect_pod_logs",
    "needs_logs",
    "task_run_summary",
]
