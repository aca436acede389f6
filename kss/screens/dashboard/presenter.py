"""Dashboard presenter - tab loaders and pure body formatting.

The loaders talk to the controller and return ready-to-display content; the
formatters turn models into ``rich.text.Text`` without touching I/O.
"""

from __future__ import annotations

import logging
import textwrap
from collections.abc import Sequence
from typing import TYPE_CHECKING

from rich.text import Text
from textual.message import Message

from kss.constants.enums import ResourceKind, Severity
from kss.constants.limits import (
    DOCTOR_LOG_LINES,
    PIPELINE_LOG_LINES,
    POD_LOG_LINES,
    REMEDIATION_WRAP_WIDTH,
)
from kss.constants.values import (
    COLOR_MUTED,
    NO_EVENTS_TEXT,
    NO_ISSUES_TEXT,
    NO_TASK_RUNS_TEXT,
)
from kss.controllers.base import BaseController, CollaboratorError
from kss.doctor import diagnose_pipeline_run, diagnose_pod
from kss.models.core.pipeline_run import (
    PipelineRun,
    TaskRun,
    status_label,
    task_run_display_name,
)
from kss.models.core.pod import Pod
from kss.models.core.resource_item import PipelineRunItem, PodItem, ResourceItem
from kss.models.doctor.finding import AnalysisResult, Finding
from kss.models.events.event_info import EventInfo
from kss.utils.time_format import (
    format_clock,
    format_duration,
    format_offset,
    parse_timestamp,
)

if TYPE_CHECKING:
    from kss.screens.dashboard.state import Event

logger = logging.getLogger(__name__)


# =============================================================================
# Worker Messages
# =============================================================================


class DashboardMessage(Message):
    """Carries one completion event from a worker back to the screen."""

    def __init__(self, event: Event) -> None:
        super().__init__()
        self.event = event


# =============================================================================
# Styles
# =============================================================================

HEADER_STYLE = "bold color(86)"
LABEL_STYLE = "bold"
SECTION_STYLE = "bold color(212)"
SUCCESS_STYLE = "green"
FAILED_STYLE = "bold red"
RUNNING_STYLE = "bold yellow"
WAITING_STYLE = "yellow"
INFO_STYLE = "color(39)"
REMEDIATION_STYLE = f"italic {COLOR_MUTED}"

_PHASE_STYLES: dict[str, str] = {
    "Running": SUCCESS_STYLE,
    "Succeeded": SUCCESS_STYLE,
    "Failed": FAILED_STYLE,
    "Error": FAILED_STYLE,
    "Pending": RUNNING_STYLE,
}

_STATUS_COLOR_STYLES: dict[str, str] = {
    "green": SUCCESS_STYLE,
    "red": FAILED_STYLE,
    "yellow": RUNNING_STYLE,
}

_SEVERITY_MARKS: tuple[tuple[Severity, str, str], ...] = (
    (Severity.CRITICAL, "✖", FAILED_STYLE),
    (Severity.WARNING, "⚠", RUNNING_STYLE),
    (Severity.INFO, "ℹ", INFO_STYLE),
)


# =============================================================================
# Pure formatters
# =============================================================================


def _row(text: Text, label: str, value: str, style: str = "") -> None:
    text.append(f"{label}: ", style=LABEL_STYLE)
    text.append(value, style=style)
    text.append("\n")


def _container_style(label: str) -> str:
    if label == "running" or label.startswith("terminated: Completed"):
        return SUCCESS_STYLE
    if "Error" in label or "BackOff" in label:
        return FAILED_STYLE
    return WAITING_STYLE


def format_overview(item: ResourceItem) -> Text:
    """Build the Overview body for a list item."""
    text = Text()
    match item:
        case PodItem(pod=pod):
            text.append(f"Pod: {pod.name}\n", style=HEADER_STYLE)
            _row(text, "Namespace", pod.metadata.namespace)
            _row(text, "Phase", item.status, _PHASE_STYLES.get(item.status, WAITING_STYLE))
            _row(text, "Age", format_duration(pod.status.start_time))
            if pod.status.container_statuses:
                text.append("\nContainers:\n", style=SECTION_STYLE)
                for status in pod.status.container_statuses:
                    label, _ = status.state_label()
                    style = _container_style(label)
                    text.append("  ")
                    text.append("•", style=style)
                    text.append(f" {status.name}: ")
                    text.append(f"{label}\n", style=style)
        case PipelineRunItem(pipeline_run=run):
            text.append(f"PipelineRun: {run.name}\n", style=HEADER_STYLE)
            _row(text, "Namespace", run.metadata.namespace)
            label, color, reason, _ = status_label(run.status.conditions)
            status_text = label
            if reason and label != "Succeeded":
                status_text = f"{label} ({reason})"
            _row(text, "Status", status_text, _STATUS_COLOR_STYLES.get(color, WAITING_STYLE))
            _row(text, "Age", format_duration(run.metadata.creation_timestamp))
    return text


def append_events(text: Text, events: Sequence[EventInfo]) -> None:
    """Append one timeline entry per event."""
    for event in events:
        text.append(format_clock(event.timestamp), style=COLOR_MUTED)
        text.append(" ")
        if event.is_warning:
            text.append("⚠", style=FAILED_STYLE)
        else:
            text.append("•", style=SUCCESS_STYLE)
        text.append(f" {event.reason}", style="bold")
        text.append(f"  +{format_offset(event.offset)}\n", style=COLOR_MUTED)
        text.append(f"  {event.message}\n")
        if event.count > 1:
            text.append(f"  (occurred {event.count} times)\n", style=COLOR_MUTED)


def format_events(events: Sequence[EventInfo], title: str) -> Text:
    """Events body for a single resource; ``NO_EVENTS_TEXT`` when empty."""
    if not events:
        return Text(NO_EVENTS_TEXT)
    text = Text().append(f"{title}\n\n", style=HEADER_STYLE)
    append_events(text, events)
    return text


def _wrap(message: str, indent: int) -> list[str]:
    return textwrap.wrap(message, width=REMEDIATION_WRAP_WIDTH - indent) or [""]


def _append_finding(text: Text, finding: Finding, icon: str, style: str) -> None:
    for position, line in enumerate(_wrap(finding.message, 4)):
        text.append("  ")
        text.append(icon if position == 0 else " ", style=style)
        text.append(f" {line}\n" if position == 0 else f"   {line}\n")
    if finding.remediation:
        for position, line in enumerate(_wrap(finding.remediation, 6)):
            prefix = "→ " if position == 0 else "  "
            text.append(f"    {prefix}{line}\n", style=REMEDIATION_STYLE)


def format_doctor(result: AnalysisResult) -> Text:
    """Doctor body: findings grouped per container, then a severity summary."""
    text = Text()
    text.append(f"Doctor Analysis: {result.resource_name}\n", style=HEADER_STYLE)
    text.append(f"Analyzed at: {format_clock(result.analyzed_at)}\n\n")

    if not result.findings:
        text.append(f"{NO_ISSUES_TEXT}\n", style=SUCCESS_STYLE)
        return text

    groups = result.by_container()
    for container, is_init in sorted(groups):
        prefix = "(Init) " if is_init else ""
        text.append(f"{prefix}Container: {container}\n", style=SECTION_STYLE)
        findings = groups[(container, is_init)]
        for severity, icon, style in _SEVERITY_MARKS:
            for finding in findings:
                if finding.severity is severity:
                    _append_finding(text, finding, icon, style)
        text.append("\n")

    text.append("Summary: ", style="bold")
    text.append(f"{result.count(Severity.CRITICAL)} critical", style=FAILED_STYLE)
    text.append("  ")
    text.append(f"{result.count(Severity.WARNING)} warnings", style=RUNNING_STYLE)
    text.append("  ")
    text.append(f"{result.count(Severity.INFO)} info\n")
    return text


# =============================================================================
# Presenter
# =============================================================================


class DashboardPresenter:
    """Loads tab content for the selected resource through the controller."""

    def __init__(
        self,
        controller: BaseController,
        *,
        max_log_lines: int = POD_LOG_LINES,
        pipeline_log_lines: int = PIPELINE_LOG_LINES,
        doctor_log_lines: int = DOCTOR_LOG_LINES,
    ) -> None:
        self._controller = controller
        self._max_log_lines = max_log_lines
        self._pipeline_log_lines = pipeline_log_lines
        self._doctor_log_lines = doctor_log_lines

    async def load_resources(self, kind: ResourceKind) -> tuple[ResourceItem, ...]:
        return tuple(await self._controller.list_resources(kind))

    # -------------------------------------------------------------------------
    # Logs
    # -------------------------------------------------------------------------

    async def load_logs(self, item: ResourceItem) -> Text:
        match item:
            case PodItem(pod=pod):
                return await self._pod_logs(pod)
            case PipelineRunItem(pipeline_run=run):
                return await self._pipeline_run_logs(run)

    async def _pod_logs(self, pod: Pod) -> Text:
        container = pod.first_container_name()
        if container is None:
            raise CollaboratorError("no containers in pod")
        logs = await self._controller.fetch_logs(pod.name, container, self._max_log_lines)
        text = Text().append(f"Logs for Pod: {pod.name}\n\n", style=HEADER_STYLE)
        text.append(logs)
        return text

    async def _pipeline_run_logs(self, run: PipelineRun) -> Text:
        task_runs = await self._controller.fetch_task_runs(run.name)
        if not task_runs:
            return Text(NO_TASK_RUNS_TEXT)

        text = Text().append(f"Logs for PipelineRun: {run.name}\n\n", style=HEADER_STYLE)
        for task_run in task_runs:
            task_name = task_run_display_name(task_run)
            try:
                pod = await self._controller.fetch_task_run_pod(task_run)
            except CollaboratorError as exc:
                text.append(f"[{task_name}] Error: {exc}\n\n", style=FAILED_STYLE)
                continue
            if not pod.spec.containers:
                continue
            container = pod.spec.containers[0].name
            text.append(
                f"--- TaskRun: {task_name} (Container: {container}) ---\n",
                style=SECTION_STYLE,
            )
            try:
                logs = await self._controller.fetch_logs(
                    pod.name, container, self._pipeline_log_lines
                )
            except CollaboratorError as exc:
                text.append(f"Error fetching logs: {exc}\n", style=FAILED_STYLE)
            else:
                text.append(logs)
            text.append("\n\n")
        return text

    # -------------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------------

    async def load_events(self, item: ResourceItem) -> Text:
        match item:
            case PodItem(pod=pod):
                events = await self._controller.fetch_events(
                    pod.name, "Pod", parse_timestamp(pod.metadata.creation_timestamp)
                )
                return format_events(events, f"Events for Pod: {pod.name}")
            case PipelineRunItem(pipeline_run=run):
                return await self._pipeline_run_events(run)

    async def _task_run_events(self, task_run: TaskRun) -> list[EventInfo]:
        """TaskRun events plus the events of its pod, oldest first."""
        created_at = parse_timestamp(task_run.metadata.creation_timestamp)
        events = list(
            await self._controller.fetch_events(task_run.name, "TaskRun", created_at)
        )
        try:
            pod = await self._controller.fetch_task_run_pod(task_run)
            events.extend(await self._controller.fetch_events(pod.name, "Pod", created_at))
        except CollaboratorError as exc:
            logger.debug("Skipping pod events for TaskRun %s: %s", task_run.name, exc)
        return sorted(events, key=lambda event: event.timestamp)

    async def _pipeline_run_events(self, run: PipelineRun) -> Text:
        created_at = parse_timestamp(run.metadata.creation_timestamp)
        own_events = await self._controller.fetch_events(run.name, "PipelineRun", created_at)
        task_runs = await self._controller.fetch_task_runs(run.name)

        text = Text().append(f"Events for PipelineRun: {run.name}\n\n", style=HEADER_STYLE)
        found = bool(own_events)
        append_events(text, own_events)
        if own_events:
            text.append("\n")

        for task_run in task_runs:
            try:
                events = await self._task_run_events(task_run)
            except CollaboratorError as exc:
                logger.debug("Skipping events for TaskRun %s: %s", task_run.name, exc)
                continue
            if not events:
                continue
            found = True
            text.append(
                f"--- TaskRun: {task_run_display_name(task_run)} ---\n",
                style=SECTION_STYLE,
            )
            append_events(text, events)
            text.append("\n")

        if not found:
            return Text(f"No events found for PipelineRun: {run.name}")
        return text

    # -------------------------------------------------------------------------
    # Doctor
    # -------------------------------------------------------------------------

    async def load_doctor(self, item: ResourceItem) -> AnalysisResult:
        match item:
            case PodItem(pod=pod):
                return await diagnose_pod(pod, self._controller, self._doctor_log_lines)
            case PipelineRunItem(pipeline_run=run):
                task_runs = await self._controller.fetch_task_runs(run.name)
                return await diagnose_pipeline_run(
                    run,
                    task_runs,
                    self._controller,
                    self._controller,
                    self._doctor_log_lines,
                )


__all__ = [
    "DashboardMessage",
    "DashboardPresenter",
    "append_events",
    "format_doctor",
    "format_events",
    "format_overview",
]
