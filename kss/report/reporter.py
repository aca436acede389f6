"""Terminal report for the resource chosen in the dashboard.

The report always opens with an overview panel. Labels, annotations, container
logs, events, doctor findings and the AI explanation follow when requested;
the events and doctor bodies are the same ``rich.text.Text`` the dashboard
tabs show. Watch mode reprints the whole report on an interval.
"""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass

from rich.console import Console, Group
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from kss.ai import (
    ExplainError,
    GeminiClient,
    api_key_from_env,
    build_pipeline_run_prompt,
    build_pod_prompt,
    persona_display_name,
)
from kss.constants.enums import ResourceKind
from kss.constants.values import COLOR_MUTED, FAILED_CONTAINER_REASONS
from kss.controllers.base import BaseController, CollaboratorError
from kss.models.core.pipeline_run import (
    PipelineRun,
    TaskRun,
    status_label,
    task_run_display_name,
)
from kss.models.core.pod import ContainerStatus, Pod
from kss.models.core.resource_item import PipelineRunItem, PodItem, ResourceItem
from kss.models.state.app_settings import AppSettings
from kss.screens.dashboard.presenter import DashboardPresenter, format_doctor
from kss.utils.time_format import format_duration

logger = logging.getLogger(__name__)

MISSING_API_KEY_TEXT = "GEMINI_API_KEY not set. Cannot provide AI analysis."

ICON_OK = "✓"
ICON_FAILED = "✗"
ICON_WAITING = "⏳"
ICON_WATCH = "⏱"


@dataclass(frozen=True)
class ReportOptions:
    """Optional report sections, in the order they are printed.

    ``restrict`` limits the container rows and the log sections to container
    names the pattern matches anywhere in.
    """

    labels: bool = False
    annotations: bool = False
    show_log: bool = False
    events: bool = False
    doctor: bool = False
    explain: bool = False
    restrict: re.Pattern[str] | None = None

    def includes(self, container: str) -> bool:
        return self.restrict is None or self.restrict.search(container) is not None


def container_icon(status: ContainerStatus) -> tuple[str, str]:
    """Return (icon, style) for a container status."""
    state = status.state
    if state.running is not None:
        return ICON_OK, "green"
    if state.terminated is not None:
        if state.terminated.exit_code == 0:
            return ICON_OK, "green"
        return ICON_FAILED, "bold red"
    if state.waiting is not None and state.waiting.reason in FAILED_CONTAINER_REASONS:
        return ICON_FAILED, "bold red"
    return ICON_WAITING, "yellow"


def _status_icon(label: str) -> tuple[str, str]:
    if label == "Succeeded":
        return ICON_OK, "green"
    if label == "Failed":
        return ICON_FAILED, "bold red"
    return ICON_WAITING, "yellow"


def _container_rows(
    table: Table, statuses: list[ContainerStatus], init: bool, options: ReportOptions
) -> None:
    for status in statuses:
        if not options.includes(status.name):
            continue
        icon, style = container_icon(status)
        label, _ = status.state_label()
        name = f"(Init) {status.name}" if init else status.name
        table.add_row(
            Text(icon, style=style),
            name,
            Text(label, style=style),
            "ready" if status.ready else "not ready",
            str(status.restart_count),
            Text(status.image, style=COLOR_MUTED),
        )


def pod_overview(pod: Pod, options: ReportOptions | None = None) -> Panel:
    """Overview panel: pod facts and one row per selected container."""
    options = options or ReportOptions()
    facts = Table.grid(padding=(0, 2))
    facts.add_column(style="bold")
    facts.add_column()
    facts.add_row("Namespace", pod.metadata.namespace)
    facts.add_row("Phase", pod.status.phase or "Unknown")
    facts.add_row("Node", pod.spec.node_name or "-")
    facts.add_row("Age", format_duration(pod.status.start_time))

    containers = Table(box=None, padding=(0, 1), show_edge=False)
    for column in ("", "Container", "State", "Ready", "Restarts", "Image"):
        containers.add_column(column, header_style="bold")
    _container_rows(containers, pod.status.init_container_statuses, True, options)
    _container_rows(containers, pod.status.container_statuses, False, options)

    return Panel(
        Group(facts, Text(), containers),
        title=f"Pod: {pod.name}",
        title_align="left",
        border_style="color(86)",
    )


def pipeline_run_overview(run: PipelineRun, task_runs: list[TaskRun]) -> Panel:
    """Overview panel: run status and one row per TaskRun."""
    label, color, reason, message = status_label(run.status.conditions)
    facts = Table.grid(padding=(0, 2))
    facts.add_column(style="bold")
    facts.add_column()
    facts.add_row("Namespace", run.metadata.namespace)
    facts.add_row("Pipeline", run.pipeline_name)
    facts.add_row("Status", Text(f"{label} ({reason})" if reason else label, style=color))
    if message and label != "Succeeded":
        facts.add_row("Message", message)
    facts.add_row("Age", format_duration(run.metadata.creation_timestamp))

    tasks = Table(box=None, padding=(0, 1), show_edge=False)
    for column in ("", "Task", "TaskRun", "Status"):
        tasks.add_column(column, header_style="bold")
    for task_run in task_runs:
        task_label, _, task_reason, _ = status_label(task_run.status.conditions)
        icon, style = _status_icon(task_label)
        tasks.add_row(
            Text(icon, style=style),
            task_run_display_name(task_run),
            Text(task_run.name, style=COLOR_MUTED),
            Text(f"{task_label} ({task_reason})" if task_reason else task_label, style=style),
        )

    return Panel(
        Group(facts, Text(), tasks) if task_runs else facts,
        title=f"PipelineRun: {run.name}",
        title_align="left",
        border_style="color(86)",
    )


def metadata_panel(title: str, values: Mapping[str, str]) -> Panel:
    """Key/value panel for labels or annotations, sorted by key."""
    if not values:
        empty = Text(f"No {title.lower()}.", style=COLOR_MUTED)
        return Panel(empty, title=title, title_align="left")
    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold")
    table.add_column()
    for key in sorted(values):
        table.add_row(key, values[key])
    return Panel(table, title=title, title_align="left")


def _container_names(pod: Pod) -> list[str]:
    statuses = [*pod.status.init_container_statuses, *pod.status.container_statuses]
    if statuses:
        return [status.name for status in statuses]
    return [container.name for container in (*pod.spec.init_containers, *pod.spec.containers)]


class Reporter:
    """Prints the post-dashboard report for one resource."""

    def __init__(
        self,
        controller: BaseController,
        settings: AppSettings,
        console: Console | None = None,
        gemini: GeminiClient | None = None,
    ) -> None:
        self.controller = controller
        self.settings = settings
        self.console = console or Console()
        self._gemini = gemini
        self._presenter = DashboardPresenter(
            controller,
            max_log_lines=settings.max_log_lines,
            pipeline_log_lines=settings.pipeline_log_lines,
            doctor_log_lines=settings.max_log_lines,
        )

    async def report(
        self,
        kind: ResourceKind,
        name: str,
        options: ReportOptions | None = None,
    ) -> None:
        """Print the report sections for ``name``.

        Raises:
            CollaboratorError: The resource itself could not be fetched.
        """
        options = options or ReportOptions()
        item: ResourceItem
        task_runs: list[TaskRun] = []
        match await self.controller.fetch_resource_detail(kind, name):
            case PipelineRun() as run:
                task_runs = await self._task_runs(run)
                self.console.print(pipeline_run_overview(run, task_runs))
                item = PipelineRunItem.from_pipeline_run(run)
                metadata = run.metadata
            case Pod() as pod:
                self.console.print(pod_overview(pod, options))
                item = PodItem.from_pod(pod)
                metadata = pod.metadata

        if options.labels:
            self.console.print(metadata_panel("Labels", metadata.labels))
        if options.annotations:
            self.console.print(metadata_panel("Annotations", metadata.annotations))
        if options.show_log:
            await self._print_logs(item, task_runs, options)
        if options.events:
            await self._print_events(item)
        if options.doctor:
            await self._print_doctor(item)
        if options.explain:
            await self.print_explanation(item)

    async def watch(
        self,
        kind: ResourceKind,
        name: str,
        options: ReportOptions,
        interval: float,
    ) -> None:
        """Clear the screen and reprint the report every ``interval`` seconds.

        Runs until cancelled. A failed fetch is printed and retried on the
        next round.
        """
        while True:
            self.console.clear()
            self.console.print(
                f"{ICON_WATCH} Watching {kind.display_name} {name} "
                f"(refresh every {interval:g}s, press Ctrl+C to exit)",
                style="cyan",
            )
            self.console.print()
            try:
                await self.report(kind, name, options)
            except CollaboratorError as exc:
                self.console.print(
                    f"Error fetching {kind.display_name} {name}: {exc}", style="bold red"
                )
            await asyncio.sleep(interval)

    async def _print_logs(
        self, item: ResourceItem, task_runs: list[TaskRun], options: ReportOptions
    ) -> None:
        targets: list[tuple[str, str, str]] = []
        match item:
            case PodItem(pod=pod):
                targets = [
                    (pod.name, container, f"Logs for {container}")
                    for container in _container_names(pod)
                ]
            case PipelineRunItem():
                for task_run in task_runs:
                    try:
                        pod = await self.controller.fetch_task_run_pod(task_run)
                    except CollaboratorError as exc:
                        self.console.print(
                            f"Error fetching pod for TaskRun {task_run.name}: {exc}",
                            style="bold red",
                        )
                        continue
                    task = task_run_display_name(task_run)
                    targets.extend(
                        (pod.name, container, f"Logs for {task} ({container})")
                        for container in _container_names(pod)
                    )

        for pod_name, container, title in targets:
            if not options.includes(container):
                continue
            try:
                log = await self.controller.fetch_logs(
                    pod_name, container, self.settings.max_log_lines
                )
            except CollaboratorError as exc:
                body = Text(f"Error fetching logs: {exc}", style="bold red")
            else:
                body = Text(log) if log else Text("No log output.", style=COLOR_MUTED)
            self.console.print(Panel(body, title=title, title_align="left"))

    async def _task_runs(self, run: PipelineRun) -> list[TaskRun]:
        try:
            return await self.controller.fetch_task_runs(run.name)
        except CollaboratorError as exc:
            logger.debug("No TaskRuns for %s: %s", run.name, exc)
            return []

    async def _print_events(self, item: ResourceItem) -> None:
        try:
            content = await self._presenter.load_events(item)
        except CollaboratorError as exc:
            content = Text(f"Error fetching events: {exc}", style="bold red")
        self.console.print(Panel(content, title="Events", title_align="left"))

    async def _print_doctor(self, item: ResourceItem) -> None:
        try:
            content = format_doctor(await self._presenter.load_doctor(item))
        except CollaboratorError as exc:
            content = Text(f"Error performing doctor analysis: {exc}", style="bold red")
        self.console.print(Panel(content, title="Doctor", title_align="left"))

    async def print_explanation(self, item: ResourceItem) -> None:
        """Ask the AI why the resource failed and print the Markdown answer."""
        client = self._gemini
        if client is None:
            api_key = api_key_from_env()
            if not api_key:
                self.console.print(MISSING_API_KEY_TEXT, style="yellow")
                return
            client = GeminiClient(api_key, self.settings.gemini_model)

        persona = self.settings.persona
        match item:
            case PodItem(pod=pod):
                prompt = await build_pod_prompt(self.controller, pod, persona)
            case PipelineRunItem(pipeline_run=run):
                task_runs = await self._task_runs(run)
                prompt = await build_pipeline_run_prompt(
                    self.controller, run, task_runs, persona
                )

        name = persona_display_name(persona)
        try:
            with self.console.status(f"{name} is analyzing..."):
                answer = await client.explain(prompt)
        except ExplainError as exc:
            self.console.print(str(exc), style="bold red")
            return
        self.console.print(
            Panel(Markdown(answer), title=f"AI Analysis ({name})", title_align="left")
        )


__all__ = [
    "MISSING_API_KEY_TEXT",
    "ReportOptions",
    "Reporter",
    "container_icon",
    "metadata_panel",
    "pipeline_run_overview",
    "pod_overview",
]
