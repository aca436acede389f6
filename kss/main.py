"""Command line entry point: run the dashboard, then report on the chosen resource."""

from __future__ import annotations

import asyncio
import logging
import re

import typer
from rich.console import Console
from textual.logging import TextualHandler

from kss.app import KssApp
from kss.constants.defaults import LOG_LEVEL_DEFAULT, WATCH_INTERVAL_DEFAULT
from kss.constants.enums import ResourceKind
from kss.controllers.base import CollaboratorError
from kss.controllers.cluster import ClusterController
from kss.models.state.app_settings import AppSettings, ConfigSaveError
from kss.models.state.config_manager import ConfigManager
from kss.report import ReportOptions, Reporter

logger = logging.getLogger(__name__)

cli = typer.Typer(add_completion=False, help="Interactive Kubernetes diagnosis dashboard.")


def configure_logging(level: str) -> None:
    """Route log records to the Textual devtools console."""
    root = logging.getLogger()
    root.handlers = [TextualHandler()]
    root.setLevel(level.upper())


def compile_restrict(value: str | None) -> re.Pattern[str] | None:
    """Compile the ``--restrict`` container name pattern."""
    if not value:
        return None
    try:
        return re.compile(value)
    except re.error as exc:
        raise typer.BadParameter(f"invalid regular expression: {exc}") from exc


def resolve_settings(
    base: AppSettings,
    *,
    namespace: str | None = None,
    context: str | None = None,
    pipelinerun: bool = False,
    persona: str | None = None,
    model: str | None = None,
    max_lines: int | None = None,
) -> AppSettings:
    """Apply command line overrides on top of file and environment settings."""
    updates: dict[str, object] = {}
    if namespace is not None:
        updates["namespace"] = namespace
    if context is not None:
        updates["context"] = context
    if pipelinerun:
        updates["kind"] = ResourceKind.PIPELINE_RUN.value
    if persona:
        updates["persona"] = persona
    if model:
        updates["gemini_model"] = model
    if max_lines is not None:
        updates["max_log_lines"] = max_lines
    return base.model_copy(update=updates) if updates else base


@cli.command()
def main(
    namespace: str | None = typer.Option(None, "--namespace", "-n", help="Target namespace"),
    context: str | None = typer.Option(None, "--context", help="Kubernetes context"),
    pipelinerun: bool = typer.Option(
        False, "--pipelinerun", "-P", help="List Tekton PipelineRuns instead of pods"
    ),
    restrict: str | None = typer.Option(
        None, "--restrict", "-r", help="Only show containers matching this regexp"
    ),
    showlog: bool = typer.Option(False, "--showlog", "-l", help="Print container logs"),
    labels: bool = typer.Option(False, "--labels", "-L", help="Print labels"),
    annotations: bool = typer.Option(False, "--annotations", "-A", help="Print annotations"),
    doctor: bool = typer.Option(False, "--doctor", "-d", help="Print doctor findings"),
    events: bool = typer.Option(False, "--events", "-E", help="Print the events timeline"),
    explain: bool = typer.Option(False, "--explain", "-x", help="Ask the AI for an explanation"),
    watch: bool = typer.Option(False, "--watch", "-w", help="Reprint the report until Ctrl+C"),
    watch_interval: int = typer.Option(
        WATCH_INTERVAL_DEFAULT, "--watch-interval", min=1, help="Seconds between reprints"
    ),
    persona: str | None = typer.Option(None, "--persona", help="AI persona"),
    model: str | None = typer.Option(None, "--model", help="Gemini model name"),
    max_lines: int | None = typer.Option(
        None, "--max-lines", min=1, help="Log lines to print and analyze per container"
    ),
    save_settings: bool = typer.Option(
        False, "--save-settings", help="Store these options as the new defaults"
    ),
    log_level: str = typer.Option(LOG_LEVEL_DEFAULT, "--log-level", help="Logging level"),
) -> None:
    """Pick a pod or PipelineRun in the dashboard and print its report."""
    configure_logging(log_level)
    options = ReportOptions(
        labels=labels,
        annotations=annotations,
        show_log=showlog,
        events=events,
        doctor=doctor,
        explain=explain,
        restrict=compile_restrict(restrict),
    )
    settings = resolve_settings(
        ConfigManager.load_or_default(),
        namespace=namespace,
        context=context,
        pipelinerun=pipelinerun,
        persona=persona,
        model=model,
        max_lines=max_lines,
    )
    console = Console()
    if save_settings:
        try:
            path = ConfigManager.save(settings)
        except ConfigSaveError as exc:
            console.print(str(exc), style="bold red")
            raise typer.Exit(code=1) from exc
        console.print(f"Settings saved to {path}", style="green")

    kind = ResourceKind(settings.kind)
    controller = ClusterController(
        namespace=settings.namespace,
        context=settings.context,
        timeout=settings.kubectl_timeout,
    )

    outcome = KssApp(controller, settings, kind).run()
    if not outcome:
        return

    reporter = Reporter(controller, settings, console)
    if watch:
        try:
            asyncio.run(reporter.watch(kind, outcome, options, watch_interval))
        except KeyboardInterrupt:
            console.print("\nExiting watch mode...")
        return

    try:
        asyncio.run(reporter.report(kind, outcome, options))
    except CollaboratorError as exc:
        console.print(f"Error fetching {kind.display_name} {outcome}: {exc}", style="bold red")
        raise typer.Exit(code=1) from exc


def run() -> None:
    cli()


__all__ = ["cli", "compile_restrict", "configure_logging", "main", "resolve_settings", "run"]
