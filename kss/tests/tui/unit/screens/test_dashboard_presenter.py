"""Tests for the dashboard presenter loaders and formatters."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from kss.constants.enums import ResourceKind, Severity
from kss.constants.values import NO_EVENTS_TEXT, NO_TASK_RUNS_TEXT
from kss.controllers.base import CollaboratorError
from kss.models.core.resource_item import PipelineRunItem, PodItem
from kss.models.doctor.finding import AnalysisResult, Finding
from kss.models.events.event_info import EventInfo
from kss.screens.dashboard.presenter import (
    DashboardPresenter,
    format_doctor,
    format_events,
    format_overview,
)

STAMP = datetime(2024, 5, 1, 10, 0, 0, tzinfo=timezone.utc)


def _event(reason: str, seconds: int, *, warning: bool = False, count: int = 1) -> EventInfo:
    return EventInfo(
        timestamp=STAMP + timedelta(seconds=seconds),
        type="Warning" if warning else "Normal",
        reason=reason,
        message=f"{reason} happened",
        count=count,
        offset=timedelta(seconds=seconds),
    )


def _finding(message: str, severity: Severity, container: str, is_init: bool = False) -> Finding:
    return Finding(severity, message, "Do the thing.", container, is_init)


# =============================================================================
# Formatters
# =============================================================================


class TestFormatOverview:
    """Tests for format_overview."""

    def test_pod_overview_lists_containers(self, pod_factory, status_factory) -> None:
        pod = pod_factory(
            "api",
            statuses=[
                status_factory("api", running=True),
                status_factory("sidecar", waiting="ImagePullBackOff"),
            ],
        )
        plain = format_overview(PodItem.from_pod(pod)).plain
        assert plain.startswith("Pod: api\n")
        assert "Phase: Running" in plain
        assert "• api: running" in plain
        assert "• sidecar: waiting: ImagePullBackOff" in plain

    def test_pipeline_run_overview_shows_reason(self, pipeline_run_factory) -> None:
        item = PipelineRunItem.from_pipeline_run(pipeline_run_factory())
        plain = format_overview(item).plain
        assert "PipelineRun: build-42" in plain
        assert "Status: Failed (Failed)" in plain

    def test_succeeded_pipeline_run_hides_reason(self, pipeline_run_factory) -> None:
        run = pipeline_run_factory(succeeded="True", reason="Succeeded")
        plain = format_overview(PipelineRunItem.from_pipeline_run(run)).plain
        assert "Status: Succeeded\n" in plain


class TestFormatEvents:
    """Tests for format_events."""

    def test_empty(self) -> None:
        assert format_events([], "Events for Pod: x").plain == NO_EVENTS_TEXT

    def test_timeline_entries(self) -> None:
        events = [_event("Scheduled", 0), _event("BackOff", 95, warning=True, count=4)]
        plain = format_events(events, "Events for Pod: api").plain
        assert plain.startswith("Events for Pod: api\n\n")
        assert "• Scheduled  +00:00" in plain
        assert "⚠ BackOff  +01:35" in plain
        assert "  BackOff happened" in plain
        assert "(occurred 4 times)" in plain
        assert plain.count("occurred") == 1


class TestFormatDoctor:
    """Tests for format_doctor."""

    def test_no_findings(self) -> None:
        result = AnalysisResult("api", ResourceKind.POD)
        plain = format_doctor(result).plain
        assert "Doctor Analysis: api" in plain
        assert "No issues detected. All containers appear healthy." in plain
        assert "Summary" not in plain

    def test_grouped_and_ordered_by_severity(self) -> None:
        result = AnalysisResult(
            "api",
            ResourceKind.POD,
            (
                _finding("a warning", Severity.WARNING, "app"),
                _finding("a critical", Severity.CRITICAL, "app"),
                _finding("init issue", Severity.INFO, "setup", is_init=True),
            ),
        )
        plain = format_doctor(result).plain
        assert plain.index("Container: app") < plain.index("(Init) Container: setup")
        assert plain.index("✖ a critical") < plain.index("⚠ a warning")
        assert "ℹ init issue" in plain
        assert "→ Do the thing." in plain
        assert "Summary: 1 critical  1 warnings  1 info" in plain

    def test_long_remediation_wraps(self) -> None:
        finding = Finding(Severity.WARNING, "msg", "word " * 40, "app")
        plain = format_doctor(AnalysisResult("api", ResourceKind.POD, (finding,))).plain
        remediation_lines = [line for line in plain.split("\n") if "word" in line]
        assert len(remediation_lines) > 1
        assert all(len(line) <= 80 for line in remediation_lines)


# =============================================================================
# Loaders
# =============================================================================


class TestPresenterLoaders:
    """Tests for DashboardPresenter against the stub controller."""

    @pytest.mark.asyncio
    async def test_load_resources(self, stub_controller) -> None:
        presenter = DashboardPresenter(stub_controller)
        items = await presenter.load_resources(ResourceKind.POD)
        assert [item.name for item in items] == ["web-1", "worker-2"]

    @pytest.mark.asyncio
    async def test_pod_logs_use_first_container(self, stub_controller) -> None:
        stub_controller.logs[("worker-2", "worker", False)] = "panic: boom"
        presenter = DashboardPresenter(stub_controller, max_log_lines=25)
        pod = stub_controller.pods["worker-2"]

        text = await presenter.load_logs(PodItem.from_pod(pod))

        assert text.plain == "Logs for Pod: worker-2\n\npanic: boom"
        assert ("fetch_logs", "worker-2", "worker", 25, False) in stub_controller.calls

    @pytest.mark.asyncio
    async def test_pod_logs_error_propagates(self, stub_controller) -> None:
        stub_controller.fail.add("fetch_logs")
        presenter = DashboardPresenter(stub_controller)
        with pytest.raises(CollaboratorError):
            await presenter.load_logs(PodItem.from_pod(stub_controller.pods["web-1"]))

    @pytest.mark.asyncio
    async def test_pipeline_run_without_task_runs(
        self, controller_cls, pipeline_run_factory
    ) -> None:
        run = pipeline_run_factory()
        presenter = DashboardPresenter(controller_cls(pipeline_runs=[run]))
        text = await presenter.load_logs(PipelineRunItem.from_pipeline_run(run))
        assert text.plain == NO_TASK_RUNS_TEXT

    @pytest.mark.asyncio
    async def test_pipeline_run_logs_per_task(
        self, controller_cls, pod_factory, status_factory, pipeline_run_factory, task_run_factory
    ) -> None:
        run = pipeline_run_factory()
        pod = pod_factory("build-42-compile-pod", statuses=[status_factory("step-go", exit_code=1)])
        controller = controller_cls(pods=[pod], pipeline_runs=[run])
        controller.task_runs[run.name] = [
            task_run_factory(),
            task_run_factory("build-42-test", task="test", pod_name="missing"),
        ]
        controller.logs[("build-42-compile-pod", "step-go", False)] = "go: build failed"

        text = await DashboardPresenter(controller).load_logs(
            PipelineRunItem.from_pipeline_run(run)
        )

        assert "--- TaskRun: compile (Container: step-go) ---" in text.plain
        assert "go: build failed" in text.plain
        assert '[test] Error: pods "missing" not found' in text.plain

    @pytest.mark.asyncio
    async def test_pod_events(self, stub_controller) -> None:
        stub_controller.events[("web-1", "Pod")] = [_event("Pulled", 3)]
        text = await DashboardPresenter(stub_controller).load_events(
            PodItem.from_pod(stub_controller.pods["web-1"])
        )
        assert "Events for Pod: web-1" in text.plain
        assert "Pulled" in text.plain

    @pytest.mark.asyncio
    async def test_pipeline_run_events_none_found(
        self, controller_cls, pipeline_run_factory, task_run_factory
    ) -> None:
        run = pipeline_run_factory()
        controller = controller_cls(pipeline_runs=[run])
        controller.task_runs[run.name] = [task_run_factory()]
        text = await DashboardPresenter(controller).load_events(
            PipelineRunItem.from_pipeline_run(run)
        )
        assert text.plain == "No events found for PipelineRun: build-42"

    @pytest.mark.asyncio
    async def test_pipeline_run_events_merge_task_and_pod(
        self, controller_cls, pod_factory, pipeline_run_factory, task_run_factory
    ) -> None:
        run = pipeline_run_factory()
        controller = controller_cls(pods=[pod_factory("build-42-compile-pod")], pipeline_runs=[run])
        controller.task_runs[run.name] = [task_run_factory()]
        controller.events[("build-42", "PipelineRun")] = [_event("Started", 0)]
        controller.events[("build-42-compile", "TaskRun")] = [_event("Running", 20)]
        controller.events[("build-42-compile-pod", "Pod")] = [_event("Pulled", 10)]

        plain = (
            await DashboardPresenter(controller).load_events(
                PipelineRunItem.from_pipeline_run(run)
            )
        ).plain

        assert plain.index("Started") < plain.index("--- TaskRun: compile ---")
        assert plain.index("Pulled") < plain.index("Running happened")

    @pytest.mark.asyncio
    async def test_doctor_for_pod(self, stub_controller) -> None:
        result = await DashboardPresenter(stub_controller).load_doctor(
            PodItem.from_pod(stub_controller.pods["worker-2"])
        )
        assert result.resource_name == "worker-2"
        assert result.count(Severity.CRITICAL) == 1
