"""Tests for the post-dashboard terminal report."""

from __future__ import annotations

import re
from unittest.mock import AsyncMock

import pytest
from rich.console import Console

from kss.ai import ExplainError
from kss.constants.enums import ResourceKind
from kss.controllers.base import CollaboratorError
from kss.models.core.pod import ContainerStatus
from kss.models.state.app_settings import AppSettings
from kss.report import MISSING_API_KEY_TEXT, ReportOptions, Reporter
from kss.report.reporter import container_icon, metadata_panel


def _console() -> Console:
    return Console(record=True, width=120, color_system=None)


class _StopWatch(Exception):
    pass


# =============================================================================
# Building blocks
# =============================================================================


class TestContainerIcon:
    """Tests for container_icon."""

    @pytest.mark.parametrize(
        ("state", "icon"),
        [
            ({"running": {}}, "✓"),
            ({"terminated": {"exitCode": 0}}, "✓"),
            ({"terminated": {"exitCode": 1}}, "✗"),
            ({"waiting": {"reason": "ImagePullBackOff"}}, "✗"),
            ({"waiting": {"reason": "ContainerCreating"}}, "⏳"),
        ],
    )
    def test_icons(self, state, icon) -> None:
        status = ContainerStatus.model_validate({"name": "c", "state": state})
        assert container_icon(status)[0] == icon


class TestReportOptions:
    """Tests for the container name filter."""

    def test_no_pattern_includes_everything(self) -> None:
        assert ReportOptions().includes("anything")

    def test_pattern_matches_anywhere_in_name(self) -> None:
        options = ReportOptions(restrict=re.compile("side"))
        assert options.includes("istio-sidecar")
        assert not options.includes("app")


class TestMetadataPanel:
    """Tests for the labels and annotations panel."""

    def test_sorted_rows(self) -> None:
        console = _console()
        console.print(metadata_panel("Labels", {"tier": "web", "app": "shop"}))
        output = console.export_text()
        assert output.index("app") < output.index("tier")
        assert "shop" in output

    def test_empty_values(self) -> None:
        console = _console()
        console.print(metadata_panel("Annotations", {}))
        assert "No annotations." in console.export_text()


# =============================================================================
# Report sections
# =============================================================================


class TestReporter:
    """Tests for Reporter.report."""

    @pytest.mark.asyncio
    async def test_pod_overview_only(self, stub_controller) -> None:
        console = _console()
        await Reporter(stub_controller, AppSettings(), console).report(ResourceKind.POD, "worker-2")
        output = console.export_text()
        assert "Pod: worker-2" in output
        assert "worker" in output
        assert "waiting: CrashLoopBackOff" in output
        assert "Events" not in output
        assert "Doctor" not in output
        assert "Logs for" not in output

    @pytest.mark.asyncio
    async def test_events_and_doctor_sections(self, stub_controller) -> None:
        console = _console()
        await Reporter(stub_controller, AppSettings(), console).report(
            ResourceKind.POD, "worker-2", ReportOptions(events=True, doctor=True)
        )
        output = console.export_text()
        assert "No events found for this pod." in output
        assert "Doctor Analysis: worker-2" in output
        assert "crashing repeatedly" in output

    @pytest.mark.asyncio
    async def test_events_error_inline(self, stub_controller) -> None:
        stub_controller.fail.add("fetch_events")
        console = _console()
        await Reporter(stub_controller, AppSettings(), console).report(
            ResourceKind.POD, "web-1", ReportOptions(events=True)
        )
        assert "Error fetching events: fetch_events failed" in console.export_text()

    @pytest.mark.asyncio
    async def test_missing_resource_raises(self, stub_controller) -> None:
        with pytest.raises(CollaboratorError):
            await Reporter(stub_controller, AppSettings(), _console()).report(
                ResourceKind.POD, "gone"
            )

    @pytest.mark.asyncio
    async def test_labels_and_annotations(self, controller_cls, pod_factory) -> None:
        pod = pod_factory(
            "api-0",
            labels={"app": "api"},
            annotations={"deploy.io/revision": "7"},
        )
        console = _console()
        await Reporter(controller_cls(pods=[pod]), AppSettings(), console).report(
            ResourceKind.POD, "api-0", ReportOptions(labels=True, annotations=True)
        )
        output = console.export_text()
        assert "Labels" in output
        assert "Annotations" in output
        assert "deploy.io/revision" in output
        assert output.index("Labels") < output.index("Annotations")

    @pytest.mark.asyncio
    async def test_show_log_uses_max_log_lines(
        self, controller_cls, pod_factory, status_factory
    ) -> None:
        pod = pod_factory(
            "api-0",
            statuses=[status_factory("app", running=True), status_factory("proxy", running=True)],
        )
        controller = controller_cls(pods=[pod])
        controller.logs[("api-0", "app", False)] = "serving on :8080"
        console = _console()

        await Reporter(controller, AppSettings(max_log_lines=25), console).report(
            ResourceKind.POD, "api-0", ReportOptions(show_log=True)
        )

        output = console.export_text()
        assert "Logs for app" in output
        assert "serving on :8080" in output
        assert "Logs for proxy" in output
        assert "No log output." in output
        assert ("fetch_logs", "api-0", "app", 25, False) in controller.calls

    @pytest.mark.asyncio
    async def test_restrict_filters_rows_and_logs(
        self, controller_cls, pod_factory, status_factory
    ) -> None:
        pod = pod_factory(
            "api-0",
            statuses=[status_factory("app", running=True), status_factory("proxy", running=True)],
        )
        controller = controller_cls(pods=[pod])
        console = _console()

        await Reporter(controller, AppSettings(), console).report(
            ResourceKind.POD,
            "api-0",
            ReportOptions(show_log=True, restrict=re.compile("^prox")),
        )

        output = console.export_text()
        assert "proxy" in output
        assert "Logs for app" not in output
        log_calls = [call for call in controller.calls if call[0] == "fetch_logs"]
        assert [call[2] for call in log_calls] == ["proxy"]

    @pytest.mark.asyncio
    async def test_log_error_inline(self, stub_controller) -> None:
        stub_controller.fail.add("fetch_logs")
        console = _console()
        await Reporter(stub_controller, AppSettings(), console).report(
            ResourceKind.POD, "web-1", ReportOptions(show_log=True)
        )
        assert "Error fetching logs: fetch_logs failed" in console.export_text()

    @pytest.mark.asyncio
    async def test_pipeline_run_overview(
        self, controller_cls, pipeline_run_factory, task_run_factory
    ) -> None:
        run = pipeline_run_factory()
        controller = controller_cls(pipeline_runs=[run])
        controller.task_runs[run.name] = [task_run_factory()]
        console = _console()

        await Reporter(controller, AppSettings(), console).report(
            ResourceKind.PIPELINE_RUN, run.name
        )

        output = console.export_text()
        assert "PipelineRun: build-42" in output
        assert "Failed (Failed)" in output
        assert "compile" in output

    @pytest.mark.asyncio
    async def test_pipeline_run_logs_per_task(
        self,
        controller_cls,
        pipeline_run_factory,
        task_run_factory,
        pod_factory,
        status_factory,
    ) -> None:
        run = pipeline_run_factory()
        task_pod = pod_factory(
            "build-42-compile-pod", statuses=[status_factory("step-build", exit_code=1)]
        )
        controller = controller_cls(pods=[task_pod], pipeline_runs=[run])
        controller.task_runs[run.name] = [task_run_factory()]
        controller.logs[("build-42-compile-pod", "step-build", False)] = "make: *** Error 2"
        console = _console()

        await Reporter(controller, AppSettings(), console).report(
            ResourceKind.PIPELINE_RUN, run.name, ReportOptions(show_log=True)
        )

        output = console.export_text()
        assert "Logs for compile (step-build)" in output
        assert "make: *** Error 2" in output

    @pytest.mark.asyncio
    async def test_pipeline_run_missing_task_pod(
        self, controller_cls, pipeline_run_factory, task_run_factory
    ) -> None:
        run = pipeline_run_factory()
        controller = controller_cls(pipeline_runs=[run])
        controller.task_runs[run.name] = [task_run_factory()]
        console = _console()

        await Reporter(controller, AppSettings(), console).report(
            ResourceKind.PIPELINE_RUN, run.name, ReportOptions(show_log=True)
        )

        assert "Error fetching pod for TaskRun build-42-compile" in console.export_text()


# =============================================================================
# Watch mode
# =============================================================================


class TestWatch:
    """Tests for Reporter.watch."""

    @pytest.mark.asyncio
    async def test_reprints_until_stopped(
        self, stub_controller, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        sleep = AsyncMock(side_effect=[None, _StopWatch()])
        monkeypatch.setattr("kss.report.reporter.asyncio.sleep", sleep)
        console = _console()

        with pytest.raises(_StopWatch):
            await Reporter(stub_controller, AppSettings(), console).watch(
                ResourceKind.POD, "web-1", ReportOptions(), 3
            )

        assert [call.args for call in sleep.await_args_list] == [(3,), (3,)]
        assert stub_controller.calls.count(("fetch_pod", "web-1")) == 2
        assert "Watching Pod web-1 (refresh every 3s" in console.export_text()

    @pytest.mark.asyncio
    async def test_fetch_error_keeps_watching(
        self, stub_controller, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(
            "kss.report.reporter.asyncio.sleep", AsyncMock(side_effect=[None, _StopWatch()])
        )
        console = _console()

        with pytest.raises(_StopWatch):
            await Reporter(stub_controller, AppSettings(), console).watch(
                ResourceKind.POD, "gone", ReportOptions(), 2
            )

        assert stub_controller.calls.count(("fetch_pod", "gone")) == 2
        assert 'Error fetching Pod gone: pods "gone" not found' in console.export_text()


# =============================================================================
# AI explanation
# =============================================================================


class TestExplanation:
    """Tests for the AI explanation section."""

    @pytest.mark.asyncio
    async def test_missing_api_key(
        self, stub_controller, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        console = _console()
        await Reporter(stub_controller, AppSettings(), console).report(
            ResourceKind.POD, "web-1", ReportOptions(explain=True)
        )
        assert MISSING_API_KEY_TEXT in console.export_text()

    @pytest.mark.asyncio
    async def test_markdown_answer(self, stub_controller) -> None:
        gemini = AsyncMock()
        gemini.explain.return_value = "**Fix it**: raise the memory limit."
        console = _console()

        await Reporter(stub_controller, AppSettings(persona="sergeant"), console, gemini).report(
            ResourceKind.POD, "worker-2", ReportOptions(explain=True)
        )

        output = console.export_text()
        assert "AI Analysis (The Drill Sergeant)" in output
        assert "Fix it: raise the memory limit." in output
        prompt = gemini.explain.await_args.args[0]
        assert "Drill Sergeant" in prompt

    @pytest.mark.asyncio
    async def test_explain_error(self, stub_controller) -> None:
        gemini = AsyncMock()
        gemini.explain.side_effect = ExplainError("Error calling AI API: 500")
        console = _console()
        await Reporter(stub_controller, AppSettings(), console, gemini).report(
            ResourceKind.POD, "web-1", ReportOptions(explain=True)
        )
        assert "Error calling AI API: 500" in console.export_text()
