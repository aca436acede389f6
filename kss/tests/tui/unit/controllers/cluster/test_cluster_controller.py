"""Tests for cluster controller and its fetchers."""

from __future__ import annotations

import json
import subprocess
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest

from kss.constants.enums import ResourceKind
from kss.controllers.base import CollaboratorError
from kss.controllers.cluster.controller import ClusterController
from kss.controllers.cluster.fetchers.event_fetcher import EventFetcher
from kss.controllers.cluster.fetchers.log_fetcher import LogFetcher
from kss.controllers.cluster.fetchers.resource_fetcher import ResourceFetcher
from kss.controllers.cluster.parsers.event_parser import EventParser
from kss.models.core.pipeline_run import TaskRun
from kss.models.core.resource_item import PipelineRunItem, PodItem


def _completed(stdout: str = "", returncode: int = 0, stderr: str = "") -> SimpleNamespace:
    return SimpleNamespace(stdout=stdout, returncode=returncode, stderr=stderr)


# =============================================================================
# Controller
# =============================================================================


class TestClusterController:
    """Tests for ClusterController class."""

    def test_build_command_with_scope(self) -> None:
        controller = ClusterController(namespace="ci", context="prod")
        assert controller._build_command(("get", "pods")) == [
            "kubectl",
            "--context",
            "prod",
            "-n",
            "ci",
            "get",
            "pods",
        ]

    def test_build_command_without_scope(self) -> None:
        controller = ClusterController(namespace="", context="")
        assert controller._build_command(("get", "pods")) == ["kubectl", "get", "pods"]

    def test_non_zero_exit_raises_with_stderr(self) -> None:
        controller = ClusterController()
        with patch(
            "kss.controllers.cluster.controller.subprocess.run",
            return_value=_completed(returncode=1, stderr="error: forbidden\n"),
        ):
            with pytest.raises(CollaboratorError, match="error: forbidden"):
                controller._run_kubectl_sync(("get", "pods"))

    def test_timeout_raises(self) -> None:
        controller = ClusterController(timeout=3)
        with patch(
            "kss.controllers.cluster.controller.subprocess.run",
            side_effect=subprocess.TimeoutExpired("kubectl", 3),
        ):
            with pytest.raises(CollaboratorError, match="timed out after 3s"):
                controller._run_kubectl_sync(("get", "pods"))

    def test_missing_binary_raises(self) -> None:
        controller = ClusterController()
        with patch(
            "kss.controllers.cluster.controller.subprocess.run",
            side_effect=FileNotFoundError("kubectl"),
        ):
            with pytest.raises(CollaboratorError, match="could not run kubectl"):
                controller._run_kubectl_sync(("version",))

    @pytest.mark.asyncio
    async def test_list_pods(self) -> None:
        payload = {
            "items": [
                {
                    "metadata": {"name": "web-1", "namespace": "default"},
                    "status": {"phase": "Running", "startTime": "2024-05-01T10:00:00Z"},
                }
            ]
        }
        controller = ClusterController()
        with patch(
            "kss.controllers.cluster.controller.subprocess.run",
            return_value=_completed(json.dumps(payload)),
        ) as run:
            items = await controller.list_resources(ResourceKind.POD)

        assert len(items) == 1
        assert isinstance(items[0], PodItem)
        assert items[0].name == "web-1"
        assert items[0].status == "Running"
        assert run.call_args.args[0][-4:] == ["get", "pods", "-o", "json"]

    @pytest.mark.asyncio
    async def test_list_pipeline_runs(self) -> None:
        payload = {
            "items": [
                {
                    "metadata": {"name": "build-1", "creationTimestamp": "2024-05-01T10:00:00Z"},
                    "status": {"conditions": [{"type": "Succeeded", "reason": "Running"}]},
                }
            ]
        }
        controller = ClusterController()
        with patch(
            "kss.controllers.cluster.controller.subprocess.run",
            return_value=_completed(json.dumps(payload)),
        ):
            items = await controller.list_resources(ResourceKind.PIPELINE_RUN)

        assert isinstance(items[0], PipelineRunItem)
        assert items[0].status == "Running"

    @pytest.mark.asyncio
    async def test_malformed_json_raises(self) -> None:
        controller = ClusterController()
        with patch(
            "kss.controllers.cluster.controller.subprocess.run",
            return_value=_completed("not json"),
        ):
            with pytest.raises(CollaboratorError, match="could not parse pod list"):
                await controller.list_resources(ResourceKind.POD)


# =============================================================================
# Fetchers
# =============================================================================


class TestResourceFetcher:
    """Tests for ResourceFetcher class."""

    @pytest.fixture
    def mock_run_kubectl(self) -> AsyncMock:
        return AsyncMock()

    @pytest.mark.asyncio
    async def test_task_runs_selected_by_pipeline_run_label(
        self, mock_run_kubectl: AsyncMock
    ) -> None:
        mock_run_kubectl.return_value = '{"items": [{"metadata": {"name": "tr-1"}}]}'
        task_runs = await ResourceFetcher(mock_run_kubectl).list_task_runs("build-1")
        assert [task_run.name for task_run in task_runs] == ["tr-1"]
        args = mock_run_kubectl.await_args.args[0]
        assert "tekton.dev/pipelineRun=build-1" in args

    @pytest.mark.asyncio
    async def test_pod_name_from_status(self, mock_run_kubectl: AsyncMock) -> None:
        task_run = TaskRun.model_validate(
            {"metadata": {"name": "tr-1"}, "status": {"podName": "tr-1-pod"}}
        )
        assert await ResourceFetcher(mock_run_kubectl).pod_name_for_task_run(task_run) == "tr-1-pod"
        mock_run_kubectl.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_pod_name_falls_back_to_labels(self, mock_run_kubectl: AsyncMock) -> None:
        mock_run_kubectl.side_effect = [CollaboratorError("nope"), "tr-1-pod-abc\n"]
        task_run = TaskRun.model_validate({"metadata": {"name": "tr-1"}})
        name = await ResourceFetcher(mock_run_kubectl).pod_name_for_task_run(task_run)
        assert name == "tr-1-pod-abc"
        second_args = mock_run_kubectl.await_args_list[1].args[0]
        assert "tekton.dev/taskrun=tr-1" in second_args

    @pytest.mark.asyncio
    async def test_pod_name_not_found(self, mock_run_kubectl: AsyncMock) -> None:
        mock_run_kubectl.return_value = ""
        task_run = TaskRun.model_validate({"metadata": {"name": "tr-1"}})
        with pytest.raises(CollaboratorError, match="no pod found for taskrun tr-1"):
            await ResourceFetcher(mock_run_kubectl).pod_name_for_task_run(task_run)


class TestLogFetcher:
    """Tests for LogFetcher class."""

    @pytest.mark.asyncio
    async def test_previous_logs_args(self) -> None:
        run_kubectl = AsyncMock(return_value="line\n")
        logs = await LogFetcher(run_kubectl).fetch_logs("web-1", "app", 50, previous=True)
        assert logs == "line"
        run_kubectl.assert_awaited_once_with(("logs", "--tail=50", "web-1", "-c", "app", "-p"))


class TestEventFetcher:
    """Tests for EventFetcher class."""

    @pytest.mark.asyncio
    async def test_field_selector_scopes_to_resource(self) -> None:
        run_kubectl = AsyncMock(return_value='{"items": []}')
        events = await EventFetcher(run_kubectl).fetch_events("web-1", "Pod")
        assert events == []
        args = run_kubectl.await_args.args[0]
        assert "--field-selector=involvedObject.name=web-1,involvedObject.kind=Pod" in args

    @pytest.mark.asyncio
    async def test_empty_output(self) -> None:
        assert await EventFetcher(AsyncMock(return_value="  ")).fetch_events("x", "Pod") == []

    @pytest.mark.asyncio
    async def test_raw_events_passthrough(self) -> None:
        fetcher = EventFetcher(AsyncMock(return_value='{"items": [1]}'))
        assert await fetcher.fetch_events_raw("x", "Pod") == '{"items": [1]}'


# =============================================================================
# Event parser
# =============================================================================


class TestEventParser:
    """Tests for EventParser.parse."""

    CREATED = datetime(2024, 5, 1, 10, 0, 0, tzinfo=timezone.utc)

    def test_sorted_with_offsets_from_creation(self) -> None:
        items = [
            {"lastTimestamp": "2024-05-01T10:02:00Z", "reason": "BackOff", "type": "Warning"},
            {"lastTimestamp": "2024-05-01T10:00:30Z", "reason": "Scheduled", "type": "Normal"},
        ]
        events = EventParser().parse(items, self.CREATED)
        assert [event.reason for event in events] == ["Scheduled", "BackOff"]
        assert events[0].offset == timedelta(seconds=30)
        assert events[1].offset == timedelta(minutes=2)
        assert events[1].is_warning is True

    def test_offsets_from_first_event_without_creation(self) -> None:
        items = [
            {"lastTimestamp": "2024-05-01T10:00:10Z"},
            {"lastTimestamp": "2024-05-01T10:00:40Z"},
        ]
        events = EventParser().parse(items)
        assert [event.offset for event in events] == [timedelta(0), timedelta(seconds=30)]

    def test_negative_offset_clamped(self) -> None:
        items = [{"lastTimestamp": "2024-05-01T09:59:00Z"}]
        assert EventParser().parse(items, self.CREATED)[0].offset == timedelta(0)

    def test_timestamp_fallbacks_and_untimestamped_dropped(self) -> None:
        items = [
            {"eventTime": "2024-05-01T10:00:05.000000Z", "reason": "A"},
            {"firstTimestamp": "2024-05-01T10:00:06Z", "reason": "B"},
            {"reason": "C"},
        ]
        assert [event.reason for event in EventParser().parse(items)] == ["A", "B"]

    def test_count_variants(self) -> None:
        items = [
            {"lastTimestamp": "2024-05-01T10:00:00Z", "count": 3},
            {"lastTimestamp": "2024-05-01T10:00:01Z", "series": {"count": 7}},
            {"lastTimestamp": "2024-05-01T10:00:02Z", "count": "bad"},
        ]
        assert [event.count for event in EventParser().parse(items)] == [3, 7, 1]
