"""Shared fixtures: resource factories and an in-memory cluster controller."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Any

import pytest

from kss.constants.enums import ResourceKind
from kss.controllers.base import BaseController, CollaboratorError
from kss.models.core.pipeline_run import PipelineRun, TaskRun
from kss.models.core.pod import Pod
from kss.models.core.resource_item import PipelineRunItem, PodItem, ResourceItem
from kss.models.events.event_info import EventInfo

CREATED = "2024-05-01T10:00:00Z"


def container_status(
    name: str = "app",
    *,
    running: bool = False,
    waiting: str | None = None,
    exit_code: int | None = None,
    last_exit_code: int | None = None,
    restarts: int = 0,
    ready: bool = False,
    image: str = "nginx:1.25",
) -> dict[str, Any]:
    """Build a containerStatuses entry as kubectl prints it."""
    state: dict[str, Any] = {}
    if running:
        state["running"] = {"startedAt": CREATED}
    if waiting is not None:
        state["waiting"] = {"reason": waiting}
    if exit_code is not None:
        state["terminated"] = {"exitCode": exit_code, "reason": "Error"}
    status: dict[str, Any] = {
        "name": name,
        "state": state,
        "ready": ready,
        "restartCount": restarts,
        "image": image,
    }
    if last_exit_code is not None:
        status["lastState"] = {"terminated": {"exitCode": last_exit_code}}
    return status


def build_pod(
    name: str = "web-1",
    *,
    phase: str = "Running",
    statuses: list[dict[str, Any]] | None = None,
    init_statuses: list[dict[str, Any]] | None = None,
    namespace: str = "default",
    labels: dict[str, str] | None = None,
    annotations: dict[str, str] | None = None,
) -> Pod:
    statuses = statuses if statuses is not None else [container_status(running=True, ready=True)]
    return Pod.model_validate(
        {
            "metadata": {
                "name": name,
                "namespace": namespace,
                "creationTimestamp": CREATED,
                "labels": labels or {},
                "annotations": annotations or {},
            },
            "spec": {"containers": [{"name": s["name"], "image": s["image"]} for s in statuses]},
            "status": {
                "phase": phase,
                "startTime": CREATED,
                "containerStatuses": statuses,
                "initContainerStatuses": init_statuses or [],
            },
        }
    )


def build_pipeline_run(
    name: str = "build-42", *, succeeded: str = "False", reason: str = "Failed"
) -> PipelineRun:
    return PipelineRun.model_validate(
        {
            "metadata": {"name": name, "namespace": "ci", "creationTimestamp": CREATED},
            "spec": {"pipelineRef": {"name": "build"}},
            "status": {
                "conditions": [
                    {
                        "type": "Succeeded",
                        "status": succeeded,
                        "reason": reason,
                        "message": "Tasks Completed: 1 (Failed: 1)",
                    }
                ]
            },
        }
    )


def build_task_run(
    name: str = "build-42-compile",
    *,
    task: str = "compile",
    succeeded: str = "False",
    pod_name: str = "build-42-compile-pod",
) -> TaskRun:
    return TaskRun.model_validate(
        {
            "metadata": {
                "name": name,
                "creationTimestamp": CREATED,
                "labels": {"tekton.dev/pipelineTask": task},
            },
            "status": {
                "podName": pod_name,
                "conditions": [{"type": "Succeeded", "status": succeeded, "reason": "Failed"}],
            },
        }
    )


class StubController(BaseController):
    """In-memory controller; every fetch is recorded in ``calls``."""

    def __init__(
        self,
        pods: list[Pod] | None = None,
        pipeline_runs: list[PipelineRun] | None = None,
    ) -> None:
        self.pods = {pod.name: pod for pod in pods or []}
        self.pipeline_runs = {run.name: run for run in pipeline_runs or []}
        self.task_runs: dict[str, list[TaskRun]] = {}
        self.logs: dict[tuple[str, str, bool], str] = {}
        self.events: dict[tuple[str, str], list[EventInfo]] = {}
        self.raw_events: dict[tuple[str, str], str] = {}
        self.fail: set[str] = set()
        self.calls: list[tuple[Any, ...]] = []

    def _check(self, operation: str) -> None:
        if operation in self.fail:
            raise CollaboratorError(f"{operation} failed")

    async def list_resources(self, kind: ResourceKind) -> list[ResourceItem]:
        self.calls.append(("list_resources", kind))
        self._check("list_resources")
        if kind is ResourceKind.PIPELINE_RUN:
            return [PipelineRunItem.from_pipeline_run(run) for run in self.pipeline_runs.values()]
        return [PodItem.from_pod(pod) for pod in self.pods.values()]

    async def fetch_pod(self, name: str) -> Pod:
        self.calls.append(("fetch_pod", name))
        self._check("fetch_pod")
        if name not in self.pods:
            raise CollaboratorError(f'pods "{name}" not found')
        return self.pods[name]

    async def fetch_pipeline_run(self, name: str) -> PipelineRun:
        self.calls.append(("fetch_pipeline_run", name))
        self._check("fetch_pipeline_run")
        if name not in self.pipeline_runs:
            raise CollaboratorError(f'pipelineruns "{name}" not found')
        return self.pipeline_runs[name]

    async def fetch_task_runs(self, pipeline_run_name: str) -> list[TaskRun]:
        self.calls.append(("fetch_task_runs", pipeline_run_name))
        self._check("fetch_task_runs")
        return self.task_runs.get(pipeline_run_name, [])

    async def fetch_task_run_pod(self, task_run: TaskRun) -> Pod:
        self.calls.append(("fetch_task_run_pod", task_run.name))
        self._check("fetch_task_run_pod")
        return await self.fetch_pod(task_run.status.pod_name)

    async def fetch_logs(
        self, pod_name: str, container: str, max_lines: int, previous: bool = False
    ) -> str:
        self.calls.append(("fetch_logs", pod_name, container, max_lines, previous))
        self._check("fetch_logs")
        return self.logs.get((pod_name, container, previous), "")

    async def fetch_events(
        self, name: str, kind: str, created_at: datetime | None = None
    ) -> list[EventInfo]:
        self.calls.append(("fetch_events", name, kind))
        self._check("fetch_events")
        return self.events.get((name, kind), [])

    async def fetch_events_raw(self, name: str, kind: str) -> str:
        self.calls.append(("fetch_events_raw", name, kind))
        self._check("fetch_events_raw")
        return self.raw_events.get((name, kind), "")


@pytest.fixture
def stub_controller() -> StubController:
    """Controller with one healthy and one crash-looping pod."""
    return StubController(
        pods=[
            build_pod("web-1"),
            build_pod(
                "worker-2",
                phase="Running",
                statuses=[container_status("worker", waiting="CrashLoopBackOff", restarts=5)],
            ),
        ]
    )


@pytest.fixture
def pod_factory() -> Callable[..., Pod]:
    return build_pod


@pytest.fixture
def status_factory() -> Callable[..., dict[str, Any]]:
    return container_status


@pytest.fixture
def pipeline_run_factory() -> Callable[..., PipelineRun]:
    return build_pipeline_run


@pytest.fixture
def task_run_factory() -> Callable[..., TaskRun]:
    return build_task_run


@pytest.fixture
def controller_cls() -> type[StubController]:
    return StubController
