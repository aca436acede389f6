"""Cluster controller for dashboard data operations.

This module serves as the orchestrator for cluster queries, delegating to
specialized fetchers for resources, logs, and events. All kubectl calls run
in worker threads so the event loop never blocks.
"""

from __future__ import annotations

import asyncio
import logging
import subprocess
from datetime import datetime

from kss.constants.enums import ResourceKind
from kss.constants.timeouts import KUBECTL_COMMAND_TIMEOUT
from kss.controllers.base import BaseController, CollaboratorError
from kss.controllers.cluster.fetchers import EventFetcher, LogFetcher, ResourceFetcher
from kss.models.core.pipeline_run import PipelineRun, TaskRun
from kss.models.core.pod import Pod
from kss.models.core.resource_item import PipelineRunItem, PodItem, ResourceItem
from kss.models.events.event_info import EventInfo

logger = logging.getLogger(__name__)


class ClusterController(BaseController):
    """kubectl-backed controller scoped to an optional namespace and context."""

    def __init__(
        self,
        namespace: str | None = None,
        context: str | None = None,
        timeout: int = KUBECTL_COMMAND_TIMEOUT,
    ) -> None:
        """Initialize the cluster controller.

        Args:
            namespace: Optional namespace; the kubeconfig default is used otherwise.
            context: Optional Kubernetes context name.
            timeout: Process-level timeout for each kubectl call, in seconds.
        """
        self.namespace = namespace or None
        self.context = context or None
        self.timeout = timeout

        # Initialize fetchers
        self._resource_fetcher = ResourceFetcher(self._run_kubectl)
        self._log_fetcher = LogFetcher(self._run_kubectl)
        self._event_fetcher = EventFetcher(self._run_kubectl)

    def _build_command(self, args: tuple[str, ...]) -> list[str]:
        cmd = ["kubectl"]
        if self.context:
            cmd.extend(["--context", self.context])
        if self.namespace:
            cmd.extend(["-n", self.namespace])
        cmd.extend(args)
        return cmd

    def _run_kubectl_sync(self, args: tuple[str, ...]) -> str:
        """Run a kubectl command synchronously (thread-safe wrapper target)."""
        cmd = self._build_command(args)
        try:
            result = subprocess.run(
                cmd, capture_output=True, text=True, timeout=self.timeout
            )
        except subprocess.TimeoutExpired as exc:
            raise CollaboratorError(
                f"kubectl timed out after {self.timeout}s: {' '.join(args)}"
            ) from exc
        except OSError as exc:
            raise CollaboratorError(f"could not run kubectl: {exc}") from exc
        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            logger.debug("kubectl %s failed: %s", " ".join(args), stderr)
            raise CollaboratorError(stderr or "kubectl command failed")
        return result.stdout

    async def _run_kubectl(self, args: tuple[str, ...]) -> str:
        return await asyncio.to_thread(self._run_kubectl_sync, args)

    # =========================================================================
    # Resources
    # =========================================================================

    async def list_resources(self, kind: ResourceKind) -> list[ResourceItem]:
        if kind is ResourceKind.PIPELINE_RUN:
            runs = await self._resource_fetcher.list_pipeline_runs()
            return [PipelineRunItem.from_pipeline_run(run) for run in runs]
        pods = await self._resource_fetcher.list_pods()
        return [PodItem.from_pod(pod) for pod in pods]

    async def fetch_pod(self, name: str) -> Pod:
        return await self._resource_fetcher.get_pod(name)

    async def fetch_pipeline_run(self, name: str) -> PipelineRun:
        return await self._resource_fetcher.get_pipeline_run(name)

    async def fetch_task_runs(self, pipeline_run_name: str) -> list[TaskRun]:
        return await self._resource_fetcher.list_task_runs(pipeline_run_name)

    async def pod_name_for_task_run(self, task_run: TaskRun) -> str:
        return await self._resource_fetcher.pod_name_for_task_run(task_run)

    async def fetch_task_run_pod(self, task_run: TaskRun) -> Pod:
        pod_name = await self.pod_name_for_task_run(task_run)
        return await self.fetch_pod(pod_name)

    # =========================================================================
    # Logs and events
    # =========================================================================

    async def fetch_logs(
        self, pod_name: str, container: str, max_lines: int, previous: bool = False
    ) -> str:
        return await self._log_fetcher.fetch_logs(pod_name, container, max_lines, previous)

    async def fetch_events(
        self, name: str, kind: str, created_at: datetime | None = None
    ) -> list[EventInfo]:
        return await self._event_fetcher.fetch_events(name, kind, created_at)

    async def fetch_events_raw(self, name: str, kind: str) -> str:
        """Return the raw events JSON for a resource, used as AI prompt context."""
        return await self._event_fetcher.fetch_events_raw(name, kind)
