"""Base controller with worker-friendly async patterns for the dashboard.

This module provides the contract the dashboard workers fetch through,
ensuring the UI remains responsive during kubectl operations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import TYPE_CHECKING

from kss.constants.enums import ResourceKind

if TYPE_CHECKING:
    from kss.models.core.pipeline_run import PipelineRun, TaskRun
    from kss.models.core.pod import Pod
    from kss.models.core.resource_item import ResourceItem
    from kss.models.events.event_info import EventInfo


class CollaboratorError(RuntimeError):
    """The cluster collaborator failed or returned data that could not be parsed."""


class BaseController(ABC):
    """Base controller class for cluster queries.

    Every method raises ``CollaboratorError`` on failure. Subclasses must be
    safe to call concurrently from several workers.
    """

    @abstractmethod
    async def list_resources(self, kind: ResourceKind) -> list[ResourceItem]:
        """List resources of ``kind`` in the configured namespace."""
        ...

    @abstractmethod
    async def fetch_pod(self, name: str) -> Pod: ...

    @abstractmethod
    async def fetch_pipeline_run(self, name: str) -> PipelineRun: ...

    @abstractmethod
    async def fetch_task_runs(self, pipeline_run_name: str) -> list[TaskRun]: ...

    @abstractmethod
    async def fetch_task_run_pod(self, task_run: TaskRun) -> Pod: ...

    @abstractmethod
    async def fetch_logs(
        self, pod_name: str, container: str, max_lines: int, previous: bool = False
    ) -> str:
        """Return tail-limited logs for one container."""
        ...

    @abstractmethod
    async def fetch_events(
        self, name: str, kind: str, created_at: datetime | None = None
    ) -> list[EventInfo]:
        """Return timestamped events for a resource, oldest first."""
        ...

    @abstractmethod
    async def fetch_events_raw(self, name: str, kind: str) -> str:
        """Return the unparsed events JSON for a resource."""
        ...

    async def fetch_resource_detail(
        self, kind: ResourceKind, name: str
    ) -> Pod | PipelineRun:
        if kind is ResourceKind.PIPELINE_RUN:
            return await self.fetch_pipeline_run(name)
        return await self.fetch_pod(name)
