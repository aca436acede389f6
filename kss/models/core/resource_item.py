"""List items shown in the dashboard resource list.

A resource item is the closed variant ``PodItem | PipelineRunItem``. Both are
immutable snapshots produced by the resource lister; the list is replaced
wholesale on every refresh. Consumers dispatch over the variant with
``match``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from kss.constants.values import STATUS_UNKNOWN
from kss.models.core.pipeline_run import PipelineRun
from kss.models.core.pod import Pod
from kss.utils.time_format import format_duration

@dataclass(frozen=True)
class PodItem:
    """List entry for a Kubernetes pod."""

    pod: Pod
    age: str

    @classmethod
    def from_pod(cls, pod: Pod, now: datetime | None = None) -> PodItem:
        return cls(pod=pod, age=format_duration(pod.status.start_time, now))

    @property
    def name(self) -> str:
        return self.pod.metadata.name

    @property
    def status(self) -> str:
        return self.pod.status.phase or STATUS_UNKNOWN


@dataclass(frozen=True)
class PipelineRunItem:
    """List entry for a Tekton PipelineRun."""

    pipeline_run: PipelineRun
    age: str

    @classmethod
    def from_pipeline_run(
        cls, pipeline_run: PipelineRun, now: datetime | None = None
    ) -> PipelineRunItem:
        return cls(
            pipeline_run=pipeline_run,
            age=format_duration(pipeline_run.metadata.creation_timestamp, now),
        )

    @property
    def name(self) -> str:
        return self.pipeline_run.metadata.name

    @property
    def status(self) -> str:
        conditions = self.pipeline_run.status.conditions
        if conditions and conditions[0].reason:
            return conditions[0].reason
        return STATUS_UNKNOWN


ResourceItem = PodItem | PipelineRunItem


def item_description(item: ResourceItem) -> str:
    """Second list line: ``Status: X | Age: Y``."""
    return f"Status: {item.status} | Age: {item.age}"


__all__ = [
    "PipelineRunItem",
    "PodItem",
    "ResourceItem",
    "item_description",
]
