"""Tekton PipelineRun and TaskRun models."""

from __future__ import annotations

from pydantic import Field

from kss.constants.values import LABEL_PIPELINE_TASK, LABEL_TASK, STATUS_UNKNOWN
from kss.models.core.base import K8sModel, ObjectMeta


class Condition(K8sModel):
    """Tekton condition entry."""

    type: str = ""
    status: str = ""
    reason: str = ""
    message: str = ""


class Ref(K8sModel):
    name: str = ""


class PipelineRunSpec(K8sModel):
    pipeline_ref: Ref | None = None


class PipelineRunStatus(K8sModel):
    conditions: list[Condition] = Field(default_factory=list)
    start_time: str = ""
    completion_time: str = ""


class PipelineRun(K8sModel):
    """Minimal Tekton PipelineRun model."""

    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: PipelineRunSpec = Field(default_factory=PipelineRunSpec)
    status: PipelineRunStatus = Field(default_factory=PipelineRunStatus)

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def pipeline_name(self) -> str:
        if self.spec.pipeline_ref is not None and self.spec.pipeline_ref.name:
            return self.spec.pipeline_ref.name
        return "inline"


class PipelineRunList(K8sModel):
    items: list[PipelineRun] = Field(default_factory=list)


class TaskRunStatus(K8sModel):
    conditions: list[Condition] = Field(default_factory=list)
    start_time: str = ""
    completion_time: str = ""
    pod_name: str = ""


class TaskRun(K8sModel):
    """Minimal Tekton TaskRun model."""

    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    status: TaskRunStatus = Field(default_factory=TaskRunStatus)

    @property
    def name(self) -> str:
        return self.metadata.name


class TaskRunList(K8sModel):
    items: list[TaskRun] = Field(default_factory=list)


def condition_for_type(conditions: list[Condition], cond_type: str) -> Condition | None:
    """Return the first condition matching the given type."""
    for condition in conditions:
        if condition.type == cond_type:
            return condition
    return None


def status_label(conditions: list[Condition]) -> tuple[str, str, str, str]:
    """Return (label, color, reason, message) for the Succeeded condition."""
    condition = condition_for_type(conditions, "Succeeded")
    if condition is None:
        return STATUS_UNKNOWN, "yellow", "", ""
    if condition.status == "True":
        return "Succeeded", "green", condition.reason, condition.message
    if condition.status == "False":
        return "Failed", "red", condition.reason, condition.message
    return "Running", "yellow", condition.reason, condition.message


def task_run_display_name(task_run: TaskRun) -> str:
    """Friendly TaskRun name: pipeline task label, then task label, then name."""
    labels = task_run.metadata.labels
    return (
        labels.get(LABEL_PIPELINE_TASK)
        or labels.get(LABEL_TASK)
        or task_run.metadata.name
    )


__all__ = [
    "Condition",
    "PipelineRun",
    "PipelineRunList",
    "TaskRun",
    "TaskRunList",
    "condition_for_type",
    "status_label",
    "task_run_display_name",
]
