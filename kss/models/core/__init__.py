"""Core Kubernetes and Tekton resource models."""

from kss.models.core.base import K8sModel, ObjectMeta
from kss.models.core.pipeline_run import (
    Condition,
    PipelineRun,
    PipelineRunList,
    TaskRun,
    TaskRunList,
    status_label,
    task_run_display_name,
)
from kss.models.core.pod import (
    Container,
    ContainerState,
    ContainerStatus,
    Pod,
    PodList,
)
from kss.models.core.resource_item import (
    PipelineRunItem,
    PodItem,
    ResourceItem,
)

__all__ = [
    "Condition",
    "Container",
    "ContainerState",
    "ContainerStatus",
    "K8sModel",
    "ObjectMeta",
    "PipelineRun",
    "PipelineRunItem",
    "PipelineRunList",
    "Pod",
    "PodItem",
    "PodList",
    "ResourceItem",
    "TaskRun",
    "TaskRunList",
    "status_label",
    "task_run_display_name",
]
