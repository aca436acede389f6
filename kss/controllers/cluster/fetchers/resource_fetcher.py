"""Resource fetcher for cluster controller - pods, PipelineRuns and TaskRuns."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from kss.constants.values import LABEL_PIPELINE_RUN, TASK_RUN_POD_LABELS
from kss.controllers.base import CollaboratorError
from kss.controllers.cluster.parsers import ResourceParser
from kss.models.core.pipeline_run import PipelineRun, PipelineRunList, TaskRun, TaskRunList
from kss.models.core.pod import Pod, PodList

logger = logging.getLogger(__name__)

RunKubectl = Callable[[tuple[str, ...]], Awaitable[str]]


class ResourceFetcher:
    """Fetches and parses pod and Tekton resources."""

    def __init__(self, run_kubectl_func: RunKubectl) -> None:
        self._run_kubectl = run_kubectl_func

    async def list_pods(self) -> list[Pod]:
        output = await self._run_kubectl(("get", "pods", "-o", "json"))
        return ResourceParser.parse(output, PodList, "pod list").items

    async def list_pipeline_runs(self) -> list[PipelineRun]:
        output = await self._run_kubectl(("get", "pipelineruns", "-o", "json"))
        return ResourceParser.parse(output, PipelineRunList, "pipelinerun list").items

    async def get_pod(self, name: str) -> Pod:
        output = await self._run_kubectl(("get", "pod", name, "-o", "json"))
        return ResourceParser.parse(output, Pod, f"pod {name}")

    async def get_pipeline_run(self, name: str) -> PipelineRun:
        output = await self._run_kubectl(("get", "pipelinerun", name, "-o", "json"))
        return ResourceParser.parse(output, PipelineRun, f"pipelinerun {name}")

    async def list_task_runs(self, pipeline_run_name: str) -> list[TaskRun]:
        selector = f"{LABEL_PIPELINE_RUN}={pipeline_run_name}"
        output = await self._run_kubectl(("get", "taskruns", "-l", selector, "-o", "json"))
        return ResourceParser.parse(
            output, TaskRunList, f"taskruns for pipelinerun {pipeline_run_name}"
        ).items

    async def pod_name_for_task_run(self, task_run: TaskRun) -> str:
        """Resolve the pod behind a TaskRun from its status or pod labels."""
        if task_run.status.pod_name:
            return task_run.status.pod_name

        for label in TASK_RUN_POD_LABELS:
            selector = f"{label}={task_run.name}"
            try:
                output = await self._run_kubectl(
                    (
                        "get",
                        "pods",
                        "-l",
                        selector,
                        "-o",
                        "jsonpath={.items[0].metadata.name}",
                    )
                )
            except CollaboratorError as exc:
                logger.debug("Pod lookup by %s failed: %s", selector, exc)
                continue
            if output.strip():
                return output.strip()

        raise CollaboratorError(f"no pod found for taskrun {task_run.name}")
