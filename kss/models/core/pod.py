"""Pod models parsed from ``kubectl get pod -o json``."""

from __future__ import annotations

from pydantic import Field

from kss.models.core.base import K8sModel, ObjectMeta


class WaitingState(K8sModel):
    """Container waiting to start or restart."""

    reason: str = ""
    message: str = ""


class RunningState(K8sModel):
    """Container currently executing."""

    started_at: str = ""


class TerminatedState(K8sModel):
    """Container that has exited."""

    exit_code: int = 0
    reason: str = ""
    message: str = ""
    started_at: str = ""
    finished_at: str = ""


class ContainerState(K8sModel):
    """Lifecycle phase of a container; at most one field is set."""

    waiting: WaitingState | None = None
    running: RunningState | None = None
    terminated: TerminatedState | None = None


class ContainerStatus(K8sModel):
    """Real-time status of a single container."""

    name: str = ""
    state: ContainerState = Field(default_factory=ContainerState)
    last_state: ContainerState | None = None
    ready: bool = False
    restart_count: int = 0
    image: str = ""

    def state_label(self) -> tuple[str, bool]:
        """Summarize the container state as a label plus a running flag."""
        state = self.state
        if state.running is not None:
            return "running", True
        if state.waiting is not None:
            return f"waiting: {state.waiting.reason or 'waiting'}", False
        if state.terminated is not None:
            reason = state.terminated.message or f"exit {state.terminated.exit_code}"
            return f"terminated: {reason}", False
        return "unknown", False


class Container(K8sModel):
    """Container entry from the pod spec."""

    name: str = ""
    image: str = ""


class PodSpec(K8sModel):
    containers: list[Container] = Field(default_factory=list)
    init_containers: list[Container] = Field(default_factory=list)
    node_name: str = ""
    service_account_name: str = ""


class PodCondition(K8sModel):
    type: str = ""
    status: str = ""
    reason: str = ""
    message: str = ""


class PodStatus(K8sModel):
    phase: str = ""
    start_time: str = ""
    qos_class: str = Field(default="", alias="qosClass")
    init_container_statuses: list[ContainerStatus] = Field(default_factory=list)
    container_statuses: list[ContainerStatus] = Field(default_factory=list)
    conditions: list[PodCondition] = Field(default_factory=list)


class Pod(K8sModel):
    """High-level pod model."""

    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: PodSpec = Field(default_factory=PodSpec)
    status: PodStatus = Field(default_factory=PodStatus)

    @property
    def name(self) -> str:
        return self.metadata.name

    def first_container_name(self) -> str | None:
        """Name of the first container, preferring live status over spec."""
        if self.status.container_statuses:
            return self.status.container_statuses[0].name
        if self.spec.containers:
            return self.spec.containers[0].name
        return None


class PodList(K8sModel):
    items: list[Pod] = Field(default_factory=list)


__all__ = [
    "Container",
    "ContainerState",
    "ContainerStatus",
    "Pod",
    "PodCondition",
    "PodList",
    "PodSpec",
    "PodStatus",
    "RunningState",
    "TerminatedState",
    "WaitingState",
]
