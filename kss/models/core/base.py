"""Shared base for models parsed from kubectl JSON output."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class K8sModel(BaseModel):
    """Immutable model accepting camelCase keys from the Kubernetes API."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class ObjectMeta(K8sModel):
    """Identifying metadata shared by pods and Tekton resources."""

    name: str = ""
    namespace: str = ""
    creation_timestamp: str = ""
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)
