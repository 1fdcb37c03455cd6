"""Pydantic v2 models for the build custom resources.

Pods and service accounts are represented by the Kubernetes client's own
``V1Pod`` and ``V1ServiceAccount`` models; everything defined here is a custom
resource that the client library does not ship.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ConditionStatus(StrEnum):
    """Status of a condition, as in the Kubernetes core API."""

    TRUE = "True"
    FALSE = "False"
    UNKNOWN = "Unknown"


class StrategyKind(StrEnum):
    """Scope of the strategy a build refers to."""

    NAMESPACED = "BuildStrategy"
    CLUSTER = "ClusterBuildStrategy"


SUCCEEDED = "Succeeded"


class CatalogModel(BaseModel):
    """Base for all resource models: snake_case in Python, camelCase in YAML."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class ObjectMeta(CatalogModel):
    """Subset of Kubernetes object metadata carried by every fixture."""

    name: str
    namespace: str | None = None
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)
    finalizers: list[str] = Field(default_factory=list)
    generation: int = 0
    creation_timestamp: datetime | None = None


# --- Build definition ---


class GitSource(CatalogModel):
    url: str
    revision: str | None = None
    context_dir: str | None = None


class StrategyRef(CatalogModel):
    name: str
    kind: StrategyKind | None = None


class LocalObjectReference(CatalogModel):
    name: str


class OutputImage(CatalogModel):
    image_url: str = Field(alias="image")
    secret_ref: LocalObjectReference | None = None


class BuildSpec(CatalogModel):
    source: GitSource | None = None
    strategy_ref: StrategyRef | None = Field(default=None, alias="strategy")
    output: OutputImage | None = None
    timeout_seconds: int | None = None


class BuildStatus(CatalogModel):
    registered: ConditionStatus | None = None
    reason: str | None = None
    message: str | None = None


class BuildDefinition(CatalogModel):
    """A build: where the source lives, which strategy builds it, where the image goes."""

    metadata: ObjectMeta
    spec: BuildSpec = Field(default_factory=BuildSpec)
    status: BuildStatus = Field(default_factory=BuildStatus)


# --- Build execution ---


class BuildRef(CatalogModel):
    name: str


class ServiceAccountSettings(CatalogModel):
    name: str | None = None
    generate: bool = False


class BuildExecutionSpec(CatalogModel):
    build_ref: BuildRef | None = Field(default=None, alias="build")
    service_account: ServiceAccountSettings | None = None
    timeout_seconds: int | None = None


class BuildExecutionStatus(CatalogModel):
    succeeded: ConditionStatus | None = None
    reason: str | None = None
    message: str | None = None
    latest_task_run_ref: str | None = None
    start_time: datetime | None = None
    completion_time: datetime | None = None
    build_spec: BuildSpec | None = None


class BuildExecution(CatalogModel):
    """One run of a build definition."""

    metadata: ObjectMeta
    spec: BuildExecutionSpec = Field(default_factory=BuildExecutionSpec)
    status: BuildExecutionStatus = Field(default_factory=BuildExecutionStatus)


# --- Strategies ---


class ResourceRequirements(CatalogModel):
    limits: dict[str, str] = Field(default_factory=dict)
    requests: dict[str, str] = Field(default_factory=dict)


class BuildStep(CatalogModel):
    name: str
    image: str
    command: list[str] = Field(default_factory=list)
    args: list[str] = Field(default_factory=list)
    resources: ResourceRequirements = Field(default_factory=ResourceRequirements)


class StrategySpec(CatalogModel):
    build_steps: list[BuildStep] = Field(default_factory=list)


class StrategyDefinition(CatalogModel):
    """A namespaced build strategy."""

    metadata: ObjectMeta
    spec: StrategySpec = Field(default_factory=StrategySpec)


class ClusterStrategyDefinition(CatalogModel):
    """A cluster-scoped build strategy; its namespace is normally unset."""

    metadata: ObjectMeta
    spec: StrategySpec = Field(default_factory=StrategySpec)


# --- Task execution ---


class Condition(CatalogModel):
    type: str
    status: ConditionStatus
    reason: str | None = None
    message: str | None = None


class TaskExecutionStatus(CatalogModel):
    conditions: list[Condition] = Field(default_factory=list)
    pod_name: str | None = None
    start_time: datetime | None = None
    completion_time: datetime | None = None

    def succeeded_condition(self) -> Condition | None:
        """Return the ``Succeeded`` condition, if the task has reported one."""
        for condition in self.conditions:
            if condition.type == SUCCEEDED:
                return condition
        return None


class TaskExecution(CatalogModel):
    """The pipeline task run that carries out a build execution."""

    metadata: ObjectMeta
    status: TaskExecutionStatus = Field(default_factory=TaskExecutionStatus)
