"""Builders for common fixtures.

These return fresh objects on every call; register them with a ``FixtureSet``
or hand them to the code under test directly.
"""

from __future__ import annotations

from datetime import UTC, datetime

from kubernetes.client import (
    V1ContainerStatus,
    V1ObjectMeta,
    V1Pod,
    V1PodStatus,
    V1ServiceAccount,
)
from kubernetes.utils import parse_quantity

from build_catalog.config import get_config
from build_catalog.errors import ConfigurationError
from build_catalog.models import (
    SUCCEEDED,
    BuildDefinition,
    BuildExecution,
    BuildExecutionSpec,
    BuildExecutionStatus,
    BuildRef,
    BuildSpec,
    BuildStatus,
    ClusterStrategyDefinition,
    Condition,
    ConditionStatus,
    GitSource,
    LocalObjectReference,
    ObjectMeta,
    OutputImage,
    ResourceRequirements,
    ServiceAccountSettings,
    StrategyDefinition,
    StrategyKind,
    StrategyRef,
    TaskExecution,
    TaskExecutionStatus,
)

DEFAULT_SOURCE_URL = "https://github.com/example/sample-app"
DEFAULT_IMAGE = "registry.example.dev/sample/app:latest"
DEFAULT_STRATEGY_NAME = "buildpacks"


# --- Build definitions ---


def build(
    name: str,
    namespace: str | None = None,
    strategy_name: str = DEFAULT_STRATEGY_NAME,
    strategy_kind: StrategyKind | None = StrategyKind.NAMESPACED,
    secret_name: str | None = None,
    annotations: dict[str, str] | None = None,
    finalizers: list[str] | None = None,
    generation: int = 1,
) -> BuildDefinition:
    """Return a build pointing at a sample repository and the given strategy.

    Passing ``strategy_kind=None`` leaves the kind unset, as older builds did.
    An output section is only added when ``secret_name`` is given.
    """
    output = None
    if secret_name is not None:
        output = OutputImage(image_url=DEFAULT_IMAGE, secret_ref=LocalObjectReference(name=secret_name))
    return BuildDefinition(
        metadata=ObjectMeta(
            name=name,
            namespace=namespace,
            annotations=annotations or {},
            finalizers=finalizers or [],
            generation=generation,
        ),
        spec=BuildSpec(
            source=GitSource(url=DEFAULT_SOURCE_URL),
            strategy_ref=StrategyRef(name=strategy_name, kind=strategy_kind),
            output=output,
        ),
    )


def build_with_cluster_strategy(name: str, namespace: str, strategy_name: str, secret_name: str) -> BuildDefinition:
    return build(name, namespace, strategy_name, StrategyKind.CLUSTER, secret_name=secret_name)


def default_build(
    name: str,
    strategy_name: str = DEFAULT_STRATEGY_NAME,
    strategy_kind: StrategyKind = StrategyKind.NAMESPACED,
    registered: bool = True,
) -> BuildDefinition:
    """Return a minimal build whose status is already registered (or failed to register)."""
    status = (
        BuildStatus(registered=ConditionStatus.TRUE)
        if registered
        else BuildStatus(registered=ConditionStatus.FALSE, reason="something bad happened")
    )
    return BuildDefinition(
        metadata=ObjectMeta(name=name),
        spec=BuildSpec(strategy_ref=StrategyRef(name=strategy_name, kind=strategy_kind)),
        status=status,
    )


# --- Build executions ---


def build_execution(
    name: str,
    build_name: str,
    namespace: str | None = None,
    service_account: ServiceAccountSettings | None = None,
    labels: dict[str, str] | None = None,
) -> BuildExecution:
    return BuildExecution(
        metadata=ObjectMeta(name=name, namespace=namespace, labels=labels or {}),
        spec=BuildExecutionSpec(build_ref=BuildRef(name=build_name), service_account=service_account),
    )


def build_execution_with_service_account(name: str, build_name: str, sa_name: str) -> BuildExecution:
    return build_execution(name, build_name, service_account=ServiceAccountSettings(name=sa_name))


def build_execution_with_generated_service_account(name: str, build_name: str) -> BuildExecution:
    return build_execution(name, build_name, service_account=ServiceAccountSettings(generate=True))


def build_execution_without_service_account(name: str, build_name: str) -> BuildExecution:
    """Neither a service account name nor generation requested."""
    return build_execution(name, build_name, service_account=ServiceAccountSettings(generate=False))


def build_execution_with_snapshot(name: str, build_name: str) -> BuildExecution:
    """Return an execution whose status already carries a snapshot of its build's spec."""
    execution = build_execution(name, build_name)
    execution.metadata.creation_timestamp = datetime.now(tz=UTC)
    execution.status = BuildExecutionStatus(build_spec=BuildSpec(strategy_ref=StrategyRef(name=DEFAULT_STRATEGY_NAME)))
    return execution


# --- Task executions ---


def task_execution(
    name: str,
    execution_name: str,
    namespace: str | None = None,
    status: ConditionStatus | None = None,
    reason: str | None = None,
    message: str | None = None,
) -> TaskExecution:
    """Return a task execution labelled with its owning build execution.

    A ``Succeeded`` condition is only added when ``status`` is given.
    """
    conditions = []
    if status is not None:
        conditions.append(Condition(type=SUCCEEDED, status=status, reason=reason, message=message))
    return TaskExecution(
        metadata=ObjectMeta(
            name=name,
            namespace=namespace,
            labels={get_config().execution_label: execution_name},
        ),
        status=TaskExecutionStatus(conditions=conditions),
    )


def failed_task_execution(name: str, execution_name: str, namespace: str | None = None) -> TaskExecution:
    return task_execution(
        name,
        execution_name,
        namespace,
        status=ConditionStatus.FALSE,
        reason="something bad happened",
        message="some message",
    )


def completed_task_execution(
    name: str, execution_name: str, namespace: str | None = None, pod_name: str = "sample-pod"
) -> TaskExecution:
    """Return a failed task execution with start and completion times and a pod name."""
    task = failed_task_execution(name, execution_name, namespace)
    now = datetime.now(tz=UTC)
    task.status.start_time = now
    task.status.completion_time = now
    task.status.pod_name = pod_name
    return task


# --- Pods and service accounts ---


def pod_with_init_container_status(name: str, init_container_name: str, namespace: str | None = None) -> V1Pod:
    return V1Pod(
        metadata=V1ObjectMeta(name=name, namespace=namespace),
        status=V1PodStatus(
            init_container_statuses=[
                V1ContainerStatus(
                    name=init_container_name,
                    image="",
                    image_id="",
                    ready=False,
                    restart_count=0,
                )
            ]
        ),
    )


def service_account(name: str, namespace: str | None = None) -> V1ServiceAccount:
    return V1ServiceAccount(metadata=V1ObjectMeta(name=name, namespace=namespace))


# --- Strategies ---


def strategy(name: str = DEFAULT_STRATEGY_NAME, namespace: str | None = None) -> StrategyDefinition:
    return StrategyDefinition(metadata=ObjectMeta(name=name, namespace=namespace))


def cluster_strategy(name: str = DEFAULT_STRATEGY_NAME) -> ClusterStrategyDefinition:
    return ClusterStrategyDefinition(metadata=ObjectMeta(name=name))


def custom_resources(cpu: str, memory: str) -> ResourceRequirements:
    """Return equal CPU and memory limits and requests.

    Raises:
        ConfigurationError: If either value is not a valid Kubernetes quantity.
    """
    for value in (cpu, memory):
        try:
            parse_quantity(value)
        except ValueError:
            msg = f"Invalid resource quantity: {value!r}."
            raise ConfigurationError(msg) from None
    return ResourceRequirements(
        limits={"cpu": cpu, "memory": memory},
        requests={"cpu": cpu, "memory": memory},
    )
