"""The closed set of object variants the fake store knows how to serve.

Each variant is bound to exactly one model class. Dispatch goes through the
registry below (``type(obj)`` looked up by identity) so that an object of an
unexpected class is reported as a setup error instead of silently falling into
whichever branch happens to accept it.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from kubernetes.client import V1Pod, V1ServiceAccount

from build_catalog.errors import ConfigurationError
from build_catalog.models import (
    BuildDefinition,
    BuildExecution,
    ClusterStrategyDefinition,
    StrategyDefinition,
    TaskExecution,
)


class Variant(StrEnum):
    BUILD_DEFINITION = "BuildDefinition"
    BUILD_EXECUTION = "BuildExecution"
    EXECUTION_POD = "ExecutionPod"
    SERVICE_IDENTITY = "ServiceIdentity"
    STRATEGY_DEFINITION = "StrategyDefinition"
    CLUSTER_STRATEGY_DEFINITION = "ClusterStrategyDefinition"
    TASK_EXECUTION = "TaskExecution"

    @property
    def model(self) -> type[Any]:
        return _MODELS[self]


_MODELS: dict[Variant, type[Any]] = {
    Variant.BUILD_DEFINITION: BuildDefinition,
    Variant.BUILD_EXECUTION: BuildExecution,
    Variant.EXECUTION_POD: V1Pod,
    Variant.SERVICE_IDENTITY: V1ServiceAccount,
    Variant.STRATEGY_DEFINITION: StrategyDefinition,
    Variant.CLUSTER_STRATEGY_DEFINITION: ClusterStrategyDefinition,
    Variant.TASK_EXECUTION: TaskExecution,
}

_VARIANTS_BY_MODEL: dict[type[Any], Variant] = {model: variant for variant, model in _MODELS.items()}

VariantLike = Variant | type[Any]


def variant_for_type(model: type[Any]) -> Variant:
    """Return the variant bound to ``model``.

    Raises:
        ConfigurationError: If the class is not one of the known variant models.
    """
    try:
        return _VARIANTS_BY_MODEL[model]
    except KeyError:
        known = ", ".join(sorted(m.__name__ for m in _VARIANTS_BY_MODEL))
        msg = f"No variant is registered for {model.__name__}. Known models: {known}"
        raise ConfigurationError(msg) from None


def variant_of(obj: object) -> Variant:
    """Return the variant of a runtime object."""
    return variant_for_type(type(obj))


def as_variant(target: VariantLike) -> Variant:
    """Normalise a variant tag or a model class into a ``Variant``."""
    if isinstance(target, Variant):
        return target
    if isinstance(target, type):
        return variant_for_type(target)
    msg = f"Expected a Variant or a model class, got {type(target).__name__}."
    raise ConfigurationError(msg)


def identity(obj: object) -> tuple[str, str]:
    """Return the ``(namespace, name)`` of an object; an unset namespace is ``""``."""
    metadata = obj.metadata  # type: ignore[attr-defined]
    if metadata is None or not metadata.name:
        msg = f"{type(obj).__name__} has no metadata.name."
        raise ConfigurationError(msg)
    return metadata.namespace or "", metadata.name


def labels_of(obj: object) -> dict[str, str]:
    return obj.metadata.labels or {}  # type: ignore[attr-defined]


def finalizers_of(obj: object) -> list[str]:
    return obj.metadata.finalizers or []  # type: ignore[attr-defined]


# --- Status views ---


@dataclass(frozen=True)
class StatusView:
    """How to read the outcome fields of one variant's status.

    ``execution_ref`` is ``None`` for variants whose status has no cross-reference
    to the execution that produced it.
    """

    state: Callable[[Any], str | None]
    reason: Callable[[Any], str | None]
    execution_ref: Callable[[Any], str | None] | None = None


def _task_state(obj: TaskExecution) -> str | None:
    condition = obj.status.succeeded_condition()
    return condition.status if condition else None


def _task_reason(obj: TaskExecution) -> str | None:
    condition = obj.status.succeeded_condition()
    return condition.reason if condition else None


STATUS_VIEWS: dict[Variant, StatusView] = {
    Variant.BUILD_DEFINITION: StatusView(
        state=lambda obj: obj.status.registered,
        reason=lambda obj: obj.status.reason,
    ),
    Variant.BUILD_EXECUTION: StatusView(
        state=lambda obj: obj.status.succeeded,
        reason=lambda obj: obj.status.reason,
        execution_ref=lambda obj: obj.status.latest_task_run_ref,
    ),
    Variant.TASK_EXECUTION: StatusView(
        state=_task_state,
        reason=_task_reason,
        execution_ref=lambda obj: obj.status.pod_name,
    ),
    Variant.EXECUTION_POD: StatusView(
        state=lambda obj: obj.status.phase if obj.status else None,
        reason=lambda obj: obj.status.reason if obj.status else None,
    ),
}
