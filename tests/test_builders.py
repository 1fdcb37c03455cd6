"""Tests for builders.py: the fixture shapes controllers are tested against."""

from __future__ import annotations

import pytest
from kubernetes.client import V1Pod, V1ServiceAccount

from build_catalog import builders
from build_catalog.config import DEFAULT_EXECUTION_LABEL
from build_catalog.errors import ConfigurationError
from build_catalog.models import SUCCEEDED, ConditionStatus, StrategyKind


class TestBuilds:
    def test_build_with_cluster_strategy(self) -> None:
        build = builders.build_with_cluster_strategy("build1", "ns1", "kaniko", "push-secret")
        assert build.metadata.namespace == "ns1"
        assert build.spec.strategy_ref.name == "kaniko"
        assert build.spec.strategy_ref.kind is StrategyKind.CLUSTER
        assert build.spec.output.secret_ref.name == "push-secret"

    def test_build_without_strategy_kind(self) -> None:
        build = builders.build("build1", "ns1", strategy_kind=None)
        assert build.spec.strategy_ref.kind is None
        assert build.spec.output is None

    def test_build_with_annotations_and_finalizers(self) -> None:
        build = builders.build("build1", "ns1", annotations={"a": "b"}, finalizers=["f"])
        assert build.metadata.annotations == {"a": "b"}
        assert build.metadata.finalizers == ["f"]

    def test_each_call_returns_fresh_collections(self) -> None:
        first = builders.build("build1")
        first.metadata.labels["x"] = "y"
        assert builders.build("build1").metadata.labels == {}

    def test_default_build_registered(self) -> None:
        build = builders.default_build("build1")
        assert build.status.registered is ConditionStatus.TRUE
        assert build.status.reason is None

    def test_default_build_not_registered(self) -> None:
        build = builders.default_build("build1", registered=False)
        assert build.status.registered is ConditionStatus.FALSE
        assert build.status.reason == "something bad happened"


class TestExecutions:
    def test_with_service_account(self) -> None:
        execution = builders.build_execution_with_service_account("run1", "build1", "pipeline")
        assert execution.spec.build_ref.name == "build1"
        assert execution.spec.service_account.name == "pipeline"
        assert execution.spec.service_account.generate is False

    def test_with_generated_service_account(self) -> None:
        execution = builders.build_execution_with_generated_service_account("run1", "build1")
        assert execution.spec.service_account.name is None
        assert execution.spec.service_account.generate is True

    def test_without_service_account(self) -> None:
        execution = builders.build_execution_without_service_account("run1", "build1")
        assert execution.spec.service_account.name is None
        assert execution.spec.service_account.generate is False

    def test_with_snapshot(self) -> None:
        execution = builders.build_execution_with_snapshot("run1", "build1")
        assert execution.metadata.creation_timestamp is not None
        assert execution.status.build_spec.strategy_ref.name == builders.DEFAULT_STRATEGY_NAME


class TestTaskExecutions:
    def test_labelled_with_owning_execution(self) -> None:
        task = builders.task_execution("tr1", "run1", "ns1")
        assert task.metadata.labels == {DEFAULT_EXECUTION_LABEL: "run1"}
        assert task.status.succeeded_condition() is None

    def test_with_status(self) -> None:
        task = builders.task_execution("tr1", "run1", status=ConditionStatus.TRUE, reason="Succeeded")
        condition = task.status.succeeded_condition()
        assert condition.type == SUCCEEDED
        assert condition.status is ConditionStatus.TRUE

    def test_failed(self) -> None:
        condition = builders.failed_task_execution("tr1", "run1").status.succeeded_condition()
        assert condition.status is ConditionStatus.FALSE
        assert condition.message == "some message"

    def test_completed_has_times_and_pod(self) -> None:
        task = builders.completed_task_execution("tr1", "run1", pod_name="tr1-pod")
        assert task.status.start_time is not None
        assert task.status.completion_time is not None
        assert task.status.pod_name == "tr1-pod"


class TestKubernetesObjects:
    def test_pod_with_init_container_status(self) -> None:
        pod = builders.pod_with_init_container_status("pod1", "prepare")
        assert isinstance(pod, V1Pod)
        assert [s.name for s in pod.status.init_container_statuses] == ["prepare"]

    def test_service_account(self) -> None:
        sa = builders.service_account("pipeline", "ns1")
        assert isinstance(sa, V1ServiceAccount)
        assert (sa.metadata.namespace, sa.metadata.name) == ("ns1", "pipeline")


class TestStrategiesAndResources:
    def test_cluster_strategy_has_no_namespace(self) -> None:
        assert builders.cluster_strategy("kaniko").metadata.namespace is None

    def test_custom_resources(self) -> None:
        resources = builders.custom_resources("500m", "2Gi")
        assert resources.limits == {"cpu": "500m", "memory": "2Gi"}
        assert resources.requests == resources.limits
        assert resources.requests is not resources.limits

    def test_custom_resources_invalid_quantity(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid resource quantity: 'lots'"):
            builders.custom_resources("lots", "2Gi")
