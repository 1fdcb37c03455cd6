"""Tests for models.py: field aliases, defaults, strictness."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from build_catalog.models import (
    SUCCEEDED,
    BuildDefinition,
    BuildExecution,
    Condition,
    ConditionStatus,
    ObjectMeta,
    OutputImage,
    TaskExecution,
    TaskExecutionStatus,
)


class TestAliases:
    def test_camel_case_input(self) -> None:
        execution = BuildExecution.model_validate(
            {
                "metadata": {"name": "run1", "creationTimestamp": "2024-01-01T00:00:00Z"},
                "spec": {"build": {"name": "build1"}, "serviceAccount": {"name": "pipeline"}},
                "status": {"latestTaskRunRef": "run1-tr", "succeeded": "Unknown"},
            }
        )
        assert execution.spec.build_ref.name == "build1"
        assert execution.spec.service_account.name == "pipeline"
        assert execution.status.latest_task_run_ref == "run1-tr"
        assert execution.status.succeeded is ConditionStatus.UNKNOWN
        assert execution.metadata.creation_timestamp.year == 2024

    def test_snake_case_input(self) -> None:
        output = OutputImage(image_url="registry.example.dev/app", secret_ref={"name": "push"})
        assert output.model_dump(by_alias=True) == {
            "image": "registry.example.dev/app",
            "secretRef": {"name": "push"},
        }

    def test_unknown_fields_rejected(self) -> None:
        with pytest.raises(ValidationError):
            BuildDefinition.model_validate({"metadata": {"name": "b"}, "spec": {"sources": []}})

    def test_invalid_condition_status_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Condition(type=SUCCEEDED, status="Maybe")


class TestDefaults:
    def test_metadata_collections_default_empty(self) -> None:
        meta = ObjectMeta(name="b")
        assert (meta.namespace, meta.labels, meta.annotations, meta.finalizers) == (None, {}, {}, [])
        assert meta.generation == 0

    def test_status_always_present(self) -> None:
        build = BuildDefinition(metadata=ObjectMeta(name="b"))
        assert build.status.registered is None
        execution = BuildExecution(metadata=ObjectMeta(name="r"))
        assert execution.status.build_spec is None

    def test_name_required(self) -> None:
        with pytest.raises(ValidationError):
            ObjectMeta()  # type: ignore[call-arg]


class TestSucceededCondition:
    def test_finds_succeeded_among_others(self) -> None:
        status = TaskExecutionStatus(
            conditions=[
                Condition(type="Ready", status=ConditionStatus.TRUE),
                Condition(type=SUCCEEDED, status=ConditionStatus.FALSE, reason="Failed"),
            ]
        )
        condition = status.succeeded_condition()
        assert condition is not None
        assert condition.reason == "Failed"

    def test_none_when_unreported(self) -> None:
        task = TaskExecution(metadata=ObjectMeta(name="tr1"))
        assert task.status.succeeded_condition() is None
