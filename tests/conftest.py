"""Shared test fixtures for all test modules."""

from __future__ import annotations

import pytest

from build_catalog import builders
from build_catalog.config import CatalogConfig
from build_catalog.factory import StubFactory
from build_catalog.fixtures import FixtureSet
from build_catalog.models import BuildDefinition, BuildExecution


@pytest.fixture
def catalog_config() -> CatalogConfig:
    """Configuration with the default label keys, independent of the environment."""
    return CatalogConfig(
        build_label="build.example.dev/name",
        generation_label="build.example.dev/generation",
        execution_label="buildrun.example.dev/name",
        finalizer="build.example.dev/finalizer",
        fixtures_path=None,
    )


@pytest.fixture
def sample_build() -> BuildDefinition:
    return builders.build("build1", "ns1", secret_name="registry-push", generation=3)


@pytest.fixture
def sample_execution() -> BuildExecution:
    return builders.build_execution("run1", "build1", namespace="ns1")


@pytest.fixture
def fixture_set(sample_build: BuildDefinition, sample_execution: BuildExecution) -> FixtureSet:
    return FixtureSet(sample_build, sample_execution)


@pytest.fixture
def factory(fixture_set: FixtureSet, catalog_config: CatalogConfig) -> StubFactory:
    return StubFactory(fixture_set, catalog_config)
