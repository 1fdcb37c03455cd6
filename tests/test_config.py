"""Tests for config.py: label keys, environment variable overrides, logging setup."""

from __future__ import annotations

import dataclasses
import importlib
import logging
import os
from pathlib import Path
from unittest.mock import patch

import pytest
import structlog

import build_catalog
from build_catalog.config import (
    DEFAULT_BUILD_LABEL,
    DEFAULT_EXECUTION_LABEL,
    DEFAULT_FINALIZER,
    DEFAULT_GENERATION_LABEL,
    CatalogConfig,
    configure_logging,
    get_config,
)


class TestCatalogConfig:
    """Tests for CatalogConfig defaults and overrides."""

    def test_defaults_without_env(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            config = get_config()
        assert config.build_label == DEFAULT_BUILD_LABEL
        assert config.generation_label == DEFAULT_GENERATION_LABEL
        assert config.execution_label == DEFAULT_EXECUTION_LABEL
        assert config.finalizer == DEFAULT_FINALIZER
        assert config.fixtures_path is None

    @pytest.mark.parametrize(
        ("env_var", "attr", "value"),
        [
            ("BUILD_CATALOG_BUILD_LABEL", "build_label", "shipwright.io/build"),
            ("BUILD_CATALOG_GENERATION_LABEL", "generation_label", "shipwright.io/generation"),
            ("BUILD_CATALOG_EXECUTION_LABEL", "execution_label", "shipwright.io/buildrun"),
            ("BUILD_CATALOG_FINALIZER", "finalizer", "shipwright.io/finalizer"),
        ],
    )
    def test_env_override(self, env_var: str, attr: str, value: str) -> None:
        with patch.dict(os.environ, {env_var: value}):
            config = get_config()
        assert getattr(config, attr) == value

    def test_fixtures_path_from_env(self) -> None:
        with patch.dict(os.environ, {"BUILD_CATALOG_FIXTURES": "/tmp/fixtures.yaml"}):
            config = get_config()
        assert config.fixtures_path == Path("/tmp/fixtures.yaml")

    def test_empty_fixtures_path_means_none(self) -> None:
        with patch.dict(os.environ, {"BUILD_CATALOG_FIXTURES": ""}):
            assert get_config().fixtures_path is None

    def test_explicit_values_win(self) -> None:
        with patch.dict(os.environ, {"BUILD_CATALOG_FINALIZER": "from-env"}):
            config = CatalogConfig(finalizer="explicit")
        assert config.finalizer == "explicit"

    def test_frozen(self) -> None:
        config = CatalogConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.finalizer = "changed"  # type: ignore[misc]


class TestConfigureLogging:
    def teardown_method(self) -> None:
        structlog.reset_defaults()
        configure_logging("warning")

    def test_explicit_level(self) -> None:
        configure_logging("debug")
        assert structlog.is_configured()

    def test_level_from_env(self) -> None:
        with patch.dict(os.environ, {"BUILD_CATALOG_LOG_LEVEL": "info"}):
            configure_logging()
        assert structlog.is_configured()

    def test_invalid_level(self) -> None:
        with pytest.raises(ValueError, match="Invalid log level: 'LOUD'"):
            configure_logging("loud")

    def test_package_import_installs_warning_default(self) -> None:
        structlog.reset_defaults()
        with patch.dict(os.environ, {}, clear=True):
            importlib.reload(build_catalog)
        assert structlog.is_configured()
        assert structlog.get_config()["wrapper_class"] is structlog.make_filtering_bound_logger(logging.WARNING)

    def test_package_import_keeps_existing_configuration(self) -> None:
        def marker(logger: object, method: str, event_dict: dict) -> dict:
            return event_dict

        structlog.reset_defaults()
        structlog.configure(processors=[marker])
        importlib.reload(build_catalog)
        assert structlog.get_config()["processors"] == [marker]
