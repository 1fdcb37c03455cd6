"""Load fixtures from YAML documents."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import BaseModel, ValidationError

from build_catalog.config import get_config
from build_catalog.errors import ConfigurationError
from build_catalog.fixtures import FixtureSet
from build_catalog.variants import Variant

log = structlog.get_logger()

# Pods and service accounts are built with the Kubernetes client models instead.
LOADABLE_VARIANTS = frozenset(
    {
        Variant.BUILD_DEFINITION,
        Variant.BUILD_EXECUTION,
        Variant.STRATEGY_DEFINITION,
        Variant.CLUSTER_STRATEGY_DEFINITION,
        Variant.TASK_EXECUTION,
    }
)


def load_fixture(source: str | Mapping[str, Any], variant: Variant | None = None) -> BaseModel:
    """Parse one fixture from YAML text or an already-parsed mapping.

    The document's ``kind`` selects the model; when ``variant`` is given the kind
    may be omitted, but must agree if present. ``apiVersion`` is accepted and ignored.

    Raises:
        ConfigurationError: If the document is not a mapping, names an unknown or
            unloadable kind, or does not validate against the model.
    """
    if isinstance(source, str):
        try:
            raw: Any = yaml.safe_load(source)
        except yaml.YAMLError as e:
            msg = f"Fixture document is not valid YAML: {e}"
            raise ConfigurationError(msg) from e
    else:
        raw = source
    if not isinstance(raw, Mapping):
        msg = f"Fixture document must be a mapping, got {type(raw).__name__}."
        raise ConfigurationError(msg)

    document = dict(raw)
    document.pop("apiVersion", None)
    kind = document.pop("kind", None)

    if kind is None:
        if variant is None:
            msg = "Fixture document has no 'kind' and no variant was given."
            raise ConfigurationError(msg)
        target = variant
    else:
        try:
            target = Variant(kind)
        except ValueError:
            valid = ", ".join(sorted(v.value for v in LOADABLE_VARIANTS))
            msg = f"Unknown fixture kind {kind!r}. Loadable kinds: {valid}"
            raise ConfigurationError(msg) from None
        if variant is not None and target is not variant:
            msg = f"Fixture kind {kind!r} does not match expected {variant.value}."
            raise ConfigurationError(msg)

    if target not in LOADABLE_VARIANTS:
        msg = f"{target.value} fixtures cannot be loaded from YAML; use the builders instead."
        raise ConfigurationError(msg)

    try:
        return target.model.model_validate(document)
    except ValidationError as e:
        msg = f"Invalid {target.value} fixture: {e}"
        raise ConfigurationError(msg) from e


def load_fixture_file(path: Path) -> list[BaseModel]:
    """Parse every document in a multi-document YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigurationError: If any document is invalid.
    """
    if not path.exists():
        msg = f"Fixture file not found: {path}."
        raise FileNotFoundError(msg)

    try:
        documents = list(yaml.safe_load_all(path.read_text()))
    except yaml.YAMLError as e:
        msg = f"Fixture file {path} is not valid YAML: {e}"
        raise ConfigurationError(msg) from e

    fixtures = [load_fixture(doc) for doc in documents if doc is not None]
    log.debug("fixture_file_loaded", path=str(path), count=len(fixtures))
    return fixtures


def load_fixture_set(path: Path) -> FixtureSet:
    """Load a YAML file and register every document in a new ``FixtureSet``."""
    return FixtureSet(*load_fixture_file(path))


def load_default_fixtures() -> FixtureSet:
    """Load the fixture file named by ``BUILD_CATALOG_FIXTURES``, or return an empty set."""
    path = get_config().fixtures_path
    if path is None:
        return FixtureSet()
    return load_fixture_set(path)
