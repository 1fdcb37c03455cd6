"""Seed state for the fake store: typed fixtures keyed by variant and identity."""

from __future__ import annotations

import copy
from collections.abc import Iterator
from typing import Any, NamedTuple, TypeVar

import structlog

from build_catalog.errors import ConfigurationError
from build_catalog.validation import validate_name, validate_namespace
from build_catalog.variants import Variant, identity, variant_of

log = structlog.get_logger()

T = TypeVar("T")


class NamespacedName(NamedTuple):
    """Lookup key addressing an object irrespective of its variant."""

    namespace: str
    name: str

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}" if self.namespace else self.name


def copy_fixture(obj: T) -> T:
    """Return a deep, type-preserving copy of ``obj``.

    Label maps, finalizer lists, condition lists and resource maps all get
    independent storage, so a caller mutating the copy can never reach the
    fixture it came from.
    """
    return copy.deepcopy(obj)


class FixtureSet:
    """Objects a test seeds into the fake store.

    Registration stores a private copy, so the test may keep mutating its own
    object afterwards without changing what the store serves. Reads always hand
    out a fresh copy.
    """

    def __init__(self, *fixtures: object) -> None:
        self._objects: dict[tuple[Variant, str, str], Any] = {}
        self.register(*fixtures)

    def register(self, *fixtures: object) -> FixtureSet:
        """Add fixtures to the set.

        Raises:
            ConfigurationError: If a fixture's class is not a known variant, its
                name or namespace is invalid, or a fixture with the same variant and
                identity is already registered.
        """
        for fixture in fixtures:
            variant = variant_of(fixture)
            namespace, name = identity(fixture)
            validate_namespace(namespace)
            validate_name(name)

            key = (variant, namespace, name)
            if key in self._objects:
                location = f"{namespace}/{name}" if namespace else name
                msg = f"Duplicate {variant.value} fixture {location!r}: identities must be unique per variant."
                raise ConfigurationError(msg)

            self._objects[key] = copy_fixture(fixture)
            log.debug("fixture_registered", variant=variant.value, namespace=namespace, name=name)
        return self

    def copy_of(self, variant: Variant, namespace: str, name: str) -> Any | None:
        """Return an independent copy of the matching fixture, or ``None``."""
        stored = self._objects.get((variant, namespace or "", name))
        if stored is None:
            return None
        return copy_fixture(stored)

    def variants(self) -> set[Variant]:
        """Return the variants that have at least one fixture."""
        return {variant for variant, _, _ in self._objects}

    def keys(self, variant: Variant) -> list[NamespacedName]:
        """Return the identities registered for ``variant``, sorted."""
        return sorted(NamespacedName(ns, name) for v, ns, name in self._objects if v == variant)

    def __contains__(self, obj: object) -> bool:
        try:
            variant = variant_of(obj)
            namespace, name = identity(obj)
        except ConfigurationError:
            return False
        return (variant, namespace, name) in self._objects

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[Any]:
        for stored in self._objects.values():
            yield copy_fixture(stored)
