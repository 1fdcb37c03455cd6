"""Get simulation: route a typed lookup to the matching fixture or report not-found."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import structlog

from build_catalog.errors import NotFoundError
from build_catalog.fixtures import FixtureSet, NamespacedName
from build_catalog.variants import Variant, VariantLike, as_variant

log = structlog.get_logger()


class ResolverStub:
    """Serve copies of fixtures for a configured set of variants.

    One resolver stands in for the whole store across a reconciliation pass:
    the controller may ask for a build, its execution, a pod and a service
    account through the same handle, and each variant is looked up on its own.
    Variants outside the configured set always come back as not found, even if
    the fixture set holds a matching object.
    """

    def __init__(self, fixtures: FixtureSet, variants: Iterable[VariantLike] | None = None) -> None:
        self._fixtures = fixtures
        self._variants: frozenset[Variant] | None = (
            frozenset(as_variant(v) for v in variants) if variants is not None else None
        )

    @property
    def variants(self) -> frozenset[Variant]:
        """Variants this resolver answers for."""
        if self._variants is None:
            return frozenset(Variant)
        return self._variants

    def resolve(self, key: NamespacedName, destination: VariantLike) -> Any:
        """Return a fresh copy of the fixture addressed by ``key`` and ``destination``.

        Args:
            key: Namespace and name of the object.
            destination: The variant, or its model class, the caller expects back.

        Raises:
            NotFoundError: If no fixture of that variant and identity is served.
            ConfigurationError: If ``destination`` is not a known variant.
        """
        variant = as_variant(destination)
        namespace, name = key

        found = None
        if variant in self.variants:
            found = self._fixtures.copy_of(variant, namespace, name)

        if found is None:
            log.debug("fixture_not_found", variant=variant.value, namespace=namespace, name=name)
            raise NotFoundError(variant, name, namespace or "")

        log.debug("fixture_resolved", variant=variant.value, namespace=namespace, name=name)
        return found

    __call__ = resolve
