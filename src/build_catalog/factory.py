"""Compose fixtures and expectations into Get/Update closures for a test scenario."""

from __future__ import annotations

from collections.abc import Iterable

from build_catalog.client import FakeClient, GetFunc, UpdateFunc
from build_catalog.config import CatalogConfig, get_config
from build_catalog.fixtures import FixtureSet
from build_catalog.interceptor import UpdateInterceptor, VerificationExpectation
from build_catalog.models import BuildDefinition, BuildSpec
from build_catalog.resolver import ResolverStub
from build_catalog.variants import Variant, VariantLike


class StubFactory:
    """Build the functions a fake client delegates to.

    The factory is configured once per test with the fixtures that exist; each
    call hands back a new closure, so several scenarios can share one fixture set.

    Example::

        factory = StubFactory(FixtureSet(build, execution))
        client = factory.client(
            variants=[Variant.BUILD_DEFINITION, Variant.BUILD_EXECUTION],
            status_expectations=[factory.expect_execution_status("Succeeded", "tr-1", ConditionStatus.TRUE)],
        )
        reconciler = BuildExecutionReconciler(client)
    """

    def __init__(self, fixtures: FixtureSet | None = None, config: CatalogConfig | None = None) -> None:
        self.fixtures = fixtures if fixtures is not None else FixtureSet()
        self.config = config if config is not None else get_config()

    # --- Generic closures ---

    def get_func(self, *variants: VariantLike) -> GetFunc:
        """Return a Get function serving the given variants (all of them when none are named)."""
        return ResolverStub(self.fixtures, variants or None).resolve

    def update_func(self, *expectations: VerificationExpectation) -> UpdateFunc:
        """Return an Update function that verifies writes against ``expectations``."""
        return UpdateInterceptor(*expectations).intercept

    def client(
        self,
        variants: Iterable[VariantLike] = (),
        expectations: Iterable[VerificationExpectation] = (),
        status_expectations: Iterable[VerificationExpectation] = (),
    ) -> FakeClient:
        """Return a ``FakeClient`` wired to this factory's fixtures.

        ``expectations`` apply to whole-object updates and ``status_expectations``
        to status subresource updates.
        """
        return FakeClient(
            get_func=self.get_func(*variants),
            update_func=self.update_func(*expectations),
            status_update_func=self.update_func(*status_expectations),
        )

    # --- Preset expectations ---

    def expect_registered_status(self, status: str, reason: str) -> VerificationExpectation:
        """Build status must carry ``status`` and a reason containing ``reason``."""
        return VerificationExpectation(Variant.BUILD_DEFINITION, status=status, reason_contains=reason)

    def expect_finalizer(self, finalizer: str | None = None, present: bool = True) -> VerificationExpectation:
        """Build finalizers must (or must not) include ``finalizer``; defaults to the configured one."""
        return VerificationExpectation(
            Variant.BUILD_DEFINITION,
            finalizer=finalizer or self.config.finalizer,
            finalizer_present=present,
        )

    def expect_no_finalizers(self) -> VerificationExpectation:
        return VerificationExpectation(Variant.BUILD_DEFINITION, no_finalizers=True)

    def expect_execution_status(
        self,
        reason: str,
        execution_ref: str | None,
        status: str | None,
        build_spec: BuildSpec | None = None,
        tolerate_empty_status: bool = False,
    ) -> VerificationExpectation:
        """Execution status must match exactly.

        A build-spec snapshot, when the write carries one, must equal ``build_spec``;
        an omitted ``build_spec`` expects an empty ``BuildSpec()``.
        """
        return VerificationExpectation(
            Variant.BUILD_EXECUTION,
            status=status,
            reason=reason,
            execution_ref=execution_ref,
            build_spec=build_spec if build_spec is not None else BuildSpec(),
            tolerate_empty_status=tolerate_empty_status,
        )

    def expect_execution_labels(self, build: BuildDefinition) -> VerificationExpectation:
        """Execution must be labelled with the owning build's name and generation."""
        return VerificationExpectation(
            Variant.BUILD_EXECUTION,
            labels={
                self.config.build_label: build.metadata.name,
                self.config.generation_label: str(build.metadata.generation),
            },
        )

    # --- Preset update closures ---

    def registered_status(self, status: str, reason: str) -> UpdateFunc:
        return self.update_func(self.expect_registered_status(status, reason))

    def finalizer_present(self, finalizer: str | None = None) -> UpdateFunc:
        return self.update_func(self.expect_finalizer(finalizer))

    def finalizers_absent(self) -> UpdateFunc:
        return self.update_func(self.expect_no_finalizers())

    def execution_status(
        self,
        reason: str,
        execution_ref: str | None,
        status: str | None,
        build_spec: BuildSpec | None = None,
        tolerate_empty_status: bool = False,
    ) -> UpdateFunc:
        return self.update_func(
            self.expect_execution_status(reason, execution_ref, status, build_spec, tolerate_empty_status)
        )

    def execution_labels(self, build: BuildDefinition) -> UpdateFunc:
        return self.update_func(self.expect_execution_labels(build))
