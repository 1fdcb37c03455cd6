"""Update simulation: verify intended writes against expectations, then acknowledge them."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Final, cast

import structlog

from build_catalog.errors import ConfigurationError, VerificationError
from build_catalog.models import BuildExecution, BuildSpec
from build_catalog.variants import (
    STATUS_VIEWS,
    Variant,
    VariantLike,
    as_variant,
    finalizers_of,
    identity,
    labels_of,
    variant_of,
)

log = structlog.get_logger()


class _Unset(Enum):
    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Final = _Unset.UNSET


@dataclass(frozen=True)
class VerificationExpectation:
    """Expected field values for writes of one variant.

    Comparisons left at ``UNSET`` are skipped. ``None`` is a real expected value:
    ``execution_ref=None`` asserts that the reference is unset.

    Attributes:
        variant: Variant (or its model class) this expectation applies to.
        status: Expected outcome state (condition status, or pod phase).
        reason: Expected reason, compared for equality.
        reason_contains: Substring the reason must contain.
        execution_ref: Expected name of the execution that produced the status.
        labels: Label key/value pairs that must be present with exactly these values.
        finalizer: Finalizer whose presence is checked.
        finalizer_present: Whether ``finalizer`` must be present (True) or absent (False).
        no_finalizers: Require the finalizer list to be empty.
        build_spec: Expected build-spec snapshot, compared only when the write carries one.
        tolerate_empty_status: Skip status comparisons while the status state is unset.
    """

    variant: VariantLike
    status: str | None | _Unset = UNSET
    reason: str | None | _Unset = UNSET
    reason_contains: str | None = None
    execution_ref: str | None | _Unset = UNSET
    labels: dict[str, str] = field(default_factory=dict)
    finalizer: str | None = None
    finalizer_present: bool = True
    no_finalizers: bool = False
    build_spec: BuildSpec | None | _Unset = UNSET
    tolerate_empty_status: bool = False

    def __post_init__(self) -> None:
        variant = as_variant(self.variant)
        object.__setattr__(self, "variant", variant)
        object.__setattr__(self, "labels", dict(self.labels))

        view = STATUS_VIEWS.get(variant)
        checks_status = self.status is not UNSET or self.reason is not UNSET or self.reason_contains is not None
        if checks_status and view is None:
            msg = f"{variant.value} has no status; status, reason and reason_contains cannot be checked."
            raise ConfigurationError(msg)
        if self.execution_ref is not UNSET and (view is None or view.execution_ref is None):
            msg = f"{variant.value} status has no execution reference to check."
            raise ConfigurationError(msg)
        if self.build_spec is not UNSET and variant is not Variant.BUILD_EXECUTION:
            msg = f"Build-spec snapshots are only carried by {Variant.BUILD_EXECUTION.value}, not {variant.value}."
            raise ConfigurationError(msg)

    def evaluate(self, obj: Any) -> list[str]:
        """Return a description of every comparison that fails for ``obj``."""
        failures: list[str] = []
        variant = cast(Variant, self.variant)

        view = STATUS_VIEWS.get(variant)
        if view is not None:
            state = view.state(obj)
            if not (self.tolerate_empty_status and not state):
                _compare(failures, "status.state", self.status, state)
                reason = view.reason(obj)
                _compare(failures, "status.reason", self.reason, reason)
                if self.reason_contains is not None and self.reason_contains not in (reason or ""):
                    failures.append(f"status.reason: expected to contain {self.reason_contains!r}, got {reason!r}")
                if view.execution_ref is not None:
                    _compare(failures, "status.executionRef", self.execution_ref, view.execution_ref(obj))

        if isinstance(obj, BuildExecution) and obj.status.build_spec is not None:
            _compare(failures, "status.buildSpec", self.build_spec, obj.status.build_spec)

        labels = labels_of(obj)
        for key, expected in sorted(self.labels.items()):
            if key not in labels:
                failures.append(f"metadata.labels[{key!r}]: expected {expected!r}, label missing")
            elif labels[key] != expected:
                failures.append(f"metadata.labels[{key!r}]: expected {expected!r}, got {labels[key]!r}")

        finalizers = finalizers_of(obj)
        if self.finalizer is not None and (self.finalizer in finalizers) != self.finalizer_present:
            wanted = "present" if self.finalizer_present else "absent"
            failures.append(f"metadata.finalizers: expected {self.finalizer!r} to be {wanted}, got {finalizers!r}")
        if self.no_finalizers and finalizers:
            failures.append(f"metadata.finalizers: expected none, got {finalizers!r}")

        return failures


def _compare(failures: list[str], path: str, expected: Any, actual: Any) -> None:
    if expected is UNSET:
        return
    if expected != actual:
        failures.append(f"{path}: expected {_render(expected)}, got {_render(actual)}")


def _render(value: Any) -> str:
    # Condition statuses read better as their wire value than as enum reprs.
    return repr(value.value) if isinstance(value, Enum) else repr(value)


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of checking one write."""

    variant: Variant
    namespace: str
    name: str
    failures: tuple[str, ...] = ()

    @property
    def passed(self) -> bool:
        return not self.failures

    def describe(self) -> str:
        location = f"{self.namespace}/{self.name}" if self.namespace else self.name
        if self.passed:
            return f"{self.variant.value} {location!r} matched its expectations"
        detail = "\n  ".join(self.failures)
        return f"{self.variant.value} {location!r} update did not match expectations:\n  {detail}"


class UpdateInterceptor:
    """Check each write against the expectations registered for its variant.

    Writes of a variant with no expectation pass through unchecked, which lets a
    test verify only the objects it cares about. A passing write is acknowledged
    as a real store would; a failing one raises ``VerificationError`` at the
    point of the write.
    """

    def __init__(self, *expectations: VerificationExpectation) -> None:
        self._expectations: dict[Variant, list[VerificationExpectation]] = defaultdict(list)
        for expectation in expectations:
            variant = cast(Variant, expectation.variant)
            self._expectations[variant].append(expectation)

    def verify(self, obj: Any) -> VerificationResult:
        """Evaluate the expectations for ``obj`` and return the structured result.

        Raises:
            ConfigurationError: If ``obj`` is not an instance of a known variant model.
        """
        variant = variant_of(obj)
        namespace, name = identity(obj)
        failures: list[str] = []
        for expectation in self._expectations.get(variant, ()):
            failures.extend(expectation.evaluate(obj))
        return VerificationResult(variant=variant, namespace=namespace, name=name, failures=tuple(failures))

    def intercept(self, obj: Any) -> None:
        """Verify a write and acknowledge it.

        Raises:
            VerificationError: If any expectation for the object's variant fails.
        """
        result = self.verify(obj)
        if not result.passed:
            log.warning(
                "update_verification_failed",
                variant=result.variant.value,
                namespace=result.namespace,
                name=result.name,
                failures=list(result.failures),
            )
            raise VerificationError(result)

        if result.variant in self._expectations:
            log.debug("update_verified", variant=result.variant.value, namespace=result.namespace, name=result.name)
        else:
            log.debug("update_passthrough", variant=result.variant.value, namespace=result.namespace, name=result.name)

    __call__ = intercept
