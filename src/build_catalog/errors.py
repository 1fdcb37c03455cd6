"""Error taxonomy for the fake store: not-found, verification, configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from kubernetes.client.exceptions import ApiException

if TYPE_CHECKING:
    from build_catalog.interceptor import VerificationResult
    from build_catalog.variants import Variant


class NotFoundError(ApiException):
    """Raised by a Get when no fixture of the requested variant and identity exists.

    Subclasses the Kubernetes client's ``ApiException`` with a 404 status so that
    controller code written against the real client takes its normal
    "does not exist yet" path.
    """

    def __init__(self, variant: Variant, name: str, namespace: str = "") -> None:
        super().__init__(status=404, reason="NotFound")
        self.variant = variant
        self.name = name
        self.namespace = namespace

    def __str__(self) -> str:
        location = f"{self.namespace}/{self.name}" if self.namespace else self.name
        return f'{self.variant.value} "{location}" not found'


class VerificationError(AssertionError):
    """Raised when an intercepted write does not match its expectations.

    Derives from ``AssertionError`` so pytest reports it as a test failure rather
    than an error inside the code under test.
    """

    def __init__(self, result: VerificationResult) -> None:
        self.result = result
        super().__init__(result.describe())


class ConfigurationError(ValueError):
    """Raised for invalid test setup: duplicate fixtures, unknown variants, bad expectations."""
