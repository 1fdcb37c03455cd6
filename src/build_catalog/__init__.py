"""Fixture catalog and fake store client for testing build reconciliation controllers.

Importing the package sets up structlog at ``BUILD_CATALOG_LOG_LEVEL`` (``WARNING``
when unset) unless the caller has already configured structlog; call
``build_catalog.config.configure_logging`` to change the level afterwards.
"""

import structlog

from build_catalog.client import FakeClient, StoreClient
from build_catalog.config import configure_logging
from build_catalog.errors import ConfigurationError, NotFoundError, VerificationError
from build_catalog.factory import StubFactory
from build_catalog.fixtures import FixtureSet, NamespacedName, copy_fixture
from build_catalog.interceptor import UNSET, UpdateInterceptor, VerificationExpectation, VerificationResult
from build_catalog.resolver import ResolverStub
from build_catalog.variants import Variant

if not structlog.is_configured():
    configure_logging()

__all__ = [
    "UNSET",
    "ConfigurationError",
    "FakeClient",
    "FixtureSet",
    "NamespacedName",
    "NotFoundError",
    "ResolverStub",
    "StoreClient",
    "StubFactory",
    "UpdateInterceptor",
    "Variant",
    "VerificationError",
    "VerificationExpectation",
    "VerificationResult",
    "configure_logging",
    "copy_fixture",
]
