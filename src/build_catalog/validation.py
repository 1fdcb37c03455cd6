"""Name and namespace validation for lookup keys and registered fixtures."""

from __future__ import annotations

import re

from build_catalog.errors import ConfigurationError

# RFC 1123 label: lowercase alphanumeric and hyphens, 1-63 chars, starts/ends with alphanumeric
_NAMESPACE_RE = re.compile(r"^[a-z0-9]([a-z0-9\-]{0,61}[a-z0-9])?$")

# RFC 1123 subdomain: dot-separated labels, at most 253 chars
_NAME_RE = re.compile(r"^[a-z0-9]([a-z0-9\-]*[a-z0-9])?(\.[a-z0-9]([a-z0-9\-]*[a-z0-9])?)*$")
_MAX_NAME_LENGTH = 253


def validate_namespace(namespace: str | None) -> None:
    """Validate a namespace against RFC 1123. ``None`` and ``""`` mean cluster scope."""
    if not namespace:
        return
    if not _NAMESPACE_RE.match(namespace):
        msg = f"Invalid namespace: {namespace!r}. Must be a valid RFC 1123 label."
        raise ConfigurationError(msg)


def validate_name(name: str) -> None:
    """Validate an object name against RFC 1123 subdomain rules."""
    if not name or len(name) > _MAX_NAME_LENGTH or not _NAME_RE.match(name):
        msg = f"Invalid name: {name!r}. Must be a valid RFC 1123 subdomain."
        raise ConfigurationError(msg)
