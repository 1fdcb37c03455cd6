"""Catalog configuration: label keys, finalizer name, fixture path, logging setup."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

import structlog

DEFAULT_BUILD_LABEL = "build.example.dev/name"
DEFAULT_GENERATION_LABEL = "build.example.dev/generation"
DEFAULT_EXECUTION_LABEL = "buildrun.example.dev/name"
DEFAULT_FINALIZER = "build.example.dev/finalizer"


@dataclass(frozen=True)
class CatalogConfig:
    """Well-known keys used by builders and preset expectations, with environment variable overrides."""

    build_label: str = field(default_factory=lambda: os.environ.get("BUILD_CATALOG_BUILD_LABEL", DEFAULT_BUILD_LABEL))
    generation_label: str = field(
        default_factory=lambda: os.environ.get("BUILD_CATALOG_GENERATION_LABEL", DEFAULT_GENERATION_LABEL)
    )
    execution_label: str = field(
        default_factory=lambda: os.environ.get("BUILD_CATALOG_EXECUTION_LABEL", DEFAULT_EXECUTION_LABEL)
    )
    finalizer: str = field(default_factory=lambda: os.environ.get("BUILD_CATALOG_FINALIZER", DEFAULT_FINALIZER))
    fixtures_path: Path | None = field(
        default_factory=lambda: Path(p) if (p := os.environ.get("BUILD_CATALOG_FIXTURES")) else None
    )


def get_config() -> CatalogConfig:
    """Return catalog configuration with environment variable overrides applied."""
    return CatalogConfig()


def configure_logging(level: str | None = None) -> None:
    """Configure structlog for console output on a TTY and JSON otherwise, written to stderr.

    The level defaults to ``BUILD_CATALOG_LOG_LEVEL`` (``WARNING`` when unset) so that
    fixture traffic stays quiet unless a test run asks for it.
    """
    name = (level or os.environ.get("BUILD_CATALOG_LOG_LEVEL", "WARNING")).upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        msg = f"Invalid log level: {name!r}."
        raise ValueError(msg)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer() if sys.stderr.isatty() else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )
