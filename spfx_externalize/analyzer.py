"""Entry sequence: locate root → check version → load → run rules → aggregate → render."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from pathlib import Path
from typing import Any

import structlog

from spfx_externalize.aggregator import aggregate
from spfx_externalize.core.config import Settings
from spfx_externalize.engine import run_rules
from spfx_externalize.exceptions import (
    NoProjectRootError,
    NoVersionError,
    UnsupportedVersionError,
)
from spfx_externalize.loader import detect_version, load_project, locate_root
from spfx_externalize.models import Project
from spfx_externalize.report import OutputFormat, render_report
from spfx_externalize.rules import Rule, default_rules

log = structlog.get_logger("spfx_externalize.analyzer")

SUPPORTED_VERSIONS: tuple[str, ...] = (
    "1.0.0",
    "1.0.1",
    "1.0.2",
    "1.1.0",
    "1.1.1",
    "1.1.3",
    "1.2.0",
    "1.3.0",
    "1.3.1",
    "1.3.2",
    "1.3.4",
    "1.4.0",
    "1.4.1",
    "1.5.0",
    "1.5.1",
    "1.6.0",
    "1.7.0",
    "1.7.1",
    "1.8.0",
    "1.8.1",
    "1.8.2",
    "1.9.1",
)


def check_version(version: str | None) -> str:
    if not version:
        raise NoVersionError()
    if version not in SUPPORTED_VERSIONS:
        raise UnsupportedVersionError(version, list(SUPPORTED_VERSIONS))
    return version


async def analyze(
    project: Project,
    rules: Sequence[Rule],
    fmt: OutputFormat | str | None,
    timeout: float | None = None,
    generated_on: date | None = None,
) -> dict[str, Any] | str:
    """Run *rules* against an already loaded project and render the report."""
    results = await run_rules(rules, project, timeout=timeout)
    merged = aggregate(results)
    log.info(
        "analyzer.aggregated",
        project=project.name,
        entries=len(merged.entries),
        suggestions=len(merged.suggestions),
    )
    return render_report(merged, fmt, project.name, generated_on)


async def externalize(
    start_dir: str | Path,
    fmt: OutputFormat | str | None = None,
    rules: Sequence[Rule] | None = None,
    settings: Settings | None = None,
    generated_on: date | None = None,
) -> dict[str, Any] | str:
    """Full pipeline for the project containing *start_dir*.

    Raises a subclass of :class:`ExternalizeError` on the first failure;
    nothing is rendered in that case.
    """
    settings = settings or Settings.from_env()

    root = locate_root(start_dir)
    if root is None:
        raise NoProjectRootError(str(start_dir))

    version = check_version(detect_version(root))

    log.info("analyzer.collecting_project", root=str(root), version=version)
    project = load_project(root, version)

    if rules is None:
        rules = default_rules(settings.cdn_url)
    return await analyze(
        project,
        rules,
        fmt if fmt is not None else settings.output,
        timeout=settings.rule_timeout,
        generated_on=generated_on,
    )
