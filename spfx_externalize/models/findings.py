"""Findings and edit suggestions produced by rules."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

EditAction = Literal["add", "remove"]


@dataclass(frozen=True)
class ExternalizeEntry:
    """One proposed externalization.

    ``key`` is the module identifier and the deduplication key. Without a
    ``global_name`` the entry is a plain module → path mapping.
    """

    key: str
    path: str  # CDN URL or bundle path
    global_name: str | None = None
    global_dependencies: tuple[str, ...] | None = None


@dataclass(frozen=True)
class FileEdit:
    """A textual change a human must apply to one source file."""

    path: str
    action: EditAction
    target_value: str
    description: str | None = None


@dataclass
class RuleResult:
    """What a single rule returns from ``visit``."""

    entries: list[ExternalizeEntry] = field(default_factory=list)
    suggestions: list[FileEdit] = field(default_factory=list)


@dataclass
class AggregateResult:
    """Deduplicated entries plus every suggestion, across all rules."""

    entries: list[ExternalizeEntry] = field(default_factory=list)
    suggestions: list[FileEdit] = field(default_factory=list)
