"""Project model — read-only snapshot of an SPFx project."""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

# ^1.2.3, ~1.2.3, >=1.2.3, =1.2.3, v1.2.3, 1.2.3-beta.1
_PLAIN_VERSION_RE = re.compile(
    r"^\s*(?:\^|~|>=|=|v)*\s*(\d+\.\d+\.\d+(?:-[0-9A-Za-z.-]+)?)\s*$"
)

# import x from 'mod';  import { a,\n b } from "mod";  import type T from 'mod'
_IMPORT_FROM_RE = re.compile(
    r"^[ \t]*import\s+(?:type\s+)?[^'\";]*?\s+from\s+(['\"])([^'\"]+)\1[ \t]*;?",
    re.MULTILINE,
)
# import 'mod';
_IMPORT_BARE_RE = re.compile(r"^[ \t]*import\s+(['\"])([^'\"]+)\1[ \t]*;?", re.MULTILINE)
# require('mod')
_REQUIRE_RE = re.compile(r"\brequire\(\s*(['\"])([^'\"]+)\1\s*\)")


def plain_version(spec: str | None) -> str | None:
    """Strip range operators from a dependency spec.

    Returns None for anything that is not a plain version (tags, ``file:``,
    git URLs, ``*``, compound ranges).
    """
    if not spec:
        return None
    m = _PLAIN_VERSION_RE.match(spec)
    return m.group(1) if m else None


def module_root(specifier: str) -> str:
    """Package name of a module specifier: ``@pnp/sp/webs`` → ``@pnp/sp``."""
    parts = specifier.split("/")
    if specifier.startswith("@") and len(parts) >= 2:
        return "/".join(parts[:2])
    return parts[0]


def _frozen(mapping: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class ImportStatement:
    """A module reference found in a source file."""

    module: str
    text: str
    line: int
    side_effect_only: bool = False  # import 'mod'; / bare require('mod')


@dataclass(frozen=True)
class SourceFile:
    path: str  # POSIX path relative to the project root
    source: str

    def imports(self) -> list[ImportStatement]:
        """Scan ES imports and require() calls, in source order."""
        found: list[tuple[int, ImportStatement]] = []
        for regex, side_effect in ((_IMPORT_FROM_RE, False), (_IMPORT_BARE_RE, True)):
            for m in regex.finditer(self.source):
                found.append((m.start(), self._statement(m, side_effect)))
        for m in _REQUIRE_RE.finditer(self.source):
            line_start = self.source.rfind("\n", 0, m.start()) + 1
            line_end = self.source.find("\n", m.end())
            line_text = self.source[line_start : line_end if line_end >= 0 else None].strip()
            bare = line_text.rstrip(";").strip() == m.group(0)
            found.append(
                (
                    m.start(),
                    ImportStatement(
                        module=m.group(2),
                        text=line_text,
                        line=self.source.count("\n", 0, m.start()) + 1,
                        side_effect_only=bare,
                    ),
                )
            )
        found.sort(key=lambda item: item[0])
        return [stmt for _, stmt in found]

    def references(self, package: str) -> bool:
        """True if any import or require targets *package* or one of its subpaths."""
        return any(module_root(i.module) == package for i in self.imports())

    def _statement(self, m: re.Match[str], side_effect: bool) -> ImportStatement:
        return ImportStatement(
            module=m.group(2),
            text=m.group(0).strip(),
            line=self.source.count("\n", 0, m.start()) + 1,
            side_effect_only=side_effect,
        )


@dataclass(frozen=True)
class PackageJson:
    name: str | None = None
    version: str | None = None
    dependencies: Mapping[str, str] = field(default_factory=dict)
    dev_dependencies: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "dependencies", _frozen(self.dependencies))
        object.__setattr__(self, "dev_dependencies", _frozen(self.dev_dependencies))


@dataclass(frozen=True)
class YoRcJson:
    """``.yo-rc.json`` — only the generator version is read."""

    version: str | None = None
    environment: str | None = None


@dataclass(frozen=True)
class ConfigJson:
    """``config/config.json`` — bundle configuration including current externals."""

    externals: Mapping[str, Any] = field(default_factory=dict)
    bundles: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "externals", _frozen(self.externals))
        object.__setattr__(self, "bundles", _frozen(self.bundles))


@dataclass(frozen=True)
class Project:
    """Immutable snapshot of one project, shared by every rule in a run."""

    root: Path
    version: str | None
    package_json: PackageJson
    yo_rc_json: YoRcJson | None = None
    config_json: ConfigJson | None = None
    source_files: Mapping[str, SourceFile] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "source_files", _frozen(self.source_files))

    @property
    def name(self) -> str:
        return self.root.name

    def has_dependency(self, package: str) -> bool:
        return package in self.package_json.dependencies

    def dependency_version(self, package: str) -> str | None:
        """Plain version of a runtime dependency, or None if absent or not pinnable."""
        return plain_version(self.package_json.dependencies.get(package))

    def iter_sources(self) -> Iterator[SourceFile]:
        for path in sorted(self.source_files):
            yield self.source_files[path]
