"""PnPjs modules — externalized as globals, with require() edits for their peers."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from spfx_externalize.models import (
    ExternalizeEntry,
    FileEdit,
    Project,
    RuleResult,
    SourceFile,
    module_root,
)
from spfx_externalize.rules.base import DEFAULT_CDN_URL, cdn_path

log = structlog.get_logger("spfx_externalize.rules")

_TSLIB_FALLBACK_VERSION = "1.10.0"


@dataclass(frozen=True)
class PnPModule:
    key: str
    global_name: str
    global_dependencies: tuple[str, ...]
    file: str


# Order matters: dependencies before dependents.
PNP_MODULES: tuple[PnPModule, ...] = (
    PnPModule("@pnp/pnpjs", "pnp", ("tslib",), "dist/pnpjs.es5.umd.bundle.min.js"),
    PnPModule("@pnp/logging", "pnp.logging", ("tslib",), "dist/logging.es5.umd.min.js"),
    PnPModule(
        "@pnp/common", "pnp.common", ("@pnp/logging", "tslib"), "dist/common.es5.umd.min.js"
    ),
    PnPModule(
        "@pnp/odata",
        "pnp.odata",
        ("@pnp/common", "@pnp/logging", "tslib"),
        "dist/odata.es5.umd.min.js",
    ),
    PnPModule(
        "@pnp/sp",
        "pnp.sp",
        ("@pnp/logging", "@pnp/common", "@pnp/odata", "tslib"),
        "dist/sp.es5.umd.min.js",
    ),
    PnPModule(
        "@pnp/graph",
        "pnp.graph",
        ("@pnp/logging", "@pnp/common", "@pnp/odata", "tslib"),
        "dist/graph.es5.umd.min.js",
    ),
)

_BY_KEY = {m.key: m for m in PNP_MODULES}


class PnPJsRule:
    name = "pnpjs"

    def __init__(self, cdn_url: str = DEFAULT_CDN_URL) -> None:
        self.cdn_url = cdn_url

    async def visit(self, project: Project) -> RuleResult:
        versions = self._resolve_versions(project)
        if not versions:
            return RuleResult()

        entries = [
            ExternalizeEntry(
                key=m.key,
                path=cdn_path(self.cdn_url, m.key, versions[m.key], m.file),
                global_name=m.global_name,
                global_dependencies=m.global_dependencies,
            )
            for m in PNP_MODULES
            if m.key in versions
        ]
        tslib_version = project.dependency_version("tslib") or _TSLIB_FALLBACK_VERSION
        entries.append(
            ExternalizeEntry(
                key="tslib",
                path=cdn_path(self.cdn_url, "tslib", tslib_version, "tslib.js"),
                global_name="tslib",
            )
        )

        suggestions: list[FileEdit] = []
        for source in project.iter_sources():
            suggestions.extend(self._file_edits(source, versions))
        return RuleResult(entries=entries, suggestions=suggestions)

    @staticmethod
    def _resolve_versions(project: Project) -> dict[str, str]:
        """Versions of every PnPjs module to externalize, peers included.

        A peer that is not a direct dependency inherits the version of the
        module that needs it; PnPjs packages are released in lockstep.
        """
        versions: dict[str, str] = {}
        for m in reversed(PNP_MODULES):
            version = versions.get(m.key) or project.dependency_version(m.key)
            if version is None:
                continue
            versions[m.key] = version
            for dep in m.global_dependencies:
                if dep in _BY_KEY and dep not in versions:
                    versions[dep] = project.dependency_version(dep) or version
        if versions:
            log.debug("rule.pnpjs_modules", modules=sorted(versions))
        return versions

    @staticmethod
    def _file_edits(source: SourceFile, versions: dict[str, str]) -> list[FileEdit]:
        referenced = {module_root(i.module) for i in source.imports()}
        used = [m for m in PNP_MODULES if m.key in versions and m.key in referenced]
        if not used:
            return []

        needed: list[str] = []
        for m in used:
            for dep in m.global_dependencies:
                if dep not in needed and dep not in referenced:
                    needed.append(dep)
        # tslib is loaded first by the runtime, keep it on top
        needed.sort(key=lambda d: d != "tslib")
        return [
            FileEdit(
                path=source.path,
                action="add",
                target_value=f'require("{dep}");',
                description="Add the following require statements above the PnPjs imports",
            )
            for dep in needed
        ]
