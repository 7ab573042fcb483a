"""Carry over externals already declared in config/config.json."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog

from spfx_externalize.models import ExternalizeEntry, Project, RuleResult, module_root
from spfx_externalize.rules.base import is_runtime_provided

log = structlog.get_logger("spfx_externalize.rules")


def _entry_from_config(key: str, value: Any) -> ExternalizeEntry:
    if isinstance(value, str):
        return ExternalizeEntry(key=key, path=value)

    if not isinstance(value, Mapping) or not isinstance(value.get("path"), str):
        raise ValueError(
            f"externals entry '{key}' in config/config.json must be a path string "
            "or an object with a string 'path'"
        )

    global_name = value.get("globalName")
    if global_name is not None and not isinstance(global_name, str):
        raise ValueError(f"externals entry '{key}' has a non-string globalName")

    deps = value.get("globalDependencies")
    if deps is not None and (
        not isinstance(deps, list) or not all(isinstance(d, str) for d in deps)
    ):
        raise ValueError(f"externals entry '{key}' has invalid globalDependencies")

    return ExternalizeEntry(
        key=key,
        path=value["path"],
        global_name=global_name,
        global_dependencies=tuple(deps) if deps is not None else None,
    )


class ConfigExternalsRule:
    """Keep externals the project already declares, as long as the package is still used.

    CDN-only libraries are often installed just as typings (``@types/jquery``),
    so a package imported from source counts as used even without a dependency.
    """

    name = "config-externals"

    async def visit(self, project: Project) -> RuleResult:
        if project.config_json is None:
            return RuleResult()

        entries: list[ExternalizeEntry] = []
        for key, value in project.config_json.externals.items():
            package = module_root(key)
            if is_runtime_provided(package):
                log.debug("rule.runtime_provided_external", rule=self.name, key=key)
                continue
            if not project.has_dependency(package) and not any(
                source.references(package) for source in project.iter_sources()
            ):
                log.debug("rule.stale_external", rule=self.name, key=key)
                continue
            entries.append(_entry_from_config(key, value))
        return RuleResult(entries=entries)
