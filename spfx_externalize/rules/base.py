"""Rule interface and helpers shared by the built-in rules."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from spfx_externalize.models import Project, RuleResult

DEFAULT_CDN_URL = "https://unpkg.com"

# Loaded by the SharePoint Framework runtime itself; never externalized.
_RUNTIME_PROVIDED = frozenset(
    {
        "react",
        "react-dom",
        "office-ui-fabric-react",
        "@fluentui/react",
    }
)


@runtime_checkable
class Rule(Protocol):
    """Interface that every rule must satisfy.

    ``visit`` must not mutate the project and must return its own
    :class:`RuleResult`. Raising aborts the whole run.
    """

    name: str

    async def visit(self, project: Project) -> RuleResult: ...


def is_runtime_provided(package: str) -> bool:
    return package.startswith("@microsoft/") or package in _RUNTIME_PROVIDED


def cdn_path(cdn_url: str, package: str, version: str, file: str) -> str:
    """``https://unpkg.com/jquery@3.6.0/dist/jquery.min.js``"""
    return f"{cdn_url.rstrip('/')}/{package}@{version}/{file}"
