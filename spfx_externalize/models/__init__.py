"""Data models — the project snapshot and the findings produced from it."""

from spfx_externalize.models.findings import (
    AggregateResult,
    EditAction,
    ExternalizeEntry,
    FileEdit,
    RuleResult,
)
from spfx_externalize.models.project import (
    ConfigJson,
    ImportStatement,
    PackageJson,
    Project,
    SourceFile,
    YoRcJson,
    module_root,
    plain_version,
)

__all__ = [
    "AggregateResult",
    "ConfigJson",
    "EditAction",
    "ExternalizeEntry",
    "FileEdit",
    "ImportStatement",
    "PackageJson",
    "Project",
    "RuleResult",
    "SourceFile",
    "YoRcJson",
    "module_root",
    "plain_version",
]
