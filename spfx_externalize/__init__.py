"""spfx-externalize: find SPFx dependencies that can be loaded as externals."""

__version__ = "0.1.0"

from spfx_externalize.aggregator import aggregate, group_edits
from spfx_externalize.analyzer import SUPPORTED_VERSIONS, analyze, externalize
from spfx_externalize.engine import run_rules
from spfx_externalize.exceptions import (
    ErrorKind,
    ExternalizeError,
    NoProjectRootError,
    NoVersionError,
    ProjectLoadError,
    RuleFailureError,
    UnsupportedVersionError,
)
from spfx_externalize.models import (
    AggregateResult,
    ExternalizeEntry,
    FileEdit,
    Project,
    RuleResult,
)
from spfx_externalize.report import OutputFormat, render_report
from spfx_externalize.rules import Rule, default_rules

__all__ = [
    "SUPPORTED_VERSIONS",
    "AggregateResult",
    "ErrorKind",
    "ExternalizeEntry",
    "ExternalizeError",
    "FileEdit",
    "NoProjectRootError",
    "NoVersionError",
    "OutputFormat",
    "Project",
    "ProjectLoadError",
    "Rule",
    "RuleFailureError",
    "RuleResult",
    "UnsupportedVersionError",
    "aggregate",
    "analyze",
    "default_rules",
    "externalize",
    "group_edits",
    "render_report",
    "run_rules",
]
