"""Error taxonomy for the externalize analyzer.

Every error that aborts a run carries an :class:`ErrorKind` and a stable
integer ``code`` so calling tooling can branch on it.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    NO_PROJECT_ROOT = "no_project_root"
    UNSUPPORTED_VERSION = "unsupported_version"
    NO_VERSION = "no_version"
    RULE_FAILURE = "rule_failure"
    PROJECT_LOAD = "project_load"


class ExternalizeError(Exception):
    """Base exception for all analyzer errors."""

    kind: ErrorKind
    code: int = 1


class NoProjectRootError(ExternalizeError):
    """Raised when no project root folder can be found."""

    kind = ErrorKind.NO_PROJECT_ROOT
    code = 1

    def __init__(self, start_dir: str):
        self.start_dir = start_dir
        super().__init__("Couldn't find project root folder")


class UnsupportedVersionError(ExternalizeError):
    """Raised when the project version is not in the supported allowlist."""

    kind = ErrorKind.UNSUPPORTED_VERSION
    code = 2

    def __init__(self, version: str, supported: list[str]):
        self.version = version
        self.supported = supported
        super().__init__(
            "Externalizing dependencies of SharePoint Framework projects of version "
            f"{version} is not supported. Supported versions are {', '.join(supported)}"
        )


class NoVersionError(ExternalizeError):
    """Raised when the project version cannot be determined."""

    kind = ErrorKind.NO_VERSION
    code = 3

    def __init__(self) -> None:
        super().__init__(
            "Unable to determine the version of the current SharePoint Framework project"
        )


class RuleFailureError(ExternalizeError):
    """Raised when a rule fails; wraps the underlying cause."""

    kind = ErrorKind.RULE_FAILURE
    code = 4

    def __init__(self, rule_name: str, cause: BaseException):
        self.rule_name = rule_name
        self.cause = cause
        detail = str(cause) or type(cause).__name__
        super().__init__(f"Rule '{rule_name}' failed: {detail}")


class ProjectLoadError(ExternalizeError):
    """Raised when a project manifest cannot be read or parsed."""

    kind = ErrorKind.PROJECT_LOAD
    code = 5

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Unable to load {path}: {reason}")
