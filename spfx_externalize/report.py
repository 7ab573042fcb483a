"""Report rendering — structured (json), markdown and plain text.

The structured report is the canonical form; the other two are rendered
from it so the externals block is byte-identical across formats.
"""

from __future__ import annotations

import json
from datetime import date
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from spfx_externalize.aggregator import group_edits
from spfx_externalize.models import AggregateResult, EditAction, FileEdit

CONFIG_JSON_PATH = "config/config.json"


class OutputFormat(str, Enum):
    JSON = "json"
    MD = "md"
    TEXT = "text"

    @classmethod
    def parse(cls, value: str | None) -> OutputFormat:
        """Unrecognized or missing values fall back to plain text."""
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.TEXT


class _Schema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ExternalDescriptor(_Schema):
    path: str
    global_name: str = Field(alias="globalName")
    global_dependencies: list[str] | None = Field(default=None, alias="globalDependencies")


class ExternalConfiguration(_Schema):
    externals: dict[str, str | ExternalDescriptor]


class EditItem(_Schema):
    path: str
    action: Literal["add", "remove"]
    target_value: str = Field(alias="targetValue")
    description: str | None = None


class StructuredReport(_Schema):
    external_configuration: ExternalConfiguration = Field(alias="externalConfiguration")
    edits: list[EditItem]

    def dump(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


def _dumps(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


def build_report(result: AggregateResult) -> StructuredReport:
    externals: dict[str, str | ExternalDescriptor] = {}
    for entry in result.entries:
        if not entry.global_name:
            externals[entry.key] = entry.path
        else:
            externals[entry.key] = ExternalDescriptor(
                path=entry.path,
                global_name=entry.global_name,
                global_dependencies=(
                    list(entry.global_dependencies)
                    if entry.global_dependencies is not None
                    else None
                ),
            )
    return StructuredReport(
        external_configuration=ExternalConfiguration(externals=externals),
        edits=[
            EditItem(
                path=e.path,
                action=e.action,
                target_value=e.target_value,
                description=e.description,
            )
            for e in result.suggestions
        ],
    )


def render_json(result: AggregateResult) -> dict[str, Any]:
    return build_report(result).dump()


def render_text(result: AggregateResult) -> str:
    lines = [
        f"In the {CONFIG_JSON_PATH} file update the externals property to:",
        "",
        _dumps(build_report(result).dump()),
    ]
    return "\n".join(lines).strip()


def _file_sections(suggestions: list[FileEdit], action: EditAction) -> list[str]:
    lines: list[str] = []
    for group in group_edits(suggestions, action):
        path = group[0].path
        lines += ["", f"#### [{path}]({path})", ""]
        texts: list[str] = []
        for edit in group:
            text = edit.description or edit.action
            if text not in texts:
                texts.append(text)
        lines += texts
        lines += ["", "```JavaScript"]
        lines += [edit.target_value for edit in group]
        lines.append("```")
    return lines


def render_markdown(
    result: AggregateResult,
    project_name: str,
    generated_on: date | None = None,
) -> str:
    report = build_report(result).dump()
    generated_on = generated_on or date.today()
    lines = [
        f"# Externalizing dependencies of project {project_name}",
        "",
        f"Date: {generated_on.isoformat()}",
        "",
        "## Findings",
        "",
        "### Modify files",
        "",
        f"#### [config.json]({CONFIG_JSON_PATH})",
        "",
        "Replace the externals property (or add if not defined) with",
        "",
        "```json",
        _dumps(report["externalConfiguration"]),
        "```",
    ]
    lines += _file_sections(result.suggestions, "add")
    lines += _file_sections(result.suggestions, "remove")
    return "\n".join(lines) + "\n"


def render_report(
    result: AggregateResult,
    fmt: OutputFormat | str | None,
    project_name: str,
    generated_on: date | None = None,
) -> dict[str, Any] | str:
    """Render *result* in the requested format (plain text when unrecognized)."""
    fmt = fmt if isinstance(fmt, OutputFormat) else OutputFormat.parse(fmt)
    if fmt is OutputFormat.JSON:
        return render_json(result)
    if fmt is OutputFormat.MD:
        return render_markdown(result, project_name, generated_on)
    return render_text(result)
