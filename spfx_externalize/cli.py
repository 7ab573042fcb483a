"""CLI entry point: spfx-externalize.

    spfx-externalize                    # plain text report for the current project
    spfx-externalize -o md > report.md  # markdown report
    spfx-externalize -o json --path ./my-webpart
"""

from __future__ import annotations

import asyncio
import json
import sys

import click

from spfx_externalize.analyzer import externalize
from spfx_externalize.core.config import Settings
from spfx_externalize.core.logging import setup_logging
from spfx_externalize.exceptions import ExternalizeError
from spfx_externalize.report import OutputFormat

_PREVIEW_NOTICE = (
    "This command is currently in preview. "
    "Review the proposed changes before applying them."
)


@click.command()
@click.option(
    "-o",
    "--output",
    default=None,
    help="Report format: json, md or text (default: text)",
)
@click.option(
    "--path",
    "start_dir",
    default=".",
    type=click.Path(file_okay=False),
    help="Directory inside the SPFx project",
)
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
@click.option("--debug", is_flag=True, help="Debug logging")
def main(output: str | None, start_dir: str, verbose: bool, debug: bool) -> None:
    """Externalize SharePoint Framework project dependencies."""
    settings = Settings.from_env()
    level = "DEBUG" if debug else "INFO" if verbose else settings.log_level
    setup_logging(level, settings.log_format)

    fmt = OutputFormat.parse(output if output is not None else settings.output)
    if fmt is not OutputFormat.JSON or verbose:
        click.echo(_PREVIEW_NOTICE, err=True)

    try:
        report = asyncio.run(externalize(start_dir, fmt=fmt, settings=settings))
    except ExternalizeError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(exc.code)

    if isinstance(report, dict):
        click.echo(json.dumps(report, indent=2, ensure_ascii=False))
    else:
        click.echo(report)


if __name__ == "__main__":
    main()
