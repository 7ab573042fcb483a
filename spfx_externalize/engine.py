"""Rule engine — run every rule concurrently against one project, fail fast."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

import structlog

from spfx_externalize.exceptions import RuleFailureError
from spfx_externalize.models import Project, RuleResult
from spfx_externalize.rules.base import Rule

log = structlog.get_logger("spfx_externalize.engine")


def _rule_name(rule: Rule) -> str:
    return getattr(rule, "name", None) or type(rule).__name__


_TIMED_OUT = object()


async def _run_visit(rule: Rule, project: Project, timeout: float | None) -> object:
    """Await ``rule.visit``; ``_TIMED_OUT`` when *timeout* expired first.

    Only the deadline counts as a timeout: a TimeoutError raised by the
    rule itself propagates unchanged.
    """
    if timeout is None:
        return await rule.visit(project)
    task = asyncio.ensure_future(rule.visit(project))
    try:
        done, _ = await asyncio.wait({task}, timeout=timeout)
    finally:
        if not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
    if not done:
        return _TIMED_OUT
    return task.result()


async def _visit(rule: Rule, project: Project, timeout: float | None) -> RuleResult:
    name = _rule_name(rule)
    try:
        result = await _run_visit(rule, project, timeout)
        if result is _TIMED_OUT:
            log.warning("engine.rule_timeout", rule=name, timeout=timeout)
            raise RuleFailureError(name, TimeoutError(f"timed out after {timeout}s"))
        if not isinstance(result, RuleResult):
            raise TypeError(f"visit returned {type(result).__name__}, expected RuleResult")
    except (asyncio.CancelledError, RuleFailureError):
        raise
    except Exception as exc:
        log.warning("engine.rule_failed", rule=name, error=str(exc))
        raise RuleFailureError(name, exc) from exc

    log.debug(
        "engine.rule_done",
        rule=name,
        entries=len(result.entries),
        suggestions=len(result.suggestions),
    )
    return result


async def run_rules(
    rules: Sequence[Rule],
    project: Project,
    timeout: float | None = None,
) -> list[RuleResult]:
    """Visit *project* with every rule concurrently.

    Results come back in registration order, not completion order. The
    first failure cancels the rules still running and raises
    :class:`RuleFailureError`; nothing from the other rules is returned.
    """
    if not rules:
        return []

    tasks = [asyncio.ensure_future(_visit(rule, project, timeout)) for rule in rules]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
