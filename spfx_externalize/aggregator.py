"""Merge per-rule results into one deduplicated result set."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from spfx_externalize.models import AggregateResult, EditAction, FileEdit, RuleResult


def aggregate(results: Iterable[RuleResult]) -> AggregateResult:
    """Union of all rule results.

    Entries are deduplicated by ``key``; the first one seen in registration
    order wins. Suggestions are concatenated as-is.
    """
    merged = AggregateResult()
    seen: set[str] = set()
    for result in results:
        for entry in result.entries:
            if entry.key in seen:
                continue
            seen.add(entry.key)
            merged.entries.append(entry)
        merged.suggestions.extend(result.suggestions)
    return merged


def group_edits(suggestions: Sequence[FileEdit], action: EditAction) -> list[list[FileEdit]]:
    """One list per distinct path among edits with *action*, in first-seen order."""
    groups: dict[str, list[FileEdit]] = {}
    for edit in suggestions:
        if edit.action != action:
            continue
        groups.setdefault(edit.path, []).append(edit)
    return list(groups.values())
