"""Tests for merging rule results."""

from __future__ import annotations

from spfx_externalize.aggregator import aggregate, group_edits
from spfx_externalize.models import AggregateResult, ExternalizeEntry, FileEdit, RuleResult


def _edit(path, action="add", value="x"):
    return FileEdit(path=path, action=action, target_value=value)


class TestAggregate:
    def test_empty(self):
        assert aggregate([]) == AggregateResult()

    def test_first_registered_rule_wins(self):
        edit = FileEdit(
            path="webpart.ts", action="add", target_value="import * as _ from 'lodash';"
        )
        rule_a = RuleResult(entries=[ExternalizeEntry(key="lodash", path="https://cdn/lodash.js")])
        rule_b = RuleResult(
            entries=[ExternalizeEntry(key="lodash", path="https://other/lodash.js")],
            suggestions=[edit],
        )
        merged = aggregate([rule_a, rule_b])
        assert merged.entries == [ExternalizeEntry(key="lodash", path="https://cdn/lodash.js")]
        assert merged.suggestions == [edit]

    def test_conflicting_global_fields_not_merged(self):
        first = ExternalizeEntry(key="@pnp/sp", path="a.js", global_name="pnp.sp")
        later = ExternalizeEntry(
            key="@pnp/sp", path="b.js", global_name="pnp", global_dependencies=("tslib",)
        )
        merged = aggregate([RuleResult(entries=[first]), RuleResult(entries=[later])])
        assert merged.entries == [first]

    def test_order_is_first_appearance(self):
        merged = aggregate(
            [
                RuleResult(entries=[ExternalizeEntry("b", "1"), ExternalizeEntry("a", "1")]),
                RuleResult(entries=[ExternalizeEntry("c", "2"), ExternalizeEntry("b", "2")]),
            ]
        )
        assert [(e.key, e.path) for e in merged.entries] == [("b", "1"), ("a", "1"), ("c", "2")]

    def test_duplicates_within_one_rule(self):
        merged = aggregate(
            [RuleResult(entries=[ExternalizeEntry("a", "1"), ExternalizeEntry("a", "2")])]
        )
        assert merged.entries == [ExternalizeEntry("a", "1")]

    def test_suggestions_never_deduplicated(self):
        edit = _edit("src/a.ts")
        merged = aggregate([RuleResult(suggestions=[edit]), RuleResult(suggestions=[edit])])
        assert merged.suggestions == [edit, edit]


class TestGroupEdits:
    def test_partition_by_path(self):
        edits = [
            _edit("src/a.ts", value="1"),
            _edit("src/b.ts", value="2"),
            _edit("src/a.ts", "remove", value="3"),
            _edit("src/a.ts", value="4"),
        ]
        groups = group_edits(edits, "add")
        assert [[e.target_value for e in g] for g in groups] == [["1", "4"], ["2"]]

    def test_covers_each_matching_edit_once(self):
        edits = [_edit(f"src/{i % 3}.ts", "add" if i % 2 else "remove", str(i)) for i in range(12)]
        groups = group_edits(edits, "add")
        flat = [e for g in groups for e in g]
        assert sorted(flat, key=lambda e: int(e.target_value)) == [
            e for e in edits if e.action == "add"
        ]
        assert all(len({e.path for e in g}) == 1 for g in groups)
        assert len({g[0].path for g in groups}) == len(groups)

    def test_no_matching_action(self):
        assert group_edits([_edit("src/a.ts")], "remove") == []
