"""Tests for the project model and findings."""

from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest

from spfx_externalize.models import (
    ExternalizeEntry,
    PackageJson,
    Project,
    SourceFile,
    module_root,
    plain_version,
)

# ── plain_version / module_root ──────────────────────────────────────────


class TestPlainVersion:
    @pytest.mark.parametrize(
        "spec,expected",
        [
            ("3.6.0", "3.6.0"),
            ("^3.6.0", "3.6.0"),
            ("~1.2.3", "1.2.3"),
            (">=1.0.0", "1.0.0"),
            ("v2.0.0", "2.0.0"),
            ("1.0.0-beta.1", "1.0.0-beta.1"),
        ],
    )
    def test_pinnable(self, spec, expected):
        assert plain_version(spec) == expected

    @pytest.mark.parametrize(
        "spec",
        [None, "", "latest", "*", "file:../lib", "github:org/repo", ">=1.0.0 <2.0.0", "1.x"],
    )
    def test_not_pinnable(self, spec):
        assert plain_version(spec) is None


class TestModuleRoot:
    def test_plain(self):
        assert module_root("jquery") == "jquery"

    def test_subpath(self):
        assert module_root("jquery-ui/ui/widgets/datepicker") == "jquery-ui"

    def test_scoped(self):
        assert module_root("@pnp/sp") == "@pnp/sp"

    def test_scoped_subpath(self):
        assert module_root("@pnp/sp/webs") == "@pnp/sp"


# ── SourceFile.imports ───────────────────────────────────────────────────

_SOURCE = """\
import * as $ from 'jquery';
import { sp } from "@pnp/sp";
import 'jquery-ui';
import {
  a,
  b
} from '@pnp/odata';
const _ = require('lodash');
require("tslib");
"""


class TestSourceImports:
    def test_modules_in_source_order(self):
        imports = SourceFile("src/a.ts", _SOURCE).imports()
        assert [i.module for i in imports] == [
            "jquery",
            "@pnp/sp",
            "jquery-ui",
            "@pnp/odata",
            "lodash",
            "tslib",
        ]

    def test_side_effect_flags(self):
        imports = SourceFile("src/a.ts", _SOURCE).imports()
        assert [i.side_effect_only for i in imports] == [False, False, True, False, False, True]

    def test_line_numbers(self):
        imports = SourceFile("src/a.ts", _SOURCE).imports()
        assert [i.line for i in imports] == [1, 2, 3, 4, 8, 9]

    def test_statement_text(self):
        imports = SourceFile("src/a.ts", _SOURCE).imports()
        assert imports[0].text == "import * as $ from 'jquery';"
        assert imports[2].text == "import 'jquery-ui';"
        assert imports[4].text == "const _ = require('lodash');"
        assert imports[5].text == 'require("tslib");'

    def test_indented_import(self):
        imports = SourceFile("src/a.ts", "  import 'select2';\n").imports()
        assert imports[0].module == "select2"
        assert imports[0].side_effect_only

    def test_no_imports(self):
        assert SourceFile("src/a.ts", "export const x = 1;\n").imports() == []

    def test_references(self):
        source = SourceFile("src/a.ts", "import { Web } from '@pnp/sp/webs';\n")
        assert source.references("@pnp/sp")
        assert not source.references("@pnp/odata")


# ── Project ──────────────────────────────────────────────────────────────


class TestProject:
    def test_name_is_root_folder(self, make_project):
        assert make_project(root=Path("/work/my-webpart")).name == "my-webpart"

    def test_dependency_version(self, make_project):
        project = make_project(dependencies={"jquery": "^3.6.0", "moment": "latest"})
        assert project.dependency_version("jquery") == "3.6.0"
        assert project.dependency_version("moment") is None
        assert project.dependency_version("lodash") is None

    def test_dependencies_read_only(self):
        package = PackageJson(dependencies={"jquery": "3.6.0"})
        with pytest.raises(TypeError):
            package.dependencies["lodash"] = "4.17.21"  # type: ignore[index]

    def test_frozen(self, make_project):
        project = make_project()
        with pytest.raises(dataclasses.FrozenInstanceError):
            project.version = "1.0.0"  # type: ignore[misc]

    def test_source_files_copied(self):
        sources = {"src/a.ts": SourceFile("src/a.ts", "")}
        project = Project(
            root=Path("/p"), version="1.9.1", package_json=PackageJson(), source_files=sources
        )
        sources["src/b.ts"] = SourceFile("src/b.ts", "")
        assert list(project.source_files) == ["src/a.ts"]

    def test_iter_sources_sorted(self, make_project):
        project = make_project(sources={"src/b.ts": "", "src/a.ts": ""})
        assert [s.path for s in project.iter_sources()] == ["src/a.ts", "src/b.ts"]


class TestEntries:
    def test_entry_defaults(self):
        entry = ExternalizeEntry(key="jquery", path="https://cdn/jquery.js")
        assert entry.global_name is None
        assert entry.global_dependencies is None
