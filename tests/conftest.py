"""Shared pytest fixtures for spfx-externalize tests."""

import json
from pathlib import Path

import pytest

from spfx_externalize.models import ConfigJson, PackageJson, Project, SourceFile

WEBPART_PATH = "src/webparts/helloWorld/HelloWorldWebPart.ts"

WEBPART_SOURCE = """\
import { Version } from '@microsoft/sp-core-library';
import { sp } from "@pnp/sp";
import * as $ from 'jquery';
import 'jquery-ui';

export default class HelloWorldWebPart {}
"""


@pytest.fixture
def make_project():
    """Build an in-memory Project without touching disk."""

    def _make(
        dependencies=None,
        sources=None,
        externals=None,
        version="1.9.1",
        root=Path("/work/hello-world"),
    ):
        return Project(
            root=root,
            version=version,
            package_json=PackageJson(name=root.name, dependencies=dependencies or {}),
            config_json=ConfigJson(externals=externals) if externals is not None else None,
            source_files={
                path: SourceFile(path=path, source=text) for path, text in (sources or {}).items()
            },
        )

    return _make


@pytest.fixture
def spfx_project(tmp_path):
    """A minimal SPFx 1.9.1 project on disk."""
    root = tmp_path / "hello-world"
    (root / "config").mkdir(parents=True)
    webpart = root / WEBPART_PATH
    webpart.parent.mkdir(parents=True)

    (root / "package.json").write_text(
        json.dumps(
            {
                "name": "hello-world",
                "version": "0.0.1",
                "dependencies": {
                    "@microsoft/sp-core-library": "1.9.1",
                    "@pnp/sp": "^1.3.11",
                    "jquery": "^3.6.0",
                    "jquery-ui": "1.13.2",
                    "lodash": "4.17.21",
                    "react": "16.8.5",
                },
                "devDependencies": {"@microsoft/sp-build-web": "1.9.1"},
            }
        )
    )
    (root / ".yo-rc.json").write_text(
        json.dumps({"@microsoft/generator-sharepoint": {"version": "1.9.1", "environment": "spo"}})
    )
    (root / "config" / "config.json").write_text(
        json.dumps(
            {
                "bundles": {"hello-world-web-part": {"components": []}},
                "externals": {"lodash": "https://cdn.example.com/lodash.js"},
            }
        )
    )
    webpart.write_text(WEBPART_SOURCE)
    return root
