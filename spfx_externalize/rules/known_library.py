"""Libraries that publish a UMD build and can be mapped straight to a CDN path."""

from __future__ import annotations

from spfx_externalize.models import ExternalizeEntry, Project, RuleResult
from spfx_externalize.rules.base import DEFAULT_CDN_URL, cdn_path

# package -> UMD file inside the published package
KNOWN_LIBRARIES: dict[str, str] = {
    "angular": "angular.min.js",
    "axios": "dist/axios.min.js",
    "chart.js": "dist/Chart.min.js",
    "d3": "dist/d3.min.js",
    "handlebars": "dist/handlebars.min.js",
    "jquery": "dist/jquery.min.js",
    "jszip": "dist/jszip.min.js",
    "knockout": "build/output/knockout-latest.js",
    "lodash": "lodash.min.js",
    "moment": "min/moment.min.js",
    "underscore": "underscore-min.js",
    "vue": "dist/vue.min.js",
}


class KnownLibraryRule:
    name = "known-library"

    def __init__(self, cdn_url: str = DEFAULT_CDN_URL) -> None:
        self.cdn_url = cdn_url

    async def visit(self, project: Project) -> RuleResult:
        entries: list[ExternalizeEntry] = []
        for package in project.package_json.dependencies:
            file = KNOWN_LIBRARIES.get(package)
            if file is None:
                continue
            version = project.dependency_version(package)
            if version is None:
                continue
            entries.append(
                ExternalizeEntry(key=package, path=cdn_path(self.cdn_url, package, version, file))
            )
        return RuleResult(entries=entries)
