"""jQuery plugins — exposed on the jQuery global and loaded with require()."""

from __future__ import annotations

from spfx_externalize.models import ExternalizeEntry, FileEdit, Project, RuleResult, module_root
from spfx_externalize.rules.base import DEFAULT_CDN_URL, cdn_path

# Stylesheets shipped with a plugin stay bundled
_STYLE_SUFFIXES = (".css", ".scss", ".sass", ".less")

JQUERY_PLUGINS: dict[str, str] = {
    "bootstrap": "dist/js/bootstrap.min.js",
    "datatables.net": "js/jquery.dataTables.min.js",
    "jquery-ui": "dist/jquery-ui.min.js",
    "jquery-validation": "dist/jquery.validate.min.js",
    "select2": "dist/js/select2.min.js",
    "slick-carousel": "slick/slick.min.js",
}


class JQueryPluginRule:
    """Plugins attach themselves to ``jQuery`` and are only usable once jQuery is loaded.

    A side-effect ``import 'plugin';`` is dropped by the bundler once the
    plugin is external, so each one is replaced with ``require('plugin');``.
    """

    name = "jquery-plugin"

    def __init__(self, cdn_url: str = DEFAULT_CDN_URL) -> None:
        self.cdn_url = cdn_url

    async def visit(self, project: Project) -> RuleResult:
        if project.dependency_version("jquery") is None:
            return RuleResult()

        entries: list[ExternalizeEntry] = []
        for package, file in JQUERY_PLUGINS.items():
            version = project.dependency_version(package)
            if version is None:
                continue
            entries.append(
                ExternalizeEntry(
                    key=package,
                    path=cdn_path(self.cdn_url, package, version, file),
                    global_name="jQuery",
                    global_dependencies=("jquery",),
                )
            )
        if not entries:
            return RuleResult()

        plugins = {e.key for e in entries}
        suggestions: list[FileEdit] = []
        for source in project.iter_sources():
            required: set[str] = set()
            for stmt in source.imports():
                package = module_root(stmt.module)
                if package not in plugins or not stmt.side_effect_only:
                    continue
                if stmt.text.startswith("require(") or stmt.module.endswith(_STYLE_SUFFIXES):
                    continue
                suggestions.append(
                    FileEdit(
                        path=source.path,
                        action="remove",
                        target_value=stmt.text,
                        description="Remove the side-effect import of the externalized plugin",
                    )
                )
                if package not in required:
                    required.add(package)
                    suggestions.append(
                        FileEdit(
                            path=source.path,
                            action="add",
                            target_value=f'require("{package}");',
                            description="Load the externalized plugin with require",
                        )
                    )
        return RuleResult(entries=entries, suggestions=suggestions)
