"""Built-in externalization rules.

The default rule set is a closed list; registration order decides which
rule wins when two rules propose the same module.
"""

from spfx_externalize.rules.base import DEFAULT_CDN_URL, Rule, cdn_path, is_runtime_provided
from spfx_externalize.rules.config_externals import ConfigExternalsRule
from spfx_externalize.rules.jquery_plugin import JQueryPluginRule
from spfx_externalize.rules.known_library import KnownLibraryRule
from spfx_externalize.rules.pnpjs import PnPJsRule


def default_rules(cdn_url: str = DEFAULT_CDN_URL) -> list[Rule]:
    """Rules run by ``spfx-externalize``, in registration order."""
    return [
        ConfigExternalsRule(),
        PnPJsRule(cdn_url),
        KnownLibraryRule(cdn_url),
        JQueryPluginRule(cdn_url),
    ]


__all__ = [
    "DEFAULT_CDN_URL",
    "ConfigExternalsRule",
    "JQueryPluginRule",
    "KnownLibraryRule",
    "PnPJsRule",
    "Rule",
    "cdn_path",
    "default_rules",
    "is_runtime_provided",
]
