"""Runtime settings read from the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

import structlog

from spfx_externalize.rules.base import DEFAULT_CDN_URL

log = structlog.get_logger("spfx_externalize.config")


def _parse_timeout(raw: str | None) -> float | None:
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError:
        log.warning("config.invalid_rule_timeout", value=raw)
        return None
    return value if value > 0 else None


@dataclass(frozen=True)
class Settings:
    """Settings for one invocation.

    Environment variables:
        SPFX_EXTERNALIZE_LOG_LEVEL    — log level (default: WARNING)
        SPFX_EXTERNALIZE_LOG_FORMAT   — console | json (default: console)
        SPFX_EXTERNALIZE_OUTPUT       — json | md | text (default: text)
        SPFX_EXTERNALIZE_CDN_URL      — base URL for proposed paths (default: https://unpkg.com)
        SPFX_EXTERNALIZE_RULE_TIMEOUT — per-rule timeout in seconds (default: none)
    """

    log_level: str = "WARNING"
    log_format: str = "console"
    output: str = "text"
    cdn_url: str = DEFAULT_CDN_URL
    rule_timeout: float | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        return cls(
            log_level=env.get("SPFX_EXTERNALIZE_LOG_LEVEL", "WARNING").upper(),
            log_format=env.get("SPFX_EXTERNALIZE_LOG_FORMAT", "console").lower(),
            output=env.get("SPFX_EXTERNALIZE_OUTPUT", "text").lower(),
            cdn_url=env.get("SPFX_EXTERNALIZE_CDN_URL", DEFAULT_CDN_URL),
            rule_timeout=_parse_timeout(env.get("SPFX_EXTERNALIZE_RULE_TIMEOUT")),
        )
