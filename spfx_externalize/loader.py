"""Project discovery and loading — root, version and the in-memory model."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import structlog

from spfx_externalize.exceptions import ProjectLoadError
from spfx_externalize.models import (
    ConfigJson,
    PackageJson,
    Project,
    SourceFile,
    YoRcJson,
    plain_version,
)

log = structlog.get_logger("spfx_externalize.loader")

GENERATOR_KEY = "@microsoft/generator-sharepoint"
SOURCE_SUFFIXES = frozenset({".ts", ".tsx", ".js", ".jsx"})
_SKIP_DIRS = frozenset({"node_modules", "lib", "dist", "temp"})


def locate_root(start_dir: str | Path) -> Path | None:
    """Walk up from *start_dir* to the first directory holding a package.json.

    A *start_dir* that is not an existing directory has no root.
    """
    start = Path(start_dir).resolve()
    if not start.is_dir():
        return None
    for candidate in (start, *start.parents):
        if (candidate / "package.json").is_file():
            return candidate
    return None


def _read_json(path: Path) -> dict[str, Any] | None:
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8-sig"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ProjectLoadError(str(path), str(exc)) from exc
    if not isinstance(data, dict):
        raise ProjectLoadError(str(path), "expected a JSON object")
    return data


def detect_version(root: Path) -> str | None:
    """SPFx version from .yo-rc.json, falling back to @microsoft/sp-core-library."""
    yo_rc = _read_json(root / ".yo-rc.json") or {}
    generator = yo_rc.get(GENERATOR_KEY)
    if isinstance(generator, dict) and isinstance(generator.get("version"), str):
        return generator["version"]

    package = _read_json(root / "package.json") or {}
    for section in ("dependencies", "devDependencies"):
        deps = package.get(section)
        if isinstance(deps, dict):
            version = plain_version(deps.get("@microsoft/sp-core-library"))
            if version:
                return version
    return None


def _string_map(data: dict[str, Any], key: str) -> dict[str, str]:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        return {}
    return {k: v for k, v in value.items() if isinstance(v, str)}


def _load_sources(root: Path) -> dict[str, SourceFile]:
    src = root / "src"
    files: dict[str, SourceFile] = {}
    if not src.is_dir():
        return files
    for path in sorted(src.rglob("*")):
        if path.suffix not in SOURCE_SUFFIXES or not path.is_file():
            continue
        rel = path.relative_to(root)
        if _SKIP_DIRS.intersection(rel.parts):
            continue
        files[rel.as_posix()] = SourceFile(
            path=rel.as_posix(),
            source=path.read_text(encoding="utf-8", errors="replace"),
        )
    return files


def load_project(root: Path, version: str | None = None) -> Project:
    package = _read_json(root / "package.json")
    if package is None:
        raise ProjectLoadError(str(root / "package.json"), "file not found")

    yo_rc_data = _read_json(root / ".yo-rc.json")
    yo_rc = None
    if yo_rc_data is not None:
        generator = yo_rc_data.get(GENERATOR_KEY)
        if not isinstance(generator, dict):
            generator = {}
        yo_rc = YoRcJson(
            version=generator.get("version"),
            environment=generator.get("environment"),
        )

    config_data = _read_json(root / "config" / "config.json")
    config = None
    if config_data is not None:
        externals = config_data.get("externals") or {}
        if not isinstance(externals, dict):
            raise ProjectLoadError(
                str(root / "config" / "config.json"), "externals must be an object"
            )
        bundles = config_data.get("bundles")
        config = ConfigJson(
            externals=externals, bundles=bundles if isinstance(bundles, dict) else {}
        )

    project = Project(
        root=root,
        version=version,
        package_json=PackageJson(
            name=package.get("name"),
            version=package.get("version"),
            dependencies=_string_map(package, "dependencies"),
            dev_dependencies=_string_map(package, "devDependencies"),
        ),
        yo_rc_json=yo_rc,
        config_json=config,
        source_files=_load_sources(root),
    )
    log.debug(
        "loader.project_loaded",
        root=str(root),
        dependencies=len(project.package_json.dependencies),
        source_files=len(project.source_files),
    )
    return project
