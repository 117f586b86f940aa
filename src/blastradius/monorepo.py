"""Monorepo detection and package-boundary resolution.

Supports npm/yarn ``workspaces``, ``pnpm-workspace.yaml``, ``lerna.json``,
``nx.json`` and ``turbo.json``.  Markers are checked in one fixed priority
order and the first one present decides the monorepo type and the workspace
patterns:

    pnpm-workspace.yaml > package.json workspaces > lerna.json > nx.json > turbo.json

A directory is a workspace iff it holds a package.json with a ``name``.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import networkx as nx
import yaml

from blastradius.globs import matches_any
from blastradius.models import MonorepoInfo, MonorepoType, Workspace, to_posix
from blastradius.observability import LogLike, get_log

_MANIFEST = "package.json"
_DEFAULT_PATTERNS = ["packages/*"]
_NX_PATTERNS = ["packages/*", "apps/*", "libs/*"]
_DEPENDENCY_FIELDS = ("dependencies", "devDependencies", "peerDependencies")
_ENTRY_FALLBACKS = ("src/index.ts", "src/index.js", "index.ts", "index.js")
_RESOLVE_SUFFIXES = (".ts", ".tsx", ".js", ".jsx", "/index.ts", "/index.tsx", "/index.js")
_EXPORT_CONDITIONS = ("import", "require", "default")


# ---------------------------------------------------------------------------
# Manifest helpers
# ---------------------------------------------------------------------------

def _read_json(path: Path, log: LogLike | None = None) -> dict[str, Any] | None:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return None
    except (OSError, ValueError) as e:
        if log is not None:
            log.warning("Unreadable manifest %s: %s", path, e)
        return None
    return data if isinstance(data, dict) else None


def _pnpm_patterns(path: Path, log: LogLike) -> list[str]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        log.warning("Unreadable %s: %s", path.name, e)
        return list(_DEFAULT_PATTERNS)
    packages = data.get("packages") if isinstance(data, dict) else None
    if isinstance(packages, list) and packages:
        return [str(p) for p in packages]
    return list(_DEFAULT_PATTERNS)


def package_name_from_import(specifier: str) -> str:
    """``@scope/pkg/sub`` -> ``@scope/pkg``; ``pkg/sub`` -> ``pkg``."""
    parts = specifier.split("/")
    if specifier.startswith("@") and len(parts) >= 2:
        return f"{parts[0]}/{parts[1]}"
    return parts[0]


# ---------------------------------------------------------------------------
# Detection
# ---------------------------------------------------------------------------

def _detect_marker(
    root: Path, manifest: dict[str, Any], log: LogLike,
) -> tuple[MonorepoType, list[str]] | None:
    pnpm = root / "pnpm-workspace.yaml"
    if pnpm.is_file():
        return MonorepoType.PNPM, _pnpm_patterns(pnpm, log)

    workspaces = manifest.get("workspaces")
    if workspaces:
        if isinstance(workspaces, dict):
            workspaces = workspaces.get("packages", [])
        if isinstance(workspaces, list):
            return MonorepoType.NPM, [str(p) for p in workspaces]

    lerna = root / "lerna.json"
    if lerna.is_file():
        packages = (_read_json(lerna, log) or {}).get("packages")
        patterns = [str(p) for p in packages] if isinstance(packages, list) else list(_DEFAULT_PATTERNS)
        return MonorepoType.LERNA, patterns

    if (root / "nx.json").is_file():
        return MonorepoType.NX, list(_NX_PATTERNS)

    if (root / "turbo.json").is_file():
        # Turbo relies on package-manager workspaces, checked above
        return MonorepoType.TURBO, []

    return None


def _find_workspaces(root: Path, patterns: list[str], log: LogLike) -> list[Workspace]:
    include = [p.strip() for p in patterns if p.strip() and not p.strip().startswith("!")]
    exclude = [p.strip()[1:].rstrip("/") for p in patterns if p.strip().startswith("!")]

    workspaces: list[Workspace] = []
    seen: set[str] = set()
    for pattern in include:
        pattern = pattern.rstrip("/")
        if pattern.startswith("./"):
            pattern = pattern[2:]
        try:
            matches = sorted(root.glob(pattern))
        except (ValueError, NotImplementedError) as e:
            log.warning("Invalid workspace pattern %r: %s", pattern, e)
            continue
        for match in matches:
            if not match.is_dir() or "node_modules" in match.parts:
                continue
            rel = match.relative_to(root).as_posix()
            if rel in seen or matches_any(rel, exclude):
                continue
            manifest = _read_json(match / _MANIFEST, log)
            if not manifest or not manifest.get("name"):
                continue
            seen.add(rel)
            workspaces.append(Workspace(
                name=str(manifest["name"]),
                path=match,
                relative_path=rel,
                manifest=manifest,
            ))
    return workspaces


def _resolve_internal_dependencies(workspaces: list[Workspace], package_map: dict[str, Workspace]) -> None:
    for ws in workspaces:
        dep_names: list[str] = []
        for key in _DEPENDENCY_FIELDS:
            deps = ws.manifest.get(key)
            if isinstance(deps, dict):
                dep_names.extend(deps)
        for dep in dict.fromkeys(dep_names):
            if dep == ws.name or dep not in package_map:
                continue
            ws.internal_dependencies.append(dep)
            package_map[dep].depended_by.append(ws.name)


def detect_monorepo(root_path: str | Path, log: LogLike | None = None) -> MonorepoInfo:
    """Detect the workspace layout under ``root_path``.  Never raises."""
    log = get_log("monorepo", log)
    root = Path(root_path).resolve()
    info = MonorepoInfo(is_monorepo=False, root_path=root)

    manifest = _read_json(root / _MANIFEST, log)
    if manifest is None:
        return info

    marker = _detect_marker(root, manifest, log)
    if marker is None:
        return info

    info.is_monorepo = True
    info.type, patterns = marker
    info.workspaces = _find_workspaces(root, patterns, log)
    info.package_map = {ws.name: ws for ws in info.workspaces}
    _resolve_internal_dependencies(info.workspaces, info.package_map)
    log.debug("Detected %s monorepo with %d workspaces", info.type.value, len(info.workspaces))
    return info


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

def get_package_for_file(file_path: str | Path, info: MonorepoInfo) -> Workspace | None:
    """Workspace containing ``file_path``; the deepest package directory wins."""
    if not info.is_monorepo:
        return None
    absolute = Path(os.path.normpath(info.root_path / file_path))
    best: Workspace | None = None
    for ws in info.workspaces:
        try:
            absolute.relative_to(ws.path)
        except ValueError:
            continue
        if best is None or len(ws.path.parts) > len(best.path.parts):
            best = ws
    return best


def get_affected_packages(changed_packages: list[str], info: MonorepoInfo) -> set[str]:
    """Changed packages plus every transitive dependent."""
    affected = set(changed_packages)
    G = info.package_graph()
    for name in changed_packages:
        if name in G:
            affected |= nx.descendants(G, name)
    return affected


# ---------------------------------------------------------------------------
# Package import resolution
# ---------------------------------------------------------------------------

def _resolve_file(path: Path) -> Path | None:
    if path.is_file():
        return path
    for suffix in _RESOLVE_SUFFIXES:
        candidate = Path(str(path) + suffix)
        if candidate.is_file():
            return candidate
    return None


def _export_target(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        for condition in _EXPORT_CONDITIONS:
            target = _export_target(value.get(condition))
            if target:
                return target
    if isinstance(value, list):
        for item in value:
            target = _export_target(item)
            if target:
                return target
    return None


def _match_exports(exports: Any, subpath: str) -> str | None:
    # A string, array, or bare condition object only describes the root entry
    is_subpath_map = isinstance(exports, dict) and any(k.startswith(".") for k in exports)
    if not is_subpath_map:
        return _export_target(exports) if subpath == "." else None

    if subpath in exports:
        return _export_target(exports[subpath])

    for key, value in exports.items():
        if key.count("*") != 1:
            continue
        prefix, suffix = key.split("*")
        if len(subpath) < len(prefix) + len(suffix):
            continue
        if subpath.startswith(prefix) and subpath.endswith(suffix):
            captured = subpath[len(prefix):len(subpath) - len(suffix)]
            target = _export_target(value)
            if target:
                return target.replace("*", captured)
    return None


def _relative_to_root(path: Path, root: Path) -> str | None:
    rel = to_posix(os.path.relpath(path, root))
    if rel == ".." or rel.startswith("../"):
        return None
    return rel


def resolve_package_import(specifier: str, info: MonorepoInfo) -> str | None:
    """Resolve ``@scope/pkg`` or ``@scope/pkg/sub`` to a root-relative file."""
    specifier = specifier.rstrip("/")
    name = package_name_from_import(specifier)
    ws = info.package_map.get(name)
    if ws is None:
        return None
    manifest = ws.manifest or _read_json(ws.path / _MANIFEST)
    if manifest is None:
        return None

    subpath = "." if specifier == name else "." + specifier[len(name):]

    # 1. "exports" map
    exports = manifest.get("exports")
    if exports is not None:
        target = _match_exports(exports, subpath)
        if target:
            found = _resolve_file(ws.path / target)
            if found is not None:
                return _relative_to_root(found, info.root_path)

    # 2. Legacy entry points / direct file mapping
    if subpath == ".":
        entries = [manifest.get("main"), manifest.get("module"), *_ENTRY_FALLBACKS]
        for entry in entries:
            if not isinstance(entry, str) or not entry:
                continue
            found = _resolve_file(ws.path / entry)
            if found is not None:
                return _relative_to_root(found, info.root_path)
        return None

    relative_file = subpath[2:]
    found = _resolve_file(ws.path / relative_file) or _resolve_file(ws.path / "src" / relative_file)
    if found is not None:
        return _relative_to_root(found, info.root_path)
    return None
