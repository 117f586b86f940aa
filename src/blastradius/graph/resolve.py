"""Import specifier resolution to project-relative files."""

from __future__ import annotations

import os
from pathlib import Path

from blastradius import defaults
from blastradius.models import MonorepoInfo, to_posix
from blastradius.monorepo import package_name_from_import, resolve_package_import

# ESM-style TypeScript imports name the emitted file: './a.js' -> 'a.ts'
_ESM_SOURCE_SUFFIXES = {
    ".js": (".ts", ".tsx"),
    ".jsx": (".tsx",),
}


def _is_relative(specifier: str) -> bool:
    return specifier.startswith((".", "/"))


def _within_root(path: str, root: Path) -> str | None:
    rel = to_posix(os.path.relpath(path, root))
    if rel == ".." or rel.startswith("../"):
        return None
    return rel


def resolve_import_path(specifier: str, from_dir: str | Path, root: str | Path) -> str | None:
    """Resolve a relative or aliased specifier; ``None`` for externals.

    ``@/x`` and ``~/x`` are aliases for ``<root>/src/x``.
    """
    root = Path(root)
    if _is_relative(specifier):
        base = os.path.normpath(os.path.join(from_dir, specifier))
    else:
        alias = next((a for a in defaults.PATH_ALIASES if specifier.startswith(a)), None)
        if alias is None:
            return None
        aliased = defaults.ALIAS_TARGET + specifier[len(alias):]
        base = os.path.normpath(os.path.join(root, aliased))

    for suffix in defaults.RESOLVE_SUFFIXES:
        candidate = base + suffix
        if os.path.isfile(candidate):
            return _within_root(candidate, root)

    stem, ext = os.path.splitext(base)
    for replacement in _ESM_SOURCE_SUFFIXES.get(ext, ()):
        candidate = stem + replacement
        if os.path.isfile(candidate):
            return _within_root(candidate, root)
    return None


def resolve_import(
    specifier: str,
    from_dir: str | Path,
    root: str | Path,
    monorepo: MonorepoInfo | None = None,
) -> str | None:
    """Workspace packages first (when in a monorepo), then path resolution."""
    if monorepo is not None and monorepo.is_monorepo and not _is_relative(specifier):
        if package_name_from_import(specifier) in monorepo.package_map:
            resolved = resolve_package_import(specifier, monorepo)
            if resolved:
                return resolved
    return resolve_import_path(specifier, from_dir, root)
