"""Folder-convention heuristic: risk tiers, module names and co-located tests."""

from __future__ import annotations

import posixpath
from collections.abc import Iterable, Sequence

from blastradius.heuristics.naming import TEST_DIRS, is_test_file
from blastradius.models import to_posix

HIGH_RISK_FOLDERS = frozenset({
    "auth", "authentication", "security", "core", "database", "db", "config", "migrations",
})
MEDIUM_RISK_FOLDERS = frozenset({
    "services", "service", "controllers", "controller", "middleware", "middlewares",
    "api", "routes", "handlers",
})
LOW_RISK_FOLDERS = frozenset({
    "utils", "helpers", "lib", "common", "shared", "types", "interfaces", "constants",
})
TEST_FOLDERS = frozenset({"__tests__", "test", "tests", "spec", "specs"})

# Conventional root segments that never name a module
_ROOT_SEGMENTS = frozenset({"src", "lib", "app", "packages"})


def _dir_segments(path: str) -> list[str]:
    return [p for p in posixpath.dirname(to_posix(path)).split("/") if p]


def get_folder_risk_level(path: str) -> str:
    """``high``, ``medium``, ``low`` or ``none``; the first matching tier wins."""
    segments = {s.lower() for s in _dir_segments(path)}
    if segments & HIGH_RISK_FOLDERS:
        return "high"
    if segments & MEDIUM_RISK_FOLDERS:
        return "medium"
    if segments & LOW_RISK_FOLDERS:
        return "low"
    return "none"


def get_module_name(path: str) -> str:
    segments = _dir_segments(path)
    relevant = [s for s in segments if s not in _ROOT_SEGMENTS]
    if relevant:
        return relevant[0]
    return segments[-1] if segments else "root"


def is_in_test_folder(path: str) -> bool:
    return any(s.lower() in TEST_FOLDERS for s in _dir_segments(path))


def get_colocated_test_files(
    source_file: str,
    all_files: Iterable[str],
    patterns: Sequence[str] | None = None,
    *,
    same_dir: bool = True,
) -> list[str]:
    """Test files beside ``source_file`` or in its ``__tests__``/``test``/``tests`` subfolder.

    With ``same_dir=False`` only the test subfolders are searched.
    """
    source_dir = posixpath.dirname(to_posix(source_file))
    subfolders = {posixpath.join(source_dir, d) for d in TEST_DIRS}
    results: list[str] = []
    for f in all_files:
        if f == source_file or not is_test_file(f, patterns):
            continue
        file_dir = posixpath.dirname(to_posix(f))
        if (same_dir and file_dir == source_dir) or file_dir in subfolders:
            results.append(f)
    return results


def get_affected_modules(paths: Iterable[str]) -> set[str]:
    return {get_module_name(p) for p in paths}

