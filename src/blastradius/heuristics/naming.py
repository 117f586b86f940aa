"""Naming-convention heuristic: pair source files with their test files."""

from __future__ import annotations

import posixpath
import re
from collections.abc import Sequence

from blastradius.globs import matches_any
from blastradius.models import to_posix

# (test suffix, source suffix)
TEST_SUFFIXES: tuple[tuple[str, str], ...] = (
    (".spec.ts", ".ts"),
    (".spec.tsx", ".tsx"),
    (".spec.js", ".js"),
    (".spec.jsx", ".jsx"),
    (".test.ts", ".ts"),
    (".test.tsx", ".tsx"),
    (".test.js", ".js"),
    (".test.jsx", ".jsx"),
)
TEST_DIRS: tuple[str, ...] = ("__tests__", "test", "tests")

_SOURCE_EXT = re.compile(r"\.(ts|tsx|js|jsx)$")
_TEST_EXT = re.compile(r"\.(spec|test)\.(ts|tsx|js|jsx)$")


def is_test_file(path: str, patterns: Sequence[str] | None = None) -> bool:
    """Test-suffixed name, or any directory segment named like a test folder.

    A non-empty ``patterns`` list replaces both built-in checks.
    """
    path = to_posix(path)
    if patterns:
        return matches_any(path, patterns)
    name = posixpath.basename(path)
    if name.endswith(tuple(suffix for suffix, _ in TEST_SUFFIXES)):
        return True
    return any(segment in TEST_DIRS for segment in path.split("/")[:-1])


def _mirror_src(directory: str, replacement: str) -> str | None:
    parts = directory.split("/") if directory else []
    if "src" not in parts:
        return None
    parts[parts.index("src")] = replacement
    return "/".join(parts)


def get_test_file_patterns(source_file: str) -> list[str]:
    """Candidate test paths for ``source_file``; empty for test files."""
    source_file = to_posix(source_file)
    if is_test_file(source_file):
        return []
    directory, name = posixpath.split(source_file)
    candidates: list[str] = []
    for test_suffix, source_suffix in TEST_SUFFIXES:
        if not name.endswith(source_suffix):
            continue
        test_name = name[: -len(source_suffix)] + test_suffix
        candidates.append(posixpath.join(directory, test_name))
        for test_dir in TEST_DIRS:
            candidates.append(posixpath.join(directory, test_dir, test_name))
        for replacement in ("tests", "test"):
            mirrored = _mirror_src(directory, replacement)
            if mirrored is not None:
                candidates.append(posixpath.join(mirrored, test_name))
    return candidates


def match_test_files(
    source_file: str,
    all_files: Sequence[str],
    patterns: Sequence[str] | None = None,
) -> list[str]:
    """Existing test files for ``source_file``.

    Exact candidate paths (case-insensitive) first, then any test file whose
    base name minus its test suffix equals the source base name minus its
    extension.
    """
    wanted = {c.lower() for c in get_test_file_patterns(source_file)}
    matches = [
        f for f in all_files
        if to_posix(f).lower() in wanted and (not patterns or is_test_file(f, patterns))
    ]

    source_base = _SOURCE_EXT.sub("", posixpath.basename(to_posix(source_file)))
    seen = set(matches)
    for f in all_files:
        if f in seen or f == source_file or not is_test_file(f, patterns):
            continue
        if _TEST_EXT.sub("", posixpath.basename(to_posix(f))) == source_base:
            matches.append(f)
            seen.add(f)
    return matches
