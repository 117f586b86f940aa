"""Dependency graph construction over a project's TS/JS sources."""

from __future__ import annotations

import os
import time
from collections.abc import Iterable
from pathlib import Path

from blastradius import defaults
from blastradius.cache import CacheStore
from blastradius.globs import matches_any
from blastradius.graph.extract import extract_exports, extract_import_specifiers
from blastradius.graph.resolve import resolve_import
from blastradius.models import DependencyGraph, MonorepoInfo
from blastradius.observability import LogLike, get_log


def _is_source_file(name: str) -> bool:
    return name.endswith(defaults.SOURCE_EXTENSIONS) and not name.endswith(defaults.DECLARATION_SUFFIX)


def list_source_files(root: str | Path, ignore_patterns: Iterable[str] = ()) -> list[str]:
    """Sorted root-relative posix paths of every scannable source file."""
    root = Path(root)
    patterns = tuple(ignore_patterns)
    files: list[str] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [d for d in dirnames if d not in defaults.EXCLUDED_DIRS]
        rel_dir = Path(dirpath).relative_to(root).as_posix()
        for name in filenames:
            if not _is_source_file(name):
                continue
            rel = name if rel_dir == "." else f"{rel_dir}/{name}"
            if patterns and matches_any(rel, patterns):
                continue
            files.append(rel)
    return sorted(files)


def _extract_imports(
    text: str, from_dir: Path, root: Path, monorepo: MonorepoInfo | None,
) -> list[str]:
    resolved: set[str] = set()
    for specifier in extract_import_specifiers(text):
        target = resolve_import(specifier, from_dir, root, monorepo)
        if target:
            resolved.add(target)
    return sorted(resolved)


def build_dependency_graph(
    root: str | Path,
    *,
    no_cache: bool = False,
    monorepo: MonorepoInfo | None = None,
    files: list[str] | None = None,
    ignore_patterns: Iterable[str] = (),
    cache_dir: str = defaults.DEFAULT_CACHE_DIR,
    log: LogLike | None = None,
) -> DependencyGraph:
    """Scan ``files`` (default: every source file under ``root``).

    Every scanned file gets an ``imports`` entry, possibly empty.  With
    caching on, a file whose content hash matches its cache entry reuses the
    stored import list without re-extracting.
    """
    log = get_log("graph", log)
    root = Path(root).resolve()
    started = time.monotonic()
    if files is None:
        files = list_source_files(root, ignore_patterns)
    cache = None if no_cache else CacheStore(root, cache_dir, log=log)

    graph = DependencyGraph()
    known = set(files)
    hits = misses = 0

    for rel in files:
        path = root / rel
        graph.imports.setdefault(rel, set())
        try:
            text = path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            log.debug("Skipping unreadable file %s: %s", rel, e)
            continue

        imports: list[str] | None = None
        digest = ""
        if cache is not None:
            digest = cache.hash(text)
            cached = cache.get(rel, digest)
            if cached is not None:
                hits += 1
                imports = [p for p in cached if p in known or (root / p).is_file()]
        if imports is None:
            misses += 1
            imports = _extract_imports(text, path.parent, root, monorepo)
            if cache is not None:
                cache.set(rel, digest, imports)

        for target in imports:
            if target != rel:
                graph.add_edge(rel, target)
        graph.exports[rel] = extract_exports(text)

    if cache is not None:
        cache.save()

    log.info(
        "Dependency graph built: %d files, %d cache hits, %d misses", len(files), hits, misses,
        extra={"files": len(files), "hits": hits, "misses": misses,
               "duration_ms": round((time.monotonic() - started) * 1000, 1)},
    )
    return graph
