"""CLI commands: analyze, graph, cache, config."""

from __future__ import annotations

import argparse
import subprocess
from pathlib import Path

from blastradius import scm
from blastradius.cli._helpers import _load_config, _out, _root
from blastradius.models import ChangedFile


def _relative_to_project(changed: list[ChangedFile], repo: Path, root: Path) -> list[ChangedFile]:
    """Git reports repo-relative paths; keep files under ``root`` and rebase them."""
    if repo == root:
        return changed
    prefix = root.relative_to(repo).as_posix() + "/"
    rebased = []
    for f in changed:
        if not f.path.startswith(prefix):
            continue
        old_path = f.old_path[len(prefix):] if f.old_path and f.old_path.startswith(prefix) else f.old_path
        rebased.append(ChangedFile(f.path[len(prefix):], f.change_type, old_path))
    return rebased


def _changed_from_git(args: argparse.Namespace, root: Path) -> list[ChangedFile] | dict[str, str]:
    if not scm.is_git_repository(root):
        return {"error": f"Not a git repository: {root}"}
    try:
        changed = scm.changed_files(args.base, args.head, args.staged, cwd=root)
        repo = scm.repo_root(root).resolve()
    except subprocess.CalledProcessError as e:
        return {"error": f"git failed: {(e.stderr or '').strip() or e}"}
    return _relative_to_project(changed, repo, root)


def cmd_analyze(args: argparse.Namespace) -> int:
    from blastradius.engine import analyze
    from blastradius.report import render_text, result_to_dict

    if args.head and not args.base:
        return _out({"error": "--head requires --base"})
    root = _root(args)
    config = _load_config(args, bruno_path=args.bruno)
    if args.files:
        changed = [ChangedFile(p) for p in args.files]
    else:
        changed = _changed_from_git(args, root)
        if isinstance(changed, dict):
            return _out(changed)

    result = analyze(root, changed, config, no_cache=args.no_cache)
    if args.json:
        return _out(result_to_dict(result))
    print(render_text(result, verbose=args.verbose), end="")
    return 0


def cmd_graph(args: argparse.Namespace) -> int:
    from blastradius.graph import build_dependency_graph, graph_metrics, list_source_files
    from blastradius.monorepo import detect_monorepo

    root = _root(args)
    config = _load_config(args)
    monorepo = detect_monorepo(root)
    files = list_source_files(root, config.ignore_patterns)
    if not files:
        return _out({"error": f"No source files found under {root}"})
    graph = build_dependency_graph(
        root,
        no_cache=args.no_cache,
        monorepo=monorepo if monorepo.is_monorepo else None,
        files=files,
        cache_dir=config.cache_dir,
    )
    return _out({
        "metrics": graph_metrics(graph, top=args.top),
        "monorepo": monorepo.to_dict(),
    })


def cmd_cache_clear(args: argparse.Namespace) -> int:
    from blastradius.cache import CacheStore

    config = _load_config(args)
    store = CacheStore(_root(args), config.cache_dir)
    store.clear()
    if store.disabled:
        return _out({"error": f"Could not write cache file {store.path}"})
    return _out({"cleared": str(store.path)})


def cmd_config_init(args: argparse.Namespace) -> int:
    from blastradius.config import ConfigError, write_default_config

    try:
        path = write_default_config(_root(args))
    except ConfigError as e:
        return _out({"error": str(e)})
    return _out({"created": str(path)})


def cmd_config_validate(args: argparse.Namespace) -> int:
    from blastradius.config import validate_config

    config = _load_config(args)
    warnings = validate_config(config)
    _out({"config": config.to_dict(), "warnings": warnings, "valid": not warnings})
    return 1 if warnings else 0
