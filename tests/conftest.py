"""Shared fixtures for blastradius tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest


# ---------------------------------------------------------------------------
# Auto-use fixtures: isolate from the caller's environment
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ("BLASTRADIUS_MAX_DEPTH", "BLASTRADIUS_CACHE_DIR"):
        monkeypatch.delenv(var, raising=False)


# ---------------------------------------------------------------------------
# Recording log capability
# ---------------------------------------------------------------------------

class RecordingLog:
    """Satisfies ``LogLike``; keeps ``(level, message)`` pairs."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str]] = []

    def _record(self, level: str, msg: str, *args: Any, **kwargs: Any) -> None:
        self.records.append((level, msg % args if args else msg))

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._record("debug", msg, *args)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._record("info", msg, *args)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._record("warning", msg, *args)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._record("error", msg, *args)

    def messages(self, level: str | None = None) -> list[str]:
        return [m for lvl, m in self.records if level is None or lvl == level]


@pytest.fixture
def log() -> RecordingLog:
    return RecordingLog()


# ---------------------------------------------------------------------------
# Project trees
# ---------------------------------------------------------------------------

def write_tree(root: Path, files: dict[str, Any]) -> Path:
    """Create ``files`` under ``root``.  Dict/list values are written as JSON.

    Usage::

        from conftest import write_tree
        write_tree(tmp_path, {"src/a.ts": "import './b'", "package.json": {"name": "x"}})
    """
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, (dict, list)):
            content = json.dumps(content, indent=2)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def project(tmp_path):
    """Factory: ``project({...})`` writes a tree into ``tmp_path`` and returns it."""
    def _make(files: dict[str, Any]) -> Path:
        return write_tree(tmp_path, files)
    return _make


@pytest.fixture
def monorepo_project(project):
    """npm workspaces: @app/core <- @app/ui <- @app/web."""
    return project({
        "package.json": {"name": "root", "private": True, "workspaces": ["packages/*", "apps/*"]},
        "packages/core/package.json": {"name": "@app/core", "main": "src/index.ts"},
        "packages/core/src/index.ts": "export const core = 1;\n",
        "packages/ui/package.json": {
            "name": "@app/ui",
            "exports": {".": "./index.ts", "./button": "./src/button.ts"},
            "dependencies": {"@app/core": "workspace:*", "react": "^18.0.0"},
        },
        "packages/ui/index.ts": "export * from './src/button';\n",
        "packages/ui/src/button.ts": "import { core } from '@app/core';\nexport const Button = core;\n",
        "apps/web/package.json": {"name": "@app/web", "devDependencies": {"@app/ui": "workspace:*"}},
        "apps/web/src/main.ts": "import { Button } from '@app/ui';\nimport { Button as B } from '@app/ui/button';\n",
    })
