"""Content-hash cache of per-file import lists.

One JSON document per project at ``<root>/<cache_dir>/deptree.json``::

    {"version": "1.0.0", "entries": {"src/a.ts": {"hash": ..., "imports": [...], "timestamp": ...}}}

A version mismatch discards the whole document; there is no migration.  The
store is the only writer of the file.  Write failures are logged and switch
the store to disabled mode for the rest of the run.
"""

from __future__ import annotations

import hashlib
import json
import os
import tempfile
import time
from pathlib import Path
from typing import Any

from blastradius import defaults
from blastradius.models import CacheEntry
from blastradius.observability import LogLike, get_log


def content_hash(content: str) -> str:
    """Change-detection fingerprint (not a security boundary)."""
    return hashlib.md5(content.encode("utf-8")).hexdigest()


class CacheStore:
    """Dirty-tracking, in-memory view of the on-disk cache document."""

    VERSION = defaults.CACHE_VERSION

    def __init__(
        self,
        project_root: str | Path,
        cache_dir: str | Path = defaults.DEFAULT_CACHE_DIR,
        log: LogLike | None = None,
    ) -> None:
        self.path = Path(project_root) / cache_dir / defaults.CACHE_FILE_NAME
        self.log = get_log("cache", log)
        self.entries: dict[str, CacheEntry] = {}
        self.dirty = False
        self.disabled = False
        self._load()

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, path: object) -> bool:
        return path in self.entries

    # -- persistence ------------------------------------------------------

    def _load(self) -> None:
        if not self.path.exists():
            return
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError("cache document is not an object")
            if data.get("version") != self.VERSION:
                self.log.info(
                    "Cache version %s != %s, starting fresh", data.get("version"), self.VERSION,
                )
                return
            entries = data.get("entries", {})
            if not isinstance(entries, dict):
                raise ValueError("cache entries are not an object")
            self.entries = {
                str(path): CacheEntry.from_dict(entry) for path, entry in entries.items()
            }
        except (OSError, ValueError, KeyError, TypeError) as e:
            self.log.warning("Failed to load cache %s, starting fresh: %s", self.path, e)
            self.entries = {}

    def _document(self) -> dict[str, Any]:
        return {
            "version": self.VERSION,
            "entries": {path: entry.to_dict() for path, entry in self.entries.items()},
        }

    def _write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=".deptree-", suffix=".json", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._document(), f, indent=2)
            os.replace(tmp, self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def save(self) -> None:
        """Persist if modified.  No-op when clean or disabled."""
        if not self.dirty or self.disabled:
            return
        try:
            self._write()
            self.dirty = False
        except OSError as e:
            self.log.warning("Failed to save cache %s, caching disabled for this run: %s", self.path, e)
            self.disabled = True

    def clear(self) -> None:
        """Reset to an empty document and persist immediately."""
        self.entries = {}
        self.dirty = True
        self.disabled = False
        self.save()

    # -- lookups ------------------------------------------------------------

    def hash(self, content: str) -> str:
        return content_hash(content)

    def get(self, path: str, current_hash: str) -> list[str] | None:
        """Cached imports for ``path`` only when the stored hash matches."""
        if self.disabled:
            return None
        entry = self.entries.get(path)
        if entry is not None and entry.hash == current_hash:
            return list(entry.imports)
        return None

    def set(self, path: str, file_hash: str, imports: list[str]) -> None:
        if self.disabled:
            return
        self.entries[path] = CacheEntry(
            hash=file_hash,
            imports=list(imports),
            timestamp=int(time.time() * 1000),
        )
        self.dirty = True
