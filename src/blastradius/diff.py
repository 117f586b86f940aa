"""Parse git diff output into ``ChangedFile`` records.

Two formats: full unified diff (``git diff``) and ``git diff --name-status``.
"""

from __future__ import annotations

import re

from blastradius.models import ChangedFile, ChangeType, to_posix

_DIFF_HEADER = re.compile(r"^diff --git a/(.+) b/(.+)$")

_HEADER_CHANGE_TYPES = (
    ("new file mode", ChangeType.ADDED),
    ("deleted file mode", ChangeType.DELETED),
    ("rename from", ChangeType.RENAMED),
)

_STATUS_CHANGE_TYPES = {
    "A": ChangeType.ADDED,
    "D": ChangeType.DELETED,
    "M": ChangeType.MODIFIED,
    "R": ChangeType.RENAMED,
}


def _header_change_type(lines: list[str], start: int) -> ChangeType:
    for line in lines[start:]:
        if line.startswith(("diff --git ", "--- ", "+++ ")):
            break
        for prefix, change_type in _HEADER_CHANGE_TYPES:
            if line.startswith(prefix):
                return change_type
    return ChangeType.MODIFIED


def parse_diff(text: str) -> list[ChangedFile]:
    """One entry per ``diff --git`` header, in diff order."""
    lines = text.splitlines()
    files: list[ChangedFile] = []
    for i, line in enumerate(lines):
        match = _DIFF_HEADER.match(line)
        if not match:
            continue
        old_path, new_path = to_posix(match.group(1)), to_posix(match.group(2))
        change_type = _header_change_type(lines, i + 1)
        renamed = change_type is ChangeType.RENAMED and old_path != new_path
        files.append(ChangedFile(new_path, change_type, old_path if renamed else None))
    return files


def parse_name_status(text: str) -> list[ChangedFile]:
    """``M\\tpath`` / ``R100\\told\\tnew`` lines; unknown status letters count as modified."""
    files: list[ChangedFile] = []
    for line in text.strip().splitlines():
        parts = line.strip().split("\t")
        if len(parts) < 2:
            continue
        status, paths = parts[0], [to_posix(p) for p in parts[1:]]
        change_type = _STATUS_CHANGE_TYPES.get(status[:1], ChangeType.MODIFIED)
        if change_type is ChangeType.RENAMED:
            files.append(ChangedFile(paths[1] if len(paths) > 1 else paths[0], change_type, paths[0]))
        else:
            files.append(ChangedFile(paths[0], change_type))
    return files
