"""Git operations: thin subprocess wrappers that return diff text and file lists."""

from __future__ import annotations

import subprocess
from pathlib import Path

from blastradius.diff import parse_diff, parse_name_status
from blastradius.models import ChangedFile


def run(cmd: list[str], cwd: str | Path | None = None, check: bool = True) -> subprocess.CompletedProcess:
    return subprocess.run(cmd, cwd=cwd, capture_output=True, text=True, check=check)


def git(*args: str, cwd: str | Path | None = None, check: bool = True) -> subprocess.CompletedProcess:
    return run(["git", *args], cwd=cwd, check=check)


def is_git_repository(cwd: str | Path | None = None) -> bool:
    try:
        r = git("rev-parse", "--is-inside-work-tree", cwd=cwd, check=False)
    except OSError:
        return False
    return r.returncode == 0 and r.stdout.strip() == "true"


def repo_root(cwd: str | Path | None = None) -> Path:
    r = git("rev-parse", "--show-toplevel", cwd=cwd)
    return Path(r.stdout.strip())


def _range_args(base: str | None, head: str | None, staged: bool) -> list[str]:
    if base and head:
        return [f"{base}...{head}"]
    if base:
        return [base]
    if staged:
        return ["--cached"]
    return ["HEAD"]


def _diff(extra: list[str], base: str | None, head: str | None, staged: bool,
          cwd: str | Path | None) -> str:
    r = git("diff", *extra, *_range_args(base, head, staged), cwd=cwd, check=False)
    if r.returncode == 0:
        return r.stdout
    if base or head or staged:
        raise subprocess.CalledProcessError(r.returncode, r.args, r.stdout, r.stderr)
    # No HEAD yet (fresh repository): plain working tree diff
    return git("diff", *extra, cwd=cwd, check=False).stdout


def diff_name_status(
    base: str | None = None, head: str | None = None, staged: bool = False,
    cwd: str | Path | None = None,
) -> str:
    return _diff(["--name-status"], base, head, staged, cwd)


def diff_text(
    base: str | None = None, head: str | None = None, staged: bool = False,
    cwd: str | Path | None = None,
) -> str:
    return _diff([], base, head, staged, cwd)


def changed_files(
    base: str | None = None, head: str | None = None, staged: bool = False,
    cwd: str | Path | None = None,
) -> list[ChangedFile]:
    """Changed files from ``--name-status``; the full diff is the fallback."""
    files = parse_name_status(diff_name_status(base, head, staged, cwd))
    if files:
        return files
    return parse_diff(diff_text(base, head, staged, cwd))
