"""Minimal glob matcher: ``*``, ``**``, ``?`` and ``{a,b}``.

Used by config filters (ignore / test / risk patterns).  Patterns are matched
against whole project-relative posix paths.  A leading ``**/`` also matches at
depth zero, so ``**/*.spec.ts`` matches ``user.spec.ts``.
"""

from __future__ import annotations

import functools
import re
from collections.abc import Iterable

from blastradius.models import to_posix


@functools.lru_cache(maxsize=512)
def glob_to_regex(pattern: str) -> re.Pattern[str]:
    pattern = to_posix(pattern)
    prefix = ""
    if pattern.startswith("**/"):
        prefix = "(?:.*/)?"
        pattern = pattern[3:]

    out: list[str] = []
    brace_depth = 0
    i = 0
    while i < len(pattern):
        c = pattern[i]
        if pattern.startswith("**/", i):
            out.append("(?:.*/)?")
            i += 3
            continue
        if pattern.startswith("**", i):
            out.append(".*")
            i += 2
            continue
        if c == "*":
            out.append("[^/]*")
        elif c == "?":
            out.append("[^/]")
        elif c == "{":
            brace_depth += 1
            out.append("(?:")
        elif c == "}" and brace_depth:
            brace_depth -= 1
            out.append(")")
        elif c == "," and brace_depth:
            out.append("|")
        else:
            out.append(re.escape(c))
        i += 1

    # Unbalanced braces: close what was opened so the regex still compiles
    out.extend(")" * brace_depth)
    return re.compile("^" + prefix + "".join(out) + "$")


def match_glob(path: str, pattern: str) -> bool:
    return glob_to_regex(pattern).match(to_posix(path)) is not None


def matches_any(path: str, patterns: Iterable[str]) -> bool:
    return any(match_glob(path, p) for p in patterns)
