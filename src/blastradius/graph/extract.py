"""Regex-based import and export extraction over TS/JS source text.

This is a text scan, not a parser: multi-line import clauses, computed export
names and lookalike syntax inside comments or strings may be missed or
picked up.
"""

from __future__ import annotations

import re

_IMPORT_PATTERNS = (
    # import x from './path'  /  import './side-effect'
    re.compile(r"""import\s+(?:[\w*{}\s,]+\s+from\s+)?['"]([^'"]+)['"]"""),
    # import('./path')
    re.compile(r"""import\s*\(\s*['"]([^'"]+)['"]\s*\)"""),
    # require('./path')
    re.compile(r"""require\s*\(\s*['"]([^'"]+)['"]\s*\)"""),
    # export { x } from './path'  /  export * from './path'
    re.compile(r"""export\s+(?:[\w*{}\s,]+\s+)?from\s+['"]([^'"]+)['"]"""),
)

_NAMED_EXPORT = re.compile(r"export\s+(?:const|let|var|function|class|interface|type|enum)\s+(\w+)")
_EXPORT_LIST = re.compile(r"export\s*\{([^}]+)\}")
_DEFAULT_EXPORT = re.compile(r"export\s+default\b")
_AS = re.compile(r"\s+as\s+")


def extract_import_specifiers(text: str) -> list[str]:
    """Raw module specifiers in first-seen order, without duplicates."""
    seen: dict[str, None] = {}
    for pattern in _IMPORT_PATTERNS:
        for match in pattern.finditer(text):
            seen.setdefault(match.group(1), None)
    return list(seen)


def extract_exports(text: str) -> set[str]:
    """Exported symbol names; ``default`` stands for a default export."""
    names: set[str] = set(_NAMED_EXPORT.findall(text))
    for body in _EXPORT_LIST.findall(text):
        for item in body.split(","):
            name = _AS.split(item.strip())[0].strip()
            if name.startswith("type "):
                name = name[5:].strip()
            if name and "{" not in name:
                names.add(name)
    if _DEFAULT_EXPORT.search(text):
        names.add("default")
    return names
