"""Route-pattern heuristic: HTTP routes declared in Express and NestJS code."""

from __future__ import annotations

import re
from pathlib import Path

from blastradius.models import DetectedRoute

_EXPRESS_METHOD = re.compile(
    r"""(?:app|router)\s*\.\s*(get|post|put|delete|patch|all)\s*\(\s*['"`]([^'"`]+)['"`]""",
    re.IGNORECASE,
)
_EXPRESS_USE = re.compile(r"""(?:app|router)\s*\.\s*use\s*\(\s*['"`]([^'"`]+)['"`]""", re.IGNORECASE)

_NEST_DECORATORS = tuple(
    (method, re.compile(rf"""@{method.capitalize()}\s*\(\s*['"`]?([^'"`)]*?)['"`]?\s*\)"""))
    for method in ("GET", "POST", "PUT", "DELETE", "PATCH")
)
_NEST_CONTROLLER = re.compile(r"""@Controller\s*\(\s*['"`]?([^'"`)]*?)['"`]?\s*\)""")

_SLASHES = re.compile(r"/+")


def normalize_route(path: str) -> str:
    """Single leading slash, no trailing slash, no repeated slashes."""
    normalized = _SLASHES.sub("/", path)
    if not normalized.startswith("/"):
        normalized = "/" + normalized
    if len(normalized) > 1 and normalized.endswith("/"):
        normalized = normalized[:-1]
    return normalized


def _line_number(text: str, index: int) -> int:
    return text.count("\n", 0, index) + 1


def _nest_routes(text: str, source_file: str) -> list[DetectedRoute]:
    controller = _NEST_CONTROLLER.search(text)
    base = controller.group(1) if controller else ""
    routes = []
    for method, pattern in _NEST_DECORATORS:
        for match in pattern.finditer(text):
            routes.append(DetectedRoute(
                method=method,
                path=normalize_route(f"/{base}/{match.group(1)}"),
                source_file=source_file,
                line_number=_line_number(text, match.start()),
            ))
    return routes


def _express_routes(text: str, source_file: str) -> list[DetectedRoute]:
    routes = [
        DetectedRoute(m.group(1).upper(), normalize_route(m.group(2)), source_file,
                      _line_number(text, m.start()))
        for m in _EXPRESS_METHOD.finditer(text)
    ]
    routes += [
        DetectedRoute("ALL", normalize_route(m.group(1)), source_file, _line_number(text, m.start()))
        for m in _EXPRESS_USE.finditer(text)
    ]
    return routes


def extract_routes(text: str, source_file: str) -> list[DetectedRoute]:
    """NestJS decorators win; Express call chains are the fallback."""
    return _nest_routes(text, source_file) or _express_routes(text, source_file)


def extract_routes_from_file(path: str | Path, source_file: str | None = None) -> list[DetectedRoute]:
    """Routes declared in a file on disk; unreadable files declare none."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return []
    return extract_routes(text, source_file or path.as_posix())


def _segments(path: str) -> list[str]:
    return [s for s in normalize_route(path).lower().split("/") if s]


def _is_param(segment: str) -> bool:
    return segment.startswith((":", "{"))


def route_matches(route: str, candidate: str) -> bool:
    """Case-insensitive segment match; ``:id``/``{id}`` in ``route`` match anything."""
    a, b = _segments(route), _segments(candidate)
    if len(a) != len(b):
        return False
    return all(_is_param(x) or x == y for x, y in zip(a, b))


def get_route_similarity(a: str, b: str) -> float:
    """0..1: exact segments score 1, parameter-vs-literal 0.5, over the longer length."""
    pa, pb = _segments(a), _segments(b)
    if pa == pb:
        return 1.0
    if not pa or not pb:
        return 0.0
    credit = 0.0
    for x, y in zip(pa, pb):
        if x == y:
            credit += 1
        elif _is_param(x) or _is_param(y):
            credit += 0.5
    return credit / max(len(pa), len(pb))
