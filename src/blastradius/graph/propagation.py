"""Impact propagation: breadth-first walk over reverse import edges."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable

from blastradius import defaults
from blastradius.models import DependencyGraph


def get_affected_files(
    changed: Iterable[str],
    graph: DependencyGraph,
    max_depth: int = defaults.DEFAULT_MAX_DEPTH,
) -> dict[str, int]:
    """Every file reachable from ``changed`` via ``imported_by``, with its minimum depth.

    Changed files are depth 0.  Files reached at ``max_depth`` are recorded
    but not expanded.  Terminates on cycles.
    """
    affected: dict[str, int] = {}
    queue: deque[tuple[str, int]] = deque()
    for path in changed:
        if path not in affected:
            affected[path] = 0
            queue.append((path, 0))

    while queue:
        path, depth = queue.popleft()
        if depth >= max_depth:
            continue
        for importer in sorted(graph.importers_of(path)):
            best = affected.get(importer)
            if best is None or best > depth + 1:
                affected[importer] = depth + 1
                queue.append((importer, depth + 1))
    return affected
