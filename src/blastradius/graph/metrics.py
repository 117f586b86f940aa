"""Summary metrics of a dependency graph."""

from __future__ import annotations

from typing import Any

import networkx as nx

from blastradius.models import DependencyGraph


def graph_metrics(graph: DependencyGraph, top: int = 10) -> dict[str, Any]:
    """Extract key metrics from the import graph."""
    G = graph.to_networkx()
    if len(G) == 0:
        return {"files": 0, "edges": 0, "components": 0, "density": 0.0,
                "most_imported": [], "isolated": 0, "cycle_groups": []}

    by_importers = sorted(G.in_degree(), key=lambda x: (-x[1], x[0]))
    most_imported = [{"file": n, "importers": d} for n, d in by_importers[:top] if d > 0]

    # Strongly connected components larger than one node are import cycles
    cycle_groups = sorted(
        (sorted(c) for c in nx.strongly_connected_components(G) if len(c) > 1),
        key=lambda c: (-len(c), c[0]),
    )

    return {
        "files": len(G),
        "edges": G.number_of_edges(),
        "components": nx.number_weakly_connected_components(G),
        "density": round(nx.density(G), 4),
        "most_imported": most_imported,
        "isolated": nx.number_of_isolates(G),
        "cycle_groups": cycle_groups[:top],
    }
