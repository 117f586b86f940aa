"""File-level import graph: extraction, resolution, construction, propagation.

Imports are found with regexes over source text (no AST) and resolved to
project-relative files.  Workspace package imports go through the monorepo
resolver; unresolved or external specifiers are dropped silently.
"""

from blastradius.graph.builder import build_dependency_graph, list_source_files
from blastradius.graph.extract import extract_exports, extract_import_specifiers
from blastradius.graph.metrics import graph_metrics
from blastradius.graph.propagation import get_affected_files
from blastradius.graph.resolve import resolve_import, resolve_import_path

__all__ = [
    "build_dependency_graph",
    "extract_exports",
    "extract_import_specifiers",
    "get_affected_files",
    "graph_metrics",
    "list_source_files",
    "resolve_import",
    "resolve_import_path",
]
