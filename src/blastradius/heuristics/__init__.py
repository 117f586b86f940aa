"""Deterministic file-relatedness heuristics: naming, folders, routes."""

from blastradius.heuristics.folders import (
    get_affected_modules,
    get_colocated_test_files,
    get_folder_risk_level,
    get_module_name,
    is_in_test_folder,
)
from blastradius.heuristics.naming import (
    get_test_file_patterns,
    is_test_file,
    match_test_files,
)
from blastradius.heuristics.routes import (
    extract_routes,
    extract_routes_from_file,
    get_route_similarity,
    normalize_route,
    route_matches,
)

__all__ = [
    "extract_routes",
    "extract_routes_from_file",
    "get_affected_modules",
    "get_colocated_test_files",
    "get_folder_risk_level",
    "get_module_name",
    "get_route_similarity",
    "get_test_file_patterns",
    "is_in_test_folder",
    "is_test_file",
    "match_test_files",
    "normalize_route",
    "route_matches",
]
