"""Core data types for blastradius."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any

import networkx as nx


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def to_posix(path: str) -> str:
    return path.replace("\\", "/")


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class ChangeType(str, Enum):
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"


class ImpactType(str, Enum):
    DIRECT_CHANGE = "direct_change"
    IMPORTS_CHANGED = "imports_changed"
    NAMING_CONVENTION = "naming_convention"
    FOLDER_CONVENTION = "folder_convention"
    ROUTE_MATCH = "route_match"
    TAG_MATCH = "tag_match"


class RiskLevel(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @property
    def rank(self) -> int:
        return _RISK_RANK[self]


_RISK_RANK = {RiskLevel.LOW: 0, RiskLevel.MEDIUM: 1, RiskLevel.HIGH: 2}


class MonorepoType(str, Enum):
    NPM = "npm"
    PNPM = "pnpm"
    LERNA = "lerna"
    NX = "nx"
    TURBO = "turbo"
    UNKNOWN = "unknown"


# ---------------------------------------------------------------------------
# Diff boundary
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ChangedFile:
    path: str
    change_type: ChangeType = ChangeType.MODIFIED
    old_path: str | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"path": self.path, "change_type": self.change_type.value}
        if self.old_path:
            d["old_path"] = self.old_path
        return d


# ---------------------------------------------------------------------------
# Dependency graph
# ---------------------------------------------------------------------------

@dataclass
class DependencyGraph:
    """Forward and reverse file-level import adjacency.

    Keys are project-relative posix paths.  ``imported_by`` is derived from
    ``imports``; use ``add_edge`` so both sides stay mirrored.
    """

    imports: dict[str, set[str]] = field(default_factory=dict)
    imported_by: dict[str, set[str]] = field(default_factory=dict)
    exports: dict[str, set[str]] = field(default_factory=dict)

    def add_edge(self, importer: str, imported: str) -> None:
        self.imports.setdefault(importer, set()).add(imported)
        self.imported_by.setdefault(imported, set()).add(importer)

    def imports_of(self, path: str) -> set[str]:
        return self.imports.get(path, set())

    def importers_of(self, path: str) -> set[str]:
        return self.imported_by.get(path, set())

    def to_networkx(self) -> nx.DiGraph:
        """Directed view with edges importer -> imported."""
        G = nx.DiGraph()
        G.add_nodes_from(self.imports)
        for importer, targets in self.imports.items():
            for target in targets:
                G.add_edge(importer, target)
        return G

    def to_dict(self) -> dict[str, Any]:
        return {
            "imports": {k: sorted(v) for k, v in sorted(self.imports.items())},
            "imported_by": {k: sorted(v) for k, v in sorted(self.imported_by.items())},
            "exports": {k: sorted(v) for k, v in sorted(self.exports.items())},
        }


# ---------------------------------------------------------------------------
# Monorepo
# ---------------------------------------------------------------------------

@dataclass
class Workspace:
    name: str
    path: Path                     # absolute package directory
    relative_path: str             # posix, relative to the monorepo root
    internal_dependencies: list[str] = field(default_factory=list)
    depended_by: list[str] = field(default_factory=list)
    manifest: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "path": str(self.path),
            "relative_path": self.relative_path,
            "internal_dependencies": list(self.internal_dependencies),
            "depended_by": list(self.depended_by),
        }


@dataclass
class MonorepoInfo:
    is_monorepo: bool
    root_path: Path
    type: MonorepoType = MonorepoType.UNKNOWN
    workspaces: list[Workspace] = field(default_factory=list)
    package_map: dict[str, Workspace] = field(default_factory=dict)

    def package_graph(self) -> nx.DiGraph:
        """Package graph with edges dependency -> dependent."""
        G = nx.DiGraph()
        for ws in self.workspaces:
            G.add_node(ws.name)
            for dependent in ws.depended_by:
                G.add_edge(ws.name, dependent)
        return G

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_monorepo": self.is_monorepo,
            "root_path": str(self.root_path),
            "type": self.type.value,
            "workspaces": [ws.to_dict() for ws in self.workspaces],
        }


# ---------------------------------------------------------------------------
# Cache
# ---------------------------------------------------------------------------

@dataclass
class CacheEntry:
    hash: str
    imports: list[str]
    timestamp: int

    def to_dict(self) -> dict[str, Any]:
        return {"hash": self.hash, "imports": list(self.imports), "timestamp": self.timestamp}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CacheEntry:
        if not isinstance(data, dict):
            raise ValueError(f"cache entry is not an object: {data!r}")
        return cls(
            hash=str(data["hash"]),
            imports=[str(p) for p in data.get("imports", [])],
            timestamp=int(data.get("timestamp", 0)),
        )


# ---------------------------------------------------------------------------
# Impact
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ImpactReason:
    type: ImpactType
    description: str
    related_file: str | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"type": self.type.value, "description": self.description}
        if self.related_file is not None:
            d["related_file"] = self.related_file
        return d


@dataclass
class ImpactedFile:
    path: str
    reasons: list[ImpactReason] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "reasons": [r.to_dict() for r in self.reasons]}


# ---------------------------------------------------------------------------
# Risk
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RiskSignal:
    signal: str
    weight: int | float
    description: str

    def to_dict(self) -> dict[str, Any]:
        return {"signal": self.signal, "weight": self.weight, "description": self.description}


@dataclass
class RiskAssessment:
    level: RiskLevel
    score: int | float
    signals: list[RiskSignal] = field(default_factory=list)
    summary: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level.value,
            "score": self.score,
            "signals": [s.to_dict() for s in self.signals],
            "summary": self.summary,
        }


# ---------------------------------------------------------------------------
# API tests
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DetectedRoute:
    method: str                    # GET | POST | PUT | DELETE | PATCH | ALL
    path: str
    source_file: str
    line_number: int | None = None


@dataclass
class BrunoTestFile:
    path: str
    folder: str
    method: str | None = None
    url: str | None = None
    tags: list[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Analysis result
# ---------------------------------------------------------------------------

@dataclass
class AnalysisResult:
    changed_files: list[ChangedFile]
    impacted_unit_tests: list[ImpactedFile]
    impacted_api_tests: list[ImpactedFile]
    risk: RiskAssessment
    affected_packages: list[str] = field(default_factory=list)
    timestamp: str = field(default_factory=now_iso)

    def to_dict(self) -> dict[str, Any]:
        return {
            "changed_files": [f.to_dict() for f in self.changed_files],
            "impacted_unit_tests": [t.to_dict() for t in self.impacted_unit_tests],
            "impacted_api_tests": [t.to_dict() for t in self.impacted_api_tests],
            "risk": self.risk.to_dict(),
            "affected_packages": list(self.affected_packages),
            "timestamp": self.timestamp,
        }
