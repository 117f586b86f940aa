"""Analyzer seam: the shared context, the analyzer protocol and the impact map."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from blastradius.config import Config
from blastradius.models import ChangedFile, DependencyGraph, ImpactedFile, ImpactReason
from blastradius.observability import LogLike


@dataclass
class AnalyzerContext:
    changed_files: list[ChangedFile]
    dependency_graph: DependencyGraph
    project_root: Path
    all_files: list[str]
    config: Config = field(default_factory=Config)
    log: LogLike | None = None

    @property
    def changed_paths(self) -> list[str]:
        return [f.path for f in self.changed_files]


@runtime_checkable
class Analyzer(Protocol):
    name: str

    def analyze(self, context: AnalyzerContext) -> Any: ...


class ImpactMap:
    """Ordered ``path -> [ImpactReason]`` with duplicate suppression.

    By default two reasons are duplicates when ``type`` and ``related_file``
    match.  With ``match_description=True`` the description must match too.
    """

    def __init__(self, match_description: bool = False) -> None:
        self._reasons: dict[str, list[ImpactReason]] = {}
        self._match_description = match_description

    def __contains__(self, path: object) -> bool:
        return path in self._reasons

    def __len__(self) -> int:
        return len(self._reasons)

    def _key(self, reason: ImpactReason) -> tuple[Any, ...]:
        if self._match_description:
            return (reason.type, reason.description, reason.related_file)
        return (reason.type, reason.related_file)

    def add(self, path: str, reason: ImpactReason) -> bool:
        """Attach ``reason`` to ``path``; False when it was a duplicate."""
        reasons = self._reasons.setdefault(path, [])
        key = self._key(reason)
        if any(self._key(r) == key for r in reasons):
            return False
        reasons.append(reason)
        return True

    def to_list(self, sort_by_confidence: bool = False) -> list[ImpactedFile]:
        """Impacted files in insertion order, or by reason count descending (stable)."""
        results = [ImpactedFile(path, list(reasons)) for path, reasons in self._reasons.items()]
        if sort_by_confidence:
            results.sort(key=lambda f: len(f.reasons), reverse=True)
        return results
