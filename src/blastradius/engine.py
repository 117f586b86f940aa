"""Analysis pipeline: graph -> analyzers -> combined risk.

One call builds everything fresh (monorepo layout, file list, import graph);
only the import cache persists between runs.
"""

from __future__ import annotations

import time
from collections.abc import Sequence
from pathlib import Path

from blastradius.analyzers import (
    AnalyzerContext,
    ApiTestAnalyzer,
    RiskCalculator,
    UnitTestAnalyzer,
    calculate_risk_with_impact,
    combine_assessments,
)
from blastradius.analyzers.risk import generate_summary
from blastradius.config import Config
from blastradius.graph import build_dependency_graph, list_source_files
from blastradius.models import AnalysisResult, ChangedFile, MonorepoInfo, RiskAssessment, RiskLevel, to_posix
from blastradius.monorepo import detect_monorepo, get_affected_packages, get_package_for_file
from blastradius.observability import LogLike, get_log


def _empty_result(changed: list[ChangedFile]) -> AnalysisResult:
    risk = RiskAssessment(RiskLevel.LOW, 0, [], generate_summary(RiskLevel.LOW, []))
    return AnalysisResult(changed_files=changed, impacted_unit_tests=[], impacted_api_tests=[], risk=risk)


def affected_packages(changed: Sequence[ChangedFile], monorepo: MonorepoInfo) -> list[str]:
    """Packages owning a changed file, plus their transitive dependents."""
    if not monorepo.is_monorepo:
        return []
    owners = []
    for f in changed:
        ws = get_package_for_file(f.path, monorepo)
        if ws is not None and ws.name not in owners:
            owners.append(ws.name)
    return sorted(get_affected_packages(owners, monorepo))


def analyze(
    project_root: str | Path,
    changed_files: Sequence[ChangedFile],
    config: Config | None = None,
    *,
    no_cache: bool = False,
    log: LogLike | None = None,
) -> AnalysisResult:
    """Run the full analysis for ``changed_files`` (paths relative to ``project_root``)."""
    engine_log = get_log("engine", log)
    config = config or Config()
    root = Path(project_root).resolve()
    started = time.monotonic()

    changed = [
        ChangedFile(to_posix(f.path), f.change_type, f.old_path)
        for f in changed_files
        if not config.is_ignored(to_posix(f.path))
    ]
    if not changed:
        engine_log.info("No changed files to analyze")
        return _empty_result(changed)

    monorepo = detect_monorepo(root, log=log)
    all_files = list_source_files(root, config.ignore_patterns)
    graph = build_dependency_graph(
        root,
        no_cache=no_cache,
        monorepo=monorepo if monorepo.is_monorepo else None,
        files=all_files,
        cache_dir=config.cache_dir,
        log=log,
    )

    context = AnalyzerContext(
        changed_files=changed,
        dependency_graph=graph,
        project_root=root,
        all_files=all_files,
        config=config,
        log=log,
    )
    unit_tests = UnitTestAnalyzer().analyze(context)
    api_tests = ApiTestAnalyzer().analyze(context)
    base_risk = RiskCalculator().analyze(context)
    impact_risk = calculate_risk_with_impact(changed, unit_tests, api_tests)

    result = AnalysisResult(
        changed_files=changed,
        impacted_unit_tests=unit_tests,
        impacted_api_tests=api_tests,
        risk=combine_assessments(base_risk, impact_risk),
        affected_packages=affected_packages(changed, monorepo),
    )
    engine_log.info(
        "Analysis complete: %d changed, %d unit tests, %d API tests, risk %s",
        len(changed), len(unit_tests), len(api_tests), result.risk.level.value,
        extra={"files": len(all_files), "duration_ms": round((time.monotonic() - started) * 1000, 1)},
    )
    return result
