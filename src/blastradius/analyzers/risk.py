"""Risk scoring: weighted path signals over the changed source files.

Two independent assessments use the same thresholds:

- ``calculate_risk``: folder tiers, keyword signals, module spread, file count
- ``calculate_risk_with_impact``: volume of impacted unit and API tests

``combine_assessments`` merges them (max level, summed score).
Signal weights come from ``defaults.RISK_WEIGHTS``; ``Config.risk_weights``
overrides any of them by signal name.
"""

from __future__ import annotations

import posixpath
from collections.abc import Sequence

from blastradius import defaults
from blastradius.analyzers.base import AnalyzerContext
from blastradius.analyzers.unit_tests import is_test_path
from blastradius.config import Config
from blastradius.heuristics.folders import get_affected_modules, get_folder_risk_level
from blastradius.models import ChangedFile, ImpactedFile, RiskAssessment, RiskLevel, RiskSignal

_AUTH_KEYWORDS = ("auth", "security", "password", "token", "jwt", "session", "login", "permission")
_DATABASE_KEYWORDS = ("database", "migration", "schema", "model", "entity", "repository", ".sql")
_CONFIG_KEYWORDS = ("config", ".env", "settings", "constants")
_SHARED_SEGMENTS = frozenset({"utils", "helpers", "lib", "shared", "common"})
_CORE_NAMES = ("core", "kernel", "base", "main", "app")


def classify_risk_level(score: float) -> RiskLevel:
    """Inclusive upper bounds: ``<= low`` is LOW, ``<= medium`` is MEDIUM."""
    if score <= defaults.RISK_THRESHOLDS["low"]:
        return RiskLevel.LOW
    if score <= defaults.RISK_THRESHOLDS["medium"]:
        return RiskLevel.MEDIUM
    return RiskLevel.HIGH


def generate_summary(level: RiskLevel, signals: Sequence[RiskSignal]) -> str:
    if not signals:
        return f"{level.value} risk: No significant risk signals detected"
    top = sorted(signals, key=lambda s: s.weight, reverse=True)[:defaults.SUMMARY_TOP_SIGNALS]
    return f"{level.value} risk: " + ", ".join(s.description.split(":")[0] for s in top)


def _dir_segments(path: str) -> list[str]:
    return [s for s in posixpath.dirname(path.lower()).split("/") if s]


def _first(paths: Sequence[str], predicate) -> str | None:
    return next((p for p in paths if predicate(p)), None)


def _has_keyword(keywords: Sequence[str]):
    return lambda path: any(k in path.lower() for k in keywords)


def _is_shared(path: str) -> bool:
    return any(s in _SHARED_SEGMENTS for s in _dir_segments(path))


def _is_core(path: str) -> bool:
    name = posixpath.basename(path.lower())
    return any(s in _CORE_NAMES for s in _dir_segments(path)) or name.startswith(_CORE_NAMES)


def calculate_risk(changed_files: Sequence[ChangedFile], config: Config | None = None) -> RiskAssessment:
    config = config or Config()
    patterns = list(config.test_patterns) or None
    sources = [f.path for f in changed_files if not is_test_path(f.path, patterns)]

    if not sources:
        return RiskAssessment(
            level=RiskLevel.LOW,
            score=0,
            signals=[RiskSignal("only_tests", 0, "Only test files were modified")],
            summary="LOW risk: Only test files were modified",
        )

    paths = [p for p in sources if not config.is_low_risk(p)]
    signals: list[RiskSignal] = []

    def add(signal: str, description: str, weight: float | None = None) -> None:
        if weight is None:
            weight = config.weight(signal, defaults.RISK_WEIGHTS[signal])
        signals.append(RiskSignal(signal, weight, description))

    # Folder tiers, one signal per file
    for path in paths:
        tier = get_folder_risk_level(path)
        if tier == "high":
            add("high_risk_folder", f"High-risk folder: {path}")
        elif tier == "medium":
            add("medium_risk_folder", f"Medium-risk folder: {path}")

    # Keyword signals, counted once each
    checks = (
        ("auth_security", _has_keyword(_AUTH_KEYWORDS), "Authentication/security file modified"),
        ("database", _has_keyword(_DATABASE_KEYWORDS), "Database-related file modified"),
        ("config", _has_keyword(_CONFIG_KEYWORDS), "Configuration file modified"),
        ("shared_utility", _is_shared, "Shared utility modified"),
        ("core_file", _is_core, "Core file modified"),
        ("configured_high_risk", config.is_high_risk, "Configured high-risk file modified"),
    )
    for signal, predicate, label in checks:
        hit = _first(paths, predicate)
        if hit is not None:
            add(signal, f"{label}: {hit}")

    modules = get_affected_modules(paths)
    if len(modules) > 1:
        per_module = config.weight("multiple_modules", defaults.RISK_WEIGHTS["multiple_modules"])
        add("multiple_modules",
            f"Changes span {len(modules)} modules: {', '.join(sorted(modules))}",
            per_module * (len(modules) - 1))

    if len(paths) >= defaults.MANY_FILES_THRESHOLD:
        add("many_files", f"{len(paths)} source files changed",
            min(len(paths) - (defaults.MANY_FILES_THRESHOLD - 1), defaults.MANY_FILES_CAP))

    score = sum(s.weight for s in signals)
    level = classify_risk_level(score)
    return RiskAssessment(level=level, score=score, signals=signals, summary=generate_summary(level, signals))


def calculate_risk_with_impact(
    changed_files: Sequence[ChangedFile],
    impacted_unit_tests: Sequence[ImpactedFile],
    impacted_api_tests: Sequence[ImpactedFile],
) -> RiskAssessment:
    """Risk from test-impact volume alone."""
    signals: list[RiskSignal] = []
    units, apis = len(impacted_unit_tests), len(impacted_api_tests)
    if units >= defaults.MANY_UNIT_TESTS_THRESHOLD:
        signals.append(RiskSignal(
            "many_tests_impacted",
            min(units // defaults.MANY_UNIT_TESTS_DIVISOR, defaults.TEST_IMPACT_CAP),
            f"{units} unit tests potentially impacted",
        ))
    if apis >= defaults.MANY_API_TESTS_THRESHOLD:
        signals.append(RiskSignal(
            "many_api_tests_impacted",
            min(apis // defaults.MANY_API_TESTS_DIVISOR, defaults.TEST_IMPACT_CAP),
            f"{apis} API tests potentially impacted",
        ))
    score = sum(s.weight for s in signals)
    level = classify_risk_level(score)
    return RiskAssessment(level=level, score=score, signals=signals, summary=generate_summary(level, signals))


def combine_assessments(base: RiskAssessment, impact: RiskAssessment) -> RiskAssessment:
    """Higher level of the two, summed score, all signals."""
    level = base.level if base.level.rank >= impact.level.rank else impact.level
    signals = list(base.signals) + list(impact.signals)
    return RiskAssessment(
        level=level,
        score=base.score + impact.score,
        signals=signals,
        summary=generate_summary(level, signals),
    )


class RiskCalculator:
    name = "risk-calculator"

    def analyze(self, context: AnalyzerContext) -> RiskAssessment:
        return calculate_risk(context.changed_files, context.config)
