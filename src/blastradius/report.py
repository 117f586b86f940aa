"""Plain-text and JSON renderings of an ``AnalysisResult``."""

from __future__ import annotations

from typing import Any

from blastradius.models import AnalysisResult, ChangeType, ImpactedFile

_RULE = "-" * 50
_CHANGE_MARKS = {
    ChangeType.ADDED: "+",
    ChangeType.DELETED: "-",
    ChangeType.RENAMED: ">",
    ChangeType.MODIFIED: "~",
}
_MAX_RISK_REASONS = 5


def result_to_dict(result: AnalysisResult) -> dict[str, Any]:
    return result.to_dict()


def _impacted_section(title: str, empty: str, files: list[ImpactedFile], verbose: bool) -> list[str]:
    if not files:
        return [empty]
    lines = [f"{title} ({len(files)})"]
    for f in files:
        lines.append(f"  * {f.path}")
        reasons = f.reasons if verbose else f.reasons[:1]
        lines.extend(f"    -> {r.description}" for r in reasons)
    return lines


def render_text(result: AnalysisResult, verbose: bool = False) -> str:
    lines = ["Change Impact Summary", _RULE, ""]

    lines.append(f"Changed Files ({len(result.changed_files)})")
    for f in result.changed_files:
        suffix = f" (from {f.old_path})" if f.old_path else ""
        lines.append(f"  {_CHANGE_MARKS[f.change_type]} {f.path}{suffix}")
    lines.append("")

    lines += _impacted_section(
        "Impacted Unit Tests", "No unit tests impacted", result.impacted_unit_tests, verbose,
    )
    lines.append("")
    lines += _impacted_section(
        "Impacted API Tests - Bruno", "No Bruno API tests impacted", result.impacted_api_tests, verbose,
    )

    if result.affected_packages:
        lines += ["", f"Affected Packages ({len(result.affected_packages)})"]
        lines += [f"  * {name}" for name in result.affected_packages]

    lines += ["", _RULE, f"Risk Level: {result.risk.level.value} (score {result.risk.score})", "", "Reason:"]
    signals = result.risk.signals if verbose else result.risk.signals[:_MAX_RISK_REASONS]
    if signals:
        lines += [f"  * {s.description}" for s in signals]
    else:
        lines.append("  * No significant risk signals detected")
    return "\n".join(lines) + "\n"
