"""Analyzers composed by the pipeline.  Each exposes ``name`` and ``analyze(context)``."""

from blastradius.analyzers.api_tests import ApiTestAnalyzer
from blastradius.analyzers.base import Analyzer, AnalyzerContext, ImpactMap
from blastradius.analyzers.risk import (
    RiskCalculator,
    calculate_risk,
    calculate_risk_with_impact,
    classify_risk_level,
    combine_assessments,
)
from blastradius.analyzers.unit_tests import UnitTestAnalyzer

__all__ = [
    "Analyzer",
    "AnalyzerContext",
    "ApiTestAnalyzer",
    "ImpactMap",
    "RiskCalculator",
    "UnitTestAnalyzer",
    "calculate_risk",
    "calculate_risk_with_impact",
    "classify_risk_level",
    "combine_assessments",
]
