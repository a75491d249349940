"""
Property analysis engine.

    result = analyze_property(property_input, assumptions)

picks the analyzer for the input's property type, runs the shared pipeline
and attaches a best/worst case sensitivity analysis.
"""

import logging
from dataclasses import replace
from typing import Dict, Type

from deal_analyzer.analysis.base import (
    PropertyAnalyzer,
    UnsupportedPropertyTypeError,
    run_analysis,
)
from deal_analyzer.analysis.models import (
    PROPERTY_TYPE_MF,
    PROPERTY_TYPE_SFR,
    AnalysisAssumptions,
    AnalysisResult,
    PropertyInput,
)
from deal_analyzer.analysis.multifamily import MultiFamilyAnalyzer
from deal_analyzer.analysis.sensitivity import analyze_sensitivity
from deal_analyzer.analysis.sfr import SFRAnalyzer

logger = logging.getLogger(__name__)

ANALYZERS: Dict[str, Type[PropertyAnalyzer]] = {
    PROPERTY_TYPE_SFR: SFRAnalyzer,
    PROPERTY_TYPE_MF: MultiFamilyAnalyzer,
}


def get_analyzer(property_type: str) -> PropertyAnalyzer:
    """
    Build the analyzer for a property type discriminator ("SFR" or "MF").

    Raises:
        UnsupportedPropertyTypeError: If no analyzer handles the type
    """
    analyzer_cls = ANALYZERS.get(property_type)
    if analyzer_cls is None:
        raise UnsupportedPropertyTypeError(
            f"Unsupported property type: {property_type!r}. "
            f"Expected one of {sorted(ANALYZERS)}"
        )
    return analyzer_cls()


def analyze_property(
    property_input: PropertyInput,
    assumptions: AnalysisAssumptions,
    include_sensitivity: bool = True,
) -> AnalysisResult:
    """Analyze a property with the analyzer matching its type."""
    analyzer = get_analyzer(property_input.property_type)
    result = run_analysis(analyzer, property_input, assumptions)

    if include_sensitivity:
        result = replace(
            result,
            sensitivity_analysis=analyze_sensitivity(analyzer, property_input, assumptions),
        )

    logger.debug(f"Completed {analyzer.property_type} analysis")
    return result


__all__ = [
    "ANALYZERS",
    "get_analyzer",
    "analyze_property",
    "run_analysis",
    "PropertyAnalyzer",
    "UnsupportedPropertyTypeError",
]
