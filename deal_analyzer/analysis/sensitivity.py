"""
Best/worst case sensitivity analysis.

Re-runs the pipeline with vacancy, interest rate and appreciation shifted in
the investor's favour (best case) and against it (worst case).
"""

from dataclasses import replace

from deal_analyzer.analysis.base import PropertyAnalyzer, run_analysis
from deal_analyzer.analysis.models import (
    AnalysisAssumptions,
    PropertyInput,
    SensitivityAnalysis,
    SensitivityCase,
)

VACANCY_SHIFT = 2.0
INTEREST_RATE_SHIFT = 1.0
APPRECIATION_SHIFT = 1.0


def _run_case(
    analyzer: PropertyAnalyzer,
    property_input: PropertyInput,
    assumptions: AnalysisAssumptions,
    direction: int,
) -> SensitivityCase:
    """direction is +1 for the best case and -1 for the worst case."""
    vacancy_rate = max(0.0, assumptions.vacancy_rate - direction * VACANCY_SHIFT)
    interest_rate = max(0.0, property_input.interest_rate - direction * INTEREST_RATE_SHIFT)
    appreciation_rate = (
        assumptions.annual_property_value_increase + direction * APPRECIATION_SHIFT
    )

    result = run_analysis(
        analyzer,
        replace(property_input, interest_rate=interest_rate),
        replace(
            assumptions,
            vacancy_rate=vacancy_rate,
            annual_property_value_increase=appreciation_rate,
        ),
    )

    return SensitivityCase(
        cash_flow=result.annual_analysis.cash_flow,
        cash_on_cash_return=result.key_metrics.cash_on_cash_return,
        total_return=result.exit_analysis.total_return,
        noi=result.annual_analysis.noi,
        dscr=result.key_metrics.dscr,
        vacancy_rate=vacancy_rate,
        interest_rate=interest_rate,
        appreciation_rate=appreciation_rate,
    )


def analyze_sensitivity(
    analyzer: PropertyAnalyzer,
    property_input: PropertyInput,
    assumptions: AnalysisAssumptions,
) -> SensitivityAnalysis:
    return SensitivityAnalysis(
        best_case=_run_case(analyzer, property_input, assumptions, 1),
        worst_case=_run_case(analyzer, property_input, assumptions, -1),
    )
