"""
Multi-family analysis.

Income is the sum of every unit group's rent. Operating costs add per-unit
maintenance, common-area utilities and a capital-expenditure reserve.
"""

import logging
from typing import Optional, Sequence

from deal_analyzer.analysis.base import (
    AnalysisContext,
    FirstYear,
    PropertyAnalyzer,
    TypeExpenses,
    common_metric_values,
    irr_cash_flows,
)
from deal_analyzer.analysis.models import (
    PROPERTY_TYPE_MF,
    MultiFamilyMetrics,
    YearlyProjection,
)
from deal_analyzer.calculations import irr, metrics
from deal_analyzer.calculations.metrics import ExitAnalysis

logger = logging.getLogger(__name__)

# Capex reserve as % of gross income when no explicit amount is given
DEFAULT_CAPEX_RATE = 7.0


class MultiFamilyAnalyzer(PropertyAnalyzer):
    property_type = PROPERTY_TYPE_MF

    def gross_income_for_year(self, ctx: AnalysisContext, year: int) -> float:
        return ctx.property.potential_annual_rent * ctx.rent_growth(year)

    def type_expenses(
        self, ctx: AnalysisContext, year: int, gross_income: float
    ) -> TypeExpenses:
        prop = ctx.property
        inflation = ctx.expense_inflation(year)

        if prop.capital_expenditure is not None:
            capex_reserve = prop.capital_expenditure * inflation
        else:
            capex_reserve = gross_income * DEFAULT_CAPEX_RATE / 100

        return TypeExpenses(
            maintenance=prop.maintenance_cost_per_unit * prop.total_units * inflation,
            common_area_utilities=prop.common_area_utilities.total * inflation,
            capex_reserve=capex_reserve,
        )

    def _irr_or_none(
        self,
        ctx: AnalysisContext,
        projections: Sequence[YearlyProjection],
        exit_analysis: ExitAnalysis,
    ) -> Optional[float]:
        """IRR, or None when the solver cannot produce a number."""
        try:
            return irr.calculate_irr(irr_cash_flows(ctx, projections, exit_analysis))
        except (ArithmeticError, ValueError) as e:
            logger.warning(f"IRR unavailable for multi-family analysis: {e}")
            return None

    def property_specific_metrics(
        self,
        ctx: AnalysisContext,
        first_year: FirstYear,
        projections: Sequence[YearlyProjection],
        exit_analysis: ExitAnalysis,
    ) -> MultiFamilyMetrics:
        prop = ctx.property
        units = prop.total_units
        potential_rent = prop.potential_annual_rent
        effective_income = first_year.gross_income - first_year.expenses.vacancy

        economic_vacancy = 0.0
        if potential_rent > 0:
            economic_vacancy = (potential_rent - effective_income) / potential_rent * 100

        return MultiFamilyMetrics(
            **common_metric_values(
                ctx, first_year, self._irr_or_none(ctx, projections, exit_analysis)
            ),
            price_per_unit=metrics.calculate_price_per_unit(prop.purchase_price, units),
            price_per_sqft=metrics.calculate_price_per_sqft(
                prop.purchase_price, prop.total_sqft
            ),
            noi_per_unit=first_year.noi / units if units else 0.0,
            average_rent_per_unit=first_year.gross_income / (units * 12) if units else 0.0,
            operating_expense_per_unit=first_year.operating_expenses / units if units else 0.0,
            common_area_expense_ratio=(
                prop.common_area_utilities.total / prop.total_sqft * 100
                if prop.total_sqft > 0
                else 0.0
            ),
            unit_mix_efficiency=(
                potential_rent / prop.total_sqft * 100 if prop.total_sqft > 0 else 0.0
            ),
            economic_vacancy_rate=economic_vacancy,
        )
