"""
Single-family rental analysis.

Income is one monthly rent grown annually. On top of the shared expense
model, a single-family rental carries a tenant-turnover cost: a make-ready
fee plus a leasing commission, weighted by how often tenants are expected
to leave.
"""

from typing import Sequence

from deal_analyzer.analysis.base import (
    AnalysisContext,
    FirstYear,
    PropertyAnalyzer,
    TypeExpenses,
    common_metric_values,
    irr_cash_flows,
)
from deal_analyzer.analysis.models import (
    PROPERTY_TYPE_SFR,
    AnalysisAssumptions,
    SFRMetrics,
    YearlyProjection,
)
from deal_analyzer.calculations import irr, metrics
from deal_analyzer.calculations.metrics import ExitAnalysis

MAX_TURNOVER_RATE = 0.9
BASELINE_VACANCY_RATE = 5.0


def calculate_turnover_rate(assumptions: AnalysisAssumptions) -> float:
    """
    Expected share of a year in which the tenant turns over.

    One turnover every `turnover_frequency` years, scaled by vacancy relative
    to a 5% baseline, kept within 0 and 90%. A non-positive frequency counts
    as the fastest possible turnover.
    """
    if assumptions.turnover_frequency <= 0:
        base_rate = MAX_TURNOVER_RATE
    else:
        base_rate = 1 / assumptions.turnover_frequency
    vacancy_adjustment = assumptions.vacancy_rate / BASELINE_VACANCY_RATE
    return max(0.0, min(MAX_TURNOVER_RATE, base_rate * vacancy_adjustment))


class SFRAnalyzer(PropertyAnalyzer):
    property_type = PROPERTY_TYPE_SFR

    def gross_income_for_year(self, ctx: AnalysisContext, year: int) -> float:
        return ctx.property.monthly_rent * 12 * ctx.rent_growth(year)

    def type_expenses(
        self, ctx: AnalysisContext, year: int, gross_income: float
    ) -> TypeExpenses:
        fees = ctx.property.tenant_turnover_fees
        prep_fees = fees.prep_fees * ctx.expense_inflation(year)
        commission = gross_income / 12 * fees.realtor_commission
        turnover_costs = (prep_fees + commission) * calculate_turnover_rate(ctx.assumptions)
        return TypeExpenses(tenant_turnover=turnover_costs)

    def property_specific_metrics(
        self,
        ctx: AnalysisContext,
        first_year: FirstYear,
        projections: Sequence[YearlyProjection],
        exit_analysis: ExitAnalysis,
    ) -> SFRMetrics:
        prop = ctx.property
        annual_rent = prop.monthly_rent * 12
        operating_expenses = first_year.operating_expenses

        rehab = {}
        if prop.after_repair_value and prop.renovation_costs:
            rehab = {
                "after_repair_value_ratio": prop.after_repair_value / prop.purchase_price
                if prop.purchase_price
                else 0.0,
                "rehab_roi": (prop.after_repair_value - prop.purchase_price)
                / prop.renovation_costs
                * 100,
            }

        return SFRMetrics(
            **common_metric_values(
                ctx,
                first_year,
                irr.calculate_irr(irr_cash_flows(ctx, projections, exit_analysis)),
            ),
            price_per_sqft=metrics.calculate_price_per_sqft(
                prop.purchase_price, prop.square_footage
            ),
            rent_per_sqft=annual_rent / prop.square_footage if prop.square_footage > 0 else 0.0,
            gross_rent_multiplier=metrics.calculate_grm(prop.purchase_price, annual_rent),
            break_even_occupancy=metrics.calculate_break_even_occupancy(
                operating_expenses, first_year.debt_service, first_year.gross_income
            ),
            equity_multiple=metrics.calculate_equity_multiple(
                exit_analysis.total_return, ctx.total_investment
            ),
            one_percent_rule_value=metrics.calculate_one_percent_rule_value(
                prop.monthly_rent, prop.purchase_price
            ),
            fifty_percent_rule=metrics.check_fifty_percent_rule(
                operating_expenses, first_year.gross_income
            ),
            rent_to_price_ratio=metrics.calculate_rent_to_price_ratio(
                prop.monthly_rent, prop.purchase_price
            ),
            price_per_bedroom=metrics.calculate_price_per_bedroom(
                prop.purchase_price, prop.bedrooms
            ),
            debt_to_income_ratio=metrics.calculate_debt_to_income_ratio(
                first_year.debt_service, first_year.gross_income
            ),
            return_on_improvements=metrics.calculate_return_on_improvements(
                first_year.noi, None, prop.capital_investments
            ),
            turnover_cost_impact=metrics.calculate_turnover_cost_impact(
                first_year.expenses.tenant_turnover, first_year.gross_income
            ),
            **rehab,
        )
