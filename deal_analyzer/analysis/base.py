"""
Shared analysis pipeline.

run_analysis() is the fixed four-stage computation every property type goes
through:

1. First-year snapshot (monthly and annual)
2. Multi-year projection, carrying property value and loan balance forward
3. Exit analysis from the final projection year
4. Property-type metrics, then result assembly

A PropertyAnalyzer supplies the parts that differ by property type: how
gross income is earned in a given year, any type-specific operating
expenses, and the type's metric bundle. Analyzers hold no state; all
per-call inputs travel in an immutable AnalysisContext.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union

from deal_analyzer.analysis.assumptions import sanitize_assumptions
from deal_analyzer.analysis.models import (
    AnalysisAssumptions,
    AnalysisResult,
    AnnualAnalysis,
    ExpenseBreakdown,
    LongTermAnalysis,
    MonthlyAnalysis,
    MonthlyExpenses,
    MonthlyIncome,
    MultiFamilyMetrics,
    PropertyInput,
    Returns,
    SFRMetrics,
    YearlyProjection,
)
from deal_analyzer.calculations import amortization, metrics
from deal_analyzer.calculations.metrics import ExitAnalysis

logger = logging.getLogger(__name__)


class UnsupportedPropertyTypeError(ValueError):
    """Raised when no analyzer exists for a property type."""


@dataclass(frozen=True)
class AnalysisContext:
    """Everything one analysis run needs, resolved once up front."""

    property: PropertyInput
    assumptions: AnalysisAssumptions
    loan_amount: float
    monthly_payment: float
    cash_invested: float  # Down payment + closing costs
    total_investment: float  # Cash invested + capital investments

    @classmethod
    def build(
        cls, property_input: PropertyInput, assumptions: AnalysisAssumptions
    ) -> "AnalysisContext":
        loan_amount = amortization.calculate_loan_amount(
            property_input.purchase_price, property_input.down_payment
        )
        monthly_payment = amortization.calculate_payment(
            loan_amount, property_input.interest_rate, property_input.loan_term
        )
        cash_invested = property_input.down_payment + (property_input.closing_costs or 0)

        return cls(
            property=property_input,
            assumptions=assumptions,
            loan_amount=loan_amount,
            monthly_payment=monthly_payment,
            cash_invested=cash_invested,
            total_investment=cash_invested + (property_input.capital_investments or 0),
        )

    @property
    def annual_debt_service(self) -> float:
        return self.monthly_payment * 12

    def expense_inflation(self, year: int) -> float:
        """Compounding factor applied to year-1 fixed expense bases."""
        return (1 + self.assumptions.annual_expense_increase / 100) ** (year - 1)

    def rent_growth(self, year: int) -> float:
        return (1 + self.assumptions.annual_rent_increase / 100) ** (year - 1)


@dataclass(frozen=True)
class TypeExpenses:
    """Operating expenses contributed by a property type on top of the shared model."""

    maintenance: float = 0.0
    tenant_turnover: float = 0.0
    common_area_utilities: float = 0.0
    capex_reserve: float = 0.0


@dataclass(frozen=True)
class YearExpenses:
    property_tax: float
    insurance: float
    maintenance: float
    property_management: float
    vacancy: float
    tenant_turnover: float
    common_area_utilities: float
    capex_reserve: float

    @property
    def total(self) -> float:
        return (
            self.property_tax
            + self.insurance
            + self.maintenance
            + self.property_management
            + self.vacancy
            + self.tenant_turnover
            + self.common_area_utilities
            + self.capex_reserve
        )


@dataclass(frozen=True)
class FirstYear:
    """Year-1 operating snapshot used by the annual analysis and metrics."""

    gross_income: float
    expenses: YearExpenses
    noi: float
    debt_service: float
    cash_flow: float

    @property
    def operating_expenses(self) -> float:
        return self.expenses.total


class PropertyAnalyzer(ABC):
    """Property-type specialization plugged into run_analysis()."""

    property_type: str = ""

    @abstractmethod
    def gross_income_for_year(self, ctx: AnalysisContext, year: int) -> float:
        """Annual gross scheduled income for a 1-based projection year."""

    @abstractmethod
    def property_specific_metrics(
        self,
        ctx: AnalysisContext,
        first_year: FirstYear,
        projections: Sequence[YearlyProjection],
        exit_analysis: ExitAnalysis,
    ) -> Union[SFRMetrics, MultiFamilyMetrics]:
        """Common metrics plus the type's own ratios."""

    def type_expenses(
        self, ctx: AnalysisContext, year: int, gross_income: float
    ) -> TypeExpenses:
        return TypeExpenses()


def operating_expenses_for_year(
    analyzer: PropertyAnalyzer, ctx: AnalysisContext, year: int, gross_income: float
) -> YearExpenses:
    """
    Shared expense model plus the analyzer's type expenses.

    Tax, insurance and maintenance compound from their year-1 base.
    Management and vacancy are a share of that year's gross income.
    """
    prop = ctx.property
    inflation = ctx.expense_inflation(year)
    extra = analyzer.type_expenses(ctx, year, gross_income)

    return YearExpenses(
        property_tax=prop.purchase_price * (prop.property_tax_rate / 100) * inflation,
        insurance=prop.purchase_price * (prop.insurance_rate / 100) * inflation,
        maintenance=prop.maintenance_cost * inflation + extra.maintenance,
        property_management=gross_income * (prop.property_management_rate / 100),
        vacancy=gross_income * (ctx.assumptions.vacancy_rate / 100),
        tenant_turnover=extra.tenant_turnover,
        common_area_utilities=extra.common_area_utilities,
        capex_reserve=extra.capex_reserve,
    )


def first_year_snapshot(analyzer: PropertyAnalyzer, ctx: AnalysisContext) -> FirstYear:
    gross_income = analyzer.gross_income_for_year(ctx, 1)
    expenses = operating_expenses_for_year(analyzer, ctx, 1, gross_income)
    noi = metrics.calculate_noi(gross_income, expenses.total)
    debt_service = ctx.annual_debt_service

    return FirstYear(
        gross_income=gross_income,
        expenses=expenses,
        noi=noi,
        debt_service=debt_service,
        cash_flow=metrics.calculate_cash_flow(noi, debt_service),
    )


def project_years(
    analyzer: PropertyAnalyzer, ctx: AnalysisContext
) -> Tuple[YearlyProjection, ...]:
    """
    Fold over years 1..N carrying property value and loan balance.

    Property value compounds once per year from the prior year's value.
    The loan balance drops by the principal share of the year's twelve
    payments (interest charged once on the opening balance) and never goes
    below zero. Debt service stops after the loan term; any balance the
    simple-interest schedule leaves at maturity stays on the books and is
    paid off from sale proceeds at exit.
    """
    prop = ctx.property
    assumptions = ctx.assumptions
    purchase_price = prop.purchase_price

    property_value = purchase_price
    loan_balance = ctx.loan_amount
    cumulative_principal = 0.0
    projections: List[YearlyProjection] = []

    logger.debug(
        f"Projecting {assumptions.projection_years} years: loan {ctx.loan_amount:.2f}, "
        f"annual debt service {ctx.annual_debt_service:.2f}"
    )

    for year in range(1, assumptions.projection_years + 1):
        gross_income = analyzer.gross_income_for_year(ctx, year)
        expenses = operating_expenses_for_year(analyzer, ctx, year, gross_income)
        operating_expenses = expenses.total

        capital_improvements = (prop.capital_investments or 0) if year == 1 else 0.0

        debt_service = ctx.annual_debt_service if year <= prop.loan_term else 0.0
        noi = metrics.calculate_noi(gross_income, operating_expenses)
        cash_flow = metrics.calculate_cash_flow(noi, debt_service) - capital_improvements

        property_value *= 1 + assumptions.annual_property_value_increase / 100

        principal_paid = amortization.calculate_annual_principal_paid(
            loan_balance, debt_service, prop.interest_rate
        )
        loan_balance = max(0.0, loan_balance - principal_paid)
        cumulative_principal += principal_paid

        appreciation = property_value - purchase_price

        logger.debug(
            f"Year {year}: income {gross_income:.2f}, opex {operating_expenses:.2f}, "
            f"NOI {noi:.2f}, cash flow {cash_flow:.2f}, value {property_value:.2f}, "
            f"balance {loan_balance:.2f}"
        )

        projections.append(
            YearlyProjection(
                year=year,
                property_value=property_value,
                gross_income=gross_income,
                operating_expenses=operating_expenses,
                noi=noi,
                debt_service=debt_service,
                cash_flow=cash_flow,
                equity=property_value - loan_balance,
                mortgage_balance=loan_balance,
                total_return=cash_flow + appreciation,
                appreciation=appreciation,
                principal_paid=principal_paid,
                cumulative_principal_paid=cumulative_principal,
                cash_on_cash_return=metrics.calculate_cash_on_cash_return(
                    cash_flow, ctx.cash_invested
                ),
                property_tax=expenses.property_tax,
                insurance=expenses.insurance,
                maintenance=expenses.maintenance,
                property_management=expenses.property_management,
                vacancy=expenses.vacancy,
                turnover_costs=expenses.tenant_turnover,
                common_area_utilities=expenses.common_area_utilities,
                capex_reserve=expenses.capex_reserve,
                capital_improvements=capital_improvements,
            )
        )

    return tuple(projections)


def build_exit_analysis(
    ctx: AnalysisContext, projections: Sequence[YearlyProjection]
) -> ExitAnalysis:
    """Sell at the final projected value; year-1 capital outlay is already in cash flow."""
    final = projections[-1]
    cumulative_cash_flow = sum(p.cash_flow for p in projections)

    return metrics.calculate_exit_analysis(
        property_value=final.property_value,
        loan_balance=final.mortgage_balance,
        selling_costs=ctx.assumptions.selling_costs,
        total_investment=ctx.total_investment,
        cumulative_cash_flow=cumulative_cash_flow,
    )


def irr_cash_flows(
    ctx: AnalysisContext,
    projections: Sequence[YearlyProjection],
    exit_analysis: ExitAnalysis,
) -> List[float]:
    """Initial equity out, each year's cash flow, then sale proceeds as a final period."""
    return (
        [-ctx.cash_invested]
        + [p.cash_flow for p in projections]
        + [exit_analysis.net_proceeds_from_sale]
    )


def common_metric_values(
    ctx: AnalysisContext, first_year: FirstYear, irr: Union[float, None]
) -> dict:
    """Keyword arguments for the CommonMetrics fields."""
    return {
        "noi": first_year.noi,
        "cap_rate": metrics.calculate_cap_rate(first_year.noi, ctx.property.purchase_price),
        "cash_on_cash_return": metrics.calculate_cash_on_cash_return(
            first_year.cash_flow, ctx.cash_invested
        ),
        "irr": irr,
        "dscr": metrics.calculate_dscr(first_year.noi, first_year.debt_service),
        "operating_expense_ratio": metrics.calculate_operating_expense_ratio(
            first_year.operating_expenses, first_year.gross_income
        ),
    }


def _monthly_analysis(ctx: AnalysisContext, first_year: FirstYear) -> MonthlyAnalysis:
    expenses = first_year.expenses
    gross = first_year.gross_income
    operating = first_year.operating_expenses / 12

    return MonthlyAnalysis(
        income=MonthlyIncome(
            gross=gross / 12,
            effective=gross * (1 - ctx.assumptions.vacancy_rate / 100) / 12,
        ),
        expenses=MonthlyExpenses(
            operating=operating,
            debt=ctx.monthly_payment,
            total=operating + ctx.monthly_payment,
            breakdown=ExpenseBreakdown(
                property_tax=expenses.property_tax / 12,
                insurance=expenses.insurance / 12,
                maintenance=expenses.maintenance / 12,
                property_management=expenses.property_management / 12,
                vacancy=expenses.vacancy / 12,
                tenant_turnover=expenses.tenant_turnover / 12,
                common_area_utilities=expenses.common_area_utilities / 12,
                capex=expenses.capex_reserve / 12,
            ),
        ),
        cash_flow=first_year.cash_flow / 12,
    )


def run_analysis(
    analyzer: PropertyAnalyzer,
    property_input: PropertyInput,
    assumptions: AnalysisAssumptions,
) -> AnalysisResult:
    """
    Run the full analysis for one property.

    Args:
        analyzer: Specialization matching the property type
        property_input: Purchase and operating terms
        assumptions: Long-term assumptions; a non-positive horizon or
            turnover frequency is replaced with its configured default

    Returns:
        A freshly built AnalysisResult (sensitivity analysis not included)
    """
    if property_input.property_type != analyzer.property_type:
        raise UnsupportedPropertyTypeError(
            f"{type(analyzer).__name__} cannot analyze "
            f"{property_input.property_type or type(property_input).__name__} input"
        )

    assumptions = sanitize_assumptions(assumptions)
    ctx = AnalysisContext.build(property_input, assumptions)

    first_year = first_year_snapshot(analyzer, ctx)
    projections = project_years(analyzer, ctx)
    exit_analysis = build_exit_analysis(ctx, projections)
    key_metrics = analyzer.property_specific_metrics(
        ctx, first_year, projections, exit_analysis
    )

    total_cash_flow = sum(p.cash_flow for p in projections)
    total_appreciation = projections[-1].property_value - property_input.purchase_price

    logger.debug(
        f"{analyzer.property_type} analysis: NOI {first_year.noi:.2f}, "
        f"cash flow {first_year.cash_flow:.2f}, IRR {key_metrics.irr}"
    )

    return AnalysisResult(
        property_type=analyzer.property_type,
        monthly_analysis=_monthly_analysis(ctx, first_year),
        annual_analysis=AnnualAnalysis(
            income=first_year.gross_income,
            expenses=first_year.operating_expenses,
            noi=first_year.noi,
            debt_service=first_year.debt_service,
            cash_flow=first_year.cash_flow,
        ),
        key_metrics=key_metrics,
        long_term_analysis=LongTermAnalysis(
            projections=projections,
            exit_analysis=exit_analysis,
            returns=Returns(
                irr=key_metrics.irr,
                total_cash_flow=total_cash_flow,
                total_appreciation=total_appreciation,
                total_return=exit_analysis.total_return,
            ),
            projection_years=assumptions.projection_years,
        ),
    )
