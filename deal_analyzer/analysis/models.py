"""
Analysis data model.

Inputs, per-year projections, and the aggregate result are all frozen
dataclasses; nothing here is mutated once built.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple, Union

from deal_analyzer.calculations.metrics import ExitAnalysis

PROPERTY_TYPE_SFR = "SFR"
PROPERTY_TYPE_MF = "MF"


@dataclass(frozen=True)
class PropertyAddress:
    street: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""


@dataclass(frozen=True)
class TenantTurnoverFees:
    """Cost of re-leasing a vacated unit."""

    prep_fees: float = 500.0  # Flat make-ready cost per turnover
    realtor_commission: float = 0.5  # Fraction of one month's rent


@dataclass(frozen=True, kw_only=True)
class BasePropertyInput:
    """Purchase and operating terms shared by every property type."""

    purchase_price: float
    down_payment: float
    interest_rate: float  # Annual %
    loan_term: int  # Years
    property_tax_rate: float  # Annual % of purchase price
    insurance_rate: float  # Annual % of purchase price
    maintenance_cost: float  # Annual $
    property_management_rate: float  # % of gross income
    closing_costs: float = 0.0
    capital_investments: float = 0.0
    tenant_turnover_fees: TenantTurnoverFees = field(default_factory=TenantTurnoverFees)
    address: Optional[PropertyAddress] = None
    year_built: Optional[int] = None

    property_type = ""

    @property
    def loan_amount(self) -> float:
        return self.purchase_price - self.down_payment


@dataclass(frozen=True, kw_only=True)
class SFRPropertyInput(BasePropertyInput):
    monthly_rent: float
    square_footage: float
    bedrooms: int
    bathrooms: float
    after_repair_value: Optional[float] = None
    renovation_costs: Optional[float] = None

    property_type = PROPERTY_TYPE_SFR


@dataclass(frozen=True)
class UnitType:
    """A group of identical units in a multi-family building."""

    type: str
    count: int
    sqft: float
    monthly_rent: float


@dataclass(frozen=True)
class CommonAreaUtilities:
    """Annual landlord-paid utilities for common areas."""

    electric: float = 0.0
    water: float = 0.0
    gas: float = 0.0
    trash: float = 0.0

    @property
    def total(self) -> float:
        return self.electric + self.water + self.gas + self.trash


@dataclass(frozen=True, kw_only=True)
class MultiFamilyPropertyInput(BasePropertyInput):
    total_units: int
    total_sqft: float
    unit_types: Tuple[UnitType, ...]
    maintenance_cost_per_unit: float = 0.0
    common_area_utilities: CommonAreaUtilities = field(default_factory=CommonAreaUtilities)
    capital_expenditure: Optional[float] = None  # Annual reserve; defaults to % of income

    property_type = PROPERTY_TYPE_MF

    @property
    def potential_annual_rent(self) -> float:
        return sum(unit.monthly_rent * unit.count * 12 for unit in self.unit_types)


PropertyInput = Union[SFRPropertyInput, MultiFamilyPropertyInput]


@dataclass(frozen=True)
class AnalysisAssumptions:
    """
    Forward-looking assumptions, all percentages except the year counts.

    Build through normalize_assumptions() so every option is populated.
    """

    projection_years: int
    annual_rent_increase: float
    annual_expense_increase: float
    annual_property_value_increase: float
    selling_costs: float
    vacancy_rate: float
    turnover_frequency: float = 2.0


@dataclass(frozen=True)
class YearlyProjection:
    year: int
    property_value: float
    gross_income: float
    operating_expenses: float
    noi: float
    debt_service: float
    cash_flow: float
    equity: float
    mortgage_balance: float
    total_return: float
    appreciation: float
    principal_paid: float
    cumulative_principal_paid: float
    cash_on_cash_return: float

    # Itemized expenses
    property_tax: float
    insurance: float
    maintenance: float
    property_management: float
    vacancy: float
    turnover_costs: float = 0.0
    common_area_utilities: float = 0.0
    capex_reserve: float = 0.0
    capital_improvements: float = 0.0


@dataclass(frozen=True)
class ExpenseBreakdown:
    """Monthly expense lines for the first year."""

    property_tax: float
    insurance: float
    maintenance: float
    property_management: float
    vacancy: float
    tenant_turnover: float = 0.0
    common_area_utilities: float = 0.0
    capex: float = 0.0


@dataclass(frozen=True)
class MonthlyIncome:
    gross: float
    effective: float


@dataclass(frozen=True)
class MonthlyExpenses:
    operating: float
    debt: float
    total: float
    breakdown: ExpenseBreakdown


@dataclass(frozen=True)
class MonthlyAnalysis:
    income: MonthlyIncome
    expenses: MonthlyExpenses
    cash_flow: float


@dataclass(frozen=True)
class AnnualAnalysis:
    income: float
    expenses: float
    noi: float
    debt_service: float
    cash_flow: float


@dataclass(frozen=True, kw_only=True)
class CommonMetrics:
    noi: float
    cap_rate: float
    cash_on_cash_return: float
    irr: Optional[float]
    dscr: float
    operating_expense_ratio: float


@dataclass(frozen=True, kw_only=True)
class SFRMetrics(CommonMetrics):
    price_per_sqft: float
    rent_per_sqft: float
    gross_rent_multiplier: float
    break_even_occupancy: float
    equity_multiple: float
    one_percent_rule_value: float
    fifty_percent_rule: bool
    rent_to_price_ratio: float
    price_per_bedroom: float
    debt_to_income_ratio: float
    return_on_improvements: float
    turnover_cost_impact: float
    after_repair_value_ratio: Optional[float] = None
    rehab_roi: Optional[float] = None


@dataclass(frozen=True, kw_only=True)
class MultiFamilyMetrics(CommonMetrics):
    price_per_unit: float
    price_per_sqft: float
    noi_per_unit: float
    average_rent_per_unit: float
    operating_expense_per_unit: float
    common_area_expense_ratio: float
    unit_mix_efficiency: float
    economic_vacancy_rate: float


@dataclass(frozen=True)
class Returns:
    irr: Optional[float]
    total_cash_flow: float
    total_appreciation: float
    total_return: float


@dataclass(frozen=True)
class LongTermAnalysis:
    projections: Tuple[YearlyProjection, ...]
    exit_analysis: ExitAnalysis
    returns: Returns
    projection_years: int


@dataclass(frozen=True)
class SensitivityCase:
    cash_flow: float
    cash_on_cash_return: float
    total_return: float
    noi: float
    dscr: float
    vacancy_rate: float
    interest_rate: float
    appreciation_rate: float


@dataclass(frozen=True)
class SensitivityAnalysis:
    best_case: SensitivityCase
    worst_case: SensitivityCase


@dataclass(frozen=True)
class AnalysisResult:
    property_type: str
    monthly_analysis: MonthlyAnalysis
    annual_analysis: AnnualAnalysis
    key_metrics: Union[SFRMetrics, MultiFamilyMetrics]
    long_term_analysis: LongTermAnalysis
    sensitivity_analysis: Optional[SensitivityAnalysis] = None

    @property
    def projections(self) -> Tuple[YearlyProjection, ...]:
        return self.long_term_analysis.projections

    @property
    def exit_analysis(self) -> ExitAnalysis:
        return self.long_term_analysis.exit_analysis


__all__ = [
    "PROPERTY_TYPE_SFR",
    "PROPERTY_TYPE_MF",
    "PropertyAddress",
    "TenantTurnoverFees",
    "BasePropertyInput",
    "SFRPropertyInput",
    "UnitType",
    "CommonAreaUtilities",
    "MultiFamilyPropertyInput",
    "PropertyInput",
    "AnalysisAssumptions",
    "YearlyProjection",
    "ExpenseBreakdown",
    "MonthlyIncome",
    "MonthlyExpenses",
    "MonthlyAnalysis",
    "AnnualAnalysis",
    "CommonMetrics",
    "SFRMetrics",
    "MultiFamilyMetrics",
    "Returns",
    "LongTermAnalysis",
    "ExitAnalysis",
    "SensitivityCase",
    "SensitivityAnalysis",
    "AnalysisResult",
]
