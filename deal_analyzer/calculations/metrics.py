"""
Investment Metric Calculations

Ratio and return formulas shared by every property type. Each function is
total: a zero or missing denominator yields 0 instead of an exception.
Percent-style results are returned as percentages (5.0 for 5%).
"""

from dataclasses import dataclass
from typing import Dict, Optional


def calculate_noi(effective_gross_income: float, operating_expenses: float) -> float:
    """Net Operating Income."""
    return effective_gross_income - operating_expenses


def calculate_cash_flow(noi: float, debt_service: float) -> float:
    """Cash flow after debt service."""
    return noi - debt_service


def calculate_cap_rate(noi: float, purchase_price: float) -> float:
    """Cap rate as a percentage of purchase price."""
    if not purchase_price:
        return 0.0
    return noi * 100 / purchase_price


def calculate_cash_on_cash_return(annual_cash_flow: float, total_investment: float) -> float:
    """Annual cash flow as a percentage of cash invested."""
    if not total_investment:
        return 0.0
    return annual_cash_flow / total_investment * 100


def calculate_dscr(noi: float, debt_service: float) -> float:
    """
    Calculate Debt Service Coverage Ratio (DSCR).

    Args:
        noi: Net Operating Income for the period
        debt_service: Debt service for the period

    Returns:
        DSCR ratio, 0 when there is no debt service
    """
    if not debt_service:
        return 0.0
    return noi / debt_service


def calculate_operating_expense_ratio(operating_expenses: float, gross_income: float) -> float:
    if gross_income <= 0:
        return 0.0
    return operating_expenses / gross_income * 100


def calculate_grm(price: float, annual_rent: float) -> float:
    """Gross Rent Multiplier: price over annual gross rent."""
    if annual_rent <= 0:
        return 0.0
    return price / annual_rent


def calculate_price_per_sqft(price: float, square_footage: float) -> float:
    if square_footage <= 0:
        return 0.0
    return price / square_footage


def calculate_price_per_unit(purchase_price: float, number_of_units: float) -> float:
    if not number_of_units:
        return 0.0
    return purchase_price / number_of_units


def calculate_price_per_bedroom(purchase_price: float, bedrooms: float) -> float:
    if not bedrooms:
        return 0.0
    return purchase_price / bedrooms


def calculate_break_even_occupancy(
    operating_expenses: float, debt_service: float, gross_potential_rent: float
) -> float:
    """
    Occupancy needed to cover operating expenses and debt service.

    Args:
        operating_expenses: Annual operating expenses
        debt_service: Annual debt service
        gross_potential_rent: Annual gross potential rent

    Returns:
        Break-even occupancy as a percentage
    """
    if not gross_potential_rent:
        return 0.0
    return (operating_expenses + debt_service) / gross_potential_rent * 100


def calculate_equity_multiple(total_return: float, total_investment: float) -> float:
    """Total return over total initial investment."""
    if not total_investment:
        return 0.0
    return total_return / total_investment


def calculate_one_percent_rule_value(monthly_rent: float, purchase_price: float) -> float:
    """Monthly rent as a percentage of price; 1.0 or more passes the 1% rule."""
    if not purchase_price:
        return 0.0
    return monthly_rent / purchase_price * 100


def check_fifty_percent_rule(operating_expenses: float, gross_rent: float) -> bool:
    """True when operating expenses are at most half of gross rent."""
    if not gross_rent:
        return False
    return operating_expenses <= gross_rent * 0.5


def calculate_rent_to_price_ratio(monthly_rent: float, purchase_price: float) -> float:
    if not purchase_price:
        return 0.0
    return monthly_rent / purchase_price * 100


def calculate_debt_to_income_ratio(debt_service: float, income: float) -> float:
    """Annual debt service as a percentage of annual property income."""
    if not income:
        return 0.0
    return debt_service / income * 100


def calculate_vacancy_rate(vacant_days: float, total_days: float) -> float:
    if total_days <= 0:
        return 0.0
    return vacant_days / total_days * 100


def calculate_return_on_improvements(
    noi: float,
    base_noi: Optional[float],
    capital_investments: float,
    estimated_return: float = 8.0,
) -> float:
    """
    Return on capital improvements as a percentage.

    With a before-improvement NOI the return is the NOI lift over the amount
    invested. Without one, the estimated return is reported as-is.
    """
    if not capital_investments:
        return 0.0

    if base_noi is not None:
        return (noi - base_noi) / capital_investments * 100

    return estimated_return


def calculate_turnover_cost_impact(turnover_costs: float, gross_income: float) -> float:
    """Turnover costs as a percentage of gross income."""
    if not gross_income:
        return 0.0
    return turnover_costs / gross_income * 100


@dataclass(frozen=True)
class ExitAnalysis:
    """Outcome of selling the property at the end of the hold."""

    projected_sale_price: float
    selling_costs: float
    mortgage_payoff: float
    net_proceeds_from_sale: float
    total_return: float
    return_on_investment: float


def calculate_exit_analysis(
    property_value: float,
    loan_balance: float,
    selling_costs: float,
    total_investment: float,
    cumulative_cash_flow: float,
) -> ExitAnalysis:
    """
    Calculate disposition proceeds and returns.

    Args:
        property_value: Projected sale price
        loan_balance: Mortgage balance paid off at sale
        selling_costs: Selling costs as percentage of sale price
        total_investment: Cash invested over the hold
        cumulative_cash_flow: Sum of annual cash flows over the hold
    """
    projected_equity = property_value - loan_balance
    selling_costs_amount = property_value * (selling_costs / 100)
    net_proceeds = projected_equity - selling_costs_amount
    total_return = cumulative_cash_flow + net_proceeds - total_investment
    roi = total_return / total_investment * 100 if total_investment > 0 else 0.0

    return ExitAnalysis(
        projected_sale_price=property_value,
        selling_costs=selling_costs_amount,
        mortgage_payoff=loan_balance,
        net_proceeds_from_sale=net_proceeds,
        total_return=total_return,
        return_on_investment=roi,
    )


# Minimum acceptable values by property type (operating expense ratio is a maximum)
METRIC_THRESHOLDS: Dict[str, Dict[str, float]] = {
    "SFR": {
        "cap_rate": 6.0,
        "cash_on_cash": 8.0,
        "dscr": 1.0,
        "operating_expense_ratio": 45.0,
    },
    "MF": {
        "cap_rate": 5.0,
        "cash_on_cash": 7.0,
        "dscr": 1.25,
        "operating_expense_ratio": 50.0,
    },
}


def get_metric_threshold(metric: str, property_type: str) -> float:
    """
    Look up the benchmark value for a metric.

    Raises:
        KeyError: If the property type or metric is unknown
    """
    return METRIC_THRESHOLDS[property_type][metric]
