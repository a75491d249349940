"""
Prompt templates for narrative deal insights.
"""

from deal_analyzer.analysis.models import (
    AnalysisResult,
    MultiFamilyPropertyInput,
    PropertyInput,
    SFRPropertyInput,
)
from deal_analyzer.calculations.metrics import METRIC_THRESHOLDS

SCORE_SCALE = """Score the deal from 0 to 100:
- 0-20: very poor, avoid (negative cash flow, extremely low returns)
- 21-40: poor, significant issues
- 41-60: average, balanced pros and cons
- 61-80: good, minor concerns
- 81-100: excellent opportunity

Financial performance is the primary factor: cash flow and DSCR first, then
cap rate and cash-on-cash return, then IRR and appreciation. A below-market
purchase price is a strength, not a warning sign."""


def _format_irr(irr):
    return f"{irr:.2f}%" if irr is not None else "N/A"


def _benchmarks(property_type: str) -> str:
    thresholds = METRIC_THRESHOLDS[property_type]
    return (
        f"- Target cap rate: {thresholds['cap_rate']:.1f}%+\n"
        f"- Target cash on cash: {thresholds['cash_on_cash']:.1f}%+\n"
        f"- Minimum DSCR: {thresholds['dscr']:.2f}\n"
        f"- Maximum operating expense ratio: {thresholds['operating_expense_ratio']:.0f}%"
    )


def _financials(property_input: PropertyInput, result: AnalysisResult) -> str:
    monthly = result.monthly_analysis
    annual = result.annual_analysis
    key = result.key_metrics
    exit_analysis = result.exit_analysis
    down_pct = (
        property_input.down_payment / property_input.purchase_price * 100
        if property_input.purchase_price
        else 0.0
    )

    return f"""FINANCING:
- Purchase Price: ${property_input.purchase_price:,.0f}
- Down Payment: ${property_input.down_payment:,.0f} ({down_pct:.1f}%)
- Interest Rate: {property_input.interest_rate}% over {property_input.loan_term} years
- Monthly Mortgage: ${monthly.expenses.debt:,.2f}

FINANCIAL METRICS:
- Monthly Gross Income: ${monthly.income.gross:,.2f}
- Monthly Operating Expenses: ${monthly.expenses.operating:,.2f}
- Monthly Cash Flow: ${monthly.cash_flow:,.2f}
- Annual NOI: ${annual.noi:,.2f}
- Annual Cash Flow: ${annual.cash_flow:,.2f}
- DSCR: {key.dscr:.2f} (below 1.0 means rent does not cover the mortgage)
- Cap Rate: {key.cap_rate:.2f}%
- Cash on Cash Return: {key.cash_on_cash_return:.2f}%
- Operating Expense Ratio: {key.operating_expense_ratio:.1f}%
- IRR: {_format_irr(key.irr)}

EXIT AFTER {result.long_term_analysis.projection_years} YEARS:
- Projected Sale Price: ${exit_analysis.projected_sale_price:,.0f}
- Net Sale Proceeds: ${exit_analysis.net_proceeds_from_sale:,.0f}
- Total Return: ${exit_analysis.total_return:,.0f} ({exit_analysis.return_on_investment:.1f}% ROI)"""


def sfr_analysis_prompt(property_input: SFRPropertyInput, result: AnalysisResult) -> str:
    key = result.key_metrics
    return f"""Analyze this single-family rental investment.

PROPERTY:
- Monthly Rent: ${property_input.monthly_rent:,.0f}
- Square Footage: {property_input.square_footage or 'N/A'}
- Bedrooms / Bathrooms: {property_input.bedrooms} / {property_input.bathrooms}
- Year Built: {property_input.year_built or 'N/A'}

{_financials(property_input, result)}

RULES OF THUMB:
- 1% Rule Value: {key.one_percent_rule_value:.2f}%
- 50% Rule: {'pass' if key.fifty_percent_rule else 'fail'}
- Gross Rent Multiplier: {key.gross_rent_multiplier:.1f}
- Break-even Occupancy: {key.break_even_occupancy:.1f}%

BENCHMARKS:
{_benchmarks(result.property_type)}

{SCORE_SCALE}

Respond with JSON only:
{{
  "summary": "2-3 sentence summary",
  "strengths": ["..."],
  "weaknesses": ["..."],
  "recommendations": ["..."],
  "investment_score": 0
}}"""


def mf_analysis_prompt(property_input: MultiFamilyPropertyInput, result: AnalysisResult) -> str:
    key = result.key_metrics
    unit_mix = "\n".join(
        f"- {unit.count}x {unit.type} ({unit.sqft:.0f} sqft) @ ${unit.monthly_rent:,.0f}/month"
        for unit in property_input.unit_types
    )
    return f"""Analyze this multi-family investment.

PROPERTY:
- Total Units: {property_input.total_units}
- Total Square Feet: {property_input.total_sqft:,.0f}
- Year Built: {property_input.year_built or 'N/A'}
- Price Per Unit: ${key.price_per_unit:,.0f}
- Price Per Square Foot: ${key.price_per_sqft:,.2f}

UNIT MIX:
{unit_mix}

{_financials(property_input, result)}

PER-UNIT OPERATIONS:
- NOI Per Unit: ${key.noi_per_unit:,.2f}
- Average Rent Per Unit: ${key.average_rent_per_unit:,.2f}/month
- Operating Expense Per Unit: ${key.operating_expense_per_unit:,.2f}
- Economic Vacancy: {key.economic_vacancy_rate:.1f}%

BENCHMARKS:
{_benchmarks(result.property_type)}

{SCORE_SCALE}

Respond with JSON only:
{{
  "summary": "2-3 sentence summary",
  "strengths": ["..."],
  "weaknesses": ["..."],
  "recommendations": ["..."],
  "unit_mix_analysis": "1-2 sentences on whether the unit mix is optimal",
  "market_position_analysis": "1-2 sentences on market positioning",
  "value_add_opportunities": ["..."],
  "investment_score": 0,
  "recommended_hold_period": "suggested hold period"
}}"""


def build_prompt(property_input: PropertyInput, result: AnalysisResult) -> str:
    if isinstance(property_input, MultiFamilyPropertyInput):
        return mf_analysis_prompt(property_input, result)
    return sfr_analysis_prompt(property_input, result)
