"""
Standalone financial calculation API endpoints.

These accept raw inputs and return calculated results without touching
the deal store.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from deal_analyzer.calculations import amortization, irr

router = APIRouter()


class MortgageInput(BaseModel):
    """Input for mortgage payment calculation."""

    purchase_price: float = Field(gt=0)
    down_payment: float = Field(default=0.0, ge=0)
    interest_rate: float = Field(ge=0, description="Annual %")
    loan_term: int = Field(ge=1, le=50, description="Years")


class MortgageResponse(BaseModel):
    loan_amount: float
    monthly_payment: float
    annual_debt_service: float
    total_payments: float
    total_interest: float


@router.post("/mortgage", response_model=MortgageResponse)
def calculate_mortgage(inputs: MortgageInput):
    """Calculate loan amount and level monthly payment."""
    loan_amount = amortization.calculate_loan_amount(inputs.purchase_price, inputs.down_payment)
    payment = amortization.calculate_payment(loan_amount, inputs.interest_rate, inputs.loan_term)
    total_payments = payment * inputs.loan_term * 12

    return MortgageResponse(
        loan_amount=loan_amount,
        monthly_payment=payment,
        annual_debt_service=payment * 12,
        total_payments=total_payments,
        total_interest=max(0.0, total_payments - loan_amount),
    )


class IRRInput(BaseModel):
    """Input for IRR calculation."""

    cash_flows: List[float] = Field(min_length=2)


class IRRResponse(BaseModel):
    """Response with IRR calculation."""

    irr: float
    multiple: float
    profit: float
    npv_at_10_percent: float


@router.post("/irr", response_model=IRRResponse)
def calculate_irr_endpoint(inputs: IRRInput):
    """Calculate IRR (%) for annual cash flows."""
    return IRRResponse(
        irr=irr.calculate_irr(inputs.cash_flows),
        multiple=irr.calculate_multiple(inputs.cash_flows),
        profit=irr.calculate_profit(inputs.cash_flows),
        npv_at_10_percent=irr.calculate_npv(inputs.cash_flows, 0.10),
    )


class AmortizationInput(BaseModel):
    """Input for amortization calculation."""

    principal: float = Field(ge=0)
    annual_rate: float = Field(ge=0, description="Annual %")
    years: int = Field(ge=1, le=50)
    start_date: Optional[date] = None


@router.post("/amortization")
def calculate_amortization(inputs: AmortizationInput):
    """Generate a monthly loan amortization schedule."""
    schedule = amortization.generate_amortization_schedule(
        principal=inputs.principal,
        annual_rate=inputs.annual_rate,
        years=inputs.years,
        start_date=inputs.start_date,
    )

    return {
        "schedule": schedule,
        "total_interest": amortization.calculate_total_interest(schedule),
        "total_principal": sum(row["principal"] for row in schedule),
    }
