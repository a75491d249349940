"""
Loan Amortization Calculations

Implements mortgage payment, balance, and amortization schedule calculations.
Interest rates are annual percentages (e.g., 4.5 for 4.5%).
"""

from typing import List, Dict, Optional
from datetime import date
from dateutil.relativedelta import relativedelta


def calculate_loan_amount(purchase_price: float, down_payment: float) -> float:
    """Loan principal is always purchase price minus down payment."""
    return purchase_price - down_payment


def calculate_payment(principal: float, annual_rate: float, years: float) -> float:
    """
    Calculate the level monthly mortgage payment.

    Args:
        principal: Loan principal amount
        annual_rate: Annual interest rate as percentage (e.g., 4.5 for 4.5%)
        years: Loan term in years

    Returns:
        Monthly payment amount (positive number)
    """
    num_payments = years * 12
    if principal <= 0 or num_payments <= 0:
        return 0.0

    monthly_rate = annual_rate / 12 / 100

    if monthly_rate == 0:
        return principal / num_payments

    growth = (1 + monthly_rate) ** num_payments
    return principal * monthly_rate * growth / (growth - 1)


def calculate_remaining_balance(
    principal: float, payment: float, monthly_rate: float, payments_made: int
) -> float:
    """
    Calculate remaining loan balance after N level payments.

    Args:
        principal: Initial principal
        payment: Monthly payment
        monthly_rate: Monthly interest rate as decimal
        payments_made: Number of payments already made
    """
    if monthly_rate == 0:
        return max(0.0, principal - payment * payments_made)

    growth = (1 + monthly_rate) ** payments_made
    balance = principal * growth - payment / monthly_rate * (growth - 1)
    return max(0.0, balance)


def calculate_principal_payment(
    payment: float, annual_rate: float, years: float, period: int
) -> float:
    """
    Principal portion of the Nth monthly payment of a level-payment loan.

    Args:
        payment: Monthly payment
        annual_rate: Annual interest rate as percentage
        years: Loan term in years
        period: Payment number (1-based)
    """
    if annual_rate == 0:
        return payment

    monthly_rate = annual_rate / 12 / 100
    total_payments = years * 12

    # Back out the original principal from the payment, then roll it forward
    principal = payment / monthly_rate * (1 - (1 + monthly_rate) ** -total_payments)
    balance_before = calculate_remaining_balance(
        principal, payment, monthly_rate, period - 1
    )
    return payment - balance_before * monthly_rate


def calculate_annual_principal_paid(
    opening_balance: float, annual_debt_service: float, annual_rate: float
) -> float:
    """
    Principal retired over one year using simple interest on the opening balance.

    This is the convention the projection loop uses: one year of interest is
    charged on the balance at the start of the year and the rest of the
    year's twelve payments goes to principal. The result never exceeds the
    balance and is never negative.
    """
    if opening_balance <= 0:
        return 0.0

    interest = opening_balance * (annual_rate / 100)
    principal_paid = annual_debt_service - interest
    return min(max(principal_paid, 0.0), opening_balance)


def generate_amortization_schedule(
    principal: float,
    annual_rate: float,
    years: float,
    start_date: Optional[date] = None,
) -> List[Dict]:
    """
    Generate a full monthly amortization schedule.

    Args:
        principal: Loan principal amount
        annual_rate: Annual interest rate as percentage
        years: Loan term in years
        start_date: Date of first payment (defaults to today)

    Returns:
        List of amortization rows
    """
    schedule = []
    balance = principal
    monthly_rate = annual_rate / 12 / 100
    payment = calculate_payment(principal, annual_rate, years)
    total_months = int(round(years * 12))

    if start_date is None:
        start_date = date.today()

    for period in range(1, total_months + 1):
        period_date = start_date + relativedelta(months=period - 1)

        interest = balance * monthly_rate
        principal_pmt = min(payment - interest, balance)

        # Final payment absorbs any rounding residue
        if period == total_months:
            principal_pmt = balance

        ending_balance = balance - principal_pmt

        schedule.append(
            {
                "period": period,
                "date": period_date.isoformat(),
                "beginning_balance": round(balance, 2),
                "payment": round(principal_pmt + interest, 2),
                "interest": round(interest, 2),
                "principal": round(principal_pmt, 2),
                "ending_balance": round(max(0, ending_balance), 2),
            }
        )

        balance = max(0.0, ending_balance)

        if balance == 0:
            break

    return schedule


def calculate_total_interest(schedule: List[Dict]) -> float:
    """Calculate total interest paid over loan term."""
    return sum(row["interest"] for row in schedule)
