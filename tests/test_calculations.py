"""
Tests for the financial math library.
"""

import pytest
from datetime import date

from deal_analyzer.calculations.irr import (
    calculate_irr,
    calculate_multiple,
    calculate_npv,
    calculate_profit,
    count_sign_changes,
)
from deal_analyzer.calculations.amortization import (
    calculate_annual_principal_paid,
    calculate_loan_amount,
    calculate_payment,
    calculate_principal_payment,
    calculate_remaining_balance,
    calculate_total_interest,
    generate_amortization_schedule,
)
from deal_analyzer.calculations import metrics


class TestIRRCalculations:
    """Test IRR calculation functions."""

    def test_calculate_irr_simple(self):
        """Investment of 100 returning 110 after one year is a 10% IRR."""
        irr = calculate_irr([-100, 110])
        assert irr == pytest.approx(10.0, abs=0.01)

    def test_calculate_irr_multi_period(self):
        """Investment of 100, annual returns of 20, 100 back at the end."""
        irr = calculate_irr([-100, 20, 20, 20, 20, 120])
        assert irr == pytest.approx(20.0, abs=0.01)

    def test_irr_negative_returns(self):
        irr = calculate_irr([-100, 40, 40, 10])
        assert irr < 0

    def test_irr_no_sign_change_is_zero(self):
        assert calculate_irr([100, 50, 25]) == 0
        assert calculate_irr([-100, -50]) == 0

    def test_zero_counts_as_positive_sign(self):
        assert count_sign_changes([0, 10, 20]) == 0
        assert count_sign_changes([-10, 0]) == 1

    def test_irr_bounds_are_parameters(self):
        """A 50% return cannot be found when the search tops out at 20%."""
        irr = calculate_irr([-100, 150], upper=0.2)
        assert irr <= 20.0

    def test_calculate_npv(self):
        npv = calculate_npv([-100, 50, 50, 50], 0.10)
        assert npv == pytest.approx(24.3426, abs=0.001)

    def test_npv_at_zero_rate_is_sum(self):
        assert calculate_npv([-100, 30, 80], 0.0) == pytest.approx(10.0)

    def test_multiple_and_profit(self):
        cash_flows = [-100, 20, 20, 120]
        assert calculate_multiple(cash_flows) == pytest.approx(1.6)
        assert calculate_profit(cash_flows) == pytest.approx(60.0)

    def test_multiple_without_outflows(self):
        assert calculate_multiple([10, 20]) == 0


class TestAmortization:
    """Test loan amortization calculations."""

    def test_loan_amount_is_price_minus_down(self):
        assert calculate_loan_amount(300000, 60000) == 240000
        assert calculate_loan_amount(123456.78, 23456.78) == 123456.78 - 23456.78

    def test_payment_on_full_price(self):
        """$300k at 4.5% for 30 years is about $1,520/month."""
        payment = calculate_payment(300000, 4.5, 30)
        assert payment == pytest.approx(1520, abs=1)

    def test_payment_on_deal_loan(self):
        """The same deal with $60k down finances $240k."""
        loan = calculate_loan_amount(300000, 60000)
        payment = calculate_payment(loan, 4.5, 30)
        assert payment == pytest.approx(1216.04, abs=0.01)

    def test_zero_rate_payment(self):
        assert calculate_payment(120000, 0, 10) == pytest.approx(1000.0)

    def test_payment_without_principal(self):
        assert calculate_payment(0, 5, 30) == 0
        assert calculate_payment(100000, 5, 0) == 0

    def test_remaining_balance(self):
        payment = calculate_payment(100000, 6, 5)
        monthly_rate = 6 / 12 / 100
        assert calculate_remaining_balance(100000, payment, monthly_rate, 0) == pytest.approx(100000)
        assert calculate_remaining_balance(100000, payment, monthly_rate, 60) == pytest.approx(0, abs=0.01)

    def test_principal_payment_grows(self):
        payment = calculate_payment(200000, 5, 30)
        first = calculate_principal_payment(payment, 5, 30, 1)
        last = calculate_principal_payment(payment, 5, 30, 360)
        assert first == pytest.approx(payment - 200000 * 0.05 / 12, abs=0.01)
        assert last > first

    def test_annual_principal_paid_clamped(self):
        # Interest exceeds debt service
        assert calculate_annual_principal_paid(100000, 1000, 5) == 0
        # Debt service larger than what is owed
        assert calculate_annual_principal_paid(500, 12000, 5) == 500
        assert calculate_annual_principal_paid(0, 12000, 5) == 0

    def test_amortization_schedule_length(self):
        schedule = generate_amortization_schedule(100000, 6, 5, start_date=date(2025, 1, 1))
        assert len(schedule) == 60
        assert schedule[0]["date"] == "2025-01-01"
        assert schedule[12]["date"] == "2026-01-01"

    def test_amortization_final_balance(self):
        schedule = generate_amortization_schedule(100000, 6, 5, start_date=date(2025, 1, 1))
        assert abs(schedule[-1]["ending_balance"]) < 1

    def test_amortization_total_interest(self):
        schedule = generate_amortization_schedule(100000, 6, 5, start_date=date(2025, 1, 1))
        payment = calculate_payment(100000, 6, 5)
        assert calculate_total_interest(schedule) == pytest.approx(payment * 60 - 100000, abs=1)

    def test_zero_rate_schedule_has_no_interest(self):
        schedule = generate_amortization_schedule(12000, 0, 1, start_date=date(2025, 1, 1))
        assert calculate_total_interest(schedule) == 0
        assert all(row["principal"] == 1000 for row in schedule)


class TestMetrics:
    """Test ratio and return formulas."""

    def test_cap_rate(self):
        assert metrics.calculate_cap_rate(15000, 300000) == 5.0

    def test_break_even_occupancy(self):
        assert metrics.calculate_break_even_occupancy(10000, 15000, 30000) == pytest.approx(83.3333, abs=0.001)

    def test_equity_multiple(self):
        assert metrics.calculate_equity_multiple(150000, 50000) == 3.0
        assert metrics.calculate_equity_multiple(150000, 0) == 0

    def test_price_per_bedroom(self):
        assert metrics.calculate_price_per_bedroom(300000, 3) == 100000
        assert metrics.calculate_price_per_bedroom(300000, 0) == 0

    @pytest.mark.parametrize(
        "func",
        [
            metrics.calculate_cap_rate,
            metrics.calculate_dscr,
            metrics.calculate_cash_on_cash_return,
            metrics.calculate_operating_expense_ratio,
            metrics.calculate_grm,
            metrics.calculate_price_per_sqft,
            metrics.calculate_price_per_unit,
            metrics.calculate_price_per_bedroom,
            metrics.calculate_equity_multiple,
            metrics.calculate_one_percent_rule_value,
            metrics.calculate_rent_to_price_ratio,
            metrics.calculate_debt_to_income_ratio,
            metrics.calculate_vacancy_rate,
            metrics.calculate_turnover_cost_impact,
        ],
    )
    def test_zero_denominator_returns_zero(self, func):
        assert func(1000, 0) == 0

    def test_break_even_without_income(self):
        assert metrics.calculate_break_even_occupancy(1000, 1000, 0) == 0

    def test_noi_and_cash_flow(self):
        noi = metrics.calculate_noi(30000, 12000)
        assert noi == 18000
        assert metrics.calculate_cash_flow(noi, 14000) == 4000

    def test_dscr(self):
        assert metrics.calculate_dscr(18000, 12000) == pytest.approx(1.5)

    def test_fifty_percent_rule(self):
        assert metrics.check_fifty_percent_rule(15000, 30000) is True
        assert metrics.check_fifty_percent_rule(15001, 30000) is False
        assert metrics.check_fifty_percent_rule(100, 0) is False

    def test_return_on_improvements(self):
        assert metrics.calculate_return_on_improvements(12000, 10000, 20000) == pytest.approx(10.0)
        assert metrics.calculate_return_on_improvements(12000, None, 20000) == 8.0
        assert metrics.calculate_return_on_improvements(12000, None, 0) == 0

    def test_exit_analysis(self):
        exit_analysis = metrics.calculate_exit_analysis(
            property_value=400000,
            loan_balance=200000,
            selling_costs=6,
            total_investment=65000,
            cumulative_cash_flow=30000,
        )
        assert exit_analysis.selling_costs == pytest.approx(24000)
        assert exit_analysis.net_proceeds_from_sale == pytest.approx(176000)
        assert exit_analysis.total_return == pytest.approx(141000)
        assert exit_analysis.return_on_investment == pytest.approx(141000 / 65000 * 100)

    def test_exit_analysis_without_investment(self):
        exit_analysis = metrics.calculate_exit_analysis(100000, 0, 6, 0, 0)
        assert exit_analysis.return_on_investment == 0

    def test_metric_thresholds(self):
        assert metrics.get_metric_threshold("dscr", "MF") == 1.25
        with pytest.raises(KeyError):
            metrics.get_metric_threshold("dscr", "CONDO")
