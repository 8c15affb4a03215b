from dataclasses import replace
from decimal import Decimal

import pytest

from dealbook.engine.projection import run_projection
from dealbook.engine.validation import InvalidInputError


class TestProjectionTable:
    def test_one_row_per_year(self, napa_inputs):
        result = run_projection(napa_inputs)
        assert [p.year for p in result.projections] == list(range(1, 31))

    def test_loan_terms_reported(self, napa_inputs):
        result = run_projection(napa_inputs)
        assert result.loan_amount == Decimal("796125.00")
        assert result.down_payment == Decimal("28875.00")
        assert result.initial_cash_invested == Decimal("28875.00")
        assert result.monthly_payment == result.projections[0].debt_service / 12

    def test_row_identities(self, napa_inputs):
        for p in run_projection(napa_inputs).projections:
            assert p.effective_rent == p.gross_rent - p.vacancy_loss
            assert p.net_operating_income == p.effective_rent - p.operating_expenses
            assert p.cash_flow == p.net_operating_income - p.debt_service
            assert p.equity == p.property_value - p.loan_balance

    def test_cumulative_cash_flow_is_running_sum(self, napa_inputs):
        running = Decimal("0")
        for p in run_projection(napa_inputs).projections:
            running += p.cash_flow
            assert p.cumulative_cash_flow == running

    def test_thirty_year_loan_fully_paid(self, napa_inputs):
        result = run_projection(napa_inputs)
        assert result.projections[-1].loan_balance == Decimal("0")
        assert sum(p.principal_paydown for p in result.projections) == result.loan_amount

    def test_equity_never_decreases(self, napa_inputs):
        equities = [p.equity for p in run_projection(napa_inputs).projections]
        assert all(later >= earlier for earlier, later in zip(equities, equities[1:]))

    def test_idempotent(self, napa_inputs):
        assert run_projection(napa_inputs) == run_projection(napa_inputs)


class TestNapaHouseHack:
    def test_year_1_cash_flow(self, napa_inputs):
        """$47,084 NOI against ~$61,964 of debt service."""
        year_1 = run_projection(napa_inputs).projections[0]
        assert abs(year_1.cash_flow - Decimal("-14880")) < Decimal("1")

    def test_year_30_equity(self, napa_inputs):
        year_30 = run_projection(napa_inputs).projections[-1]
        target = Decimal("3569906")
        assert abs(year_30.equity - target) / target < Decimal("0.01")

    def test_total_return_definition(self, napa_inputs):
        result = run_projection(napa_inputs)
        for p in result.projections:
            assert p.total_return == p.cumulative_cash_flow + (p.equity - result.down_payment)


class TestSellerFinancedDeal:
    def test_interest_only_debt_service(self, seller_financed_inputs):
        year_1 = run_projection(seller_financed_inputs).projections[0]
        assert abs(year_1.debt_service - Decimal("50000")) < Decimal("1")

    def test_balance_flat_through_payoff_year(self, seller_financed_inputs):
        rows = run_projection(seller_financed_inputs).projections
        for p in rows[:4]:
            assert p.loan_balance == Decimal("1000000")
            assert p.principal_paydown == Decimal("0")

    def test_unencumbered_after_payoff(self, seller_financed_inputs):
        rows = run_projection(seller_financed_inputs).projections
        assert rows[4].principal_paydown == Decimal("1000000")
        for p in rows[4:]:
            assert p.debt_service == Decimal("0")
            assert p.loan_balance == Decimal("0")
            assert p.cash_flow == p.net_operating_income
            assert p.equity == p.property_value
            assert p.dscr == Decimal("0")


class TestZeroRateLoan:
    def test_linear_balance(self, zero_rate_inputs):
        for p in run_projection(zero_rate_inputs).projections:
            assert p.loan_balance == Decimal("360000") - Decimal("12000") * p.year

    def test_no_interest(self, zero_rate_inputs):
        result = run_projection(zero_rate_inputs)
        assert result.monthly_payment == Decimal("1000.00")
        assert all(p.interest_paid == Decimal("0") for p in result.projections)


class TestHorizonAndRounding:
    def test_single_year_horizon(self, napa_inputs):
        result = run_projection(replace(napa_inputs, horizon_years=1))
        assert len(result.projections) == 1
        assert result.summary.years == 1
        assert result.summary.total_roi == result.projections[0].total_roi

    def test_round_to_dollars(self, napa_inputs):
        result = run_projection(replace(napa_inputs, rounding_unit=Decimal("1")))
        for p in result.projections:
            for value in (p.gross_rent, p.operating_expenses, p.cash_flow, p.loan_balance, p.equity):
                assert value == value.to_integral_value()

    def test_dollar_unit_compared_by_value(self, napa_inputs):
        result = run_projection(replace(napa_inputs, rounding_unit=Decimal("1.00")))
        year_1 = result.projections[0]
        assert year_1.cash_flow == year_1.cash_flow.to_integral_value()
        assert year_1.loan_balance == year_1.loan_balance.to_integral_value()
        assert result == run_projection(replace(napa_inputs, rounding_unit=Decimal("1")))

    def test_zero_horizon_rejected(self, napa_inputs):
        with pytest.raises(InvalidInputError) as exc:
            run_projection(replace(napa_inputs, horizon_years=0))
        assert exc.value.field == "horizon_years"
