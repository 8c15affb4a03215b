from decimal import Decimal

import pytest

from dealbook.engine.projection import run_projection
from dealbook.engine.summary import REFERENCE_YEARS, select_years, summarize
from dealbook.engine.validation import InvalidInputError


def _summarize(result, rows):
    return summarize(
        rows,
        loan_amount=result.loan_amount,
        purchase_price=Decimal("825000"),
        initial_cash_invested=result.initial_cash_invested,
    )


class TestSelectYears:
    def test_reference_years(self, napa_inputs):
        rows = select_years(run_projection(napa_inputs).projections)
        assert tuple(p.year for p in rows) == REFERENCE_YEARS

    def test_years_past_horizon_ignored(self, seller_financed_inputs):
        rows = select_years(run_projection(seller_financed_inputs).projections)
        assert [p.year for p in rows] == [1, 2, 3, 5, 10]


class TestSummarize:
    def test_full_table(self, napa_inputs):
        result = run_projection(napa_inputs)
        summary = result.summary
        final = result.projections[-1]

        assert summary.years == 30
        assert summary.total_cash_flow == final.cumulative_cash_flow
        assert summary.total_rental_income == sum(p.effective_rent for p in result.projections)
        assert summary.principal_paydown == result.loan_amount
        assert summary.property_appreciation == final.property_value - Decimal("825000")
        assert summary.ending_equity == final.equity
        assert summary.total_roi == final.total_roi
        assert summary.irr is not None and summary.irr > 0
        assert summary.equity_multiple > 1

    def test_average_annual_return(self, napa_inputs):
        summary = run_projection(napa_inputs).summary
        expected = (summary.total_cash_flow / 30).quantize(Decimal("0.01"))
        assert summary.average_annual_return == expected

    def test_sparse_table(self, napa_inputs):
        result = run_projection(napa_inputs)
        sparse = _summarize(result, select_years(result.projections))

        assert sparse.years == 30
        assert sparse.irr is None
        assert sparse.total_cash_flow == result.summary.total_cash_flow
        assert sparse.ending_equity == result.summary.ending_equity
        # Only the milestone rows contribute rent
        assert sparse.total_rental_income < result.summary.total_rental_income

    def test_empty_table_rejected(self):
        with pytest.raises(InvalidInputError):
            summarize([], Decimal("0"), Decimal("100000"), Decimal("0"))
