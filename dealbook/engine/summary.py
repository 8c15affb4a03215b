"""Fold a projection table into summary statistics.

Works on full tables and on sparse marketing tables that only report a few
milestone years. Nothing is interpolated: each figure comes from the rows present.
"""

from decimal import Decimal, ROUND_HALF_UP

from dealbook.engine.irr import compute_equity_multiple, compute_irr, hold_cash_flows
from dealbook.engine.validation import InvalidInputError
from dealbook.models.results import ProjectionSummary, YearProjection

TWO_PLACES = Decimal("0.01")

# Milestone years shown on the deal pages
REFERENCE_YEARS = (1, 2, 3, 5, 10, 15, 20, 25, 30)


def select_years(
    projections: list[YearProjection], years: tuple[int, ...] = REFERENCE_YEARS
) -> list[YearProjection]:
    """Keep only the rows whose year is in `years`, in table order."""
    wanted = set(years)
    return [p for p in projections if p.year in wanted]


def _is_contiguous(projections: list[YearProjection]) -> bool:
    return [p.year for p in projections] == list(range(1, len(projections) + 1))


def summarize(
    projections: list[YearProjection],
    loan_amount: Decimal,
    purchase_price: Decimal,
    initial_cash_invested: Decimal,
) -> ProjectionSummary:
    if not projections:
        raise InvalidInputError("projections", "cannot summarize an empty table")

    final = projections[-1]
    total_rental_income = sum((p.effective_rent for p in projections), Decimal("0"))
    total_cash_flow = final.cumulative_cash_flow

    # IRR needs every year's cash flow; a sparse table cannot provide it
    irr = None
    if _is_contiguous(projections):
        irr = compute_irr(
            hold_cash_flows(
                initial_cash_invested,
                [p.cash_flow for p in projections],
                final.equity,
            )
        )

    return ProjectionSummary(
        total_rental_income=total_rental_income,
        total_cash_flow=total_cash_flow,
        principal_paydown=loan_amount - final.loan_balance,
        property_appreciation=final.property_value - purchase_price,
        total_return=final.total_return,
        average_annual_return=(total_cash_flow / final.year).quantize(TWO_PLACES, ROUND_HALF_UP),
        total_roi=final.total_roi,
        ending_equity=final.equity,
        years=final.year,
        irr=irr,
        equity_multiple=compute_equity_multiple(
            total_cash_flow + final.equity, initial_cash_invested
        ),
    )
