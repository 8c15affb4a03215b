"""Multi-year investment projection: composes debt and cash flow into a yearly table.

Pure computation. No I/O. ProjectionInputs in, ProjectionResult out.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP

from dealbook.engine import cashflow
from dealbook.engine.debt import yearly_debt_schedule
from dealbook.engine.sanity import check_projection
from dealbook.engine.summary import summarize
from dealbook.engine.validation import validate_inputs
from dealbook.models.financing import ProjectionInputs
from dealbook.models.results import ProjectionResult, YearProjection

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
WHOLE_DOLLARS = Decimal("1")
HUNDRED = Decimal("100")


def run_projection(inputs: ProjectionInputs) -> ProjectionResult:
    """Build the year 1..N projection table and its summary.

    Each year depends only on the running state of the year before it, so the
    table is produced in a single forward pass. Monetary values are rounded to
    `inputs.rounding_unit` before any running sums are taken.
    """
    validate_inputs(inputs)

    financing = inputs.financing
    operating = inputs.operating
    # Compare by value: Decimal("1.00") would otherwise quantize to cents
    unit = WHOLE_DOLLARS if inputs.rounding_unit == WHOLE_DOLLARS else TWO_PLACES

    def money(value: Decimal) -> Decimal:
        return value.quantize(unit, ROUND_HALF_UP)

    loan_amount = money(financing.loan_amount)
    down_payment = money(financing.down_payment_amount)
    initial_cash = money(financing.initial_cash_invested)
    purchase_price = money(financing.purchase_price)

    debt = yearly_debt_schedule(financing, inputs.horizon_years)

    projections: list[YearProjection] = []
    cumulative = Decimal("0")
    prior_balance = loan_amount

    for year in range(1, inputs.horizon_years + 1):
        debt_year = debt[year - 1]

        # Income
        gross = money(cashflow.gross_rent(operating, year))
        vacancy = money(cashflow.vacancy_loss(operating, year))
        effective = gross - vacancy

        # Operations
        expenses = money(cashflow.operating_expenses(operating, year))
        year_noi = effective - expenses
        debt_service = money(debt_year.debt_service)
        cash_flow = year_noi - debt_service
        cumulative += cash_flow

        # Balance sheet
        value = money(cashflow.property_value(financing.value_basis, operating.appreciation_rate, year))
        balance = money(debt_year.ending_balance)
        principal_paydown = prior_balance - balance
        equity = value - balance

        # Returns
        total_return = cumulative + (equity - down_payment)
        if initial_cash > 0:
            total_roi = (total_return / initial_cash * HUNDRED).quantize(TWO_PLACES, ROUND_HALF_UP)
        else:
            total_roi = Decimal("0")

        projections.append(YearProjection(
            year=year,
            gross_rent=gross,
            vacancy_loss=vacancy,
            effective_rent=effective,
            operating_expenses=expenses,
            net_operating_income=year_noi,
            debt_service=debt_service,
            cash_flow=cash_flow,
            cumulative_cash_flow=cumulative,
            principal_paydown=principal_paydown,
            interest_paid=money(debt_year.interest),
            loan_balance=balance,
            property_value=value,
            equity=equity,
            total_return=total_return,
            total_roi=total_roi,
            cap_rate=cashflow.cap_rate(year_noi, purchase_price),
            cash_on_cash=cashflow.cash_on_cash(cash_flow, initial_cash),
            dscr=cashflow.dscr(year_noi, debt_service),
        ))
        prior_balance = balance

    summary = summarize(projections, loan_amount, purchase_price, initial_cash)
    logger.debug(
        "Projected %d years: price=%s loan=%s ending_equity=%s roi=%s%%",
        inputs.horizon_years, purchase_price, loan_amount, summary.ending_equity, summary.total_roi,
    )

    result = ProjectionResult(
        projections=projections,
        summary=summary,
        monthly_payment=debt[0].payment,
        loan_amount=loan_amount,
        down_payment=down_payment,
        initial_cash_invested=initial_cash,
    )
    result.validation = check_projection(result, purchase_price)
    for message in result.validation.errors:
        logger.warning("Implausible projection: %s", message)
    return result
