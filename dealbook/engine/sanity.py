"""Plausibility checks on computed projections.

These never raise: a table with an implausible payment or cap rate is still returned,
with the report telling the caller which figures to double-check.
"""

from decimal import Decimal

from dealbook.models.results import ProjectionResult, SanityReport

HUNDRED = Decimal("100")

# A monthly payment above this share of the loan points at a rate entered as a percent twice
MAX_PAYMENT_PCT_OF_LOAN = Decimal("5")
MAX_MONTHLY_CASH_FLOW_PCT_OF_PRICE = Decimal("0.10")
MAX_CASH_ON_CASH = Decimal("500")
MAX_CAP_RATE = Decimal("30")


def check_projection(result: ProjectionResult, purchase_price: Decimal) -> SanityReport:
    """Year-1 payment, cash flow, cash-on-cash and cap rate against typical ranges."""
    report = SanityReport()
    if not result.projections:
        return report
    year_1 = result.projections[0]

    if result.loan_amount > 0:
        payment_pct = result.monthly_payment / result.loan_amount * HUNDRED
        if payment_pct > MAX_PAYMENT_PCT_OF_LOAN:
            report.errors.append(
                f"Monthly payment is {payment_pct:.2f}% of the loan amount; check the rate and term"
            )

    if abs(year_1.cash_flow / 12) > purchase_price * MAX_MONTHLY_CASH_FLOW_PCT_OF_PRICE:
        report.warnings.append("Monthly cash flow is unusually high relative to property value")

    if abs(year_1.cash_on_cash) > MAX_CASH_ON_CASH:
        report.warnings.append("Cash-on-cash return is unusually high; verify inputs")

    if year_1.cap_rate < 0 or year_1.cap_rate > MAX_CAP_RATE:
        report.warnings.append(f"Cap rate of {year_1.cap_rate}% is outside the typical 0-30% range")

    return report
