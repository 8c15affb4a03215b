"""Loan payment and outstanding-balance computation.

Pure functions: Decimal in, dataclass out. No I/O.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from dealbook.engine.validation import validate_loan
from dealbook.models.financing import FinancingTerms

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")


@dataclass(frozen=True)
class DebtYear:
    year: int
    payment: Decimal         # Monthly payment in effect during the year
    debt_service: Decimal    # Sum of the year's payments
    principal: Decimal       # Balance reduction, including a balloon payoff
    interest: Decimal
    ending_balance: Decimal


def monthly_payment(principal: Decimal, annual_rate: Decimal, term_years: int) -> Decimal:
    """Level monthly payment for a fully amortizing loan."""
    if principal <= 0:
        return Decimal("0")
    n = term_years * 12
    if annual_rate <= 0:
        return (principal / n).quantize(TWO_PLACES, ROUND_HALF_UP)

    r = annual_rate / 12
    # M = P * r / (1 - (1+r)^-n)
    payment = principal * r / (1 - (1 + r) ** -n)
    return payment.quantize(TWO_PLACES, ROUND_HALF_UP)


def interest_only_payment(principal: Decimal, annual_rate: Decimal) -> Decimal:
    if principal <= 0:
        return Decimal("0")
    return (principal * annual_rate / 12).quantize(TWO_PLACES, ROUND_HALF_UP)


def balance_after_payments(
    principal: Decimal, annual_rate: Decimal, payment: Decimal, months: int
) -> Decimal:
    """Closed-form outstanding balance after `months` level payments, floored at 0."""
    if months <= 0:
        return principal
    r = annual_rate / 12
    if r == 0:
        balance = principal - payment * months
    else:
        growth = (1 + r) ** months
        balance = principal * growth - payment * (growth - 1) / r
    return max(balance, ZERO)


def loan_balance_at_year(
    principal: Decimal,
    annual_rate: Decimal,
    term_years: int,
    years: int,
    interest_only: bool = False,
) -> Decimal:
    """Outstanding principal after `years` years of monthly payments.

    Exactly 0 once the term has run. Interest-only loans never amortize.
    """
    validate_loan(principal, annual_rate, term_years)
    if years <= 0 or interest_only:
        return principal.quantize(TWO_PLACES, ROUND_HALF_UP)
    if years >= term_years:
        return Decimal("0.00")
    pmt = monthly_payment(principal, annual_rate, term_years)
    balance = balance_after_payments(principal, annual_rate, pmt, years * 12)
    return balance.quantize(TWO_PLACES, ROUND_HALF_UP)


def yearly_debt_schedule(financing: FinancingTerms, horizon_years: int) -> list[DebtYear]:
    """Debt service and balance for every year of the horizon.

    The payment is re-derived whenever the rate changes (tier boundaries): interest-only
    loans recompute interest on the outstanding balance, amortizing loans re-amortize the
    remaining balance over the remaining term. After payoff_year the balance is retired
    as a balloon and debt service drops to 0.
    """
    principal = financing.loan_amount
    validate_loan(principal, financing.annual_interest_rate, financing.loan_term_years)

    schedule: list[DebtYear] = []
    balance = principal
    payment = ZERO
    current_rate: Decimal | None = None

    for year in range(1, horizon_years + 1):
        past_payoff = financing.payoff_year is not None and year > financing.payoff_year
        # Interest-only principal comes due as a balloon once the term has run
        past_term = financing.interest_only and year > financing.loan_term_years
        if balance <= 0 or past_payoff or past_term:
            schedule.append(DebtYear(
                year=year,
                payment=ZERO,
                debt_service=ZERO,
                principal=balance.quantize(TWO_PLACES, ROUND_HALF_UP),
                interest=ZERO,
                ending_balance=Decimal("0.00"),
            ))
            balance = ZERO
            continue

        rate = financing.rate_for_year(year)
        if rate != current_rate:
            if financing.interest_only:
                payment = interest_only_payment(balance, rate)
            else:
                remaining_years = financing.loan_term_years - (year - 1)
                payment = monthly_payment(balance, rate, remaining_years)
            current_rate = rate

        if financing.interest_only:
            ending = balance
        elif year >= financing.loan_term_years:
            ending = ZERO
        else:
            ending = balance_after_payments(balance, rate, payment, 12)

        debt_service = payment * 12
        principal_paid = (balance - ending).quantize(TWO_PLACES, ROUND_HALF_UP)

        schedule.append(DebtYear(
            year=year,
            payment=payment,
            debt_service=debt_service,
            principal=principal_paid,
            interest=max(debt_service - principal_paid, ZERO),
            ending_balance=ending.quantize(TWO_PLACES, ROUND_HALF_UP),
        ))
        balance = ending

    return schedule
