"""Income, expense and snapshot metrics for a single projection year.

Pure functions: Decimal in, Decimal out. No I/O. Values are unrounded; the
projection recurrence rounds once when it builds each year's record.
"""

from decimal import Decimal, ROUND_HALF_UP

from dealbook.models.financing import ExpenseMode, OperatingAssumptions, RentBasis

TWO_PLACES = Decimal("0.01")
FOUR_PLACES = Decimal("0.0001")
HUNDRED = Decimal("100")


def gross_rent(operating: OperatingAssumptions, year: int) -> Decimal:
    """Gross scheduled annual rent for a given year (1-indexed)."""
    growth = (1 + operating.rent_growth_rate) ** (year - 1)
    return operating.gross_monthly_rent * 12 * growth


def vacancy_loss(operating: OperatingAssumptions, year: int) -> Decimal:
    """Flat percentage of annual gross rent."""
    return gross_rent(operating, year) * operating.vacancy_rate


def effective_rent(operating: OperatingAssumptions, year: int) -> Decimal:
    return gross_rent(operating, year) - vacancy_loss(operating, year)


def operating_expenses(operating: OperatingAssumptions, year: int) -> Decimal:
    """Annual operating expenses.

    Lump-sum mode escalates the year-1 figure. Itemized mode applies the rate
    components to the current year's rent and escalates the fixed expenses.
    """
    escalation = (1 + operating.expense_growth_rate) ** (year - 1)
    if operating.expense_mode == ExpenseMode.LUMP_SUM:
        return operating.operating_expenses * escalation

    if operating.expense_rate_basis == RentBasis.GROSS:
        rent = gross_rent(operating, year)
    else:
        rent = effective_rent(operating, year)
    return rent * operating.expense_rate_total + operating.fixed_expenses * escalation


def noi(operating: OperatingAssumptions, year: int) -> Decimal:
    """Net Operating Income = effective rent - operating expenses."""
    return effective_rent(operating, year) - operating_expenses(operating, year)


def property_value(basis: Decimal, appreciation_rate: Decimal, year: int) -> Decimal:
    """Estimated value at end of year."""
    return basis * (1 + appreciation_rate) ** year


def cap_rate(noi_amount: Decimal, purchase_price: Decimal) -> Decimal:
    """Cap rate = NOI / purchase price, as a percentage."""
    if purchase_price == 0:
        return Decimal("0")
    return (noi_amount / purchase_price * HUNDRED).quantize(TWO_PLACES, ROUND_HALF_UP)


def cash_on_cash(cash_flow: Decimal, initial_cash_invested: Decimal) -> Decimal:
    """Cash-on-cash return = annual cash flow / cash invested, as a percentage."""
    if initial_cash_invested == 0:
        return Decimal("0")
    return (cash_flow / initial_cash_invested * HUNDRED).quantize(TWO_PLACES, ROUND_HALF_UP)


def dscr(noi_amount: Decimal, annual_debt_service: Decimal) -> Decimal:
    """Debt Service Coverage Ratio = NOI / annual debt service."""
    if annual_debt_service == 0:
        return Decimal("0")
    return (noi_amount / annual_debt_service).quantize(FOUR_PLACES, ROUND_HALF_UP)
