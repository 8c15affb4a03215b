"""Input validation for the projection engine.

Fails fast with a field-level message before any computation runs.
"""

from decimal import Decimal

from dealbook.models.financing import (
    FinancingTerms,
    FlipInputs,
    OperatingAssumptions,
    ProjectionInputs,
)

ALLOWED_ROUNDING_UNITS = (Decimal("0.01"), Decimal("1"))
CENT = Decimal("0.01")


class InvalidInputError(ValueError):
    """Raised when projection inputs cannot produce a meaningful table."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


def _non_negative(field: str, value: Decimal | None) -> None:
    if value is not None and value < 0:
        raise InvalidInputError(field, f"must not be negative (got {value})")


def _fraction(field: str, value: Decimal | None) -> None:
    if value is not None and not (0 <= value <= 1):
        raise InvalidInputError(field, f"must be between 0 and 1 (got {value})")


def validate_loan(principal: Decimal, annual_rate: Decimal, term_years: int) -> None:
    _non_negative("loan_amount", principal)
    _non_negative("annual_interest_rate", annual_rate)
    if term_years <= 0:
        raise InvalidInputError("loan_term_years", f"must be positive (got {term_years})")


def validate_rate_tiers(financing: FinancingTerms) -> None:
    """Tiers must start at year 1 and be contiguous and non-overlapping."""
    expected_start = 1
    for i, tier in enumerate(financing.rate_tiers):
        field = f"rate_tiers[{i}]"
        if tier.start_year > tier.end_year:
            raise InvalidInputError(
                field, f"start_year {tier.start_year} is after end_year {tier.end_year}"
            )
        if tier.start_year < expected_start:
            raise InvalidInputError(field, f"overlaps previous tier at year {tier.start_year}")
        if tier.start_year > expected_start:
            raise InvalidInputError(
                field, f"gap before year {tier.start_year}; expected tier starting at {expected_start}"
            )
        _non_negative(f"{field}.rate", tier.rate)
        expected_start = tier.end_year + 1


def validate_financing(financing: FinancingTerms) -> None:
    if financing.purchase_price <= 0:
        raise InvalidInputError(
            "purchase_price", f"must be positive (got {financing.purchase_price})"
        )
    _non_negative("down_payment", financing.down_payment)
    _fraction("down_payment_pct", financing.down_payment_pct)
    _non_negative("closing_costs", financing.closing_costs)
    _non_negative("rehab_costs", financing.rehab_costs)
    _non_negative("after_repair_value", financing.after_repair_value)
    _non_negative("loan_amount", financing.loan_amount_override)

    if financing.loan_amount > financing.purchase_price:
        raise InvalidInputError(
            "loan_amount",
            f"{financing.loan_amount} exceeds purchase price {financing.purchase_price}",
        )
    if financing.down_payment_amount > financing.purchase_price:
        raise InvalidInputError(
            "down_payment",
            f"{financing.down_payment_amount} exceeds purchase price {financing.purchase_price}",
        )

    explicit_down = financing.down_payment is not None or financing.down_payment_pct is not None
    if explicit_down and financing.loan_amount_override is not None:
        implied = financing.purchase_price - financing.down_payment_amount
        if abs(implied - financing.loan_amount_override) >= CENT:
            raise InvalidInputError(
                "loan_amount",
                f"{financing.loan_amount_override} does not equal purchase price "
                f"minus down payment ({implied})",
            )

    validate_loan(financing.loan_amount, financing.annual_interest_rate, financing.loan_term_years)
    validate_rate_tiers(financing)

    if financing.payoff_year is not None and financing.payoff_year < 1:
        raise InvalidInputError("payoff_year", f"must be at least 1 (got {financing.payoff_year})")


def validate_operating(operating: OperatingAssumptions) -> None:
    _non_negative("gross_monthly_rent", operating.gross_monthly_rent)
    _non_negative("rent_growth_rate", operating.rent_growth_rate)
    _fraction("vacancy_rate", operating.vacancy_rate)
    _non_negative("operating_expenses", operating.operating_expenses)
    _non_negative("expense_growth_rate", operating.expense_growth_rate)
    _non_negative("appreciation_rate", operating.appreciation_rate)
    _non_negative("fixed_expenses", operating.fixed_expenses)
    _fraction("management_fee_rate", operating.management_fee_rate)
    _fraction("maintenance_rate", operating.maintenance_rate)
    _fraction("capex_rate", operating.capex_rate)


def validate_inputs(inputs: ProjectionInputs) -> None:
    """Raise InvalidInputError for the first problem found."""
    if inputs.horizon_years <= 0:
        raise InvalidInputError("horizon_years", f"must be positive (got {inputs.horizon_years})")
    if inputs.rounding_unit not in ALLOWED_ROUNDING_UNITS:
        raise InvalidInputError(
            "rounding_unit", f"must be 0.01 or 1 (got {inputs.rounding_unit})"
        )
    validate_financing(inputs.financing)
    validate_operating(inputs.operating)


def validate_flip(inputs: FlipInputs) -> None:
    if inputs.purchase_price <= 0:
        raise InvalidInputError("purchase_price", f"must be positive (got {inputs.purchase_price})")
    if inputs.after_repair_value <= 0:
        raise InvalidInputError(
            "after_repair_value", f"must be positive (got {inputs.after_repair_value})"
        )
    _fraction("down_payment_pct", inputs.down_payment_pct)
    _non_negative("annual_interest_rate", inputs.annual_interest_rate)
    _non_negative("rehab_costs", inputs.rehab_costs)
    _fraction("points", inputs.points)
    if inputs.holding_months < 1:
        raise InvalidInputError("holding_months", f"must be at least 1 (got {inputs.holding_months})")
