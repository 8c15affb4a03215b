from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class RentBasis(str, Enum):
    """Which rent figure the expense-rate components are multiplied against."""
    EFFECTIVE = "effective"
    GROSS = "gross"


class ExpenseMode(str, Enum):
    LUMP_SUM = "lump_sum"   # Single year-1 figure escalated each year
    ITEMIZED = "itemized"   # Rate components on rent + escalating fixed expenses


@dataclass(frozen=True)
class RateTier:
    """Annual rate applied to loan years start_year..end_year (inclusive, 1-indexed)."""
    start_year: int
    end_year: int
    rate: Decimal

    def covers(self, year: int) -> bool:
        return self.start_year <= year <= self.end_year


@dataclass(frozen=True)
class FinancingTerms:
    # Acquisition
    purchase_price: Decimal
    down_payment: Decimal | None = None      # Dollars
    down_payment_pct: Decimal | None = None  # Fraction of price (0.035 = 3.5%)
    loan_amount_override: Decimal | None = None
    closing_costs: Decimal = Decimal("0")
    rehab_costs: Decimal = Decimal("0")
    after_repair_value: Decimal | None = None  # Post-rehab valuation basis

    # Loan
    annual_interest_rate: Decimal = Decimal("0.07")
    loan_term_years: int = 30
    interest_only: bool = False
    rate_tiers: tuple[RateTier, ...] = ()
    payoff_year: int | None = None  # Balance and debt service are 0 after this year

    @property
    def down_payment_amount(self) -> Decimal:
        if self.down_payment is not None:
            return self.down_payment
        if self.down_payment_pct is not None:
            return self.purchase_price * self.down_payment_pct
        if self.loan_amount_override is not None:
            return self.purchase_price - self.loan_amount_override
        return Decimal("0")

    @property
    def loan_amount(self) -> Decimal:
        if self.loan_amount_override is not None:
            return self.loan_amount_override
        return self.purchase_price - self.down_payment_amount

    @property
    def initial_cash_invested(self) -> Decimal:
        return self.down_payment_amount + self.closing_costs + self.rehab_costs

    @property
    def value_basis(self) -> Decimal:
        """ARV when supplied, otherwise purchase price."""
        if self.after_repair_value is not None:
            return self.after_repair_value
        return self.purchase_price

    def rate_for_year(self, year: int) -> Decimal:
        if not self.rate_tiers:
            return self.annual_interest_rate
        for tier in self.rate_tiers:
            if tier.covers(year):
                return tier.rate
        # Past the last tier the final rate stays in effect
        return self.rate_tiers[-1].rate


@dataclass(frozen=True)
class OperatingAssumptions:
    # Income
    gross_monthly_rent: Decimal
    rent_growth_rate: Decimal = Decimal("0.03")
    vacancy_rate: Decimal = Decimal("0.05")

    # Expenses (lump-sum style)
    operating_expenses: Decimal = Decimal("0")  # Annual, year 1
    expense_growth_rate: Decimal = Decimal("0.025")

    # Expenses (itemized style): any rate set switches to itemized mode
    management_fee_rate: Decimal | None = None
    maintenance_rate: Decimal | None = None
    capex_rate: Decimal | None = None
    fixed_expenses: Decimal = Decimal("0")  # Annual taxes, insurance, HOA, year 1
    expense_rate_basis: RentBasis = RentBasis.EFFECTIVE

    # Value
    appreciation_rate: Decimal = Decimal("0.03")

    @property
    def expense_mode(self) -> ExpenseMode:
        if any(
            r is not None
            for r in (self.management_fee_rate, self.maintenance_rate, self.capex_rate)
        ):
            return ExpenseMode.ITEMIZED
        return ExpenseMode.LUMP_SUM

    @property
    def expense_rate_total(self) -> Decimal:
        return sum(
            (r for r in (self.management_fee_rate, self.maintenance_rate, self.capex_rate)
             if r is not None),
            Decimal("0"),
        )


@dataclass(frozen=True)
class ProjectionInputs:
    financing: FinancingTerms
    operating: OperatingAssumptions
    horizon_years: int = 30
    rounding_unit: Decimal = Decimal("0.01")  # Decimal("1") rounds to whole dollars


@dataclass(frozen=True)
class FlipInputs:
    """Fix-and-flip: buy, rehab, hold a few months, sell at ARV."""
    purchase_price: Decimal
    after_repair_value: Decimal
    down_payment_pct: Decimal = Decimal("0.10")
    annual_interest_rate: Decimal = Decimal("0.12")
    rehab_costs: Decimal = Decimal("0")
    holding_months: int = 6
    points: Decimal = Decimal("0")  # Lender points, fraction of the acquisition loan
    hard_money: bool | None = None  # None: inferred from points (2+ points means hard money)
