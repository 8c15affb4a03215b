from dataclasses import dataclass, field
from decimal import Decimal


@dataclass
class YearProjection:
    year: int

    # Income
    gross_rent: Decimal = Decimal("0")
    vacancy_loss: Decimal = Decimal("0")
    effective_rent: Decimal = Decimal("0")

    # Operations
    operating_expenses: Decimal = Decimal("0")
    net_operating_income: Decimal = Decimal("0")
    debt_service: Decimal = Decimal("0")
    cash_flow: Decimal = Decimal("0")
    cumulative_cash_flow: Decimal = Decimal("0")

    # Debt breakdown
    principal_paydown: Decimal = Decimal("0")
    interest_paid: Decimal = Decimal("0")
    loan_balance: Decimal = Decimal("0")

    # Equity
    property_value: Decimal = Decimal("0")
    equity: Decimal = Decimal("0")  # Value - loan balance

    # Returns
    total_return: Decimal = Decimal("0")  # Cumulative cash flow + equity gain over down payment
    total_roi: Decimal = Decimal("0")     # Percent of initial cash invested

    # Snapshot metrics
    cap_rate: Decimal = Decimal("0")      # Percent
    cash_on_cash: Decimal = Decimal("0")  # Percent
    dscr: Decimal = Decimal("0")


@dataclass
class ProjectionSummary:
    total_rental_income: Decimal = Decimal("0")
    total_cash_flow: Decimal = Decimal("0")
    principal_paydown: Decimal = Decimal("0")
    property_appreciation: Decimal = Decimal("0")
    total_return: Decimal = Decimal("0")
    average_annual_return: Decimal = Decimal("0")
    total_roi: Decimal = Decimal("0")
    ending_equity: Decimal = Decimal("0")
    years: int = 0

    irr: Decimal | None = None  # None when the table is sparse
    equity_multiple: Decimal = Decimal("0")


@dataclass
class SanityReport:
    """Plausibility checks on computed figures. Errors flag likely input mistakes; nothing aborts."""
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


@dataclass
class ProjectionResult:
    projections: list[YearProjection] = field(default_factory=list)
    summary: ProjectionSummary = field(default_factory=ProjectionSummary)

    monthly_payment: Decimal = Decimal("0")  # Year-1 payment
    loan_amount: Decimal = Decimal("0")
    down_payment: Decimal = Decimal("0")
    initial_cash_invested: Decimal = Decimal("0")

    validation: SanityReport = field(default_factory=SanityReport)


@dataclass
class ScenarioResult:
    """One row of a financing comparison table."""
    name: str
    down_payment: Decimal = Decimal("0")
    loan_amount: Decimal = Decimal("0")
    interest_rate: Decimal = Decimal("0")
    monthly_payment: Decimal = Decimal("0")
    monthly_cash_flow: Decimal = Decimal("0")  # Year 1
    total_cash_needed: Decimal = Decimal("0")
    cash_on_cash: Decimal = Decimal("0")       # Year 1, percent
    total_roi: Decimal = Decimal("0")          # At horizon, percent


@dataclass
class FlipResult:
    # Cash the investor brings to closing (excludes rehab a hard-money lender holds back)
    cash_required: Decimal = Decimal("0")
    total_investment: Decimal = Decimal("0")    # Purchase + rehab + closing + holding
    total_project_cost: Decimal = Decimal("0")  # Total investment + selling costs

    # Financing
    down_payment: Decimal = Decimal("0")
    acquisition_loan: Decimal = Decimal("0")
    rehab_holdback: Decimal = Decimal("0")
    total_loan: Decimal = Decimal("0")
    hard_money: bool = False

    # Costs
    holding_costs: Decimal = Decimal("0")
    selling_costs: Decimal = Decimal("0")
    lender_points: Decimal = Decimal("0")
    other_closing_costs: Decimal = Decimal("0")
    closing_costs: Decimal = Decimal("0")

    # Returns
    net_profit: Decimal = Decimal("0")
    roi: Decimal = Decimal("0")            # Percent of cash required
    profit_margin: Decimal = Decimal("0")  # Percent of ARV

    validation: SanityReport = field(default_factory=SanityReport)
