"""Pydantic schemas for API request/response models.

Bodies use camelCase keys so computed tables drop straight into the property
records the dashboard reads (`thirtyYearProjections.projections`).
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_validator, model_validator
from pydantic.alias_generators import to_camel

from dealbook.config import settings
from dealbook.engine.scenarios import FinancingScenario
from dealbook.engine.summary import REFERENCE_YEARS, select_years
from dealbook.models.financing import (
    FinancingTerms,
    FlipInputs,
    OperatingAssumptions,
    ProjectionInputs,
    RateTier,
    RentBasis,
)
from dealbook.models.results import FlipResult, ProjectionResult

# Decimal inside the engine, plain JSON numbers on the wire
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


def normalize_rate(value: Decimal | None) -> Decimal | None:
    """Accept 6.75 or 0.0675 for 6.75%: 1 and above is read as a percent, so 1 means 1%."""
    if value is None:
        return None
    if value >= 1:
        return value / 100
    return value


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# ---- Request schemas ----

class RateTierRequest(CamelModel):
    start_year: int
    end_year: int
    rate: Decimal


class ExpenseRates(CamelModel):
    """Itemized expenses: rate components on rent plus escalating fixed costs."""
    management_fee_rate: Decimal | None = None
    maintenance_rate: Decimal | None = None
    capex_rate: Decimal | None = Field(None, alias="capExRate")
    fixed_expenses: Decimal = Decimal("0")
    basis: RentBasis = RentBasis.EFFECTIVE


PROJECTION_RATE_FIELDS = (
    "down_payment_percent",
    "annual_interest_rate",
    "rent_growth_rate",
    "vacancy_rate",
    "expense_growth_rate",
    "appreciation_rate",
)
EXPENSE_RATE_FIELDS = ("management_fee_rate", "maintenance_rate", "capex_rate")


class ProjectionRequest(CamelModel):
    # Stored snapshots are already fractions; a 100% down payment must not become 1%
    rates_as_fractions: bool = False

    # Acquisition
    purchase_price: Decimal
    down_payment_amount: Decimal | None = None
    down_payment_percent: Decimal | None = None
    loan_amount: Decimal | None = None
    closing_costs: Decimal = Decimal("0")
    rehab_costs: Decimal = Decimal("0")
    after_repair_value: Decimal | None = None

    # Loan
    annual_interest_rate: Decimal = Decimal("0.07")
    loan_term_years: int = 30
    interest_only: bool = False
    rate_tiers: list[RateTierRequest] = []
    payoff_year: int | None = None

    # Operations
    gross_monthly_rent: Decimal
    rent_growth_rate: Decimal = Decimal("0.03")
    vacancy_rate: Decimal = Decimal("0.05")
    operating_expenses: Decimal | ExpenseRates = Decimal("0")
    expense_growth_rate: Decimal = Decimal("0.025")
    appreciation_rate: Decimal = Decimal("0.03")

    # Output
    horizon_years: int | None = None
    round_to_dollars: bool = False
    sparse: bool = False  # Only the milestone years (summary still covers every year)

    @model_validator(mode="after")
    def normalize_rates(self) -> "ProjectionRequest":
        if self.rates_as_fractions:
            return self
        for name in PROJECTION_RATE_FIELDS:
            setattr(self, name, normalize_rate(getattr(self, name)))
        for tier in self.rate_tiers:
            tier.rate = normalize_rate(tier.rate)
        if isinstance(self.operating_expenses, ExpenseRates):
            for name in EXPENSE_RATE_FIELDS:
                setattr(self.operating_expenses, name, normalize_rate(getattr(self.operating_expenses, name)))
        self.rates_as_fractions = True
        return self

    def snapshot(self) -> dict:
        """JSON form for storage; validating it again yields the same inputs."""
        return self.model_dump(mode="json", by_alias=True)

    def to_inputs(self) -> ProjectionInputs:
        financing = FinancingTerms(
            purchase_price=self.purchase_price,
            down_payment=self.down_payment_amount,
            down_payment_pct=self.down_payment_percent,
            loan_amount_override=self.loan_amount,
            closing_costs=self.closing_costs,
            rehab_costs=self.rehab_costs,
            after_repair_value=self.after_repair_value,
            annual_interest_rate=self.annual_interest_rate,
            loan_term_years=self.loan_term_years,
            interest_only=self.interest_only,
            rate_tiers=tuple(
                RateTier(start_year=t.start_year, end_year=t.end_year, rate=t.rate)
                for t in self.rate_tiers
            ),
            payoff_year=self.payoff_year,
        )

        expense_kwargs: dict = {}
        if isinstance(self.operating_expenses, ExpenseRates):
            rates = self.operating_expenses
            expense_kwargs = dict(
                management_fee_rate=rates.management_fee_rate,
                maintenance_rate=rates.maintenance_rate,
                capex_rate=rates.capex_rate,
                fixed_expenses=rates.fixed_expenses,
                expense_rate_basis=rates.basis,
            )
        else:
            expense_kwargs = dict(operating_expenses=self.operating_expenses)

        operating = OperatingAssumptions(
            gross_monthly_rent=self.gross_monthly_rent,
            rent_growth_rate=self.rent_growth_rate,
            vacancy_rate=self.vacancy_rate,
            expense_growth_rate=self.expense_growth_rate,
            appreciation_rate=self.appreciation_rate,
            **expense_kwargs,
        )

        return ProjectionInputs(
            financing=financing,
            operating=operating,
            horizon_years=settings.default_horizon_years if self.horizon_years is None else self.horizon_years,
            rounding_unit=Decimal("1") if self.round_to_dollars else Decimal("0.01"),
        )


class BatchProjectionRequest(CamelModel):
    deals: list[ProjectionRequest]


class ScenarioRequestItem(CamelModel):
    name: str
    down_payment_percent: Decimal
    annual_interest_rate: Decimal
    loan_term_years: int = 30
    closing_costs: Decimal | None = None

    normalize_rates = field_validator("down_payment_percent", "annual_interest_rate")(normalize_rate)

    def to_scenario(self) -> FinancingScenario:
        return FinancingScenario(
            name=self.name,
            down_payment_pct=self.down_payment_percent,
            annual_interest_rate=self.annual_interest_rate,
            loan_term_years=self.loan_term_years,
            closing_costs=self.closing_costs,
        )


class ScenarioRequest(CamelModel):
    deal: ProjectionRequest
    scenarios: list[ScenarioRequestItem] | None = None  # None runs the standard FHA/conventional set


class FlipRequest(CamelModel):
    purchase_price: Decimal
    after_repair_value: Decimal
    down_payment_percent: Decimal = Decimal("0.10")
    annual_interest_rate: Decimal = Decimal("0.12")
    rehab_costs: Decimal = Decimal("0")
    holding_period_months: int = 6
    points: Decimal = Decimal("0")
    is_hard_money: bool | None = None

    normalize_rates = field_validator("down_payment_percent", "annual_interest_rate", "points")(normalize_rate)

    def to_inputs(self) -> FlipInputs:
        return FlipInputs(
            purchase_price=self.purchase_price,
            after_repair_value=self.after_repair_value,
            down_payment_pct=self.down_payment_percent,
            annual_interest_rate=self.annual_interest_rate,
            rehab_costs=self.rehab_costs,
            holding_months=self.holding_period_months,
            points=self.points,
            hard_money=self.is_hard_money,
        )


class PropertyCreate(CamelModel):
    id: str | None = None
    title: str
    description: str | None = None
    investment_strategy: str = "Buy & Hold"
    property_type: str = "Single Family"
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    price: Decimal | None = None
    monthly_rent: Decimal | None = None
    is_draft: bool = False
    projection_inputs: ProjectionRequest | None = None


class PropertyUpdate(CamelModel):
    title: str | None = None
    description: str | None = None
    investment_strategy: str | None = None
    property_type: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    price: Decimal | None = None
    monthly_rent: Decimal | None = None
    is_draft: bool | None = None
    projection_inputs: ProjectionRequest | None = None


# ---- Response schemas ----

class YearProjectionResponse(CamelModel):
    year: int
    gross_rent: Money
    vacancy_loss: Money
    effective_rent: Money
    operating_expenses: Money
    net_operating_income: Money
    debt_service: Money
    cash_flow: Money
    cumulative_cash_flow: Money
    principal_paydown: Money
    interest_paid: Money
    loan_balance: Money
    property_value: Money
    equity: Money
    total_return: Money
    total_roi: Money = Field(alias="totalROI")
    cap_rate: Money
    cash_on_cash: Money
    dscr: Money


class ProjectionSummaryResponse(CamelModel):
    total_rental_income: Money
    total_cash_flow: Money
    principal_paydown: Money
    property_appreciation: Money
    total_return: Money
    average_annual_return: Money
    total_roi: Money = Field(alias="totalROI")
    ending_equity: Money
    years: int
    irr: Money | None = None
    equity_multiple: Money


class SanityReportResponse(CamelModel):
    is_valid: bool
    errors: list[str] = []
    warnings: list[str] = []


class ProjectionResponse(CamelModel):
    projections: list[YearProjectionResponse]
    summary: ProjectionSummaryResponse
    monthly_payment: Money
    loan_amount: Money
    down_payment: Money
    initial_cash_invested: Money
    validation: SanityReportResponse

    @classmethod
    def from_result(cls, result: ProjectionResult, sparse: bool = False) -> "ProjectionResponse":
        rows = result.projections
        if sparse:
            rows = select_years(rows, REFERENCE_YEARS + (rows[-1].year,))
        return cls(
            projections=[YearProjectionResponse.model_validate(p) for p in rows],
            summary=ProjectionSummaryResponse.model_validate(result.summary),
            monthly_payment=result.monthly_payment,
            loan_amount=result.loan_amount,
            down_payment=result.down_payment,
            initial_cash_invested=result.initial_cash_invested,
            validation=SanityReportResponse.model_validate(result.validation),
        )


class ScenarioResponse(CamelModel):
    name: str
    down_payment: Money
    loan_amount: Money
    interest_rate: Money
    monthly_payment: Money
    monthly_cash_flow: Money
    total_cash_needed: Money
    cash_on_cash: Money
    total_roi: Money = Field(alias="totalROI")


class FlipResponse(CamelModel):
    cash_required: Money
    total_investment: Money
    total_project_cost: Money
    down_payment: Money
    acquisition_loan: Money
    rehab_holdback: Money
    total_loan: Money
    hard_money: bool
    holding_costs: Money
    selling_costs: Money
    lender_points: Money
    other_closing_costs: Money
    closing_costs: Money
    net_profit: Money
    roi: Money
    profit_margin: Money
    validation: SanityReportResponse

    @classmethod
    def from_result(cls, result: FlipResult) -> "FlipResponse":
        return cls.model_validate(result)


class PropertyResponse(CamelModel):
    id: str
    title: str
    description: str | None = None
    investment_strategy: str | None = None
    property_type: str | None = None
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    price: Money | None = None
    monthly_rent: Money | None = None
    is_draft: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
    projection_inputs: dict | None = None
    thirty_year_projections: dict | None = None
