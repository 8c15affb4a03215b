"""Financing scenario comparison: the same deal under different loan structures."""

from dataclasses import dataclass, replace
from decimal import Decimal, ROUND_HALF_UP

from dealbook.engine.projection import run_projection
from dealbook.models.financing import ProjectionInputs
from dealbook.models.results import ScenarioResult

TWO_PLACES = Decimal("0.01")


@dataclass(frozen=True)
class FinancingScenario:
    name: str
    down_payment_pct: Decimal
    annual_interest_rate: Decimal
    loan_term_years: int = 30
    closing_costs: Decimal | None = None  # None keeps the deal's closing costs


# FHA / conventional ladder shown on house-hack listings
STANDARD_SCENARIOS = (
    FinancingScenario("FHA 3.5% Down", Decimal("0.035"), Decimal("0.0675")),
    FinancingScenario("Conventional 5% Down", Decimal("0.05"), Decimal("0.0725")),
    FinancingScenario("Conventional 20% Down", Decimal("0.20"), Decimal("0.07")),
)


def apply_scenario(inputs: ProjectionInputs, scenario: FinancingScenario) -> ProjectionInputs:
    """Swap the loan structure while keeping price, costs and operating assumptions."""
    financing = replace(
        inputs.financing,
        down_payment=None,
        down_payment_pct=scenario.down_payment_pct,
        loan_amount_override=None,
        annual_interest_rate=scenario.annual_interest_rate,
        loan_term_years=scenario.loan_term_years,
        interest_only=False,
        rate_tiers=(),
        closing_costs=(
            scenario.closing_costs
            if scenario.closing_costs is not None
            else inputs.financing.closing_costs
        ),
    )
    return replace(inputs, financing=financing)


def compare_financing(
    inputs: ProjectionInputs,
    scenarios: tuple[FinancingScenario, ...] | list[FinancingScenario] = STANDARD_SCENARIOS,
) -> list[ScenarioResult]:
    """Run the projection once per scenario. Any invalid scenario aborts the comparison."""
    results: list[ScenarioResult] = []
    for scenario in scenarios:
        result = run_projection(apply_scenario(inputs, scenario))
        year1 = result.projections[0]
        results.append(ScenarioResult(
            name=scenario.name,
            down_payment=result.down_payment,
            loan_amount=result.loan_amount,
            interest_rate=scenario.annual_interest_rate,
            monthly_payment=result.monthly_payment,
            monthly_cash_flow=(year1.cash_flow / 12).quantize(TWO_PLACES, ROUND_HALF_UP),
            total_cash_needed=result.initial_cash_invested,
            cash_on_cash=year1.cash_on_cash,
            total_roi=result.summary.total_roi,
        ))
    return results
