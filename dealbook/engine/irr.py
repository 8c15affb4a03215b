"""Before-tax IRR and equity multiple for a projected hold.

Root finding via scipy; everything else stays in Decimal.
"""

from decimal import Decimal, ROUND_HALF_UP

from scipy.optimize import brentq

FOUR_PLACES = Decimal("0.0001")

# Bracket for the IRR search: -99% to +1000% per year
IRR_LOW = -0.99
IRR_HIGH = 10.0


def compute_irr(cash_flows: list[Decimal]) -> Decimal:
    """Annual IRR of `cash_flows`, where index 0 is the (negative) initial outlay.

    Returns 0 when there is no sign change inside the search bracket.
    """
    if len(cash_flows) < 2:
        return Decimal("0")

    flows = [float(cf) for cf in cash_flows]

    def npv(rate: float) -> float:
        return sum(cf / (1 + rate) ** t for t, cf in enumerate(flows))

    try:
        irr = brentq(npv, IRR_LOW, IRR_HIGH, xtol=1e-10, maxiter=1000)
    except ValueError:
        return Decimal("0")
    return Decimal(str(irr)).quantize(FOUR_PLACES, ROUND_HALF_UP)


def hold_cash_flows(
    initial_cash_invested: Decimal,
    annual_cash_flows: list[Decimal],
    ending_equity: Decimal,
) -> list[Decimal]:
    """Cash flow vector for IRR: outlay, yearly cash flow, equity realized in the final year."""
    flows = [-initial_cash_invested, *annual_cash_flows]
    if annual_cash_flows:
        flows[-1] += ending_equity
    return flows


def compute_equity_multiple(total_cash_returned: Decimal, total_cash_invested: Decimal) -> Decimal:
    if total_cash_invested == 0:
        return Decimal("0")
    return (total_cash_returned / total_cash_invested).quantize(FOUR_PLACES, ROUND_HALF_UP)
