"""Fix-and-flip returns: acquisition financing, holding period, sale at ARV.

Hard-money lenders fund the rehab through a holdback, so for those loans the rehab
is part of the loan rather than the investor's cash. ROI is measured against the
cash the investor actually brings to closing.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP

from dealbook.engine.validation import validate_flip
from dealbook.models.financing import FlipInputs
from dealbook.models.results import FlipResult, SanityReport

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
HUNDRED = Decimal("100")

# Holding-cost assumptions
PROPERTY_TAX_RATE = Decimal("0.012")   # Annual, of purchase price
INSURANCE_RATE = Decimal("0.0035")     # Annual, of purchase price
MONTHLY_UTILITIES = Decimal("200")
MONTHLY_MAINTENANCE = Decimal("150")
REHAB_DRAW_FACTOR = Decimal("0.5")     # Holdback is drawn over the rehab: half is outstanding on average

# Closing and selling
CLOSING_COST_RATE = Decimal("0.03")    # Points plus other closing costs, of purchase price
MIN_OTHER_CLOSING_RATE = Decimal("0.005")
SELLING_COST_RATE = Decimal("0.08")    # Commission and seller closing, of ARV
HARD_MONEY_POINTS = Decimal("0.02")

MAX_TYPICAL_RATE = Decimal("0.30")
MAX_TYPICAL_HOLD_MONTHS = 36


def _money(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, ROUND_HALF_UP)


def _pct(numerator: Decimal, denominator: Decimal) -> Decimal:
    if denominator <= 0:
        return Decimal("0")
    return (numerator / denominator * HUNDRED).quantize(TWO_PLACES, ROUND_HALF_UP)


def is_hard_money(inputs: FlipInputs) -> bool:
    if inputs.hard_money is not None:
        return inputs.hard_money
    return inputs.points >= HARD_MONEY_POINTS


def holding_costs(inputs: FlipInputs, acquisition_loan: Decimal, rehab_holdback: Decimal) -> Decimal:
    """Interest, taxes, insurance, utilities and upkeep over the holding period."""
    monthly_rate = inputs.annual_interest_rate / 12
    monthly = (
        acquisition_loan * monthly_rate
        + rehab_holdback * monthly_rate * REHAB_DRAW_FACTOR
        + inputs.purchase_price * PROPERTY_TAX_RATE / 12
        + inputs.purchase_price * INSURANCE_RATE / 12
        + MONTHLY_UTILITIES
        + MONTHLY_MAINTENANCE
    )
    return _money(monthly * inputs.holding_months)


def _check_flip(inputs: FlipInputs, result: FlipResult) -> SanityReport:
    report = SanityReport()
    price = inputs.purchase_price
    arv = inputs.after_repair_value

    if arv < price:
        report.errors.append(f"ARV ({arv}) is less than purchase price ({price}); the flip cannot be profitable")
    if inputs.annual_interest_rate > MAX_TYPICAL_RATE:
        report.errors.append(f"Interest rate of {inputs.annual_interest_rate * HUNDRED}% is outside the 0-30% range")
    if inputs.holding_months > MAX_TYPICAL_HOLD_MONTHS:
        report.warnings.append(
            f"Holding period of {inputs.holding_months} months is unusual; typical flips take 3-12 months"
        )

    if result.net_profit > arv:
        report.errors.append("Net profit exceeds ARV")
    if result.net_profit > price and result.profit_margin > 50:
        report.warnings.append(
            f"Net profit exceeds purchase price with a {result.profit_margin}% margin; verify the ARV"
        )
    if result.roi > 1000:
        report.errors.append(f"ROI of {result.roi}% is unrealistic")
    elif result.roi > 500:
        report.warnings.append(f"ROI of {result.roi}% is unusually high; verify inputs")

    holding_pct = _pct(result.holding_costs, price)
    if holding_pct < 1:
        report.warnings.append(f"Holding costs ({holding_pct}% of purchase price) seem too low")
    if holding_pct > 20:
        report.warnings.append(f"Holding costs ({holding_pct}% of purchase price) seem too high")

    return report


def calculate_flip(inputs: FlipInputs) -> FlipResult:
    validate_flip(inputs)

    hard_money = is_hard_money(inputs)
    price = inputs.purchase_price
    rehab = inputs.rehab_costs

    down_payment = _money(price * inputs.down_payment_pct)
    acquisition_loan = _money(price) - down_payment
    rehab_holdback = _money(rehab) if hard_money else Decimal("0")
    cash_for_rehab = Decimal("0") if hard_money else _money(rehab)

    # Points are part of closing costs, charged on the acquisition loan only
    lender_points = _money(acquisition_loan * inputs.points)
    if inputs.points > 0:
        other_rate = max(MIN_OTHER_CLOSING_RATE, CLOSING_COST_RATE - inputs.points)
    else:
        other_rate = CLOSING_COST_RATE
    other_closing = _money(price * other_rate)
    closing = lender_points + other_closing

    holding = holding_costs(inputs, acquisition_loan, rehab_holdback)
    selling = _money(inputs.after_repair_value * SELLING_COST_RATE)

    cash_required = down_payment + closing + cash_for_rehab
    total_investment = _money(price) + _money(rehab) + closing + holding
    total_project_cost = total_investment + selling
    net_profit = _money(inputs.after_repair_value) - total_project_cost

    result = FlipResult(
        cash_required=cash_required,
        total_investment=total_investment,
        total_project_cost=total_project_cost,
        down_payment=down_payment,
        acquisition_loan=acquisition_loan,
        rehab_holdback=rehab_holdback,
        total_loan=acquisition_loan + rehab_holdback,
        hard_money=hard_money,
        holding_costs=holding,
        selling_costs=selling,
        lender_points=lender_points,
        other_closing_costs=other_closing,
        closing_costs=closing,
        net_profit=net_profit,
        roi=_pct(net_profit, cash_required),
        profit_margin=_pct(net_profit, inputs.after_repair_value),
    )
    result.validation = _check_flip(inputs, result)
    logger.debug(
        "Flip: price=%s arv=%s cash_required=%s net_profit=%s roi=%s%%",
        price, inputs.after_repair_value, cash_required, net_profit, result.roi,
    )
    return result
