"""Plain-language summary of a single projection."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel

from backend.core.format import format_duration, format_gbp
from backend.schemas.calc import CalcInputs, CalcResult

# anything below half a penny is shown as zero
_HALF_PENNY = 0.005


class ResultInsights(BaseModel):
    startingBalance: float
    contributionsAdded: float
    interestAfterFees: float
    growthAfterFees: float
    feeImpact: float
    inflationIncreasePercent: float
    targetToday: Optional[float] = None
    requiredFutureNominal: Optional[float] = None
    targetDifference: Optional[float] = None
    messages: List[str]


def summarize_result(
    inputs: CalcInputs,
    result: CalcResult,
    target_today: Optional[float] = None,
) -> ResultInsights:
    """
    Break the after-fees balance into capital and growth and describe the
    effect of fees, inflation and an optional target in today's money.
    """
    total_years = inputs.years + inputs.months / 12
    inflation = inputs.inflationRate

    base_capital = result.finalBalance - result.totalInterest
    interest_after_fees = result.finalBalanceAfterFees - base_capital
    if abs(interest_after_fees) < _HALF_PENNY:
        interest_after_fees = 0.0

    fee_impact = max(0.0, result.finalBalance - result.finalBalanceAfterFees)
    growth_after_fees = result.finalBalanceAfterFees - base_capital

    inflation_increase_pct = 0.0
    if inflation > 0 and total_years > 0:
        inflation_increase_pct = ((1 + inflation) ** total_years - 1) * 100

    required_future: Optional[float] = None
    difference: Optional[float] = None
    if target_today is not None:
        required_future = target_today * (1 + inflation) ** total_years
        difference = result.finalBalanceAfterFees - required_future

    duration = format_duration(inputs.years, inputs.months)
    messages: List[str] = []
    if inflation > 0 and total_years > 0:
        messages.append(
            f"At {inflation * 100:.2f}% inflation, prices are about "
            f"{round(inflation_increase_pct)}% higher over {duration}."
        )
    if inputs.annualFeeRate > 0 and fee_impact > _HALF_PENNY:
        messages.append(
            f"Fees reduce the final balance by about {format_gbp(round(fee_impact))} "
            "compared with no-fee growth."
        )
    messages.append(
        f"Of your final balance (after fees), {format_gbp(round(base_capital))} is contributions "
        f"and {format_gbp(round(growth_after_fees))} is growth."
    )
    if inflation > 0:
        messages.append(
            f"{format_gbp(result.finalBalanceAfterFees)} in the future has purchasing power "
            f"similar to {format_gbp(result.finalBalanceAfterFeesReal)} today."
        )
    if required_future is not None:
        messages.append(
            f"To hit your target in today's money, you need about {format_gbp(required_future)} "
            "at the horizon."
        )

    return ResultInsights(
        startingBalance=0.0 if abs(inputs.principal) < _HALF_PENNY else inputs.principal,
        contributionsAdded=base_capital,
        interestAfterFees=interest_after_fees,
        growthAfterFees=growth_after_fees,
        feeImpact=fee_impact,
        inflationIncreasePercent=inflation_increase_pct,
        targetToday=target_today,
        requiredFutureNominal=required_future,
        targetDifference=difference,
        messages=messages,
    )
