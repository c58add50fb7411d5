"""Month-by-month compound growth projection.

Every period is one calendar month. Contribution frequencies are converted to
an effective monthly amount and compounding frequencies to an effective
monthly rate, so the nominal APR is preserved across compounding modes.

Values are carried at full float precision; rounding belongs to whoever
displays them.
"""

from __future__ import annotations

import logging
import math
from typing import List

from backend.schemas.calc import (
    CalcInputs,
    CalcResult,
    ChartPoint,
    CompoundFrequency,
    ContributionFrequency,
    ContributionTiming,
    MonthlyBreakdown,
    YearlyBreakdown,
)

logger = logging.getLogger(__name__)


def effective_monthly_rate(apr: float, compound: CompoundFrequency) -> float:
    """
    Convert a nominal APR to the monthly rate that honours `compound`:

      daily     -> (1 + r/365)^(365/12) - 1
      monthly   -> r / 12
      quarterly -> (1 + r/4)^(1/3) - 1
      annual    -> (1 + r)^(1/12) - 1
    """
    if apr == 0:
        return 0.0
    if compound == CompoundFrequency.DAILY:
        return (1 + apr / 365) ** (365 / 12) - 1
    elif compound == CompoundFrequency.MONTHLY:
        return apr / 12
    elif compound == CompoundFrequency.QUARTERLY:
        return (1 + apr / 4) ** (1 / 3) - 1
    elif compound == CompoundFrequency.ANNUAL:
        return (1 + apr) ** (1 / 12) - 1
    raise ValueError(f"unsupported compounding frequency: {compound!r}")


def effective_monthly_contribution(amount: float, frequency: ContributionFrequency) -> float:
    """Spread a periodic contribution into its monthly equivalent (52 weeks / 12 months)."""
    if frequency == ContributionFrequency.WEEKLY:
        return amount * 52 / 12
    elif frequency == ContributionFrequency.MONTHLY:
        return amount
    elif frequency == ContributionFrequency.ANNUAL:
        return amount / 12
    raise ValueError(f"unsupported contribution frequency: {frequency!r}")


def effective_monthly_fee_rate(annual_fee_rate: float) -> float:
    """Monthly fee fraction such that twelve deductions remove exactly `annual_fee_rate`."""
    if annual_fee_rate == 0:
        return 0.0
    return 1 - (1 - annual_fee_rate) ** (1 / 12)


def discount_factor(inflation_rate: float, elapsed_months: int) -> float:
    """Price level after `elapsed_months`, i.e. (1 + inflation)^(months / 12)."""
    if inflation_rate == 0:
        return 1.0
    return (1 + inflation_rate) ** (elapsed_months / 12)


def _simulate_months(
    principal: float,
    monthly_contrib: float,
    monthly_rate: float,
    monthly_fee_rate: float,
    timing: ContributionTiming,
    total_months: int,
) -> List[MonthlyBreakdown]:
    """
    Run the nominal and after-fees balances side by side.

    Per month:
      start -> add contribution, then grow (contribution earns this month's interest)
      end   -> grow, then add contribution
    The after-fees balance follows the same steps and then pays the fee on the
    grown balance. Fees never touch the nominal balance.
    """
    rows: List[MonthlyBreakdown] = []

    balance = principal
    fee_balance = principal
    cumulative_contrib = 0.0
    cumulative_interest = 0.0

    for period in range(1, total_months + 1):
        starting = balance

        if timing == ContributionTiming.START:
            balance += monthly_contrib
            interest = balance * monthly_rate
            balance += interest

            fee_balance += monthly_contrib
            fee_interest = fee_balance * monthly_rate
            fee_balance += fee_interest
        else:
            interest = balance * monthly_rate
            balance += interest
            balance += monthly_contrib

            fee_interest = fee_balance * monthly_rate
            fee_balance += fee_interest
            fee_balance += monthly_contrib

        fee = fee_balance * monthly_fee_rate
        fee_balance -= fee

        cumulative_contrib += monthly_contrib
        cumulative_interest += interest

        rows.append(
            MonthlyBreakdown(
                period=period,
                year=math.ceil(period / 12),
                month=(period - 1) % 12 + 1,
                startingBalance=starting,
                contributions=monthly_contrib,
                interest=interest,
                endingBalance=balance,
                cumulativeContributions=cumulative_contrib,
                cumulativeInterest=cumulative_interest,
                interestAfterFees=fee_interest,
                feesPaid=fee,
                endingBalanceAfterFees=fee_balance,
            )
        )

    return rows


def _aggregate_years(
    monthly: List[MonthlyBreakdown],
    inflation_rate: float,
) -> List[YearlyBreakdown]:
    """Group months by year (the last group may be short) and attach real values."""
    groups: List[List[MonthlyBreakdown]] = []
    for row in monthly:
        if not groups or groups[-1][0].year != row.year:
            groups.append([])
        groups[-1].append(row)

    yearly: List[YearlyBreakdown] = []
    cumulative_fees = 0.0
    for rows in groups:
        first, last = rows[0], rows[-1]
        fees = sum(r.feesPaid for r in rows)
        cumulative_fees += fees

        # discounted to the end of the last month in this group
        discount = discount_factor(inflation_rate, last.period)

        yearly.append(
            YearlyBreakdown(
                year=first.year,
                startingBalance=first.startingBalance,
                contributions=sum(r.contributions for r in rows),
                interest=sum(r.interest for r in rows),
                endingBalance=last.endingBalance,
                cumulativeContributions=last.cumulativeContributions,
                cumulativeInterest=last.cumulativeInterest,
                realEndingBalance=last.endingBalance / discount,
                realCumulativeContributions=last.cumulativeContributions / discount,
                realCumulativeInterest=last.cumulativeInterest / discount,
                endingBalanceAfterFees=last.endingBalanceAfterFees,
                yearlyFeesPaid=fees,
                cumulativeFeesPaid=cumulative_fees,
                realEndingBalanceAfterFees=last.endingBalanceAfterFees / discount,
                realCumulativeFeesPaid=cumulative_fees / discount,
            )
        )

    return yearly


def calculate(inputs: CalcInputs) -> CalcResult:
    """Project `inputs` month by month and summarise nominal, real and after-fees outcomes."""
    total_months = inputs.total_months
    monthly_rate = effective_monthly_rate(inputs.apr, inputs.compoundFrequency)
    monthly_contrib = effective_monthly_contribution(
        inputs.contribution, inputs.contributionFrequency
    )
    monthly_fee_rate = effective_monthly_fee_rate(inputs.annualFeeRate)

    logger.debug(
        "calculate total_months=%d monthly_rate=%.10f monthly_contrib=%.6f fee_rate=%.10f",
        total_months,
        monthly_rate,
        monthly_contrib,
        monthly_fee_rate,
    )

    monthly = _simulate_months(
        principal=float(inputs.principal),
        monthly_contrib=monthly_contrib,
        monthly_rate=monthly_rate,
        monthly_fee_rate=monthly_fee_rate,
        timing=inputs.timing,
        total_months=total_months,
    )
    yearly = _aggregate_years(monthly, inputs.inflationRate)

    # at least one month is guaranteed by CalcInputs
    last = monthly[-1]
    final_balance = last.endingBalance
    total_contributions = last.cumulativeContributions
    total_interest = last.cumulativeInterest
    final_after_fees = last.endingBalanceAfterFees
    total_fees = yearly[-1].cumulativeFeesPaid
    interest_after_fees = sum(row.interestAfterFees for row in monthly)

    # years + months/12 expressed in months
    discount = discount_factor(inputs.inflationRate, total_months)

    return CalcResult(
        finalBalance=final_balance,
        totalContributions=total_contributions,
        totalInterest=total_interest,
        finalBalanceReal=final_balance / discount,
        totalContributionsReal=total_contributions / discount,
        totalInterestReal=total_interest / discount,
        finalBalanceAfterFees=final_after_fees,
        totalInterestAfterFees=interest_after_fees,
        totalFeesPaidNominal=total_fees,
        finalBalanceAfterFeesReal=final_after_fees / discount,
        totalFeesPaidReal=total_fees / discount,
        yearlyBreakdown=yearly,
        monthlyBreakdown=monthly,
    )


def build_chart_data(inputs: CalcInputs, result: CalcResult) -> List[ChartPoint]:
    """Stacked-area series: a starting point, then one point per projected year."""
    points: List[ChartPoint] = [
        ChartPoint(
            name="Start",
            invested=inputs.principal,
            interest=0.0,
            afterFees=inputs.principal,
            realAfterFees=inputs.principal,
        )
    ]

    for row in result.yearlyBreakdown:
        points.append(
            ChartPoint(
                name=f"Yr {row.year}",
                invested=inputs.principal + row.cumulativeContributions,
                interest=row.cumulativeInterest,
                afterFees=row.endingBalanceAfterFees,
                realAfterFees=row.realEndingBalanceAfterFees,
            )
        )

    return points
