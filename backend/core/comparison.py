"""Side-by-side comparison of two saved scenarios."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel

from backend.core.calc import calculate
from backend.core.format import format_gbp
from backend.schemas.calc import CalcResult, ContributionFrequency, ContributionTiming
from backend.schemas.scenario import Scenario

MAX_LISTED_DIFFERENCES = 3

_FREQUENCY_UNITS = {
    ContributionFrequency.WEEKLY: "week",
    ContributionFrequency.MONTHLY: "month",
    ContributionFrequency.ANNUAL: "year",
}

_TIMING_LABELS = {
    ContributionTiming.START: "start of period",
    ContributionTiming.END: "end of period",
}


class MetricRow(BaseModel):
    label: str
    a: Optional[float] = None
    b: Optional[float] = None


class ScenarioComparison(BaseModel):
    summaryA: str
    summaryB: str
    differences: List[str]
    metrics: List[MetricRow]
    resultA: CalcResult
    resultB: CalcResult


def _trim_percent(rate: float) -> str:
    text = f"{rate * 100:.2f}".rstrip("0").rstrip(".")
    return f"{text}%"


def _short_duration(years: int, months: int) -> str:
    if years > 0 and months > 0:
        return f"{years}y {months}m"
    if years > 0:
        return f"{years}y"
    return f"{months}m"


def scenario_label(scenario: Scenario) -> str:
    """'Name (APR 5% | Fee 0.2% | Infl. 3% | 10y)'."""
    inputs = scenario.inputs
    return (
        f"{scenario.name} (APR {_trim_percent(inputs.apr)} | Fee {_trim_percent(inputs.annualFeeRate)}"
        f" | Infl. {_trim_percent(inputs.inflationRate)} | {_short_duration(inputs.years, inputs.months)})"
    )


def comparability_differences(a: Scenario, b: Scenario) -> List[str]:
    """Inputs that make the two results not directly comparable."""
    ia, ib = a.inputs, b.inputs
    diffs: List[str] = []

    if ia.principal != ib.principal:
        diffs.append(
            f"Starting amount: A {format_gbp(ia.principal)} vs B {format_gbp(ib.principal)}."
        )
    if ia.contribution != ib.contribution or ia.contributionFrequency != ib.contributionFrequency:
        diffs.append(
            f"Contributions: A {format_gbp(ia.contribution)} per {_FREQUENCY_UNITS[ia.contributionFrequency]}"
            f" vs B {format_gbp(ib.contribution)} per {_FREQUENCY_UNITS[ib.contributionFrequency]}."
        )
    if ia.years != ib.years or ia.months != ib.months:
        diffs.append(
            f"Duration: A {_short_duration(ia.years, ia.months)} vs B {_short_duration(ib.years, ib.months)}."
        )
    if ia.compoundFrequency != ib.compoundFrequency:
        diffs.append(
            f"Compounding: A {ia.compoundFrequency.value}"
            f" vs B {ib.compoundFrequency.value}."
        )
    if ia.timing != ib.timing:
        diffs.append(
            f"Contribution timing: A {_TIMING_LABELS[ia.timing]} vs B {_TIMING_LABELS[ib.timing]}."
        )
    return diffs


def compare_scenarios(a: Scenario, b: Scenario) -> ScenarioComparison:
    result_a = calculate(a.inputs)
    result_b = calculate(b.inputs)

    metrics = [
        MetricRow(label="Final Balance (After Fees)", a=result_a.finalBalanceAfterFees, b=result_b.finalBalanceAfterFees),
        MetricRow(
            label="Final Balance (Real After Fees)",
            a=result_a.finalBalanceAfterFeesReal,
            b=result_b.finalBalanceAfterFeesReal,
        ),
        MetricRow(label="Total Contributions", a=result_a.totalContributions, b=result_b.totalContributions),
        MetricRow(label="Total Fees Paid (Nominal)", a=result_a.totalFeesPaidNominal, b=result_b.totalFeesPaidNominal),
        MetricRow(label="Total Fees Paid (Real)", a=result_a.totalFeesPaidReal, b=result_b.totalFeesPaidReal),
    ]

    if a.targetToday is not None or b.targetToday is not None:
        metrics.append(
            MetricRow(
                label="Target gap (Real After Fees)",
                a=None if a.targetToday is None else result_a.finalBalanceAfterFeesReal - a.targetToday,
                b=None if b.targetToday is None else result_b.finalBalanceAfterFeesReal - b.targetToday,
            )
        )

    return ScenarioComparison(
        summaryA=scenario_label(a),
        summaryB=scenario_label(b),
        differences=comparability_differences(a, b)[:MAX_LISTED_DIFFERENCES],
        metrics=metrics,
        resultA=result_a,
        resultB=result_b,
    )
