from __future__ import annotations

from math import isclose

from backend.core.calc import calculate
from backend.core.format import format_duration, format_gbp, format_percent
from backend.core.insights import summarize_result
from factories import make_inputs


def test_formatting_helpers():
    assert format_gbp(1234.5) == "£1,234.50"
    assert format_gbp(-20) == "-£20.00"
    assert format_gbp(-0.001) == "£0.00"
    assert format_percent(0.05) == "5.00%"
    assert format_duration(1, 0) == "1 year"
    assert format_duration(2, 1) == "2 years and 1 month"
    assert format_duration(0, 7) == "7 months"


def test_no_fees_no_inflation_summary():
    inputs = make_inputs(principal=1000, contribution=100, apr=0.05, years=5)
    insights = summarize_result(inputs, calculate(inputs))

    assert insights.feeImpact == 0
    assert insights.inflationIncreasePercent == 0
    assert insights.requiredFutureNominal is None
    assert isclose(insights.contributionsAdded, 1000 + 100 * 60, rel_tol=1e-12)
    assert len(insights.messages) == 1
    assert insights.messages[0].startswith("Of your final balance (after fees)")


def test_fee_and_inflation_insights():
    inputs = make_inputs(apr=0.06, annualFeeRate=0.01, inflationRate=0.03, years=20)
    result = calculate(inputs)
    insights = summarize_result(inputs, result)

    assert isclose(insights.feeImpact, result.finalBalance - result.finalBalanceAfterFees, rel_tol=1e-12)
    assert isclose(insights.inflationIncreasePercent, (1.03 ** 20 - 1) * 100, rel_tol=1e-12)
    assert any(m.startswith("At 3.00% inflation, prices are about 81% higher over 20 years") for m in insights.messages)
    assert any(m.startswith("Fees reduce the final balance") for m in insights.messages)
    assert any("purchasing power" in m for m in insights.messages)


def test_target_in_todays_money():
    inputs = make_inputs(inflationRate=0.02, years=10, months=6)
    result = calculate(inputs)
    insights = summarize_result(inputs, result, target_today=50000)

    required = 50000 * 1.02 ** 10.5
    assert isclose(insights.requiredFutureNominal, required, rel_tol=1e-12)
    assert isclose(insights.targetDifference, result.finalBalanceAfterFees - required, rel_tol=1e-12)
    assert insights.messages[-1].startswith("To hit your target in today's money")
