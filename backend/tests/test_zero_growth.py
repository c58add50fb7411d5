from __future__ import annotations

from math import isclose

import pytest

from backend.core.calc import calculate, effective_monthly_contribution
from backend.schemas.calc import ContributionFrequency
from factories import make_inputs


def test_zero_growth_accumulates_contributions_only():
    """
    With zero APR, savings equal the starting balance plus cumulative contributions (no growth boost).
    """
    result = calculate(make_inputs(principal=0, contribution=100, apr=0, years=1))

    assert isclose(result.totalContributions, 1200, rel_tol=1e-12)
    assert isclose(result.finalBalance, 1200, rel_tol=1e-12)
    assert result.totalInterest == 0
    prev = 0.0
    for row in result.monthlyBreakdown:
        assert row.interest == 0
        assert row.endingBalance >= prev, "savings should not decrease without growth or fees"
        prev = row.endingBalance


@pytest.mark.parametrize("compound", ["daily", "monthly", "quarterly", "annual"])
@pytest.mark.parametrize("timing", ["start", "end"])
def test_zero_growth_ignores_compounding_and_timing(compound, timing):
    result = calculate(
        make_inputs(
            principal=2500,
            contribution=75,
            contributionFrequency="weekly",
            apr=0,
            compoundFrequency=compound,
            years=1,
            months=6,
            timing=timing,
        )
    )

    expected = 2500 + effective_monthly_contribution(75, ContributionFrequency.WEEKLY) * 18
    assert isclose(result.finalBalance, expected, rel_tol=1e-12)
    assert result.totalInterest == 0


def test_zero_growth_no_contribution_stays_flat():
    result = calculate(make_inputs(principal=1000, contribution=0, apr=0, years=5))

    assert result.finalBalance == 1000
    assert result.totalContributions == 0
    assert result.totalInterest == 0
