from __future__ import annotations

from backend.schemas.calc import CalcInputs


def make_inputs(**overrides) -> CalcInputs:
    """Sensible defaults; tests override only what they care about."""
    values = {
        "principal": 10000.0,
        "contribution": 200.0,
        "contributionFrequency": "monthly",
        "apr": 0.05,
        "compoundFrequency": "monthly",
        "years": 10,
        "months": 0,
        "timing": "end",
    }
    values.update(overrides)
    return CalcInputs(**values)
