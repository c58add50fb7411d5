"""Turn calculator form strings into validated engine inputs."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Dict, Optional

from backend.schemas.calc import (
    MAX_AMOUNT,
    MAX_TOTAL_MONTHS,
    CalcInputs,
    CompoundFrequency,
    ContributionFrequency,
    ContributionTiming,
)
from backend.schemas.form import FormState

MAX_APR_PERCENT = 999
MAX_INFLATION_PERCENT = 20
MAX_FEE_PERCENT = 10

_GROUPING_SEPARATORS = re.compile(r"[,\s]")


class FormValidationError(ValueError):
    def __init__(self, errors: Dict[str, str]):
        super().__init__("; ".join(f"{key}: {msg}" for key, msg in errors.items()))
        self.errors = errors


@dataclass
class ParseResult:
    is_valid: bool
    errors: Dict[str, str] = field(default_factory=dict)
    inputs: Optional[CalcInputs] = None
    target_today: Optional[float] = None


DEFAULT_FORM = FormState(
    principal="10000",
    contribution="200",
    contributionFrequency=ContributionFrequency.MONTHLY,
    apr="5",
    compoundFrequency=CompoundFrequency.MONTHLY,
    years="10",
    months="0",
    timing=ContributionTiming.END,
    inflationPercent="",
    annualFeePercent="",
    targetToday="",
)


def normalize_numeric_input(value: str) -> str:
    """Drop surrounding whitespace and thousands separators ("12,500" -> "12500")."""
    return _GROUPING_SEPARATORS.sub("", value.strip())


def parse_loose_number(value: Optional[str]) -> Optional[float]:
    """Parse a user-typed number; None when it is empty or not a finite number."""
    if value is None:
        return None
    normalized = normalize_numeric_input(value)
    if normalized in ("", ".", "+", "-"):
        return None
    try:
        parsed = float(normalized)
    except ValueError:
        return None
    return parsed if math.isfinite(parsed) else None


def _parse_whole_number(value: str) -> Optional[int]:
    parsed = parse_loose_number(value)
    if parsed is None or not parsed.is_integer():
        return None
    return int(parsed)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or value.strip() == ""


def _check_amount(value: Optional[float], label: str) -> Optional[str]:
    if value is None:
        return f"Enter a valid {label} (0 or more)."
    if value < 0:
        return f"{label[0].upper()}{label[1:]} cannot be negative."
    if value > MAX_AMOUNT:
        return "Value exceeds the maximum of £1,000,000,000."
    return None


def _check_optional_percent(value: Optional[str], upper: float, label: str) -> tuple[float, Optional[str]]:
    if _is_blank(value):
        return 0.0, None
    parsed = parse_loose_number(value)
    if parsed is None or parsed < 0 or parsed > upper:
        return 0.0, f"{label} must be between 0% and {upper:g}%."
    return parsed, None


def parse_and_validate(form: FormState) -> ParseResult:
    """
    Validate every field and collect all errors at once.

    Error keys match the form field names, plus `duration` for the combined
    years/months check.
    """
    errors: Dict[str, str] = {}

    principal = parse_loose_number(form.principal)
    error = _check_amount(principal, "initial investment")
    if error:
        errors["principal"] = error

    contribution = parse_loose_number(form.contribution)
    error = _check_amount(contribution, "contribution")
    if error:
        errors["contribution"] = error

    if "principal" not in errors and "contribution" not in errors:
        if principal == 0 and contribution == 0:
            errors["principal"] = (
                "At least one of initial investment or regular contribution must be greater than zero."
            )

    apr_percent = parse_loose_number(form.apr)
    if apr_percent is None:
        errors["apr"] = "Enter a valid interest rate (e.g. 5 for 5%)."
    elif apr_percent < 0:
        errors["apr"] = "Interest rate cannot be negative."
    elif apr_percent > MAX_APR_PERCENT:
        errors["apr"] = f"Interest rate must be {MAX_APR_PERCENT}% or less."

    years = _parse_whole_number(form.years)
    if years is None:
        errors["years"] = "Enter a whole number of years."
    elif years < 0:
        errors["years"] = "Years cannot be negative."

    months = 0 if _is_blank(form.months) else _parse_whole_number(form.months)
    if months is None or not 0 <= months <= 11:
        errors["months"] = "Additional months must be 0-11."

    if "years" not in errors and "months" not in errors:
        total_months = years * 12 + months
        if total_months == 0:
            errors["duration"] = "Duration must be at least 1 month."
        elif total_months > MAX_TOTAL_MONTHS:
            errors["duration"] = (
                f"Maximum duration is {MAX_TOTAL_MONTHS // 12} years ({MAX_TOTAL_MONTHS} months)."
            )

    inflation_percent, error = _check_optional_percent(
        form.inflationPercent, MAX_INFLATION_PERCENT, "Inflation"
    )
    if error:
        errors["inflationPercent"] = error

    fee_percent, error = _check_optional_percent(
        form.annualFeePercent, MAX_FEE_PERCENT, "Annual fee"
    )
    if error:
        errors["annualFeePercent"] = error

    target_today: Optional[float] = None
    if not _is_blank(form.targetToday):
        target_today = parse_loose_number(form.targetToday)
        if target_today is None or target_today < 0:
            errors["targetToday"] = "Enter a valid target (0 or more)."
        elif target_today > MAX_AMOUNT:
            errors["targetToday"] = "Value exceeds the maximum of £1,000,000,000."

    if errors:
        return ParseResult(is_valid=False, errors=errors)

    inputs = CalcInputs(
        principal=principal,
        contribution=contribution,
        contributionFrequency=form.contributionFrequency,
        apr=apr_percent / 100,
        inflationRate=inflation_percent / 100,
        annualFeeRate=fee_percent / 100,
        compoundFrequency=form.compoundFrequency,
        years=years,
        months=months,
        timing=form.timing,
    )
    return ParseResult(is_valid=True, inputs=inputs, target_today=target_today)


def require_valid_inputs(form: FormState) -> CalcInputs:
    """Like parse_and_validate, but raise FormValidationError on bad input."""
    result = parse_and_validate(form)
    if not result.is_valid or result.inputs is None:
        raise FormValidationError(result.errors)
    return result.inputs


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else repr(float(value))


def inputs_to_form(inputs: CalcInputs, target_today: Optional[float] = None) -> FormState:
    """Reverse mapping used when loading a saved scenario back into the form."""
    return FormState(
        principal=_format_number(inputs.principal),
        contribution=_format_number(inputs.contribution),
        contributionFrequency=inputs.contributionFrequency,
        apr=_format_number(round(inputs.apr * 100, 10)),
        compoundFrequency=inputs.compoundFrequency,
        years=str(inputs.years),
        months=str(inputs.months),
        timing=inputs.timing,
        inflationPercent=_format_number(round(inputs.inflationRate * 100, 10)),
        annualFeePercent=_format_number(round(inputs.annualFeeRate * 100, 10)),
        targetToday="" if target_today is None else _format_number(target_today),
    )
