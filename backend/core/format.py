"""Display formatting. All rounding to pennies happens here, never in the engine."""

from __future__ import annotations


def format_gbp(value: float) -> str:
    """1234.5 -> '£1,234.50', -20 -> '-£20.00'."""
    sign = "-" if value < 0 and round(abs(value), 2) != 0 else ""
    return f"{sign}£{abs(value):,.2f}"


def format_percent(value: float, decimals: int = 2) -> str:
    """Decimal rate to percent string: 0.05 -> '5.00%'."""
    return f"{value * 100:.{decimals}f}%"


def format_duration(years: int, months: int) -> str:
    def plural(count: int, unit: str) -> str:
        return f"{count} {unit}{'' if count == 1 else 's'}"

    if years > 0 and months > 0:
        return f"{plural(years, 'year')} and {plural(months, 'month')}"
    if years > 0:
        return plural(years, "year")
    return plural(months, "month")
