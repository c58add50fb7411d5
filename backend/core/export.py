"""CSV export of projection breakdowns."""

from __future__ import annotations

import csv
import io
import math
from typing import Iterable, List, Optional, Sequence, Union

from backend.schemas.calc import CalcResult

CsvCell = Optional[Union[str, int, float]]

DECIMALS = 6

YEARLY_HEADERS = [
    "Year",
    "Starting balance",
    "Contributions",
    "Interest",
    "Ending balance",
    "Cumulative contributions",
    "Cumulative interest",
    "Ending balance (real)",
    "Ending balance after fees",
    "Fees paid",
    "Cumulative fees paid",
    "Ending balance after fees (real)",
]

MONTHLY_HEADERS = [
    "Period",
    "Year",
    "Month",
    "Starting balance",
    "Contributions",
    "Interest",
    "Ending balance",
    "Cumulative contributions",
    "Cumulative interest",
    "Fees paid",
    "Ending balance after fees",
]


def _format_cell(value: CsvCell) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return f"{value:.{DECIMALS}f}" if math.isfinite(value) else ""
    return value


def build_csv(headers: Sequence[str], rows: Iterable[Sequence[CsvCell]]) -> str:
    """Render rows as CSV; floats get six decimals and non-finite values are left blank."""
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(headers)
    for row in rows:
        writer.writerow([_format_cell(cell) for cell in row])
    return output.getvalue().rstrip("\n")


def yearly_breakdown_csv(result: CalcResult) -> str:
    rows: List[List[CsvCell]] = [
        [
            row.year,
            row.startingBalance,
            row.contributions,
            row.interest,
            row.endingBalance,
            row.cumulativeContributions,
            row.cumulativeInterest,
            row.realEndingBalance,
            row.endingBalanceAfterFees,
            row.yearlyFeesPaid,
            row.cumulativeFeesPaid,
            row.realEndingBalanceAfterFees,
        ]
        for row in result.yearlyBreakdown
    ]
    return build_csv(YEARLY_HEADERS, rows)


def monthly_breakdown_csv(result: CalcResult) -> str:
    rows: List[List[CsvCell]] = [
        [
            row.period,
            row.year,
            row.month,
            row.startingBalance,
            row.contributions,
            row.interest,
            row.endingBalance,
            row.cumulativeContributions,
            row.cumulativeInterest,
            row.feesPaid,
            row.endingBalanceAfterFees,
        ]
        for row in result.monthlyBreakdown
    ]
    return build_csv(MONTHLY_HEADERS, rows)
