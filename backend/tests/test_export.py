from __future__ import annotations

from backend.core.calc import calculate
from backend.core.export import (
    MONTHLY_HEADERS,
    YEARLY_HEADERS,
    build_csv,
    monthly_breakdown_csv,
    yearly_breakdown_csv,
)
from factories import make_inputs


def test_build_csv_formats_and_escapes_cells():
    csv_text = build_csv(
        ["Name", "Value"],
        [
            ["plain", 1.5],
            ['has "quotes", and commas', float("nan")],
            ["multi\nline", None],
            ["count", 3],
        ],
    )

    assert csv_text.split("\n")[:3] == [
        "Name,Value",
        "plain,1.500000",
        '"has ""quotes"", and commas",',
    ]
    assert '"multi\nline",' in csv_text
    assert csv_text.endswith("count,3")


def test_yearly_csv_has_one_line_per_year():
    result = calculate(make_inputs(years=3, months=4, annualFeeRate=0.01))
    lines = yearly_breakdown_csv(result).split("\n")

    assert lines[0] == ",".join(YEARLY_HEADERS)
    assert len(lines) == 1 + 4
    assert lines[1].startswith("1,10000.000000,")


def test_monthly_csv_has_one_line_per_month():
    result = calculate(make_inputs(years=1, months=2))
    lines = monthly_breakdown_csv(result).split("\n")

    assert lines[0] == ",".join(MONTHLY_HEADERS)
    assert len(lines) == 1 + 14
    assert lines[-1].startswith("14,2,2,")
