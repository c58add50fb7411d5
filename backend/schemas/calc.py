"""Data contracts for the compound growth calculator."""

from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, model_validator

MAX_AMOUNT = 1_000_000_000
MAX_TOTAL_MONTHS = 720


class CompoundFrequency(str, Enum):
    DAILY = "daily"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUAL = "annual"


class ContributionFrequency(str, Enum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    ANNUAL = "annual"


class ContributionTiming(str, Enum):
    START = "start"
    END = "end"


class CalcInputs(BaseModel):
    """Validated inputs to the projection engine. Rates are decimals (0.05 = 5%)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    principal: float = Field(ge=0, le=MAX_AMOUNT)
    contribution: float = Field(ge=0, le=MAX_AMOUNT)
    contributionFrequency: ContributionFrequency = ContributionFrequency.MONTHLY
    apr: float = Field(ge=0, le=9.99)
    inflationRate: float = Field(default=0.0, ge=0, le=0.20)
    annualFeeRate: float = Field(default=0.0, ge=0, le=0.10)
    compoundFrequency: CompoundFrequency = CompoundFrequency.MONTHLY
    years: int = Field(ge=0)
    months: int = Field(default=0, ge=0, le=11)
    timing: ContributionTiming = ContributionTiming.END

    @model_validator(mode="after")
    def ensure_validity(self) -> "CalcInputs":
        if self.principal == 0 and self.contribution == 0:
            raise ValueError("principal or contribution must be greater than zero")
        if not 1 <= self.total_months <= MAX_TOTAL_MONTHS:
            raise ValueError(f"duration must be between 1 and {MAX_TOTAL_MONTHS} months")
        return self

    @property
    def total_months(self) -> int:
        return self.years * 12 + self.months


class MonthlyBreakdown(BaseModel):
    """One simulated month. `year` and `month` are derived from `period`."""

    period: int = Field(..., ge=1)
    year: int = Field(..., ge=1)
    month: int = Field(..., ge=1, le=12)
    startingBalance: float
    contributions: float
    interest: float
    endingBalance: float
    cumulativeContributions: float
    cumulativeInterest: float
    # after-fees track
    interestAfterFees: float
    feesPaid: float
    endingBalanceAfterFees: float


class YearlyBreakdown(BaseModel):
    year: int = Field(..., ge=1)
    startingBalance: float
    contributions: float
    interest: float
    endingBalance: float
    cumulativeContributions: float
    cumulativeInterest: float

    realEndingBalance: float
    realCumulativeContributions: float
    realCumulativeInterest: float

    endingBalanceAfterFees: float
    yearlyFeesPaid: float
    cumulativeFeesPaid: float
    realEndingBalanceAfterFees: float
    realCumulativeFeesPaid: float


class CalcResult(BaseModel):
    finalBalance: float
    totalContributions: float
    totalInterest: float

    finalBalanceReal: float
    totalContributionsReal: float
    totalInterestReal: float

    finalBalanceAfterFees: float
    totalInterestAfterFees: float
    totalFeesPaidNominal: float
    finalBalanceAfterFeesReal: float
    totalFeesPaidReal: float

    yearlyBreakdown: List[YearlyBreakdown]
    monthlyBreakdown: List[MonthlyBreakdown]


class ChartPoint(BaseModel):
    """One x-axis point of the growth chart."""

    name: str
    invested: float
    interest: float
    afterFees: float
    realAfterFees: float
