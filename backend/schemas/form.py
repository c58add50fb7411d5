"""String-based form contract, as typed by a user before validation."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict

from backend.schemas.calc import CompoundFrequency, ContributionFrequency, ContributionTiming


class FormState(BaseModel):
    """Raw calculator form. Percent fields are entered as percentages (5 = 5%)."""

    model_config = ConfigDict(extra="forbid")

    principal: str
    contribution: str
    contributionFrequency: ContributionFrequency
    apr: str
    compoundFrequency: CompoundFrequency
    years: str
    months: str
    timing: ContributionTiming
    inflationPercent: Optional[str] = None
    annualFeePercent: Optional[str] = None
    targetToday: Optional[str] = None
