"""Starter presets that pre-fill the rate, fee and inflation assumptions."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel

from backend.schemas.calc import CompoundFrequency
from backend.schemas.form import FormState


class PresetNotFoundError(LookupError):
    pass


class StarterPreset(BaseModel):
    id: str
    name: str
    apr: float  # percent
    annualFeePercent: float
    inflationPercent: float
    compoundFrequency: CompoundFrequency


STARTER_PRESETS: List[StarterPreset] = [
    StarterPreset(
        id="savings-account",
        name="Savings account",
        apr=4.0,
        annualFeePercent=0.0,
        inflationPercent=3.0,
        compoundFrequency=CompoundFrequency.MONTHLY,
    ),
    StarterPreset(
        id="low-cost-index-fund",
        name="Low-cost index fund",
        apr=7.0,
        annualFeePercent=0.2,
        inflationPercent=3.0,
        compoundFrequency=CompoundFrequency.MONTHLY,
    ),
    StarterPreset(
        id="robo-investor",
        name="Robo-investor",
        apr=6.0,
        annualFeePercent=0.8,
        inflationPercent=3.0,
        compoundFrequency=CompoundFrequency.MONTHLY,
    ),
    StarterPreset(
        id="high-growth-portfolio",
        name="High-growth portfolio",
        apr=9.0,
        annualFeePercent=1.0,
        inflationPercent=3.0,
        compoundFrequency=CompoundFrequency.MONTHLY,
    ),
]


def get_preset(preset_id: str) -> StarterPreset:
    for preset in STARTER_PRESETS:
        if preset.id == preset_id:
            return preset
    raise PresetNotFoundError(f"unknown preset: {preset_id}")


def apply_preset(form: FormState, preset_id: str) -> FormState:
    """Return a copy of `form` with the preset's assumptions filled in."""
    preset = get_preset(preset_id)
    return form.model_copy(
        update={
            "apr": f"{preset.apr:g}",
            "annualFeePercent": f"{preset.annualFeePercent:g}",
            "inflationPercent": f"{preset.inflationPercent:g}",
            "compoundFrequency": preset.compoundFrequency,
        }
    )
