from __future__ import annotations

import pytest

from backend.core.presets import STARTER_PRESETS, PresetNotFoundError, apply_preset, get_preset
from backend.core.validation import DEFAULT_FORM, parse_and_validate


def test_every_preset_produces_valid_inputs():
    for preset in STARTER_PRESETS:
        result = parse_and_validate(apply_preset(DEFAULT_FORM, preset.id))
        assert result.is_valid, preset.id


def test_apply_preset_replaces_assumptions_only():
    applied = apply_preset(DEFAULT_FORM.model_copy(update={"principal": "2500"}), "robo-investor")

    assert applied.apr == "6"
    assert applied.annualFeePercent == "0.8"
    assert applied.inflationPercent == "3"
    assert applied.principal == "2500"
    assert applied.contribution == DEFAULT_FORM.contribution
    # the source form is left alone
    assert DEFAULT_FORM.apr == "5"


def test_unknown_preset():
    with pytest.raises(PresetNotFoundError):
        get_preset("crypto-moonshot")
