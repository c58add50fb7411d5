"""Saved scenario records and the request bodies that create them."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from backend.schemas.calc import MAX_AMOUNT, CalcInputs


class Scenario(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str
    name: str
    inputs: CalcInputs
    createdAt: str
    updatedAt: str
    targetToday: Optional[float] = Field(default=None, ge=0, le=MAX_AMOUNT)
    presetName: Optional[str] = None


class ScenarioCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = ""
    inputs: CalcInputs
    targetToday: Optional[float] = Field(default=None, ge=0, le=MAX_AMOUNT)
    presetName: Optional[str] = None


class ScenarioUpdate(BaseModel):
    """
    Partial update; omitted fields keep their stored value. An explicit null
    clears targetToday or presetName.
    """

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    inputs: Optional[CalcInputs] = None
    targetToday: Optional[float] = Field(default=None, ge=0, le=MAX_AMOUNT)
    presetName: Optional[str] = None
