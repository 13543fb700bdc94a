"""Measurement preference models."""

from typing import List

from pydantic import BaseModel

from pourcost.models.common import BottleCategory, MeasurementSystem, VolumeUnit


class MeasurementConfig(BaseModel):
    """Display units for a measurement system."""

    system: MeasurementSystem
    primary_volume_unit: VolumeUnit
    secondary_volume_unit: VolumeUnit
    small_volume_unit: VolumeUnit
    bottle_size_unit: VolumeUnit

    model_config = {"frozen": True}


class BottleSizeOption(BaseModel):
    """A standard container size."""

    size: float
    unit: VolumeUnit
    label: str
    common: bool
    category: BottleCategory

    model_config = {"frozen": True}


class MeasurementRecommendation(BaseModel):
    """An alternative way to express a volume."""

    value: float
    unit: VolumeUnit
    formatted: str
    precision: str  # exact, rounded


class MeasurementValidation(BaseModel):
    """Result of sanity-checking a measurement."""

    is_valid: bool
    warnings: List[str] = []
    suggestions: List[str] = []
