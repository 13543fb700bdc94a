"""Volume data models."""

from pydantic import BaseModel, Field

from pourcost.models.common import VolumeUnit


class Volume(BaseModel):
    """A quantity of liquid."""

    value: float = Field(..., ge=0)
    unit: VolumeUnit = VolumeUnit.ML


class PourSpec(BaseModel):
    """The serving size drawn from an ingredient."""

    amount: float = Field(..., gt=0)
    unit: VolumeUnit = VolumeUnit.OZ


class ConversionResult(BaseModel):
    """A converted volume with its display string."""

    value: float
    unit: VolumeUnit
    formatted_value: str


class CocktailMeasurement(BaseModel):
    """A common bar measurement offered as a quick pick."""

    label: str
    value: float
    unit: VolumeUnit
