"""Volume conversion and measurement endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from api.config import Settings, get_settings
from api.middleware.errors import UnparseableInputError
from pourcost.models.common import BottleCategory, MeasurementSystem, UseCase
from pourcost.models.measurement import BottleSizeOption, MeasurementValidation
from pourcost.models.volume import ConversionResult, Volume
from pourcost.services import measurement_resolver, volume_converter

router = APIRouter()


@router.get("/convert", response_model=ConversionResult)
async def convert_volume(
    value: float = Query(..., ge=0),
    from_unit: str = Query(..., description="Unit code or alias, e.g. ml, oz, cups"),
    to_unit: str = Query(...),
    precision: int = Query(2, ge=0, le=6),
):
    """Convert a volume between any two supported units."""
    return volume_converter.convert_with_format(value, from_unit, to_unit, precision)


@router.get("/preferred", response_model=ConversionResult)
async def convert_to_preferred(
    value: float = Query(..., ge=0),
    unit: str = Query(...),
    system: Optional[MeasurementSystem] = Query(None),
    use_case: UseCase = Query(UseCase.COCKTAIL),
    settings: Settings = Depends(get_settings),
):
    """
    Convert a volume into the unit it should be displayed in.

    Bottle sizes, cocktail pours and recipe quantities each have their own
    display unit per measurement system.
    """
    return measurement_resolver.convert_to_preferred_unit(
        value,
        volume_converter.resolve_unit(unit),
        system or settings.measurement_system,
        use_case,
    )


@router.get("/supported")
async def list_units(system: Optional[MeasurementSystem] = Query(None)) -> List[str]:
    """Unit codes offered for a measurement system (all when omitted)."""
    return [unit.value for unit in volume_converter.supported_units(system)]


@router.get("/bottle-sizes", response_model=List[BottleSizeOption])
async def list_bottle_sizes(
    system: Optional[MeasurementSystem] = Query(None),
    category: Optional[BottleCategory] = Query(None),
    common_only: bool = Query(False),
    settings: Settings = Depends(get_settings),
):
    """Standard bottle sizes for a measurement system."""
    return measurement_resolver.bottle_size_options(
        system or settings.measurement_system, category, common_only
    )


@router.get("/validate", response_model=MeasurementValidation)
async def validate_measurement(
    value: float = Query(...),
    unit: str = Query(...),
    system: Optional[MeasurementSystem] = Query(None),
    settings: Settings = Depends(get_settings),
):
    """Warnings and suggestions for a user-entered measurement."""
    return measurement_resolver.validate_measurement(
        value, unit, system or settings.measurement_system
    )


@router.get("/parse", response_model=Volume)
async def parse_volume(text: str = Query(..., min_length=1, examples=["1.5oz"])):
    """Read a typed volume such as "1.5oz" or "30 ml"."""
    volume = volume_converter.parse_volume(text)
    if volume is None:
        raise UnparseableInputError("volume", text)
    return volume
