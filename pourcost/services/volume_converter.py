"""
Volume Converter

Converts between volume units through milliliters and formats volumes
for display. Every conversion goes unit -> ml -> unit; there are no
direct unit-to-unit factors.
"""

import logging
import re
from decimal import ROUND_HALF_UP, Decimal
from types import MappingProxyType
from typing import List, Optional, Union

from pourcost.errors import InvalidInputError, UnsupportedUnitError
from pourcost.models.common import MeasurementSystem, VolumeUnit, ensure_exhaustive
from pourcost.models.volume import CocktailMeasurement, ConversionResult, Volume

logger = logging.getLogger(__name__)

UnitLike = Union[VolumeUnit, str]


# Milliliters per one of each unit (US customary units)
ML_PER_UNIT = MappingProxyType({
    VolumeUnit.ML: 1.0,
    VolumeUnit.L: 1000.0,
    VolumeUnit.OZ: 29.5735,
    VolumeUnit.CUP: 236.588,
    VolumeUnit.PT: 473.176,
    VolumeUnit.QT: 946.353,
    VolumeUnit.GAL: 3785.41,
    VolumeUnit.TBSP: 14.7868,
    VolumeUnit.TSP: 4.92892,
    VolumeUnit.DROPS: 0.05,  # approximate
    VolumeUnit.SPLASH: 5.0,  # about a teaspoon
})

UNIT_ABBREVIATIONS = MappingProxyType({
    VolumeUnit.ML: "ml",
    VolumeUnit.L: "L",
    VolumeUnit.OZ: "oz",
    VolumeUnit.CUP: " cup",
    VolumeUnit.PT: " pt",
    VolumeUnit.QT: " qt",
    VolumeUnit.GAL: " gal",
    VolumeUnit.TBSP: " tbsp",
    VolumeUnit.TSP: " tsp",
    VolumeUnit.DROPS: " drops",
    VolumeUnit.SPLASH: " splash",
})

UNIT_NAMES = MappingProxyType({
    VolumeUnit.ML: ("milliliter", "milliliters"),
    VolumeUnit.L: ("liter", "liters"),
    VolumeUnit.OZ: ("fluid ounce", "fluid ounces"),
    VolumeUnit.CUP: ("cup", "cups"),
    VolumeUnit.PT: ("pint", "pints"),
    VolumeUnit.QT: ("quart", "quarts"),
    VolumeUnit.GAL: ("gallon", "gallons"),
    VolumeUnit.TBSP: ("tablespoon", "tablespoons"),
    VolumeUnit.TSP: ("teaspoon", "teaspoons"),
    VolumeUnit.DROPS: ("drop", "drops"),
    VolumeUnit.SPLASH: ("splash", "splashes"),
})

ensure_exhaustive(ML_PER_UNIT, VolumeUnit, "ML_PER_UNIT")
ensure_exhaustive(UNIT_ABBREVIATIONS, VolumeUnit, "UNIT_ABBREVIATIONS")
ensure_exhaustive(UNIT_NAMES, VolumeUnit, "UNIT_NAMES")

# Free-text spellings accepted by resolve_unit / parse_volume (lowercase)
UNIT_ALIASES = MappingProxyType({
    "ml": VolumeUnit.ML,
    "milliliter": VolumeUnit.ML,
    "milliliters": VolumeUnit.ML,
    "l": VolumeUnit.L,
    "liter": VolumeUnit.L,
    "liters": VolumeUnit.L,
    "litre": VolumeUnit.L,
    "litres": VolumeUnit.L,
    "oz": VolumeUnit.OZ,
    "floz": VolumeUnit.OZ,
    "fl oz": VolumeUnit.OZ,
    "ounce": VolumeUnit.OZ,
    "ounces": VolumeUnit.OZ,
    "cup": VolumeUnit.CUP,
    "cups": VolumeUnit.CUP,
    "pt": VolumeUnit.PT,
    "pint": VolumeUnit.PT,
    "pints": VolumeUnit.PT,
    "qt": VolumeUnit.QT,
    "quart": VolumeUnit.QT,
    "quarts": VolumeUnit.QT,
    "gal": VolumeUnit.GAL,
    "gallon": VolumeUnit.GAL,
    "gallons": VolumeUnit.GAL,
    "tbsp": VolumeUnit.TBSP,
    "tablespoon": VolumeUnit.TBSP,
    "tablespoons": VolumeUnit.TBSP,
    "tsp": VolumeUnit.TSP,
    "teaspoon": VolumeUnit.TSP,
    "teaspoons": VolumeUnit.TSP,
    "drop": VolumeUnit.DROPS,
    "drops": VolumeUnit.DROPS,
    "splash": VolumeUnit.SPLASH,
    "splashes": VolumeUnit.SPLASH,
})

METRIC_UNITS = (VolumeUnit.ML, VolumeUnit.L)
US_UNITS = (
    VolumeUnit.OZ,
    VolumeUnit.CUP,
    VolumeUnit.PT,
    VolumeUnit.QT,
    VolumeUnit.GAL,
    VolumeUnit.TBSP,
    VolumeUnit.TSP,
)
BARTENDING_UNITS = (VolumeUnit.DROPS, VolumeUnit.SPLASH)

# US display ladder, largest first: (threshold in ml, unit)
US_PREFERRED_LADDER = (
    (ML_PER_UNIT[VolumeUnit.QT], VolumeUnit.QT),
    (ML_PER_UNIT[VolumeUnit.CUP], VolumeUnit.CUP),
    (ML_PER_UNIT[VolumeUnit.OZ], VolumeUnit.OZ),
    (ML_PER_UNIT[VolumeUnit.TBSP], VolumeUnit.TBSP),
)
METRIC_LITER_THRESHOLD_ML = 1000.0

_VOLUME_PATTERN = re.compile(r"^(\d+(?:\.\d+)?)\s*([a-z][a-z ]*?)\.?$")


# ============================================================================
# Core conversions
# ============================================================================

def resolve_unit(unit: UnitLike) -> VolumeUnit:
    """Turn a unit or unit string into a VolumeUnit."""
    if isinstance(unit, VolumeUnit):
        return unit
    if isinstance(unit, str):
        try:
            return VolumeUnit(unit)
        except ValueError:
            alias = UNIT_ALIASES.get(unit.strip().lower())
            if alias is not None:
                return alias
    raise UnsupportedUnitError(unit)


def to_base(value: float, unit: UnitLike) -> float:
    """Convert a volume to milliliters."""
    resolved = resolve_unit(unit)
    if value < 0:
        raise InvalidInputError("Volume cannot be negative", details={"value": value})
    return value * ML_PER_UNIT[resolved]


def from_base(ml_value: float, unit: UnitLike) -> float:
    """Convert milliliters to the given unit."""
    resolved = resolve_unit(unit)
    if ml_value < 0:
        raise InvalidInputError("Volume cannot be negative", details={"value": ml_value})
    return ml_value / ML_PER_UNIT[resolved]


def convert(value: float, from_unit: UnitLike, to_unit: UnitLike) -> float:
    """Convert between two units. Same-unit conversions return value untouched."""
    source = resolve_unit(from_unit)
    target = resolve_unit(to_unit)
    if source == target:
        if value < 0:
            raise InvalidInputError("Volume cannot be negative", details={"value": value})
        return value
    return from_base(to_base(value, source), target)


def convert_volume(volume: Volume, to_unit: UnitLike) -> Volume:
    """Convert a Volume model to another unit."""
    target = resolve_unit(to_unit)
    return Volume(value=convert(volume.value, volume.unit, target), unit=target)


def convert_with_format(
    value: float,
    from_unit: UnitLike,
    to_unit: UnitLike,
    precision: int = 2,
) -> ConversionResult:
    """Convert, round to precision, and attach a display string."""
    target = resolve_unit(to_unit)
    rounded = _round_half_up(convert(value, from_unit, target), precision)
    return ConversionResult(
        value=rounded,
        unit=target,
        formatted_value=format_volume(rounded, target),
    )


# ============================================================================
# Measurement system helpers
# ============================================================================

def preferred_unit(ml_value: float, system: MeasurementSystem) -> VolumeUnit:
    """Pick the most readable unit for a volume in a measurement system."""
    if system == MeasurementSystem.METRIC:
        return VolumeUnit.L if ml_value >= METRIC_LITER_THRESHOLD_ML else VolumeUnit.ML

    for threshold, unit in US_PREFERRED_LADDER:
        if ml_value >= threshold:
            return unit
    return VolumeUnit.TSP


def convert_to_preferred_system(
    value: float,
    from_unit: UnitLike,
    system: MeasurementSystem,
) -> ConversionResult:
    """Convert to whichever unit reads best in the target system."""
    target = preferred_unit(to_base(value, from_unit), system)
    return convert_with_format(value, from_unit, target)


def standard_bartending_unit(system: MeasurementSystem) -> VolumeUnit:
    """Jigger unit for a measurement system."""
    return VolumeUnit.ML if system == MeasurementSystem.METRIC else VolumeUnit.OZ


def supported_units(system: Optional[MeasurementSystem] = None) -> List[VolumeUnit]:
    """Units offered for a system; all units when system is None."""
    if system == MeasurementSystem.METRIC:
        return [*METRIC_UNITS, *BARTENDING_UNITS]
    if system == MeasurementSystem.US:
        return [*US_UNITS, *BARTENDING_UNITS]
    return [*METRIC_UNITS, *US_UNITS, *BARTENDING_UNITS]


def is_supported_unit(unit: str) -> bool:
    try:
        resolve_unit(unit)
    except UnsupportedUnitError:
        return False
    return True


def common_cocktail_measurements(
    system: MeasurementSystem = MeasurementSystem.US,
) -> List[CocktailMeasurement]:
    """Quick-pick pour sizes."""
    if system == MeasurementSystem.METRIC:
        return [
            CocktailMeasurement(label=f"{ml}ml ({oz} oz)", value=ml, unit=VolumeUnit.ML)
            for ml, oz in ((15, "1/2"), (30, "1"), (45, "1.5"), (60, "2"), (90, "3"), (120, "4"))
        ]

    picks = [
        CocktailMeasurement(label=f"{oz}oz", value=oz, unit=VolumeUnit.OZ)
        for oz in (0.5, 0.75, 1, 1.5, 2, 3, 4)
    ]
    picks += [
        CocktailMeasurement(label="1 tbsp", value=1, unit=VolumeUnit.TBSP),
        CocktailMeasurement(label="1 tsp", value=1, unit=VolumeUnit.TSP),
        CocktailMeasurement(label="3-5 drops", value=4, unit=VolumeUnit.DROPS),
        CocktailMeasurement(label="1 splash", value=1, unit=VolumeUnit.SPLASH),
    ]
    return picks


# ============================================================================
# Formatting & parsing
# ============================================================================

def default_precision(value: float, unit: VolumeUnit) -> int:
    """Decimal places a unit is usually shown with."""
    if unit in (VolumeUnit.DROPS, VolumeUnit.SPLASH):
        return 0
    if unit == VolumeUnit.ML:
        return 1 if value < 10 else 0
    if unit == VolumeUnit.L:
        return 2
    return 2 if value < 1 else 1


def format_volume(value: float, unit: UnitLike, precision: Optional[int] = None) -> str:
    """
    Format a volume for display.

    Trailing zeros are trimmed, so 1.50 oz renders as "1.5oz" and
    2.0 cup as "2 cup".
    """
    resolved = resolve_unit(unit)
    places = default_precision(value, resolved) if precision is None else precision

    text = f"{_round_half_up(value, places):.{places}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{text}{UNIT_ABBREVIATIONS[resolved]}"


def unit_abbreviation(unit: UnitLike) -> str:
    return UNIT_ABBREVIATIONS[resolve_unit(unit)]


def unit_name(unit: UnitLike, value: float = 1) -> str:
    """Full unit name, pluralized unless the value is exactly one."""
    singular, plural = UNIT_NAMES[resolve_unit(unit)]
    return singular if abs(value) == 1 else plural


def parse_volume(text: str) -> Optional[Volume]:
    """Parse strings such as "1.5oz", "30 ml" or "2 cups". None if unrecognised."""
    match = _VOLUME_PATTERN.match(text.strip().lower())
    if not match:
        return None

    unit = UNIT_ALIASES.get(match.group(2).strip())
    if unit is None:
        logger.debug(f"Unrecognised volume unit in {text!r}")
        return None

    return Volume(value=float(match.group(1)), unit=unit)


def _round_half_up(value: float, places: int) -> float:
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))
