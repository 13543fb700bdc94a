"""
Measurement Resolver

Decides which unit to present a volume in, given the user's measurement
system and what the volume is for (a bottle, a recipe, a cocktail pour).
Also carries locale conventions and the standard bottle size catalogue.
"""

import logging
import math
from types import MappingProxyType
from typing import Dict, List, Optional

from pourcost.errors import InvalidInputError
from pourcost.models.common import (
    BottleCategory,
    MeasurementSystem,
    SymbolPosition,
    UseCase,
    VolumeUnit,
    ensure_exhaustive,
)
from pourcost.models.currency import LocaleFormat
from pourcost.models.measurement import (
    BottleSizeOption,
    MeasurementConfig,
    MeasurementRecommendation,
    MeasurementValidation,
)
from pourcost.models.volume import ConversionResult
from pourcost.services import volume_converter

logger = logging.getLogger(__name__)

MEASUREMENT_CONFIGS = MappingProxyType({
    MeasurementSystem.US: MeasurementConfig(
        system=MeasurementSystem.US,
        primary_volume_unit=VolumeUnit.OZ,
        secondary_volume_unit=VolumeUnit.CUP,
        small_volume_unit=VolumeUnit.TSP,
        bottle_size_unit=VolumeUnit.ML,  # bottles are labelled in ml even in the US
    ),
    MeasurementSystem.METRIC: MeasurementConfig(
        system=MeasurementSystem.METRIC,
        primary_volume_unit=VolumeUnit.ML,
        secondary_volume_unit=VolumeUnit.L,
        small_volume_unit=VolumeUnit.ML,
        bottle_size_unit=VolumeUnit.ML,
    ),
})
ensure_exhaustive(MEASUREMENT_CONFIGS, MeasurementSystem, "MEASUREMENT_CONFIGS")

# Recipe unit breakpoints (ml)
US_RECIPE_TSP_BELOW_ML = 15.0
US_RECIPE_OZ_BELOW_ML = 60.0
METRIC_RECIPE_ML_BELOW_ML = 1000.0


def _bottle(size, unit, label, common, category) -> BottleSizeOption:
    return BottleSizeOption(size=size, unit=unit, label=label, common=common, category=category)


_ML, _OZ = VolumeUnit.ML, VolumeUnit.OZ
_WINE, _SPIRIT, _BEER = BottleCategory.WINE, BottleCategory.SPIRIT, BottleCategory.BEER

_SHARED_WINE = (
    _bottle(187.5, _ML, "187ml (Split)", True, _WINE),
    _bottle(375, _ML, "375ml (Half Bottle)", True, _WINE),
    _bottle(750, _ML, "750ml (Standard)", True, _WINE),
    _bottle(1500, _ML, "1.5L (Magnum)", False, _WINE),
    _bottle(3000, _ML, "3L (Double Magnum)", False, _WINE),
)

BOTTLE_SIZES = MappingProxyType({
    MeasurementSystem.US: _SHARED_WINE + (
        _bottle(50, _ML, "50ml (Airline)", False, _SPIRIT),
        _bottle(100, _ML, "100ml (Miniature)", False, _SPIRIT),
        _bottle(200, _ML, "200ml (Half Pint)", False, _SPIRIT),
        _bottle(375, _ML, "375ml (Pint)", True, _SPIRIT),
        _bottle(500, _ML, "500ml", False, _SPIRIT),
        _bottle(750, _ML, "750ml (Fifth)", True, _SPIRIT),
        _bottle(1000, _ML, "1L (Quart)", True, _SPIRIT),
        _bottle(1750, _ML, "1.75L (Half Gallon)", True, _SPIRIT),
        _bottle(12, _OZ, "12oz (Standard)", True, _BEER),
        _bottle(16, _OZ, "16oz (Pint)", True, _BEER),
        _bottle(22, _OZ, "22oz (Bomber)", True, _BEER),
        _bottle(32, _OZ, "32oz (Growler)", False, _BEER),
        _bottle(64, _OZ, "64oz (Half Gallon)", False, _BEER),
    ),
    MeasurementSystem.METRIC: _SHARED_WINE + (
        _bottle(50, _ML, "50ml (Miniature)", False, _SPIRIT),
        _bottle(100, _ML, "100ml", False, _SPIRIT),
        _bottle(200, _ML, "200ml", False, _SPIRIT),
        _bottle(375, _ML, "375ml", True, _SPIRIT),
        _bottle(500, _ML, "500ml", True, _SPIRIT),
        _bottle(700, _ML, "700ml", True, _SPIRIT),
        _bottle(750, _ML, "750ml", True, _SPIRIT),
        _bottle(1000, _ML, "1L", True, _SPIRIT),
        _bottle(1750, _ML, "1.75L", False, _SPIRIT),
        _bottle(330, _ML, "330ml (Standard)", True, _BEER),
        _bottle(355, _ML, "355ml (Can)", True, _BEER),
        _bottle(440, _ML, "440ml (Pint Can)", True, _BEER),
        _bottle(500, _ML, "500ml (Pint)", True, _BEER),
        _bottle(568, _ML, "568ml (Imperial Pint)", False, _BEER),
        _bottle(1000, _ML, "1L", False, _BEER),
    ),
})
ensure_exhaustive(BOTTLE_SIZES, MeasurementSystem, "BOTTLE_SIZES")


def _locale(locale, system, currency, date_format, time_format, decimal, thousands, position):
    return LocaleFormat(
        locale=locale,
        measurement_system=system,
        currency=currency,
        date_format=date_format,
        time_format=time_format,
        decimal_separator=decimal,
        thousands_separator=thousands,
        symbol_position=position,
    )


_US, _METRIC = MeasurementSystem.US, MeasurementSystem.METRIC
_BEFORE, _AFTER = SymbolPosition.BEFORE, SymbolPosition.AFTER

LOCALE_CONFIGS = MappingProxyType({
    config.locale: config for config in (
        _locale("en-US", _US, "USD", "MM/DD/YYYY", "12h", ".", ",", _BEFORE),
        _locale("en-GB", _METRIC, "GBP", "DD/MM/YYYY", "24h", ".", ",", _BEFORE),
        _locale("en-CA", _METRIC, "CAD", "DD/MM/YYYY", "24h", ".", ",", _BEFORE),
        _locale("en-AU", _METRIC, "AUD", "DD/MM/YYYY", "24h", ".", ",", _BEFORE),
        _locale("de-DE", _METRIC, "EUR", "DD.MM.YYYY", "24h", ",", ".", _AFTER),
        _locale("fr-FR", _METRIC, "EUR", "DD/MM/YYYY", "24h", ",", " ", _AFTER),
        _locale("es-ES", _METRIC, "EUR", "DD/MM/YYYY", "24h", ",", ".", _AFTER),
        _locale("it-IT", _METRIC, "EUR", "DD/MM/YYYY", "24h", ",", ".", _AFTER),
        _locale("ja-JP", _METRIC, "JPY", "YYYY/MM/DD", "24h", ".", ",", _BEFORE),
        _locale("zh-CN", _METRIC, "CNY", "YYYY/MM/DD", "24h", ".", ",", _BEFORE),
    )
})
DEFAULT_LOCALE = "en-US"

# Countries that still measure in US customary units
US_MEASUREMENT_COUNTRIES = frozenset({"US", "LR", "MM"})


# ============================================================================
# Configuration lookup
# ============================================================================

def measurement_config(system: MeasurementSystem) -> MeasurementConfig:
    return MEASUREMENT_CONFIGS[MeasurementSystem(system)]


def known_locale(locale: str) -> bool:
    return locale in LOCALE_CONFIGS


def locale_config(locale: str) -> LocaleFormat:
    """Conventions for a locale; unknown locales get en-US conventions."""
    config = LOCALE_CONFIGS.get(locale)
    if config is None:
        return LOCALE_CONFIGS[DEFAULT_LOCALE].model_copy(update={"locale": locale})
    return config


def supported_locales() -> List[str]:
    return list(LOCALE_CONFIGS)


def system_for_locale(locale: str) -> MeasurementSystem:
    return locale_config(locale).measurement_system


def system_for_country(country_code: str) -> MeasurementSystem:
    if country_code.upper() in US_MEASUREMENT_COUNTRIES:
        return MeasurementSystem.US
    return MeasurementSystem.METRIC


# ============================================================================
# Unit selection
# ============================================================================

def display_unit(
    system: MeasurementSystem,
    use_case: UseCase = UseCase.COCKTAIL,
    ml_value: Optional[float] = None,
) -> VolumeUnit:
    """
    Pick the unit a volume should be shown in.

    Bottles always show in the system's bottle unit and cocktail pours in
    its primary unit. Recipe quantities scale with size, so ml_value is
    required for UseCase.RECIPE.
    """
    system = MeasurementSystem(system)
    use_case = UseCase(use_case)
    config = MEASUREMENT_CONFIGS[system]

    if use_case == UseCase.BOTTLE:
        return config.bottle_size_unit
    if use_case == UseCase.COCKTAIL:
        return config.primary_volume_unit

    if ml_value is None:
        raise InvalidInputError("ml_value is required for recipe units")
    if system == MeasurementSystem.US:
        if ml_value < US_RECIPE_TSP_BELOW_ML:
            return VolumeUnit.TSP
        if ml_value < US_RECIPE_OZ_BELOW_ML:
            return VolumeUnit.OZ
        return VolumeUnit.CUP
    return VolumeUnit.ML if ml_value < METRIC_RECIPE_ML_BELOW_ML else VolumeUnit.L


def convert_to_preferred_unit(
    value: float,
    from_unit: VolumeUnit,
    system: MeasurementSystem,
    use_case: UseCase = UseCase.COCKTAIL,
) -> ConversionResult:
    """Convert a volume into the unit display_unit picks for it."""
    ml_value = volume_converter.to_base(value, from_unit)
    target = display_unit(system, use_case, ml_value)
    return volume_converter.convert_with_format(value, from_unit, target)


# ============================================================================
# Bottle sizes
# ============================================================================

def bottle_size_options(
    system: MeasurementSystem,
    category: Optional[BottleCategory] = None,
    common_only: bool = False,
) -> List[BottleSizeOption]:
    sizes = BOTTLE_SIZES[MeasurementSystem(system)]
    return [
        size for size in sizes
        if (category is None or size.category == category)
        and (not common_only or size.common)
    ]


def bottle_sizes_by_category(
    system: MeasurementSystem,
    common_only: bool = False,
) -> Dict[BottleCategory, List[BottleSizeOption]]:
    grouped: Dict[BottleCategory, List[BottleSizeOption]] = {}
    for size in bottle_size_options(system, common_only=common_only):
        grouped.setdefault(size.category, []).append(size)
    return grouped


def find_closest_bottle_size(
    value: float,
    unit: VolumeUnit,
    system: MeasurementSystem,
) -> Optional[BottleSizeOption]:
    """Nearest standard bottle by volume; the first listed wins ties."""
    target_ml = volume_converter.to_base(value, unit)

    closest = None
    smallest_diff = math.inf
    for size in bottle_size_options(system):
        diff = abs(volume_converter.to_base(size.size, size.unit) - target_ml)
        if diff < smallest_diff:
            smallest_diff = diff
            closest = size
    return closest


# ============================================================================
# Recommendations & validation
# ============================================================================

def measurement_recommendations(
    ml_value: float,
    system: MeasurementSystem,
) -> List[MeasurementRecommendation]:
    """Alternative readings of a volume, e.g. 30ml as 1oz or 2 tbsp."""
    oz_ml = volume_converter.ML_PER_UNIT[VolumeUnit.OZ]
    tbsp_ml = volume_converter.ML_PER_UNIT[VolumeUnit.TBSP]
    recommendations = []

    if MeasurementSystem(system) == MeasurementSystem.US:
        if ml_value >= oz_ml:
            recommendations.append(_recommend(ml_value, VolumeUnit.OZ, 0.25))
        if tbsp_ml <= ml_value < 2 * oz_ml:
            recommendations.append(_recommend(ml_value, VolumeUnit.TBSP, 0.5))
        if ml_value < oz_ml:
            recommendations.append(_recommend(ml_value, VolumeUnit.TSP, 0.25))
    else:
        if ml_value >= METRIC_RECIPE_ML_BELOW_ML:
            recommendations.append(_recommend(ml_value, VolumeUnit.L, 0.1))
        recommendations.append(_recommend(ml_value, VolumeUnit.ML, 1))

    return recommendations


def _recommend(ml_value: float, unit: VolumeUnit, exact_step: float) -> MeasurementRecommendation:
    value = volume_converter.from_base(ml_value, unit)
    steps = value / exact_step
    exact = math.isclose(steps, round(steps), abs_tol=1e-9)
    return MeasurementRecommendation(
        value=value,
        unit=unit,
        formatted=volume_converter.format_volume(value, unit),
        precision="exact" if exact else "rounded",
    )


def validate_measurement(
    value: float,
    unit: VolumeUnit,
    system: MeasurementSystem,
) -> MeasurementValidation:
    """Sanity-check a user-entered measurement. Never raises for bad values."""
    unit = volume_converter.resolve_unit(unit)
    warnings: List[str] = []
    suggestions: List[str] = []
    is_valid = True

    if value <= 0:
        is_valid = False
        warnings.append("Measurement value must be greater than 0")
    if value > 10000:
        warnings.append("Measurement value seems unusually large")

    config = measurement_config(system)
    if unit not in volume_converter.supported_units(config.system):
        warnings.append(f"{unit.value} is not commonly used in the {config.system.value} system")
        suggestions.append(f"Consider using {config.primary_volume_unit.value} instead")

    if value > 0:
        ml_value = volume_converter.to_base(value, unit)
        if ml_value < 1 and unit != VolumeUnit.DROPS:
            warnings.append("Very small measurements may be impractical")
            suggestions.append("Consider using drops for very small amounts")

    return MeasurementValidation(is_valid=is_valid, warnings=warnings, suggestions=suggestions)
