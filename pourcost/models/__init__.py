"""Data models for the pour cost engine."""

from pourcost.models.common import (
    BottleCategory,
    IngredientKind,
    MeasurementSystem,
    PerformanceColor,
    PerformanceTier,
    SliderKind,
    SymbolPosition,
    UseCase,
    VolumeUnit,
)
from pourcost.models.currency import CurrencyAmount, CurrencyInfo, LocaleFormat
from pourcost.models.measurement import (
    BottleSizeOption,
    MeasurementConfig,
    MeasurementRecommendation,
    MeasurementValidation,
)
from pourcost.models.pricing import (
    CocktailCostResult,
    CocktailLine,
    CocktailLineCost,
    CostLine,
    CostResult,
    Ingredient,
    PerformanceSnapshot,
    PricingRecommendation,
)
from pourcost.models.volume import CocktailMeasurement, ConversionResult, PourSpec, Volume

__all__ = [
    # Common
    "VolumeUnit",
    "MeasurementSystem",
    "UseCase",
    "BottleCategory",
    "IngredientKind",
    "PerformanceTier",
    "PerformanceColor",
    "SliderKind",
    "SymbolPosition",
    # Volume
    "Volume",
    "PourSpec",
    "ConversionResult",
    "CocktailMeasurement",
    # Pricing
    "Ingredient",
    "CostLine",
    "CostResult",
    "CocktailLine",
    "CocktailLineCost",
    "CocktailCostResult",
    "PricingRecommendation",
    "PerformanceSnapshot",
    # Currency
    "CurrencyInfo",
    "CurrencyAmount",
    "LocaleFormat",
    # Measurement
    "MeasurementConfig",
    "BottleSizeOption",
    "MeasurementRecommendation",
    "MeasurementValidation",
]
