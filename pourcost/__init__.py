"""
PourCost Core Package

Pure pour cost economics and measurement conversion: cost per pour,
suggested pricing, pour cost percentages, unit conversion, currency
display and goal-centred scales.
No framework dependencies (FastAPI) in this package.
"""

__version__ = "1.0.0"

from pourcost.errors import (
    InvalidInputError,
    InvalidRangeError,
    PourCostError,
    UnsupportedCurrencyError,
    UnsupportedUnitError,
)
from pourcost.models.common import MeasurementSystem, PerformanceTier, UseCase, VolumeUnit
from pourcost.models.pricing import CocktailCostResult, CocktailLine, CostResult, Ingredient
from pourcost.models.volume import PourSpec, Volume

__all__ = [
    "Volume",
    "PourSpec",
    "Ingredient",
    "CocktailLine",
    "CostResult",
    "CocktailCostResult",
    "VolumeUnit",
    "MeasurementSystem",
    "UseCase",
    "PerformanceTier",
    "PourCostError",
    "InvalidInputError",
    "UnsupportedUnitError",
    "UnsupportedCurrencyError",
    "InvalidRangeError",
]
