"""Common enumerations shared across the engine."""

from enum import Enum

# ============================================================================
# Measurement
# ============================================================================

class VolumeUnit(str, Enum):
    """Supported volume units."""
    ML = "ml"
    L = "L"
    OZ = "oz"
    CUP = "cup"
    PT = "pt"
    QT = "qt"
    GAL = "gal"
    TBSP = "tbsp"
    TSP = "tsp"
    DROPS = "drops"
    SPLASH = "splash"


class MeasurementSystem(str, Enum):
    """User measurement preference."""
    US = "US"
    METRIC = "Metric"


class UseCase(str, Enum):
    """What a volume is being displayed for."""
    BOTTLE = "bottle"
    RECIPE = "recipe"
    COCKTAIL = "cocktail"


class BottleCategory(str, Enum):
    """Bottle size groupings."""
    WINE = "Wine"
    SPIRIT = "Spirit"
    BEER = "Beer"
    OTHER = "Other"


# ============================================================================
# Pricing
# ============================================================================

class IngredientKind(str, Enum):
    """Ingredient type."""
    BEER = "beer"
    WINE = "wine"
    SPIRIT = "spirit"
    LIQUOR = "liquor"
    MIXER = "mixer"
    PREPPED = "prepped"
    GARNISH = "garnish"
    OTHER = "other"


class PerformanceTier(str, Enum):
    """How close a pour cost is to its goal."""
    EXCELLENT = "excellent"
    GOOD = "good"
    WARNING = "warning"
    POOR = "poor"


class PerformanceColor(str, Enum):
    """Display colour for a performance tier."""
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


class SliderKind(str, Enum):
    """Slider families with their own step tables."""
    PRICE = "price"
    POUR_COST = "pour_cost"


# ============================================================================
# Currency
# ============================================================================

class SymbolPosition(str, Enum):
    """Where the currency symbol goes relative to the number."""
    BEFORE = "before"
    AFTER = "after"


def ensure_exhaustive(table, enum_cls, name: str) -> None:
    """Fail at import time if a lookup table misses an enum member."""
    missing = [member.value for member in enum_cls if member not in table]
    if missing:
        raise RuntimeError(f"{name} is missing entries for: {', '.join(missing)}")
