"""
Pour Cost Engine Services

Pure functions with no framework dependencies.
All services are stateless; lookup tables are read-only.
"""

from pourcost.services import (
    currency_formatter,
    measurement_resolver,
    pour_cost_calculator,
    scale_mapper,
    volume_converter,
)
from pourcost.services.pour_cost_calculator import (
    calculate_cocktail_cost,
    calculate_ingredient_cost,
    performance_tier,
)
from pourcost.services.scale_mapper import GoalScale, performance_snapshot

__all__ = [
    "volume_converter",
    "currency_formatter",
    "pour_cost_calculator",
    "scale_mapper",
    "measurement_resolver",
    "calculate_ingredient_cost",
    "calculate_cocktail_cost",
    "performance_tier",
    "GoalScale",
    "performance_snapshot",
]
