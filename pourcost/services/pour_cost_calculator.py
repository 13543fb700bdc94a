"""
Pour Cost Calculator

Single source of truth for cost and pricing math: cost per unit volume,
cost per pour, suggested price, pour cost percentage and margin, for single
pours and for cocktails.

Pour cost percentage and margin have no meaning when the selling price is
zero or the ingredient is not sold on its own. In those cases both are
reported as 0.0 and result models carry metrics_available=False so callers
can hide them.
"""

import logging
from typing import Iterable, Optional, Sequence

from pourcost.errors import InvalidInputError
from pourcost.models.common import PerformanceTier, VolumeUnit, ensure_exhaustive
from pourcost.models.pricing import (
    CocktailCostResult,
    CocktailLine,
    CocktailLineCost,
    CostLine,
    CostResult,
    Ingredient,
    PricingRecommendation,
)
from pourcost.models.volume import PourSpec
from pourcost.services import volume_converter

logger = logging.getLogger(__name__)

# Reported when pour cost % or margin cannot be computed
NOT_APPLICABLE = 0.0

# Deviation bands (percentage points from goal) for performance tiers
EXCELLENT_BAND = 3.0
WARNING_BAND = 7.0

# Absolute pour cost % ceilings, independent of any goal
ABSOLUTE_LEVELS = (
    (15.0, PerformanceTier.EXCELLENT),
    (20.0, PerformanceTier.GOOD),
    (25.0, PerformanceTier.WARNING),
)

RECOMMENDATION_MESSAGES = {
    PerformanceTier.EXCELLENT: "Excellent pour cost! Consider if price can be optimized further.",
    PerformanceTier.GOOD: "Good pour cost ratio. Minor price adjustment could improve margins.",
    PerformanceTier.WARNING: "Pour cost is getting high. Consider raising price or finding cost savings.",
    PerformanceTier.POOR: "Pour cost is too high! Significant price increase or cost reduction needed.",
}
ensure_exhaustive(RECOMMENDATION_MESSAGES, PerformanceTier, "RECOMMENDATION_MESSAGES")


# ============================================================================
# Core calculations
# ============================================================================

def cost_per_unit_volume(bottle_price: float, bottle_volume_in_pour_unit: float) -> float:
    """
    Cost of one unit of volume.

    Args:
        bottle_price: Price of the full bottle
        bottle_volume_in_pour_unit: Bottle size already converted to the
            unit the pour is measured in

    Returns:
        Price per unit (e.g. per oz when the pour is in oz)
    """
    if bottle_volume_in_pour_unit <= 0:
        raise InvalidInputError(
            "Bottle size must be greater than 0",
            details={"bottle_volume": bottle_volume_in_pour_unit},
        )
    if bottle_price < 0:
        raise InvalidInputError(
            "Bottle price cannot be negative",
            details={"bottle_price": bottle_price},
        )
    return bottle_price / bottle_volume_in_pour_unit


def cost_per_pour(cost_per_unit: float, pour_amount: float) -> float:
    if cost_per_unit < 0:
        raise InvalidInputError("Cost per unit cannot be negative", details={"cost_per_unit": cost_per_unit})
    if pour_amount <= 0:
        raise InvalidInputError("Pour size must be greater than 0", details={"pour_amount": pour_amount})
    return cost_per_unit * pour_amount


def suggested_price(pour_cost: float, target_pour_cost_percent: float) -> float:
    """Price at which pour_cost is exactly the target share of the price."""
    if pour_cost < 0:
        raise InvalidInputError("Pour cost cannot be negative", details={"pour_cost": pour_cost})
    if target_pour_cost_percent <= 0 or target_pour_cost_percent > 100:
        raise InvalidInputError(
            "Target percentage must be between 0 and 100",
            details={"target_pour_cost_percent": target_pour_cost_percent},
        )
    return pour_cost / (target_pour_cost_percent / 100)


def pour_cost_percentage(pour_cost: float, actual_price: float, sellable: bool = True) -> float:
    """
    Pour cost as a percentage of the selling price.

    Returns NOT_APPLICABLE (0.0) instead of dividing by zero when the price
    is not positive or the item is not sold on its own.
    """
    if pour_cost < 0:
        raise InvalidInputError("Pour cost cannot be negative", details={"pour_cost": pour_cost})
    if not sellable or actual_price <= 0:
        return NOT_APPLICABLE
    return pour_cost / actual_price * 100


def profit_margin(actual_price: float, pour_cost: float) -> float:
    if actual_price < 0:
        raise InvalidInputError("Retail price cannot be negative", details={"actual_price": actual_price})
    if pour_cost < 0:
        raise InvalidInputError("Pour cost cannot be negative", details={"pour_cost": pour_cost})
    return actual_price - pour_cost


def cocktail_total_cost(lines: Iterable[CostLine]) -> float:
    """Sum of cost per pour over every ingredient."""
    return sum(cost_per_pour(line.cost_per_unit_volume, line.pour_amount) for line in lines)


def cocktail_suggested_price(total_cost: float, target_pour_cost_percent: float) -> float:
    return suggested_price(total_cost, target_pour_cost_percent)


# ============================================================================
# Performance
# ============================================================================

def performance_tier(pour_cost_percent: float, goal_percent: float) -> PerformanceTier:
    """
    Classify a pour cost by its distance from the goal.

    Within EXCELLENT_BAND points is excellent (at or under goal) or good
    (over goal). Up to WARNING_BAND points is a warning; beyond is poor.
    """
    deviation = pour_cost_percent - goal_percent
    distance = abs(deviation)

    if distance <= EXCELLENT_BAND:
        return PerformanceTier.EXCELLENT if deviation <= 0 else PerformanceTier.GOOD
    if distance <= WARNING_BAND:
        return PerformanceTier.WARNING
    return PerformanceTier.POOR


def absolute_performance_level(pour_cost_percent: float) -> PerformanceTier:
    """Classify against fixed industry ceilings (15/20/25%)."""
    for ceiling, tier in ABSOLUTE_LEVELS:
        if pour_cost_percent <= ceiling:
            return tier
    return PerformanceTier.POOR


def goal_feedback(pour_cost_percent: float, goal_percent: float) -> str:
    """One-line coaching message for a performance bar."""
    deviation = pour_cost_percent - goal_percent
    if abs(deviation) <= 2:
        return f"Perfect! Right at your {goal_percent:g}% goal."
    if deviation < 0:
        return f"Excellent! {abs(deviation):.1f}% below your goal."
    if deviation <= 5:
        return f"Above goal by {deviation:.1f}%. Consider adjusting price."
    return "Significantly above goal. Consider raising price for better profitability."


def pricing_recommendation(
    current_cost: float,
    current_price: float,
    target_pour_cost_percent: float,
) -> PricingRecommendation:
    """Compare a current price against the price that would hit the target."""
    if current_price <= 0:
        raise InvalidInputError("Retail price must be greater than 0", details={"current_price": current_price})

    current_pct = pour_cost_percentage(current_cost, current_price)
    current_tier = performance_tier(current_pct, target_pour_cost_percent)
    recommended = suggested_price(current_cost, target_pour_cost_percent)

    return PricingRecommendation(
        current_performance=current_tier,
        current_percentage=current_pct,
        recommended_price=recommended,
        target_percentage=target_pour_cost_percent,
        potential_profit=profit_margin(recommended, current_cost),
        message=RECOMMENDATION_MESSAGES[current_tier],
    )


# ============================================================================
# Ingredient & cocktail results
# ============================================================================

def calculate_ingredient_cost(
    ingredient: Ingredient,
    pour: PourSpec,
    target_pour_cost_percent: float,
    actual_price: Optional[float] = None,
) -> CostResult:
    """
    Full cost breakdown for one pour of an ingredient.

    The bottle volume is converted into the pour's unit before dividing, so
    cost_per_unit_volume is per oz for an oz pour, per ml for an ml pour.
    actual_price defaults to the suggested price.
    """
    bottle_in_pour_unit = volume_converter.convert(
        ingredient.bottle_volume.value, ingredient.bottle_volume.unit, pour.unit
    )
    unit_cost = cost_per_unit_volume(ingredient.bottle_price, bottle_in_pour_unit)
    pour_cost = cost_per_pour(unit_cost, pour.amount)
    suggested = suggested_price(pour_cost, target_pour_cost_percent)
    price = suggested if actual_price is None else actual_price

    metrics_available = ingredient.sellable and price > 0
    margin = profit_margin(price, pour_cost) if metrics_available else NOT_APPLICABLE

    logger.debug(
        f"{ingredient.name or 'ingredient'}: {pour.amount}{pour.unit.value} costs {pour_cost:.4f}"
    )

    return CostResult(
        unit=pour.unit,
        cost_per_unit_volume=unit_cost,
        pour_amount=pour.amount,
        cost_per_pour=pour_cost,
        target_pour_cost=target_pour_cost_percent,
        suggested_price=suggested,
        actual_price=price,
        pour_cost_percentage=pour_cost_percentage(pour_cost, price, ingredient.sellable),
        profit_margin=margin,
        metrics_available=metrics_available,
    )


def calculate_cocktail_cost(
    lines: Sequence[CocktailLine],
    target_pour_cost_percent: float,
    actual_price: Optional[float] = None,
) -> CocktailCostResult:
    """
    Cost breakdown for a cocktail.

    Ingredients not sold on their own (syrups, juices) still contribute cost;
    the sellable flag only matters for single-ingredient pricing.
    """
    line_costs = []
    for line in lines:
        bottle = line.ingredient.bottle_volume
        unit_cost = cost_per_unit_volume(
            line.ingredient.bottle_price,
            volume_converter.convert(bottle.value, bottle.unit, line.pour.unit),
        )
        line_costs.append(CocktailLineCost(
            name=line.ingredient.name,
            unit=line.pour.unit,
            cost_per_unit_volume=unit_cost,
            pour_amount=line.pour.amount,
            cost_per_pour=cost_per_pour(unit_cost, line.pour.amount),
        ))

    total = cocktail_total_cost(
        CostLine(cost_per_unit_volume=lc.cost_per_unit_volume, pour_amount=lc.pour_amount)
        for lc in line_costs
    )
    suggested = cocktail_suggested_price(total, target_pour_cost_percent)
    price = suggested if actual_price is None else actual_price
    metrics_available = price > 0

    logger.debug(f"Cocktail with {len(line_costs)} ingredients costs {total:.4f}")

    return CocktailCostResult(
        lines=line_costs,
        total_cost=total,
        target_pour_cost=target_pour_cost_percent,
        suggested_price=suggested,
        actual_price=price,
        pour_cost_percentage=pour_cost_percentage(total, price),
        profit_margin=profit_margin(price, total) if metrics_available else NOT_APPLICABLE,
        metrics_available=metrics_available,
    )


def cost_per_ounce(bottle_price: float, bottle_size_ml: float) -> float:
    """Shortcut for the common case of an ml bottle poured by the ounce."""
    return cost_per_unit_volume(
        bottle_price, volume_converter.convert(bottle_size_ml, VolumeUnit.ML, VolumeUnit.OZ)
    )
