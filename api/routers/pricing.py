"""Pour cost and pricing endpoints."""

from typing import Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query
from pydantic import BaseModel, Field

from api.config import Settings, get_settings
from api.dependencies import DisplayContext, get_display_context
from pourcost.models.pricing import (
    CocktailCostResult,
    CocktailLine,
    CostResult,
    Ingredient,
    PerformanceSnapshot,
    PricingRecommendation,
)
from pourcost.models.volume import PourSpec
from pourcost.services import currency_formatter, pour_cost_calculator, scale_mapper

router = APIRouter()


# =============================================================================
# Request / Response Models
# =============================================================================

class IngredientCostRequest(BaseModel):
    """Price a single pour."""
    ingredient: Ingredient
    pour: PourSpec
    target_pour_cost: Optional[float] = Field(None, gt=0, le=100)
    actual_price: Optional[float] = Field(None, ge=0)


class CocktailCostRequest(BaseModel):
    """Price a cocktail from its ingredient lines."""
    lines: List[CocktailLine] = Field(..., min_length=1)
    target_pour_cost: Optional[float] = Field(None, gt=0, le=100)
    actual_price: Optional[float] = Field(None, ge=0)


class IngredientCostResponse(BaseModel):
    result: CostResult
    performance: Optional[PerformanceSnapshot] = None
    display: Dict[str, str]


class CocktailCostResponse(BaseModel):
    result: CocktailCostResult
    performance: Optional[PerformanceSnapshot] = None
    display: Dict[str, str]


def _display_amounts(amounts: Dict[str, float], context: DisplayContext) -> Dict[str, str]:
    return {
        name: currency_formatter.format_currency(value, context.currency, locale=context.locale)
        for name, value in amounts.items()
    }


def _snapshot(metrics_available: bool, percentage: float, goal: float, price: float):
    """Performance bar for a result, or None when there is nothing to draw."""
    domain_min, _ = scale_mapper.default_domain(goal)
    if not metrics_available or goal <= domain_min:
        return None
    return scale_mapper.performance_snapshot(percentage, goal, actual_price=price)


# =============================================================================
# Endpoints
# =============================================================================

@router.post("/ingredient", response_model=IngredientCostResponse)
async def price_ingredient(
    request: IngredientCostRequest = Body(...),
    context: DisplayContext = Depends(get_display_context),
    settings: Settings = Depends(get_settings),
):
    """
    Cost breakdown for one pour of an ingredient.

    **Optional:**
    - `target_pour_cost`: Goal pour cost % (defaults to the configured goal)
    - `actual_price`: Menu price (defaults to the suggested price)
    """
    target = request.target_pour_cost or settings.default_pour_cost_goal
    result = pour_cost_calculator.calculate_ingredient_cost(
        request.ingredient,
        request.pour,
        target,
        actual_price=request.actual_price,
    )

    return IngredientCostResponse(
        result=result,
        performance=_snapshot(
            result.metrics_available, result.pour_cost_percentage, target, result.actual_price
        ),
        display=_display_amounts(
            {
                "cost_per_pour": result.cost_per_pour,
                "suggested_price": result.suggested_price,
                "actual_price": result.actual_price,
                "profit_margin": result.profit_margin,
            },
            context,
        ),
    )


@router.post("/cocktail", response_model=CocktailCostResponse)
async def price_cocktail(
    request: CocktailCostRequest = Body(...),
    context: DisplayContext = Depends(get_display_context),
    settings: Settings = Depends(get_settings),
):
    """
    Cost breakdown for a cocktail.

    Every line contributes to the total, including ingredients that are
    not sold on their own.
    """
    target = request.target_pour_cost or settings.default_cocktail_goal
    result = pour_cost_calculator.calculate_cocktail_cost(
        request.lines,
        target,
        actual_price=request.actual_price,
    )

    return CocktailCostResponse(
        result=result,
        performance=_snapshot(
            result.metrics_available, result.pour_cost_percentage, target, result.actual_price
        ),
        display=_display_amounts(
            {
                "total_cost": result.total_cost,
                "suggested_price": result.suggested_price,
                "actual_price": result.actual_price,
                "profit_margin": result.profit_margin,
            },
            context,
        ),
    )


@router.get("/performance", response_model=PerformanceSnapshot)
async def get_performance(
    percentage: float = Query(..., ge=0, description="Current pour cost %"),
    goal: Optional[float] = Query(None, gt=0, le=100, description="Goal pour cost %"),
    settings: Settings = Depends(get_settings),
):
    """Tier, bar colour and bar position for a pour cost reading."""
    return scale_mapper.performance_snapshot(percentage, goal or settings.default_pour_cost_goal)


@router.get("/recommendation", response_model=PricingRecommendation)
async def get_recommendation(
    cost: float = Query(..., ge=0, description="Cost per pour"),
    price: float = Query(..., gt=0, description="Current menu price"),
    target: Optional[float] = Query(None, gt=0, le=100, description="Target pour cost %"),
    settings: Settings = Depends(get_settings),
):
    """Compare the current price with the price that would hit the target."""
    return pour_cost_calculator.pricing_recommendation(
        cost, price, target or settings.default_pour_cost_goal
    )
