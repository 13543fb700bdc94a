"""Pour cost data models."""

from typing import List, Optional

from pydantic import BaseModel, Field

from pourcost.models.common import IngredientKind, PerformanceTier, VolumeUnit
from pourcost.models.volume import PourSpec, Volume


class Ingredient(BaseModel):
    """A purchased bottle (or keg, or carton) of something poured."""

    name: str = ""
    bottle_volume: Volume
    bottle_price: float = Field(..., ge=0, description="Price of the full container")
    sellable: bool = Field(default=True, description="Sold on its own as a pour")
    kind: IngredientKind = IngredientKind.LIQUOR


class CostLine(BaseModel):
    """Minimal per-ingredient input for cocktail totals."""

    cost_per_unit_volume: float = Field(..., ge=0)
    pour_amount: float = Field(..., gt=0)


class CostResult(BaseModel):
    """Pour cost calculation for one ingredient and pour."""

    unit: VolumeUnit
    cost_per_unit_volume: float
    pour_amount: float
    cost_per_pour: float
    target_pour_cost: float
    suggested_price: float
    actual_price: float
    pour_cost_percentage: float = Field(
        ..., description="0.0 when metrics_available is False"
    )
    profit_margin: float
    metrics_available: bool = True


class CocktailLine(BaseModel):
    """One ingredient of a cocktail with its pour."""

    ingredient: Ingredient
    pour: PourSpec


class CocktailLineCost(BaseModel):
    """Cost contribution of one cocktail line."""

    name: str
    unit: VolumeUnit
    cost_per_unit_volume: float
    pour_amount: float
    cost_per_pour: float


class CocktailCostResult(BaseModel):
    """Aggregate cost of a cocktail."""

    lines: List[CocktailLineCost]
    total_cost: float
    target_pour_cost: float
    suggested_price: float
    actual_price: float
    pour_cost_percentage: float
    profit_margin: float
    metrics_available: bool = True


class PricingRecommendation(BaseModel):
    """Suggested price change for a pour."""

    current_performance: PerformanceTier
    current_percentage: float
    recommended_price: float
    target_percentage: float
    potential_profit: float
    message: str


class PerformanceSnapshot(BaseModel):
    """Everything a performance bar needs to render."""

    pour_cost_percentage: float
    goal: float
    tier: PerformanceTier
    color: str
    position: float
    feedback: str
    actual_price: Optional[float] = None
