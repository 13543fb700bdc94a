"""Pytest configuration and fixtures."""

import os
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from pourcost.models.common import IngredientKind, VolumeUnit
from pourcost.models.pricing import CocktailLine, Ingredient
from pourcost.models.volume import PourSpec, Volume

# Set test environment before importing app
os.environ["DEBUG"] = "true"
os.environ["BASE_CURRENCY"] = "USD"
os.environ["LOCALE"] = "en-US"
os.environ["DEFAULT_POUR_COST_GOAL"] = "20"
os.environ["DEFAULT_COCKTAIL_GOAL"] = "22"


@pytest.fixture
def api_client() -> Generator[TestClient, None, None]:
    """Create a FastAPI test client."""
    from api.main import app

    with TestClient(app) as client:
        yield client


@pytest.fixture
def bourbon() -> Ingredient:
    """750ml bottle of bourbon at $25."""
    return Ingredient(
        name="Buffalo Trace",
        bottle_volume=Volume(value=750, unit=VolumeUnit.ML),
        bottle_price=25.00,
    )


@pytest.fixture
def simple_syrup() -> Ingredient:
    """House syrup; costed in cocktails but never sold alone."""
    return Ingredient(
        name="Simple Syrup",
        bottle_volume=Volume(value=1, unit=VolumeUnit.L),
        bottle_price=4.00,
        sellable=False,
        kind=IngredientKind.PREPPED,
    )


@pytest.fixture
def standard_pour() -> PourSpec:
    return PourSpec(amount=1.5, unit=VolumeUnit.OZ)


@pytest.fixture
def old_fashioned(bourbon, simple_syrup) -> list:
    """Bourbon and syrup lines for an Old Fashioned."""
    return [
        CocktailLine(ingredient=bourbon, pour=PourSpec(amount=2, unit=VolumeUnit.OZ)),
        CocktailLine(ingredient=simple_syrup, pour=PourSpec(amount=0.25, unit=VolumeUnit.OZ)),
    ]
