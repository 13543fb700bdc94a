"""Tests for the pour cost calculator."""

import pytest

from pourcost.errors import InvalidInputError
from pourcost.models.common import PerformanceTier, VolumeUnit
from pourcost.models.pricing import CostLine
from pourcost.models.volume import PourSpec
from pourcost.services import pour_cost_calculator as calc
from pourcost.services.pour_cost_calculator import (
    calculate_cocktail_cost,
    calculate_ingredient_cost,
    performance_tier,
)


class TestCoreCalculations:
    """Tests for the individual pricing formulas."""

    def test_cost_per_unit_volume(self):
        assert calc.cost_per_unit_volume(25.0, 25.0) == 1.0

    def test_cost_per_unit_volume_rejects_empty_bottle(self):
        with pytest.raises(InvalidInputError):
            calc.cost_per_unit_volume(25.0, 0)

    def test_cost_per_unit_volume_rejects_negative_price(self):
        with pytest.raises(InvalidInputError):
            calc.cost_per_unit_volume(-1.0, 25.0)

    def test_cost_per_pour(self):
        assert calc.cost_per_pour(1.0, 1.5) == 1.5

    def test_cost_per_pour_rejects_zero_pour(self):
        with pytest.raises(InvalidInputError):
            calc.cost_per_pour(1.0, 0)

    def test_suggested_price_hits_target(self):
        """At the suggested price, pour cost is exactly the target share."""
        price = calc.suggested_price(1.5, 20)
        assert price == pytest.approx(7.5)
        assert calc.pour_cost_percentage(1.5, price) == pytest.approx(20.0)

    @pytest.mark.parametrize("target", [0.5, 1, 15, 20, 33.3, 75, 100])
    @pytest.mark.parametrize("pour_cost", [0.05, 1.4787, 12.0])
    def test_percentage_round_trips_through_suggested_price(self, pour_cost, target):
        price = calc.suggested_price(pour_cost, target)
        assert calc.pour_cost_percentage(pour_cost, price) == pytest.approx(target)

    def test_suggested_price_at_full_target(self):
        assert calc.suggested_price(1.5, 100) == pytest.approx(1.5)

    @pytest.mark.parametrize("target", [0, -5, 100.5])
    def test_suggested_price_rejects_bad_target(self, target):
        with pytest.raises(InvalidInputError):
            calc.suggested_price(1.5, target)

    def test_pour_cost_percentage(self):
        assert calc.pour_cost_percentage(2.0, 8.0) == pytest.approx(25.0)

    def test_pour_cost_percentage_without_price(self):
        assert calc.pour_cost_percentage(2.0, 0) == calc.NOT_APPLICABLE

    def test_pour_cost_percentage_not_sellable(self):
        assert calc.pour_cost_percentage(2.0, 8.0, sellable=False) == calc.NOT_APPLICABLE

    def test_profit_margin(self):
        assert calc.profit_margin(8.0, 2.0) == pytest.approx(6.0)

    @pytest.mark.parametrize("price,cost", [
        (8.0, 2.0),
        (7.3934, 1.4787),
        (12.5, 0.0),
        (1.0, 2.0),
        (1234.56, 987.65),
    ])
    def test_margin_plus_cost_is_price(self, price, cost):
        assert calc.profit_margin(price, cost) + cost == pytest.approx(price, abs=0.005)

    def test_profit_margin_can_be_negative(self):
        """Selling below cost is allowed; margin just goes negative."""
        assert calc.profit_margin(1.0, 2.0) == pytest.approx(-1.0)

    def test_cocktail_total_cost(self):
        lines = [
            CostLine(cost_per_unit_volume=0.5, pour_amount=2),
            CostLine(cost_per_unit_volume=0.1, pour_amount=1),
        ]
        assert calc.cocktail_total_cost(lines) == pytest.approx(1.1)

    def test_cocktail_total_cost_empty(self):
        assert calc.cocktail_total_cost([]) == 0

    def test_cost_per_ounce(self):
        assert calc.cost_per_ounce(25.0, 750) == pytest.approx(0.98578, rel=1e-4)


class TestIngredientCost:
    """Tests for full single-pour breakdowns."""

    def test_standard_pour(self, bourbon, standard_pour):
        """750ml at $25, 1.5oz pour, 20% target."""
        result = calculate_ingredient_cost(bourbon, standard_pour, 20)

        assert result.unit == VolumeUnit.OZ
        assert result.cost_per_unit_volume == pytest.approx(0.9865, rel=1e-3)
        assert result.cost_per_pour == pytest.approx(1.4798, rel=1e-3)
        assert result.suggested_price == pytest.approx(7.399, rel=1e-3)

    def test_defaults_actual_price_to_suggested(self, bourbon, standard_pour):
        result = calculate_ingredient_cost(bourbon, standard_pour, 20)

        assert result.actual_price == result.suggested_price
        assert result.pour_cost_percentage == pytest.approx(20.0)
        assert result.metrics_available

    def test_with_actual_price(self, bourbon, standard_pour):
        result = calculate_ingredient_cost(bourbon, standard_pour, 20, actual_price=8.0)

        assert result.pour_cost_percentage == pytest.approx(18.48, rel=1e-3)
        assert result.profit_margin == pytest.approx(8.0 - result.cost_per_pour)
        assert result.profit_margin + result.cost_per_pour == pytest.approx(result.actual_price)

    def test_zero_price_reports_no_metrics(self, bourbon, standard_pour):
        result = calculate_ingredient_cost(bourbon, standard_pour, 20, actual_price=0)

        assert result.pour_cost_percentage == 0.0
        assert result.profit_margin == 0.0
        assert not result.metrics_available

    def test_not_sellable_reports_no_metrics(self, simple_syrup):
        result = calculate_ingredient_cost(simple_syrup, PourSpec(amount=0.5, unit=VolumeUnit.OZ), 20)

        assert result.cost_per_pour > 0
        assert result.pour_cost_percentage == 0.0
        assert not result.metrics_available

    def test_ml_pour_costs_per_ml(self, bourbon):
        result = calculate_ingredient_cost(bourbon, PourSpec(amount=45, unit=VolumeUnit.ML), 20)

        assert result.unit == VolumeUnit.ML
        assert result.cost_per_unit_volume == pytest.approx(25.0 / 750)
        assert result.cost_per_pour == pytest.approx(1.5)

    def test_pour_unit_does_not_change_cost(self, bourbon):
        """The same liquid costs the same whatever unit it is poured in."""
        in_oz = calculate_ingredient_cost(bourbon, PourSpec(amount=1, unit=VolumeUnit.OZ), 20)
        in_ml = calculate_ingredient_cost(bourbon, PourSpec(amount=29.5735, unit=VolumeUnit.ML), 20)

        assert in_oz.cost_per_pour == pytest.approx(in_ml.cost_per_pour)


class TestCocktailCost:
    """Tests for cocktail breakdowns."""

    def test_total_includes_non_sellable_lines(self, old_fashioned):
        result = calculate_cocktail_cost(old_fashioned, 22)

        assert len(result.lines) == 2
        assert result.total_cost == pytest.approx(sum(line.cost_per_pour for line in result.lines))
        assert result.lines[1].name == "Simple Syrup"
        assert result.lines[1].cost_per_pour > 0

    def test_suggested_price(self, old_fashioned):
        result = calculate_cocktail_cost(old_fashioned, 22)

        assert result.total_cost == pytest.approx(2.0011, rel=1e-3)
        assert result.suggested_price == pytest.approx(result.total_cost / 0.22)
        assert result.pour_cost_percentage == pytest.approx(22.0)

    def test_actual_price(self, old_fashioned):
        result = calculate_cocktail_cost(old_fashioned, 22, actual_price=12.0)

        assert result.actual_price == 12.0
        assert result.profit_margin == pytest.approx(12.0 - result.total_cost)

    def test_zero_price(self, old_fashioned):
        result = calculate_cocktail_cost(old_fashioned, 22, actual_price=0)

        assert not result.metrics_available
        assert result.pour_cost_percentage == 0.0
        assert result.profit_margin == 0.0


class TestPerformance:
    """Tests for performance classification."""

    @pytest.mark.parametrize("pct,expected", [
        (20, PerformanceTier.EXCELLENT),
        (17, PerformanceTier.EXCELLENT),
        (22.5, PerformanceTier.GOOD),
        (23, PerformanceTier.GOOD),
        (25, PerformanceTier.WARNING),
        (14, PerformanceTier.WARNING),
        (27, PerformanceTier.WARNING),
        (27.5, PerformanceTier.POOR),
        (12, PerformanceTier.POOR),
    ])
    def test_performance_tier(self, pct, expected):
        assert performance_tier(pct, 20) == expected

    @pytest.mark.parametrize("pct,expected", [
        (15, PerformanceTier.EXCELLENT),
        (18, PerformanceTier.GOOD),
        (25, PerformanceTier.WARNING),
        (30, PerformanceTier.POOR),
    ])
    def test_absolute_level(self, pct, expected):
        assert calc.absolute_performance_level(pct) == expected

    def test_goal_feedback(self):
        assert calc.goal_feedback(21, 20) == "Perfect! Right at your 20% goal."
        assert calc.goal_feedback(15, 20) == "Excellent! 5.0% below your goal."
        assert calc.goal_feedback(24, 20).startswith("Above goal by 4.0%")
        assert calc.goal_feedback(30, 20).startswith("Significantly above goal")


class TestPricingRecommendation:
    """Tests for price recommendations."""

    def test_recommends_target_price(self):
        rec = calc.pricing_recommendation(1.5, 6.0, 20)

        assert rec.current_percentage == pytest.approx(25.0)
        assert rec.current_performance == PerformanceTier.WARNING
        assert rec.recommended_price == pytest.approx(7.5)
        assert rec.potential_profit == pytest.approx(6.0)
        assert rec.message == calc.RECOMMENDATION_MESSAGES[PerformanceTier.WARNING]

    def test_rejects_zero_price(self):
        with pytest.raises(InvalidInputError):
            calc.pricing_recommendation(1.5, 0, 20)
