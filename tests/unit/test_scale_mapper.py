"""Tests for the goal-centred scale mapper."""

import pytest

from pourcost.errors import InvalidRangeError
from pourcost.models.common import PerformanceColor, PerformanceTier, SliderKind
from pourcost.services import scale_mapper
from pourcost.services.scale_mapper import (
    HIGH_SPLIT,
    LOW_SPLIT,
    GoalScale,
    dynamic_step,
    quantize,
)


@pytest.fixture
def scale() -> GoalScale:
    """Goal 20% on a 5-50% track."""
    return GoalScale(goal=20, domain_min=5, domain_max=50)


class TestGoalScale:
    """Tests for forward and inverse mapping."""

    def test_goal_sits_mid_track(self, scale):
        assert scale.to_position(20) == pytest.approx(0.5)

    def test_sweet_spot_edges(self, scale):
        assert scale.sweet_spot == (10, 30)
        assert scale.to_position(10) == pytest.approx(LOW_SPLIT)
        assert scale.to_position(30) == pytest.approx(HIGH_SPLIT)

    def test_domain_edges(self, scale):
        assert scale.to_position(5) == pytest.approx(0.0)
        assert scale.to_position(50) == pytest.approx(1.0)

    def test_out_of_domain_clamps(self, scale):
        assert scale.to_position(1) == 0.0
        assert scale.to_position(200) == pytest.approx(1.0)
        assert scale.to_value(-0.5) == pytest.approx(5)
        assert scale.to_value(1.5) == pytest.approx(50)

    @pytest.mark.parametrize("value", [5, 7, 10, 15, 20, 27, 30, 40, 50])
    def test_round_trip(self, scale, value):
        assert scale.to_value(scale.to_position(value)) == pytest.approx(value)

    def test_monotonic(self, scale):
        values = [5 + i * 0.5 for i in range(91)]
        positions = [scale.to_position(v) for v in values]
        assert positions == sorted(positions)

    def test_compresses_tails(self, scale):
        """The sweet spot gets more track per point than the tails."""
        sweet = (scale.to_position(21) - scale.to_position(20))
        tail = (scale.to_position(41) - scale.to_position(40))
        assert sweet > tail

    @pytest.mark.parametrize("goal,low,high", [
        (20, 25, 50),
        (20, 0, 50),
        (20, 5, 20),
        (20, 20, 50),
    ])
    def test_invalid_domain(self, goal, low, high):
        with pytest.raises(InvalidRangeError):
            GoalScale(goal=goal, domain_min=low, domain_max=high)

    @pytest.mark.parametrize("goal", [20, 30, 8])
    def test_round_trip_sweep(self, goal):
        """Inverse holds across the whole default domain, clipped or not."""
        sweep = GoalScale.around(goal)
        span = sweep.domain_max - sweep.domain_min
        for i in range(100):
            value = sweep.domain_min + span * i / 99
            assert sweep.to_value(sweep.to_position(value)) == pytest.approx(value)

    def test_sweet_spot_edges_map_exactly(self, scale):
        assert scale.to_value(LOW_SPLIT) == pytest.approx(10)
        assert scale.to_value(HIGH_SPLIT) == pytest.approx(30)
        assert scale.to_value(scale.to_position(10)) == pytest.approx(10)
        assert scale.to_value(scale.to_position(30)) == pytest.approx(30)

    def test_clipped_sweet_spot(self):
        """Goal 8 on its default 2-20 domain loses the low tail."""
        clipped = GoalScale.around(8)

        assert clipped.sweet_spot == (2, 18)
        assert clipped.to_position(18) == pytest.approx(HIGH_SPLIT)
        assert clipped.to_value(HIGH_SPLIT) == pytest.approx(18)
        assert clipped.to_value(LOW_SPLIT) == pytest.approx(2)

    def test_narrow_domain_is_linear(self):
        """When the domain is inside the sweet spot there are no tails."""
        narrow = GoalScale(goal=5, domain_min=2, domain_max=12.5)

        assert narrow.sweet_spot == (2, 12.5)
        for value in (2.5, 5, 10):
            assert narrow.to_value(narrow.to_position(value)) == pytest.approx(value)

    def test_module_functions_match_scale(self, scale):
        assert scale_mapper.to_position(27, 20, 5, 50) == scale.to_position(27)
        assert scale_mapper.to_value(0.7, 20, 5, 50) == scale.to_value(0.7)


class TestDefaultDomain:
    """Tests for the default bar domain."""

    def test_scales_with_goal(self):
        assert scale_mapper.default_domain(20) == (5, 50)

    def test_floor(self):
        assert scale_mapper.default_domain(4) == (2, 10)

    def test_around(self):
        scale = GoalScale.around(20)
        assert (scale.domain_min, scale.domain_max) == (5, 50)


class TestSliderSteps:
    """Tests for dynamic slider steps."""

    @pytest.mark.parametrize("value,step", [
        (10, 0.25),
        (45, 0.5),
        (99, 1),
        (120, 2),
        (180, 5),
        (250, 10),
        (500, 25),
        (1500, 50),
        (5000, 100),
    ])
    def test_price_steps(self, value, step):
        assert dynamic_step(value, SliderKind.PRICE) == step

    @pytest.mark.parametrize("value,step", [
        (3, 1),
        (7, 0.5),
        (20, 0.25),
        (40, 2),
        (60, 5),
    ])
    def test_pour_cost_steps(self, value, step):
        assert dynamic_step(value, SliderKind.POUR_COST) == step

    def test_quantize_snaps_to_step(self):
        assert quantize(7.13, SliderKind.PRICE, 0, 100) == pytest.approx(7.25)

    @pytest.mark.parametrize("value,kind,expected", [
        (0.125, SliderKind.PRICE, 0.25),
        (0.375, SliderKind.PRICE, 0.5),
        (0.625, SliderKind.PRICE, 0.75),
        (40.25, SliderKind.PRICE, 40.5),
        (20.125, SliderKind.POUR_COST, 20.25),
        (7.25, SliderKind.POUR_COST, 7.5),
    ])
    def test_quantize_rounds_halves_up(self, value, kind, expected):
        """Values exactly half a step away always snap upward."""
        assert quantize(value, kind, 0, 100) == pytest.approx(expected)

    def test_quantize_clamps(self):
        assert quantize(-1, SliderKind.PRICE, 0, 100) == 0
        assert quantize(150, SliderKind.PRICE, 0, 100) == 100


class TestPerformanceBar:
    """Tests for bar colour, position and snapshot."""

    @pytest.mark.parametrize("pct,color", [
        (18, PerformanceColor.GREEN),
        (22, PerformanceColor.GREEN),
        (25, PerformanceColor.YELLOW),
        (30, PerformanceColor.RED),
    ])
    def test_color(self, pct, color):
        assert scale_mapper.performance_color(pct, 20) == color

    def test_bar_position_on_goal(self):
        assert scale_mapper.bar_position(20, 20) == pytest.approx(0.5)

    def test_snapshot(self):
        snapshot = scale_mapper.performance_snapshot(18, 20, actual_price=7.5)

        assert snapshot.tier == PerformanceTier.EXCELLENT
        assert snapshot.color == "green"
        assert 0.15 < snapshot.position < 0.5
        assert snapshot.feedback == "Perfect! Right at your 20% goal."
        assert snapshot.actual_price == 7.5
