"""
Scale Mapper

Maps pour cost percentages (or prices) onto a [0, 1] track position for
sliders and performance bars, and back again for drag input.

The track is split in three around the goal:

    [0, LOW_SPLIT)          domain_min .. goal - 10, log compressed
    [LOW_SPLIT, HIGH_SPLIT] goal - 10 .. goal + 10, linear
    (HIGH_SPLIT, 1]         goal + 10 .. domain_max, log compressed

to_position and to_value share the constants below; they must stay the
single definition of the breakpoints.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

from pourcost.errors import InvalidRangeError
from pourcost.models.common import (
    PerformanceColor,
    PerformanceTier,
    SliderKind,
    ensure_exhaustive,
)
from pourcost.models.pricing import PerformanceSnapshot
from pourcost.services.pour_cost_calculator import goal_feedback, performance_tier

logger = logging.getLogger(__name__)

LOW_SPLIT = 0.15
HIGH_SPLIT = 0.85
SWEET_SPOT_HALF_WIDTH = 10.0

# Default bar domain relative to the goal
DEFAULT_DOMAIN_MIN_RATIO = 0.25
DEFAULT_DOMAIN_MIN_FLOOR = 2.0
DEFAULT_DOMAIN_MAX_RATIO = 2.5

# (upper bound exclusive, step); the last step applies above every bound
PRICE_STEPS = (
    (30, 0.25),
    (50, 0.5),
    (100, 1),
    (150, 2),
    (200, 5),
    (300, 10),
    (1000, 25),
    (2000, 50),
)
PRICE_STEP_MAX = 100

POUR_COST_STEPS = (
    (5, 1),
    (10, 0.5),
    (30, 0.25),
    (50, 2),
)
POUR_COST_STEP_MAX = 5

STEP_TABLES = {
    SliderKind.PRICE: (PRICE_STEPS, PRICE_STEP_MAX),
    SliderKind.POUR_COST: (POUR_COST_STEPS, POUR_COST_STEP_MAX),
}
ensure_exhaustive(STEP_TABLES, SliderKind, "STEP_TABLES")

TIER_COLORS = {
    PerformanceTier.EXCELLENT: PerformanceColor.GREEN,
    PerformanceTier.GOOD: PerformanceColor.GREEN,
    PerformanceTier.WARNING: PerformanceColor.YELLOW,
    PerformanceTier.POOR: PerformanceColor.RED,
}
ensure_exhaustive(TIER_COLORS, PerformanceTier, "TIER_COLORS")


@dataclass(frozen=True)
class GoalScale:
    """A goal-centred track over [domain_min, domain_max]."""

    goal: float
    domain_min: float
    domain_max: float

    def __post_init__(self):
        if not 0 < self.domain_min < self.goal < self.domain_max:
            raise InvalidRangeError(
                "Scale domain must satisfy 0 < domain_min < goal < domain_max",
                details={
                    "goal": self.goal,
                    "domain_min": self.domain_min,
                    "domain_max": self.domain_max,
                },
            )

    @classmethod
    def around(cls, goal: float) -> "GoalScale":
        """Scale with the default domain for a goal."""
        domain_min, domain_max = default_domain(goal)
        return cls(goal=goal, domain_min=domain_min, domain_max=domain_max)

    @property
    def sweet_spot(self) -> Tuple[float, float]:
        """Value range mapped linearly, clipped to the domain."""
        return (
            max(self.goal - SWEET_SPOT_HALF_WIDTH, self.domain_min),
            min(self.goal + SWEET_SPOT_HALF_WIDTH, self.domain_max),
        )

    def to_position(self, value: float) -> float:
        """Track position in [0, 1] for a value. Out-of-domain values clamp."""
        value = min(max(value, self.domain_min), self.domain_max)
        start, end = self.sweet_spot

        if value <= start:
            if start <= self.domain_min:
                return LOW_SPLIT
            ratio = math.log(value / self.domain_min) / math.log(start / self.domain_min)
            return ratio * LOW_SPLIT

        if value <= end:
            ratio = (value - start) / (end - start)
            return LOW_SPLIT + ratio * (HIGH_SPLIT - LOW_SPLIT)

        ratio = math.log(value / end) / math.log(self.domain_max / end)
        return HIGH_SPLIT + ratio * (1.0 - HIGH_SPLIT)

    def to_value(self, position: float) -> float:
        """Value at a track position; inverse of to_position."""
        position = min(max(position, 0.0), 1.0)
        start, end = self.sweet_spot

        if position < LOW_SPLIT:
            if start <= self.domain_min:
                return self.domain_min
            return self.domain_min * (start / self.domain_min) ** (position / LOW_SPLIT)

        if position <= HIGH_SPLIT:
            ratio = (position - LOW_SPLIT) / (HIGH_SPLIT - LOW_SPLIT)
            return start + ratio * (end - start)

        if end >= self.domain_max:
            return self.domain_max
        ratio = (position - HIGH_SPLIT) / (1.0 - HIGH_SPLIT)
        return end * (self.domain_max / end) ** ratio


def default_domain(goal: float) -> Tuple[float, float]:
    """Bar domain used when a caller has no explicit range."""
    return (
        max(goal * DEFAULT_DOMAIN_MIN_RATIO, DEFAULT_DOMAIN_MIN_FLOOR),
        goal * DEFAULT_DOMAIN_MAX_RATIO,
    )


def to_position(value: float, goal: float, domain_min: float, domain_max: float) -> float:
    return GoalScale(goal, domain_min, domain_max).to_position(value)


def to_value(position: float, goal: float, domain_min: float, domain_max: float) -> float:
    return GoalScale(goal, domain_min, domain_max).to_value(position)


# ============================================================================
# Slider steps
# ============================================================================

def dynamic_step(value: float, kind: SliderKind = SliderKind.PRICE) -> float:
    """Increment a slider snaps to at a given value; coarser as values grow."""
    steps, largest = STEP_TABLES[SliderKind(kind)]
    for bound, step in steps:
        if value < bound:
            return step
    return largest


def quantize(
    value: float,
    kind: SliderKind,
    minimum: float,
    maximum: float,
) -> float:
    """Snap a raw slider value to its step (halves round up) and clamp it."""
    step = dynamic_step(value, kind)
    snapped = math.floor(value / step + 0.5) * step
    return min(max(snapped, minimum), maximum)


# ============================================================================
# Performance bar
# ============================================================================

def performance_color(pour_cost_percent: float, goal_percent: float) -> PerformanceColor:
    """Bar colour; shares its bands with performance_tier."""
    return TIER_COLORS[performance_tier(pour_cost_percent, goal_percent)]


def bar_position(pour_cost_percent: float, goal_percent: float) -> float:
    """Fill fraction of a performance bar on the default goal domain."""
    return GoalScale.around(goal_percent).to_position(pour_cost_percent)


def performance_snapshot(
    pour_cost_percent: float,
    goal_percent: float,
    actual_price: Optional[float] = None,
) -> PerformanceSnapshot:
    """
    Bundle tier, colour, fill and feedback for one pour cost reading.

    Args:
        pour_cost_percent: Current pour cost %
        goal_percent: Target pour cost %
        actual_price: Selling price shown alongside the bar, if any

    Returns:
        PerformanceSnapshot ready to render
    """
    tier = performance_tier(pour_cost_percent, goal_percent)
    return PerformanceSnapshot(
        pour_cost_percentage=pour_cost_percent,
        goal=goal_percent,
        tier=tier,
        color=TIER_COLORS[tier].value,
        position=bar_position(pour_cost_percent, goal_percent),
        feedback=goal_feedback(pour_cost_percent, goal_percent),
        actual_price=actual_price,
    )
