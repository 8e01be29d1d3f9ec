"""Trend classification and baseline comparisons."""

from typing import Optional

from ..models.scores import Comparison, Direction, Trend
from ..utils.math_utils import round_half_up

TREND_IMPROVING_THRESHOLD = 5
TREND_DECLINING_THRESHOLD = -10


def calculate_trend(
    current: float,
    previous: float,
    improving_threshold: float = TREND_IMPROVING_THRESHOLD,
    declining_threshold: float = TREND_DECLINING_THRESHOLD,
) -> Trend:
    """Dead-band comparator: small moves either way are stable."""
    difference = current - previous

    if difference > improving_threshold:
        return Trend.IMPROVING
    if difference < declining_threshold:
        return Trend.DECLINING
    return Trend.STABLE


def calculate_comparison(
    value: float,
    baseline: float,
    has_baseline_data: bool,
) -> Optional[Comparison]:
    """Signed delta against a baseline, or None when no history exists yet."""
    if not has_baseline_data:
        return None

    difference = round_half_up(value - baseline)
    direction = Direction.UP if difference >= 0 else Direction.DOWN
    return Comparison(value=difference, direction=direction)
