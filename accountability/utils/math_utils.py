"""Rounding and ratio helpers shared by the engine."""

import math
from typing import Iterable


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero.

    Python's built-in ``round`` uses banker's rounding (``round(12.5) == 12``);
    scores are presented with conventional rounding instead.

    Examples:
        round_half_up(12.5) -> 13
        round_half_up(-12.5) -> -13
        round_half_up(33.33) -> 33
    """
    if value >= 0:
        return int(math.floor(value + 0.5))
    return -int(math.floor(-value + 0.5))


def calculate_percentage(numerator: float, denominator: float) -> int:
    """Rounded 0-100 percentage, or 0 when the denominator is not positive."""
    if denominator <= 0:
        return 0
    return round_half_up(numerator / denominator * 100)


def mean(values: Iterable[float]) -> float:
    """Arithmetic mean, 0.0 for an empty input."""
    items = list(values)
    if not items:
        return 0.0
    return sum(items) / len(items)


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp a value between minimum and maximum bounds."""
    return max(min_val, min(value, max_val))
