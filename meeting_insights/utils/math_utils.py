"""Rounding helpers shared by the aggregation functions."""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 going up.

    Unlike the built-in ``round()`` (``round(2.5) == 2``),
    ``round_half_up(2.5) == 3``.
    """
    return math.floor(value + 0.5)


def round_one_decimal(value: float) -> float:
    """Round to one decimal place using ``round_half_up`` on ``value * 10``."""
    return round_half_up(value * 10) / 10


def percentage(count: int, total: int) -> int:
    """Return ``count / total`` as a whole percentage, or 0 when ``total`` is 0."""
    if total <= 0:
        return 0
    return round_half_up(count / total * 100)
