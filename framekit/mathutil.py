"""Small numeric helpers: angles, modulo, clamping and random ranges."""

from __future__ import annotations

import math
import random

__all__ = [
    "PI",
    "modulo",
    "to_radian",
    "to_degree",
    "random_int",
    "random_float",
    "clamp",
]

PI = 3.14159265


def modulo(val1: float, val2: float) -> float:
    """Subtract ``val2`` from ``val1`` while the result stays non-negative.

    A ``val1`` smaller than ``val2`` is returned unchanged, so negative
    inputs are not wrapped.
    """
    if val1 < val2:
        return val1
    if val2 <= 0:
        raise ValueError("divisor must be positive")
    result = val1 - val2 * math.floor(val1 / val2)
    while result >= val2:
        result -= val2
    while result < 0:
        result += val2
    return result


def to_radian(degree: float) -> float:
    """Convert degrees to radians."""
    return degree * PI / 180.0


def to_degree(radian: float) -> float:
    """Convert radians to degrees."""
    return radian * 180.0 / PI


def random_int(r1: int, r2: int) -> int:
    """Return a random integer in the inclusive range ``[r1, r2]``."""
    if r2 < r1:
        raise ValueError("upper bound is below lower bound")
    return random.randint(r1, r2)


def random_float(r1: float, r2: float) -> float:
    """Return a random float between ``r1`` and ``r2``."""
    return random.uniform(r1, r2)


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Limit ``value`` to ``maximum`` first, then to ``minimum``."""
    value = maximum if value > maximum else value
    value = minimum if value < minimum else value
    return value