# labelkit/core/magnitude.py
"""
Order-of-magnitude rounding and display precision for axis labels.
"""

from __future__ import annotations

import math


def _round_half_away(value: float) -> float:
    """Round to the nearest integer; exact .5 ties go away from zero."""
    if not math.isfinite(value):
        return value
    a = abs(value)
    f = math.floor(a)
    if a - f >= 0.5:
        f += 1.0
    return math.copysign(f, value)


def round_to_next_significant(x: float) -> float:
    """
    Round x to one significant digit: 1234 -> 1000, 0.00456 -> 0.005.
    Zero, NaN and infinities are returned unchanged.
    """
    if not math.isfinite(x) or x == 0:
        return x
    d = math.ceil(math.log10(abs(x)))
    pw = 1 - d
    try:
        magnitude = 10.0 ** pw
    except OverflowError:
        # subnormal input; IEEE would give inf here
        magnitude = math.inf
    shifted = _round_half_away(x * magnitude)
    return shifted / magnitude


def decimal_places(x: float) -> int:
    """
    Number of decimals needed to display values on the scale of x.
    ceil(-log10(rounded)) + 2, floored at 0. The +2 is a display margin.
    """
    if not math.isfinite(x) or x == 0:
        return 0
    i = round_to_next_significant(x)
    if not math.isfinite(i) or i == 0:
        return 0
    return max(0, int(math.ceil(-math.log10(abs(i)))) + 2)
