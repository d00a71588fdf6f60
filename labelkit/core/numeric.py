# labelkit/core/numeric.py
"""
Numeric helpers: clamping, degree/radian conversion, angle normalization.
"""

from __future__ import annotations

import math
from typing import TypeVar

T = TypeVar("T", int, float)


def clamp(value: T, low: T, high: T) -> T:
    """Clamp value to the closed range [low, high]."""
    if value < low:
        return low
    if value > high:
        return high
    return value


def deg_to_rad(angle_deg: float) -> float:
    return angle_deg * math.pi / 180.0


def rad_to_deg(angle_rad: float) -> float:
    return angle_rad * 180.0 / math.pi


def normalized_angle_deg(angle_deg: float) -> float:
    """
    Wrap an angle in degrees into [0, 360).
    Uses a truncating remainder, so negative inputs wrap forward:
    -30 -> 330, 725 -> 5, 360 -> 0.
    """
    if not math.isfinite(angle_deg):
        return math.nan
    r = math.fmod(angle_deg, 360.0)
    if r < 0:
        r += 360.0
        # -1e-20 + 360 rounds to 360.0
        if r >= 360.0:
            return 0.0
    # fold -0.0 into 0.0
    return r + 0.0
