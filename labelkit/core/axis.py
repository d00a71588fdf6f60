# labelkit/core/axis.py
"""
Axis tick values and label formatting backed by the magnitude utilities.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from labelkit.core.magnitude import decimal_places, round_to_next_significant


@dataclass(frozen=True)
class AxisEntries:
    """Tick values for one axis and the decimals needed to print them."""
    values: list[float]
    interval: float
    decimals: int


def axis_interval(range_min: float, range_max: float, label_count: int) -> float:
    """
    Tick spacing for roughly label_count labels over the range.
    Rounded to one significant digit; leading digits above 5 snap up to the next power of ten.
    """
    span = abs(range_max - range_min)
    if label_count <= 0 or not math.isfinite(span) or span == 0:
        return 0.0
    interval = round_to_next_significant(span / label_count)
    if not math.isfinite(interval) or interval == 0:
        return 0.0
    magnitude = 10.0 ** math.floor(math.log10(interval))
    # interval has one significant digit, so round() recovers it exactly
    if round(interval / magnitude) > 5:
        interval = 10.0 * magnitude
    return interval


def axis_entries(range_min: float, range_max: float, label_count: int) -> AxisEntries:
    """Values on multiples of the interval inside [range_min, range_max], inclusive."""
    if label_count <= 0:
        return AxisEntries(values=[], interval=0.0, decimals=0)
    lo, hi = min(range_min, range_max), max(range_min, range_max)
    interval = axis_interval(lo, hi, label_count)
    if interval == 0 or not math.isfinite(interval):
        return AxisEntries(values=[range_min], interval=0.0, decimals=decimal_places(range_min))

    first = math.ceil(lo / interval) * interval
    last = math.floor(hi / interval) * interval
    n = int(round((last - first) / interval)) + 1
    values = []
    for k in range(max(0, n)):
        v = first + k * interval
        values.append(0.0 if v == 0 else v)
    return AxisEntries(values=values, interval=interval, decimals=decimal_places(interval))


def format_axis_label(value: float, decimals: int) -> str:
    """Fixed-point label; never prints a negative zero."""
    s = f"{value:.{max(0, decimals)}f}"
    if s.startswith("-") and float(s) == 0:
        s = s[1:]
    return s
