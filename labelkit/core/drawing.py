# labelkit/core/drawing.py
"""
Run draw plans against a surface, plus measure-plan-draw entry points
for single-line text and images.
"""

from __future__ import annotations

from PIL import Image

from labelkit.core.config import DEFAULT_ALIGNMENT, DEFAULT_ANGLE_RAD
from labelkit.core.image_cache import ImageResizeCache
from labelkit.core.layout import plan_image, plan_text
from labelkit.core.surface import DrawingSurface
from labelkit.core.text_metrics import measure_text
from labelkit.core.types import Alignment, Anchor, DrawPlan, Point, Size, TextStyle

_STACK_DELTA = {"save_state": 1, "restore_state": -1}


def apply_plan(surface: DrawingSurface, plan: DrawPlan) -> None:
    """
    Execute the plan's ops in order in one synchronous pass.
    If an op fails, any state it saved is restored before the error propagates.
    """
    depth = 0
    try:
        for op in plan.ops:
            getattr(surface, op.name)(*op.args)
            depth += _STACK_DELTA.get(op.name, 0)
    finally:
        while depth > 0:
            surface.restore_state()
            depth -= 1


def draw_text(
    surface: DrawingSurface,
    text: str,
    point: Point,
    align: Alignment = DEFAULT_ALIGNMENT,
    anchor: Anchor | None = None,
    angle_rad: float = DEFAULT_ANGLE_RAD,
    style: TextStyle | None = None,
) -> DrawPlan:
    """Measure, plan and draw a single-line run. Returns the plan used."""
    style = style or TextStyle()
    size = measure_text(text, style)
    plan = plan_text(text, point, size, align=align, anchor=anchor, angle_rad=angle_rad, style=style)
    apply_plan(surface, plan)
    return plan


def draw_image(
    surface: DrawingSurface,
    image: Image.Image,
    center: Point,
    size: Size,
    cache: ImageResizeCache,
) -> DrawPlan:
    """Draw image centered on center at size, resizing through cache when needed."""
    plan = plan_image(cache.resized(image, size), center, size)
    apply_plan(surface, plan)
    return plan
