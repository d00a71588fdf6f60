# labelkit/core/multiline.py
"""
Multi-line variant of the layout engine: the same anchor/rotation math
applied to a wrapped text block drawn into a rect.
"""

from __future__ import annotations

from labelkit.core.config import DEFAULT_ANGLE_RAD
from labelkit.core.drawing import apply_plan
from labelkit.core.layout import (
    anchored_origin,
    centered_origin,
    resolve_anchor,
    rotated_ops,
    rotation_translate,
)
from labelkit.core.surface import DrawingSurface
from labelkit.core.text_metrics import measure_text_block
from labelkit.core.types import Anchor, DrawOp, DrawPlan, Point, Rect, Size, TextStyle


def plan_multiline_text(
    text: str,
    point: Point,
    known_size: Size,
    anchor: Anchor | None = None,
    angle_rad: float = DEFAULT_ANGLE_RAD,
    style: TextStyle | None = None,
) -> DrawPlan:
    """Plan a text block of known_size anchored on point."""
    style = style or TextStyle()
    anchor = resolve_anchor(anchor)
    if angle_rad == 0.0:
        origin = anchored_origin(point, known_size, anchor)
        return DrawPlan(
            kind="text_block",
            target=point,
            origin=origin,
            content_size=known_size,
            ops=(DrawOp("draw_text_block", (text, Rect(origin, known_size), style)),),
        )

    origin = centered_origin(known_size)
    translate = rotation_translate(point, known_size, anchor, angle_rad)
    draw = DrawOp("draw_text_block", (text, Rect(origin, known_size), style))
    return DrawPlan(
        kind="text_block",
        target=point,
        origin=origin,
        content_size=known_size,
        ops=rotated_ops(translate, angle_rad, draw),
        angle_rad=angle_rad,
        translate=translate,
    )


def draw_multiline_text(
    surface: DrawingSurface,
    text: str,
    point: Point,
    constrained_to: Size,
    anchor: Anchor | None = None,
    angle_rad: float = DEFAULT_ANGLE_RAD,
    style: TextStyle | None = None,
    known_size: Size | None = None,
) -> DrawPlan:
    """
    Draw a wrapped block. Without known_size the text is first measured
    against constrained_to.
    """
    style = style or TextStyle()
    if known_size is None:
        known_size = measure_text_block(text, style, constrained_to).size
    plan = plan_multiline_text(text, point, known_size, anchor=anchor, angle_rad=angle_rad, style=style)
    apply_plan(surface, plan)
    return plan
