# labelkit/core/layout.py
"""
Anchor/rotation layout engine. Turns a measured content size, a target
point, an anchor and an angle into a DrawPlan: the draw origin plus the
ordered surface calls that render the content there.

Unrotated text is drawn directly at the anchor-adjusted origin. Rotated
text is centered on a local origin, and the surface is translated and
rotated around it; the anchor then refers to the rotated bounding box,
which is what the reader actually sees.
"""

from __future__ import annotations

from PIL import Image

from labelkit.core.config import DEFAULT_ALIGNMENT, DEFAULT_ANCHOR, DEFAULT_ANGLE_RAD
from labelkit.core.geometry import point_at, rotated_size_rad
from labelkit.core.numeric import normalized_angle_deg
from labelkit.core.types import (
    Alignment,
    Anchor,
    DrawOp,
    DrawPlan,
    Point,
    Rect,
    Size,
    TextStyle,
)


def resolve_anchor(anchor: Anchor | None) -> Anchor:
    return anchor if anchor is not None else Anchor(*DEFAULT_ANCHOR)


def aligned_point(point: Point, width: float, align: Alignment) -> Point:
    """Shift x so the run is left-, center- or right-aligned on point."""
    if align == "center":
        return Point(point.x - width / 2.0, point.y)
    if align == "right":
        return Point(point.x - width, point.y)
    return point


def anchored_origin(point: Point, size: Size, anchor: Anchor) -> Point:
    """Top-left origin so that anchor lands on point (unrotated)."""
    if anchor.x != 0.0 or anchor.y != 0.0:
        return Point(point.x - size.width * anchor.x, point.y - size.height * anchor.y)
    return point


def rotation_translate(point: Point, size: Size, anchor: Anchor, angle_rad: float) -> Point:
    """
    Where the content's center lands once rotated. Off-center anchors
    shift by the rotated bounding size, not the unrotated one.
    """
    if anchor.x == 0.5 and anchor.y == 0.5:
        return point
    rotated = rotated_size_rad(size, angle_rad)
    return Point(
        point.x - rotated.width * (anchor.x - 0.5),
        point.y - rotated.height * (anchor.y - 0.5),
    )


def centered_origin(size: Size) -> Point:
    return Point(-size.width * 0.5, -size.height * 0.5)


def rotated_ops(translate: Point, angle_rad: float, draw: DrawOp) -> tuple[DrawOp, ...]:
    return (
        DrawOp("save_state"),
        DrawOp("translate", (translate.x, translate.y)),
        DrawOp("rotate", (angle_rad,)),
        draw,
        DrawOp("restore_state"),
    )


def plan_text_unrotated(
    text: str,
    point: Point,
    size: Size,
    align: Alignment = DEFAULT_ALIGNMENT,
    anchor: Anchor | None = None,
    style: TextStyle | None = None,
) -> DrawPlan:
    """Single draw_text call at the aligned, anchor-adjusted origin."""
    style = style or TextStyle()
    origin = anchored_origin(aligned_point(point, size.width, align), size, resolve_anchor(anchor))
    return DrawPlan(
        kind="text",
        target=point,
        origin=origin,
        content_size=size,
        ops=(DrawOp("draw_text", (text, origin, style)),),
    )


def _plan_text_rotated(
    text: str,
    point: Point,
    size: Size,
    align: Alignment,
    anchor: Anchor,
    angle_rad: float,
    style: TextStyle,
) -> DrawPlan:
    origin = centered_origin(size)
    translate = rotation_translate(aligned_point(point, size.width, align), size, anchor, angle_rad)
    draw = DrawOp("draw_text", (text, origin, style))
    return DrawPlan(
        kind="text",
        target=point,
        origin=origin,
        content_size=size,
        ops=rotated_ops(translate, angle_rad, draw),
        angle_rad=angle_rad,
        translate=translate,
    )


def plan_text(
    text: str,
    point: Point,
    size: Size,
    align: Alignment = DEFAULT_ALIGNMENT,
    anchor: Anchor | None = None,
    angle_rad: float = DEFAULT_ANGLE_RAD,
    style: TextStyle | None = None,
) -> DrawPlan:
    """
    Plan a single-line text run of the given measured size.
    An angle of exactly 0 takes the unrotated path (no state save/restore).
    """
    if angle_rad == 0.0:
        return plan_text_unrotated(text, point, size, align=align, anchor=anchor, style=style)
    return _plan_text_rotated(
        text, point, size, align, resolve_anchor(anchor), angle_rad, style or TextStyle()
    )


def plan_radial_text(
    text: str,
    center: Point,
    distance: float,
    angle_deg: float,
    size: Size,
    align: Alignment = DEFAULT_ALIGNMENT,
    anchor: Anchor | None = None,
    angle_rad: float = DEFAULT_ANGLE_RAD,
    style: TextStyle | None = None,
) -> DrawPlan:
    """Plan text anchored on the point distance away from center at angle_deg."""
    target = point_at(center, distance, normalized_angle_deg(angle_deg))
    return plan_text(text, target, size, align=align, anchor=anchor, angle_rad=angle_rad, style=style)


def plan_image(image: Image.Image, center: Point, size: Size) -> DrawPlan:
    """Images are always centered on center and never rotated."""
    origin = Point(center.x - size.width / 2.0, center.y - size.height / 2.0)
    return DrawPlan(
        kind="image",
        target=center,
        origin=origin,
        content_size=size,
        ops=(DrawOp("draw_image", (image, Rect(origin, size))),),
    )
