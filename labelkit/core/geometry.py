# labelkit/core/geometry.py
"""
Geometry helpers: rotated bounding size, radial points, and the
shapely footprint a draw plan covers on the surface.
"""

from __future__ import annotations

import math

from shapely.geometry import Polygon, box
from shapely.geometry.base import BaseGeometry

from labelkit.core.numeric import deg_to_rad
from labelkit.core.types import DrawPlan, Point, Size


def rotated_size_rad(size: Size, angle_rad: float) -> Size:
    """
    Axis-aligned size that contains a size.width x size.height rectangle
    rotated by angle_rad about its center.
    """
    cos_a = math.cos(angle_rad)
    sin_a = math.sin(angle_rad)
    return Size(
        width=abs(size.width * cos_a) + abs(size.height * sin_a),
        height=abs(size.width * sin_a) + abs(size.height * cos_a),
    )


def rotated_size_deg(size: Size, angle_deg: float) -> Size:
    return rotated_size_rad(size, deg_to_rad(angle_deg))


def point_at(center: Point, distance: float, angle_deg: float) -> Point:
    """
    Point at distance from center along angle_deg.
    0 deg points along +x; increasing angles turn toward +y.
    """
    rad = deg_to_rad(angle_deg)
    return Point(
        x=center.x + distance * math.cos(rad),
        y=center.y + distance * math.sin(rad),
    )


def oriented_rectangle(center: Point, size: Size, angle_rad: float) -> Polygon:
    """
    Rectangle of the given size centered on center, rotated by angle_rad
    around that center.
    """
    hw = size.width / 2.0
    hh = size.height / 2.0
    cos_a = math.cos(angle_rad)
    sin_a = math.sin(angle_rad)
    corners = [
        (-hw, -hh),
        (hw, -hh),
        (hw, hh),
        (-hw, hh),
    ]
    rotated = [
        (center.x + x * cos_a - y * sin_a, center.y + x * sin_a + y * cos_a)
        for x, y in corners
    ]
    return Polygon(rotated)


def content_footprint(plan: DrawPlan) -> Polygon:
    """Area the plan's content covers in surface coordinates."""
    size = plan.content_size
    if plan.translate is not None:
        return oriented_rectangle(plan.translate, size, plan.angle_rad)
    return box(
        plan.origin.x,
        plan.origin.y,
        plan.origin.x + size.width,
        plan.origin.y + size.height,
    )


def polygon_bounds(geom: BaseGeometry) -> tuple[float, float, float, float]:
    """Return (minx, miny, maxx, maxy)."""
    if geom is None or geom.is_empty:
        return (0.0, 0.0, 0.0, 0.0)
    b = geom.bounds
    return (b[0], b[1], b[2], b[3])


def footprint_bounds(plan: DrawPlan) -> tuple[float, float, float, float]:
    return polygon_bounds(content_footprint(plan))
