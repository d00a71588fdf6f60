# tests/test_layout.py
"""
Anchor/rotation layout engine: draw origins, transform sequences and
plan execution against a recording surface.
"""

from __future__ import annotations

import math

import pytest
from PIL import Image

from labelkit.core.drawing import apply_plan, draw_image, draw_text
from labelkit.core.geometry import footprint_bounds
from labelkit.core.image_cache import ImageResizeCache
from labelkit.core.layout import (
    aligned_point,
    plan_image,
    plan_radial_text,
    plan_text,
    plan_text_unrotated,
)
from labelkit.core.surface import RecordingSurface
from labelkit.core.text_metrics import measure_text
from labelkit.core.types import Anchor, Point, Rect, Size, TextStyle

TARGET = Point(100.0, 50.0)
SIZE = Size(40.0, 10.0)
ROTATED_OPS = ["save_state", "translate", "rotate", "draw_text", "restore_state"]


def test_aligned_point() -> None:
    assert aligned_point(TARGET, 40.0, "left") == TARGET
    assert aligned_point(TARGET, 40.0, "center") == Point(80.0, 50.0)
    assert aligned_point(TARGET, 40.0, "right") == Point(60.0, 50.0)


def test_unrotated_default_anchor_centers_content() -> None:
    plan = plan_text("ELBE", TARGET, SIZE)
    assert plan.origin == Point(80.0, 45.0)
    assert not plan.rotated
    assert [op.name for op in plan.ops] == ["draw_text"]
    assert plan.ops[0].args[1] == plan.origin


@pytest.mark.parametrize(
    "align, expected",
    [
        ("left", Point(100.0, 50.0)),
        ("center", Point(80.0, 50.0)),
        ("right", Point(60.0, 50.0)),
    ],
)
def test_unrotated_zero_anchor_uses_aligned_target(align, expected: Point) -> None:
    plan = plan_text("ELBE", TARGET, SIZE, align=align, anchor=Anchor(0.0, 0.0))
    assert plan.origin == expected


def test_unrotated_alignment_and_anchor_combine() -> None:
    plan = plan_text("ELBE", TARGET, SIZE, align="center", anchor=Anchor(0.5, 0.5))
    assert plan.origin == Point(60.0, 45.0)


def test_anchor_outside_unit_square_is_not_clamped() -> None:
    plan = plan_text("ELBE", TARGET, SIZE, anchor=Anchor(2.0, -1.0))
    assert plan.origin == Point(20.0, 60.0)


def test_zero_angle_matches_unrotated_path() -> None:
    style = TextStyle(font_size_pt=9.0)
    for anchor in (None, Anchor(0.0, 0.0), Anchor(1.0, 0.25)):
        for angle in (0.0, -0.0):
            assert plan_text("ELBE", TARGET, SIZE, align="right", anchor=anchor, angle_rad=angle, style=style) == (
                plan_text_unrotated("ELBE", TARGET, SIZE, align="right", anchor=anchor, style=style)
            )


def test_rotated_centered_anchor_translates_to_target() -> None:
    plan = plan_text("ELBE", TARGET, SIZE, angle_rad=math.pi / 2)
    assert plan.rotated
    assert plan.translate == TARGET
    assert plan.origin == Point(-20.0, -5.0)
    assert [op.name for op in plan.ops] == ROTATED_OPS
    assert plan.ops[1].args == (100.0, 50.0)
    assert plan.ops[2].args == (math.pi / 2,)
    assert plan.ops[3].args[1] == Point(-20.0, -5.0)


def test_rotated_anchor_uses_rotated_bounds() -> None:
    # 40x10 rotated 90 deg has a 10x40 footprint
    plan = plan_text("ELBE", TARGET, SIZE, anchor=Anchor(0.0, 0.0), angle_rad=math.pi / 2)
    assert plan.translate.x == pytest.approx(105.0)
    assert plan.translate.y == pytest.approx(70.0)
    minx, miny, _, _ = footprint_bounds(plan)
    assert minx == pytest.approx(100.0)
    assert miny == pytest.approx(50.0)


def test_rotated_anchor_bottom_right_puts_corner_on_target() -> None:
    plan = plan_text("ELBE", TARGET, SIZE, anchor=Anchor(1.0, 1.0), angle_rad=0.4)
    _, _, maxx, maxy = footprint_bounds(plan)
    assert maxx == pytest.approx(TARGET.x)
    assert maxy == pytest.approx(TARGET.y)


def test_rotated_alignment_shifts_target_first() -> None:
    plan = plan_text("ELBE", TARGET, SIZE, align="center", angle_rad=1.0)
    assert plan.translate == Point(80.0, 50.0)


def test_rotated_nan_angle_propagates() -> None:
    plan = plan_text("ELBE", TARGET, SIZE, anchor=Anchor(0.0, 0.0), angle_rad=float("nan"))
    assert plan.rotated
    assert math.isnan(plan.translate.x)


def test_plan_radial_text_normalizes_angle() -> None:
    plan = plan_radial_text("N", Point(0.0, 0.0), 10.0, 450.0, Size(4.0, 2.0), anchor=Anchor(0.0, 0.0))
    assert plan.target.x == pytest.approx(0.0, abs=1e-9)
    assert plan.target.y == pytest.approx(10.0)


def test_plan_image_is_centered() -> None:
    image = Image.new("RGBA", (8, 8))
    plan = plan_image(image, Point(50.0, 50.0), Size(20.0, 10.0))
    assert plan.origin == Point(40.0, 45.0)
    assert plan.ops[0].name == "draw_image"
    assert plan.ops[0].args[1] == Rect(Point(40.0, 45.0), Size(20.0, 10.0))


def test_apply_plan_runs_ops_in_order() -> None:
    surface = RecordingSurface()
    plan = plan_text("ELBE", TARGET, SIZE, angle_rad=0.5)
    apply_plan(surface, plan)
    assert surface.names() == ROTATED_OPS
    assert surface.depth == 0


class _FailingSurface(RecordingSurface):
    def draw_text(self, text, origin, style) -> None:
        raise ValueError("boom")


def test_apply_plan_restores_state_when_draw_fails() -> None:
    surface = _FailingSurface()
    with pytest.raises(ValueError):
        apply_plan(surface, plan_text("ELBE", TARGET, SIZE, angle_rad=0.5))
    assert surface.depth == 0
    assert surface.names()[-1] == "restore_state"


def test_draw_text_measures_and_draws() -> None:
    surface = RecordingSurface()
    style = TextStyle(font_size_pt=14.0)
    plan = draw_text(surface, "Hello", Point(10.0, 20.0), anchor=Anchor(0.0, 0.0), style=style)
    assert plan.content_size == measure_text("Hello", style)
    assert plan.content_size.width > 0
    assert surface.calls == [("draw_text", ("Hello", Point(10.0, 20.0), style))]


def test_draw_image_resizes_once_per_size() -> None:
    surface = RecordingSurface()
    cache = ImageResizeCache()
    image = Image.new("RGBA", (64, 64), "red")
    size = Size(16.0, 16.0)
    draw_image(surface, image, Point(50.0, 50.0), size, cache)
    draw_image(surface, image, Point(80.0, 20.0), size, cache)
    assert cache.resize_count == 1
    first, second = surface.calls[0][1][0], surface.calls[1][1][0]
    assert first is second
    assert first.size == (16, 16)


def test_draw_image_at_natural_size_skips_resize() -> None:
    surface = RecordingSurface()
    cache = ImageResizeCache()
    image = Image.new("RGBA", (16, 16))
    draw_image(surface, image, Point(8.0, 8.0), Size(16.0, 16.0), cache)
    assert cache.resize_count == 0
    assert surface.calls[0][1][0] is image
    assert surface.calls[0][1][1] == Rect(Point(0.0, 0.0), Size(16.0, 16.0))
