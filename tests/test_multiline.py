# tests/test_multiline.py
"""
Multi-line layout: rect placement, rotation sequence, measuring against a constraint.
"""

from __future__ import annotations

import math

import pytest

from labelkit.core.geometry import footprint_bounds
from labelkit.core.multiline import draw_multiline_text, plan_multiline_text
from labelkit.core.surface import RecordingSurface
from labelkit.core.text_metrics import measure_text_block
from labelkit.core.types import Anchor, Point, Rect, Size, TextStyle

BLOCK = Size(120.0, 40.0)
TARGET = Point(200.0, 100.0)


def test_unrotated_zero_anchor_draws_at_point() -> None:
    plan = plan_multiline_text("a b c", TARGET, BLOCK, anchor=Anchor(0.0, 0.0))
    assert plan.kind == "text_block"
    assert [op.name for op in plan.ops] == ["draw_text_block"]
    assert plan.ops[0].args[1] == Rect(TARGET, BLOCK)


def test_unrotated_default_anchor_centers_block() -> None:
    plan = plan_multiline_text("a b c", TARGET, BLOCK)
    assert plan.origin == Point(140.0, 80.0)
    assert plan.ops[0].args[1] == Rect(Point(140.0, 80.0), BLOCK)


def test_rotated_block_sequence() -> None:
    plan = plan_multiline_text("a b c", TARGET, BLOCK, angle_rad=math.pi)
    assert [op.name for op in plan.ops] == [
        "save_state",
        "translate",
        "rotate",
        "draw_text_block",
        "restore_state",
    ]
    assert plan.translate == TARGET
    assert plan.ops[3].args[1] == Rect(Point(-60.0, -20.0), BLOCK)


def test_rotated_block_anchor_uses_rotated_bounds() -> None:
    plan = plan_multiline_text("a b c", TARGET, BLOCK, anchor=Anchor(0.0, 0.0), angle_rad=math.pi / 2)
    minx, miny, _, _ = footprint_bounds(plan)
    assert minx == pytest.approx(TARGET.x)
    assert miny == pytest.approx(TARGET.y)


def test_draw_measures_against_constraint() -> None:
    surface = RecordingSurface()
    style = TextStyle(font_size_pt=11.0)
    text = "the quick brown fox jumps over the lazy dog"
    constraint = Size(60.0, 500.0)
    plan = draw_multiline_text(surface, text, TARGET, constraint, anchor=Anchor(0.0, 0.0), style=style)
    expected = measure_text_block(text, style, constraint).size
    assert plan.content_size == expected
    name, args = surface.calls[0]
    assert name == "draw_text_block"
    assert args[1] == Rect(TARGET, expected)


def test_draw_uses_known_size_verbatim() -> None:
    surface = RecordingSurface()
    known = Size(33.0, 44.0)
    plan = draw_multiline_text(surface, "x", TARGET, Size(10.0, 10.0), anchor=Anchor(1.0, 1.0), known_size=known)
    assert plan.content_size == known
    assert plan.origin == Point(167.0, 56.0)
