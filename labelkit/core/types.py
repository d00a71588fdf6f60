# labelkit/core/types.py
"""
Value types for points, sizes, anchors, text style and draw plans.
All are frozen: created and consumed within a single draw call.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from labelkit.core.config import (
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE_PT,
    DEFAULT_TEXT_FILL,
    LINE_SPACING_PT,
)


Alignment = Literal["left", "center", "right"]

PlanKind = Literal["text", "text_block", "image"]

OpName = Literal[
    "save_state",
    "restore_state",
    "translate",
    "rotate",
    "draw_text",
    "draw_text_block",
    "draw_image",
]


@dataclass(frozen=True)
class Point:
    """A coordinate in drawing-surface space."""
    x: float
    y: float


@dataclass(frozen=True)
class Size:
    """Width/height pair. Negative values are not guarded."""
    width: float
    height: float


@dataclass(frozen=True)
class Anchor:
    """
    Fractional position inside the content box that lands on the target.
    (0.5, 0.5) centers the content; (0, 0) places its top-left corner.
    Not clamped.
    """
    x: float
    y: float


@dataclass(frozen=True)
class Rect:
    origin: Point
    size: Size


@dataclass(frozen=True)
class TextStyle:
    """Rendering attributes passed through to measurement and surfaces."""
    font_family: str = DEFAULT_FONT_FAMILY
    font_size_pt: float = DEFAULT_FONT_SIZE_PT
    fill: str = DEFAULT_TEXT_FILL
    line_spacing_pt: float = LINE_SPACING_PT


@dataclass(frozen=True)
class DrawOp:
    """One call on a drawing surface: method name plus positional args."""
    name: OpName
    args: tuple[Any, ...] = ()


@dataclass(frozen=True)
class DrawPlan:
    """
    Everything needed to render one piece of content.

    origin is the top-left of the content in the space the draw op runs in:
    surface space for unrotated plans, the rotated local space otherwise.
    translate is set only for rotated plans and is where the content's
    center lands on the surface.
    """
    kind: PlanKind
    target: Point
    origin: Point
    content_size: Size
    ops: tuple[DrawOp, ...]
    angle_rad: float = 0.0
    translate: Point | None = None

    @property
    def rotated(self) -> bool:
        return self.translate is not None
