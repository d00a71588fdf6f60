# labelkit/core/surface.py
"""
Drawing-surface protocol the layout engine renders through, and a
surface that only records the calls it receives.
"""

from __future__ import annotations

from typing import Any, Protocol

from PIL import Image

from labelkit.core.types import Point, Rect, TextStyle


class DrawingSurface(Protocol):
    """
    2D canvas with a save/restore state stack.
    rotate takes radians. Not thread-safe: one drawing pass at a time.
    """

    def save_state(self) -> None: ...

    def restore_state(self) -> None: ...

    def translate(self, dx: float, dy: float) -> None: ...

    def rotate(self, angle_rad: float) -> None: ...

    def draw_text(self, text: str, origin: Point, style: TextStyle) -> None: ...

    def draw_text_block(self, text: str, rect: Rect, style: TextStyle) -> None: ...

    def draw_image(self, image: Image.Image, rect: Rect) -> None: ...


class RecordingSurface:
    """Records every call as (name, args). Tracks save/restore depth."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.depth = 0

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def save_state(self) -> None:
        self.depth += 1
        self.calls.append(("save_state", ()))

    def restore_state(self) -> None:
        if self.depth == 0:
            raise RuntimeError("restore_state without matching save_state")
        self.depth -= 1
        self.calls.append(("restore_state", ()))

    def translate(self, dx: float, dy: float) -> None:
        self.calls.append(("translate", (dx, dy)))

    def rotate(self, angle_rad: float) -> None:
        self.calls.append(("rotate", (angle_rad,)))

    def draw_text(self, text: str, origin: Point, style: TextStyle) -> None:
        self.calls.append(("draw_text", (text, origin, style)))

    def draw_text_block(self, text: str, rect: Rect, style: TextStyle) -> None:
        self.calls.append(("draw_text_block", (text, rect, style)))

    def draw_image(self, image: Image.Image, rect: Rect) -> None:
        self.calls.append(("draw_image", (image, rect)))
