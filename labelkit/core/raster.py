# labelkit/core/raster.py
"""
Pillow raster surface. The current transform is a numpy 3x3 affine
matrix with a save/restore stack; text and images are rendered into a
tile and composited through the inverse transform.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw

from labelkit.core.config import (
    CANVAS_BACKGROUND,
    CANVAS_HEIGHT_PX,
    CANVAS_WIDTH_PX,
    SINGULAR_TRANSFORM_EPS,
)
from labelkit.core.text_metrics import block_lines, font_scale, load_font
from labelkit.core.types import Point, Rect, TextStyle

logger = logging.getLogger(__name__)


def translation_matrix(dx: float, dy: float) -> np.ndarray:
    return np.array([[1.0, 0.0, dx], [0.0, 1.0, dy], [0.0, 0.0, 1.0]])


def rotation_matrix(angle_rad: float) -> np.ndarray:
    c = math.cos(angle_rad)
    s = math.sin(angle_rad)
    return np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])


def scale_matrix(sx: float, sy: float) -> np.ndarray:
    return np.array([[sx, 0.0, 0.0], [0.0, sy, 0.0], [0.0, 0.0, 1.0]])


class RasterSurface:
    """RGBA canvas implementing the drawing-surface protocol."""

    def __init__(
        self,
        width_px: int = CANVAS_WIDTH_PX,
        height_px: int = CANVAS_HEIGHT_PX,
        background: str = CANVAS_BACKGROUND,
    ) -> None:
        self.image = Image.new("RGBA", (width_px, height_px), background)
        self._matrix = np.eye(3)
        self._stack: list[np.ndarray] = []

    @property
    def matrix(self) -> np.ndarray:
        return self._matrix.copy()

    @property
    def depth(self) -> int:
        return len(self._stack)

    def map_point(self, p: Point) -> Point:
        """Current-transform image of a local point, in canvas pixels."""
        x, y, _ = self._matrix @ np.array([p.x, p.y, 1.0])
        return Point(float(x), float(y))

    def save_state(self) -> None:
        self._stack.append(self._matrix.copy())

    def restore_state(self) -> None:
        if not self._stack:
            raise RuntimeError("restore_state without matching save_state")
        self._matrix = self._stack.pop()

    def translate(self, dx: float, dy: float) -> None:
        self._matrix = self._matrix @ translation_matrix(dx, dy)

    def rotate(self, angle_rad: float) -> None:
        self._matrix = self._matrix @ rotation_matrix(angle_rad)

    def _composite(self, tile: Image.Image, placement: np.ndarray) -> None:
        """Paint tile onto the canvas; placement maps tile pixels to local space."""
        if tile.width == 0 or tile.height == 0:
            return
        m = self._matrix @ placement
        if not np.all(np.isfinite(m)) or abs(np.linalg.det(m[:2, :2])) < SINGULAR_TRANSFORM_EPS:
            logger.warning("Skipping draw with degenerate transform: %s", m.tolist())
            return
        inv = np.linalg.inv(m)
        data = (inv[0, 0], inv[0, 1], inv[0, 2], inv[1, 0], inv[1, 1], inv[1, 2])
        layer = tile.transform(
            self.image.size,
            Image.Transform.AFFINE,
            data,
            resample=Image.Resampling.BICUBIC,
        )
        self.image.alpha_composite(layer)

    def _run_tile(self, text: str, style: TextStyle) -> tuple[Image.Image, float]:
        font = load_font(style.font_family, style.font_size_pt)
        left, top, right, bottom = font.getbbox(text) if text else (0, 0, 0, 0)
        tile = Image.new("RGBA", (max(0, int(math.ceil(right))), max(0, int(math.ceil(bottom)))), (0, 0, 0, 0))
        if tile.width and tile.height:
            ImageDraw.Draw(tile).text((0, 0), text, font=font, fill=style.fill)
        return tile, font_scale(font, style.font_size_pt)

    def draw_text(self, text: str, origin: Point, style: TextStyle) -> None:
        tile, scale = self._run_tile(text, style)
        self._composite(tile, translation_matrix(origin.x, origin.y) @ scale_matrix(scale, scale))

    def draw_text_block(self, text: str, rect: Rect, style: TextStyle) -> None:
        """Lines wrap to rect width and stack down from rect origin; height is not clipped."""
        for line, dy in block_lines(text, style, rect.size.width):
            self.draw_text(line, Point(rect.origin.x, rect.origin.y + dy), style)

    def draw_image(self, image: Image.Image, rect: Rect) -> None:
        """Draw image stretched into rect (local space)."""
        if image.width == 0 or image.height == 0:
            return
        placement = translation_matrix(rect.origin.x, rect.origin.y) @ scale_matrix(
            rect.size.width / image.width, rect.size.height / image.height
        )
        self._composite(image.convert("RGBA"), placement)

    def draw_outline(self, coords: list[tuple[float, float]], color: str = "red") -> None:
        """Outline a polygon given in canvas coordinates, ignoring the current transform."""
        if len(coords) >= 2:
            ImageDraw.Draw(self.image).line(list(coords) + [coords[0]], fill=color, width=1)

    def write_png(self, path: str | Path) -> Path:
        path = Path(path)
        self.image.convert("RGB").save(path, format="PNG")
        return path
