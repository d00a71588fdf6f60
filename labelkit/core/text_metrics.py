# labelkit/core/text_metrics.py
"""
Measure text in pt using Pillow. 1 pt = 1 surface unit.
Single runs are measured by advance width and line height; blocks are
word-wrapped to a width and stacked top-down from their origin.
"""

from __future__ import annotations

import warnings

from PIL import ImageFont

from labelkit.core.types import Point, Rect, Size, TextStyle

_font_warning_emitted: set[str] = set()


def load_font(font_family: str, font_size_pt: float):
    """Load PIL ImageFont; fallback with warning if font not found."""
    size = max(1, int(round(font_size_pt)))
    candidates = [
        font_family + ".ttf",
        font_family.replace(" ", "") + ".ttf",
        "DejaVuSans.ttf",
        "arial.ttf",
        "Arial.ttf",
    ]
    for name in candidates:
        try:
            return ImageFont.truetype(name, size=size)
        except (OSError, IOError):
            continue
    if font_family not in _font_warning_emitted:
        _font_warning_emitted.add(font_family)
        warnings.warn(f"Font not found: {font_family!r}; using default.", UserWarning)
    return ImageFont.load_default(size=size)


def font_scale(font, font_size_pt: float) -> float:
    """Factor from the loaded font's integer pixel size to the requested pt size."""
    size_used = getattr(font, "size", font_size_pt)
    return font_size_pt / max(1.0, float(size_used))


def _line_height_px(font) -> float:
    try:
        ascent, descent = font.getmetrics()
    except AttributeError:
        return float(font.getbbox("Ag")[3])
    return float(ascent + descent)


def _advance_px(font, text: str) -> float:
    if not text:
        return 0.0
    return float(font.getlength(text))


def measure_text(text: str, style: TextStyle) -> Size:
    """
    Return the size of a single run: advance width x line height (pt).
    Newlines are not interpreted; use measure_text_block for blocks.
    """
    font = load_font(style.font_family, style.font_size_pt)
    scale = font_scale(font, style.font_size_pt)
    return Size(
        width=_advance_px(font, text) * scale,
        height=_line_height_px(font) * scale,
    )


def line_height(style: TextStyle) -> float:
    font = load_font(style.font_family, style.font_size_pt)
    return _line_height_px(font) * font_scale(font, style.font_size_pt)


def wrap_text(text: str, style: TextStyle, max_width: float) -> list[str]:
    """
    Greedy word wrap to max_width (pt). Explicit newlines always break.
    A word wider than max_width gets a line of its own.
    """
    font = load_font(style.font_family, style.font_size_pt)
    scale = font_scale(font, style.font_size_pt)
    lines: list[str] = []
    for paragraph in text.split("\n"):
        current = ""
        for word in paragraph.split(" "):
            candidate = word if not current else current + " " + word
            if not current or _advance_px(font, candidate) * scale <= max_width:
                current = candidate
                continue
            lines.append(current)
            current = word
        lines.append(current)
    return lines


def block_lines(text: str, style: TextStyle, max_width: float) -> list[tuple[str, float]]:
    """Wrapped lines with their y offset (pt) from the block origin."""
    step = line_height(style) + style.line_spacing_pt
    return [(line, i * step) for i, line in enumerate(wrap_text(text, style, max_width))]


def measure_text_block(text: str, style: TextStyle, constrained_to: Size) -> Rect:
    """
    Bounding rect of text wrapped to constrained_to.width, origin (0, 0).
    Height is not clipped to constrained_to.height.
    """
    font = load_font(style.font_family, style.font_size_pt)
    scale = font_scale(font, style.font_size_pt)
    lines = wrap_text(text, style, constrained_to.width)
    width = max((_advance_px(font, line) * scale for line in lines), default=0.0)
    lh = _line_height_px(font) * scale
    n = len(lines)
    height = n * lh + max(0, n - 1) * style.line_spacing_pt
    return Rect(origin=Point(0.0, 0.0), size=Size(width=width, height=height))
