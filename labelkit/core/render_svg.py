# labelkit/core/render_svg.py
"""
SVG surface: every translate/rotate opens a nested <g transform> so it
applies only to what is drawn afterwards; save/restore return to the
enclosing group. Units are pt (surface units).
"""

from __future__ import annotations

import base64
import io
import xml.etree.ElementTree as ET
from pathlib import Path

from PIL import Image

from labelkit.core.config import (
    CANVAS_BACKGROUND,
    CANVAS_HEIGHT_PX,
    CANVAS_WIDTH_PX,
    SVG_NUMBER_FORMAT,
)
from labelkit.core.numeric import rad_to_deg
from labelkit.core.text_metrics import block_lines, font_scale, load_font
from labelkit.core.types import Point, Rect, TextStyle

SVG_NS = "http://www.w3.org/2000/svg"


def _num(value: float) -> str:
    return format(value, SVG_NUMBER_FORMAT)


def _ascent(style: TextStyle) -> float:
    font = load_font(style.font_family, style.font_size_pt)
    try:
        ascent, _ = font.getmetrics()
    except AttributeError:
        ascent = font.getbbox("A")[3]
    return ascent * font_scale(font, style.font_size_pt)


def _image_data_uri(image: Image.Image) -> str:
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode("ascii")


class SvgSurface:
    """Drawing surface that builds an SVG document."""

    def __init__(
        self,
        width: int = CANVAS_WIDTH_PX,
        height: int = CANVAS_HEIGHT_PX,
        background: str | None = CANVAS_BACKGROUND,
    ) -> None:
        # Plain tag names; xmlns set exactly once
        self.root = ET.Element(
            "svg",
            {
                "xmlns": SVG_NS,
                "width": str(width),
                "height": str(height),
                "viewBox": f"0 0 {width} {height}",
            },
        )
        if background:
            ET.SubElement(
                self.root,
                "rect",
                {"x": "0", "y": "0", "width": str(width), "height": str(height), "fill": background},
            )
        self._current = self.root
        self._stack: list[ET.Element] = []

    @property
    def depth(self) -> int:
        return len(self._stack)

    def save_state(self) -> None:
        self._stack.append(self._current)

    def restore_state(self) -> None:
        if not self._stack:
            raise RuntimeError("restore_state without matching save_state")
        self._current = self._stack.pop()

    def _push_transform(self, transform: str) -> None:
        self._current = ET.SubElement(self._current, "g", {"transform": transform})

    def translate(self, dx: float, dy: float) -> None:
        self._push_transform(f"translate({_num(dx)} {_num(dy)})")

    def rotate(self, angle_rad: float) -> None:
        self._push_transform(f"rotate({_num(rad_to_deg(angle_rad))})")

    def _text_element(self, style: TextStyle) -> ET.Element:
        return ET.SubElement(
            self._current,
            "text",
            {
                "font-family": style.font_family,
                "font-size": _num(style.font_size_pt),
                "fill": style.fill,
                "xml:space": "preserve",
            },
        )

    def draw_text(self, text: str, origin: Point, style: TextStyle) -> None:
        el = self._text_element(style)
        el.set("x", _num(origin.x))
        el.set("y", _num(origin.y + _ascent(style)))
        el.text = text

    def draw_text_block(self, text: str, rect: Rect, style: TextStyle) -> None:
        """One <tspan> per wrapped line, stacked from the rect origin."""
        el = self._text_element(style)
        ascent = _ascent(style)
        for line, dy in block_lines(text, style, rect.size.width):
            span = ET.SubElement(
                el,
                "tspan",
                {"x": _num(rect.origin.x), "y": _num(rect.origin.y + dy + ascent)},
            )
            span.text = line

    def draw_image(self, image: Image.Image, rect: Rect) -> None:
        ET.SubElement(
            self._current,
            "image",
            {
                "x": _num(rect.origin.x),
                "y": _num(rect.origin.y),
                "width": _num(rect.size.width),
                "height": _num(rect.size.height),
                "preserveAspectRatio": "none",
                "href": _image_data_uri(image),
            },
        )

    def to_string(self) -> str:
        return '<?xml version="1.0" encoding="UTF-8"?>\n' + ET.tostring(self.root, encoding="unicode", method="xml")

    def write_svg(self, path: str | Path) -> Path:
        path = Path(path)
        path.write_text(self.to_string(), encoding="utf-8")
        return path
