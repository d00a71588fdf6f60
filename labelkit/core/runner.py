# labelkit/core/runner.py
"""
CLI entrypoint: lay out labels radially around the canvas center, an
axis of formatted tick labels, an optional wrapped caption and an
optional centered image; render PNG + SVG + debug overlay and export plans.
"""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path

from PIL import Image

from labelkit.core.axis import axis_entries, format_axis_label
from labelkit.core.config import (
    AXIS_MARGIN_PT,
    CANVAS_HEIGHT_PX,
    CANVAS_WIDTH_PX,
    CAPTION_MARGIN_PT,
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE_PT,
    DEMO_LABEL_COUNT,
    DEMO_RADIUS_PT,
    LABELKIT_DEBUG,
)
from labelkit.core.drawing import apply_plan
from labelkit.core.geometry import content_footprint
from labelkit.core.image_cache import ImageResizeCache
from labelkit.core.layout import plan_image, plan_radial_text, plan_text
from labelkit.core.multiline import plan_multiline_text
from labelkit.core.numeric import deg_to_rad
from labelkit.core.raster import RasterSurface
from labelkit.core.render import render_debug
from labelkit.core.render_svg import SvgSurface
from labelkit.core.reporting import ensure_report_dir, write_plans_json, write_run_metadata_json
from labelkit.core.text_metrics import measure_text, measure_text_block
from labelkit.core.types import Anchor, DrawPlan, Point, Size, TextStyle

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Anchored, rotated label layout demo.")
    p.add_argument("--labels", type=str, default="ELBE,MAIN,RHEIN", help="Label(s): 'ELBE' or 'ELBE,MAIN'")
    p.add_argument("--count", type=int, default=DEMO_LABEL_COUNT, help="Number of labels around the circle")
    p.add_argument("--radius-pt", type=float, default=DEMO_RADIUS_PT, dest="radius_pt", help="Circle radius (pt)")
    p.add_argument("--anchor", type=str, default="0.5,0.5", help="Anchor 'x,y', e.g. '0,0.5'")
    p.add_argument("--align", type=str, default="left", choices=("left", "center", "right"), help="Text alignment")
    p.add_argument("--angle-deg", type=float, default=0.0, dest="angle_deg", help="Fixed label rotation (deg)")
    p.add_argument("--radial", action="store_true", help="Rotate each label along its radial direction")
    p.add_argument("--font-size-pt", type=float, default=DEFAULT_FONT_SIZE_PT, dest="font_size_pt", help="Font size (pt)")
    p.add_argument("--axis-max", type=float, default=1234.0, dest="axis_max", help="Axis range max (min is 0)")
    p.add_argument("--axis-labels", type=int, default=5, dest="axis_labels", help="Approximate axis label count")
    p.add_argument("--caption", type=str, default="", help="Optional caption drawn as a wrapped block")
    p.add_argument("--caption-width-pt", type=float, default=220.0, dest="caption_width_pt", help="Caption wrap width (pt)")
    p.add_argument("--image", type=str, default=None, help="Optional image drawn at the center")
    p.add_argument("--image-size-pt", type=float, default=48.0, dest="image_size_pt", help="Image display size (pt)")
    p.add_argument("--width-px", type=int, default=CANVAS_WIDTH_PX, dest="width_px", help="Canvas width")
    p.add_argument("--height-px", type=int, default=CANVAS_HEIGHT_PX, dest="height_px", help="Canvas height")
    p.add_argument("--run-name", type=str, default="run", dest="run_name", help="Reports subdir name")
    p.add_argument("--output-dir", type=str, default="reports", dest="output_dir", help="Output directory (repo-relative)")
    p.add_argument("--repo-root", type=str, default=None, dest="repo_root", help="Repo root (default: cwd)")
    return p.parse_args(argv)


def parse_anchor(s: str) -> Anchor:
    """Parse 'x,y' into an Anchor."""
    parts = [part.strip() for part in (s or "").split(",")]
    if len(parts) != 2:
        raise ValueError(f"Anchor must be 'x,y', got {s!r}")
    return Anchor(float(parts[0]), float(parts[1]))


def _parse_labels(text: str) -> list[str]:
    labels = [t.strip() for t in (text or "").split(",") if t.strip()]
    return labels or ["Label"]


def build_plans(args: argparse.Namespace, cache: ImageResizeCache) -> list[DrawPlan]:
    """All plans for one demo sheet, in draw order."""
    if args.count <= 0:
        raise ValueError("Label count must be positive.")
    anchor = parse_anchor(args.anchor)
    style = TextStyle(font_family=DEFAULT_FONT_FAMILY, font_size_pt=args.font_size_pt)
    center = Point(args.width_px / 2.0, args.height_px / 2.0)
    labels = _parse_labels(args.labels)
    plans: list[DrawPlan] = []

    for i in range(args.count):
        angle_deg = 360.0 * i / args.count
        text = labels[i % len(labels)]
        rotation_deg = angle_deg if args.radial else args.angle_deg
        plans.append(
            plan_radial_text(
                text,
                center,
                args.radius_pt,
                angle_deg,
                measure_text(text, style),
                align=args.align,
                anchor=anchor,
                angle_rad=deg_to_rad(rotation_deg),
                style=style,
            )
        )

    axis = axis_entries(0.0, args.axis_max, args.axis_labels)
    if axis.values and args.axis_max != 0:
        usable = args.width_px - 2 * AXIS_MARGIN_PT
        y = args.height_px - AXIS_MARGIN_PT
        for value in axis.values:
            text = format_axis_label(value, axis.decimals)
            x = AXIS_MARGIN_PT + usable * (value / args.axis_max)
            # centered horizontally, top edge on the tick
            plans.append(plan_text(text, Point(x, y), measure_text(text, style), anchor=Anchor(0.5, 0.0), style=style))
        logger.info("Axis interval %s with %d decimals", axis.interval, axis.decimals)

    if args.caption:
        block = measure_text_block(args.caption, style, Size(args.caption_width_pt, float(args.height_px)))
        plans.append(
            plan_multiline_text(
                args.caption,
                Point(CAPTION_MARGIN_PT, CAPTION_MARGIN_PT),
                block.size,
                anchor=Anchor(0.0, 0.0),
                style=style,
            )
        )

    if args.image:
        image_path = Path(args.image)
        if not image_path.exists():
            raise FileNotFoundError(f"Image file not found: {image_path}")
        with Image.open(image_path) as src:
            image = src.convert("RGBA")
        size = Size(args.image_size_pt, args.image_size_pt)
        plans.append(plan_image(cache.resized(image, size), center, size))

    return plans


def main(argv: list[str] | None = None) -> None:
    _log_level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(level=getattr(logging, _log_level_name, logging.INFO))

    args = _parse_args(argv)
    repo_root = Path(args.repo_root).resolve() if args.repo_root else Path.cwd().resolve()

    cache = ImageResizeCache()
    plans = build_plans(args, cache)

    raster = RasterSurface(args.width_px, args.height_px)
    svg = SvgSurface(args.width_px, args.height_px)
    for plan in plans:
        apply_plan(raster, plan)
        apply_plan(svg, plan)
    if LABELKIT_DEBUG:
        for plan in plans:
            raster.draw_outline(list(content_footprint(plan).exterior.coords))

    report_dir = ensure_report_dir(repo_root, args.run_name, output_dir=args.output_dir)
    png_path = raster.write_png(report_dir / "labels.png")
    svg_path = svg.write_svg(report_dir / "labels.svg")
    debug_path = report_dir / "debug.png"
    render_debug(plans, debug_path, width_px=args.width_px, height_px=args.height_px)
    plans_path = write_plans_json(report_dir, plans)
    meta_path = write_run_metadata_json(report_dir, args.run_name, vars(args))

    for p in (png_path, svg_path, debug_path, plans_path, meta_path):
        print(p)
    print("Plans drawn:", len(plans))


if __name__ == "__main__":
    main()
