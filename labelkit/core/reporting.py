# labelkit/core/reporting.py
"""
Create reports/<run_name>/ and write plans.json and run_metadata.json.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from PIL import Image

from labelkit.core.config import (
    DEFAULT_ANCHOR,
    DEFAULT_FONT_FAMILY,
    LINE_SPACING_PT,
    REPORTS_DIR,
    RESAMPLE_FILTER,
)
from labelkit.core.geometry import footprint_bounds
from labelkit.core.types import DrawOp, DrawPlan, Point, Rect, Size, TextStyle

SCHEMA_VERSION = "1.0"


def _point(p: Point) -> dict:
    return {"x": p.x, "y": p.y}


def _size(s: Size) -> dict:
    return {"width": s.width, "height": s.height}


def _arg_to_json(arg: object) -> object:
    if isinstance(arg, Point):
        return _point(arg)
    if isinstance(arg, Size):
        return _size(arg)
    if isinstance(arg, Rect):
        return {"origin": _point(arg.origin), "size": _size(arg.size)}
    if isinstance(arg, TextStyle):
        return {
            "font_family": arg.font_family,
            "font_size_pt": arg.font_size_pt,
            "fill": arg.fill,
            "line_spacing_pt": arg.line_spacing_pt,
        }
    if isinstance(arg, Image.Image):
        return {"image": {"width": arg.width, "height": arg.height, "mode": arg.mode}}
    return arg


def op_to_dict(op: DrawOp) -> dict:
    return {"op": op.name, "args": [_arg_to_json(a) for a in op.args]}


def plan_to_dict(plan: DrawPlan) -> dict:
    """JSON-ready view of a plan: placement, transform sequence and footprint."""
    minx, miny, maxx, maxy = footprint_bounds(plan)
    out = {
        "schema_version": SCHEMA_VERSION,
        "kind": plan.kind,
        "target": _point(plan.target),
        "origin": _point(plan.origin),
        "content_size": _size(plan.content_size),
        "rotated": plan.rotated,
        "angle_rad": plan.angle_rad,
        "translate": _point(plan.translate) if plan.translate is not None else None,
        "ops": [op_to_dict(op) for op in plan.ops],
        "footprint_bounds": {"minx": minx, "miny": miny, "maxx": maxx, "maxy": maxy},
    }
    if not plan.rotated:
        out.pop("translate")
    return out


def run_metadata_dict(run_name: str, params: dict) -> dict:
    """Timestamp and config snapshot for run_metadata.json."""
    return {
        "run_name": run_name,
        "timestamp_utc": datetime.now(timezone.utc).isoformat(),
        "params": params,
        "config": {
            "DEFAULT_ANCHOR": list(DEFAULT_ANCHOR),
            "DEFAULT_FONT_FAMILY": DEFAULT_FONT_FAMILY,
            "LINE_SPACING_PT": LINE_SPACING_PT,
            "RESAMPLE_FILTER": RESAMPLE_FILTER,
        },
    }


def ensure_report_dir(
    repo_root: Path,
    run_name: str,
    output_dir: str | None = None,
) -> Path:
    """Create output_dir/<run_name>/ under repo_root; return path. Default output_dir from config."""
    base = output_dir if output_dir is not None else REPORTS_DIR
    out = (repo_root / base).resolve() / run_name
    out.mkdir(parents=True, exist_ok=True)
    return out


def write_plans_json(report_dir: Path, plans: list[DrawPlan]) -> Path:
    """Write plans.json to report_dir. Returns path to file."""
    path = report_dir / "plans.json"
    data = {"schema_version": SCHEMA_VERSION, "plans": [plan_to_dict(p) for p in plans]}
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


def write_run_metadata_json(report_dir: Path, run_name: str, params: dict) -> Path:
    """Write run_metadata.json to report_dir."""
    path = report_dir / "run_metadata.json"
    path.write_text(json.dumps(run_metadata_dict(run_name, params), indent=2), encoding="utf-8")
    return path
