# labelkit/core/config.py
"""
Central configuration for label layout and rendering.
All tunable values live here; no magic numbers in other modules.
"""

from __future__ import annotations
import os
from typing import Literal

# ----- Paths (repo-relative) -----
REPORTS_DIR: str = "reports"

# ----- Layout defaults -----
DEFAULT_ANCHOR: tuple[float, float] = (0.5, 0.5)
"""Anchor used when the caller gives none: content centered on the target."""

DEFAULT_ANGLE_RAD: float = 0.0

DEFAULT_ALIGNMENT: Literal["left", "center", "right"] = "left"

# ----- Typography -----
DEFAULT_FONT_FAMILY: str = "DejaVu Sans"
DEFAULT_FONT_SIZE_PT: float = 12.0
DEFAULT_TEXT_FILL: str = "black"

LINE_SPACING_PT: float = 4.0
"""Extra space (pt) between wrapped lines of a text block."""

# ----- Image resizing -----
RESAMPLE_FILTER: str = "LANCZOS"
"""Name of the PIL.Image.Resampling filter used for cached resizes."""

# ----- Raster surface -----
CANVAS_WIDTH_PX: int = 800
CANVAS_HEIGHT_PX: int = 600
CANVAS_BACKGROUND: str = "white"

SINGULAR_TRANSFORM_EPS: float = 1e-12
"""Determinant below which a surface transform is treated as non-invertible."""

# ----- SVG surface -----
SVG_NUMBER_FORMAT: str = ".4f"

# ----- Demo runner -----
DEMO_LABEL_COUNT: int = 8
DEMO_RADIUS_PT: float = 180.0
AXIS_MARGIN_PT: float = 24.0
"""Distance (pt) of the demo axis from the canvas edges."""

CAPTION_MARGIN_PT: float = 12.0

# ----- Debug flags -----
LABELKIT_DEBUG: bool = os.environ.get("LABELKIT_DEBUG", "").lower() in ("1", "true", "yes")
"""Draw footprint outlines on the raster output. Set env LABELKIT_DEBUG=1 to enable."""
