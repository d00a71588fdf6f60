# labelkit/core/render.py
"""
Matplotlib debug overlay: content footprints, targets and draw origins
for a set of plans, in surface coordinates (y down).
"""

from __future__ import annotations

import warnings
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from labelkit.core.config import CANVAS_HEIGHT_PX, CANVAS_WIDTH_PX
from labelkit.core.geometry import content_footprint
from labelkit.core.types import DrawPlan


def _new_fig(width_px: int, height_px: int) -> tuple[plt.Figure, plt.Axes]:
    fig = plt.figure(
        figsize=(width_px / 100.0, height_px / 100.0),
        dpi=100,
        constrained_layout=False,
    )
    # Leave bottom margin so legend does not overlap the plot
    ax = fig.add_axes([0.05, 0.08, 0.9, 0.88])
    ax.axis("off")
    return fig, ax


def render_debug(
    plans: list[DrawPlan],
    output_path: str | Path,
    width_px: int = CANVAS_WIDTH_PX,
    height_px: int = CANVAS_HEIGHT_PX,
    scale: int = 1,
) -> None:
    """Render footprints, targets and origins. scale multiplies output resolution."""
    w, h = width_px * scale, height_px * scale
    fig, ax = _new_fig(w, h)

    for i, plan in enumerate(plans):
        poly = content_footprint(plan)
        if not poly.is_empty:
            xy = np.array(poly.exterior.coords)
            ax.plot(
                xy[:, 0], xy[:, 1],
                linewidth=1,
                color="navy" if plan.rotated else "darkgreen",
                label="footprint" if i == 0 else None,
            )

    if plans:
        tx = [p.target.x for p in plans]
        ty = [p.target.y for p in plans]
        ax.scatter(tx, ty, s=12, color="red", zorder=5, label="target")
        centers = [p.translate for p in plans if p.translate is not None]
        if centers:
            ax.scatter([c.x for c in centers], [c.y for c in centers], s=8, marker="x", color="orange", zorder=6, label="rotation center")
        origins = [p.origin for p in plans if p.translate is None]
        if origins:
            ax.scatter([o.x for o in origins], [o.y for o in origins], s=8, marker="+", color="black", zorder=6, label="draw origin")

    ax.set_xlim(0, width_px)
    ax.set_ylim(height_px, 0)
    ax.set_aspect("equal", adjustable="box")
    handles, _ = ax.get_legend_handles_labels()
    extra = []
    if handles:
        extra.append(ax.legend(loc="upper center", bbox_to_anchor=(0.5, -0.02), ncol=4, fontsize=8))
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", message=".*constrained_layout.*", category=UserWarning)
        fig.savefig(output_path, dpi=100, facecolor="white", bbox_inches="tight", bbox_extra_artists=extra)
    plt.close(fig)
