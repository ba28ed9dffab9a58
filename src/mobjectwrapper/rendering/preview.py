"""Quick matplotlib preview of render data (debugging aid, not a renderer)."""
from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.patches import PathPatch
from matplotlib.path import Path

from mobjectwrapper.config import GEOMETRY_TOLERANCE
from mobjectwrapper.rendering.data import PrimitiveData, RenderData, VectorizedData


def bezier_to_mpl_path(item: VectorizedData) -> Path:
    """Convert cubic curves into a matplotlib Path (MOVETO/CURVE4/CLOSEPOLY)."""
    verts, codes = [], []
    for i, curve in enumerate(item.curves):
        if i == 0 or not np.allclose(curve[0], item.curves[i - 1][3], atol=GEOMETRY_TOLERANCE):
            verts.append(curve[0, :2])
            codes.append(Path.MOVETO)
        verts.extend(curve[1:, :2])
        codes.extend([Path.CURVE4] * 3)
    if item.closed:
        verts.append(item.curves[0][0, :2])
        codes.append(Path.CLOSEPOLY)
    return Path(np.array(verts), codes)


def _draw_vectorized(ax: Axes, item: VectorizedData) -> None:
    style = item.style
    patch = PathPatch(
        bezier_to_mpl_path(item),
        edgecolor=style.stroke_color,
        facecolor=style.fill_color if (style.fill_color and item.closed) else "none",
        lw=style.stroke_width / 2,
    )
    if style.fill_color and item.closed:
        patch.set_alpha(max(style.fill_opacity, 0.05))
    ax.add_patch(patch)


def _draw_primitive(ax: Axes, item: PrimitiveData) -> None:
    style = item.style
    x, y = item.vertices[:, 0], item.vertices[:, 1]
    if len(item.triangles):
        ax.triplot(x, y, item.triangles, color=style.stroke_color, lw=0.5)
    for a, b in item.lines:
        ax.plot([x[a], x[b]], [y[a], y[b]], color=style.stroke_color, lw=style.stroke_width / 2)


def plot_render_data(
    items: Iterable[RenderData],
    ax: Optional[Axes] = None,
    show: bool = False,
    title: Optional[str] = None
) -> Figure:
    """Draw vectorized and primitive render data on one axes and return the figure."""
    if ax is None:
        plt.rcParams["figure.constrained_layout.use"] = True
        fig, ax = plt.subplots()
    else:
        fig = ax.figure

    ax.set_facecolor("black")
    for item in items:
        if isinstance(item, VectorizedData):
            _draw_vectorized(ax, item)
        elif isinstance(item, PrimitiveData):
            _draw_primitive(ax, item)
        else:
            raise TypeError(f"Cannot plot {type(item).__name__}.")

    ax.set_aspect("equal")
    ax.autoscale_view()
    ax.grid(visible=True, which='major', axis='both', linestyle='-', color='gray', lw=0.5)
    ax.set_title(title or f"Preview at {datetime.now().strftime('%d.%m.%Y %H:%M:%S')}")
    ax.set_xlabel("X Coordinate")
    ax.set_ylabel("Y Coordinate")

    if show:
        plt.show()
    return fig
