"""
Mesh render data.

Round kinds are fanned around their center. Everything else is derived from
its bezier outline: closed outlines are triangulated, open ones become line
strips.
"""
from __future__ import annotations

import logging

import numpy as np
from matplotlib.path import Path
from scipy.spatial import Delaunay

from mobjectwrapper.config import GEOMETRY_TOLERANCE, OUTLINE_SAMPLES_PER_CURVE
from mobjectwrapper.model.geometry_utils import sample_bezier
from mobjectwrapper.model.kinds import MobjectKind as K
from mobjectwrapper.model.material import Material
from mobjectwrapper.model.mobject import Mobject
from mobjectwrapper.rendering.data import PrimitiveData
from mobjectwrapper.rendering.registry import get_renderer, register_renderer

logger = logging.getLogger(__name__)


def _closed_outline(mob: Mobject) -> tuple[np.ndarray, bool]:
    """Sampled outline of the vectorized form; a closing duplicate point is dropped."""
    vectorized = get_renderer(Material.VECTORIZED, mob.kind)(mob)
    outline = sample_bezier(vectorized.curves, OUTLINE_SAMPLES_PER_CURVE)
    if vectorized.closed and len(outline) > 1 and np.allclose(outline[0], outline[-1], atol=GEOMETRY_TOLERANCE):
        outline = outline[:-1]
    return outline, vectorized.closed

def _ring(n: int, start: int = 0) -> np.ndarray:
    idx = np.arange(n) + start
    return np.column_stack([idx, np.roll(idx, -1)]).astype(np.int64)

def _primitive(mob: Mobject, vertices: np.ndarray, triangles: np.ndarray, lines: np.ndarray) -> PrimitiveData:
    return PrimitiveData(
        uid=mob.uid,
        name=mob.name,
        kind=mob.kind,
        style=mob.style,
        vertices=vertices,
        triangles=triangles.astype(np.int64).reshape(-1, 3),
        lines=lines.astype(np.int64).reshape(-1, 2),
    )


@register_renderer(Material.PRIMITIVE, K.DOT, K.CIRCLE, K.ELLIPSE)
def render_fan(mob: Mobject) -> PrimitiveData:
    outline, _ = _closed_outline(mob)
    n = len(outline)
    vertices = np.vstack([mob.data.center.to_array(), outline])
    ring = _ring(n, start=1)
    triangles = np.column_stack([np.zeros(n, dtype=np.int64), ring])
    return _primitive(mob, vertices, triangles, ring)

@register_renderer(Material.PRIMITIVE)
def render_outline(mob: Mobject) -> PrimitiveData:
    outline, closed = _closed_outline(mob)

    if not closed:
        idx = np.arange(len(outline))
        lines = np.column_stack([idx[:-1], idx[1:]])
        return _primitive(mob, outline, np.zeros((0, 3)), lines)

    xy = outline[:, :2]
    if len(outline) < 3 or np.linalg.matrix_rank(xy - xy.mean(axis=0), tol=GEOMETRY_TOLERANCE) < 2:
        # Flat or collapsed outline: nothing to fill
        logger.debug(f"Outline of '{mob.name}' has no area, emitting lines only.")
        return _primitive(mob, outline, np.zeros((0, 3)), _ring(len(outline)))

    triangulation = Delaunay(xy)
    simplices = triangulation.simplices
    # Delaunay covers the convex hull; keep only triangles inside the outline
    centroids = xy[simplices].mean(axis=1)
    inside = Path(xy).contains_points(centroids)
    logger.debug(f"Triangulated '{mob.name}': kept {int(inside.sum())}/{len(simplices)} triangles.")
    return _primitive(mob, outline, simplices[inside], _ring(len(outline)))
