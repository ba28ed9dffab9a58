"""Bezier render data for every kind."""
from __future__ import annotations

from math import pi

import numpy as np

from mobjectwrapper.model.geometry_utils import (
    arc_to_bezier, ellipse_to_bezier, line_to_bezier, polygon_to_bezier,
)
from mobjectwrapper.model.kinds import MobjectKind as K
from mobjectwrapper.model.material import Material
from mobjectwrapper.model.mobject import Mobject
from mobjectwrapper.rendering.data import VectorizedData
from mobjectwrapper.rendering.registry import register_renderer


def _vectorized(mob: Mobject, curves: np.ndarray, closed: bool) -> VectorizedData:
    return VectorizedData(
        uid=mob.uid,
        name=mob.name,
        kind=mob.kind,
        style=mob.style,
        curves=curves,
        closed=closed,
    )


@register_renderer(Material.VECTORIZED, K.DOT, K.CIRCLE)
def render_round(mob: Mobject) -> VectorizedData:
    data = mob.data
    return _vectorized(mob, arc_to_bezier(data.center, data.radius, 0.0, 2 * pi), closed=True)

@register_renderer(Material.VECTORIZED, K.ELLIPSE)
def render_ellipse(mob: Mobject) -> VectorizedData:
    data = mob.data
    curves = ellipse_to_bezier(data.position, data.width / 2, data.height / 2, data.rotation)
    return _vectorized(mob, curves, closed=True)

@register_renderer(Material.VECTORIZED, K.SQUARE, K.RECTANGLE)
def render_box(mob: Mobject) -> VectorizedData:
    return _vectorized(mob, polygon_to_bezier(mob.data.corners()), closed=True)

@register_renderer(Material.VECTORIZED, K.POLYGON)
def render_polygon(mob: Mobject) -> VectorizedData:
    return _vectorized(mob, polygon_to_bezier(mob.data.as_array()), closed=True)

@register_renderer(Material.VECTORIZED, K.LINE)
def render_line(mob: Mobject) -> VectorizedData:
    data = mob.data
    return _vectorized(mob, line_to_bezier(data.start.to_array(), data.end.to_array()), closed=False)

@register_renderer(Material.VECTORIZED, K.ARC)
def render_arc(mob: Mobject) -> VectorizedData:
    data = mob.data
    curves = arc_to_bezier(data.arc_center, data.radius, data.start_angle, data.angle)
    return _vectorized(mob, curves, closed=False)

@register_renderer(Material.VECTORIZED, K.PATH)
def render_path(mob: Mobject) -> VectorizedData:
    return _vectorized(mob, np.array(mob.data.points), closed=mob.data.closed)
