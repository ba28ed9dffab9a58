from __future__ import annotations

from typing import TYPE_CHECKING

from math import pi, ceil, tan, atan2
import numpy as np

if TYPE_CHECKING:
    from numpy import typing as npt

from mobjectwrapper.config import GEOMETRY_TOLERANCE, MAX_ARC_SEGMENT_ANGLE
from mobjectwrapper.model.geometry_primitives import Point

def rotation_matrix(angle: float) -> npt.NDArray[np.float64]:
    """2x2 counter-clockwise rotation by `angle` radians."""
    c, s = np.cos(angle), np.sin(angle)
    return np.array([[c, -s], [s, c]])

def transform_point(
    point: Point,
    linear: npt.NDArray[np.float64],
    offset: npt.NDArray[np.float64]
) -> Point:
    """Apply the affine map x -> L @ x + offset to the XY part of a point (Z is kept)."""
    xy = linear @ np.array([point.x, point.y]) + offset
    return Point(float(xy[0]), float(xy[1]), point.z)

def transform_array(
    points: npt.NDArray[np.float64],
    linear: npt.NDArray[np.float64],
    offset: npt.NDArray[np.float64]
) -> npt.NDArray[np.float64]:
    """Vectorized `transform_point` for any array whose last axis has 3 components."""
    result = np.array(points, dtype=float, copy=True)
    result[..., :2] = result[..., :2] @ linear.T + offset
    return result

def normalize_half_turn(angle: float) -> float:
    """Map an axis direction into (-pi/2, pi/2]; an axis and its opposite are the same axis."""
    while angle > pi / 2:
        angle -= pi
    while angle <= -pi / 2:
        angle += pi
    return angle

def ellipse_axes(matrix: npt.NDArray[np.float64]) -> tuple[float, float, float]:
    """
    Decompose a 2x2 matrix into the ellipse it maps the unit circle onto.

    Args:
        matrix: The 2x2 linear map.

    Returns:
        (a, b, rotation): semi-major axis, semi-minor axis (a >= b >= 0) and the
        direction of the major axis in radians, normalized into (-pi/2, pi/2].
    """
    u, s, _ = np.linalg.svd(matrix)
    rotation = normalize_half_turn(atan2(u[1, 0], u[0, 0]))
    return float(s[0]), float(s[1]), rotation

def is_similarity(linear: npt.NDArray[np.float64], tol: float = GEOMETRY_TOLERANCE) -> bool:
    """True if the map scales every direction equally (rotation/reflection + uniform scale)."""
    s = np.linalg.svd(linear, compute_uv=False)
    return abs(s[0] - s[1]) <= tol * max(1.0, s[0])

# ------------------------------------------------------------------------------
# Cubic bezier construction. Every builder returns an array of shape (n, 4, 3).
# ------------------------------------------------------------------------------
def line_to_bezier(
    start: npt.NDArray[np.float64],
    end: npt.NDArray[np.float64]
) -> npt.NDArray[np.float64]:
    start = np.asarray(start, dtype=float)
    end = np.asarray(end, dtype=float)
    delta = end - start
    return np.array([[start, start + delta / 3.0, start + 2.0 * delta / 3.0, end]])

def arc_to_bezier(
    center: Point,
    radius: float,
    start_angle: float,
    angle: float,
    max_segment_angle: float = MAX_ARC_SEGMENT_ANGLE
) -> npt.NDArray[np.float64]:
    """
    Approximates a circular arc with cubic beziers.

    The arc is split into equal pieces no wider than `max_segment_angle`; each
    piece uses the standard handle length 4/3 * tan(dθ/4) * r.
    """
    n_segments = max(1, ceil(abs(angle) / max_segment_angle - 1e-12))
    d_theta = angle / n_segments
    k = 4.0 / 3.0 * tan(d_theta / 4.0)
    c = center.to_array()

    curves = np.zeros((n_segments, 4, 3))
    for i in range(n_segments):
        t0 = start_angle + i * d_theta
        t1 = t0 + d_theta
        p0 = c + radius * np.array([np.cos(t0), np.sin(t0), 0.0])
        p3 = c + radius * np.array([np.cos(t1), np.sin(t1), 0.0])
        tangent_0 = radius * np.array([-np.sin(t0), np.cos(t0), 0.0])
        tangent_1 = radius * np.array([-np.sin(t1), np.cos(t1), 0.0])
        curves[i] = [p0, p0 + k * tangent_0, p3 - k * tangent_1, p3]
    return curves

def ellipse_to_bezier(
    center: Point,
    a: float,
    b: float,
    rotation: float = 0.0
) -> npt.NDArray[np.float64]:
    """Unit circle curves mapped through R(rotation) @ diag(a, b) and moved to `center`."""
    unit = arc_to_bezier(Point(0.0, 0.0), 1.0, 0.0, 2 * pi)
    linear = rotation_matrix(rotation) @ np.diag([a, b])
    curves = transform_array(unit, linear, np.array([center.x, center.y]))
    curves[..., 2] = center.z
    return curves

def polygon_to_bezier(
    vertices: npt.NDArray[np.float64],
    closed: bool = True
) -> npt.NDArray[np.float64]:
    vertices = np.asarray(vertices, dtype=float)
    ends = np.roll(vertices, -1, axis=0) if closed else vertices[1:]
    starts = vertices if closed else vertices[:-1]
    return np.concatenate([line_to_bezier(s, e) for s, e in zip(starts, ends)])

def sample_bezier(
    curves: npt.NDArray[np.float64],
    samples_per_curve: int
) -> npt.NDArray[np.float64]:
    """
    Flatten cubic beziers into a polyline.

    Anchors shared by consecutive curves are emitted only once.

    Returns:
        An array of shape (m, 3).
    """
    curves = np.asarray(curves, dtype=float)
    if curves.size == 0:
        return np.zeros((0, 3))

    t = np.linspace(0.0, 1.0, samples_per_curve + 1)[:, None]
    basis = [(1 - t) ** 3, 3 * (1 - t) ** 2 * t, 3 * (1 - t) * t ** 2, t ** 3]

    chunks = []
    for i, curve in enumerate(curves):
        pts = sum(b * p for b, p in zip(basis, curve))
        if i > 0 and np.allclose(curves[i - 1][3], curve[0], atol=GEOMETRY_TOLERANCE):
            pts = pts[1:]
        chunks.append(pts)
    return np.vstack(chunks)

def polygon_area(points: npt.NDArray[np.float64]) -> float:
    """Signed shoelace area of a closed XY outline (positive for counter-clockwise)."""
    points = np.asarray(points, dtype=float)
    if len(points) < 3:
        return 0.0
    x, y = points[:, 0], points[:, 1]
    return 0.5 * float(np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1)))

def polyline_length(points: npt.NDArray[np.float64]) -> float:
    points = np.asarray(points, dtype=float)
    if len(points) < 2:
        return 0.0
    return float(np.linalg.norm(np.diff(points, axis=0), axis=1).sum())
