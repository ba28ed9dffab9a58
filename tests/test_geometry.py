import math

import numpy as np
import pytest

from mobjectwrapper.model.geometry_primitives import Point, Vector
from mobjectwrapper.model.geometry_utils import (
    arc_to_bezier, ellipse_axes, ellipse_to_bezier, is_similarity, line_to_bezier,
    polygon_area, polygon_to_bezier, polyline_length, rotation_matrix, sample_bezier,
    transform_point,
)


def test_point_vector_arithmetic():
    p = Point(1.0, 2.0)
    q = p + Vector(2.0, -1.0)
    assert q == Point(3.0, 1.0)
    assert q - p == Vector(2.0, -1.0)
    assert q - Vector(2.0, -1.0) == p


def test_point_rejects_wrong_operands():
    with pytest.raises(TypeError):
        Point(0.0, 0.0) + Point(1.0, 1.0)
    with pytest.raises(TypeError):
        Point(0.0, 0.0) - 3.0


def test_point_from_array_validates_length():
    assert Point.from_array([1, 2]) == Point(1.0, 2.0)
    assert Point.from_array(np.array([1, 2, 3])) == Point(1.0, 2.0, 3.0)
    with pytest.raises(ValueError):
        Point.from_array([1.0])


def test_vector_division_by_zero():
    with pytest.raises(ZeroDivisionError):
        Vector(1.0, 0.0) / 0.0


def test_transform_point_keeps_z():
    p = transform_point(Point(1.0, 0.0, 5.0), rotation_matrix(math.pi / 2), np.array([1.0, 1.0]))
    assert p.x == pytest.approx(1.0)
    assert p.y == pytest.approx(2.0)
    assert p.z == 5.0


def test_ellipse_axes_of_diagonal_matrix():
    a, b, rotation = ellipse_axes(np.diag([1.0, 3.0]))
    assert a == pytest.approx(3.0)
    assert b == pytest.approx(1.0)
    assert rotation == pytest.approx(math.pi / 2)


def test_ellipse_axes_of_rotated_matrix():
    angle = math.radians(30)
    a, b, rotation = ellipse_axes(rotation_matrix(angle) @ np.diag([2.0, 1.0]))
    assert (a, b) == pytest.approx((2.0, 1.0))
    assert rotation == pytest.approx(angle)


def test_is_similarity():
    assert is_similarity(rotation_matrix(0.3) * 2.0)
    assert is_similarity(np.diag([1.0, -1.0]))
    assert not is_similarity(np.diag([2.0, 1.0]))


def test_quarter_arc_bezier():
    curves = arc_to_bezier(Point(0.0, 0.0), 1.0, 0.0, math.pi / 2)
    assert curves.shape == (1, 4, 3)
    np.testing.assert_allclose(curves[0, 0], [1.0, 0.0, 0.0])
    np.testing.assert_allclose(curves[0, 3], [0.0, 1.0, 0.0], atol=1e-12)

    midpoint = sample_bezier(curves, 2)[1]
    assert np.linalg.norm(midpoint[:2]) == pytest.approx(1.0, abs=1e-3)


def test_arc_is_split_into_quarter_pieces():
    assert len(arc_to_bezier(Point(0.0, 0.0), 1.0, 0.0, 2 * math.pi)) == 4
    assert len(arc_to_bezier(Point(0.0, 0.0), 1.0, 0.0, -3 * math.pi / 4)) == 2


def test_ellipse_bezier_extremes():
    curves = ellipse_to_bezier(Point(1.0, 1.0), 2.0, 1.0)
    anchors = curves[:, 0, :2]
    assert anchors[:, 0].max() == pytest.approx(3.0)
    assert anchors[:, 1].max() == pytest.approx(2.0)


def test_sample_bezier_shares_anchors():
    square = np.array([[0, 0, 0], [1, 0, 0], [1, 1, 0]], dtype=float)
    curves = polygon_to_bezier(square, closed=False)
    assert len(curves) == 2
    assert len(sample_bezier(curves, 4)) == 9


def test_line_bezier_handles_at_thirds():
    curve = line_to_bezier(np.array([0.0, 0.0, 0.0]), np.array([3.0, 0.0, 0.0]))[0]
    np.testing.assert_allclose(curve[:, 0], [0.0, 1.0, 2.0, 3.0])


def test_polygon_area_sign_and_length():
    ccw = np.array([[0, 0, 0], [2, 0, 0], [2, 1, 0], [0, 1, 0]], dtype=float)
    assert polygon_area(ccw) == pytest.approx(2.0)
    assert polygon_area(ccw[::-1]) == pytest.approx(-2.0)
    assert polyline_length(ccw) == pytest.approx(5.0)
