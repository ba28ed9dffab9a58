import math

import numpy as np
import pytest

from mobjectwrapper.model.geometry_primitives import Point, ORIGIN
from mobjectwrapper.model.geometry_utils import rotation_matrix
from mobjectwrapper.model.kinds import (
    ArcData, CircleData, DotData, EllipseData, LineData, MobjectKind, PathData,
    PolygonData, RectangleData, SquareData, data_from_dict, data_type, make_data,
)

NO_OFFSET = np.zeros(2)


def test_stretched_square_becomes_rectangle():
    result = SquareData(ORIGIN, 2.0).transformed(np.diag([2.0, 1.0]), NO_OFFSET)
    assert result.kind == MobjectKind.RECTANGLE
    assert result.width == pytest.approx(4.0)
    assert result.height == pytest.approx(2.0)
    assert result.center.is_close(ORIGIN)


def test_rectangle_with_equal_sides_becomes_square():
    result = RectangleData(Point(1.0, 1.0), 4.0, 2.0).transformed(np.diag([0.5, 1.0]), NO_OFFSET)
    assert result.kind == MobjectKind.SQUARE
    assert result.side_length == pytest.approx(2.0)
    assert result.center.is_close(Point(0.5, 1.0))


def test_rotated_square_stays_square():
    result = SquareData(ORIGIN, 2.0).transformed(rotation_matrix(math.pi / 4), NO_OFFSET)
    assert result.kind == MobjectKind.SQUARE
    assert result.side_length == pytest.approx(2.0)
    assert result.rotation == pytest.approx(math.pi / 4)


def test_sheared_square_becomes_polygon():
    result = SquareData(ORIGIN, 2.0).transformed(np.array([[1.0, 1.0], [0.0, 1.0]]), NO_OFFSET)
    assert result.kind == MobjectKind.POLYGON
    assert len(result.vertices) == 4


def test_circle_and_ellipse_convert_both_ways():
    ellipse = CircleData(ORIGIN, 1.0).transformed(np.diag([2.0, 1.0]), NO_OFFSET)
    assert ellipse.kind == MobjectKind.ELLIPSE
    assert (ellipse.width, ellipse.height) == pytest.approx((4.0, 2.0))
    assert ellipse.rotation == pytest.approx(0.0)

    circle = ellipse.transformed(np.diag([0.5, 1.0]), np.array([1.0, 0.0]))
    assert circle.kind == MobjectKind.CIRCLE
    assert circle.radius == pytest.approx(1.0)
    assert circle.center.is_close(Point(1.0, 0.0))


def test_rotated_circle_stays_circle():
    result = CircleData(Point(1.0, 0.0), 2.0).transformed(rotation_matrix(1.0), NO_OFFSET)
    assert result.kind == MobjectKind.CIRCLE
    assert result.radius == pytest.approx(2.0)


def test_arc_under_similarity_stays_arc():
    arc = ArcData(ORIGIN, 1.0, 0.0, math.pi / 2)
    scaled = arc.transformed(np.eye(2) * 2.0, NO_OFFSET)
    assert scaled.kind == MobjectKind.ARC
    assert scaled.radius == pytest.approx(2.0)
    assert scaled.angle == pytest.approx(math.pi / 2)


def test_reflected_arc_reverses_direction():
    flipped = ArcData(ORIGIN, 1.0, 0.0, math.pi / 2).transformed(np.diag([-1.0, 1.0]), NO_OFFSET)
    assert flipped.kind == MobjectKind.ARC
    assert flipped.angle == pytest.approx(-math.pi / 2)
    assert flipped.start_point.is_close(Point(-1.0, 0.0))
    assert flipped.end_point.is_close(Point(0.0, 1.0))


def test_stretched_arc_becomes_open_path():
    result = ArcData(ORIGIN, 1.0, 0.0, math.pi).transformed(np.diag([2.0, 1.0]), NO_OFFSET)
    assert result.kind == MobjectKind.PATH
    assert result.closed is False
    assert result.points.shape == (2, 4, 3)
    np.testing.assert_allclose(result.points[0, 0], [2.0, 0.0, 0.0])


def test_full_turn_arc_is_a_circle():
    result = make_data(MobjectKind.ARC, arc_center=(1.0, 1.0), radius=2.0, start_angle=0.0, angle=2 * math.pi)
    assert result.kind == MobjectKind.CIRCLE
    assert result.radius == 2.0


def test_dot_radius_follows_area_scale():
    result = DotData(Point(1.0, 0.0), 0.1).transformed(np.eye(2) * 3.0, NO_OFFSET)
    assert result.kind == MobjectKind.DOT
    assert result.radius == pytest.approx(0.3)
    assert result.center.is_close(Point(3.0, 0.0))


def test_line_maps_its_endpoints():
    result = LineData((0.0, 0.0), (1.0, 0.0)).transformed(rotation_matrix(math.pi / 2), np.array([0.0, 1.0]))
    assert result.kind == MobjectKind.LINE
    assert result.start.is_close(Point(0.0, 1.0))
    assert result.end.is_close(Point(0.0, 2.0))


def test_axis_aligned_polygon_is_classified_as_rectangle():
    result = make_data(MobjectKind.POLYGON, vertices=[(0, 0), (3, 0), (3, 1), (0, 1)])
    assert result.kind == MobjectKind.RECTANGLE
    assert (result.width, result.height) == pytest.approx((3.0, 1.0))
    assert result.center.is_close(Point(1.5, 0.5))


def test_triangle_stays_polygon():
    assert make_data(MobjectKind.POLYGON, vertices=[(0, 0), (1, 0), (0, 1)]).kind == MobjectKind.POLYGON


def test_path_transformation_moves_every_control_point():
    points = np.arange(12, dtype=float).reshape(1, 4, 3)
    result = PathData(points).transformed(np.eye(2), np.array([1.0, -1.0]))
    np.testing.assert_allclose(result.points[..., 0], points[..., 0] + 1.0)
    np.testing.assert_allclose(result.points[..., 1], points[..., 1] - 1.0)
    np.testing.assert_allclose(result.points[..., 2], points[..., 2])


def test_payloads_are_immutable():
    square = SquareData(ORIGIN, 2.0)
    with pytest.raises(AttributeError):
        square.side_length = 3.0
    path = PathData(np.zeros((1, 4, 3)))
    with pytest.raises(ValueError):
        path.points[0, 0, 0] = 1.0


@pytest.mark.parametrize("factory", [
    lambda: CircleData(ORIGIN, -1.0),
    lambda: EllipseData(ORIGIN, 1.0, -2.0),
    lambda: PolygonData(((0, 0), (1, 1))),
    lambda: ArcData(ORIGIN, 1.0, 0.0, 0.0),
    lambda: PathData(np.zeros((2, 3))),
])
def test_invalid_payloads_raise_value_error(factory):
    with pytest.raises(ValueError):
        factory()


def test_registry_lookups():
    assert data_type(MobjectKind.SQUARE) is SquareData
    assert data_type("ellipse") is EllipseData
    with pytest.raises(KeyError):
        data_type(MobjectKind.GROUP)
    with pytest.raises(KeyError):
        data_type("hexagon")


def test_data_from_dict_rejects_unknown_kind():
    with pytest.raises(ValueError):
        data_from_dict({"kind": "hexagon"})
    with pytest.raises(ValueError):
        data_from_dict({"kind": "group"})


def test_dict_round_trip_keeps_kind_and_fields():
    ellipse = EllipseData(Point(1.0, 2.0), 4.0, 2.0, 0.5)
    assert data_from_dict(ellipse.to_dict()) == ellipse

    path = PathData(np.ones((2, 4, 3)), closed=True)
    restored = data_from_dict(path.to_dict())
    assert isinstance(restored, PathData)
    assert restored == path


def test_equality_is_within_tolerance():
    assert SquareData(ORIGIN, 2.0, 0.0) == SquareData(Point(1e-9, 0.0), 2.0 + 1e-9, -2.2e-16)
    assert CircleData(ORIGIN, 1.0) != CircleData(ORIGIN, 1.001)
    assert LineData((0, 0), (1, 1)) == LineData((0, 0), (1.0 + 1e-9, 1))
    assert PolygonData(((0, 0), (3, 0), (0, 1))) != PolygonData(((0, 0), (0, 1), (3, 0)))
    assert SquareData() != CircleData()


def test_equality_ignores_rotational_symmetry():
    assert SquareData(ORIGIN, 2.0, 0.0) == SquareData(ORIGIN, 2.0, math.pi / 2)
    assert RectangleData(ORIGIN, 4.0, 2.0, 0.0) == RectangleData(ORIGIN, 4.0, 2.0, math.pi)
    assert RectangleData(ORIGIN, 4.0, 2.0, 0.0) != RectangleData(ORIGIN, 4.0, 2.0, math.pi / 2)
    assert EllipseData(ORIGIN, 4.0, 2.0, 0.0) == EllipseData(ORIGIN, 4.0, 2.0, math.pi)
    assert ArcData(ORIGIN, 1.0, 0.0, 1.0) == ArcData(ORIGIN, 1.0, 2 * math.pi, 1.0)


def test_full_rotation_returns_equal_payload():
    original = SquareData(ORIGIN, 2.0, 0.0)
    rotated = original.transformed(rotation_matrix(2 * math.pi), NO_OFFSET)
    assert rotated == original
    assert hash(rotated) == hash(original)
