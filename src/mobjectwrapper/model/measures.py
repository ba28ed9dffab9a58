"""Kind-dispatched measurements of handles and payloads."""
from __future__ import annotations

from math import pi, sqrt

from mobjectwrapper.config import OUTLINE_SAMPLES_PER_CURVE
from mobjectwrapper.model.dispatch import KindDispatcher
from mobjectwrapper.model.geometry_utils import polygon_area, polyline_length, sample_bezier
from mobjectwrapper.model.kinds import MobjectKind

K = MobjectKind

area = KindDispatcher("area")
perimeter = KindDispatcher("perimeter")
describe = KindDispatcher("describe")


# ------------------------------------------------------------------------------
# Area
# ------------------------------------------------------------------------------
@area.register(K.GROUP)
def _(target, data) -> float:
    return sum(area(sub) for sub in getattr(target, "submobjects", []))

@area.register(K.DOT, K.CIRCLE)
def _(target, data) -> float:
    return pi * data.radius ** 2

@area.register(K.ELLIPSE)
def _(target, data) -> float:
    return pi * data.width * data.height / 4

@area.register(K.SQUARE)
def _(target, data) -> float:
    return data.side_length ** 2

@area.register(K.RECTANGLE)
def _(target, data) -> float:
    return data.width * data.height

@area.register(K.POLYGON)
def _(target, data) -> float:
    return abs(polygon_area(data.as_array()))

@area.register(K.LINE, K.ARC)
def _(target, data) -> float:
    return 0.0

@area.register(K.PATH)
def _(target, data) -> float:
    if not data.closed:
        return 0.0
    return abs(polygon_area(data.outline()))


# ------------------------------------------------------------------------------
# Perimeter
# ------------------------------------------------------------------------------
@perimeter.register(K.GROUP)
def _(target, data) -> float:
    return sum(perimeter(sub) for sub in getattr(target, "submobjects", []))

@perimeter.register(K.DOT, K.CIRCLE)
def _(target, data) -> float:
    return 2 * pi * data.radius

@perimeter.register(K.ELLIPSE)
def _(target, data) -> float:
    # Ramanujan's second approximation
    a, b = data.width / 2, data.height / 2
    if a + b == 0.0:
        return 0.0
    h = ((a - b) / (a + b)) ** 2
    return pi * (a + b) * (1 + 3 * h / (10 + sqrt(4 - 3 * h)))

@perimeter.register(K.SQUARE)
def _(target, data) -> float:
    return 4 * data.side_length

@perimeter.register(K.RECTANGLE)
def _(target, data) -> float:
    return 2 * (data.width + data.height)

@perimeter.register(K.POLYGON)
def _(target, data) -> float:
    pts = data.as_array()
    closed = list(pts) + [pts[0]]
    return polyline_length(closed)

@perimeter.register(K.LINE)
def _(target, data) -> float:
    return data.length

@perimeter.register(K.ARC)
def _(target, data) -> float:
    return data.radius * abs(data.angle)

@perimeter.register(K.PATH)
def _(target, data) -> float:
    return polyline_length(sample_bezier(data.points, OUTLINE_SAMPLES_PER_CURVE * 4))


# ------------------------------------------------------------------------------
# Describe
# ------------------------------------------------------------------------------
def _xy(point) -> str:
    return f"({point.x:.3f}, {point.y:.3f})"

@describe.register(K.GROUP)
def _(target, data) -> str:
    return f"Group(children={len(getattr(target, 'submobjects', []))})"

@describe.register(K.DOT)
def _(target, data) -> str:
    return f"Dot(at={_xy(data.position)}, radius={data.radius:.3f})"

@describe.register(K.LINE)
def _(target, data) -> str:
    return f"Line({_xy(data.start)} -> {_xy(data.end)})"

@describe.register(K.ARC)
def _(target, data) -> str:
    return f"Arc(radius={data.radius:.3f}, angle={data.angle:.3f})"

@describe.register(K.CIRCLE)
def _(target, data) -> str:
    return f"Circle(radius={data.radius:.3f})"

@describe.register(K.ELLIPSE)
def _(target, data) -> str:
    return f"Ellipse(width={data.width:.3f}, height={data.height:.3f})"

@describe.register(K.SQUARE)
def _(target, data) -> str:
    return f"Square(side={data.side_length:.3f})"

@describe.register(K.RECTANGLE)
def _(target, data) -> str:
    return f"Rectangle(width={data.width:.3f}, height={data.height:.3f})"

@describe.register(K.POLYGON)
def _(target, data) -> str:
    return f"Polygon(vertices={len(data.vertices)})"

@describe.register(K.PATH)
def _(target, data) -> str:
    return f"Path(curves={len(data.points)}, closed={data.closed})"
