"""
Payload Variants
================
Defines the replaceable "current kind and its data" that sits behind a
`Mobject` handle.

Why is this module needed?
--------------------------
A geometric object can change what it *is* when it is transformed: a square
stretched along one axis is a rectangle, a circle stretched is an ellipse, an
arc sheared is no longer an arc at all. The handle the user holds must not
change, so the kind lives here instead, as a tagged, immutable payload:

1. Each payload class carries a `KIND` tag (`MobjectKind`).
2. `transformed()` maps the payload through an affine transformation and
   returns a NEW payload, which may be of a different kind.
3. `canonical()` re-classifies a payload (e.g. an ellipse with equal axes
   is a circle), so the tag always names the most specific kind.

Classes:
    MobjectKind: Enumeration of variant tags.
    MobjectData: Abstract base of all payloads.
    DotData, LineData, ArcData, CircleData, EllipseData, SquareData,
    RectangleData, PolygonData, PathData: The variants.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, fields
from enum import StrEnum
from math import pi, atan2, isclose, sqrt
from typing import Any, ClassVar, Dict, Tuple, TYPE_CHECKING

import numpy as np

from mobjectwrapper.config import GEOMETRY_TOLERANCE, DEFAULT_DOT_RADIUS, OUTLINE_SAMPLES_PER_CURVE
from mobjectwrapper.model.geometry_primitives import Point, ORIGIN
from mobjectwrapper.model.geometry_utils import (
    arc_to_bezier, ellipse_axes, is_similarity, rotation_matrix, sample_bezier,
    transform_array, transform_point,
)

if TYPE_CHECKING:
    import numpy.typing as npt

Bounds = Tuple["npt.NDArray[np.float64]", "npt.NDArray[np.float64]"]


class MobjectKind(StrEnum):
    GROUP = "group"
    DOT = "dot"
    LINE = "line"
    ARC = "arc"
    CIRCLE = "circle"
    ELLIPSE = "ellipse"
    SQUARE = "square"
    RECTANGLE = "rectangle"
    POLYGON = "polygon"
    PATH = "path"


# ------------------------------------------------------------------------------
# Registry
# ------------------------------------------------------------------------------
_REGISTRY: dict[MobjectKind, type[MobjectData]] = {}

def register_data(cls: type[MobjectData]) -> type[MobjectData]:
    """Class decorator to register a payload class by its KIND."""
    kind = getattr(cls, "KIND", None)
    if kind is None:
        raise ValueError(f"{cls.__name__} must define KIND")
    _REGISTRY[kind] = cls
    return cls

def data_type(kind: MobjectKind) -> type[MobjectData]:
    cls = _REGISTRY.get(kind)
    if not cls:
        raise KeyError(f"No payload registered for kind '{kind}'")
    return cls

def make_data(kind: MobjectKind, **values: Any) -> MobjectData:
    """Build the payload of `kind` from keyword fields and classify it."""
    return canonicalize(data_type(kind)(**values))

def data_from_dict(data: Dict[str, Any]) -> MobjectData:
    """Factory method to deserialize into the correct payload class."""
    raw_kind = data.get("kind")
    try:
        kind = MobjectKind(raw_kind)
    except ValueError:
        raise ValueError(f"Unknown payload kind: {raw_kind!r}")
    if kind not in _REGISTRY:
        raise ValueError(f"Kind '{kind}' has no payload.")
    return _REGISTRY[kind].from_dict(data)

def canonicalize(data: MobjectData) -> MobjectData:
    return data.canonical()


# ------------------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------------------
def _as_point(value: Any) -> Point:
    if isinstance(value, Point):
        return value
    return Point.from_array(value)

def _check_non_negative(name: str, value: float) -> float:
    value = float(value)
    if value < 0.0:
        raise ValueError(f"{name} must be non-negative, got {value}.")
    return value

def _bounds_of(points: npt.NDArray[np.float64]) -> Bounds:
    points = np.asarray(points, dtype=float)
    return points.min(axis=0), points.max(axis=0)

def _box_corners(center: Point, width: float, height: float, rotation: float) -> npt.NDArray[np.float64]:
    """Corners of a rotated box in counter-clockwise order, starting bottom-left."""
    local = np.array([
        [-width / 2, -height / 2],
        [width / 2, -height / 2],
        [width / 2, height / 2],
        [-width / 2, height / 2],
    ])
    xy = local @ rotation_matrix(rotation).T + np.array([center.x, center.y])
    return np.column_stack([xy, np.full(4, center.z)])

def _values_close(a: Any, b: Any) -> bool:
    if isinstance(a, Point) and isinstance(b, Point):
        return a.is_close(b)
    if isinstance(a, tuple) and isinstance(b, tuple):
        return len(a) == len(b) and all(_values_close(x, y) for x, y in zip(a, b))
    if isinstance(a, float) and isinstance(b, float):
        return isclose(a, b, rel_tol=0.0, abs_tol=GEOMETRY_TOLERANCE)
    return a == b

def _angles_close(a: float, b: float, period: float = 2 * pi) -> bool:
    d = (a - b) % period
    return min(d, period - d) <= GEOMETRY_TOLERANCE

def _same_point_set(a: npt.NDArray[np.float64], b: npt.NDArray[np.float64]) -> bool:
    """Every point of `a` has a close partner in `b` and vice versa."""
    if a.shape != b.shape:
        return False
    close = np.linalg.norm(a[:, None, :] - b[None, :, :], axis=2) <= GEOMETRY_TOLERANCE
    return bool(close.any(axis=1).all() and close.any(axis=0).all())


# ------------------------------------------------------------------------------
# Base
# ------------------------------------------------------------------------------
@dataclass(frozen=True, eq=False)
class MobjectData(ABC):
    """
    Abstract base class for payloads.
    Payloads are immutable; every change produces a new payload.
    Equality is geometric, within GEOMETRY_TOLERANCE.
    """
    KIND: ClassVar[MobjectKind]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MobjectData):
            return NotImplemented
        return type(self) is type(other) and self._same_geometry(other)

    def __hash__(self) -> int:
        # Tolerant equality cannot be hashed any finer than the kind
        return hash(self.KIND)

    def _same_geometry(self, other: MobjectData) -> bool:
        return all(_values_close(getattr(self, f.name), getattr(other, f.name)) for f in fields(self))

    @property
    def kind(self) -> MobjectKind:
        return self.KIND

    @property
    @abstractmethod
    def center(self) -> Point:
        pass

    @abstractmethod
    def bounds(self) -> Bounds:
        """(min_xyz, max_xyz) of the geometry."""
        pass

    @abstractmethod
    def transformed(
        self,
        linear: npt.NDArray[np.float64],
        offset: npt.NDArray[np.float64]
    ) -> MobjectData:
        """Map through x -> linear @ x + offset. The result may be of another kind."""
        pass

    def canonical(self) -> MobjectData:
        """Return the most specific payload describing the same geometry."""
        return self

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        pass

    @classmethod
    @abstractmethod
    def from_dict(cls, data: Dict[str, Any]) -> MobjectData:
        pass


# ------------------------------------------------------------------------------
# Variants
# ------------------------------------------------------------------------------
@register_data
@dataclass(frozen=True, eq=False)
class DotData(MobjectData):
    KIND: ClassVar[MobjectKind] = MobjectKind.DOT

    position: Point = ORIGIN
    radius: float = DEFAULT_DOT_RADIUS

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", _as_point(self.position))
        object.__setattr__(self, "radius", _check_non_negative("radius", self.radius))

    @property
    def center(self) -> Point:
        return self.position

    def bounds(self) -> Bounds:
        c = self.position.to_array()
        r = np.array([self.radius, self.radius, 0.0])
        return c - r, c + r

    def transformed(self, linear, offset) -> MobjectData:
        # Dots stay round; their radius follows the area scale of the map.
        scale = sqrt(abs(float(np.linalg.det(linear))))
        return DotData(transform_point(self.position, linear, offset), self.radius * scale)

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.KIND.value, "position": self.position.to_list(), "radius": self.radius}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> DotData:
        return cls(position=_as_point(data["position"]), radius=data.get("radius", DEFAULT_DOT_RADIUS))


@register_data
@dataclass(frozen=True, eq=False)
class LineData(MobjectData):
    KIND: ClassVar[MobjectKind] = MobjectKind.LINE

    start: Point
    end: Point

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", _as_point(self.start))
        object.__setattr__(self, "end", _as_point(self.end))

    @property
    def center(self) -> Point:
        return Point.from_array((self.start.to_array() + self.end.to_array()) / 2)

    @property
    def length(self) -> float:
        return self.start.distance_to(self.end)

    def bounds(self) -> Bounds:
        return _bounds_of([self.start.to_array(), self.end.to_array()])

    def transformed(self, linear, offset) -> MobjectData:
        return LineData(
            transform_point(self.start, linear, offset),
            transform_point(self.end, linear, offset)
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.KIND.value, "start": self.start.to_list(), "end": self.end.to_list()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> LineData:
        return cls(start=_as_point(data["start"]), end=_as_point(data["end"]))


@register_data
@dataclass(frozen=True, eq=False)
class ArcData(MobjectData):
    """A circular arc. `angle` is signed: positive runs counter-clockwise."""
    KIND: ClassVar[MobjectKind] = MobjectKind.ARC

    arc_center: Point
    radius: float
    start_angle: float
    angle: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "arc_center", _as_point(self.arc_center))
        object.__setattr__(self, "radius", _check_non_negative("radius", self.radius))
        object.__setattr__(self, "start_angle", float(self.start_angle))
        object.__setattr__(self, "angle", float(self.angle))
        if abs(self.angle) <= GEOMETRY_TOLERANCE:
            raise ValueError("Arc angle must be non-zero.")

    @property
    def center(self) -> Point:
        return self.arc_center

    def point_at(self, theta: float) -> Point:
        c = self.arc_center
        return Point(c.x + self.radius * np.cos(theta), c.y + self.radius * np.sin(theta), c.z)

    @property
    def start_point(self) -> Point:
        return self.point_at(self.start_angle)

    @property
    def end_point(self) -> Point:
        return self.point_at(self.start_angle + self.angle)

    def bounds(self) -> Bounds:
        thetas = self.start_angle + np.linspace(0.0, self.angle, 65)
        c = self.arc_center
        pts = np.column_stack([
            c.x + self.radius * np.cos(thetas),
            c.y + self.radius * np.sin(thetas),
            np.full(len(thetas), c.z),
        ])
        return _bounds_of(pts)

    def _same_geometry(self, other: ArcData) -> bool:
        return (
            self.arc_center.is_close(other.arc_center)
            and _values_close(self.radius, other.radius)
            and _values_close(self.angle, other.angle)
            and _angles_close(self.start_angle, other.start_angle)
        )

    def canonical(self) -> MobjectData:
        if abs(self.angle) >= 2 * pi - GEOMETRY_TOLERANCE:
            return CircleData(self.arc_center, self.radius)
        return self

    def transformed(self, linear, offset) -> MobjectData:
        if not is_similarity(linear):
            curves = arc_to_bezier(self.arc_center, self.radius, self.start_angle, self.angle)
            return PathData(transform_array(curves, linear, offset), closed=False)

        scale = float(np.linalg.svd(linear, compute_uv=False)[0])
        orientation = 1.0 if np.linalg.det(linear) > 0 else -1.0
        new_center = transform_point(self.arc_center, linear, offset)
        new_start = transform_point(self.start_point, linear, offset)
        return ArcData(
            arc_center=new_center,
            radius=self.radius * scale,
            start_angle=atan2(new_start.y - new_center.y, new_start.x - new_center.x),
            angle=self.angle * orientation,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.KIND.value,
            "arc_center": self.arc_center.to_list(),
            "radius": self.radius,
            "start_angle": self.start_angle,
            "angle": self.angle,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ArcData:
        return cls(
            arc_center=_as_point(data["arc_center"]),
            radius=data["radius"],
            start_angle=data.get("start_angle", 0.0),
            angle=data["angle"],
        )


@register_data
@dataclass(frozen=True, eq=False)
class CircleData(MobjectData):
    KIND: ClassVar[MobjectKind] = MobjectKind.CIRCLE

    position: Point = ORIGIN
    radius: float = 1.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", _as_point(self.position))
        object.__setattr__(self, "radius", _check_non_negative("radius", self.radius))

    @property
    def center(self) -> Point:
        return self.position

    def bounds(self) -> Bounds:
        c = self.position.to_array()
        r = np.array([self.radius, self.radius, 0.0])
        return c - r, c + r

    def transformed(self, linear, offset) -> MobjectData:
        a, b, rotation = ellipse_axes(np.asarray(linear) * self.radius)
        return EllipseData(
            transform_point(self.position, linear, offset), 2 * a, 2 * b, rotation
        ).canonical()

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.KIND.value, "position": self.position.to_list(), "radius": self.radius}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> CircleData:
        return cls(position=_as_point(data["position"]), radius=data["radius"])


@register_data
@dataclass(frozen=True, eq=False)
class EllipseData(MobjectData):
    """An ellipse; `width`/`height` are full axis lengths before `rotation`."""
    KIND: ClassVar[MobjectKind] = MobjectKind.ELLIPSE

    position: Point = ORIGIN
    width: float = 2.0
    height: float = 1.0
    rotation: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", _as_point(self.position))
        object.__setattr__(self, "width", _check_non_negative("width", self.width))
        object.__setattr__(self, "height", _check_non_negative("height", self.height))
        object.__setattr__(self, "rotation", float(self.rotation))

    @property
    def center(self) -> Point:
        return self.position

    def bounds(self) -> Bounds:
        a, b = self.width / 2, self.height / 2
        c, s = np.cos(self.rotation), np.sin(self.rotation)
        half = np.array([sqrt((a * c) ** 2 + (b * s) ** 2), sqrt((a * s) ** 2 + (b * c) ** 2), 0.0])
        center = self.position.to_array()
        return center - half, center + half

    def _same_geometry(self, other: EllipseData) -> bool:
        return (
            self.position.is_close(other.position)
            and _values_close(self.width, other.width)
            and _values_close(self.height, other.height)
            and _angles_close(self.rotation, other.rotation, period=pi)
        )

    def canonical(self) -> MobjectData:
        if abs(self.width - self.height) <= GEOMETRY_TOLERANCE:
            return CircleData(self.position, self.width / 2)
        return self

    def transformed(self, linear, offset) -> MobjectData:
        shape = np.asarray(linear) @ rotation_matrix(self.rotation) @ np.diag([self.width / 2, self.height / 2])
        a, b, rotation = ellipse_axes(shape)
        return EllipseData(
            transform_point(self.position, linear, offset), 2 * a, 2 * b, rotation
        ).canonical()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.KIND.value,
            "position": self.position.to_list(),
            "width": self.width,
            "height": self.height,
            "rotation": self.rotation,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> EllipseData:
        return cls(
            position=_as_point(data["position"]),
            width=data["width"],
            height=data["height"],
            rotation=data.get("rotation", 0.0),
        )


@register_data
@dataclass(frozen=True, eq=False)
class SquareData(MobjectData):
    KIND: ClassVar[MobjectKind] = MobjectKind.SQUARE

    position: Point = ORIGIN
    side_length: float = 2.0
    rotation: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", _as_point(self.position))
        object.__setattr__(self, "side_length", _check_non_negative("side_length", self.side_length))
        object.__setattr__(self, "rotation", float(self.rotation))

    @property
    def center(self) -> Point:
        return self.position

    def corners(self) -> npt.NDArray[np.float64]:
        return _box_corners(self.position, self.side_length, self.side_length, self.rotation)

    def _same_geometry(self, other: SquareData) -> bool:
        return _same_point_set(self.corners(), other.corners())

    def bounds(self) -> Bounds:
        return _bounds_of(self.corners())

    def transformed(self, linear, offset) -> MobjectData:
        return PolygonData(tuple(transform_array(self.corners(), linear, offset))).canonical()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.KIND.value,
            "position": self.position.to_list(),
            "side_length": self.side_length,
            "rotation": self.rotation,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> SquareData:
        return cls(
            position=_as_point(data["position"]),
            side_length=data["side_length"],
            rotation=data.get("rotation", 0.0),
        )


@register_data
@dataclass(frozen=True, eq=False)
class RectangleData(MobjectData):
    KIND: ClassVar[MobjectKind] = MobjectKind.RECTANGLE

    position: Point = ORIGIN
    width: float = 4.0
    height: float = 2.0
    rotation: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", _as_point(self.position))
        object.__setattr__(self, "width", _check_non_negative("width", self.width))
        object.__setattr__(self, "height", _check_non_negative("height", self.height))
        object.__setattr__(self, "rotation", float(self.rotation))

    @property
    def center(self) -> Point:
        return self.position

    def corners(self) -> npt.NDArray[np.float64]:
        return _box_corners(self.position, self.width, self.height, self.rotation)

    def _same_geometry(self, other: RectangleData) -> bool:
        return _same_point_set(self.corners(), other.corners())

    def bounds(self) -> Bounds:
        return _bounds_of(self.corners())

    def canonical(self) -> MobjectData:
        if abs(self.width - self.height) <= GEOMETRY_TOLERANCE:
            return SquareData(self.position, self.width, self.rotation)
        return self

    def transformed(self, linear, offset) -> MobjectData:
        return PolygonData(tuple(transform_array(self.corners(), linear, offset))).canonical()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.KIND.value,
            "position": self.position.to_list(),
            "width": self.width,
            "height": self.height,
            "rotation": self.rotation,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> RectangleData:
        return cls(
            position=_as_point(data["position"]),
            width=data["width"],
            height=data["height"],
            rotation=data.get("rotation", 0.0),
        )


@register_data
@dataclass(frozen=True, eq=False)
class PolygonData(MobjectData):
    """A closed polygon given by its vertices in drawing order."""
    KIND: ClassVar[MobjectKind] = MobjectKind.POLYGON

    vertices: Tuple[Point, ...]

    def __post_init__(self) -> None:
        vertices = tuple(_as_point(v) for v in self.vertices)
        if len(vertices) < 3:
            raise ValueError(f"A polygon needs at least 3 vertices, got {len(vertices)}.")
        object.__setattr__(self, "vertices", vertices)

    def as_array(self) -> npt.NDArray[np.float64]:
        return np.array([v.to_array() for v in self.vertices])

    @property
    def center(self) -> Point:
        return Point.from_array(self.as_array().mean(axis=0))

    def bounds(self) -> Bounds:
        return _bounds_of(self.as_array())

    def canonical(self) -> MobjectData:
        if len(self.vertices) != 4:
            return self

        pts = self.as_array()
        edges = np.roll(pts, -1, axis=0) - pts
        lengths = np.linalg.norm(edges, axis=1)
        if np.any(lengths <= GEOMETRY_TOLERANCE):
            return self

        for i in range(4):
            following = edges[(i + 1) % 4]
            if abs(np.dot(edges[i], following)) > GEOMETRY_TOLERANCE * lengths[i] * lengths[(i + 1) % 4]:
                return self

        rectangle = RectangleData(
            position=self.center,
            width=float(lengths[0]),
            height=float(lengths[1]),
            rotation=atan2(edges[0][1], edges[0][0]),
        )
        return rectangle.canonical()

    def transformed(self, linear, offset) -> MobjectData:
        return PolygonData(tuple(transform_array(self.as_array(), linear, offset))).canonical()

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.KIND.value, "vertices": [v.to_list() for v in self.vertices]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> PolygonData:
        return cls(vertices=tuple(_as_point(v) for v in data["vertices"]))


@register_data
@dataclass(frozen=True, eq=False)
class PathData(MobjectData):
    """
    A general path of cubic beziers, shape (n_curves, 4, 3).
    The fallback kind for geometry no specific variant can describe.
    """
    KIND: ClassVar[MobjectKind] = MobjectKind.PATH

    points: npt.NDArray[np.float64] = field(repr=False)
    closed: bool = False

    def __post_init__(self) -> None:
        arr = np.array(self.points, dtype=float)
        if arr.ndim != 3 or arr.shape[1:] != (4, 3) or len(arr) == 0:
            raise ValueError(f"Path points must have shape (n, 4, 3), got {arr.shape}.")
        arr.flags.writeable = False
        object.__setattr__(self, "points", arr)
        object.__setattr__(self, "closed", bool(self.closed))

    def _same_geometry(self, other: PathData) -> bool:
        return (
            self.closed == other.closed
            and self.points.shape == other.points.shape
            and np.allclose(self.points, other.points, atol=GEOMETRY_TOLERANCE)
        )

    def __repr__(self) -> str:
        return f"PathData(n_curves={len(self.points)}, closed={self.closed})"

    def outline(self, samples_per_curve: int = OUTLINE_SAMPLES_PER_CURVE) -> npt.NDArray[np.float64]:
        return sample_bezier(self.points, samples_per_curve)

    @property
    def center(self) -> Point:
        low, high = self.bounds()
        return Point.from_array((low + high) / 2)

    def bounds(self) -> Bounds:
        return _bounds_of(self.outline())

    def transformed(self, linear, offset) -> MobjectData:
        return PathData(transform_array(self.points, linear, offset), closed=self.closed)

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.KIND.value, "points": self.points.tolist(), "closed": self.closed}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> PathData:
        return cls(points=np.array(data["points"], dtype=float), closed=data.get("closed", False))
