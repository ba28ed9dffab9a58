"""
Mobject Handle
==============
This module defines the object users hold on to.

Why is this file needed?
------------------------
1. Stable identity: A `Mobject` is created once and never replaced. Scenes,
   groups and user code may keep references to it for as long as they like.
2. Replaceable kind: What the mobject currently *is* (square, rectangle,
   ellipse...) lives in its payload (`MobjectData`). Transformations build a
   new payload and swap it in; the handle, its uid and every reference to it
   stay valid.
3. Family: A mobject may own submobjects. Transformations are applied to the
   whole family at once.

Classes:
    Mobject: The stable handle.
"""
from __future__ import annotations

import copy
import logging
import uuid
from typing import Any, Callable, Dict, Iterator, Optional, Sequence, Union

import numpy as np

from mobjectwrapper.config import GEOMETRY_TOLERANCE, DEFAULT_DOT_RADIUS
from mobjectwrapper.model.geometry_primitives import Point, Vector, ORIGIN
from mobjectwrapper.model.geometry_utils import rotation_matrix
from mobjectwrapper.model.kinds import (
    MobjectKind, MobjectData, canonicalize, make_data, data_from_dict,
    DotData, LineData, ArcData, CircleData, EllipseData, SquareData,
    RectangleData, PolygonData, PathData,
)
from mobjectwrapper.model.material import Material, Style

logger = logging.getLogger(__name__)

KindListener = Callable[["Mobject", MobjectKind, MobjectKind], None]
PointLike = Union[Point, Vector, Sequence[float], np.ndarray]


def _as_xy(value: PointLike) -> np.ndarray:
    if isinstance(value, (Point, Vector)):
        return np.array([value.x, value.y], dtype=float)
    arr = np.asarray(value, dtype=float).ravel()
    if arr.size not in (2, 3):
        raise ValueError(f"Expected 2 or 3 coordinates, got {arr.size}.")
    return arr[:2]


class Mobject:
    """
    A stable handle over a replaceable payload.

    The handle's Python identity and `uid` never change. `kind` always
    reflects the payload currently behind the handle, so code that needs
    kind-specific behaviour should dispatch on `kind` (see
    `mobjectwrapper.model.dispatch`) rather than on `type(mobject)`.
    """
    def __init__(
        self,
        data: Optional[MobjectData] = None,
        *,
        name: Optional[str] = None,
        material: Material = Material.VECTORIZED,
        style: Optional[Style] = None,
        submobjects: Sequence[Mobject] = (),
    ) -> None:
        self.uid: str = uuid.uuid4().hex
        self._data: Optional[MobjectData] = canonicalize(data) if data is not None else None
        self.name: str = name if name is not None else self.kind.value.capitalize()
        self.material: Material = Material(material)
        self.style: Style = style if style is not None else Style()
        self._submobjects: list[Mobject] = []
        self._listeners: list[KindListener] = []
        self.add(*submobjects)

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------
    @classmethod
    def dot(cls, position: PointLike = ORIGIN, radius: float = DEFAULT_DOT_RADIUS, **kwargs: Any) -> Mobject:
        return cls(DotData(Point.from_array(_as_xy(position)), radius), **kwargs)

    @classmethod
    def line(cls, start: PointLike, end: PointLike, **kwargs: Any) -> Mobject:
        return cls(LineData(Point.from_array(_as_xy(start)), Point.from_array(_as_xy(end))), **kwargs)

    @classmethod
    def arc(
        cls,
        radius: float = 1.0,
        start_angle: float = 0.0,
        angle: float = np.pi / 2,
        arc_center: PointLike = ORIGIN,
        **kwargs: Any
    ) -> Mobject:
        return cls(ArcData(Point.from_array(_as_xy(arc_center)), radius, start_angle, angle), **kwargs)

    @classmethod
    def circle(cls, radius: float = 1.0, position: PointLike = ORIGIN, **kwargs: Any) -> Mobject:
        return cls(CircleData(Point.from_array(_as_xy(position)), radius), **kwargs)

    @classmethod
    def ellipse(
        cls,
        width: float = 2.0,
        height: float = 1.0,
        position: PointLike = ORIGIN,
        rotation: float = 0.0,
        **kwargs: Any
    ) -> Mobject:
        return cls(EllipseData(Point.from_array(_as_xy(position)), width, height, rotation), **kwargs)

    @classmethod
    def square(
        cls,
        side_length: float = 2.0,
        position: PointLike = ORIGIN,
        rotation: float = 0.0,
        **kwargs: Any
    ) -> Mobject:
        return cls(SquareData(Point.from_array(_as_xy(position)), side_length, rotation), **kwargs)

    @classmethod
    def rectangle(
        cls,
        width: float = 4.0,
        height: float = 2.0,
        position: PointLike = ORIGIN,
        rotation: float = 0.0,
        **kwargs: Any
    ) -> Mobject:
        return cls(RectangleData(Point.from_array(_as_xy(position)), width, height, rotation), **kwargs)

    @classmethod
    def polygon(cls, *vertices: PointLike, **kwargs: Any) -> Mobject:
        return cls(PolygonData(tuple(Point.from_array(_as_xy(v)) for v in vertices)), **kwargs)

    @classmethod
    def path(cls, points: np.ndarray, closed: bool = False, **kwargs: Any) -> Mobject:
        return cls(PathData(points, closed), **kwargs)

    # ------------------------------------------------------------------
    # Payload
    # ------------------------------------------------------------------
    @property
    def data(self) -> Optional[MobjectData]:
        return self._data

    @property
    def kind(self) -> MobjectKind:
        return self._data.kind if self._data is not None else MobjectKind.GROUP

    def is_kind(self, *kinds: MobjectKind) -> bool:
        return self.kind in kinds

    def set_data(self, data: Optional[MobjectData]) -> Mobject:
        """Swap the payload behind this handle. Listeners are told if the kind changed."""
        old_kind = self.kind
        self._data = canonicalize(data) if data is not None else None
        new_kind = self.kind
        if old_kind != new_kind:
            logger.debug(f"Mobject '{self.name}' ({self.uid[:8]}) changed kind: {old_kind} -> {new_kind}")
            for listener in list(self._listeners):
                listener(self, old_kind, new_kind)
        return self

    def morph(self, kind: MobjectKind, **fields: Any) -> Mobject:
        """Select a new variant and populate its fields, keeping this handle."""
        return self.set_data(make_data(kind, **fields))

    def become(self, other: Mobject) -> Mobject:
        """Take over another mobject's payload, material, style and (copied) children."""
        if other is self:
            return self
        self.material = other.material
        self.style = copy.deepcopy(other.style)
        self._submobjects = [sub.copy() for sub in other._submobjects]
        return self.set_data(other.data)

    def on_kind_change(self, callback: KindListener) -> Callable[[], None]:
        """Register `callback(mobject, old_kind, new_kind)`; returns an unsubscribe function."""
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)
        return unsubscribe

    # ------------------------------------------------------------------
    # Family
    # ------------------------------------------------------------------
    @property
    def submobjects(self) -> list[Mobject]:
        return list(self._submobjects)

    def add(self, *mobjects: Mobject) -> Mobject:
        for mob in mobjects:
            if not isinstance(mob, Mobject):
                raise TypeError(f"Only Mobjects can be added, got {type(mob).__name__}.")
            if mob is self or any(m is self for m in mob.family()):
                raise ValueError(f"Adding '{mob.name}' to '{self.name}' would create a cycle.")
            if not any(m is mob for m in self._submobjects):
                self._submobjects.append(mob)
        return self

    def remove(self, *mobjects: Mobject) -> Mobject:
        self._submobjects = [m for m in self._submobjects if not any(m is r for r in mobjects)]
        return self

    def family(self) -> list[Mobject]:
        """Self followed by all descendants, depth first."""
        result = [self]
        for sub in self._submobjects:
            result.extend(sub.family())
        return result

    def __len__(self) -> int:
        return len(self._submobjects)

    def __iter__(self) -> Iterator[Mobject]:
        return iter(list(self._submobjects))

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    def bounding_box(self) -> tuple[np.ndarray, np.ndarray]:
        boxes = [m.data.bounds() for m in self.family() if m.data is not None]
        if not boxes:
            raise ValueError(f"Mobject '{self.name}' has no geometry.")
        low = np.min([b[0] for b in boxes], axis=0)
        high = np.max([b[1] for b in boxes], axis=0)
        return low, high

    def get_center(self) -> Point:
        low, high = self.bounding_box()
        return Point.from_array((low + high) / 2)

    # ------------------------------------------------------------------
    # Transformations
    # ------------------------------------------------------------------
    def _apply_affine(self, linear: np.ndarray, offset: np.ndarray) -> Mobject:
        for mob in self.family():
            if mob.data is not None:
                mob.set_data(mob.data.transformed(linear, offset))
        return self

    def apply_matrix(self, matrix: Any, about_point: Optional[PointLike] = None) -> Mobject:
        """
        Apply a linear map about a fixed point to the whole family.

        Args:
            matrix: A 2x2 matrix, or a 3x3 matrix whose upper-left block is used.
            about_point: The fixed point. Defaults to the family center.
        """
        linear = np.asarray(matrix, dtype=float)
        if linear.shape == (3, 3):
            linear = linear[:2, :2]
        elif linear.shape != (2, 2):
            raise ValueError(f"Expected a 2x2 or 3x3 matrix, got shape {linear.shape}.")
        # Rank test relative to the largest singular value
        singular_values = np.linalg.svd(linear, compute_uv=False)
        if singular_values[1] <= GEOMETRY_TOLERANCE * singular_values[0]:
            raise ValueError("Cannot apply a singular matrix.")

        about = _as_xy(about_point) if about_point is not None else _as_xy(self.get_center())
        return self._apply_affine(linear, about - linear @ about)

    def shift(self, vector: PointLike) -> Mobject:
        return self._apply_affine(np.eye(2), _as_xy(vector))

    def move_to(self, point: PointLike) -> Mobject:
        return self.shift(_as_xy(point) - _as_xy(self.get_center()))

    def scale(self, factor: float, about_point: Optional[PointLike] = None) -> Mobject:
        return self.apply_matrix(np.eye(2) * factor, about_point)

    def stretch(self, factor: float, dim: int, about_point: Optional[PointLike] = None) -> Mobject:
        if dim not in (0, 1):
            raise ValueError(f"dim must be 0 (x) or 1 (y), got {dim}.")
        diag = [1.0, 1.0]
        diag[dim] = factor
        return self.apply_matrix(np.diag(diag), about_point)

    def rotate(self, angle: float, about_point: Optional[PointLike] = None) -> Mobject:
        return self.apply_matrix(rotation_matrix(angle), about_point)

    def flip(self, axis: str = "x", about_point: Optional[PointLike] = None) -> Mobject:
        """Mirror across the horizontal ('x') or vertical ('y') line through `about_point`."""
        match axis:
            case "x":
                return self.apply_matrix(np.diag([1.0, -1.0]), about_point)
            case "y":
                return self.apply_matrix(np.diag([-1.0, 1.0]), about_point)
            case _:
                raise ValueError(f"axis must be 'x' or 'y', got {axis!r}.")

    # ------------------------------------------------------------------
    # Copy & serialization
    # ------------------------------------------------------------------
    def copy(self) -> Mobject:
        """Deep copy with fresh uids. Listeners are not copied."""
        return Mobject(
            self._data,
            name=self.name,
            material=self.material,
            style=copy.deepcopy(self.style),
            submobjects=[sub.copy() for sub in self._submobjects],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "uid": self.uid,
            "name": self.name,
            "material": self.material.value,
            "style": self.style.to_dict(),
            "data": self._data.to_dict() if self._data is not None else None,
            "submobjects": [sub.to_dict() for sub in self._submobjects],
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> Mobject:
        payload = data.get("data")
        mob = Mobject(
            data_from_dict(payload) if payload else None,
            name=data.get("name"),
            material=Material(data.get("material", Material.VECTORIZED)),
            style=Style.from_dict(data["style"]) if "style" in data else None,
            submobjects=[Mobject.from_dict(sub) for sub in data.get("submobjects", [])],
        )
        if "uid" in data:
            mob.uid = data["uid"]
        return mob

    def __repr__(self) -> str:
        return f"<Mobject {self.name!r} kind={self.kind} uid={self.uid[:8]}>"
