"""
Geometric Primitives for payloads and render data.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Union, TYPE_CHECKING
import numpy as np
import math

from mobjectwrapper.config import GEOMETRY_TOLERANCE

if TYPE_CHECKING:
    import numpy.typing as npt

@dataclass
class Vector:
    """
    A vector in 3D space representing direction and magnitude.
    """
    x: float
    y: float
    z: float = 0.0

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vector:
        return Vector(self.x * scalar, self.y * scalar, self.z * scalar)

    def __truediv__(self, scalar: float) -> Vector:
        if scalar == 0.0: raise ZeroDivisionError
        return Vector(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y, -self.z)

    @property
    def magnitude(self) -> float:
        return math.sqrt(self.x**2 + self.y**2 + self.z**2)

    def normalize(self) -> Vector:
        mag = self.magnitude
        if mag == 0.0: return Vector(0.0, 0.0, 0.0)
        return self / mag

    def dot(self, other: Vector) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector) -> Vector:
        return Vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    def rotate_z(self, angle_rad: float) -> Vector:
        """Rotate vector around Z axis."""
        cos_a = math.cos(angle_rad)
        sin_a = math.sin(angle_rad)
        return Vector(
            self.x * cos_a - self.y * sin_a,
            self.x * sin_a + self.y * cos_a,
            self.z
        )

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y, self.z], dtype=float)

    def angle_to(self, other: Vector) -> float:
        """Returns the angle in radians between this vector and another."""
        return math.atan2(self.cross(other).magnitude, self.dot(other))


@dataclass(frozen=True)
class Point:
    """An immutable point in 3D space. Payloads only ever move in the XY plane."""
    x: float
    y: float
    z: float = 0.0

    def __add__(self, other: Vector) -> Point:
        # Point + Vector = Point (Translation)
        if isinstance(other, Vector):
            return Point(self.x + other.x, self.y + other.y, self.z + other.z)
        raise TypeError("Can only add a Vector to a Point.")

    def __sub__(self, other: Union[Vector, Point]) -> Union[Vector, Point]:
        # Point - Point = Vector (Direction)
        if isinstance(other, Point):
            return Vector(self.x - other.x, self.y - other.y, self.z - other.z)
        # Point - Vector = Point (Inverse translation)
        if isinstance(other, Vector):
            return Point(self.x - other.x, self.y - other.y, self.z - other.z)
        raise TypeError("Can only subtract a Vector or Point from a Point.")

    def distance_to(self, other: Point) -> float:
        return math.sqrt((self.x - other.x) ** 2 + (self.y - other.y) ** 2 + (self.z - other.z) ** 2)

    def is_close(self, other: Point, tol: float = GEOMETRY_TOLERANCE) -> bool:
        return self.distance_to(other) <= tol

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y, self.z], dtype=float)

    @staticmethod
    def from_array(arr) -> Point:
        """Accepts any sequence of 2 or 3 coordinates."""
        values = [float(v) for v in arr]
        if len(values) == 2:
            return Point(values[0], values[1])
        if len(values) == 3:
            return Point(values[0], values[1], values[2])
        raise ValueError(f"Expected 2 or 3 coordinates, got {len(values)}.")

    def to_list(self) -> list[float]:
        return [self.x, self.y, self.z]


ORIGIN = Point(0.0, 0.0)
RIGHT = Vector(1.0, 0.0)
UP = Vector(0.0, 1.0)
