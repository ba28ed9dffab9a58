"""
Render Data Containers
======================
Plain data produced by the renderers. Nothing here draws anything; these
arrays are what a drawing backend would consume.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, TYPE_CHECKING

import numpy as np

from mobjectwrapper.model.kinds import MobjectKind
from mobjectwrapper.model.material import Material, Style

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass(kw_only=True)
class RenderData:
    MATERIAL: ClassVar[Material]

    uid: str
    name: str
    kind: MobjectKind
    style: Style

    @property
    def material(self) -> Material:
        return self.MATERIAL


@dataclass(kw_only=True)
class VectorizedData(RenderData):
    """Cubic bezier curves, shape (n_curves, 4, 3)."""
    MATERIAL: ClassVar[Material] = Material.VECTORIZED

    curves: npt.NDArray[np.float64]
    closed: bool = False

    @property
    def n_curves(self) -> int:
        return len(self.curves)


@dataclass(kw_only=True)
class PrimitiveData(RenderData):
    """
    A vertex mesh.
    `triangles` (k, 3) and `lines` (j, 2) index into `vertices` (m, 3).
    """
    MATERIAL: ClassVar[Material] = Material.PRIMITIVE

    vertices: npt.NDArray[np.float64]
    triangles: npt.NDArray[np.int64] = field(default_factory=lambda: np.zeros((0, 3), dtype=np.int64))
    lines: npt.NDArray[np.int64] = field(default_factory=lambda: np.zeros((0, 2), dtype=np.int64))

    def triangle_areas(self) -> npt.NDArray[np.float64]:
        if len(self.triangles) == 0:
            return np.zeros(0)
        a, b, c = (self.vertices[self.triangles[:, i], :2] for i in range(3))
        ab, ac = b - a, c - a
        return 0.5 * np.abs(ab[:, 0] * ac[:, 1] - ab[:, 1] * ac[:, 0])
