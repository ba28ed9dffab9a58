"""
Materials and Styles
====================
The material decides HOW a payload is turned into renderable data, the
style decides how that data is coloured. Neither knows anything about the
payload's kind.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import StrEnum
from typing import Any, Dict, Optional
import re

from mobjectwrapper.config import DEFAULT_STROKE_COLOR, DEFAULT_STROKE_WIDTH

_HEX_COLOR = re.compile(r"^#[0-9A-Fa-f]{6}$")


class Material(StrEnum):
    VECTORIZED = "vectorized"  # cubic bezier curves
    PRIMITIVE = "primitive"  # vertex / triangle mesh


def _check_color(name: str, value: Optional[str]) -> None:
    if value is not None and not _HEX_COLOR.match(value):
        raise ValueError(f"{name} must be a '#RRGGBB' string, got {value!r}.")


@dataclass
class Style:
    stroke_color: str = DEFAULT_STROKE_COLOR
    stroke_width: float = DEFAULT_STROKE_WIDTH
    fill_color: Optional[str] = None
    fill_opacity: float = 0.0

    def __post_init__(self) -> None:
        _check_color("stroke_color", self.stroke_color)
        _check_color("fill_color", self.fill_color)
        if self.stroke_width < 0.0:
            raise ValueError(f"stroke_width must be non-negative, got {self.stroke_width}.")
        if not 0.0 <= self.fill_opacity <= 1.0:
            raise ValueError(f"fill_opacity must be within [0, 1], got {self.fill_opacity}.")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> Style:
        return Style(**data)
