"""
Stable mobject handles over replaceable, kind-tagged payloads.

A `Mobject` keeps its identity while transformations swap the payload behind
it, so a square stretched into a rectangle is still the same object, now of
kind RECTANGLE.
"""
from mobjectwrapper.model.kinds import MobjectKind
from mobjectwrapper.model.material import Material, Style
from mobjectwrapper.model.mobject import Mobject
from mobjectwrapper.model.state import SceneState

__all__ = ["Mobject", "MobjectKind", "Material", "Style", "SceneState"]
