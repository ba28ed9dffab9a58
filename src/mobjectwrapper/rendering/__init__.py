"""
The RENDERING layer derives renderable data from payloads.
It is keyed by (Material, MobjectKind); payloads and handles know nothing
about it. Importing this package registers the built-in renderers.
"""
from mobjectwrapper.rendering.data import RenderData, VectorizedData, PrimitiveData
from mobjectwrapper.rendering.registry import register_renderer, get_renderer, list_keys, render
from mobjectwrapper.rendering import vectorized, primitive  # noqa: F401  (registers renderers)

__all__ = [
    "RenderData",
    "VectorizedData",
    "PrimitiveData",
    "register_renderer",
    "get_renderer",
    "list_keys",
    "render",
]
