from __future__ import annotations

from typing import Callable, Optional
import logging

from mobjectwrapper.model.kinds import MobjectKind
from mobjectwrapper.model.material import Material
from mobjectwrapper.model.mobject import Mobject
from mobjectwrapper.rendering.data import RenderData

logger = logging.getLogger(__name__)

Renderer = Callable[[Mobject], RenderData]

# (material, kind); kind None is the material's fallback
_REGISTRY: dict[tuple[Material, Optional[MobjectKind]], Renderer] = {}

def register_renderer(material: Material, *kinds: MobjectKind) -> Callable[[Renderer], Renderer]:
    """
    Decorator to register a renderer for a material and one or more kinds.
    Without kinds the renderer becomes the material's fallback.
    """
    material = Material(material)

    def decorator(func: Renderer) -> Renderer:
        for kind in (kinds or (None,)):
            _REGISTRY[(material, MobjectKind(kind) if kind is not None else None)] = func
        return func
    return decorator

def get_renderer(material: Material, kind: MobjectKind) -> Renderer:
    func = _REGISTRY.get((material, kind)) or _REGISTRY.get((material, None))
    if not func:
        raise KeyError(f"No renderer registered for material '{material}' and kind '{kind}'")
    return func

def list_keys() -> list[tuple[Material, Optional[MobjectKind]]]:
    return list(_REGISTRY.keys())

def render(mobject: Mobject) -> list[RenderData]:
    """Render every family member that has a payload, in family order."""
    items = []
    for mob in mobject.family():
        if mob.data is None:
            continue
        renderer = get_renderer(mob.material, mob.kind)
        items.append(renderer(mob))
    logger.debug(f"Rendered {len(items)} item(s) for '{mobject.name}'.")
    return items
