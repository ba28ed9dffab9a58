"""
Dispatch over the variant tag.

`functools.singledispatch` picks an implementation from the *type* of its
argument. A `Mobject` handle never changes type, so behaviour specialised by
kind has to be selected from the tag of the payload currently behind it.
"""
from __future__ import annotations

from typing import Any, Callable, Optional, TYPE_CHECKING
import logging

from mobjectwrapper.model.kinds import MobjectKind, MobjectData

if TYPE_CHECKING:
    from mobjectwrapper.model.mobject import Mobject

logger = logging.getLogger(__name__)


def kind_of(target: Any) -> MobjectKind:
    """The current tag of a handle or a payload."""
    if isinstance(target, MobjectData):
        return target.kind
    kind = getattr(target, "kind", None)
    if isinstance(kind, MobjectKind):
        return kind
    raise TypeError(f"Cannot determine the kind of {type(target).__name__}.")


class KindDispatcher:
    """
    A generic function keyed by `MobjectKind`.

    Usage:
        area = KindDispatcher("area")

        @area.register(MobjectKind.CIRCLE)
        def _(target, data):
            return math.pi * data.radius ** 2

    Implementations receive the original target (handle or payload) and the
    payload resolved at call time (None for groups).
    """
    def __init__(self, name: str, default: Optional[Callable[..., Any]] = None) -> None:
        self.name = name
        self.default = default
        self._registry: dict[MobjectKind, Callable[..., Any]] = {}

    def register(self, *kinds: MobjectKind) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        if not kinds:
            raise ValueError(f"{self.name}: register() needs at least one kind")

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            for kind in kinds:
                self._registry[MobjectKind(kind)] = func
            return func
        return decorator

    def registered_kinds(self) -> list[MobjectKind]:
        return list(self._registry.keys())

    def resolve(self, kind: MobjectKind) -> Callable[..., Any]:
        func = self._registry.get(kind, self.default)
        if func is None:
            raise NotImplementedError(f"'{self.name}' is not implemented for kind '{kind}'")
        return func

    def __call__(self, target: Mobject | MobjectData, *args: Any, **kwargs: Any) -> Any:
        kind = kind_of(target)
        data = target if isinstance(target, MobjectData) else getattr(target, "data", None)
        logger.debug(f"Dispatching '{self.name}' for kind '{kind}'")
        return self.resolve(kind)(target, data, *args, **kwargs)

    def __repr__(self) -> str:
        return f"KindDispatcher({self.name!r}, kinds={[str(k) for k in self._registry]})"
