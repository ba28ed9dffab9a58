"""
Scene State (Data Model)
========================
This module defines the central data structure for a scene.

Why is this file needed?
------------------------
1. State Management: It holds the top-level mobjects of a scene in one place.
2. Persistence: This object is what gets serialized when saving a scene.
3. Lookup: Mobjects can be found by uid or name anywhere in the tree, which
   keeps working after their kind has changed because lookups go through
   the stable handles.

Classes:
    SceneState: The main container class.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Iterator, Optional

from mobjectwrapper.model.mobject import Mobject

logger = logging.getLogger(__name__)


@dataclass
class SceneState:
    """
    Holds the entire state of an open scene.
    """
    scene_name: str = "Untitled Scene"
    filepath: Optional[str] = None

    mobjects: list[Mobject] = field(default_factory=list)

    def add(self, *mobjects: Mobject) -> None:
        """Add top-level mobjects. A uid may appear only once in the whole scene."""
        known = {m.uid for m in self.all_mobjects()}
        for mob in mobjects:
            new_uids = [m.uid for m in mob.family()]
            duplicates = known.intersection(new_uids)
            if duplicates:
                raise ValueError(f"Mobject(s) already in scene: {sorted(duplicates)}")
            known.update(new_uids)
            self.mobjects.append(mob)
            logger.debug(f"Added '{mob.name}' ({mob.kind}) to scene '{self.scene_name}'.")

    def remove(self, *mobjects: Mobject) -> None:
        self.mobjects = [m for m in self.mobjects if not any(m is r for r in mobjects)]

    def all_mobjects(self) -> Iterator[Mobject]:
        for mob in self.mobjects:
            yield from mob.family()

    def get(self, uid: str) -> Mobject:
        for mob in self.all_mobjects():
            if mob.uid == uid:
                return mob
        raise KeyError(f"No mobject with uid '{uid}' in scene.")

    def find(self, name: str) -> list[Mobject]:
        return [m for m in self.all_mobjects() if m.name == name]

    def reset(self) -> None:
        """Clear all data for a new scene"""
        self.scene_name = "Untitled Scene"
        self.filepath = None
        self.mobjects = []
        logger.info("Scene state has been reset.")
