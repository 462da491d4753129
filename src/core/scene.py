from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

import pygame

from binding.color import to_color
from core.object3d import Object3D

logger = logging.getLogger(__name__)


@dataclass
class Fog:
    color: pygame.Color = field(default_factory=lambda: pygame.Color(255, 255, 255))
    near: float = 1.0
    far: float = 1000.0

    def __post_init__(self):
        self.color = to_color(self.color)


@dataclass
class DirectionalLight:
    color: pygame.Color = field(default_factory=lambda: pygame.Color(255, 255, 255))
    intensity: float = 1.0
    position: Tuple[float, float, float] = (0.0, 1.0, 0.0)
    # Angle around the y axis in radians; edited in degrees on the panel
    yaw: float = 0.0

    def __post_init__(self):
        self.color = to_color(self.color)


@dataclass
class Scene:
    root: Object3D = field(default_factory=lambda: Object3D("scene"))
    background: pygame.Color = field(default_factory=lambda: pygame.Color(0, 0, 0))
    fog: Optional[Fog] = None
    lights: List[DirectionalLight] = field(default_factory=list)

    def __post_init__(self):
        self.background = to_color(self.background)

    def add(self, *nodes: Object3D) -> None:
        self.root.add(*nodes)

    def remove(self, node: Object3D) -> None:
        self.root.remove(node)


class SceneRegistry:
    """Scene content keyed by the load group that produced it.

    Entries are created from load-group completion callbacks only, so an id
    being present means the whole bundle arrived and is in the scene.
    """

    def __init__(self, scene: Scene) -> None:
        self.scene = scene
        self._entries: Dict[str, List[Object3D]] = {}

    def __contains__(self, group_id: str) -> bool:
        return group_id in self._entries

    def register(self, group_id: str, nodes: Iterable[Object3D]) -> List[Object3D]:
        if group_id in self._entries:
            raise KeyError(f"scene content for '{group_id}' already registered")
        nodes = list(nodes)
        self.scene.add(*nodes)
        self._entries[group_id] = nodes
        logger.debug("Registered %d node(s) for '%s'", len(nodes), group_id)
        return nodes

    def nodes(self, group_id: str) -> List[Object3D]:
        return list(self._entries[group_id])

    def group_ids(self) -> List[str]:
        return list(self._entries)

    def discard(self, group_id: str) -> None:
        for node in self._entries.pop(group_id, []):
            self.scene.remove(node)
