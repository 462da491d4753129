from __future__ import annotations

from typing import Iterator, List, Optional

from pygame.math import Vector3


class Object3D:
    """Scene-graph node: transform, opacity and an optional mesh to draw.

    Rotation is Euler XYZ in radians. Children inherit the parent's transform
    when the renderer walks the tree.
    """

    def __init__(self, name: str = "", position=None, rotation=None, scale=None, mesh=None):
        self.name = name
        self.position = Vector3(position) if position is not None else Vector3(0, 0, 0)
        self.rotation = Vector3(rotation) if rotation is not None else Vector3(0, 0, 0)
        self.scale = Vector3(scale) if scale is not None else Vector3(1, 1, 1)
        self.opacity = 1.0
        self.visible = True
        self.mesh = mesh
        self.parent: Optional[Object3D] = None
        self.children: List[Object3D] = []

    def __repr__(self):
        return f"Object3D({self.name!r}, pos={tuple(self.position)})"

    def add(self, *children: "Object3D") -> "Object3D":
        for child in children:
            if child.parent is not None:
                child.parent.remove(child)
            child.parent = self
            self.children.append(child)
        return self

    def remove(self, child: "Object3D") -> None:
        if child in self.children:
            self.children.remove(child)
            child.parent = None

    def traverse(self) -> Iterator["Object3D"]:
        yield self
        for child in self.children:
            yield from child.traverse()

    def world_position(self) -> Vector3:
        """Position with parent translations applied (parent rotation ignored)."""
        pos = Vector3(self.position)
        node = self.parent
        while node is not None:
            pos += node.position
            node = node.parent
        return pos
