"""Absolute per-tick transform values for one scene node."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Optional

from pygame.math import Vector3

from core.object3d import Object3D


@dataclass(frozen=True)
class TransformUpdate:
    """Fields left as None are not touched when applied."""

    x: Optional[float] = None
    y: Optional[float] = None
    z: Optional[float] = None
    rot_x: Optional[float] = None
    rot_y: Optional[float] = None
    rot_z: Optional[float] = None
    scale: Optional[float] = None
    opacity: Optional[float] = None

    def apply(self, node: Object3D) -> None:
        if self.x is not None:
            node.position.x = self.x
        if self.y is not None:
            node.position.y = self.y
        if self.z is not None:
            node.position.z = self.z
        if self.rot_x is not None:
            node.rotation.x = self.rot_x
        if self.rot_y is not None:
            node.rotation.y = self.rot_y
        if self.rot_z is not None:
            node.rotation.z = self.rot_z
        if self.scale is not None:
            node.scale = Vector3(self.scale, self.scale, self.scale)
        if self.opacity is not None:
            node.opacity = self.opacity

    @classmethod
    def capture(cls, node: Object3D) -> "TransformUpdate":
        """Full snapshot of ``node``; applying it restores the node.

        Uniform scale only: the x component stands in for all three.
        """
        return cls(
            x=node.position.x,
            y=node.position.y,
            z=node.position.z,
            rot_x=node.rotation.x,
            rot_y=node.rotation.y,
            rot_z=node.rotation.z,
            scale=node.scale.x,
            opacity=node.opacity,
        )

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))


__all__ = ["TransformUpdate"]
