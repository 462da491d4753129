"""Mesh geometry for the fixed-function renderer.

Meshes here only hold numpy vertex data plus material info (texture IDs,
colour). Nothing in this module talks to OpenGL; ``core.renderer`` does the
drawing.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np

# Face order matches the six-texture material list: +x, -x, +y, -y, +z, -z
_BOX_FACES = (
    ((1, 0, 0), ((1, -1, 1), (1, -1, -1), (1, 1, -1), (1, 1, 1))),
    ((-1, 0, 0), ((-1, -1, -1), (-1, -1, 1), (-1, 1, 1), (-1, 1, -1))),
    ((0, 1, 0), ((-1, 1, 1), (1, 1, 1), (1, 1, -1), (-1, 1, -1))),
    ((0, -1, 0), ((-1, -1, -1), (1, -1, -1), (1, -1, 1), (-1, -1, 1))),
    ((0, 0, 1), ((-1, -1, 1), (1, -1, 1), (1, 1, 1), (-1, 1, 1))),
    ((0, 0, -1), ((1, -1, -1), (-1, -1, -1), (-1, 1, -1), (1, 1, -1))),
)
_QUAD_UVS = ((0, 0), (1, 0), (1, 1), (0, 1))


@dataclass
class BoxMesh:
    width: float = 1.0
    height: float = 1.0
    depth: float = 1.0
    # One texture for every face, or six for per-face materials
    textures: List[int] = field(default_factory=list)
    color: Sequence[float] = (1.0, 1.0, 1.0)

    def __post_init__(self):
        if len(self.textures) not in (0, 1, 6):
            raise ValueError(f"box needs 0, 1 or 6 textures, got {len(self.textures)}")
        half = np.array([self.width, self.height, self.depth], dtype=np.float32) * 0.5
        self.vertices = np.array(
            [corner for _, quad in _BOX_FACES for corner in quad], dtype=np.float32
        ) * half
        self.normals = np.repeat(
            np.array([n for n, _ in _BOX_FACES], dtype=np.float32), 4, axis=0
        )
        self.uvs = np.tile(np.array(_QUAD_UVS, dtype=np.float32), (6, 1))

    def face_texture(self, face: int) -> Optional[int]:
        if not self.textures:
            return None
        return self.textures[face] if len(self.textures) == 6 else self.textures[0]


@dataclass
class PlaneMesh:
    """Horizontal quad on the XZ plane, facing +y."""

    width: float = 1.0
    depth: float = 1.0
    texture: Optional[int] = None
    color: Sequence[float] = (1.0, 1.0, 1.0)
    repeat: float = 1.0

    def __post_init__(self):
        hw, hd = self.width * 0.5, self.depth * 0.5
        self.vertices = np.array(
            [(-hw, 0, hd), (hw, 0, hd), (hw, 0, -hd), (-hw, 0, -hd)], dtype=np.float32
        )
        self.normals = np.tile(np.array([0, 1, 0], dtype=np.float32), (4, 1))
        self.uvs = np.array(_QUAD_UVS, dtype=np.float32) * self.repeat


@dataclass
class SphereMesh:
    radius: float = 1.0
    slices: int = 32
    stacks: int = 16
    color: Sequence[float] = (1.0, 1.0, 1.0)
    texture: Optional[int] = None
