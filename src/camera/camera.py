import math

import numpy as np
from pygame.math import Vector3

from config import CAMERA_ASPECT, CAMERA_FAR, CAMERA_FOV, CAMERA_NEAR


class PerspectiveCamera:
    """Frustum camera: anything between ``near`` and ``far`` inside ``fov``.

    ``fov``, ``near`` and ``far`` are plain attributes so bindings can edit
    them; call ``update_projection_matrix()`` after an edit.
    """

    def __init__(
        self,
        fov=CAMERA_FOV,
        aspect=CAMERA_ASPECT,
        near=CAMERA_NEAR,
        far=CAMERA_FAR,
        position=None,
        rotation=None,
    ):
        self.fov = float(fov)
        self.aspect = float(aspect)
        self.near = float(near)
        self.far = float(far)
        self.position = Vector3(position) if position is not None else Vector3(0, 0, 0)
        self.rotation = Vector3(rotation) if rotation is not None else Vector3(0, 0, 0)  # pitch (x), yaw (y), roll (z)
        self.projection_matrix = np.eye(4, dtype=np.float64)
        self._R = np.eye(3, dtype=np.float64)
        self.update_projection_matrix()
        self.update_rotation()

    def update_projection_matrix(self):
        """Rebuild the OpenGL-style perspective matrix (column vectors)."""
        f = 1.0 / math.tan(math.radians(self.fov) / 2.0)
        n, fa = self.near, self.far
        depth = n - fa
        self.projection_matrix = np.array(
            [
                [f / self.aspect, 0.0, 0.0, 0.0],
                [0.0, f, 0.0, 0.0],
                [0.0, 0.0, (fa + n) / depth, (2.0 * fa * n) / depth],
                [0.0, 0.0, -1.0, 0.0],
            ],
            dtype=np.float64,
        )
        return self.projection_matrix

    def update_rotation(self):
        """Precompute the world -> camera rotation (yaw then pitch)."""
        cp = math.cos(self.rotation.x)
        sp = math.sin(self.rotation.x)
        cy = math.cos(self.rotation.y)
        sy = math.sin(self.rotation.y)
        Ry = np.array([[cy, 0.0, -sy], [0.0, 1.0, 0.0], [sy, 0.0, cy]], dtype=np.float64)
        Rx = np.array([[1.0, 0.0, 0.0], [0.0, cp, -sp], [0.0, sp, cp]], dtype=np.float64)
        self._R = Rx @ Ry
        return self._R

    def view_matrix(self):
        """4x4 world -> camera matrix (rotation after translation)."""
        view = np.eye(4, dtype=np.float64)
        view[:3, :3] = self._R
        view[:3, 3] = -(self._R @ np.array(tuple(self.position), dtype=np.float64))
        return view

    def in_depth_range(self, distance):
        return self.near <= distance <= self.far
