"""Three spinning dice, each shown only once all six face textures loaded.

Every die is its own load group, so one slow or broken texture holds back
that die alone. The dice spin at staggered rates taken from their position
in ``DICE_X``, not from the order their textures happen to arrive in.
"""

from __future__ import annotations

import logging

from animation.entity import AnimatedEntity
from animation.motion import staggered_spin
from camera import PerspectiveCamera
from config import (
    BACKGROUND_COLOR,
    CAMERA_ASPECT,
    CAMERA_FAR,
    CAMERA_FOV,
    CAMERA_NEAR,
    CAMERA_Z,
    FOG_COLOR,
    FOG_FAR,
    FOG_NEAR,
    LIGHT_COLOR,
    LIGHT_INTENSITY,
    LIGHT_POSITION,
    SPIN_BASE_SPEED,
    SPIN_SPEED_INCREMENT,
)
from core.mesh import BoxMesh
from core.object3d import Object3D
from core.scene import DirectionalLight, Fog, Scene
from core.scheduler import FrameScheduler
from loading.load_group import AssetLoader, LoadGroup
from scenes.base import DemoScene
from textures.resourcepath import DICE_FACE_TEXTURE_PATHS

logger = logging.getLogger(__name__)

DICE_X = (0.0, -2.0, 2.0)


def die_group_id(index: int) -> str:
    return f"die-{index}"


class DiceScene(DemoScene):
    title = "Dice"

    def __init__(
        self, progress_sink=None, face_paths=DICE_FACE_TEXTURE_PATHS, fog: bool = False
    ) -> None:
        scene = Scene(
            background=BACKGROUND_COLOR,
            fog=Fog(FOG_COLOR, FOG_NEAR, FOG_FAR) if fog else None,
            lights=[DirectionalLight(LIGHT_COLOR, LIGHT_INTENSITY, LIGHT_POSITION)],
        )
        camera = PerspectiveCamera(
            CAMERA_FOV, CAMERA_ASPECT, CAMERA_NEAR, CAMERA_FAR, position=(0, 0, CAMERA_Z)
        )
        super().__init__(scene, camera, progress_sink)
        self.face_paths = tuple(face_paths)
        self.motion = staggered_spin(SPIN_BASE_SPEED, SPIN_SPEED_INCREMENT)

    def start(self, loader: AssetLoader, scheduler: FrameScheduler) -> None:
        self.scheduler = scheduler
        for index, x in enumerate(DICE_X):
            self.request(
                die_group_id(index),
                loader,
                self.face_paths,
                on_complete=lambda group, i=index, x=x: self._add_die(group, i, x),
            )
        logger.info("Requested %d dice (%d textures each)", len(DICE_X), len(self.face_paths))

    def _add_die(self, group: LoadGroup, index: int, x: float) -> None:
        textures = group.payloads()
        node = Object3D(group.group_id, position=(x, 0, 0), mesh=BoxMesh(textures=textures))
        self.registry.register(group.group_id, [node])
        self.hide_progress()
        self.scheduler.add_entity(
            AnimatedEntity(node, self.motion, index=index), group.group_id
        )
        logger.info("Die %d ready at x=%.1f", index, x)
