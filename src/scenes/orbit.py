"""Spheres orbiting a checkered floor, each with a bobbing height and a blob
shadow that fades as the sphere rises.

Each sphere is a PairedEntityGroup: an invisible base node follows the
orbit, the sphere and its shadow are derived from the base in the same tick.
"""

from __future__ import annotations

import logging
import math

import pygame

from animation.entity import AnimatedEntity
from animation.motion import bob_above, orbit, shadow_fade
from animation.paired_group import PairedEntityGroup
from camera import PerspectiveCamera
from config import (
    BOB_RANGE,
    BOB_RATE,
    CAMERA_ASPECT,
    LIGHT_COLOR,
    ORBIT_MAX_RADIUS,
    ORBIT_SPEED,
    ORBIT_SPHERE_COUNT,
    SHADOW_OPACITY_RANGE,
    SPHERE_RADIUS,
)
from core.mesh import PlaneMesh, SphereMesh
from core.object3d import Object3D
from core.scene import DirectionalLight, Scene
from core.scheduler import FrameScheduler
from loading.load_group import AssetLoader, LoadGroup
from scenes.base import DemoScene
from textures.resourcepath import CHECKER_ID, ROUND_SHADOW_ID

logger = logging.getLogger(__name__)

GROUP_ID = "orbit"
FLOOR_SIZE = 40
SHADOW_SIZE = 4 * SPHERE_RADIUS
# Resting height of a sphere centre; bob_above adds BOB_RANGE on top
SPHERE_BASE_Y = SPHERE_RADIUS + 2

CAMERA_POSITION = (0, 10, 20)


def sphere_color(index: int, count: int) -> tuple:
    color = pygame.Color(0, 0, 0)
    color.hsla = (360.0 * index / count, 100, 75, 100)
    return (color.r / 255.0, color.g / 255.0, color.b / 255.0)


class OrbitScene(DemoScene):
    title = "Orbit"

    def __init__(self, progress_sink=None, count: int = ORBIT_SPHERE_COUNT) -> None:
        scene = Scene(
            background=0xFFFFFF,
            lights=[DirectionalLight(LIGHT_COLOR, 1.0, (0, 10, 5))],
        )
        _, y, z = CAMERA_POSITION
        camera = PerspectiveCamera(
            45, CAMERA_ASPECT, 0.1, 100, position=CAMERA_POSITION,
            rotation=(math.atan2(y, z), 0, 0),
        )
        super().__init__(scene, camera, progress_sink)
        self.count = count
        self.pairs = []

    def start(self, loader: AssetLoader, scheduler: FrameScheduler) -> None:
        self.scheduler = scheduler
        self.request(GROUP_ID, loader, (CHECKER_ID, ROUND_SHADOW_ID), on_complete=self._populate)

    def _populate(self, group: LoadGroup) -> None:
        checker, shadow_texture = group.payloads()
        floor = Object3D(
            "floor",
            mesh=PlaneMesh(FLOOR_SIZE, FLOOR_SIZE, texture=checker, repeat=FLOOR_SIZE / 2),
        )
        nodes = [floor]
        motion = orbit(self.count, ORBIT_SPEED, ORBIT_MAX_RADIUS)
        for i in range(self.count):
            base = Object3D(f"base-{i}")
            sphere = Object3D(
                f"sphere-{i}",
                mesh=SphereMesh(SPHERE_RADIUS, color=sphere_color(i, self.count)),
            )
            shadow = Object3D(
                f"shadow-{i}",
                mesh=PlaneMesh(SHADOW_SIZE, SHADOW_SIZE, texture=shadow_texture, color=(0, 0, 0)),
            )
            pair = PairedEntityGroup.couple(
                AnimatedEntity(base, motion, index=i),
                [
                    (sphere, bob_above(SPHERE_BASE_Y, BOB_RANGE, BOB_RATE)),
                    (shadow, shadow_fade(SHADOW_OPACITY_RANGE, BOB_RATE)),
                ],
            )
            self.pairs.append(pair)
            nodes += pair.nodes()
            self.scheduler.add_group(pair, group.group_id)

        self.registry.register(group.group_id, nodes)
        self.hide_progress()
        logger.info("Orbit scene ready (%d spheres)", self.count)
