"""Tests for the scene graph, meshes, camera and logging setup."""

import logging
import math

import numpy as np
import pytest

from camera import PerspectiveCamera
from core.errors import InvalidTick, KernelError, OverCompletion
from core.mesh import BoxMesh, PlaneMesh
from core.object3d import Object3D
from logging_config import setup_logging


class TestObject3D:
    def test_add_reparents(self):
        a, b, child = Object3D("a"), Object3D("b"), Object3D("c")
        a.add(child)
        b.add(child)
        assert child.parent is b
        assert a.children == []

    def test_world_position_and_traverse(self):
        root = Object3D("root", position=(1, 0, 0))
        mid = Object3D("mid", position=(0, 2, 0))
        leaf = Object3D("leaf", position=(0, 0, 3))
        root.add(mid)
        mid.add(leaf)
        assert tuple(leaf.world_position()) == (1, 2, 3)
        assert [n.name for n in root.traverse()] == ["root", "mid", "leaf"]


class TestMeshes:
    def test_box_faces(self):
        box = BoxMesh(2, 2, 2, textures=[1, 2, 3, 4, 5, 6])
        assert box.vertices.shape == (24, 3)
        assert np.abs(box.vertices).max() == 1.0
        assert [box.face_texture(i) for i in range(6)] == [1, 2, 3, 4, 5, 6]

    def test_box_single_or_no_texture(self):
        assert BoxMesh(textures=[9]).face_texture(4) == 9
        assert BoxMesh().face_texture(0) is None
        with pytest.raises(ValueError):
            BoxMesh(textures=[1, 2])

    def test_plane_repeat(self):
        plane = PlaneMesh(40, 40, repeat=20)
        assert plane.uvs.max() == 20


class TestCamera:
    def test_projection_tracks_near_far(self):
        cam = PerspectiveCamera(90, 1, 1, 10)
        assert cam.projection_matrix[0, 0] == pytest.approx(1.0)
        cam.far = 100
        cam.update_projection_matrix()
        assert cam.projection_matrix[2, 2] == pytest.approx(-101 / 99)

    def test_view_matrix_translates(self):
        cam = PerspectiveCamera(position=(0, 0, 2))
        point = cam.view_matrix() @ np.array([0, 0, 0, 1.0])
        assert point[:3] == pytest.approx([0, 0, -2])

    def test_pitch_looks_at_origin(self):
        cam = PerspectiveCamera(position=(0, 10, 20), rotation=(math.atan2(10, 20), 0, 0))
        point = cam.view_matrix() @ np.array([0, 0, 0, 1.0])
        assert point[0] == pytest.approx(0)
        assert point[1] == pytest.approx(0, abs=1e-9)
        assert point[2] < 0

    def test_depth_range(self):
        cam = PerspectiveCamera(near=0.1, far=5)
        assert cam.in_depth_range(2)
        assert not cam.in_depth_range(6)


class TestErrors:
    def test_taxonomy(self):
        assert issubclass(OverCompletion, KernelError)
        err = InvalidTick(float("nan"), "not finite")
        assert "not finite" in str(err)


class TestLoggingConfig:
    def test_handlers_attached_once(self, tmp_path):
        log_file = tmp_path / "kernel.log"
        setup_logging(logging.DEBUG, str(log_file), namespaces=("kernel_test",))
        setup_logging(logging.DEBUG, str(log_file), namespaces=("kernel_test",))
        logger = logging.getLogger("kernel_test")
        assert len(logger.handlers) == 2
        logger.debug("hello")
        for handler in logger.handlers:
            handler.flush()
        assert "hello" in log_file.read_text(encoding="utf-8")
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
