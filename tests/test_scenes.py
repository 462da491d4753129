"""Tests for SceneRegistry and the demo scenes, driven by a fake loader."""

import pytest

from core.mesh import BoxMesh, PlaneMesh, SphereMesh
from core.object3d import Object3D
from core.scene import Scene, SceneRegistry
from core.scheduler import FrameScheduler
from loading.progress_sink import CombinedProgress, ProgressBar
from scenes.dice import DICE_X, DiceScene, die_group_id
from scenes.orbit import GROUP_ID, OrbitScene
from textures.resourcepath import CHECKER_ID, DICE_FACE_TEXTURE_PATHS, ROUND_SHADOW_ID


class TestSceneRegistry:
    def test_register_adds_to_scene(self):
        scene = Scene()
        registry = SceneRegistry(scene)
        node = Object3D("die")
        registry.register("die-0", [node])
        assert "die-0" in registry
        assert node.parent is scene.root
        assert registry.nodes("die-0") == [node]

    def test_duplicate_id_rejected(self):
        registry = SceneRegistry(Scene())
        registry.register("a", [Object3D()])
        with pytest.raises(KeyError):
            registry.register("a", [Object3D()])

    def test_discard(self):
        scene = Scene()
        registry = SceneRegistry(scene)
        node = Object3D()
        registry.register("a", [node])
        registry.discard("a")
        assert registry.group_ids() == []
        assert scene.root.children == []


class TestProgressSinks:
    def test_bar_clamps_and_hides(self):
        bar = ProgressBar()
        bar(1.5, "x")
        assert bar.fraction == 1.0
        assert bar.percent == 100
        assert bar.last_identifier == "x"
        bar.hide()
        assert not bar.visible

    def test_combined_fraction_over_groups(self):
        bar = ProgressBar()
        combined = CombinedProgress(bar)
        a = combined.bind("a", 6)
        combined.bind("b", 2)
        a(0.5, "a3")
        assert bar.fraction == pytest.approx(3 / 8)


@pytest.fixture
def dice(fake_loader, renderer):
    demo = DiceScene()
    scheduler = FrameScheduler(renderer, demo.scene.root, demo.camera)
    demo.start(fake_loader, scheduler)
    return demo, scheduler


class TestDiceScene:
    def test_requests_six_faces_per_die(self, dice, fake_loader):
        demo, _ = dice
        assert len(demo.groups) == len(DICE_X)
        assert fake_loader.requested == list(DICE_FACE_TEXTURE_PATHS) * len(DICE_X)
        assert demo.scene.root.children == []

    def test_camera_and_light(self, dice):
        demo, _ = dice
        cam = demo.camera
        assert (cam.fov, cam.near, cam.far) == (105, 0.1, 5)
        assert tuple(cam.position) == (0, 0, 2)
        assert demo.scene.lights[0].position == (-1, 2, 4)

    def test_die_appears_only_when_all_faces_loaded(self, dice):
        demo, scheduler = dice
        group = demo.groups[1]
        for i, handle in enumerate(group.handles[:5]):
            handle.resolve(100 + i)
        assert die_group_id(1) not in demo.registry
        assert scheduler.units() == []
        assert demo.progress_sink.fraction == pytest.approx(5 / 18)

        group.handles[5].resolve(105)
        (node,) = demo.registry.nodes("die-1")
        assert isinstance(node.mesh, BoxMesh)
        assert node.mesh.textures == [100, 101, 102, 103, 104, 105]
        assert node.position.x == DICE_X[1]
        assert not demo.progress_sink.visible
        (entity,) = scheduler.units("die-1")
        assert entity.index == 1

    def test_spin_index_follows_position_not_arrival(self, dice, fake_loader):
        demo, scheduler = dice
        for group in reversed(demo.groups):
            for handle in group.handles:
                handle.resolve(1)
        assert [u.index for u in scheduler.units()] == [2, 1, 0]
        scheduler.tick(0.0)
        scheduler.tick(2.0)
        rotations = {n.name: n.rotation.x for n in demo.scene.root.children}
        assert rotations == {"die-0": 2.0, "die-1": 3.0, "die-2": 4.0}
        assert demo.loaded

    def test_failed_die_never_shows(self, dice):
        demo, scheduler = dice
        group = demo.groups[0]
        group.handles[0].fail(FileNotFoundError("flower-1.jpg"))
        for handle in group.handles[1:]:
            handle.resolve(1)
        assert "die-0" in demo.failures
        assert "die-0" not in demo.registry
        assert scheduler.units("die-0") == []
        assert not demo.loaded


class TestOrbitScene:
    def test_populates_pairs_on_completion(self, fake_loader, renderer):
        demo = OrbitScene(count=3)
        scheduler = FrameScheduler(renderer, demo.scene.root, demo.camera)
        demo.start(fake_loader, scheduler)
        assert fake_loader.requested == [CHECKER_ID, ROUND_SHADOW_ID]
        assert demo.scene.root.children == []

        fake_loader.handles[CHECKER_ID][0].resolve(11)
        fake_loader.handles[ROUND_SHADOW_ID][0].resolve(22)

        nodes = demo.registry.nodes(GROUP_ID)
        assert len(nodes) == 1 + 3 * 3
        assert isinstance(nodes[0].mesh, PlaneMesh) and nodes[0].mesh.texture == 11
        assert len(scheduler.units(GROUP_ID)) == 3

        pair = demo.pairs[1]
        base, sphere, shadow = pair.nodes()
        assert base.mesh is None
        assert isinstance(sphere.mesh, SphereMesh)
        assert shadow.mesh.texture == 22

        scheduler.tick(0.0)
        scheduler.tick(1.25)
        assert (sphere.position.x, sphere.position.z) == (base.position.x, base.position.z)
        assert 0.25 <= shadow.opacity <= 1.0
