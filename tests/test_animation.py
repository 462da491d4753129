"""Tests for motion policies, AnimatedEntity and PairedEntityGroup."""

import math

import pytest

from animation.entity import AnimatedEntity
from animation.motion import (
    bob_above,
    bob_amount,
    follow,
    lerp,
    orbit,
    orbit_angle,
    orbit_position,
    orbit_radius,
    shadow_fade,
    spin_phase,
    staggered_spin,
)
from animation.paired_group import PairedEntityGroup
from animation.transform import TransformUpdate
from core.object3d import Object3D


class TestMotion:
    def test_spin_phase_is_staggered_by_index(self):
        assert spin_phase(2.0, 0) == 2.0
        assert spin_phase(2.0, 1) == 3.0
        assert spin_phase(2.0, 2) == 4.0
        assert spin_phase(2.0, 2, direction=-1) == -4.0

    def test_staggered_spin_sets_x_and_y(self):
        entity = AnimatedEntity(Object3D("die"), staggered_spin(), index=1)
        update = entity.compute(4.0)
        assert update.rot_x == update.rot_y == 6.0
        assert update.x is None

    def test_phase_offset_shifts_time(self):
        entity = AnimatedEntity(Object3D(), staggered_spin(), phase_offset=0.5)
        assert entity.compute(1.0).rot_x == 1.5

    def test_orbit_formulas(self):
        t, i, n = 3.0, 2, 15
        speed = t * 0.2
        assert orbit_angle(t, i, n) == pytest.approx(speed + (i / n) * 2 * math.pi)
        assert orbit_angle(t, i, n, direction=-1) == pytest.approx(speed - (i / n) * 2 * math.pi)
        assert orbit_radius(t, i) == pytest.approx(math.sin(speed - i) * 10)
        x, z = orbit_position(t, i, n)
        assert math.hypot(x, z) == pytest.approx(abs(orbit_radius(t, i)))

    def test_orbit_motion_keeps_base_height(self):
        entity = AnimatedEntity(Object3D(), orbit(4, base_y=1.5), index=3)
        update = entity.compute(10.0)
        assert update.y == 1.5
        assert (update.x, update.z) == pytest.approx(orbit_position(10.0, 3, 4))

    def test_bob_amount_range(self):
        samples = [bob_amount(t / 10.0, 3) for t in range(100)]
        assert all(0.0 <= s <= 1.0 for s in samples)
        assert bob_amount(1.0, 2) == pytest.approx(abs(math.sin(2.0 + 2)))

    def test_lerp(self):
        assert lerp(-2, 2, 0.25) == -1.0
        assert lerp(1, 0.25, 1.0) == 0.25


class TestEntity:
    def test_direction_must_be_a_sign(self):
        with pytest.raises(ValueError):
            AnimatedEntity(Object3D(), staggered_spin(), direction=0)

    def test_advance_applies_to_node(self):
        node = Object3D("die")
        entity = AnimatedEntity(node, staggered_spin(), index=2)
        entity.advance(1.0)
        assert node.rotation.x == node.rotation.y == 2.0
        assert entity.last_elapsed == 1.0

    def test_name_defaults(self):
        assert AnimatedEntity(Object3D("die-0"), staggered_spin()).name == "die-0"
        assert AnimatedEntity(Object3D(), staggered_spin(), index=4).name == "entity-4"


def make_pair(index=0, count=4):
    base, sphere, shadow = Object3D("base"), Object3D("sphere"), Object3D("shadow")
    group = PairedEntityGroup.couple(
        AnimatedEntity(base, orbit(count), index=index),
        [(sphere, bob_above(3.0)), (shadow, shadow_fade())],
    )
    return group, base, sphere, shadow


class TestPairedGroup:
    def test_dependents_follow_primary_same_tick(self):
        group, base, sphere, shadow = make_pair(index=1)
        group.advance(2.5)
        yoff = abs(math.sin(2.5 * 2 + 1))

        assert (sphere.position.x, sphere.position.z) == (base.position.x, base.position.z)
        assert sphere.position.y == pytest.approx(3.0 + lerp(-2, 2, yoff))
        assert (shadow.position.x, shadow.position.z) == (base.position.x, base.position.z)
        assert shadow.opacity == pytest.approx(lerp(1, 0.25, yoff))
        assert group.last_elapsed == 2.5

    def test_sphere_height_and_shadow_fade_agree(self):
        """The higher the sphere, the fainter its shadow."""
        group, base, sphere, shadow = make_pair()
        samples = []
        for t in range(20):
            group.advance(t * 0.1)
            samples.append((sphere.position.y, shadow.opacity))
        samples.sort()
        opacities = [o for _, o in samples]
        assert opacities == sorted(opacities, reverse=True)

    def test_failed_coupling_rolls_back_primary(self):
        base, marker = Object3D("base"), Object3D("marker")

        def broken_late(primary, dependent, elapsed, group):
            if elapsed > 2.0:
                raise RuntimeError("coupling failed")
            return TransformUpdate()

        group = PairedEntityGroup.couple(
            AnimatedEntity(base, orbit(3), index=0),
            [(marker, follow((0, 1, 0))), (Object3D(), broken_late)],
        )
        group.advance(1.0)
        before = TransformUpdate.capture(base)
        marker_before = tuple(marker.position)

        with pytest.raises(RuntimeError):
            group.advance(5.0)
        assert TransformUpdate.capture(base) == before
        assert tuple(marker.position) == marker_before
        assert group.primary.last_elapsed == 1.0

    def test_nodes_and_identity(self):
        group, base, sphere, shadow = make_pair(index=2)
        assert group.nodes() == [base, sphere, shadow]
        assert group.index == 2
        assert group.name == "base"


class TestTransformUpdate:
    def test_none_fields_untouched(self):
        node = Object3D(position=(1, 2, 3))
        TransformUpdate(y=9).apply(node)
        assert tuple(node.position) == (1, 9, 3)

    def test_capture_restores(self):
        node = Object3D(position=(1, 2, 3), rotation=(0.1, 0.2, 0.3))
        node.opacity = 0.5
        snap = TransformUpdate.capture(node)
        TransformUpdate(x=0, rot_y=4, scale=2, opacity=1).apply(node)
        snap.apply(node)
        assert TransformUpdate.capture(node) == snap

    def test_is_empty(self):
        assert TransformUpdate().is_empty()
        assert not TransformUpdate(opacity=0.0).is_empty()
