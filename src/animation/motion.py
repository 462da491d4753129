"""Motion policies: transforms as pure functions of elapsed time and index.

Nothing here keeps per-entity state. Every value is recomputed from the
absolute elapsed time, so any frame can be reproduced from its timestamp and
a skipped or irregular tick cannot accumulate drift.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Callable, Tuple

from animation.transform import TransformUpdate
from config import (
    BOB_RANGE,
    BOB_RATE,
    ORBIT_MAX_RADIUS,
    ORBIT_SPEED,
    SHADOW_OPACITY_RANGE,
    SPIN_BASE_SPEED,
    SPIN_SPEED_INCREMENT,
)
from core.object3d import Object3D

if TYPE_CHECKING:
    from animation.entity import AnimatedEntity
    from animation.paired_group import PairedEntityGroup

MotionFn = Callable[[float, "AnimatedEntity"], TransformUpdate]
CouplingFn = Callable[[Object3D, Object3D, float, "PairedEntityGroup"], TransformUpdate]

TAU = 2.0 * math.pi


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


# ---------------------------------------------------------------------------
# Staggered spin
# ---------------------------------------------------------------------------
def spin_phase(
    elapsed: float,
    index: int,
    base_speed: float = SPIN_BASE_SPEED,
    speed_increment: float = SPIN_SPEED_INCREMENT,
    direction: int = 1,
) -> float:
    """Rotation angle for entity ``index``: each index spins a little faster."""
    return elapsed * (base_speed + index * speed_increment) * direction


def staggered_spin(
    base_speed: float = SPIN_BASE_SPEED,
    speed_increment: float = SPIN_SPEED_INCREMENT,
) -> MotionFn:
    """Spin about x and y together at the entity's staggered rate."""

    def motion(elapsed: float, entity: "AnimatedEntity") -> TransformUpdate:
        rot = spin_phase(
            elapsed + entity.phase_offset,
            entity.index,
            base_speed,
            speed_increment,
            entity.direction,
        )
        return TransformUpdate(rot_x=rot, rot_y=rot)

    return motion


# ---------------------------------------------------------------------------
# Orbit with bob
# ---------------------------------------------------------------------------
def orbit_angle(
    elapsed: float, index: int, count: int, speed: float = ORBIT_SPEED, direction: int = 1
) -> float:
    u = index / count if count else 0.0
    return elapsed * speed + u * TAU * direction


def orbit_radius(
    elapsed: float, index: int, speed: float = ORBIT_SPEED, max_radius: float = ORBIT_MAX_RADIUS
) -> float:
    # Signed: the orbit passes through the centre as sin() changes sign
    return math.sin(elapsed * speed - index) * max_radius


def orbit_position(
    elapsed: float,
    index: int,
    count: int,
    speed: float = ORBIT_SPEED,
    max_radius: float = ORBIT_MAX_RADIUS,
    direction: int = 1,
) -> Tuple[float, float]:
    """Planar (x, z) position: radius(t) * (cos(angle(t)), sin(angle(t)))."""
    angle = orbit_angle(elapsed, index, count, speed, direction)
    radius = orbit_radius(elapsed, index, speed, max_radius)
    return math.cos(angle) * radius, math.sin(angle) * radius


def bob_amount(elapsed: float, index: int, rate: float = BOB_RATE) -> float:
    """0..1 bounce height; the index shifts the phase so no two entities match."""
    return abs(math.sin(elapsed * rate + index))


def orbit(
    count: int,
    speed: float = ORBIT_SPEED,
    max_radius: float = ORBIT_MAX_RADIUS,
    base_y: float = 0.0,
) -> MotionFn:
    def motion(elapsed: float, entity: "AnimatedEntity") -> TransformUpdate:
        x, z = orbit_position(
            elapsed + entity.phase_offset, entity.index, count, speed, max_radius, entity.direction
        )
        return TransformUpdate(x=x, y=base_y, z=z)

    return motion


# ---------------------------------------------------------------------------
# Couplings (dependent follows primary)
# ---------------------------------------------------------------------------
def bob_above(
    base_y: float,
    bob_range: Tuple[float, float] = BOB_RANGE,
    rate: float = BOB_RATE,
) -> CouplingFn:
    """Dependent sits over the primary and bounces between ``bob_range``."""

    def coupling(primary: Object3D, dependent: Object3D, elapsed: float, group) -> TransformUpdate:
        amount = bob_amount(elapsed, group.index, rate)
        return TransformUpdate(
            x=primary.position.x,
            y=primary.position.y + base_y + lerp(bob_range[0], bob_range[1], amount),
            z=primary.position.z,
        )

    return coupling


def shadow_fade(
    opacity_range: Tuple[float, float] = SHADOW_OPACITY_RANGE,
    rate: float = BOB_RATE,
    lift: float = 0.01,
) -> CouplingFn:
    """Dependent stays under the primary and fades as the bob rises.

    Uses the same bob phase as ``bob_above`` so height and fade never
    disagree within a tick.
    """

    def coupling(primary: Object3D, dependent: Object3D, elapsed: float, group) -> TransformUpdate:
        amount = bob_amount(elapsed, group.index, rate)
        return TransformUpdate(
            x=primary.position.x,
            y=primary.position.y + lift,
            z=primary.position.z,
            opacity=lerp(opacity_range[0], opacity_range[1], amount),
        )

    return coupling


def follow(offset: Tuple[float, float, float] = (0.0, 0.0, 0.0)) -> CouplingFn:
    """Dependent keeps a fixed offset from the primary (e.g. a marker)."""

    def coupling(primary: Object3D, dependent: Object3D, elapsed: float, group) -> TransformUpdate:
        return TransformUpdate(
            x=primary.position.x + offset[0],
            y=primary.position.y + offset[1],
            z=primary.position.z + offset[2],
        )

    return coupling


__all__ = [
    "MotionFn",
    "CouplingFn",
    "lerp",
    "spin_phase",
    "staggered_spin",
    "orbit_angle",
    "orbit_radius",
    "orbit_position",
    "bob_amount",
    "orbit",
    "bob_above",
    "shadow_fade",
    "follow",
]
