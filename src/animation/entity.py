from __future__ import annotations

from typing import Optional

from animation.motion import MotionFn
from animation.transform import TransformUpdate
from core.object3d import Object3D


class AnimatedEntity:
    """A scene node driven by a pure motion function of elapsed time.

    The node is referenced, not owned. ``direction`` flips the sense of
    rotation/orbit per entity and ``phase_offset`` shifts its time origin.
    """

    def __init__(
        self,
        node: Object3D,
        motion: MotionFn,
        *,
        index: int = 0,
        direction: int = 1,
        phase_offset: float = 0.0,
        name: Optional[str] = None,
    ) -> None:
        if direction not in (1, -1):
            raise ValueError(f"direction must be 1 or -1, got {direction!r}")
        self.node = node
        self.motion = motion
        self.index = index
        self.direction = direction
        self.phase_offset = phase_offset
        self.name = name or node.name or f"entity-{index}"
        self.last_elapsed: Optional[float] = None

    def __repr__(self) -> str:
        return f"AnimatedEntity({self.name!r}, index={self.index})"

    def compute(self, elapsed: float) -> TransformUpdate:
        return self.motion(elapsed, self)

    def advance(self, elapsed: float) -> TransformUpdate:
        update = self.compute(elapsed)
        update.apply(self.node)
        self.last_elapsed = elapsed
        return update
