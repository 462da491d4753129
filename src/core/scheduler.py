"""Per-frame scheduler: timestamps in, entity updates and one draw out.

The display-refresh driver calls ``tick(timestamp)`` once per frame. The
first valid timestamp becomes the time base, so elapsed time starts at 0
whatever the clock's origin. Updates run in a fixed order: standalone
entities in registration order, then paired groups in registration order,
then exactly one ``renderer.draw_frame(scene_root, camera)``.
"""

from __future__ import annotations

import logging
import math
import numbers
from typing import Any, List, Optional, Protocol, Tuple, Union

from animation.entity import AnimatedEntity
from animation.paired_group import PairedEntityGroup
from config import TIMESTAMP_SCALE
from core.errors import InvalidTick
from core.object3d import Object3D

logger = logging.getLogger(__name__)

Unit = Union[AnimatedEntity, PairedEntityGroup]


class Renderer(Protocol):
    def draw_frame(self, scene_root: Object3D, camera: Any) -> None: ...  # noqa: D401


class FrameScheduler:
    def __init__(
        self,
        renderer: Renderer,
        scene_root: Object3D,
        camera: Any,
        *,
        time_scale: float = TIMESTAMP_SCALE,
    ) -> None:
        self.renderer = renderer
        self.scene_root = scene_root
        self.camera = camera
        self.time_scale = time_scale

        self._entities: List[Tuple[Optional[str], AnimatedEntity]] = []
        self._groups: List[Tuple[Optional[str], PairedEntityGroup]] = []

        self._time_base: Optional[float] = None
        self._last_timestamp: Optional[float] = None
        self._in_tick = False

        self.elapsed = 0.0
        self.frames_drawn = 0
        self.skipped_ticks = 0
        self.unit_failures = 0

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    def add_entity(self, entity: AnimatedEntity, group_id: Optional[str] = None) -> AnimatedEntity:
        self._entities.append((group_id, entity))
        return entity

    def add_group(
        self, group: PairedEntityGroup, group_id: Optional[str] = None
    ) -> PairedEntityGroup:
        self._groups.append((group_id, group))
        return group

    def units(self, group_id: Optional[str] = None) -> List[Unit]:
        """Registered units in update order, optionally only those of one id."""
        ordered: List[Unit] = [e for gid, e in self._entities if group_id in (None, gid)]
        ordered += [g for gid, g in self._groups if group_id in (None, gid)]
        return ordered

    def remove(self, group_id: str) -> int:
        before = len(self._entities) + len(self._groups)
        self._entities = [(gid, e) for gid, e in self._entities if gid != group_id]
        self._groups = [(gid, g) for gid, g in self._groups if gid != group_id]
        return before - len(self._entities) - len(self._groups)

    # ------------------------------------------------------------------
    # Timing
    # ------------------------------------------------------------------
    @property
    def time_base(self) -> Optional[float]:
        return self._time_base

    def reset_time_base(self) -> None:
        """Next valid tick starts elapsed time from 0 again."""
        self._time_base = None
        self._last_timestamp = None
        self.elapsed = 0.0

    def _validate(self, timestamp: Any) -> float:
        if isinstance(timestamp, bool) or not isinstance(timestamp, numbers.Real):
            raise InvalidTick(timestamp, "not a number")
        value = float(timestamp)
        if not math.isfinite(value):
            raise InvalidTick(timestamp, "not finite")
        if self._last_timestamp is not None and value < self._last_timestamp:
            raise InvalidTick(timestamp, f"earlier than previous tick {self._last_timestamp!r}")
        return value

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------
    def tick(self, timestamp: Any) -> float:
        """Advance every unit to ``timestamp`` and draw one frame.

        Returns the elapsed simulation time in seconds. Raises InvalidTick
        (and does nothing else) for a malformed or out-of-order timestamp.
        """
        if self._in_tick:
            raise InvalidTick(timestamp, "tick() called from inside a tick")
        try:
            value = self._validate(timestamp)
        except InvalidTick as e:
            self.skipped_ticks += 1
            logger.warning("Skipping tick: %s", e)
            raise

        if self._time_base is None:
            self._time_base = value
            logger.debug("Time base established at %r", value)
        self._last_timestamp = value
        elapsed = (value - self._time_base) * self.time_scale
        self.elapsed = elapsed

        self._in_tick = True
        try:
            for _, entity in list(self._entities):
                self._run(entity, elapsed)
            for _, group in list(self._groups):
                self._run(group, elapsed)
        finally:
            self._in_tick = False

        self.renderer.draw_frame(self.scene_root, self.camera)
        self.frames_drawn += 1
        return elapsed

    def _run(self, unit: Unit, elapsed: float) -> None:
        try:
            unit.advance(elapsed)
        except Exception:
            self.unit_failures += 1
            logger.exception("Update of %r failed at t=%.4f; continuing", unit, elapsed)


__all__ = ["FrameScheduler", "Renderer"]
