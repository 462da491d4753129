from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from animation.entity import AnimatedEntity
from animation.motion import CouplingFn
from animation.transform import TransformUpdate
from core.object3d import Object3D


@dataclass
class Dependent:
    node: Object3D
    coupling: CouplingFn


class PairedEntityGroup:
    """A primary entity plus dependents that must move with it.

    ``advance`` updates the primary first, then derives every dependent
    from the primary's new transform, all for the same elapsed time. If
    anything raises, the primary is rolled back and no dependent changes,
    so the pair never shows two different simulation times.
    """

    def __init__(self, primary: AnimatedEntity, dependents: Sequence[Dependent] = ()) -> None:
        self.primary = primary
        self.dependents: List[Dependent] = list(dependents)
        self.last_elapsed: Optional[float] = None

    @classmethod
    def couple(
        cls, primary: AnimatedEntity, pairs: Iterable[Tuple[Object3D, CouplingFn]]
    ) -> "PairedEntityGroup":
        return cls(primary, [Dependent(node, fn) for node, fn in pairs])

    def __repr__(self) -> str:
        return f"PairedEntityGroup({self.primary.name!r}, dependents={len(self.dependents)})"

    @property
    def index(self) -> int:
        return self.primary.index

    @property
    def name(self) -> str:
        return self.primary.name

    def nodes(self) -> List[Object3D]:
        return [self.primary.node] + [d.node for d in self.dependents]

    def advance(self, elapsed: float) -> List[TransformUpdate]:
        previous = TransformUpdate.capture(self.primary.node)
        previous_elapsed = self.primary.last_elapsed

        primary_update = self.primary.advance(elapsed)
        try:
            updates = [
                d.coupling(self.primary.node, d.node, elapsed, self) for d in self.dependents
            ]
        except Exception:
            previous.apply(self.primary.node)
            self.primary.last_elapsed = previous_elapsed
            raise

        for dependent, update in zip(self.dependents, updates):
            update.apply(dependent.node)
        self.last_elapsed = elapsed
        return [primary_update] + updates
