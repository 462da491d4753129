"""Progress sinks: where load-group progress ends up for display."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

import pygame


@dataclass
class ProgressBar:
    """Display state for a loading bar (width fraction + last item)."""

    fraction: float = 0.0
    last_identifier: Optional[str] = None
    visible: bool = True
    updates: int = 0

    def __call__(self, fraction: float, identifier: Optional[str] = None) -> None:
        self.update(fraction, identifier)

    def update(self, fraction: float, identifier: Optional[str] = None) -> None:
        self.fraction = max(0.0, min(1.0, float(fraction)))
        if identifier is not None:
            self.last_identifier = identifier
        self.updates += 1

    def hide(self) -> None:
        self.visible = False

    def show(self) -> None:
        self.visible = True

    @property
    def percent(self) -> int:
        return int(round(self.fraction * 100))


@dataclass
class CombinedProgress:
    """Merges several load groups into one bar.

    Each group reports its own k/N; the bar shows the overall fraction of
    items loaded across every group bound so far.
    """

    sink: Callable[[float, Optional[str]], None]
    _counts: Dict[str, Tuple[int, int]] = field(default_factory=dict)

    def bind(self, group_id: str, total: int) -> Callable[[float, Optional[str]], None]:
        self._counts[group_id] = (0, total)

        def on_progress(fraction: float, identifier: Optional[str] = None) -> None:
            _, group_total = self._counts[group_id]
            self._counts[group_id] = (int(round(fraction * group_total)), group_total)
            self.sink(self.fraction, identifier)

        return on_progress

    @property
    def fraction(self) -> float:
        done = sum(c for c, _ in self._counts.values())
        total = sum(t for _, t in self._counts.values())
        return 1.0 if total == 0 else done / total


class CaptionProgressSink:  # pragma: no cover - needs a pygame display
    """Shows loading progress in the pygame window caption."""

    def __init__(self, title: str, bar: Optional[ProgressBar] = None) -> None:
        self.title = title
        self.bar = bar or ProgressBar()

    def __call__(self, fraction: float, identifier: Optional[str] = None) -> None:
        self.bar.update(fraction, identifier)
        if self.bar.visible and self.bar.fraction < 1.0:
            pygame.display.set_caption(f"{self.title} - loading {self.bar.percent}%")
        else:
            pygame.display.set_caption(self.title)

    def hide(self) -> None:
        self.bar.hide()
        pygame.display.set_caption(self.title)


__all__ = ["ProgressBar", "CombinedProgress", "CaptionProgressSink"]
