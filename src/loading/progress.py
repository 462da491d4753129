"""Completion counting for one logical load group."""

from __future__ import annotations

from typing import Optional

from core.errors import OverCompletion


class ProgressTracker:
    """Counts completed vs. expected sub-loads.

    The total is fixed once by ``register_expected``; ``report_one`` returns
    the normalized fraction, which never decreases.
    """

    def __init__(self, group_id: str = "", expected: Optional[int] = None) -> None:
        self.group_id = group_id
        self._total: Optional[int] = None
        self._completed = 0
        if expected is not None:
            self.register_expected(expected)

    def register_expected(self, n: int) -> None:
        if self._total is not None:
            raise ValueError(
                f"expected count for '{self.group_id}' already fixed at {self._total}"
            )
        if isinstance(n, bool) or not isinstance(n, int) or n < 0:
            raise ValueError(f"expected count must be a non-negative int, got {n!r}")
        self._total = n

    def report_one(self, identifier: Optional[str] = None) -> float:
        total = self.total
        if self._completed >= total:
            raise OverCompletion(self.group_id, total, identifier)
        self._completed += 1
        return self.fraction

    @property
    def total(self) -> int:
        if self._total is None:
            raise ValueError(f"expected count for '{self.group_id}' was never registered")
        return self._total

    @property
    def completed(self) -> int:
        return self._completed

    @property
    def fraction(self) -> float:
        total = self.total
        if total == 0:
            return 1.0
        return self._completed / total

    @property
    def is_complete(self) -> bool:
        return self._total is not None and self._completed >= self._total


__all__ = ["ProgressTracker"]
