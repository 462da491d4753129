"""In-process control surface: labelled read/write pairs over bindings.

The panel does no widget drawing. It keeps one Control per (binding, role)
with a human label, range and step, plus a selection cursor so a keyboard
(or any other input) can walk the controls and nudge values.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from binding.constrained_binding import Binding
from core.errors import KernelError

logger = logging.getLogger(__name__)

ChangeFn = Callable[[Dict[str, Any]], None]


@dataclass
class Control:
    label: str
    binding: Binding
    role: str
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    step: Optional[float] = None
    on_change: Optional[ChangeFn] = None
    is_color: bool = False

    def read(self) -> Any:
        return self.binding.read(self.role)

    def clamp(self, value: float) -> float:
        if self.minimum is not None:
            value = max(self.minimum, value)
        if self.maximum is not None:
            value = min(self.maximum, value)
        return value


class ControlPanel:
    def __init__(self, title: str = "Controls") -> None:
        self.title = title
        self._controls: Dict[str, Control] = {}
        self._order: List[str] = []
        self._selected = 0

    def __len__(self) -> int:
        return len(self._order)

    # ------------------------------------------------------------------
    def add(
        self,
        binding: Binding,
        role: str,
        label: Optional[str] = None,
        minimum: Optional[float] = None,
        maximum: Optional[float] = None,
        step: Optional[float] = None,
        on_change: Optional[ChangeFn] = None,
    ) -> Control:
        return self._register(
            Control(label or role, binding, role, minimum, maximum, step, on_change)
        )

    def add_color(
        self,
        binding: Binding,
        role: str,
        label: Optional[str] = None,
        on_change: Optional[ChangeFn] = None,
    ) -> Control:
        return self._register(
            Control(label or role, binding, role, on_change=on_change, is_color=True)
        )

    def _register(self, control: Control) -> Control:
        if control.label in self._controls:
            raise ValueError(f"control '{control.label}' already registered")
        control.binding.read(control.role)  # unknown roles fail here, not on first edit
        self._controls[control.label] = control
        self._order.append(control.label)
        return control

    def control(self, label: str) -> Control:
        return self._controls[label]

    @property
    def labels(self) -> List[str]:
        return list(self._order)

    # ------------------------------------------------------------------
    def set(self, label: str, value: Any) -> Optional[Dict[str, Any]]:
        """Write through the control's binding; returns the binding state.

        Bad input and broken bindings are logged and reported as None so an
        edit can never take down the frame loop.
        """
        control = self._controls[label]
        if not control.is_color:
            try:
                value = control.clamp(float(value))
            except (TypeError, ValueError):
                logger.warning("Control '%s' rejected non-numeric value %r", label, value)
                return None
        try:
            state = control.binding.write(control.role, value)
        except (KernelError, TypeError, ValueError) as e:
            logger.warning("Control '%s' write failed: %s", label, e)
            return None
        logger.debug("Control '%s' set to %r -> %s", label, value, state)
        if control.on_change is not None:
            control.on_change(state)
        return state

    def nudge(self, label: str, steps: int) -> Optional[Dict[str, Any]]:
        control = self._controls[label]
        if control.is_color:
            raise TypeError(f"control '{label}' is a colour; use set()")
        step = control.step or 1.0
        return self.set(label, control.read() + steps * step)

    def snapshot(self) -> Dict[str, Any]:
        return {label: self._controls[label].read() for label in self._order}

    # ------------------------------------------------------------------
    @property
    def selected(self) -> Optional[str]:
        if not self._order:
            return None
        return self._order[self._selected % len(self._order)]

    def select_next(self, delta: int = 1) -> Optional[str]:
        if self._order:
            self._selected = (self._selected + delta) % len(self._order)
        return self.selected

    def nudge_selected(self, steps: int) -> Optional[Dict[str, Any]]:
        label = self.selected
        if label is None or self._controls[label].is_color:
            return None
        return self.nudge(label, steps)


__all__ = ["Control", "ControlPanel"]
