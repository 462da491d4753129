"""Editable values exposed to a control surface.

A BoundProperty stores nothing itself: reads and writes go straight to the
owner's attribute, optionally through a view transform (degrees on the panel,
radians on the owner).
"""

from __future__ import annotations

import math
from typing import Any, Callable, Optional

from binding.color import to_color, to_hex

Transform = Callable[[Any], Any]


class BoundProperty:
    def __init__(
        self,
        owner: Any,
        attr: str,
        role: Optional[str] = None,
        *,
        to_view: Optional[Transform] = None,
        from_view: Optional[Transform] = None,
    ) -> None:
        if not hasattr(owner, attr):
            raise AttributeError(f"{type(owner).__name__} has no attribute '{attr}'")
        self.owner = owner
        self.attr = attr
        self.role = role or attr
        self._to_view = to_view
        self._from_view = from_view

    def __repr__(self) -> str:
        return f"BoundProperty({type(self.owner).__name__}.{self.attr} as {self.role!r})"

    def get(self) -> Any:
        value = getattr(self.owner, self.attr)
        return self._to_view(value) if self._to_view else value

    def set(self, value: Any) -> None:
        setattr(self.owner, self.attr, self._from_view(value) if self._from_view else value)


class ColorProperty(BoundProperty):
    """Colour attribute read as ``"#rrggbb"`` and written from any colour form."""

    def __init__(self, owner: Any, attr: str, role: Optional[str] = None) -> None:
        super().__init__(owner, attr, role, to_view=lambda c: to_hex(to_color(c)), from_view=to_color)


def degrees_property(owner: Any, attr: str, role: Optional[str] = None) -> BoundProperty:
    """Owner keeps radians; the panel edits degrees."""
    return BoundProperty(owner, attr, role, to_view=math.degrees, from_view=math.radians)


__all__ = ["BoundProperty", "ColorProperty", "degrees_property"]
