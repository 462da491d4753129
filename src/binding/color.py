"""Colour conversions between panel values and owner values.

Panels speak ``"#rrggbb"`` strings; owners keep ``pygame.Color``. Integers
are read as ``0xRRGGBB`` (pygame itself would read them as ``0xRRGGBBAA``).
"""

from __future__ import annotations

from typing import Any

import pygame


def to_color(value: Any) -> pygame.Color:
    if isinstance(value, pygame.Color):
        return pygame.Color(value)
    if isinstance(value, bool):
        raise TypeError(f"not a colour: {value!r}")
    if isinstance(value, int):
        if not 0 <= value <= 0xFFFFFF:
            raise ValueError(f"colour int out of range: {value:#x}")
        return pygame.Color((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)
    if isinstance(value, str):
        text = value.strip()
        if text.startswith("0x"):
            return to_color(int(text, 16))
        return pygame.Color(text)
    if isinstance(value, (tuple, list)):
        if all(isinstance(c, float) for c in value):
            return pygame.Color(*(int(round(max(0.0, min(1.0, c)) * 255)) for c in value))
        return pygame.Color(*value)
    raise TypeError(f"not a colour: {value!r}")


def to_hex(color: pygame.Color) -> str:
    return "#{:02x}{:02x}{:02x}".format(color.r, color.g, color.b)


def to_int(color: pygame.Color) -> int:
    return (color.r << 16) | (color.g << 8) | color.b


def to_gl(color: pygame.Color, alpha: float = 1.0) -> tuple:
    """RGBA floats in 0..1 for glClearColor / glFogfv."""
    return (color.r / 255.0, color.g / 255.0, color.b / 255.0, alpha)


__all__ = ["to_color", "to_hex", "to_int", "to_gl"]
