"""Demo scenes the engine can host, keyed by name."""

from .base import DemoScene
from .controls import build_control_panel
from .dice import DiceScene
from .orbit import OrbitScene

SCENES = {
    "dice": DiceScene,
    "orbit": OrbitScene,
}

__all__ = [
    "DemoScene",
    "DiceScene",
    "OrbitScene",
    "SCENES",
    "build_control_panel",
]
