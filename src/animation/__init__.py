"""Animation package: time-driven entities and the motion policies they use."""

from .transform import TransformUpdate
from .entity import AnimatedEntity
from .paired_group import Dependent, PairedEntityGroup
from . import motion

__all__ = [
    "TransformUpdate",
    "AnimatedEntity",
    "Dependent",
    "PairedEntityGroup",
    "motion",
]
