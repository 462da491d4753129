"""Binding package: editable properties, invariant-keeping bindings, panel."""

from .bound_property import BoundProperty, ColorProperty, degrees_property
from .constrained_binding import Binding, ConstrainedBinding, OrderedPairBinding
from .control_panel import Control, ControlPanel

__all__ = [
    "BoundProperty",
    "ColorProperty",
    "degrees_property",
    "Binding",
    "ConstrainedBinding",
    "OrderedPairBinding",
    "Control",
    "ControlPanel",
]
