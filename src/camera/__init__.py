from .camera import PerspectiveCamera

__all__ = [
    "PerspectiveCamera",
]
