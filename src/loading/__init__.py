"""Loading package: re-export the asset-loading types.

``TextureLoader`` is left out on purpose: it pulls in OpenGL, so import it
from ``loading.texture_loader`` where a GL context exists.
"""

from .asset_handle import AssetHandle, LoadState
from .progress import ProgressTracker
from .load_group import LoadGroup, AssetLoader
from .completion_queue import CompletionQueue
from .threaded_loader import ThreadedLoader
from .progress_sink import ProgressBar, CombinedProgress, CaptionProgressSink

__all__ = [
    "AssetHandle",
    "LoadState",
    "ProgressTracker",
    "LoadGroup",
    "AssetLoader",
    "CompletionQueue",
    "ThreadedLoader",
    "ProgressBar",
    "CombinedProgress",
    "CaptionProgressSink",
]
