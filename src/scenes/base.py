from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from camera import PerspectiveCamera
from core.errors import AssetLoadFailure
from core.scene import Scene, SceneRegistry
from core.scheduler import FrameScheduler
from loading.load_group import AssetLoader, LoadGroup
from loading.progress_sink import CombinedProgress, ProgressBar

logger = logging.getLogger(__name__)

ProgressSink = Callable[[float, Optional[str]], None]


class DemoScene:
    """Scene, camera and loading bookkeeping shared by the demos.

    Subclasses build their static content in ``__init__`` and request
    asset groups in ``start``. Anything that depends on loaded assets is
    added from a group's completion callback and recorded in ``registry``
    under the group id.
    """

    title = "Scene"

    def __init__(self, scene: Scene, camera: PerspectiveCamera, progress_sink=None) -> None:
        self.scene = scene
        self.camera = camera
        self.registry = SceneRegistry(scene)
        self.progress_sink = progress_sink if progress_sink is not None else ProgressBar()
        self.progress = CombinedProgress(self.progress_sink)
        self.groups: List[LoadGroup] = []
        self.failures: Dict[str, AssetLoadFailure] = {}
        self.scheduler: Optional[FrameScheduler] = None

    def start(self, loader: AssetLoader, scheduler: FrameScheduler) -> None:
        raise NotImplementedError

    def request(self, group_id: str, loader: AssetLoader, identifiers, on_complete) -> LoadGroup:
        ids = list(identifiers)
        group = LoadGroup.request(
            group_id,
            loader,
            ids,
            on_complete=on_complete,
            on_progress=self.progress.bind(group_id, len(ids)),
            on_failed=lambda failure, gid=group_id: self._on_failed(gid, failure),
        )
        self.groups.append(group)
        return group

    def hide_progress(self) -> None:
        hide = getattr(self.progress_sink, "hide", None)
        if hide is not None:
            hide()

    def _on_failed(self, group_id: str, failure: AssetLoadFailure) -> None:
        # The group never completes, so nothing of it reaches the scene
        self.failures[group_id] = failure
        logger.error("'%s' will not be shown: %s", group_id, failure)

    @property
    def loaded(self) -> bool:
        return bool(self.groups) and all(g.is_complete for g in self.groups)
