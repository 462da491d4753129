"""Load groups: bundles of assets that must all arrive before scene mutation.

A group is created per logical bundle (six faces of a die, a model plus its
material file, ...). Its completion callback is the single place where the
caller may add the finished object to the scene, so nothing partially
textured ever becomes visible.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, List, Optional, Protocol

from core.errors import AssetLoadFailure, OverCompletion
from loading.asset_handle import AssetHandle, LoadState
from loading.progress import ProgressTracker

logger = logging.getLogger(__name__)

CompleteFn = Callable[["LoadGroup"], None]
ProgressFn = Callable[[float, Optional[str]], None]
FailedFn = Callable[[AssetLoadFailure], None]


class AssetLoader(Protocol):
    def load(self, identifier: str) -> AssetHandle: ...  # noqa: D401


class LoadGroup:
    """Owns a fixed number of asset handles and fires one completion.

    ``on_progress(fraction, last_identifier)`` runs on every completion,
    ``on_complete(group)`` runs once when every asset is loaded and
    ``on_failed(failure)`` runs once when any asset fails. After a failure
    the group is terminal: completion never fires and later reports are
    ignored.
    """

    def __init__(
        self,
        group_id: str,
        expected: int,
        *,
        on_complete: Optional[CompleteFn] = None,
        on_progress: Optional[ProgressFn] = None,
        on_failed: Optional[FailedFn] = None,
    ) -> None:
        self.group_id = group_id
        self.on_complete = on_complete
        self.on_progress = on_progress
        self.on_failed = on_failed

        self._tracker = ProgressTracker(group_id, expected)
        self._handles: List[AssetHandle] = []
        self._completion_fired = False
        self._failure: Optional[AssetLoadFailure] = None

        logger.debug("Load group '%s' created (%d item(s))", group_id, expected)

        if expected == 0:
            self._emit_progress(1.0, None)
            self._fire_completion()

    @classmethod
    def request(
        cls,
        group_id: str,
        loader: AssetLoader,
        identifiers: Iterable[str],
        **callbacks: Any,
    ) -> "LoadGroup":
        """Create a group sized to ``identifiers`` and start every load."""
        ids = list(identifiers)
        group = cls(group_id, len(ids), **callbacks)
        for identifier in ids:
            group.track(loader.load(identifier))
        return group

    def __repr__(self) -> str:
        return (
            f"LoadGroup({self.group_id!r}, {self.completed}/{self.total}, "
            f"complete={self.is_complete}, failed={self.is_failed})"
        )

    # ------------------------------------------------------------------
    def track(self, handle: AssetHandle) -> AssetHandle:
        if len(self._handles) >= self.total:
            raise ValueError(
                f"load group '{self.group_id}' already tracks {self.total} handle(s)"
            )
        handle.attach(self)
        self._handles.append(handle)
        # Loaders with a cache may hand back a handle that is already terminal
        if handle.state is LoadState.LOADED:
            self.handle_resolved(handle)
        elif handle.state is LoadState.FAILED:
            self.handle_failed(handle)
        return handle

    def handle_resolved(self, handle: AssetHandle) -> None:
        self.report_one(handle.identifier)

    def handle_failed(self, handle: AssetHandle) -> None:
        self.fail(AssetLoadFailure(handle.identifier, handle.error))

    # ------------------------------------------------------------------
    def report_one(self, identifier: Optional[str] = None) -> float:
        """Count one finished asset and return the new progress fraction.

        Raises OverCompletion if the group already reached its total.
        """
        if self._failure is not None:
            logger.debug(
                "Ignoring completion of '%s' for failed group '%s'", identifier, self.group_id
            )
            return self._tracker.fraction

        fraction = self._tracker.report_one(identifier)
        self._emit_progress(fraction, identifier)
        if self._tracker.is_complete:
            self._fire_completion()
        return fraction

    def fail(self, failure: AssetLoadFailure) -> None:
        if self._completion_fired:
            raise OverCompletion(self.group_id, self.total, failure.identifier)
        if self._failure is not None:
            logger.debug(
                "Group '%s' already failed; ignoring '%s'", self.group_id, failure.identifier
            )
            return

        self._failure = failure
        if self.on_failed is None:
            logger.error("Load group '%s' failed: %s", self.group_id, failure)
            return
        logger.warning("Load group '%s' failed: %s", self.group_id, failure)
        self.on_failed(failure)

    # ------------------------------------------------------------------
    def _emit_progress(self, fraction: float, identifier: Optional[str]) -> None:
        if self.on_progress is not None:
            self.on_progress(fraction, identifier)

    def _fire_completion(self) -> None:
        if self._completion_fired:
            return
        self._completion_fired = True
        logger.info("Load group '%s' complete (%d item(s))", self.group_id, self.total)
        if self.on_complete is not None:
            self.on_complete(self)

    # ------------------------------------------------------------------
    @property
    def total(self) -> int:
        return self._tracker.total

    @property
    def completed(self) -> int:
        return self._tracker.completed

    @property
    def progress(self) -> float:
        return self._tracker.fraction

    @property
    def is_complete(self) -> bool:
        return self._completion_fired

    @property
    def is_failed(self) -> bool:
        return self._failure is not None

    @property
    def failure(self) -> Optional[AssetLoadFailure]:
        return self._failure

    @property
    def handles(self) -> List[AssetHandle]:
        return list(self._handles)

    def payloads(self) -> List[Any]:
        """Loaded payloads in the order the handles were tracked."""
        return [h.payload for h in self._handles if h.state is LoadState.LOADED]


__all__ = ["LoadGroup", "AssetLoader"]
