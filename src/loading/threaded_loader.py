"""Asset loader that decodes on worker threads and finishes on the frame loop.

``decode(identifier)`` runs on a ThreadPoolExecutor and must not touch GL or
scene state. ``finish(decoded)`` runs later on the draining thread (where a
GL context is current) and produces the handle's payload.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Any, Callable, Optional, Set

from loading.asset_handle import AssetHandle
from loading.completion_queue import CompletionQueue

logger = logging.getLogger(__name__)


def _identity(decoded: Any) -> Any:
    return decoded


class ThreadedLoader:
    def __init__(
        self,
        decode: Callable[[str], Any],
        completions: CompletionQueue,
        *,
        finish: Callable[[Any], Any] = _identity,
        workers: int = 4,
        executor: Optional[ThreadPoolExecutor] = None,
    ) -> None:
        self._decode = decode
        self._finish = finish
        self.completions = completions
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max(1, workers), thread_name_prefix="asset-loader"
        )
        # Decodes still running; each future removes itself when done
        self._in_flight: Set[Future] = set()
        self._lock = threading.Lock()

    def load(self, identifier: str) -> AssetHandle:
        handle = AssetHandle(identifier)
        future = self._executor.submit(self._decode, identifier)
        with self._lock:
            self._in_flight.add(future)
        future.add_done_callback(lambda f, h=handle: self._decoded(h, f))
        logger.debug("Requested asset '%s'", identifier)
        return handle

    def in_flight(self) -> int:
        with self._lock:
            return len(self._in_flight)

    def _decoded(self, handle: AssetHandle, future: Future) -> None:
        with self._lock:
            self._in_flight.discard(future)
        self.completions.post(self._complete, handle, future)

    def _complete(self, handle: AssetHandle, future: Future) -> None:
        try:
            payload = self._finish(future.result())
        except Exception as e:
            logger.warning("Asset '%s' failed to load: %s", handle.identifier, e)
            handle.fail(e)
            return
        handle.resolve(payload)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until every requested decode has finished (not drained)."""
        with self._lock:
            futures = list(self._in_flight)
        _, not_done = wait(futures, timeout=timeout)
        return not not_done

    def shutdown(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=False, cancel_futures=True)


__all__ = ["ThreadedLoader"]
