"""Hand-off point between loader threads and the scheduling thread.

Loader worker threads never touch handles, groups or the scene. They post
a callback here and the frame loop drains the queue between ticks, so every
load completion happens-before the next tick and never interleaves with one.
"""

from __future__ import annotations

import logging
import queue
import threading
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class CompletionQueue:
    def __init__(self) -> None:
        self._queue: "queue.SimpleQueue[tuple[Callable[..., Any], tuple]]" = queue.SimpleQueue()
        self._owner: Optional[int] = None

    def post(self, fn: Callable[..., Any], *args: Any) -> None:
        """Schedule ``fn(*args)`` for the next drain. Safe from any thread."""
        self._queue.put((fn, args))

    def drain(self, limit: Optional[int] = None) -> int:
        """Run queued callbacks on the calling thread; returns how many ran.

        A callback that raises is logged and skipped; the rest still run.
        The first thread to drain becomes the owner and draining from any
        other thread is rejected.
        """
        ident = threading.get_ident()
        if self._owner is None:
            self._owner = ident
        elif self._owner != ident:
            raise RuntimeError("CompletionQueue must be drained from a single thread")

        ran = 0
        while limit is None or ran < limit:
            try:
                fn, args = self._queue.get_nowait()
            except queue.Empty:
                break
            ran += 1
            try:
                fn(*args)
            except Exception:
                logger.exception("Load completion callback %r failed", fn)
        return ran

    def pending(self) -> int:
        return self._queue.qsize()


__all__ = ["CompletionQueue"]
