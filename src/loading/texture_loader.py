"""Texture loader collaborator: file decode on workers, GL upload on drain."""

from __future__ import annotations

from typing import Optional
from concurrent.futures import ThreadPoolExecutor

from config import LOADER_WORKERS
from loading.completion_queue import CompletionQueue
from loading.threaded_loader import ThreadedLoader
from textures.texture_utils import decode_image, upload_texture


class TextureLoader(ThreadedLoader):
    def __init__(
        self,
        completions: CompletionQueue,
        *,
        workers: int = LOADER_WORKERS,
        executor: Optional[ThreadPoolExecutor] = None,
    ) -> None:
        super().__init__(
            decode_image,
            completions,
            finish=upload_texture,
            workers=workers,
            executor=executor,
        )


__all__ = ["TextureLoader"]
