"""Logging configuration.

Modules log through ``logging.getLogger(__name__)``; the engine entry point
calls ``setup_logging()`` once to attach handlers.
"""

from __future__ import annotations

import logging
import sys
from typing import Iterable, Optional

# Top-level packages whose loggers get the console/file handlers
LOGGER_NAMESPACES = ("core", "loading", "binding", "animation", "camera", "scenes", "textures")


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    namespaces: Iterable[str] = LOGGER_NAMESPACES,
) -> None:
    """Configure console (and optional file) output for the engine packages.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file.
        namespaces: Logger names that receive the handlers.
    """
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S"
    )

    handlers = []
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    for name in namespaces:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        # Avoid duplicate lines when the engine is restarted in-process
        if logger.hasHandlers():
            logger.handlers.clear()
        for handler in handlers:
            logger.addHandler(handler)
        logger.propagate = False

    logging.getLogger("core").info("Logging initialized.")
