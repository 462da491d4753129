"""Core engine loop & orchestration.

Separates concerns:
- Engine: sets up window, GL state and the main loop; it is the
  display-refresh driver that feeds timestamps to the scheduler.
- DemoScene: owns the scene graph, camera and asset groups.
- FrameScheduler: turns timestamps into entity updates and one draw.

Per frame the loop drains finished asset loads (so completion callbacks run
on this thread, between ticks), then ticks the scheduler once.
"""

from __future__ import annotations

import logging
import time

import pygame
from OpenGL.GL import (
    glEnable,
    glDisable,
    glDepthFunc,
    glViewport,
    GL_DEPTH_TEST,
    GL_LEQUAL,
    GL_CULL_FACE,
    GL_NORMALIZE,
)

from config import *
from binding.color import to_hex
from core.errors import InvalidTick
from core.renderer import GLRenderer
from core.scheduler import FrameScheduler
from loading.completion_queue import CompletionQueue
from loading.progress_sink import CaptionProgressSink
from loading.texture_loader import TextureLoader
from scenes import SCENES, build_control_panel

logger = logging.getLogger(__name__)

# Panel keys: up/down pick a control, left/right nudge it
_SELECT_KEYS = {pygame.K_UP: -1, pygame.K_DOWN: 1}
_NUDGE_KEYS = {pygame.K_LEFT: -CONTROL_NUDGE_STEPS, pygame.K_RIGHT: CONTROL_NUDGE_STEPS}


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
class Engine:  # pragma: no cover - needs a display
    def __init__(self, scene_name: str = "dice", *, fog: bool = False):
        pygame.init()
        pygame.display.gl_set_attribute(pygame.GL_DEPTH_SIZE, 24)
        pygame.display.gl_set_attribute(pygame.GL_MULTISAMPLEBUFFERS, 1)
        pygame.display.gl_set_attribute(pygame.GL_MULTISAMPLESAMPLES, 4)
        flags = pygame.DOUBLEBUF | pygame.OPENGL
        if FULLSCREEN:
            flags |= pygame.FULLSCREEN
        try:
            # vsync: 1 to enable, 0 to disable
            pygame.display.set_mode((WIDTH, HEIGHT), flags, vsync=(1 if VSYNC else 0))
        except pygame.error:
            # vsync was requested but is unavailable on this system/driver
            pygame.display.set_mode((WIDTH, HEIGHT), flags)
        self.clock = pygame.time.Clock()

        # GL state
        glViewport(0, 0, WIDTH, HEIGHT)
        glEnable(GL_DEPTH_TEST)
        glDepthFunc(GL_LEQUAL)
        glDisable(GL_CULL_FACE)
        glEnable(GL_NORMALIZE)

        scene_cls = SCENES[scene_name]
        kwargs = {"fog": True} if fog and scene_name == "dice" else {}
        self.sink = CaptionProgressSink(scene_cls.title)
        pygame.display.set_caption(scene_cls.title)
        self.demo = scene_cls(progress_sink=self.sink, **kwargs)

        self.completions = CompletionQueue()
        self.loader = TextureLoader(self.completions, workers=LOADER_WORKERS)
        self.scheduler = FrameScheduler(
            GLRenderer(self.demo.scene),
            self.demo.scene.root,
            self.demo.camera,
            time_scale=TIMESTAMP_SCALE,
        )
        self.panel = build_control_panel(self.demo.scene, self.demo.camera)
        self.demo.start(self.loader, self.scheduler)
        logger.info("Engine started with scene '%s'", scene_name)

    # ------------------------------------------------------------------
    def handle_events(self) -> bool:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type != pygame.KEYDOWN:
                continue
            if event.key == pygame.K_ESCAPE:
                return False
            if event.key in _SELECT_KEYS:
                label = self.panel.select_next(_SELECT_KEYS[event.key])
                self._show_control(label)
            elif event.key in _NUDGE_KEYS:
                self.panel.nudge_selected(_NUDGE_KEYS[event.key])
                self._show_control(self.panel.selected)
        return True

    def _show_control(self, label):
        if label is None:
            return
        value = self.panel.control(label).read()
        if isinstance(value, pygame.Color):
            value = to_hex(value)
        elif isinstance(value, float):
            value = round(value, 3)
        pygame.display.set_caption(f"{self.demo.title} - {label}: {value}")

    # ------------------------------------------------------------------
    def run(self):
        running = True
        try:
            while running:
                # With VSYNC the FPS cap is only a safety net for drivers
                # that don't honor it
                if not VSYNC:
                    self.clock.tick()
                else:
                    self.clock.tick(FPS)
                running = self.handle_events()
                if not running:
                    break
                self.completions.drain()
                try:
                    self.scheduler.tick(time.perf_counter())
                except InvalidTick:
                    # Already logged and counted by the scheduler
                    continue
                pygame.display.flip()
        finally:
            self.loader.shutdown()
            logger.info(
                "Stopped after %d frame(s), %d skipped tick(s), %d unit failure(s)",
                self.scheduler.frames_drawn,
                self.scheduler.skipped_ticks,
                self.scheduler.unit_failures,
            )
            pygame.quit()
