"""Per-frame control loop: render, step, account, reschedule."""

from __future__ import annotations

import enum
import logging
from typing import Callable

from core.context import ControlContext
from core.errors import RenderTargetUnavailable
from core.host_loop import HostLoop
from core.render_state import GenerationStats, WorldSnapshot
from visualization.renderer import DrawSurface, RenderTarget, render

LOGGER = logging.getLogger(__name__)


RenderFn = Callable[[WorldSnapshot, DrawSurface, float, float], None]


class SchedulerMode(str, enum.Enum):
    """Frame scheduler states."""

    RENDERING = "rendering"
    SUSPENDED = "suspended"


class FrameScheduler:
    """Drives one tick per host-loop refresh.

    The mode is derived from ``RunState.rendering_enabled``; the scheduler
    never changes it. While suspended, ticks only reschedule themselves so
    the host loop keeps pumping without visual updates.
    """

    def __init__(
        self,
        context: ControlContext,
        target: RenderTarget,
        host_loop: HostLoop,
        render_fn: RenderFn = render,
    ) -> None:
        self.context = context
        self.target = target
        self.host_loop = host_loop
        self.render_fn = render_fn
        self.tick_count = 0
        self._running = False
        self._in_tick = False
        self._scheduled = False

    @property
    def mode(self) -> SchedulerMode:
        if self.context.run_state.rendering_enabled:
            return SchedulerMode.RENDERING
        return SchedulerMode.SUSPENDED

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Check the render target and schedule the first tick."""
        if self._running:
            return
        if not self.target.is_available():
            LOGGER.error("Render target unavailable; aborting startup")
            raise RenderTargetUnavailable("Drawing surface could not be obtained.")
        self._running = True
        self._schedule()

    def stop(self) -> None:
        """Stop rescheduling; a tick already queued runs as a no-op unless restarted."""
        self._running = False

    def tick(self) -> None:
        if self._in_tick:
            raise RuntimeError("Frame tick re-entered while a tick is executing.")
        self._scheduled = False
        if not self._running:
            return
        self._in_tick = True
        try:
            if self.mode is SchedulerMode.RENDERING:
                self._render_and_step()
            self.tick_count += 1
        finally:
            self._in_tick = False
            if self._running:
                self._schedule()

    def _schedule(self) -> None:
        # at most one tick is queued in the host loop at any time
        if self._scheduled:
            return
        self._scheduled = True
        self.host_loop.request_frame(self.tick)

    def _render_and_step(self) -> None:
        handle = self.context.handle
        try:
            snapshot = handle.world()
            self.render_fn(snapshot, self.target, self.target.surface_width, self.target.surface_height)
            self.target.present()
        except Exception:
            LOGGER.exception("Render failed; continuing with step")

        try:
            result: GenerationStats | None = handle.step()
        except Exception:
            LOGGER.exception("Engine step failed; skipping stats update")
            return

        try:
            self.context.stats.update(result)
            self.context.publish()
        except Exception:
            LOGGER.exception("Stats listener failed")
