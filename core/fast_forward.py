"""Bounded burst stepping with rendering suspended."""

from __future__ import annotations

import logging

from core.context import ControlContext
from core.errors import FastForwardInProgressError

LOGGER = logging.getLogger(__name__)


DEFAULT_TARGET_GENERATIONS = 10


class FastForwardController:
    """Advances a fixed number of generations without yielding to the host loop.

    The burst is synchronous and bounded by ``target_generations``. Rendering
    is suspended for its duration and restored on every exit path.
    """

    def __init__(self, context: ControlContext) -> None:
        self.context = context
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def run(self, target_generations: int = DEFAULT_TARGET_GENERATIONS) -> int:
        """Step until ``target_generations`` boundaries are observed.

        Returns:
            Number of engine steps taken during the burst.
        """
        if self._running:
            raise FastForwardInProgressError("Fast-forward is already running.")
        target = target_generations
        if isinstance(target, bool) or not isinstance(target, int):
            raise ValueError(f"target_generations must be an integer, got {target!r}")
        if target < 1:
            raise ValueError("target_generations must be >= 1")

        state = self.context.run_state
        handle = self.context.handle
        stats = self.context.stats
        self._running = True
        self.context.busy = True
        state.rendering_enabled = False
        steps = 0
        try:
            observed = 0
            while observed < target:
                result = handle.step()
                steps += 1
                stats.update(result)
                if result is not None:
                    observed += 1
            state.generation_age = 0
        finally:
            state.rendering_enabled = True
            self.context.busy = False
            self._running = False

        LOGGER.info(
            "Fast-forwarded %d generation(s) in %d steps; now at generation %d",
            target,
            steps,
            state.generation_number,
        )
        self.context.publish()
        return steps
