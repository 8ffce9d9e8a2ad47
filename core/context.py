"""Explicit control context owning the active handle, run state and sinks."""

from __future__ import annotations

import logging
from typing import Callable

from configs.loader import SimulationConfig
from core.errors import FastForwardInProgressError
from core.handle import SimulationHandle
from core.run_state import DisplayedStats, GenerationListener, RunState, StatsAggregator
from simulations.base_simulation import EngineFactory

LOGGER = logging.getLogger(__name__)


StatsSink = Callable[[DisplayedStats], None]


class ControlContext:
    """Pairs one ``SimulationHandle`` with one ``RunState``.

    Both are created together and replaced together. The scheduler and the
    fast-forward controller receive this object explicitly and always read
    the handle through it, so a replacement is visible to the next tick.
    """

    def __init__(self, config: SimulationConfig, engine_factory: EngineFactory) -> None:
        self.engine_factory = engine_factory
        self.handle = SimulationHandle.create(config, engine_factory)
        self.stats = StatsAggregator(RunState())
        self.busy = False
        self._sinks: list[StatsSink] = []

    @property
    def config(self) -> SimulationConfig:
        return self.handle.config

    @property
    def run_state(self) -> RunState:
        return self.stats.state

    def subscribe(self, sink: StatsSink) -> None:
        """Register an output sink for displayed stats."""
        self._sinks.append(sink)

    def on_generation(self, listener: GenerationListener) -> None:
        """Register a listener for generation boundaries."""
        self.stats.subscribe(listener)

    def publish(self) -> None:
        displayed = self.run_state.displayed()
        for sink in list(self._sinks):
            sink(displayed)

    def replace_config(self, config: SimulationConfig) -> SimulationHandle:
        """Swap in a handle built from ``config`` and reset the run state.

        Construction happens before anything is swapped; on failure the
        current handle and run state are left untouched.
        """
        if self.busy:
            raise FastForwardInProgressError("Cannot replace configuration during a fast-forward burst.")
        self.handle = self.handle.replace(config)
        self.stats.reset()
        LOGGER.info("Configuration replaced; run state reset")
        self.publish()
        return self.handle
