"""Ownership wrapper around one opaque simulation engine instance."""

from __future__ import annotations

import logging

from configs.loader import SimulationConfig
from core.errors import EngineConstructionFailure, StaleHandleError
from core.render_state import GenerationStats, WorldSnapshot, normalize_snapshot, normalize_stats
from simulations.base_simulation import EngineFactory, SimulationEngine

LOGGER = logging.getLogger(__name__)


class SimulationHandle:
    """Owns one engine built from an immutable ``SimulationConfig``.

    A handle is replaced wholesale on configuration change. Once retired it
    refuses further use so no stale engine can be stepped.
    """

    def __init__(self, config: SimulationConfig, engine: SimulationEngine, engine_factory: EngineFactory) -> None:
        self.config = config
        self._engine = engine
        self._engine_factory = engine_factory
        self._snapshot: WorldSnapshot | None = None
        self._retired = False

    @classmethod
    def create(cls, config: SimulationConfig, engine_factory: EngineFactory) -> "SimulationHandle":
        """Validate ``config`` and build a new engine through ``engine_factory``."""
        config.validate()
        try:
            engine = engine_factory(config)
        except Exception as exc:
            raise EngineConstructionFailure(f"Engine construction failed: {exc}") from exc
        LOGGER.info(
            "Built engine: %d animals, %d food, mutation %.3f/%.3f",
            config.animal_count,
            config.food_count,
            config.mutation_rate,
            config.mutation_coefficient,
        )
        return cls(config, engine, engine_factory)

    @property
    def retired(self) -> bool:
        return self._retired

    def world(self) -> WorldSnapshot:
        """Return the current snapshot; identical until the next ``step()``."""
        self._ensure_active()
        if self._snapshot is None:
            self._snapshot = normalize_snapshot(self._engine.world())
        return self._snapshot

    def step(self) -> GenerationStats | None:
        """Advance the engine by exactly one tick."""
        self._ensure_active()
        self._snapshot = None
        return normalize_stats(self._engine.step())

    def replace(self, config: SimulationConfig) -> "SimulationHandle":
        """Build a handle for ``config`` and retire this one.

        The new handle is fully constructed before retirement, so a failed
        construction leaves this handle active.
        """
        self._ensure_active()
        new_handle = SimulationHandle.create(config, self._engine_factory)
        self.retire()
        return new_handle

    def retire(self) -> None:
        self._retired = True
        self._snapshot = None

    def _ensure_active(self) -> None:
        if self._retired:
            raise StaleHandleError("Simulation handle was replaced and can no longer be used.")
