"""Shared engine doubles for control-loop tests."""

from __future__ import annotations

from typing import Any, Callable, Iterable

import pytest

from configs.loader import SimulationConfig
from simulations.base_simulation import SimulationEngine


class ScriptedEngine(SimulationEngine):
    """Deterministic engine: yields stats every ``period`` steps (or per ``script``)."""

    def __init__(self, config: SimulationConfig, period: int = 3, script: Iterable[Any] | None = None) -> None:
        self.config = config
        self.period = period
        self._script = list(script) if script is not None else None
        self.steps = 0
        self.world_calls = 0
        self.generations = 0

    def world(self) -> dict[str, Any]:
        self.world_calls += 1
        offset = (self.steps % 10) / 10.0
        return {
            "animals": [{"x": offset, "y": i / max(self.config.animal_count, 1)} for i in range(self.config.animal_count)],
            "food": [{"x": i / max(self.config.food_count, 1), "y": offset} for i in range(self.config.food_count)],
        }

    def step(self) -> Any:
        self.steps += 1
        if self._script is not None:
            result = self._script[(self.steps - 1) % len(self._script)]
        elif self.steps % self.period == 0:
            result = {"avg_score": float(self.steps) / 4.0}
        else:
            result = None
        if result is not None:
            self.generations += 1
        return result


@pytest.fixture
def config() -> SimulationConfig:
    return SimulationConfig(
        animal_count=4,
        food_count=3,
        mutation_rate=0.01,
        mutation_coefficient=0.3,
        steps_per_generation=5,
        seed=7,
    )


@pytest.fixture
def engines() -> list[ScriptedEngine]:
    """Every engine built by ``engine_factory`` in construction order."""
    return []


@pytest.fixture
def engine_factory(engines: list[ScriptedEngine]) -> Callable[[SimulationConfig], ScriptedEngine]:
    def _factory(cfg: SimulationConfig) -> ScriptedEngine:
        engine = ScriptedEngine(cfg, period=3)
        engines.append(engine)
        return engine

    return _factory


class RecordingSurface:
    """Render target that records draw calls."""

    def __init__(self, width: float = 160.0, height: float = 90.0, available: bool = True) -> None:
        self.surface_width = width
        self.surface_height = height
        self.available = available
        self.calls: list[tuple] = []
        self.presented = 0

    def is_available(self) -> bool:
        return self.available

    def clear(self, width: float, height: float) -> None:
        self.calls = [("clear", width, height)]

    def fill_rect(self, x: float, y: float, width: float, height: float, color: tuple[int, int, int]) -> None:
        self.calls.append(("rect", x, y, width, height, color))

    def present(self) -> None:
        self.presented += 1


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def scripted_engine_factory() -> Callable[..., Callable[[SimulationConfig], ScriptedEngine]]:
    """Build engine factories with a custom ``period`` or ``script``."""

    def _build(**kwargs: Any) -> Callable[[SimulationConfig], ScriptedEngine]:
        return lambda cfg: ScriptedEngine(cfg, **kwargs)

    return _build


@pytest.fixture
def make_surface() -> Callable[..., RecordingSurface]:
    return RecordingSurface
