"""Base simulation engine contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable

from configs.loader import SimulationConfig


class SimulationEngine(ABC):
    """Opaque engine interface consumed by the control loop.

    The control loop never inspects engine internals. It only reads world
    snapshots and advances the engine one tick at a time.
    """

    @abstractmethod
    def world(self) -> Any:
        """Return ``{"animals": [{x, y}], "food": [{x, y}]}`` without mutating state."""

    @abstractmethod
    def step(self) -> Any:
        """Advance one tick; return ``None`` or ``{"avg_score": ...}`` on a generation boundary."""


EngineFactory = Callable[[SimulationConfig], SimulationEngine]
