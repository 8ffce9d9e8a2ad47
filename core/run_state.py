"""Generation/age/score bookkeeping derived from engine step results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from core.render_state import GenerationStats


GenerationListener = Callable[[int, GenerationStats], None]


@dataclass(frozen=True)
class DisplayedStats:
    """Text shown in the three stats readouts."""

    number: str
    age: str
    score: str


@dataclass
class RunState:
    """Mutable run counters paired with the active simulation handle."""

    generation_number: int = 1
    generation_age: int = 0
    last_avg_score: float = 0.0
    rendering_enabled: bool = True

    def displayed(self) -> DisplayedStats:
        return DisplayedStats(
            number=str(self.generation_number),
            age=str(self.generation_age),
            score=f"{self.last_avg_score:.2f}",
        )


class StatsAggregator:
    """Feeds step results into a ``RunState``.

    A stats-bearing result marks a generation boundary: the age resets, the
    generation number advances and listeners are notified with the number of
    the generation that just finished. Any other result ages the current
    generation by one tick.
    """

    def __init__(self, state: RunState | None = None) -> None:
        self.state = state if state is not None else RunState()
        self._listeners: list[GenerationListener] = []

    def subscribe(self, listener: GenerationListener) -> None:
        self._listeners.append(listener)

    def update(self, result: GenerationStats | None) -> None:
        if result is None:
            self.state.generation_age += 1
            return
        finished = self.state.generation_number
        self.state.generation_age = 0
        self.state.generation_number += 1
        self.state.last_avg_score = float(result.avg_score)
        for listener in list(self._listeners):
            listener(finished, result)

    def reset(self) -> None:
        self.state.generation_number = 1
        self.state.generation_age = 0
        self.state.last_avg_score = 0.0
        self.state.rendering_enabled = True
