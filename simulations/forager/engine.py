"""Bundled reference engine: foragers that evolve steering genes."""

from __future__ import annotations

import math
from typing import Any

import numpy as np

from configs.loader import SimulationConfig
from simulations.base_simulation import SimulationEngine


FOV_RANGE = 0.25
FOV_ANGLE = math.pi / 2
EAT_RADIUS = 0.01
SPEED_MIN = 0.001
SPEED_MAX = 0.005
SPEED_STEP = 0.0005
ROTATION_ACCEL = math.pi / 4
WANDER_NOISE = 0.1

# turn gain, speed gain, wander
GENOME_SIZE = 3


class ForagerEngine(SimulationEngine):
    """Animals steer toward the nearest food in their field of view.

    Each animal scores one point per food eaten. Every
    ``steps_per_generation`` ticks the population is evolved with
    roulette-wheel selection, uniform crossover and sign-random mutation,
    and the step returns min/avg/max scores of the finished generation.
    """

    def __init__(self, config: SimulationConfig, rng: np.random.Generator | None = None) -> None:
        self.config = config
        self.rng = rng if rng is not None else np.random.default_rng(config.seed)
        self.age = 0
        self.genomes = self.rng.uniform(-1.0, 1.0, size=(config.animal_count, GENOME_SIZE))
        self.food = self.rng.random((config.food_count, 2))
        self._scatter_animals()

    def world(self) -> dict[str, Any]:
        return {
            "animals": [{"x": float(x), "y": float(y)} for x, y in self.positions],
            "food": [{"x": float(x), "y": float(y)} for x, y in self.food],
        }

    def step(self) -> dict[str, float] | None:
        self._move()
        self._eat()
        self._steer()
        self.age += 1
        if self.age < self.config.steps_per_generation:
            return None
        return self._evolve()

    def _scatter_animals(self) -> None:
        count = self.config.animal_count
        self.positions = self.rng.random((count, 2))
        self.rotations = self.rng.uniform(-math.pi, math.pi, size=count)
        self.speeds = np.full(count, 0.002)
        self.scores = np.zeros(count)

    def _move(self) -> None:
        heading = np.stack([np.cos(self.rotations), np.sin(self.rotations)], axis=1)
        self.positions = np.mod(self.positions + heading * self.speeds[:, None], 1.0)

    def _eat(self) -> None:
        distances = np.linalg.norm(self.food[None, :, :] - self.positions[:, None, :], axis=2)
        hits = distances < EAT_RADIUS
        eaten = hits.any(axis=0)
        if not eaten.any():
            return
        # one animal per food item: the first one in population order
        eaters = hits.argmax(axis=0)[eaten]
        np.add.at(self.scores, eaters, 1.0)
        self.food[eaten] = self.rng.random((int(eaten.sum()), 2))

    def _steer(self) -> None:
        deltas = self.food[None, :, :] - self.positions[:, None, :]
        distances = np.linalg.norm(deltas, axis=2)
        angles = np.arctan2(deltas[:, :, 1], deltas[:, :, 0]) - self.rotations[:, None]
        angles = (angles + math.pi) % (2 * math.pi) - math.pi
        visible = (distances <= FOV_RANGE) & (np.abs(angles) <= FOV_ANGLE / 2)

        masked = np.where(visible, distances, np.inf)
        nearest = masked.argmin(axis=1)
        has_target = visible.any(axis=1)
        target_angle = np.where(has_target, angles[np.arange(len(nearest)), nearest], 0.0)

        turn_gain, speed_gain, wander = self.genomes.T
        noise = self.rng.normal(0.0, WANDER_NOISE, size=len(self.rotations))
        turn = np.clip(turn_gain * target_angle + wander * noise, -ROTATION_ACCEL, ROTATION_ACCEL)
        self.rotations = self.rotations + turn

        direction = np.where(has_target, 1.0, -1.0)
        self.speeds = np.clip(self.speeds + speed_gain * direction * SPEED_STEP, SPEED_MIN, SPEED_MAX)

    def _evolve(self) -> dict[str, float]:
        scores = self.scores
        stats = {
            "min_score": float(scores.min()),
            "avg_score": float(scores.mean()),
            "max_score": float(scores.max()),
        }

        count = len(scores)
        total = float(scores.sum())
        weights = scores / total if total > 0 else None
        parents_a = self.rng.choice(count, size=count, p=weights)
        parents_b = self.rng.choice(count, size=count, p=weights)

        crossover = self.rng.random(self.genomes.shape) < 0.5
        children = np.where(crossover, self.genomes[parents_a], self.genomes[parents_b])

        mutate = self.rng.random(children.shape) < self.config.mutation_rate
        signs = np.where(self.rng.random(children.shape) < 0.5, -1.0, 1.0)
        children = children + mutate * signs * self.config.mutation_coefficient * self.rng.random(children.shape)

        self.genomes = children
        self.age = 0
        self._scatter_animals()
        return stats


def build_engine(config: SimulationConfig) -> ForagerEngine:
    """Default engine factory."""
    return ForagerEngine(config)
