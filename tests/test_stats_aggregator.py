from __future__ import annotations

import random

from core.render_state import GenerationStats
from core.run_state import DisplayedStats, RunState, StatsAggregator


def test_absent_result_ages_generation() -> None:
    aggregator = StatsAggregator()

    aggregator.update(None)
    aggregator.update(None)

    assert aggregator.state.generation_age == 2
    assert aggregator.state.generation_number == 1


def test_stats_result_starts_new_generation() -> None:
    aggregator = StatsAggregator(RunState(generation_number=3, generation_age=17))

    aggregator.update(GenerationStats(avg_score=4.25))

    assert aggregator.state == RunState(generation_number=4, generation_age=0, last_avg_score=4.25)


def test_counts_follow_step_sequence() -> None:
    rng = random.Random(5)
    results = [GenerationStats(avg_score=rng.random()) if rng.random() < 0.2 else None for _ in range(200)]
    aggregator = StatsAggregator()

    for result in results:
        aggregator.update(result)

    stats_indices = [i for i, result in enumerate(results) if result is not None]
    assert aggregator.state.generation_number == 1 + len(stats_indices)
    assert aggregator.state.generation_age == len(results) - 1 - stats_indices[-1]


def test_listeners_receive_finished_generation_number() -> None:
    aggregator = StatsAggregator()
    seen: list[tuple[int, float, int]] = []
    aggregator.subscribe(
        lambda number, stats: seen.append((number, stats.avg_score, aggregator.state.generation_number))
    )

    aggregator.update(None)
    aggregator.update(GenerationStats(avg_score=1.0))
    aggregator.update(GenerationStats(avg_score=2.0))

    assert seen == [(1, 1.0, 2), (2, 2.0, 3)]


def test_reset_restores_initial_state() -> None:
    aggregator = StatsAggregator(RunState(generation_number=9, generation_age=4, last_avg_score=3.3, rendering_enabled=False))

    aggregator.reset()

    assert aggregator.state == RunState()


def test_displayed_stats_formatting() -> None:
    state = RunState(generation_number=2, generation_age=0, last_avg_score=1.005 + 0.001)

    assert state.displayed() == DisplayedStats(number="2", age="0", score="1.01")
    assert RunState().displayed() == DisplayedStats(number="1", age="0", score="0.00")
