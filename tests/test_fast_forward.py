"""Fast-forward burst guarantees."""

from __future__ import annotations

import pytest

from core.context import ControlContext
from core.errors import FastForwardInProgressError
from core.fast_forward import FastForwardController
from core.host_loop import ManualHostLoop
from core.scheduler import FrameScheduler, SchedulerMode


@pytest.mark.parametrize("script", [[{"avg_score": 1.0}], [None, None, {"avg_score": 2.0}], [None] * 40 + [{"avg_score": 0.5}]])
def test_run_advances_exactly_target_generations(config, scripted_engine_factory, script) -> None:
    context = ControlContext(config, scripted_engine_factory(script=script))
    for _ in range(2):
        context.stats.update(None)
    before = context.run_state.generation_number

    steps = FastForwardController(context).run(10)

    state = context.run_state
    assert state.generation_number == before + 10
    assert state.generation_age == 0
    assert state.rendering_enabled is True
    assert steps == 10 * len(script)


def test_default_target_is_ten(config, engine_factory) -> None:
    context = ControlContext(config, engine_factory)

    FastForwardController(context).run()

    assert context.run_state.generation_number == 11
    assert context.run_state.last_avg_score == pytest.approx(30 / 4.0)


def test_rendering_suspended_only_during_burst(config, engine_factory, engines) -> None:
    context = ControlContext(config, engine_factory)
    modes: list[bool] = []
    context.on_generation(lambda _n, _s: modes.append(context.run_state.rendering_enabled))

    FastForwardController(context).run(3)

    assert modes == [False, False, False]
    assert context.run_state.rendering_enabled is True


def test_interrupted_burst_restores_rendering(config, engine_factory, engines) -> None:
    context = ControlContext(config, engine_factory)
    engine = engines[0]
    original_step = engine.step

    def failing_step():
        if engine.steps == 4:
            raise RuntimeError("engine crashed")
        return original_step()

    engine.step = failing_step
    controller = FastForwardController(context)

    with pytest.raises(RuntimeError, match="engine crashed"):
        controller.run(5)

    assert context.run_state.rendering_enabled is True
    assert not controller.running
    assert not context.busy
    assert context.run_state.generation_number == 2


def test_reentrant_run_is_rejected(config, engine_factory) -> None:
    context = ControlContext(config, engine_factory)
    controller = FastForwardController(context)
    rejected: list[Exception] = []

    def try_again(_number, _stats):
        try:
            controller.run(1)
        except FastForwardInProgressError as exc:
            rejected.append(exc)

    context.on_generation(try_again)
    controller.run(2)

    assert len(rejected) == 2
    assert context.run_state.generation_number == 3


def test_config_replacement_rejected_during_burst(config, engine_factory) -> None:
    context = ControlContext(config, engine_factory)
    rejected: list[Exception] = []

    def try_replace(_number, _stats):
        try:
            context.replace_config(config.with_changes(animal_count=1))
        except FastForwardInProgressError as exc:
            rejected.append(exc)

    context.on_generation(try_replace)
    FastForwardController(context).run(1)

    assert rejected
    assert context.config.animal_count == config.animal_count


@pytest.mark.parametrize("target", [0, -3, 2.7, 2.0, True, "10"])
def test_invalid_target_rejected(config, engine_factory, engines, target) -> None:
    controller = FastForwardController(ControlContext(config, engine_factory))

    with pytest.raises(ValueError):
        controller.run(target)
    assert controller.context.run_state.rendering_enabled is True
    assert engines[0].steps == 0


def test_scheduler_resumes_rendering_after_burst(config, engine_factory, engines, surface) -> None:
    context = ControlContext(config, engine_factory)
    loop = ManualHostLoop()
    scheduler = FrameScheduler(context, surface, loop)
    controller = FastForwardController(context)
    scheduler.start()
    loop.pump(1)

    controller.run(2)
    steps_after_burst = engines[0].steps
    loop.pump(1)

    assert scheduler.mode is SchedulerMode.RENDERING
    assert engines[0].steps == steps_after_burst + 1
    assert context.run_state.generation_age == 1
    assert surface.presented == 2
