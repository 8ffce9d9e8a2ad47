"""Component wiring for the viewer and the headless runner."""

from __future__ import annotations

from pathlib import Path

from configs.loader import ConfigLoader, SimulationConfig
from core.context import ControlContext
from core.fast_forward import FastForwardController
from data.logger import GenerationLogger
from simulations.base_simulation import EngineFactory
from simulations.forager.engine import build_engine


def build_context(config: SimulationConfig, engine_factory: EngineFactory | None = None) -> ControlContext:
    """Build a control context from a simulation configuration."""
    return ControlContext(config, engine_factory or build_engine)


def run_headless(
    config: SimulationConfig,
    generations: int,
    db_path: str | Path,
    engine_factory: EngineFactory | None = None,
) -> str:
    """Fast-forward ``generations`` generations and log each one to SQLite.

    Returns:
        The run id under which generations were logged.
    """
    context = build_context(config, engine_factory)
    logger = GenerationLogger(db_path)
    try:
        run_id = logger.start_run(config.to_dict(), seed=config.seed)
        context.on_generation(lambda number, stats: logger.log_generation(run_id, number, stats))
        FastForwardController(context).run(generations)
    finally:
        logger.close()
    return run_id


def main(config_path: str | Path | None = None) -> None:
    """Load config and launch the desktop viewer."""
    from gui.app import main as gui_main

    args = ["--config", str(config_path)] if config_path is not None else []
    raise SystemExit(gui_main(args))


if __name__ == "__main__":
    main()
