"""Viewer main window: controls | canvas | stats."""

from __future__ import annotations

import logging
from typing import Any

from PySide6.QtWidgets import QHBoxLayout, QMainWindow, QWidget

from core.context import ControlContext
from core.errors import ConfigurationError, EngineConstructionFailure, FastForwardInProgressError
from core.fast_forward import DEFAULT_TARGET_GENERATIONS, FastForwardController
from core.scheduler import FrameScheduler
from gui.controls_panel import ControlsPanel
from gui.simulation_canvas import QtHostLoop, SimulationCanvas
from gui.stats_panel import StatsPanel

LOGGER = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Wires widgets to the control context; owns no simulation state itself."""

    def __init__(self, context: ControlContext) -> None:
        super().__init__()
        self.context = context
        self.setWindowTitle("Forager Evolution")
        self.resize(1280, 640)

        self.controls = ControlsPanel()
        self.canvas = SimulationCanvas()
        self.stats_panel = StatsPanel()

        center = QWidget()
        root = QHBoxLayout(center)
        root.addWidget(self.controls, stretch=2)
        root.addWidget(self.canvas, stretch=7)
        root.addWidget(self.stats_panel, stretch=3)
        self.setCentralWidget(center)

        interval_ms = int(context.config.get("frame_interval_ms", 16))
        self.fast_forward_generations = int(
            context.config.get("fast_forward_generations", DEFAULT_TARGET_GENERATIONS)
        )
        self.scheduler = FrameScheduler(context, self.canvas, QtHostLoop(interval_ms))
        self.fast_forward = FastForwardController(context)

        self.context.subscribe(self.stats_panel.update_stats)
        self.context.on_generation(self.stats_panel.add_generation)
        self.controls.set_values(context.config)
        self.controls.on_config_changed = self._on_config_changed
        self.controls.on_fast_forward = self._on_fast_forward

    def start(self) -> None:
        """Start the frame loop; raises ``RenderTargetUnavailable`` if the canvas is unusable."""
        self.context.publish()
        self.scheduler.start()

    def _on_config_changed(self, field: str, value: int | float) -> None:
        try:
            config = self.context.config.with_changes(**{field: value})
            self.context.replace_config(config)
        except (ConfigurationError, FastForwardInProgressError) as exc:
            LOGGER.warning("Configuration change rejected: %s", exc)
            self.controls.set_values(self.context.config)
            return
        except EngineConstructionFailure:
            LOGGER.exception("Engine construction failed; keeping previous simulation")
            self.controls.set_values(self.context.config)
            return
        self.stats_panel.clear_history()

    def _on_fast_forward(self) -> None:
        self.controls.fast_forward_btn.setEnabled(False)
        try:
            self.fast_forward.run(self.fast_forward_generations)
        except FastForwardInProgressError as exc:
            LOGGER.warning("%s", exc)
        except Exception:
            LOGGER.exception("Fast-forward interrupted")
        finally:
            self.controls.fast_forward_btn.setEnabled(True)

    def closeEvent(self, event: Any) -> None:  # type: ignore[override]
        self.scheduler.stop()
        super().closeEvent(event)
