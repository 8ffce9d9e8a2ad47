"""Simulation parameter sliders and fast-forward control."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QFormLayout, QHBoxLayout, QLabel, QPushButton, QSlider, QVBoxLayout, QWidget

from configs.loader import SimulationConfig


# field name -> (label, slider min, slider max, slider units per config unit)
_SLIDERS: dict[str, tuple[str, int, int, int]] = {
    "animal_count": ("Animals", 1, 200, 1),
    "food_count": ("Food", 1, 200, 1),
    "mutation_rate": ("Mutation rate", 0, 1000, 1000),
    "mutation_coefficient": ("Mutation coefficient", 0, 100, 100),
}


class ControlsPanel(QWidget):
    """Four parameter sliders with live readouts plus a fast-forward button."""

    def __init__(self) -> None:
        super().__init__()
        self.on_config_changed: Callable[[str, int | float], None] | None = None
        self.on_fast_forward: Callable[[], None] | None = None
        self._updating = False
        self.sliders: dict[str, QSlider] = {}
        self.readouts: dict[str, QLabel] = {}

        root = QVBoxLayout(self)
        form = QFormLayout()
        for name, (label, minimum, maximum, _scale) in _SLIDERS.items():
            slider = QSlider(Qt.Horizontal)
            slider.setMinimum(minimum)
            slider.setMaximum(maximum)
            readout = QLabel()
            readout.setMinimumWidth(48)
            row = QHBoxLayout()
            row.addWidget(slider)
            row.addWidget(readout)
            form.addRow(QLabel(label), row)
            slider.valueChanged.connect(lambda value, field=name: self._on_slider_change(field, value))
            self.sliders[name] = slider
            self.readouts[name] = readout

        self.fast_forward_btn = QPushButton("Fast-forward")
        self.fast_forward_btn.clicked.connect(lambda: self.on_fast_forward and self.on_fast_forward())

        root.addLayout(form)
        root.addWidget(self.fast_forward_btn)
        root.addStretch(1)

    def set_values(self, config: SimulationConfig) -> None:
        """Show ``config`` without emitting change callbacks."""
        self._updating = True
        try:
            for name, slider in self.sliders.items():
                value = getattr(config, name)
                scale = _SLIDERS[name][3]
                slider.setValue(int(round(float(value) * scale)))
                self.readouts[name].setText(_format_value(name, value))
        finally:
            self._updating = False

    def value_of(self, name: str) -> int | float:
        scale = _SLIDERS[name][3]
        raw = self.sliders[name].value()
        if scale == 1:
            return int(raw)
        return float(raw) / scale

    def _on_slider_change(self, name: str, _raw: int) -> None:
        value = self.value_of(name)
        self.readouts[name].setText(_format_value(name, value))
        if not self._updating and self.on_config_changed is not None:
            self.on_config_changed(name, value)


def _format_value(name: str, value: int | float) -> str:
    if _SLIDERS[name][3] == 1:
        return str(int(value))
    return f"{float(value):g}"
