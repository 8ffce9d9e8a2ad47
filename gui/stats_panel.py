"""Generation readouts and live score history chart."""

from __future__ import annotations

import pyqtgraph as pg
from PySide6.QtWidgets import QFormLayout, QLabel, QVBoxLayout, QWidget

from core.render_state import GenerationStats
from core.run_state import DisplayedStats


class StatsPanel(QWidget):
    """Shows generation number, age and last average score."""

    def __init__(self) -> None:
        super().__init__()
        self.generations: list[int] = []
        self.avg_scores: list[float] = []

        root = QVBoxLayout(self)
        form = QFormLayout()
        self.number_label = QLabel("1")
        self.age_label = QLabel("0")
        self.score_label = QLabel("0.00")
        form.addRow(QLabel("Generation"), self.number_label)
        form.addRow(QLabel("Age"), self.age_label)
        form.addRow(QLabel("Average score"), self.score_label)
        root.addLayout(form)

        self.plot_widget = pg.PlotWidget()
        self.plot_widget.setLabel("bottom", "generation")
        self.plot_widget.setLabel("left", "avg score")
        self._curve = self.plot_widget.plot([], [], pen=pg.mkPen("#4ecdc4", width=2))
        root.addWidget(self.plot_widget, stretch=1)

    def update_stats(self, stats: DisplayedStats) -> None:
        self.number_label.setText(stats.number)
        self.age_label.setText(stats.age)
        self.score_label.setText(stats.score)

    def add_generation(self, generation_number: int, stats: GenerationStats) -> None:
        self.generations.append(int(generation_number))
        self.avg_scores.append(float(stats.avg_score))
        self._curve.setData(self.generations, self.avg_scores)

    def clear_history(self) -> None:
        self.generations = []
        self.avg_scores = []
        self._curve.setData([], [])
