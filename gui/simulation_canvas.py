"""Responsive 16:9 drawing canvas and Qt-driven host loop."""

from __future__ import annotations

from typing import Any

from PySide6.QtCore import QRectF, Qt, QTimer
from PySide6.QtGui import QColor, QImage, QPainter
from PySide6.QtWidgets import QSizePolicy, QWidget

from core.host_loop import FrameCallback
from visualization.renderer import Color
from visualization.viewport import ASPECT_HEIGHT, ASPECT_WIDTH, SurfaceGeometry, surface_geometry


class QtHostLoop:
    """Reschedules frame callbacks on the Qt event loop."""

    def __init__(self, interval_ms: int = 16) -> None:
        self.interval_ms = max(0, int(interval_ms))

    def request_frame(self, callback: FrameCallback) -> None:
        QTimer.singleShot(self.interval_ms, callback)


class SimulationCanvas(QWidget):
    """Draw surface backed by an off-screen image.

    The backing image is sized to the displayed area times the device pixel
    ratio; drawing calls use logical units and Qt scales them uniformly.
    """

    def __init__(self) -> None:
        super().__init__()
        policy = QSizePolicy(QSizePolicy.Expanding, QSizePolicy.Preferred)
        policy.setHeightForWidth(True)
        self.setSizePolicy(policy)
        self.setMinimumSize(ASPECT_WIDTH * 10, ASPECT_HEIGHT * 10)

        self.geometry_info: SurfaceGeometry = surface_geometry(self.width(), self.devicePixelRatioF())
        self._image: QImage | None = None
        self._painter: QPainter | None = None
        self._resize_backing()

    # RenderTarget

    @property
    def surface_width(self) -> float:
        return self.geometry_info.logical_width

    @property
    def surface_height(self) -> float:
        return self.geometry_info.logical_height

    def is_available(self) -> bool:
        return self._image is not None and not self._image.isNull()

    def clear(self, width: float, height: float) -> None:
        self._end_painter()
        if self._image is None:
            return
        self._image.fill(QColor(0, 0, 0, 0))
        self._painter = QPainter(self._image)

    def fill_rect(self, x: float, y: float, width: float, height: float, color: Color) -> None:
        if self._painter is None:
            return
        self._painter.fillRect(QRectF(x, y, width, height), QColor(*color))

    def present(self) -> None:
        self._end_painter()
        self.update()

    # QWidget

    def hasHeightForWidth(self) -> bool:  # type: ignore[override]
        return True

    def heightForWidth(self, width: int) -> int:  # type: ignore[override]
        return int(round(width * ASPECT_HEIGHT / ASPECT_WIDTH))

    def resizeEvent(self, event: Any) -> None:  # type: ignore[override]
        self._resize_backing()
        super().resizeEvent(event)

    def paintEvent(self, _event: Any) -> None:  # type: ignore[override]
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor(18, 18, 18))
        if self._image is not None:
            painter.drawImage(0, 0, self._image)
        painter.end()

    def _resize_backing(self) -> None:
        self._end_painter()
        geometry = surface_geometry(self.width(), self.devicePixelRatioF())
        image = QImage(
            max(1, geometry.backing_width),
            max(1, geometry.backing_height),
            QImage.Format_ARGB32_Premultiplied,
        )
        image.setDevicePixelRatio(geometry.scale)
        image.fill(Qt.transparent)
        self._image = image
        self.geometry_info = geometry

    def _end_painter(self) -> None:
        if self._painter is not None:
            self._painter.end()
            self._painter = None

    def backing_size(self) -> tuple[int, int]:
        if self._image is None:
            return 0, 0
        return self._image.width(), self._image.height()
