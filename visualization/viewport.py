"""Responsive 16:9 surface geometry with device-pixel-ratio correction."""

from __future__ import annotations

from dataclasses import dataclass


ASPECT_WIDTH = 16
ASPECT_HEIGHT = 9


@dataclass(frozen=True)
class SurfaceGeometry:
    """Logical (drawing) size and physical backing size of the canvas."""

    logical_width: float
    logical_height: float
    backing_width: int
    backing_height: int
    scale: float


def surface_geometry(container_width: float, device_pixel_ratio: float = 1.0) -> SurfaceGeometry:
    """Fit a 16:9 surface to ``container_width``.

    The backing store is the displayed size times ``device_pixel_ratio``;
    drawing stays in logical units and is scaled uniformly by that ratio.
    """
    width = max(0.0, float(container_width))
    ratio = float(device_pixel_ratio) if device_pixel_ratio > 0 else 1.0
    height = width * ASPECT_HEIGHT / ASPECT_WIDTH
    return SurfaceGeometry(
        logical_width=width,
        logical_height=height,
        backing_width=int(round(width * ratio)),
        backing_height=int(round(height * ratio)),
        scale=ratio,
    )
