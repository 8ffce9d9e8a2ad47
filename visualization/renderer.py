"""Stateless world-snapshot renderer."""

from __future__ import annotations

from typing import Iterable, Protocol

from core.render_state import Entity, WorldSnapshot


Color = tuple[int, int, int]

ANIMAL_COLOR: Color = (255, 0, 0)
FOOD_COLOR: Color = (0, 255, 0)
ENTITY_SIZE = 10.0


class DrawSurface(Protocol):
    """Minimal drawing primitives, in logical units."""

    def clear(self, width: float, height: float) -> None:
        ...

    def fill_rect(self, x: float, y: float, width: float, height: float, color: Color) -> None:
        ...


class RenderTarget(DrawSurface, Protocol):
    """Sized surface the frame scheduler draws into."""

    @property
    def surface_width(self) -> float:
        ...

    @property
    def surface_height(self) -> float:
        ...

    def is_available(self) -> bool:
        ...

    def present(self) -> None:
        ...


def to_surface(entity: Entity, surface_width: float, surface_height: float) -> tuple[float, float]:
    """Map a normalized entity position to the top-left corner of its square."""
    return entity.x * surface_width, entity.y * surface_height


def render(snapshot: WorldSnapshot, surface: DrawSurface, surface_width: float, surface_height: float) -> None:
    """Clear ``surface`` and draw every entity of ``snapshot``.

    Food is drawn first so animals stay visible on top of it.
    """
    surface.clear(surface_width, surface_height)
    _draw_entities(snapshot.food, FOOD_COLOR, surface, surface_width, surface_height)
    _draw_entities(snapshot.animals, ANIMAL_COLOR, surface, surface_width, surface_height)


def _draw_entities(
    entities: Iterable[Entity],
    color: Color,
    surface: DrawSurface,
    surface_width: float,
    surface_height: float,
) -> None:
    for entity in entities:
        x, y = to_surface(entity, surface_width, surface_height)
        surface.fill_rect(x, y, ENTITY_SIZE, ENTITY_SIZE, color)
