"""Renderer mapping and surface geometry."""

from __future__ import annotations

import pytest

from core.render_state import Entity, WorldSnapshot
from visualization.renderer import ANIMAL_COLOR, ENTITY_SIZE, FOOD_COLOR, render, to_surface
from visualization.viewport import surface_geometry


def test_corner_mapping(surface) -> None:
    snapshot = WorldSnapshot(animals=(Entity(0.0, 0.0), Entity(1.0, 1.0)))

    render(snapshot, surface, 320, 180)

    rects = surface.calls[1:]
    assert rects[0] == ("rect", 0.0, 0.0, ENTITY_SIZE, ENTITY_SIZE, ANIMAL_COLOR)
    assert rects[1] == ("rect", 320.0, 180.0, ENTITY_SIZE, ENTITY_SIZE, ANIMAL_COLOR)


def test_clear_first_and_food_below_animals(surface) -> None:
    snapshot = WorldSnapshot(animals=(Entity(0.5, 0.5),), food=(Entity(0.25, 0.75), Entity(0.1, 0.1)))

    render(snapshot, surface, 100, 40)

    assert surface.calls[0] == ("clear", 100, 40)
    colors = [call[5] for call in surface.calls[1:]]
    assert colors == [FOOD_COLOR, FOOD_COLOR, ANIMAL_COLOR]
    assert surface.calls[1][1:3] == (25.0, 30.0)


def test_frames_do_not_accumulate(surface) -> None:
    render(WorldSnapshot(animals=(Entity(0.1, 0.1),) * 5), surface, 100, 100)
    render(WorldSnapshot(food=(Entity(0.2, 0.2),)), surface, 100, 100)

    assert len(surface.calls) == 2
    assert surface.calls[1][5] == FOOD_COLOR


def test_to_surface_scales_each_axis() -> None:
    assert to_surface(Entity(0.5, 0.25), 200, 80) == (100.0, 20.0)


@pytest.mark.parametrize(
    ("container_width", "ratio", "backing"),
    [(1600, 1.0, (1600, 900)), (1600, 2.0, (3200, 1800)), (800, 1.5, (1200, 675)), (320, 3.0, (960, 540))],
)
def test_surface_geometry_is_16_by_9(container_width, ratio, backing) -> None:
    geometry = surface_geometry(container_width, ratio)

    assert (geometry.backing_width, geometry.backing_height) == backing
    assert geometry.backing_width * 9 == geometry.backing_height * 16
    assert geometry.logical_width == container_width
    assert geometry.logical_height == container_width * 9 / 16
    assert geometry.scale == ratio


def test_surface_geometry_tolerates_bad_ratio() -> None:
    geometry = surface_geometry(160, 0)

    assert (geometry.backing_width, geometry.backing_height) == (160, 90)
