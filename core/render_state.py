"""Immutable world-snapshot and generation-stats contracts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class Entity:
    """Point entity in normalized world space, ``x`` and ``y`` in [0, 1]."""

    x: float
    y: float


@dataclass(frozen=True)
class WorldSnapshot:
    """Point-in-time view of entity positions used for one render."""

    animals: tuple[Entity, ...] = ()
    food: tuple[Entity, ...] = ()


@dataclass(frozen=True)
class GenerationStats:
    """Scores reported by the engine when a generation boundary is crossed."""

    avg_score: float
    min_score: float | None = None
    max_score: float | None = None


def normalize_snapshot(raw: Any) -> WorldSnapshot:
    """Build a ``WorldSnapshot`` from an engine world payload.

    Accepts mappings, dataclasses or plain objects exposing ``animals`` and
    ``food`` sequences whose items carry ``x``/``y`` (or ``position``).
    """
    if isinstance(raw, WorldSnapshot):
        return raw
    return WorldSnapshot(
        animals=_normalize_entities(_read(raw, "animals")),
        food=_normalize_entities(_read(raw, "food")),
    )


def normalize_stats(raw: Any) -> GenerationStats | None:
    """Build ``GenerationStats`` from an engine step result, ``None`` passes through."""
    if raw is None:
        return None
    if isinstance(raw, GenerationStats):
        return raw
    avg_score = _read(raw, "avg_score")
    if avg_score is None:
        raise ValueError(f"Step result is missing 'avg_score': {raw!r}")
    return GenerationStats(
        avg_score=float(avg_score),
        min_score=_optional_float(_read(raw, "min_score")),
        max_score=_optional_float(_read(raw, "max_score")),
    )


def _read(value: Any, key: str) -> Any:
    if isinstance(value, Mapping):
        return value.get(key)
    return getattr(value, key, None)


def _normalize_entities(raw_entities: Any) -> tuple[Entity, ...]:
    if raw_entities is None:
        return ()
    entities: list[Entity] = []
    for raw_entity in raw_entities:
        if isinstance(raw_entity, Entity):
            entities.append(raw_entity)
            continue
        position = _read(raw_entity, "position")
        if isinstance(position, (list, tuple)) and len(position) >= 2:
            x, y = position[0], position[1]
        else:
            x, y = _read(raw_entity, "x"), _read(raw_entity, "y")
        if x is None or y is None:
            raise ValueError(f"Entity has no position: {raw_entity!r}")
        entities.append(Entity(x=float(x), y=float(y)))
    return tuple(entities)


def _optional_float(value: Any) -> float | None:
    if value is None:
        return None
    return float(value)
