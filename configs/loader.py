"""Configuration loading and validation for the simulation viewer."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

from core.errors import ConfigurationError


DEFAULT_STEPS_PER_GENERATION = 2500
DEFAULT_CONFIG_PATH = Path(__file__).with_name("default.yaml")

_REQUIRED_KEYS: tuple[str, ...] = (
    "animal_count",
    "food_count",
    "mutation_rate",
    "mutation_coefficient",
)
_OPTIONAL_KEYS: tuple[str, ...] = ("steps_per_generation", "seed")


@dataclass(frozen=True)
class SimulationConfig:
    """Validated engine construction parameters.

    Typed fields cover what the engine consumes; application-level keys
    (frame interval, fast-forward length) live in ``extras``.
    """

    animal_count: int
    food_count: int
    mutation_rate: float
    mutation_coefficient: float
    steps_per_generation: int = DEFAULT_STEPS_PER_GENERATION
    seed: int | None = None
    extras: dict[str, Any] = field(default_factory=dict)

    def validate(self) -> "SimulationConfig":
        """Raise ``ConfigurationError`` if any parameter is outside its domain."""
        for name in ("animal_count", "food_count", "steps_per_generation"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
            if value <= 0:
                raise ConfigurationError(f"{name} must be > 0, got {value}")
        for name in ("mutation_rate", "mutation_coefficient"):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or isinstance(value, bool) or not math.isfinite(value):
                raise ConfigurationError(f"{name} must be a finite number, got {value!r}")
            if not 0.0 <= float(value) <= 1.0:
                raise ConfigurationError(f"{name} must be in [0.0, 1.0], got {value}")
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            raise ConfigurationError(f"seed must be an integer or null, got {self.seed!r}")
        return self

    def with_changes(self, **changes: Any) -> "SimulationConfig":
        """Return a validated copy with ``changes`` applied."""
        return replace(self, **changes).validate()

    def get(self, key: str, default: Any = None) -> Any:
        """Return a typed field or an ``extras`` value by key."""
        if key in {f.name for f in fields(self)} and key != "extras":
            return getattr(self, key)
        return self.extras.get(key, default)

    def to_dict(self) -> dict[str, Any]:
        """Return a full dictionary view of the configuration."""
        payload = {
            "animal_count": self.animal_count,
            "food_count": self.food_count,
            "mutation_rate": self.mutation_rate,
            "mutation_coefficient": self.mutation_coefficient,
            "steps_per_generation": self.steps_per_generation,
            "seed": self.seed,
        }
        payload.update(self.extras)
        return payload


class ConfigLoader:
    """Load and validate simulation config files (YAML or JSON)."""

    @staticmethod
    def load(path: str | Path = DEFAULT_CONFIG_PATH) -> SimulationConfig:
        """Load a single simulation config from ``path``.

        Args:
            path: Path to a YAML or JSON config file.

        Returns:
            A validated ``SimulationConfig`` instance.
        """
        payload = _read_config_payload(path)
        if not isinstance(payload, Mapping):
            raise ConfigurationError(f"Config file '{path}' must contain a mapping object.")
        return build_config(payload)


def build_config(payload: Mapping[str, Any]) -> SimulationConfig:
    """Validate a raw mapping and build ``SimulationConfig``."""
    missing = [key for key in _REQUIRED_KEYS if key not in payload]
    if missing:
        raise ConfigurationError(f"Missing required config keys: {', '.join(missing)}")

    try:
        config = SimulationConfig(
            animal_count=_as_int(payload["animal_count"]),
            food_count=_as_int(payload["food_count"]),
            mutation_rate=float(payload["mutation_rate"]),
            mutation_coefficient=float(payload["mutation_coefficient"]),
            steps_per_generation=_as_int(payload.get("steps_per_generation", DEFAULT_STEPS_PER_GENERATION)),
            seed=None if payload.get("seed") is None else _as_int(payload["seed"]),
            extras={k: v for k, v in payload.items() if k not in _REQUIRED_KEYS + _OPTIONAL_KEYS},
        )
    except ConfigurationError:
        raise
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid config value: {exc}") from exc
    return config.validate()


def _as_int(value: Any) -> int:
    if isinstance(value, float) and not value.is_integer():
        raise ConfigurationError(f"Expected an integer, got {value!r}")
    return int(value)


def _read_config_payload(path: str | Path) -> Any:
    """Read raw config payload from JSON or YAML file."""
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigurationError(f"Config file not found: {config_path}")

    suffix = config_path.suffix.lower()
    content = config_path.read_text(encoding="utf-8")
    try:
        if suffix == ".json":
            return json.loads(content)
        if suffix in {".yaml", ".yml"}:
            return yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Failed to parse config '{config_path}': {exc}") from exc

    raise ConfigurationError(f"Unsupported config extension: {suffix}")
