"""
Simulation Configuration
========================
Fixed values the user does not type in for each run: the gravitational
constant, the central body's radius, the integration timestep, the starting
altitude and the table row cap. Configurations can be saved to and loaded
from JSON files.
"""

import json
import math
import numbers
from dataclasses import dataclass, asdict, fields

from .constants import (
    GRAVITATIONAL_CONSTANT, EARTH_RADIUS, DEFAULT_DT,
    DEFAULT_START_ALTITUDE, MAX_TABLE_ROWS,
)
from .errors import ConfigurationError


@dataclass
class SimulationConfig:
    G: float = GRAVITATIONAL_CONSTANT
    central_body_radius: float = EARTH_RADIUS   # m
    dt: float = DEFAULT_DT                      # s
    start_altitude: float = DEFAULT_START_ALTITUDE  # m above the surface
    max_table_rows: int = MAX_TABLE_ROWS

    @classmethod
    def from_dict(cls, data: dict) -> "SimulationConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(unknown[0], "unknown configuration key")
        for key, value in data.items():
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigurationError(key, f"expected a number, got {value!r}")
        cfg = cls(**data)
        if not isinstance(cfg.max_table_rows, numbers.Integral):
            raise ConfigurationError('max_table_rows',
                                     f"expected an integer, got {cfg.max_table_rows!r}")
        if not math.isfinite(cfg.dt) or cfg.dt <= 0:
            raise ConfigurationError('dt', f"must be > 0, got {cfg.dt!r}")
        if cfg.max_table_rows < 1:
            raise ConfigurationError('max_table_rows',
                                     f"must be >= 1, got {cfg.max_table_rows!r}")
        return cfg

    def to_dict(self) -> dict:
        return asdict(self)

    def with_overrides(self, **overrides) -> "SimulationConfig":
        """Copy with the given keys replaced; None values are ignored."""
        data = self.to_dict()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return SimulationConfig.from_dict(data)


def load_config(path: str) -> SimulationConfig:
    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(path, f"invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(path, "expected a JSON object")
    return SimulationConfig.from_dict(data)


def save_config(config: SimulationConfig, path: str) -> str:
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(config.to_dict(), f, indent=2)
    return path
