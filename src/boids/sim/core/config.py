from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, fields
from pathlib import Path

import yaml

from .errors import ConfigurationError

logger = logging.getLogger(__name__)


def _require_number(name: str, value: object, label: str = "Parameter") -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or math.isnan(value):
        raise ConfigurationError(f"{label} {name} must be a number, got {value!r}.", field=name)


def _require_int(name: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"Setting {name} must be an integer, got {value!r}.", field=name)

FIELD_WIDTH = 1280.0
FIELD_HEIGHT = 720.0


@dataclass(frozen=True, slots=True)
class Parameters:
    """Steering parameters shared by the three flocking rules.

    ``d`` is the visibility radius used by alignment and cohesion, ``ds`` the
    (smaller) radius that triggers separation, and ``s``, ``a``, ``c`` the
    weights of separation, alignment and cohesion. The defaults are valid and
    inert: every rule evaluates to the zero vector.

    Instances are immutable; use :func:`dataclasses.replace` (or
    ``Boid.update_parameters``) to change a field, which re-runs the full
    validation.
    """

    d: float = 1.0
    ds: float = 0.0
    s: float = 0.0
    a: float = 0.0
    c: float = 0.0

    def __post_init__(self) -> None:
        for name in ("d", "ds", "s", "a", "c"):
            _require_number(name, getattr(self, name))
        if self.d < 0.0:
            raise ConfigurationError("Parameter d must be positive.", field="d")
        if self.ds < 0.0 or self.ds >= self.d:
            raise ConfigurationError("Parameter ds must be positive and smaller than d.", field="ds")
        for name in ("s", "a", "c"):
            value = getattr(self, name)
            if value < 0.0 or value > 1.0:
                raise ConfigurationError(f"Parameter {name} must be a number between 0 and 1.", field=name)


@dataclass(frozen=True, slots=True)
class FieldConfig:
    width: float = FIELD_WIDTH
    height: float = FIELD_HEIGHT

    def __post_init__(self) -> None:
        _require_number("width", self.width, label="Field")
        _require_number("height", self.height, label="Field")
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(
                f"Field size must be positive, got {self.width}x{self.height}.", field="field"
            )


DEFAULT_FIELD = FieldConfig()


@dataclass
class SimulationConfig:
    time_step: float = 1.0 / 60.0
    boid_count: int = 100
    max_speed: float = 500.0
    initial_speed: float = 1.0
    seed: int = 42
    config_version: str = "v1"
    bounds: FieldConfig = field(default_factory=FieldConfig)
    parameters: Parameters = field(
        default_factory=lambda: Parameters(d=60.0, ds=15.0, s=0.05, a=0.05, c=0.01)
    )

    @staticmethod
    def from_yaml(path: Path) -> "SimulationConfig":
        try:
            data = yaml.safe_load(Path(path).read_text())
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Configuration file {path} is not valid YAML: {exc}") from exc
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file {path} must contain a mapping.")
        logger.debug("Loaded configuration from %s", path)
        return load_config(data)


def _section(raw: dict, key: str, cls: type) -> dict:
    section = raw.get(key, {}) or {}
    if not isinstance(section, dict):
        raise ConfigurationError(f"Section '{key}' must be a mapping.", field=key)
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(section) - known)
    if unknown:
        raise ConfigurationError(f"Unknown keys in '{key}': {', '.join(unknown)}.", field=key)
    return {k: float(v) if isinstance(v, int) and not isinstance(v, bool) else v for k, v in section.items()}


def load_config(raw: dict) -> SimulationConfig:
    defaults = SimulationConfig()
    bounds = FieldConfig(**_section(raw, "bounds", FieldConfig))
    parameters_raw = _section(raw, "parameters", Parameters)
    parameters = Parameters(**parameters_raw) if parameters_raw else defaults.parameters

    known = {f.name for f in fields(SimulationConfig)} - {"bounds", "parameters"}
    sim_values = {k: v for k, v in raw.items() if k not in {"bounds", "parameters"}}
    unknown = sorted(set(sim_values) - known)
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}.")

    for name in ("boid_count", "seed"):
        if name in sim_values:
            _require_int(name, sim_values[name])
    for name in ("time_step", "max_speed", "initial_speed"):
        if name in sim_values:
            _require_number(name, sim_values[name], label="Setting")
    if "config_version" in sim_values and not isinstance(sim_values["config_version"], str):
        raise ConfigurationError("Setting config_version must be a string.", field="config_version")

    config = SimulationConfig(bounds=bounds, parameters=parameters, **sim_values)
    if config.boid_count < 0:
        raise ConfigurationError("boid_count must not be negative.", field="boid_count")
    if config.max_speed < 0:
        raise ConfigurationError("max_speed must not be negative.", field="max_speed")
    if config.time_step <= 0:
        raise ConfigurationError("time_step must be positive.", field="time_step")
    if config.initial_speed < 0:
        raise ConfigurationError("initial_speed must not be negative.", field="initial_speed")
    return config
