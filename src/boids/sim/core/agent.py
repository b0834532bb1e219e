from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Any, Sequence

from pygame.math import Vector2

from .config import DEFAULT_FIELD, FieldConfig, Parameters
from .errors import ConfigurationError
from ..systems import steering
from ..utils.math2d import _clamp_length, magnitude


@dataclass(slots=True)
class Boid:
    position: Vector2 = field(default_factory=Vector2)
    velocity: Vector2 = field(default_factory=Vector2)
    parameters: Parameters = field(default_factory=Parameters)
    max_speed: float = math.inf

    def __setattr__(self, name: str, value: Any) -> None:
        if name in ("position", "velocity"):
            value = Vector2(value)
        elif name == "parameters":
            if not isinstance(value, Parameters):
                raise ConfigurationError(f"Expected Parameters, got {type(value).__name__}.", field=name)
        elif name == "max_speed":
            value = float(value)
            if math.isnan(value) or value < 0.0:
                raise ConfigurationError("Max speed must not be negative.", field=name)
        object.__setattr__(self, name, value)

    def update_parameters(self, **changes: float) -> Parameters:
        """Change individual parameter fields, revalidating the whole bundle."""
        self.parameters = replace(self.parameters, **changes)
        return self.parameters

    def copy(self) -> "Boid":
        return Boid(self.position, self.velocity, self.parameters, self.max_speed)

    @property
    def speed(self) -> float:
        return magnitude(self.velocity)

    def separation(self, neighbors: Sequence[Boid]) -> Vector2:
        return steering.separation(self, neighbors)

    def alignment(self, neighbors: Sequence[Boid]) -> Vector2:
        return steering.alignment(self, neighbors)

    def cohesion(self, neighbors: Sequence[Boid]) -> Vector2:
        return steering.cohesion(self, neighbors)

    def update_velocity(self, neighbors: Sequence[Boid]) -> None:
        v1 = self.separation(neighbors)
        v2 = self.alignment(neighbors)
        v3 = self.cohesion(neighbors)
        self.velocity = _clamp_length(self.velocity + v1 + v2 + v3, self.max_speed)

    def update_position(self, delta_time: float) -> None:
        self.position = self.position + self.velocity * delta_time

    def wrap_boundaries(self, width: float = DEFAULT_FIELD.width, height: float = DEFAULT_FIELD.height) -> None:
        # Only positions strictly outside the field are moved.
        x, y = self.position.x, self.position.y
        if x < 0.0:
            x = width
        elif x > width:
            x = 0.0
        if y < 0.0:
            y = height
        elif y > height:
            y = 0.0
        self.position = Vector2(x, y)

    def step(self, neighbors: Sequence[Boid], delta_time: float, bounds: FieldConfig | None = None) -> None:
        bounds = DEFAULT_FIELD if bounds is None else bounds
        self.update_velocity(neighbors)
        self.update_position(delta_time)
        self.wrap_boundaries(bounds.width, bounds.height)
