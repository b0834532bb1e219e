from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class TickMetrics:
    tick: int
    population: int
    mean_speed: float
    sigma_speed: float
    mean_distance: float
    sigma_distance: float
    tick_duration_ms: float = 0.0
