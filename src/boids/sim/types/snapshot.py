from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

from .metrics import TickMetrics


@dataclass(slots=True)
class FlockSnapshot:
    tick: int
    metrics: TickMetrics
    boids: List[Dict[str, Any]]
    metadata: "SnapshotMetadata"


@dataclass(slots=True)
class SnapshotMetadata:
    field_width: float
    field_height: float
    sim_dt: float
    tick_rate: float
    seed: int
    config_version: str
