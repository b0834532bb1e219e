from __future__ import annotations

import logging
import math
from time import perf_counter
from typing import Any, Dict, List

from .config import SimulationConfig
from .flock import Flock
from .rng import DeterministicRng
from ..systems import metrics as metrics_system
from ..systems.spawning import bootstrap_flock
from ..types.metrics import TickMetrics
from ..types.snapshot import FlockSnapshot, SnapshotMetadata
from ..utils.math2d import angle, magnitude

logger = logging.getLogger(__name__)


class Simulation:
    def __init__(self, config: SimulationConfig):
        self._config = config
        self._rng = DeterministicRng(config.seed)
        self._flock = bootstrap_flock(config, self._rng)
        self._metrics: TickMetrics | None = None

    @property
    def config(self) -> SimulationConfig:
        return self._config

    @property
    def flock(self) -> Flock:
        return self._flock

    @property
    def metrics(self) -> TickMetrics | None:
        return self._metrics

    def reset(self) -> None:
        self._rng.reset()
        self._flock = bootstrap_flock(self._config, self._rng)
        self._metrics = None
        logger.info("Simulation reset with seed %d", self._config.seed)

    def step(self, tick: int) -> TickMetrics:
        start = perf_counter()
        self._flock.update_flock(self._config.time_step)
        duration_ms = (perf_counter() - start) * 1000.0
        self._metrics = metrics_system.create_metrics(tick, self._flock, duration_ms)
        return self._metrics

    def snapshot(self, tick: int) -> FlockSnapshot:
        metrics = self._metrics
        if metrics is None or metrics.tick != tick:
            metrics = metrics_system.create_metrics(tick, self._flock, 0.0)
        config = self._config
        boids: List[Dict[str, Any]] = []
        for index, boid in enumerate(self._flock):
            boids.append(
                {
                    "index": index,
                    "x": boid.position.x,
                    "y": boid.position.y,
                    "vx": boid.velocity.x,
                    "vy": boid.velocity.y,
                    "speed": magnitude(boid.velocity),
                    "heading": angle(boid.velocity),
                }
            )
        metadata = SnapshotMetadata(
            field_width=config.bounds.width,
            field_height=config.bounds.height,
            sim_dt=config.time_step,
            tick_rate=1.0 / config.time_step if config.time_step > 0 else math.inf,
            seed=config.seed,
            config_version=config.config_version,
        )
        return FlockSnapshot(tick=tick, metrics=metrics, boids=boids, metadata=metadata)
