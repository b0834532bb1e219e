from __future__ import annotations

import logging

from ..core.agent import Boid
from ..core.config import SimulationConfig
from ..core.errors import NotEnoughAgents
from ..core.flock import Flock
from ..core.rng import DeterministicRng

logger = logging.getLogger(__name__)


def bootstrap_flock(config: SimulationConfig, rng: DeterministicRng) -> Flock:
    if config.boid_count < 2:
        raise NotEnoughAgents(
            f"Not enough data: {config.boid_count} boids requested, try generating a bigger flock"
        )
    bounds = config.bounds
    speed = config.initial_speed
    flock = Flock(bounds)
    for _ in range(config.boid_count):
        position = rng.next_vector(0.0, bounds.width, 0.0, bounds.height)
        velocity = rng.next_vector(-speed, speed, -speed, speed)
        flock.add(
            Boid(
                position=position,
                velocity=velocity,
                parameters=config.parameters,
                max_speed=config.max_speed,
            )
        )
    logger.info("Generated %d boids in a %gx%g field", len(flock), bounds.width, bounds.height)
    return flock
