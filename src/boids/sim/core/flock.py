from __future__ import annotations

import logging
from typing import Iterator, List

from .agent import Boid
from .config import DEFAULT_FIELD, FieldConfig, Parameters
from ..systems.statistics import sample_statistics
from ..types.statistics import Statistics
from ..utils.math2d import distance

logger = logging.getLogger(__name__)


class Flock:
    """Ordered, append-only collection of boids stepped in place.

    ``update_flock`` walks the boids in insertion order and each one observes
    the live collection, so boids later in the order already see the new
    velocities and positions of the earlier ones within the same tick.
    """

    def __init__(self, bounds: FieldConfig = DEFAULT_FIELD):
        self._boids: List[Boid] = []
        self.bounds = bounds

    @property
    def boids(self) -> List[Boid]:
        return self._boids

    def __len__(self) -> int:
        return len(self._boids)

    def __iter__(self) -> Iterator[Boid]:
        return iter(self._boids)

    def __getitem__(self, index: int) -> Boid:
        return self._boids[index]

    def size(self) -> int:
        return len(self._boids)

    def get(self, index: int) -> Boid:
        return self._boids[index].copy()

    def add(self, boid: Boid) -> Boid:
        # Stored by value: adding the same boid twice gives two members.
        stored = boid.copy()
        self._boids.append(stored)
        return stored

    def update_flock(self, delta_time: float) -> None:
        boids = self._boids
        for boid in boids:
            boid.step(boids, delta_time, self.bounds)
        logger.debug("Stepped %d boids by %.5f", len(boids), delta_time)

    def average_distance(self) -> Statistics:
        boids = self._boids
        distances = [
            distance(boids[i].position, boids[j].position)
            for i in range(len(boids))
            for j in range(i + 1, len(boids))
        ]
        return sample_statistics(distances)

    def average_speed(self) -> Statistics:
        return sample_statistics(boid.speed for boid in self._boids)

    def set_parameters(self, parameters: Parameters) -> None:
        for boid in self._boids:
            boid.parameters = parameters
