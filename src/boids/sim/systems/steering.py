"""Separation, alignment and cohesion.

Every rule scans the whole observation set, the evaluating boid included.
Self sits at distance 0, so it adds a zero term to the separation and
alignment sums and its own position to the cohesion sum (which is then
subtracted once). Alignment and cohesion normalise by ``len(neighbors) - 1``
whatever the number of boids actually in range.
"""

from __future__ import annotations

from typing import Sequence, TYPE_CHECKING

from pygame.math import Vector2

from ..core.errors import NotEnoughAgents
from ..utils.math2d import distance

if TYPE_CHECKING:
    from ..core.agent import Boid


def _require_neighbors(neighbors: Sequence[Boid]) -> int:
    count = len(neighbors)
    if count < 2:
        raise NotEnoughAgents(f"Not enough boids: {count} observed, at least 2 required")
    return count


def separation(boid: Boid, neighbors: Sequence[Boid]) -> Vector2:
    _require_neighbors(neighbors)
    ds = boid.parameters.ds
    position = boid.position
    sum_x = 0.0
    sum_y = 0.0
    for other in neighbors:
        other_position = other.position
        if distance(position, other_position) < ds:
            sum_x += other_position.x - position.x
            sum_y += other_position.y - position.y
    s = boid.parameters.s
    return Vector2(-s * sum_x, -s * sum_y)


def alignment(boid: Boid, neighbors: Sequence[Boid]) -> Vector2:
    count = _require_neighbors(neighbors)
    d = boid.parameters.d
    position = boid.position
    velocity = boid.velocity
    sum_x = 0.0
    sum_y = 0.0
    for other in neighbors:
        if distance(position, other.position) < d:
            sum_x += other.velocity.x - velocity.x
            sum_y += other.velocity.y - velocity.y
    scale = boid.parameters.a * (1.0 / (count - 1))
    return Vector2(scale * sum_x, scale * sum_y)


def cohesion(boid: Boid, neighbors: Sequence[Boid]) -> Vector2:
    count = _require_neighbors(neighbors)
    d = boid.parameters.d
    position = boid.position
    sum_x = 0.0
    sum_y = 0.0
    for other in neighbors:
        if distance(position, other.position) < d:
            sum_x += other.position.x
            sum_y += other.position.y
    sum_x -= position.x
    sum_y -= position.y
    inv = 1.0 / (count - 1)
    center_x = inv * sum_x
    center_y = inv * sum_y
    # Only a centre with both coordinates non-zero pulls the boid.
    if center_x != 0 and center_y != 0:
        c = boid.parameters.c
        return Vector2(c * (center_x - position.x), c * (center_y - position.y))
    return Vector2()
