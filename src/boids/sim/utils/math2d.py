from __future__ import annotations

import math

from pygame.math import Vector2

ZERO = Vector2()


def distance(p: Vector2, q: Vector2) -> float:
    dx = q.x - p.x
    dy = q.y - p.y
    return math.sqrt(dx * dx + dy * dy)


def magnitude(vector: Vector2) -> float:
    return math.sqrt(vector.x * vector.x + vector.y * vector.y)


def angle(vector: Vector2) -> float:
    return math.atan2(vector.y, vector.x)


def _clamp_length(vector: Vector2, max_length: float) -> Vector2:
    if max_length <= 0:
        return Vector2()
    mag = magnitude(vector)
    if mag <= max_length:
        return Vector2(vector)
    return Vector2(vector.x / mag * max_length, vector.y / mag * max_length)


def _round_half_away(value: float) -> int:
    if value < 0:
        return -int(math.floor(-value + 0.5))
    return int(math.floor(value + 0.5))
