from __future__ import annotations

import logging
import math
from typing import List

import pygame
from pygame.math import Vector2

from ..sim.core.flock import Flock
from ..sim.utils.math2d import angle

logger = logging.getLogger(__name__)

BACKGROUND = (0, 0, 0)
BOID_COLOR = (255, 255, 255)

# Triangle pointing along +y before rotation.
_TRIANGLE = ((-1.0, 1.0), (1.0, 1.0), (0.0, 5.0))


def boid_triangle(position: Vector2, velocity: Vector2, side: float = 4.0) -> List[Vector2]:
    rotation = 270.0 + math.degrees(angle(velocity))
    return [position + Vector2(x * side, y * side).rotate(rotation) for x, y in _TRIANGLE]


def run_viewer(flock: Flock, fps: int = 60, triangle_side: float = 4.0) -> None:
    """Step and draw ``flock`` until the window is closed or Escape is pressed."""
    bounds = flock.bounds
    pygame.init()
    try:
        screen = pygame.display.set_mode((int(bounds.width), int(bounds.height)))
        pygame.display.set_caption("Boids")
        clock = pygame.time.Clock()
        running = True
        frames = 0
        while running:
            delta_time = clock.tick(fps) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False

            flock.update_flock(delta_time)

            screen.fill(BACKGROUND)
            for boid in flock:
                pygame.draw.polygon(screen, BOID_COLOR, boid_triangle(boid.position, boid.velocity, triangle_side))
            pygame.display.flip()
            frames += 1
        logger.info("Viewer closed after %d frames", frames)
    finally:
        pygame.quit()
