from __future__ import annotations

import logging
import math
from typing import Callable

from ..core.errors import InsufficientData
from ..core.flock import Flock
from ..types.metrics import TickMetrics
from ..types.statistics import Statistics

logger = logging.getLogger(__name__)

_MISSING = Statistics(mean=math.nan, sigma=math.nan)


def _or_missing(compute: Callable[[], Statistics]) -> Statistics:
    try:
        return compute()
    except InsufficientData as exc:
        logger.debug("Statistic unavailable: %s", exc)
        return _MISSING


def create_metrics(tick: int, flock: Flock, duration_ms: float) -> TickMetrics:
    speed = _or_missing(flock.average_speed)
    spacing = _or_missing(flock.average_distance)
    return TickMetrics(
        tick=tick,
        population=len(flock),
        mean_speed=speed.mean,
        sigma_speed=speed.sigma,
        mean_distance=spacing.mean,
        sigma_distance=spacing.sigma,
        tick_duration_ms=duration_ms,
    )
